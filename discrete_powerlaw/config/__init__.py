"""Configuration loading with CLI > ENV > file > defaults precedence."""

from discrete_powerlaw.config.loader import load_config_file, load_config_with_precedence

__all__ = ["load_config_file", "load_config_with_precedence"]
