"""Sample loading from CSV text and files."""

from discrete_powerlaw.data.loader import load_sample, parse_csv_line

__all__ = ["load_sample", "parse_csv_line"]
