"""Fit CLI command wiring."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import typer
from rich.console import Console
from rich.table import Table

from discrete_powerlaw.cli.validation import as_bool, require_one_source, validate_fit_inputs
from discrete_powerlaw.config.loader import load_config_with_precedence
from discrete_powerlaw.data.loader import load_sample, parse_csv_line
from discrete_powerlaw.distributions.model import PowerLawModel
from discrete_powerlaw.distributions.power_law import calculate_ks_statistic_of_fit
from discrete_powerlaw.distributions.power_law import fit as fit_model
from discrete_powerlaw.interfaces.distribution import DistributionType
from discrete_powerlaw.schema.fit_config import DEFAULT_PRECISION, FitConfig
from discrete_powerlaw.utils.logging import get_logger

console = Console()
log = get_logger(__name__, component="cli.fit")

ENV_PREFIX = "DPL_"

FIT_DEFAULTS: Dict[str, Any] = {
    "xmin": None,
    "xmax": None,
    "bounded": False,
    "statistic": "ks",
    "precision": DEFAULT_PRECISION,
}
FIT_CASTERS = {
    "xmin": int,
    "xmax": int,
    "bounded": as_bool,
    "statistic": lambda v: str(v).lower(),
    "precision": float,
}


def read_cli_sample(data: Optional[str], file: Optional[Path], column: Optional[str] = None) -> np.ndarray:
    require_one_source(data, file)
    if file is not None:
        return load_sample(file, column=column)
    return np.asarray(parse_csv_line(data), dtype=np.int64)


def build_fit_config(settings: Dict[str, Any]) -> FitConfig:
    validate_fit_inputs(
        xmin=settings["xmin"],
        xmax=settings["xmax"],
        statistic=settings["statistic"],
        precision=settings["precision"],
    )
    bounded = settings["bounded"] or settings["xmax"] is not None
    return FitConfig(
        known_xmin=settings["xmin"],
        known_xmax=settings["xmax"],
        precision=settings["precision"],
        test_statistic=settings["statistic"],
        distribution_type=DistributionType.LEFT_AND_RIGHT_BOUNDED if bounded else DistributionType.LEFT_BOUNDED,
    )


def fit_summary(model: PowerLawModel, sample: np.ndarray) -> Dict[str, Any]:
    summary = model.to_dict()
    summary["ks_statistic"] = calculate_ks_statistic_of_fit(model, sample)
    return summary


def model_table(summary: Dict[str, Any], title: str = "Fitted model") -> Table:
    table = Table(title=title)
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Alpha", f"{summary['alpha']:.4f} ± {summary['standard_error']:.4f}")
    table.add_row("xMin", str(summary["xmin"]))
    if summary["distribution_type"] == DistributionType.LEFT_AND_RIGHT_BOUNDED.value:
        table.add_row("xMax", str(summary["xmax"]))
    table.add_row("Tail size", str(summary["sample_size"]))
    table.add_row(f"Statistic ({summary['test_statistic_type']})", f"{summary['test_statistic']:.6f}")
    table.add_row("KS statistic", f"{summary['ks_statistic']:.6f}")
    table.add_row("Log-likelihood", f"{summary['log_likelihood']:.4f}")
    return table


def fit(
    data: Optional[str] = typer.Option(None, "--data", "-d", help="Sample as comma-separated integers"),
    file: Optional[Path] = typer.Option(None, "--file", help="CSV file holding the sample"),
    column: Optional[str] = typer.Option(None, "--column", help="CSV column to read (first column by default)"),
    xmin: Optional[int] = typer.Option(None, "--xmin", help="Fixed lower cutoff; estimated when omitted"),
    xmax: Optional[int] = typer.Option(None, "--xmax", help="Fixed upper cutoff (implies --bounded)"),
    bounded: Optional[bool] = typer.Option(None, "--bounded/--unbounded", help="Fit a left-and-right bounded model"),
    statistic: Optional[str] = typer.Option(None, "--statistic", help="Fit statistic: ks, cvm or ad"),
    precision: Optional[float] = typer.Option(None, "--precision", help="Alpha grid step"),
    config: Optional[Path] = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    as_json: bool = typer.Option(False, "--json", help="Print the fit as JSON"),
) -> None:
    """Fit a discrete power law and print the estimated parameters."""
    settings = load_config_with_precedence(
        config_path=config,
        env_prefix=ENV_PREFIX,
        cli_values={"xmin": xmin, "xmax": xmax, "bounded": bounded, "statistic": statistic, "precision": precision},
        defaults=FIT_DEFAULTS,
        casters=FIT_CASTERS,
    )
    sample = read_cli_sample(data, file, column)
    model = fit_model(sample, build_fit_config(settings)).require_valid()
    summary = fit_summary(model, sample)
    log.info("Fit finished", extra={"n_samples": int(sample.size), "alpha": model.alpha, "xmin": model.xmin})

    if as_json:
        typer.echo(json.dumps(summary, indent=2))
        return
    console.print(model_table(summary))
