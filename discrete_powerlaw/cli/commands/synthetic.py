"""Synthetic replica CLI command wiring."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from discrete_powerlaw.cli.commands.fit import (
    ENV_PREFIX,
    FIT_CASTERS,
    FIT_DEFAULTS,
    build_fit_config,
    read_cli_sample,
)
from discrete_powerlaw.cli.validation import require_positive
from discrete_powerlaw.config.loader import load_config_with_precedence
from discrete_powerlaw.distributions.power_law import fit as fit_model
from discrete_powerlaw.interfaces.distribution import SamplingMethod, SyntheticMode
from discrete_powerlaw.mc.synthetic import generate_synthetic_sample
from discrete_powerlaw.utils.logging import get_logger

log = get_logger(__name__, component="cli.synthetic")


def synthetic(
    data: Optional[str] = typer.Option(None, "--data", "-d", help="Sample as comma-separated integers"),
    file: Optional[Path] = typer.Option(None, "--file", help="CSV file holding the sample"),
    column: Optional[str] = typer.Option(None, "--column", help="CSV column to read (first column by default)"),
    xmin: Optional[int] = typer.Option(None, "--xmin", help="Fixed lower cutoff; estimated when omitted"),
    xmax: Optional[int] = typer.Option(None, "--xmax", help="Fixed upper cutoff (implies --bounded)"),
    bounded: Optional[bool] = typer.Option(None, "--bounded/--unbounded", help="Fit a left-and-right bounded model"),
    statistic: Optional[str] = typer.Option(None, "--statistic", help="Fit statistic: ks, cvm or ad"),
    precision: Optional[float] = typer.Option(None, "--precision", help="Alpha grid step"),
    size: Optional[int] = typer.Option(None, "--size", help="Replica size; draws everything from the model"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    fast_sampling: bool = typer.Option(False, "--fast-sampling", "-f", help="Use the continuous sampling approximation"),
    config: Optional[Path] = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    as_json: bool = typer.Option(False, "--json", help="Print the replica as a JSON list"),
) -> None:
    """Fit the sample, then print one synthetic replica drawn from the fit."""
    settings = load_config_with_precedence(
        config_path=config,
        env_prefix=ENV_PREFIX,
        cli_values={"xmin": xmin, "xmax": xmax, "bounded": bounded, "statistic": statistic, "precision": precision},
        defaults=FIT_DEFAULTS,
        casters=FIT_CASTERS,
    )
    if size is not None:
        require_positive("size", size)
    sample = read_cli_sample(data, file, column)
    model = fit_model(sample, build_fit_config(settings)).require_valid()

    replica = generate_synthetic_sample(
        model,
        sample,
        size=size,
        mode=SyntheticMode.FULL_PARAMETRIC if size is not None else SyntheticMode.SEMI_PARAMETRIC,
        seed=seed,
        sampling=SamplingMethod.APPROXIMATE if fast_sampling else SamplingMethod.PRECISE,
    )
    log.info("Generated synthetic replica", extra={"n_samples": int(replica.size), "alpha": model.alpha})
    if as_json:
        typer.echo(json.dumps(replica.tolist()))
        return
    typer.echo(",".join(str(v) for v in replica.tolist()))
