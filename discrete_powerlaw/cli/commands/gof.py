"""Goodness-of-fit CLI command wiring."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn

from discrete_powerlaw.cli.commands.fit import (
    ENV_PREFIX,
    FIT_CASTERS,
    FIT_DEFAULTS,
    build_fit_config,
    fit_summary,
    model_table,
    read_cli_sample,
)
from discrete_powerlaw.cli.validation import as_bool, validate_gof_inputs
from discrete_powerlaw.config.loader import load_config_with_precedence
from discrete_powerlaw.distributions.power_law import fit as fit_model
from discrete_powerlaw.interfaces.distribution import RuntimeMode, SamplingMethod, SyntheticMode
from discrete_powerlaw.schema.gof_config import GofConfig
from discrete_powerlaw.simulation.gof import GoodnessOfFitEngine
from discrete_powerlaw.utils.logging import get_logger

console = Console()
log = get_logger(__name__, component="cli.gof")

DEFAULT_CLI_REPLICAS = 500

GOF_DEFAULTS = {
    **FIT_DEFAULTS,
    "replicas": DEFAULT_CLI_REPLICAS,
    "single_thread": False,
    "fast_sampling": False,
    "full_parametric": False,
    "seed": None,
    "max_workers": None,
}
GOF_CASTERS = {
    **FIT_CASTERS,
    "replicas": int,
    "single_thread": as_bool,
    "fast_sampling": as_bool,
    "full_parametric": as_bool,
    "seed": int,
    "max_workers": int,
}


def gof(
    data: Optional[str] = typer.Option(None, "--data", "-d", help="Sample as comma-separated integers"),
    file: Optional[Path] = typer.Option(None, "--file", help="CSV file holding the sample"),
    column: Optional[str] = typer.Option(None, "--column", help="CSV column to read (first column by default)"),
    xmin: Optional[int] = typer.Option(None, "--xmin", help="Fixed lower cutoff; estimated when omitted"),
    xmax: Optional[int] = typer.Option(None, "--xmax", help="Fixed upper cutoff (implies --bounded)"),
    bounded: Optional[bool] = typer.Option(None, "--bounded/--unbounded", help="Fit a left-and-right bounded model"),
    statistic: Optional[str] = typer.Option(None, "--statistic", help="Fit statistic: ks, cvm or ad"),
    precision: Optional[float] = typer.Option(None, "--precision", help="Alpha grid step"),
    replicas: Optional[int] = typer.Option(None, "--replicas", "-r", help="Bootstrap replicas (default 500)"),
    single_thread: Optional[bool] = typer.Option(
        None, "--single-thread/--multi-thread", help="Run replicas sequentially"
    ),
    fast_sampling: Optional[bool] = typer.Option(
        None, "--fast-sampling/--precise-sampling", help="Use the continuous sampling approximation"
    ),
    full_parametric: Optional[bool] = typer.Option(
        None, "--full-parametric/--semi-parametric", help="Draw whole replicas from the model"
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    max_workers: Optional[int] = typer.Option(None, "--max-workers", help="Worker threads (clamped to CPU count)"),
    config: Optional[Path] = typer.Option(None, "--config", help="Optional YAML/JSON config path"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Fit a discrete power law and run the bootstrap goodness-of-fit test."""
    settings = load_config_with_precedence(
        config_path=config,
        env_prefix=ENV_PREFIX,
        cli_values={
            "xmin": xmin,
            "xmax": xmax,
            "bounded": bounded,
            "statistic": statistic,
            "precision": precision,
            "replicas": replicas,
            "single_thread": single_thread,
            "fast_sampling": fast_sampling,
            "full_parametric": full_parametric,
            "seed": seed,
            "max_workers": max_workers,
        },
        defaults=GOF_DEFAULTS,
        casters=GOF_CASTERS,
    )
    validate_gof_inputs(replicas=settings["replicas"], seed=settings["seed"], max_workers=settings["max_workers"])
    sample = read_cli_sample(data, file, column)
    model = fit_model(sample, build_fit_config(settings)).require_valid()
    summary = fit_summary(model, sample)

    gof_config = GofConfig(
        replicas=settings["replicas"],
        mode=SyntheticMode.FULL_PARAMETRIC if settings["full_parametric"] else SyntheticMode.SEMI_PARAMETRIC,
        runtime=RuntimeMode.SINGLE_THREAD if settings["single_thread"] else RuntimeMode.MULTI_THREAD,
        sampling=SamplingMethod.APPROXIMATE if settings["fast_sampling"] else SamplingMethod.PRECISE,
        seed=settings["seed"],
        max_workers=settings["max_workers"],
    )
    engine = GoodnessOfFitEngine(gof_config)

    if as_json:
        result = engine.run(model, sample)
        typer.echo(json.dumps({"model": summary, "gof": result.to_dict()}, indent=2))
        return

    console.print(model_table(summary))
    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Bootstrapping replicas...", total=gof_config.replicas)
        result = engine.run(
            model,
            sample,
            progress=lambda done, total: progress.update(task, completed=done),
        )

    console.print(f"[bold]GoodnessOfFit:[/bold] {result.p_value:.4f}")
    if result.failed_replicas:
        console.print(
            f"[yellow]{result.failed_replicas} of {result.replicas} replicas could not be refitted "
            "and were left out[/yellow]"
        )
