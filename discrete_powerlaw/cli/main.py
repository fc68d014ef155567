"""Typer CLI entrypoint with structured error handling."""

from __future__ import annotations

import logging
import os
import sys

import typer

from discrete_powerlaw.cli.commands.fit import fit
from discrete_powerlaw.cli.commands.gof import gof
from discrete_powerlaw.cli.commands.synthetic import synthetic
from discrete_powerlaw.exceptions import (
    ConfigError,
    DataSourceError,
    DistributionFitError,
    GoodnessOfFitError,
)
from discrete_powerlaw.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Discrete power-law fitting CLI")


app.command()(fit)
app.command()(gof)
app.command()(synthetic)


log = get_logger(__name__, component="cli")


def main() -> None:
    level = logging.getLevelName(os.environ.get("DPL_LOG_LEVEL", "WARNING").upper())
    configure_logging(component="cli", level=level if isinstance(level, int) else logging.WARNING, stream=sys.stderr)
    try:
        app()
    except ConfigError as exc:
        log.error(str(exc))
        sys.exit(1)
    except DataSourceError as exc:
        log.error(f"Data validation failed: {exc}")
        sys.exit(2)
    except (DistributionFitError, GoodnessOfFitError) as exc:
        log.error(f"Distribution fitting failed: {exc}")
        sys.exit(3)
    except KeyboardInterrupt:
        log.info("Shutdown requested. Finishing current tasks...")
        sys.exit(130)
    except Exception:
        log.exception("Unhandled exception")
        sys.exit(255)


if __name__ == "__main__":
    main()
