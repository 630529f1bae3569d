"""Typer CLI entrypoint with structured error handling."""

from __future__ import annotations

import sys

import typer

from option_strategy_engine.cli.commands.analyze import analyze
from option_strategy_engine.cli.commands.families import families
from option_strategy_engine.exceptions import (
    ConfigValidationError,
    InsufficientStrikesError,
    InvalidInputError,
    PricingError,
    SchemaError,
)
from option_strategy_engine.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Option Strategy Engine CLI")


app.command()(analyze)
app.command()(families)


log = get_logger(__name__, component="cli")


def main() -> None:
    configure_logging(component="cli")
    try:
        app()
    except (ConfigValidationError, InvalidInputError) as exc:
        log.error(str(exc))
        sys.exit(1)
    except SchemaError as exc:
        log.error(f"Strike ladder validation failed: {exc}")
        sys.exit(2)
    except InsufficientStrikesError as exc:
        log.error(f"Not enough strikes: {exc}")
        sys.exit(3)
    except PricingError as exc:
        log.error(f"Pricing failed: {exc}")
        sys.exit(4)
    except KeyboardInterrupt:
        log.info("Interrupted")
        sys.exit(130)
    except Exception:
        log.exception("Unhandled exception")
        sys.exit(255)


if __name__ == "__main__":
    main()
