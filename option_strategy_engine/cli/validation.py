"""CLI validation helpers."""

from __future__ import annotations

from option_strategy_engine.exceptions import ConfigValidationError


def require_positive(name: str, value: int | float) -> None:
    if value <= 0:
        raise ConfigValidationError(f"{name} must be > 0")


def validate_analyze_inputs(
    *,
    spot: float | None,
    vol: float | None,
    days: int | None,
    top: int,
) -> None:
    provided = [v is not None for v in (spot, vol, days)]
    if any(provided) and not all(provided):
        raise ConfigValidationError("--spot, --vol and --days must be given together")
    if spot is not None:
        require_positive("spot", spot)
    if vol is not None:
        # Volatility is entered in percent on the command line.
        if vol <= 0 or vol >= 500:
            raise ConfigValidationError("vol must be between 0 and 500 (percent)")
    if days is not None:
        require_positive("days", days)
    require_positive("top", top)
