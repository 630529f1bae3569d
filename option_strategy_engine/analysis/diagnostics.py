"""Diagnostics helpers for analysis outputs."""

from __future__ import annotations

from typing import Dict

from option_strategy_engine.exceptions import InsufficientStrikesError
from option_strategy_engine.ranking.ranker import RankedViews


def empty_result_diagnostics(exc: InsufficientStrikesError, hints: str | None = None) -> Dict:
    """Build diagnostics when a family cannot be enumerated on the ladder."""
    return {
        "stage_counts": {"ladder": exc.available, "enumerated": 0},
        "required_strikes": exc.required,
        "hints": hints or f"Add at least {exc.required - exc.available} more strike(s) to analyze {exc.family}.",
    }


def analysis_diagnostics(views: RankedViews, ladder_size: int, runtime_seconds: float) -> Dict:
    """Stage counts and truncation details for a completed analysis."""
    return {
        "stage_counts": {
            "ladder": ladder_size,
            "enumerated": views.total,
            "all": len(views.all),
            "by_reward": len(views.by_reward),
            "by_ratio": len(views.by_ratio),
        },
        "caps": views.caps.to_dict(),
        "truncated": views.truncated,
        "runtime_seconds": runtime_seconds,
    }


__all__ = ["analysis_diagnostics", "empty_result_diagnostics"]
