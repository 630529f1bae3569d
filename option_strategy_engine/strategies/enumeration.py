"""Index-tuple enumeration of valid strike combinations per family.

These generators only decide *which* strike indices form a structurally
valid combination; pricing happens in :mod:`option_strategy_engine.strategies.builder`.
All generators assume strikes in ascending order and yield tuples in
lexicographic order, which is the enumeration order the ranker preserves on ties.
"""

from __future__ import annotations

import math
from itertools import combinations
from typing import Iterator, Sequence, Tuple

from option_strategy_engine.models.strategy import StrategyFamily


def single_indices(n: int) -> Iterator[Tuple[int]]:
    for i in range(n):
        yield (i,)


def ordered_pairs(n: int) -> Iterator[Tuple[int, int]]:
    yield from combinations(range(n), 2)


def ordered_quadruples(n: int) -> Iterator[Tuple[int, int, int, int]]:
    yield from combinations(range(n), 4)


def is_symmetric(lower: float, middle: float, upper: float, tolerance: float = 1e-9) -> bool:
    """True when both butterfly wings have the same width."""
    return math.isclose(middle - lower, upper - middle, rel_tol=0.0, abs_tol=tolerance)


def symmetric_triples(strikes: Sequence[float], tolerance: float = 1e-9) -> Iterator[Tuple[int, int, int]]:
    """Ordered triples (i < j < k) with equal wing widths; others are skipped."""
    for i, j, k in combinations(range(len(strikes)), 3):
        if is_symmetric(strikes[i], strikes[j], strikes[k], tolerance):
            yield (i, j, k)


def enumerate_combinations(
    family: StrategyFamily, strikes: Sequence[float], tolerance: float = 1e-9
) -> Iterator[Tuple[int, ...]]:
    """Dispatch to the enumeration rule of ``family``."""
    n = len(strikes)
    if family in (StrategyFamily.SINGLE_CALL, StrategyFamily.SINGLE_PUT, StrategyFamily.STRADDLE):
        return single_indices(n)
    if family in (StrategyFamily.BULL_CALL_SPREAD, StrategyFamily.BEAR_PUT_SPREAD, StrategyFamily.STRANGLE):
        return ordered_pairs(n)
    if family in (StrategyFamily.CALL_BUTTERFLY, StrategyFamily.PUT_BUTTERFLY):
        return symmetric_triples(strikes, tolerance)
    if family is StrategyFamily.IRON_CONDOR:
        return ordered_quadruples(n)
    raise ValueError(f"No enumeration rule for {family}")


__all__ = [
    "enumerate_combinations",
    "is_symmetric",
    "ordered_pairs",
    "ordered_quadruples",
    "single_indices",
    "symmetric_triples",
]
