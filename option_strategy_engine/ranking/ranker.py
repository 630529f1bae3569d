"""Stable ranking and bounded truncation of candidate lists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from option_strategy_engine.config.settings import TruncationCaps, default_caps
from option_strategy_engine.models.strategy import Candidate, StrategyFamily


def rank_by_reward(candidates: Sequence[Candidate]) -> list[Candidate]:
    """Sort by percent gain, highest first; ties keep enumeration order."""
    return sorted(candidates, key=lambda c: c.percent_gain, reverse=True)


def rank_by_ratio(candidates: Sequence[Candidate]) -> list[Candidate]:
    """Sort by reward/risk ratio, highest first; ties keep enumeration order."""
    return sorted(candidates, key=lambda c: c.reward_risk_ratio, reverse=True)


def _truncate(items: Sequence[Candidate], limit: int | None) -> Tuple[Candidate, ...]:
    if limit is None:
        return tuple(items)
    return tuple(items[:limit])


@dataclass(frozen=True, slots=True)
class RankedViews:
    all: Tuple[Candidate, ...]
    by_reward: Tuple[Candidate, ...]
    by_ratio: Tuple[Candidate, ...]
    total: int
    caps: TruncationCaps

    @property
    def truncated(self) -> bool:
        return len(self.all) < self.total or len(self.by_reward) < self.total


class Ranker:
    """Produce the ``all``/``by_reward``/``by_ratio`` views for a family.

    Ranked views are sorted over the full candidate set before truncation;
    the ``all`` view keeps enumeration order and is truncated as-is.
    """

    def __init__(self, caps: Dict[StrategyFamily, TruncationCaps] | None = None) -> None:
        self.caps = default_caps() if caps is None else dict(caps)

    def caps_for(self, family: StrategyFamily) -> TruncationCaps:
        return self.caps.get(family, TruncationCaps())

    def rank(self, family: StrategyFamily, candidates: Sequence[Candidate], full: bool = False) -> RankedViews:
        caps = TruncationCaps() if full else self.caps_for(family)
        by_reward = rank_by_reward(candidates)
        by_ratio = rank_by_ratio(candidates)
        return RankedViews(
            all=_truncate(list(candidates), caps.all_limit),
            by_reward=_truncate(by_reward, caps.ranked_limit),
            by_ratio=_truncate(by_ratio, caps.ranked_limit),
            total=len(candidates),
            caps=caps,
        )


__all__ = ["RankedViews", "Ranker", "rank_by_ratio", "rank_by_reward"]
