from __future__ import annotations

from dataclasses import replace

import pytest

from option_strategy_engine.config.settings import TruncationCaps
from option_strategy_engine.models.market import demo_ladder, demo_market
from option_strategy_engine.models.strategy import StrategyFamily
from option_strategy_engine.ranking.ranker import Ranker, rank_by_ratio, rank_by_reward
from option_strategy_engine.strategies.builder import StrategyBuilder


@pytest.fixture
def candidates():
    return StrategyBuilder().build(StrategyFamily.SINGLE_CALL, demo_market(), demo_ladder())


def test_rank_by_reward_descending(candidates):
    ranked = rank_by_reward(candidates)

    gains = [c.percent_gain for c in ranked]
    assert gains == sorted(gains, reverse=True)


def test_ties_keep_enumeration_order(candidates):
    tied = [replace(c, percent_gain=10.0, reward_risk_ratio=1.0) for c in candidates]

    assert [c.description for c in rank_by_reward(tied)] == [c.description for c in tied]
    assert [c.description for c in rank_by_ratio(tied)] == [c.description for c in tied]


def test_caps_truncate_all_in_enumeration_order(candidates):
    ranker = Ranker({StrategyFamily.SINGLE_CALL: TruncationCaps(all_limit=3, ranked_limit=2)})

    views = ranker.rank(StrategyFamily.SINGLE_CALL, candidates)

    assert [c.description for c in views.all] == [c.description for c in candidates[:3]]
    assert len(views.by_reward) == 2
    assert views.by_reward == tuple(rank_by_reward(candidates)[:2])
    assert views.truncated
    assert views.total == 5


def test_full_disables_caps(candidates):
    ranker = Ranker({StrategyFamily.SINGLE_CALL: TruncationCaps(all_limit=1, ranked_limit=1)})

    views = ranker.rank(StrategyFamily.SINGLE_CALL, candidates, full=True)

    assert len(views.all) == len(views.by_reward) == len(views.by_ratio) == 5
    assert not views.truncated


def test_uncapped_family_keeps_everything(candidates):
    views = Ranker().rank(StrategyFamily.SINGLE_CALL, candidates)

    assert len(views.all) == 5
    assert views.caps == TruncationCaps()
