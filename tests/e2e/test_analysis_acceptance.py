from __future__ import annotations

import pytest

from option_strategy_engine import MarketInputs, StrategyFamily, StrikeLadder, analyze

LADDER = [(20, 5.80, 0.10), (22.5, 3.50, 0.30), (25, 1.80, 1.50), (27.5, 0.60, 3.40), (30, 0.15, 5.60)]


@pytest.fixture(scope="module")
def inputs():
    return MarketInputs.from_percent_vol(25.50, 35, 30)


def test_single_call_end_to_end(inputs):
    result = analyze(inputs, LADDER, "single_call")

    rows = result.to_formatted_dict()["all"]
    assert [row["strikes"] for row in rows] == ["20", "22.5", "25", "27.5", "30"]
    for row in rows:
        assert row["maxGain"] == "unbounded"
        assert row["maxLoss"] == row["currentPrice"]
    assert rows[2]["maxLoss"] == "1.80"
    assert rows[0]["stockUp"] == rows[4]["stockUp"]


@pytest.mark.parametrize(
    "family,expected",
    [
        (StrategyFamily.SINGLE_PUT, 5),
        (StrategyFamily.BULL_CALL_SPREAD, 10),
        (StrategyFamily.BEAR_PUT_SPREAD, 10),
        (StrategyFamily.CALL_BUTTERFLY, 4),
        (StrategyFamily.PUT_BUTTERFLY, 4),
        (StrategyFamily.IRON_CONDOR, 5),
        (StrategyFamily.STRADDLE, 5),
        (StrategyFamily.STRANGLE, 10),
    ],
)
def test_every_family_on_demo_ladder(inputs, family, expected):
    result = analyze(inputs, StrikeLadder.from_quotes(LADDER), family)

    assert result.ok
    assert len(result.all) == expected
    assert {c.description for c in result.by_reward} <= {c.description for c in result.all}
    ratios = [c.reward_risk_ratio for c in result.by_ratio]
    assert ratios == sorted(ratios, reverse=True)
    for candidate in result.all:
        assert candidate.max_loss >= 0


def test_ladder_edits_flow_into_next_run(inputs):
    ladder = StrikeLadder.from_quotes(LADDER).with_added_strike().with_added_strike()

    result = analyze(inputs, ladder, "iron_condor")

    assert result.diagnostics["stage_counts"]["enumerated"] == 35
    assert len(result.all) == 20
    assert len(result.by_reward) == 5
