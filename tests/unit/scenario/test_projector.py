from __future__ import annotations

import math

import pytest

from option_strategy_engine.config.settings import EngineConfig
from option_strategy_engine.models.market import MarketInputs
from option_strategy_engine.models.strategy import Leg
from option_strategy_engine.pricing.black_scholes import BlackScholesPricer
from option_strategy_engine.scenario.projector import ScenarioProjector


@pytest.fixture
def projector():
    return ScenarioProjector(BlackScholesPricer())


@pytest.fixture
def inputs():
    return MarketInputs(spot_price=25.50, implied_vol=0.35, days_to_expiration=30)


def test_shock_is_symmetric_in_log_space(projector, inputs):
    shock = projector.project(inputs)

    assert shock.stock_up > inputs.spot_price > shock.stock_down
    assert shock.stock_up * shock.stock_down == pytest.approx(inputs.spot_price**2)
    assert math.log(shock.stock_up / inputs.spot_price) == pytest.approx(0.35 * math.sqrt(30 / 365))


def test_legs_revalued_at_half_remaining_time(projector, inputs):
    shock = projector.project(inputs)

    assert shock.time_to_expiry == pytest.approx(30 / 365)
    assert shock.revaluation_time == pytest.approx(15 / 365)
    assert shock.risk_free_rate == pytest.approx(0.05)


def test_revaluation_fraction_comes_from_config(inputs):
    projector = ScenarioProjector(BlackScholesPricer(), EngineConfig(revaluation_fraction=1.0))

    shock = projector.project(inputs)

    assert shock.revaluation_time == pytest.approx(shock.time_to_expiry)


def test_single_long_leg_matches_pricer(projector, inputs):
    shock = projector.project(inputs)
    leg = Leg("call", 25.0, "long", 1.80)
    pricer = BlackScholesPricer()

    up, down = projector.revalue([leg], shock)

    assert up == pytest.approx(pricer.call(shock.stock_up, 25.0, shock.revaluation_time, 0.05, 0.35))
    assert down == pytest.approx(pricer.call(shock.stock_down, 25.0, shock.revaluation_time, 0.05, 0.35))


def test_short_legs_subtract_scaled_by_quantity(projector, inputs):
    shock = projector.project(inputs)
    legs = [
        Leg("put", 20.0, "long", 0.10),
        Leg("put", 25.0, "short", 1.50, quantity=2),
        Leg("put", 30.0, "long", 5.60),
    ]

    up, down = projector.revalue(legs, shock)

    wings = [projector.revalue_leg(leg, shock) for leg in legs]
    assert up == pytest.approx(wings[0][0] - 2 * wings[1][0] + wings[2][0])
    assert down == pytest.approx(wings[0][1] - 2 * wings[1][1] + wings[2][1])
