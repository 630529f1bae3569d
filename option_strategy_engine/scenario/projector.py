"""Deterministic up/down scenario shocks and leg revaluation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from option_strategy_engine.config.settings import EngineConfig
from option_strategy_engine.interfaces.pricing import OptionPricer
from option_strategy_engine.models.market import MarketInputs
from option_strategy_engine.models.strategy import Leg


@dataclass(frozen=True, slots=True)
class ScenarioShock:
    """One-standard-deviation lognormal move, symmetric in log space."""

    stock_up: float
    stock_down: float
    time_to_expiry: float
    revaluation_time: float
    vol: float
    risk_free_rate: float

    @property
    def prices(self) -> np.ndarray:
        return np.array([self.stock_up, self.stock_down], dtype=float)


class ScenarioProjector:
    """Project the underlying to its up/down scenario prices and revalue legs there.

    Legs are revalued at ``revaluation_fraction`` of the time to expiry
    (half-way by default), i.e. mid-way through the trade rather than at
    expiration.
    """

    def __init__(self, pricer: OptionPricer, config: EngineConfig | None = None) -> None:
        self.pricer = pricer
        self.config = config or EngineConfig()

    def project(self, inputs: MarketInputs) -> ScenarioShock:
        t = inputs.time_to_expiry(self.config.days_per_year)
        sigma = float(inputs.implied_vol)
        move = sigma * math.sqrt(t)
        return ScenarioShock(
            stock_up=inputs.spot_price * math.exp(move),
            stock_down=inputs.spot_price * math.exp(-move),
            time_to_expiry=t,
            revaluation_time=t * self.config.revaluation_fraction,
            vol=sigma,
            risk_free_rate=self.config.risk_free_rate,
        )

    def revalue_leg(self, leg: Leg, shock: ScenarioShock) -> Tuple[float, float]:
        """Return the unsigned per-contract value of ``leg`` at (up, down)."""
        values = self.pricer.price_many(
            leg.option_type,
            shock.prices,
            leg.strike,
            shock.revaluation_time,
            shock.risk_free_rate,
            shock.vol,
        )
        return float(values[0]), float(values[1])

    def revalue(self, legs: Sequence[Leg], shock: ScenarioShock) -> Tuple[float, float]:
        """Return the signed position value of ``legs`` at (up, down).

        Long legs add, short legs subtract, each scaled by its quantity.
        """
        value_up = 0.0
        value_down = 0.0
        for leg in legs:
            up, down = self.revalue_leg(leg, shock)
            qty = leg.signed_quantity()
            value_up += qty * up
            value_down += qty * down
        return value_up, value_down


__all__ = ["ScenarioProjector", "ScenarioShock"]
