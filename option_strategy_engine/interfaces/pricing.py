"""Option pricer interface.

Shared by the scenario projector and the strategy builder so that every leg
of every candidate is valued by the same model.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from option_strategy_engine.models.strategy import OptionType


class OptionPricer(ABC):
    """Base option pricer interface.

    Implementations:
    - BlackScholesPricer (closed-form European exercise, put via parity)
    """

    @abstractmethod
    def price(
        self,
        option_type: OptionType,
        spot: float,
        strike: float,
        time_to_expiry: float,
        risk_free_rate: float,
        vol: float,
    ) -> float:
        """Return the fair value of one option.

        Args:
            option_type: 'call' or 'put'
            spot: Underlying price (> 0)
            strike: Strike price (> 0)
            time_to_expiry: Time to expiry in years (>= 0)
            risk_free_rate: Annualized risk-free rate
            vol: Annualized volatility as a fraction (> 0)
        """

    @abstractmethod
    def price_many(
        self,
        option_type: OptionType,
        spots: np.ndarray,
        strike: float,
        time_to_expiry: float,
        risk_free_rate: float,
        vol: float,
    ) -> np.ndarray:
        """Vectorized ``price`` over an array of underlying prices."""

    def call(self, spot: float, strike: float, time_to_expiry: float, risk_free_rate: float, vol: float) -> float:
        return self.price("call", spot, strike, time_to_expiry, risk_free_rate, vol)

    def put(self, spot: float, strike: float, time_to_expiry: float, risk_free_rate: float, vol: float) -> float:
        return self.price("put", spot, strike, time_to_expiry, risk_free_rate, vol)
