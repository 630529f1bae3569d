"""Closed-form Black-Scholes pricer for European options."""

from __future__ import annotations

import math

import numpy as np

from option_strategy_engine.exceptions import PricingError
from option_strategy_engine.interfaces.pricing import OptionPricer
from option_strategy_engine.models.strategy import OptionType
from option_strategy_engine.pricing.normal import norm_cdf


def _validate(option_type: str, strike: float, time_to_expiry: float, vol: float) -> None:
    if option_type not in {"call", "put"}:
        raise PricingError(f"option_type must be 'call' or 'put' (got {option_type!r})")
    if not strike > 0:
        raise PricingError("strike must be positive")
    if not vol > 0:
        raise PricingError("vol must be positive")
    if not time_to_expiry >= 0:
        raise PricingError("time_to_expiry must be non-negative")


class BlackScholesPricer(OptionPricer):
    """European pricer; puts always come from put-call parity on the call value."""

    def price(
        self,
        option_type: OptionType,
        spot: float,
        strike: float,
        time_to_expiry: float,
        risk_free_rate: float,
        vol: float,
    ) -> float:
        _validate(option_type, strike, time_to_expiry, vol)
        if not spot > 0:
            raise PricingError("Non-positive spot encountered")

        if time_to_expiry == 0:
            if option_type == "call":
                return max(0.0, spot - strike)
            return max(0.0, strike - spot)

        call = self._call_value(spot, strike, time_to_expiry, risk_free_rate, vol)
        if option_type == "call":
            return max(0.0, call)
        return max(0.0, call - spot + strike * math.exp(-risk_free_rate * time_to_expiry))

    def price_many(
        self,
        option_type: OptionType,
        spots: np.ndarray,
        strike: float,
        time_to_expiry: float,
        risk_free_rate: float,
        vol: float,
    ) -> np.ndarray:
        _validate(option_type, strike, time_to_expiry, vol)
        s = np.asarray(spots, dtype=float)
        if s.ndim != 1 or s.size == 0:
            raise PricingError("spots must be 1-D and non-empty")
        if np.any(s <= 0) or not np.all(np.isfinite(s)):
            raise PricingError("Non-positive spot encountered")

        if time_to_expiry == 0:
            if option_type == "call":
                return np.maximum(0.0, s - strike)
            return np.maximum(0.0, strike - s)

        call = self._call_value(s, strike, time_to_expiry, risk_free_rate, vol)
        if option_type == "call":
            return np.maximum(0.0, call)
        return np.maximum(0.0, call - s + strike * math.exp(-risk_free_rate * time_to_expiry))

    @staticmethod
    def _call_value(spot, strike: float, t: float, r: float, vol: float):
        sqrt_t = math.sqrt(t)
        d1 = (np.log(spot / strike) + (r + 0.5 * vol * vol) * t) / (vol * sqrt_t)
        d2 = d1 - vol * sqrt_t
        value = spot * norm_cdf(d1) - strike * math.exp(-r * t) * norm_cdf(d2)
        if np.ndim(value) == 0:
            return float(value)
        return value


__all__ = ["BlackScholesPricer"]
