"""Shared interfaces.

- pricing.py: OptionPricer (closed-form Black-Scholes today)
"""

from option_strategy_engine.interfaces.pricing import OptionPricer

__all__ = ["OptionPricer"]
