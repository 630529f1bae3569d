"""Factory for option pricers."""

from __future__ import annotations

from option_strategy_engine.config.factories import FactoryBase
from option_strategy_engine.exceptions import ConfigValidationError
from option_strategy_engine.interfaces.pricing import OptionPricer
from option_strategy_engine.pricing.black_scholes import BlackScholesPricer

_PRICERS = {
    "black_scholes": BlackScholesPricer,
    "black-scholes": BlackScholesPricer,
    "bs": BlackScholesPricer,
}


def available_pricers() -> list[str]:
    return sorted(_PRICERS)


def get_pricer(name: str) -> OptionPricer:
    normalized = name.lower()
    pricer_cls = _PRICERS.get(normalized)
    if pricer_cls is None:
        raise ConfigValidationError(f"Unknown pricer: {name}. Available: {', '.join(available_pricers())}")
    return pricer_cls()


def pricer_factory(name: str) -> FactoryBase[OptionPricer]:
    normalized = name.lower()
    return FactoryBase(name=normalized, builder=lambda: get_pricer(normalized))
