import pytest

from option_strategy_engine.exceptions import ConfigValidationError
from option_strategy_engine.pricing.black_scholes import BlackScholesPricer
from option_strategy_engine.pricing.factory import available_pricers, get_pricer, pricer_factory


def test_pricer_factory_builds_black_scholes():
    pricer = pricer_factory("Black_Scholes").create()

    assert isinstance(pricer, BlackScholesPricer)


def test_aliases_are_listed():
    assert {"black_scholes", "bs"} <= set(available_pricers())
    assert isinstance(get_pricer("bs"), BlackScholesPricer)


def test_unknown_pricer_rejected():
    with pytest.raises(ConfigValidationError, match="Available"):
        get_pricer("binomial")
