from option_strategy_engine.pricing.black_scholes import BlackScholesPricer
from option_strategy_engine.pricing.normal import norm_cdf

__all__ = ["BlackScholesPricer", "norm_cdf"]
