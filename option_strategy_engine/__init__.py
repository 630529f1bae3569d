"""Option strategy analytics engine.

Prices single- and multi-leg option strategies over a strike ladder, projects
them under deterministic up/down volatility shocks and ranks the results.
"""

from option_strategy_engine.analysis.facade import AnalysisFacade, analyze
from option_strategy_engine.config.settings import EngineConfig, TruncationCaps, load_config
from option_strategy_engine.models.market import MarketInputs, StrikeLadder, StrikeQuote
from option_strategy_engine.models.strategy import (
    UNBOUNDED,
    AnalysisResult,
    Candidate,
    Leg,
    StrategyFamily,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisFacade",
    "AnalysisResult",
    "Candidate",
    "EngineConfig",
    "Leg",
    "MarketInputs",
    "StrategyFamily",
    "StrikeLadder",
    "StrikeQuote",
    "TruncationCaps",
    "UNBOUNDED",
    "analyze",
    "load_config",
]
