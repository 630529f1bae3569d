"""Analysis facade: validate, build, rank and package the three result views."""

from __future__ import annotations

import logging
import time
from typing import Iterable, Sequence, Union

from option_strategy_engine.analysis.diagnostics import analysis_diagnostics, empty_result_diagnostics
from option_strategy_engine.config.settings import EngineConfig
from option_strategy_engine.exceptions import InsufficientStrikesError, InvalidInputError
from option_strategy_engine.interfaces.pricing import OptionPricer
from option_strategy_engine.models.market import MarketInputs, StrikeLadder
from option_strategy_engine.models.strategy import AnalysisResult, StrategyFamily
from option_strategy_engine.pricing.factory import pricer_factory
from option_strategy_engine.ranking.ranker import Ranker
from option_strategy_engine.strategies.builder import StrategyBuilder
from option_strategy_engine.utils.logging import get_logger

LadderInput = Union[StrikeLadder, Iterable[Sequence[float]]]


class AnalysisFacade:
    """Dispatch one analysis run for the selected strategy family.

    The facade holds only configuration and collaborators; every call to
    :meth:`analyze` is independent and deterministic.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        pricer: OptionPricer | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.pricer = pricer or pricer_factory(self.config.pricer).create()
        self.builder = StrategyBuilder(self.pricer, self.config)
        self.ranker = Ranker(self.config.caps)
        self.log = logger or get_logger(__name__, component="analysis")

    def analyze(
        self,
        inputs: MarketInputs,
        ladder: LadderInput,
        family: StrategyFamily | str,
        full: bool = False,
    ) -> AnalysisResult:
        """Return ``all``/``by_reward``/``by_ratio`` views for ``family``.

        Raises:
            InvalidInputError: for malformed market inputs, ladders or family
                names. A ladder that is merely too short for the family yields
                an empty result with ``error`` set instead.
        """
        start = time.perf_counter()
        inputs = self._validate_inputs(inputs)
        ladder = self._validate_ladder(ladder)
        family = StrategyFamily.parse(family)

        try:
            candidates = self.builder.build(family, inputs, ladder)
        except InsufficientStrikesError as exc:
            self.log.warning(
                f"Insufficient strikes for {family.value}: {exc}",
                extra={"family": family.value, "symbol": inputs.symbol},
            )
            return AnalysisResult.empty(family, error=str(exc), diagnostics=empty_result_diagnostics(exc))

        views = self.ranker.rank(family, candidates, full=full)
        runtime = time.perf_counter() - start

        self.log.info(
            f"Analysis complete: {family.value} enumerated={views.total} kept={len(views.all)}",
            extra={
                "family": family.value,
                "symbol": inputs.symbol,
                "candidates": views.total,
                "duration_ms": round(runtime * 1000.0, 3),
            },
        )
        return AnalysisResult(
            family=family,
            all=views.all,
            by_reward=views.by_reward,
            by_ratio=views.by_ratio,
            diagnostics=analysis_diagnostics(views, len(ladder), runtime),
        )

    @staticmethod
    def _validate_inputs(inputs: MarketInputs) -> MarketInputs:
        if not isinstance(inputs, MarketInputs):
            raise InvalidInputError("inputs must be a MarketInputs instance")
        return inputs

    @staticmethod
    def _validate_ladder(ladder: LadderInput) -> StrikeLadder:
        if isinstance(ladder, StrikeLadder):
            return ladder
        # Raw rows must already be sorted; the ladder constructor enforces it.
        return StrikeLadder.from_quotes(list(ladder), sort=False)


def analyze(
    inputs: MarketInputs,
    ladder: LadderInput,
    family: StrategyFamily | str,
    full: bool = False,
    config: EngineConfig | None = None,
) -> AnalysisResult:
    """Run a single analysis with a freshly configured facade."""
    return AnalysisFacade(config=config).analyze(inputs, ladder, family, full=full)


__all__ = ["AnalysisFacade", "analyze"]
