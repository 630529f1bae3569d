"""Candidate construction and scenario metrics for each strategy family."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Literal, Sequence, Tuple

from option_strategy_engine.config.settings import EngineConfig
from option_strategy_engine.exceptions import InsufficientStrikesError
from option_strategy_engine.interfaces.pricing import OptionPricer
from option_strategy_engine.models.market import MarketInputs, StrikeLadder
from option_strategy_engine.models.strategy import (
    UNBOUNDED,
    Candidate,
    Leg,
    MaxGain,
    StrategyFamily,
    format_strikes,
)
from option_strategy_engine.pricing.black_scholes import BlackScholesPricer
from option_strategy_engine.scenario.projector import ScenarioProjector, ScenarioShock
from option_strategy_engine.strategies.enumeration import enumerate_combinations

ScenarioLabel = Literal["up", "down", "best"]
RatioMode = Literal["bounds", "scenario_percent", "best_profit"]

# Which scenario is reported as the "gain" for each family. Directional
# families are labelled by construction rather than by which outcome is
# actually better; long puts keep gain = up-scenario, bear put spreads use
# gain = down-scenario. Volatility families and the iron condor take the
# best/worst of both scenarios.
GAIN_SCENARIO: Dict[StrategyFamily, ScenarioLabel] = {
    StrategyFamily.SINGLE_CALL: "up",
    StrategyFamily.SINGLE_PUT: "up",
    StrategyFamily.BULL_CALL_SPREAD: "up",
    StrategyFamily.BEAR_PUT_SPREAD: "down",
    StrategyFamily.CALL_BUTTERFLY: "up",
    StrategyFamily.PUT_BUTTERFLY: "up",
    StrategyFamily.IRON_CONDOR: "best",
    StrategyFamily.STRADDLE: "best",
    StrategyFamily.STRANGLE: "best",
}

RATIO_MODE: Dict[StrategyFamily, RatioMode] = {
    StrategyFamily.SINGLE_CALL: "scenario_percent",
    StrategyFamily.SINGLE_PUT: "scenario_percent",
    StrategyFamily.BULL_CALL_SPREAD: "bounds",
    StrategyFamily.BEAR_PUT_SPREAD: "bounds",
    StrategyFamily.CALL_BUTTERFLY: "bounds",
    StrategyFamily.PUT_BUTTERFLY: "bounds",
    StrategyFamily.IRON_CONDOR: "bounds",
    StrategyFamily.STRADDLE: "best_profit",
    StrategyFamily.STRANGLE: "best_profit",
}


@dataclass(frozen=True, slots=True)
class Structure:
    """Unpriced leg set for one strike combination."""

    description: str
    strikes: Tuple[float, ...]
    legs: Tuple[Leg, ...]
    entry_amount: float
    max_gain: MaxGain
    max_loss: float
    credit: bool = False


def percent_of(amount: float, basis: float) -> float:
    """``100 * amount / |basis|``, or 0 for a zero basis."""
    denom = abs(basis)
    if denom == 0:
        return 0.0
    return 100.0 * amount / denom


def reward_risk_ratio(
    mode: RatioMode,
    max_gain: MaxGain,
    max_loss: float,
    entry_amount: float,
    percent_gain: float,
    percent_loss: float,
    best_profit: float,
) -> float:
    """Reward/risk ratio with a 0 fallback for every zero denominator."""
    if mode == "bounds":
        if max_gain == UNBOUNDED or max_loss <= 0:
            return 0.0
        return float(max_gain) / max_loss
    if mode == "scenario_percent":
        if percent_loss == 0:
            return 0.0
        return abs(percent_gain / percent_loss)
    if entry_amount == 0:
        return 0.0
    return best_profit / abs(entry_amount)


class StrategyBuilder:
    """Enumerate and price every valid candidate of a strategy family."""

    def __init__(self, pricer: OptionPricer | None = None, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        self.pricer = pricer or BlackScholesPricer()
        self.projector = ScenarioProjector(self.pricer, self.config)
        self._rules: Dict[StrategyFamily, Callable[[StrikeLadder, Tuple[int, ...]], Structure]] = {
            StrategyFamily.SINGLE_CALL: self._single_call,
            StrategyFamily.SINGLE_PUT: self._single_put,
            StrategyFamily.BULL_CALL_SPREAD: self._bull_call_spread,
            StrategyFamily.BEAR_PUT_SPREAD: self._bear_put_spread,
            StrategyFamily.CALL_BUTTERFLY: self._call_butterfly,
            StrategyFamily.PUT_BUTTERFLY: self._put_butterfly,
            StrategyFamily.IRON_CONDOR: self._iron_condor,
            StrategyFamily.STRADDLE: self._straddle,
            StrategyFamily.STRANGLE: self._strangle,
        }

    def build(
        self, family: StrategyFamily | str, inputs: MarketInputs, ladder: StrikeLadder
    ) -> List[Candidate]:
        """Return priced candidates in enumeration order.

        Raises:
            InsufficientStrikesError: when the ladder has fewer strikes than
                the family's leg count.
        """
        family = StrategyFamily.parse(family)
        if len(ladder) < family.leg_count:
            raise InsufficientStrikesError(family.value, family.leg_count, len(ladder))

        shock = self.projector.project(inputs)
        rule = self._rules[family]
        combos = enumerate_combinations(family, ladder.strikes, self.config.butterfly_tolerance)
        return [self.price_structure(family, rule(ladder, combo), shock) for combo in combos]

    def structures(self, family: StrategyFamily | str, ladder: StrikeLadder) -> List[Structure]:
        """Unpriced structures for ``family``; handy for inspecting the enumeration."""
        family = StrategyFamily.parse(family)
        rule = self._rules[family]
        combos = enumerate_combinations(family, ladder.strikes, self.config.butterfly_tolerance)
        return [rule(ladder, combo) for combo in combos]

    def price_structure(self, family: StrategyFamily, structure: Structure, shock: ScenarioShock) -> Candidate:
        value_up, value_down = self.projector.revalue(structure.legs, shock)
        # Debit positions pay the entry amount, credit positions receive it.
        cash = structure.entry_amount if structure.credit else -structure.entry_amount
        profit_up = value_up + cash
        profit_down = value_down + cash

        label = GAIN_SCENARIO[family]
        if label == "up":
            gain_profit, loss_profit = profit_up, profit_down
        elif label == "down":
            gain_profit, loss_profit = profit_down, profit_up
        else:
            gain_profit, loss_profit = max(profit_up, profit_down), min(profit_up, profit_down)

        percent_gain = percent_of(gain_profit, structure.entry_amount)
        percent_loss = percent_of(loss_profit, structure.entry_amount)
        max_loss = max(0.0, structure.max_loss)
        ratio = reward_risk_ratio(
            RATIO_MODE[family],
            structure.max_gain,
            max_loss,
            structure.entry_amount,
            percent_gain,
            percent_loss,
            max(profit_up, profit_down),
        )

        return Candidate(
            family=family,
            entry_kind=family.entry_kind,
            description=structure.description,
            strikes=structure.strikes,
            legs=structure.legs,
            entry_amount=structure.entry_amount,
            max_gain=structure.max_gain,
            max_loss=max_loss,
            percent_gain=percent_gain,
            percent_loss=percent_loss,
            reward_risk_ratio=ratio,
            stock_up=shock.stock_up,
            stock_down=shock.stock_down,
            value_up=value_up,
            value_down=value_down,
            profit_up=profit_up,
            profit_down=profit_down,
        )

    # ------------------------------------------------------------------
    # One rule per family
    # ------------------------------------------------------------------
    def _single_call(self, ladder: StrikeLadder, combo: Sequence[int]) -> Structure:
        quote = ladder[combo[0]]
        return Structure(
            description=f"{format_strikes([quote.strike])} Call",
            strikes=(quote.strike,),
            legs=(Leg("call", quote.strike, "long", quote.call_premium),),
            entry_amount=quote.call_premium,
            max_gain=UNBOUNDED,
            max_loss=quote.call_premium,
        )

    def _single_put(self, ladder: StrikeLadder, combo: Sequence[int]) -> Structure:
        quote = ladder[combo[0]]
        return Structure(
            description=f"{format_strikes([quote.strike])} Put",
            strikes=(quote.strike,),
            legs=(Leg("put", quote.strike, "long", quote.put_premium),),
            entry_amount=quote.put_premium,
            max_gain=UNBOUNDED,
            max_loss=quote.put_premium,
        )

    def _bull_call_spread(self, ladder: StrikeLadder, combo: Sequence[int]) -> Structure:
        low, high = ladder[combo[0]], ladder[combo[1]]
        debit = low.call_premium - high.call_premium
        return Structure(
            description=f"Buy {format_strikes([low.strike])} / Sell {format_strikes([high.strike])} Call",
            strikes=(low.strike, high.strike),
            legs=(
                Leg("call", low.strike, "long", low.call_premium),
                Leg("call", high.strike, "short", high.call_premium),
            ),
            entry_amount=debit,
            max_gain=(high.strike - low.strike) - debit,
            max_loss=debit,
        )

    def _bear_put_spread(self, ladder: StrikeLadder, combo: Sequence[int]) -> Structure:
        low, high = ladder[combo[0]], ladder[combo[1]]
        debit = high.put_premium - low.put_premium
        return Structure(
            description=f"Buy {format_strikes([high.strike])} / Sell {format_strikes([low.strike])} Put",
            strikes=(low.strike, high.strike),
            legs=(
                Leg("put", high.strike, "long", high.put_premium),
                Leg("put", low.strike, "short", low.put_premium),
            ),
            entry_amount=debit,
            max_gain=(high.strike - low.strike) - debit,
            max_loss=debit,
        )

    def _butterfly(self, ladder: StrikeLadder, combo: Sequence[int], option_type: str) -> Structure:
        lower, middle, upper = (ladder[i] for i in combo)
        premium = (lambda q: q.call_premium) if option_type == "call" else (lambda q: q.put_premium)
        debit = premium(lower) - 2 * premium(middle) + premium(upper)
        strikes = (lower.strike, middle.strike, upper.strike)
        return Structure(
            description=f"{format_strikes(strikes)} {option_type.capitalize()} Butterfly",
            strikes=strikes,
            legs=(
                Leg(option_type, lower.strike, "long", premium(lower)),
                Leg(option_type, middle.strike, "short", premium(middle), quantity=2),
                Leg(option_type, upper.strike, "long", premium(upper)),
            ),
            entry_amount=debit,
            max_gain=(middle.strike - lower.strike) - debit,
            max_loss=debit,
        )

    def _call_butterfly(self, ladder: StrikeLadder, combo: Sequence[int]) -> Structure:
        return self._butterfly(ladder, combo, "call")

    def _put_butterfly(self, ladder: StrikeLadder, combo: Sequence[int]) -> Structure:
        return self._butterfly(ladder, combo, "put")

    def _iron_condor(self, ladder: StrikeLadder, combo: Sequence[int]) -> Structure:
        put_long, put_short, call_short, call_long = (ladder[i] for i in combo)
        credit = (put_short.put_premium - put_long.put_premium) + (
            call_short.call_premium - call_long.call_premium
        )
        width = min(put_short.strike - put_long.strike, call_long.strike - call_short.strike)
        strikes = (put_long.strike, put_short.strike, call_short.strike, call_long.strike)
        return Structure(
            description=f"{format_strikes(strikes)} Iron Condor",
            strikes=strikes,
            legs=(
                Leg("put", put_long.strike, "long", put_long.put_premium),
                Leg("put", put_short.strike, "short", put_short.put_premium),
                Leg("call", call_short.strike, "short", call_short.call_premium),
                Leg("call", call_long.strike, "long", call_long.call_premium),
            ),
            entry_amount=credit,
            max_gain=credit,
            max_loss=width - credit,
            credit=True,
        )

    def _straddle(self, ladder: StrikeLadder, combo: Sequence[int]) -> Structure:
        quote = ladder[combo[0]]
        cost = quote.call_premium + quote.put_premium
        return Structure(
            description=f"{format_strikes([quote.strike])} Straddle",
            strikes=(quote.strike,),
            legs=(
                Leg("call", quote.strike, "long", quote.call_premium),
                Leg("put", quote.strike, "long", quote.put_premium),
            ),
            entry_amount=cost,
            max_gain=UNBOUNDED,
            max_loss=cost,
        )

    def _strangle(self, ladder: StrikeLadder, combo: Sequence[int]) -> Structure:
        put_quote, call_quote = ladder[combo[0]], ladder[combo[1]]
        cost = put_quote.put_premium + call_quote.call_premium
        strikes = (put_quote.strike, call_quote.strike)
        return Structure(
            description=f"{format_strikes(strikes)} Strangle",
            strikes=strikes,
            legs=(
                Leg("put", put_quote.strike, "long", put_quote.put_premium),
                Leg("call", call_quote.strike, "long", call_quote.call_premium),
            ),
            entry_amount=cost,
            max_gain=UNBOUNDED,
            max_loss=cost,
        )


__all__ = [
    "GAIN_SCENARIO",
    "RATIO_MODE",
    "StrategyBuilder",
    "Structure",
    "percent_of",
    "reward_risk_ratio",
]
