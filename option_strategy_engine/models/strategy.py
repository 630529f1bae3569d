"""Strategy families, legs and candidate structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Literal, Sequence, Tuple, Union

from option_strategy_engine.exceptions import InvalidInputError

OptionType = Literal["call", "put"]
Side = Literal["long", "short"]
EntryKind = Literal["premium", "net_debit", "net_credit", "total_cost"]
Category = Literal["single", "spread", "advanced", "volatility"]

UNBOUNDED = "unbounded"
MaxGain = Union[float, str]

# Display keys used by the analyzer front end for each entry kind.
ENTRY_KEYS: Dict[str, str] = {
    "premium": "currentPrice",
    "net_debit": "netDebit",
    "net_credit": "netCredit",
    "total_cost": "totalCost",
}


class StrategyFamily(str, Enum):
    """Supported strategy families."""

    SINGLE_CALL = "single_call"
    SINGLE_PUT = "single_put"
    BULL_CALL_SPREAD = "bull_call_spread"
    BEAR_PUT_SPREAD = "bear_put_spread"
    CALL_BUTTERFLY = "call_butterfly"
    PUT_BUTTERFLY = "put_butterfly"
    IRON_CONDOR = "iron_condor"
    STRADDLE = "straddle"
    STRANGLE = "strangle"

    @property
    def leg_count(self) -> int:
        return _FAMILY_META[self][0]

    @property
    def label(self) -> str:
        return _FAMILY_META[self][1]

    @property
    def category(self) -> Category:
        return _FAMILY_META[self][2]

    @property
    def entry_kind(self) -> EntryKind:
        return _FAMILY_META[self][3]

    @classmethod
    def parse(cls, name: "str | StrategyFamily") -> "StrategyFamily":
        """Resolve a family from its value, enum name, or legacy selector alias."""
        if isinstance(name, StrategyFamily):
            return name
        normalized = str(name).strip().lower().replace("-", "_")
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError as exc:
            allowed = ", ".join(f.value for f in cls)
            raise InvalidInputError(f"Unknown strategy family '{name}'. Available: {allowed}") from exc


_FAMILY_META: Dict[StrategyFamily, Tuple[int, str, Category, EntryKind]] = {
    StrategyFamily.SINGLE_CALL: (1, "Long Call", "single", "premium"),
    StrategyFamily.SINGLE_PUT: (1, "Long Put", "single", "premium"),
    StrategyFamily.BULL_CALL_SPREAD: (2, "Bull Call Spread", "spread", "net_debit"),
    StrategyFamily.BEAR_PUT_SPREAD: (2, "Bear Put Spread", "spread", "net_debit"),
    StrategyFamily.CALL_BUTTERFLY: (3, "Long Call Butterfly", "advanced", "net_debit"),
    StrategyFamily.PUT_BUTTERFLY: (3, "Long Put Butterfly", "advanced", "net_debit"),
    StrategyFamily.IRON_CONDOR: (4, "Iron Condor", "advanced", "net_credit"),
    StrategyFamily.STRADDLE: (2, "Long Straddle", "volatility", "total_cost"),
    StrategyFamily.STRANGLE: (2, "Long Strangle", "volatility", "total_cost"),
}

_ALIASES = {
    "call": "single_call",
    "put": "single_put",
    "long_call": "single_call",
    "long_put": "single_put",
    "vertical_call_spread": "bull_call_spread",
    "vertical_put_spread": "bear_put_spread",
    "butterfly": "call_butterfly",
}


@dataclass(frozen=True, slots=True)
class Leg:
    """Single option leg of a candidate structure.

    Quantity is always positive; the sign lives in ``side``.
    """

    option_type: OptionType
    strike: float
    side: Side
    premium: float
    quantity: int = 1

    def __post_init__(self) -> None:
        if self.option_type not in {"call", "put"}:
            raise InvalidInputError("option_type must be 'call' or 'put'")
        if self.side not in {"long", "short"}:
            raise InvalidInputError("side must be 'long' or 'short'")
        if self.strike <= 0:
            raise InvalidInputError("strike must be positive")
        if self.quantity <= 0:
            raise InvalidInputError("quantity must be positive (sign encoded in 'side')")

    def signed_quantity(self) -> int:
        """Return signed quantity (positive for long, negative for short)."""
        return self.quantity if self.side == "long" else -self.quantity

    def to_formatted_dict(self) -> Dict[str, Any]:
        return {
            "optionType": self.option_type,
            "strike": _fmt_strike(self.strike),
            "side": self.side,
            "quantity": self.quantity,
            "premium": f"{self.premium:.2f}",
        }


def _fmt_strike(strike: float) -> str:
    return f"{strike:.10g}"


def format_strikes(strikes: Sequence[float]) -> str:
    return "/".join(_fmt_strike(s) for s in strikes)


@dataclass(frozen=True, slots=True)
class Candidate:
    """One priced instantiation of a strategy family over specific strikes.

    The field set is the same for every family. ``entry_kind`` says which
    cost basis ``entry_amount`` represents: the quoted premium of a single
    leg, a net debit, a net credit, or the total cost of a long volatility
    position.
    """

    family: StrategyFamily
    entry_kind: EntryKind
    description: str
    strikes: Tuple[float, ...]
    legs: Tuple[Leg, ...]
    entry_amount: float
    max_gain: MaxGain
    max_loss: float
    percent_gain: float
    percent_loss: float
    reward_risk_ratio: float
    stock_up: float
    stock_down: float
    value_up: float
    value_down: float
    profit_up: float
    profit_down: float

    @property
    def is_unbounded(self) -> bool:
        return self.max_gain == UNBOUNDED

    @property
    def current_price(self) -> float | None:
        return self.entry_amount if self.entry_kind == "premium" else None

    @property
    def net_debit(self) -> float | None:
        return self.entry_amount if self.entry_kind == "net_debit" else None

    @property
    def net_credit(self) -> float | None:
        return self.entry_amount if self.entry_kind == "net_credit" else None

    @property
    def total_cost(self) -> float | None:
        return self.entry_amount if self.entry_kind == "total_cost" else None

    def to_formatted_dict(self) -> Dict[str, Any]:
        """Render the candidate with display precision (currency 2dp, percent 1dp, ratio 2dp)."""
        payload: Dict[str, Any] = {
            "family": self.family.value,
            "description": self.description,
            "strikes": format_strikes(self.strikes),
            "entryKind": self.entry_kind,
            ENTRY_KEYS[self.entry_kind]: f"{self.entry_amount:.2f}",
            "maxGain": UNBOUNDED if self.is_unbounded else f"{float(self.max_gain):.2f}",
            "maxLoss": f"{self.max_loss:.2f}",
            "percentGain": f"{self.percent_gain:.1f}",
            "percentLoss": f"{self.percent_loss:.1f}",
            "rewardRiskRatio": f"{self.reward_risk_ratio:.2f}",
            "stockUp": f"{self.stock_up:.2f}",
            "stockDown": f"{self.stock_down:.2f}",
            "valueUp": f"{self.value_up:.2f}",
            "valueDown": f"{self.value_down:.2f}",
            "legs": [leg.to_formatted_dict() for leg in self.legs],
        }
        return payload


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Three read-only views over one family's candidates."""

    family: StrategyFamily
    all: Tuple[Candidate, ...]
    by_reward: Tuple[Candidate, ...]
    by_ratio: Tuple[Candidate, ...]
    error: str | None = None
    diagnostics: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def empty(
        cls, family: StrategyFamily, error: str | None = None, diagnostics: Dict[str, Any] | None = None
    ) -> "AnalysisResult":
        return cls(family=family, all=(), by_reward=(), by_ratio=(), error=error, diagnostics=diagnostics or {})

    def to_formatted_dict(self) -> Dict[str, Any]:
        return {
            "family": self.family.value,
            "all": [c.to_formatted_dict() for c in self.all],
            "byReward": [c.to_formatted_dict() for c in self.by_reward],
            "byRatio": [c.to_formatted_dict() for c in self.by_ratio],
            "error": self.error,
        }


__all__ = [
    "AnalysisResult",
    "Candidate",
    "ENTRY_KEYS",
    "EntryKind",
    "Leg",
    "MaxGain",
    "OptionType",
    "Side",
    "StrategyFamily",
    "UNBOUNDED",
    "format_strikes",
]
