"""Market snapshot and strike ladder data models."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, Sequence, Tuple

from option_strategy_engine.exceptions import InvalidInputError

DEFAULT_STRIKE_STEP = 2.5
DEFAULT_NEW_PREMIUM = 0.10


def _finite(name: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{name} must be numeric") from exc
    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be finite")
    return number


@dataclass(frozen=True, slots=True)
class MarketInputs:
    """Immutable market snapshot consumed by one analysis run."""

    spot_price: float
    implied_vol: float
    days_to_expiration: int
    symbol: str | None = None

    def __post_init__(self) -> None:
        if _finite("spot_price", self.spot_price) <= 0:
            raise InvalidInputError("spot_price must be positive")
        if _finite("implied_vol", self.implied_vol) <= 0:
            raise InvalidInputError("implied_vol must be positive")
        if isinstance(self.days_to_expiration, bool) or not isinstance(self.days_to_expiration, int):
            raise InvalidInputError("days_to_expiration must be an integer")
        if self.days_to_expiration <= 0:
            raise InvalidInputError("days_to_expiration must be positive")

    @classmethod
    def from_percent_vol(
        cls, spot_price: float, vol_percent: float, days_to_expiration: int, symbol: str | None = None
    ) -> "MarketInputs":
        """Build inputs from a volatility quoted in percent (35 -> 0.35)."""
        return cls(
            spot_price=spot_price,
            implied_vol=_finite("vol_percent", vol_percent) / 100.0,
            days_to_expiration=days_to_expiration,
            symbol=symbol.upper() if symbol else None,
        )

    def time_to_expiry(self, days_per_year: int = 365) -> float:
        return self.days_to_expiration / days_per_year


@dataclass(frozen=True, slots=True)
class StrikeQuote:
    """Quoted call and put premium at a single strike."""

    strike: float
    call_premium: float
    put_premium: float

    def __post_init__(self) -> None:
        if _finite("strike", self.strike) <= 0:
            raise InvalidInputError(f"strike must be positive (got {self.strike})")
        if _finite("call_premium", self.call_premium) < 0:
            raise InvalidInputError(f"call_premium must be non-negative at strike {self.strike}")
        if _finite("put_premium", self.put_premium) < 0:
            raise InvalidInputError(f"put_premium must be non-negative at strike {self.strike}")


@dataclass(frozen=True, slots=True)
class StrikeLadder:
    """Ordered strike ladder with unique, strictly ascending strikes.

    The ladder is never mutated in place; the ``with_*``/``without`` helpers
    return a new ladder, which is how an editing front end replaces the whole
    sequence between analysis runs.
    """

    quotes: Tuple[StrikeQuote, ...]

    def __post_init__(self) -> None:
        quotes = tuple(self.quotes)
        object.__setattr__(self, "quotes", quotes)
        for quote in quotes:
            if not isinstance(quote, StrikeQuote):
                raise InvalidInputError("ladder entries must be StrikeQuote instances")
        for prev, cur in zip(quotes, quotes[1:]):
            if cur.strike == prev.strike:
                raise InvalidInputError(f"duplicate strike {cur.strike}")
            if cur.strike < prev.strike:
                raise InvalidInputError("strikes must be sorted in ascending order")

    @classmethod
    def from_quotes(
        cls, rows: Iterable[Sequence[float]], sort: bool = True
    ) -> "StrikeLadder":
        """Build a ladder from ``(strike, call_premium, put_premium)`` rows."""
        quotes = [
            StrikeQuote(_finite("strike", r[0]), _finite("call_premium", r[1]), _finite("put_premium", r[2]))
            for r in rows
        ]
        if sort:
            quotes.sort(key=lambda q: q.strike)
        return cls(tuple(quotes))

    def __len__(self) -> int:
        return len(self.quotes)

    def __iter__(self) -> Iterator[StrikeQuote]:
        return iter(self.quotes)

    def __getitem__(self, index: int) -> StrikeQuote:
        return self.quotes[index]

    @property
    def strikes(self) -> Tuple[float, ...]:
        return tuple(q.strike for q in self.quotes)

    @property
    def call_premiums(self) -> Tuple[float, ...]:
        return tuple(q.call_premium for q in self.quotes)

    @property
    def put_premiums(self) -> Tuple[float, ...]:
        return tuple(q.put_premium for q in self.quotes)

    def with_added_strike(
        self,
        strike: float | None = None,
        call_premium: float = DEFAULT_NEW_PREMIUM,
        put_premium: float = DEFAULT_NEW_PREMIUM,
    ) -> "StrikeLadder":
        """Return a ladder with one more strike.

        Without an explicit strike the new one is placed one default step above
        the current top strike.
        """
        if strike is None:
            if not self.quotes:
                raise InvalidInputError("strike is required when the ladder is empty")
            strike = self.quotes[-1].strike + DEFAULT_STRIKE_STEP
        rows = [(q.strike, q.call_premium, q.put_premium) for q in self.quotes]
        rows.append((strike, call_premium, put_premium))
        return StrikeLadder.from_quotes(rows)

    def with_updated(
        self,
        index: int,
        *,
        strike: float | None = None,
        call_premium: float | None = None,
        put_premium: float | None = None,
    ) -> "StrikeLadder":
        """Return a ladder with the quote at ``index`` replaced field by field."""
        current = self._quote_at(index)
        changes = {}
        if strike is not None:
            changes["strike"] = strike
        if call_premium is not None:
            changes["call_premium"] = call_premium
        if put_premium is not None:
            changes["put_premium"] = put_premium
        quotes = list(self.quotes)
        quotes[index] = replace(current, **changes)
        return StrikeLadder.from_quotes((q.strike, q.call_premium, q.put_premium) for q in quotes)

    def without(self, index: int) -> "StrikeLadder":
        """Return a ladder with the quote at ``index`` removed (at least one strike is kept)."""
        self._quote_at(index)
        if len(self.quotes) <= 1:
            raise InvalidInputError("cannot remove the last remaining strike")
        position = index % len(self.quotes)
        return StrikeLadder(self.quotes[:position] + self.quotes[position + 1 :])

    def _quote_at(self, index: int) -> StrikeQuote:
        try:
            return self.quotes[index]
        except IndexError as exc:
            raise InvalidInputError(f"no strike at index {index}") from exc


def demo_market() -> MarketInputs:
    """Default market snapshot shown by the analyzer before any edits."""
    return MarketInputs(spot_price=25.50, implied_vol=0.35, days_to_expiration=30)


def demo_ladder() -> StrikeLadder:
    """Default five-strike ladder shown by the analyzer before any edits."""
    return StrikeLadder.from_quotes(
        [
            (20.0, 5.80, 0.10),
            (22.5, 3.50, 0.30),
            (25.0, 1.80, 1.50),
            (27.5, 0.60, 3.40),
            (30.0, 0.15, 5.60),
        ]
    )


__all__ = ["MarketInputs", "StrikeLadder", "StrikeQuote", "demo_ladder", "demo_market"]
