"""Engine configuration schema, validation and file loading."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from option_strategy_engine.exceptions import ConfigValidationError, InvalidInputError
from option_strategy_engine.models.strategy import StrategyFamily


@dataclass(frozen=True, slots=True)
class TruncationCaps:
    """Result-size caps for one family.

    ``all_limit`` truncates the enumeration-ordered view; ``ranked_limit``
    truncates each ranked view after sorting. ``None`` means uncapped.
    """

    all_limit: Optional[int] = None
    ranked_limit: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("all_limit", "ranked_limit"):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value <= 0):
                raise ConfigValidationError(f"{name} must be a positive integer when set")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TruncationCaps":
        unknown = set(data) - {"all_limit", "ranked_limit"}
        if unknown:
            raise ConfigValidationError(f"Unknown truncation keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {"all_limit": self.all_limit, "ranked_limit": self.ranked_limit}


def default_caps() -> Dict[StrategyFamily, TruncationCaps]:
    return {
        StrategyFamily.CALL_BUTTERFLY: TruncationCaps(all_limit=20, ranked_limit=5),
        StrategyFamily.PUT_BUTTERFLY: TruncationCaps(all_limit=20, ranked_limit=5),
        StrategyFamily.IRON_CONDOR: TruncationCaps(all_limit=20, ranked_limit=5),
        StrategyFamily.STRANGLE: TruncationCaps(all_limit=15, ranked_limit=5),
    }


@dataclass(slots=True)
class EngineConfig:
    risk_free_rate: float = 0.05
    days_per_year: int = 365
    revaluation_fraction: float = 0.5
    butterfly_tolerance: float = 1e-9
    pricer: str = "black_scholes"
    caps: Dict[StrategyFamily, TruncationCaps] = field(default_factory=default_caps)

    def __post_init__(self) -> None:
        if not -1 < self.risk_free_rate < 1:
            raise ConfigValidationError("risk_free_rate looks invalid")
        if isinstance(self.days_per_year, bool) or not isinstance(self.days_per_year, int) or self.days_per_year <= 0:
            raise ConfigValidationError("days_per_year must be a positive integer")
        if not 0 < self.revaluation_fraction <= 1:
            raise ConfigValidationError("revaluation_fraction must be in (0, 1]")
        if self.butterfly_tolerance < 0:
            raise ConfigValidationError("butterfly_tolerance must be non-negative")
        if not self.pricer:
            raise ConfigValidationError("pricer is required")
        # Families not listed keep their default caps; None means uncapped.
        normalized = default_caps()
        for key, caps in (self.caps or {}).items():
            family = _parse_family(key)
            if caps is None:
                caps = TruncationCaps()
            elif isinstance(caps, dict):
                caps = TruncationCaps.from_dict(caps)
            if not isinstance(caps, TruncationCaps):
                raise ConfigValidationError(f"invalid caps for {family.value}")
            normalized[family] = caps
        self.caps = normalized

    def caps_for(self, family: StrategyFamily) -> TruncationCaps:
        return self.caps.get(family, TruncationCaps())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        allowed = {f.name for f in fields(cls)}
        unknown = set(data) - allowed
        if unknown:
            raise ConfigValidationError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "risk_free_rate": self.risk_free_rate,
            "days_per_year": self.days_per_year,
            "revaluation_fraction": self.revaluation_fraction,
            "butterfly_tolerance": self.butterfly_tolerance,
            "pricer": self.pricer,
            "caps": {family.value: caps.to_dict() for family, caps in self.caps.items()},
        }


def _parse_family(key: Any) -> StrategyFamily:
    try:
        return StrategyFamily.parse(key)
    except InvalidInputError as exc:
        raise ConfigValidationError(f"Unknown strategy family in caps: {key}") from exc


def _load_mapping(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigValidationError(f"Config file not found: {path}")
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yml", ".yaml"}:
        try:
            content = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"Invalid YAML config: {exc}") from exc
    elif suffix == ".json":
        try:
            content = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigValidationError(f"Invalid JSON config: {exc}") from exc
    else:
        raise ConfigValidationError("Config file must be JSON or YAML")
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigValidationError("Config file must contain a mapping")
    # An optional top-level "engine" section is accepted so the settings can live
    # in a larger shared config file.
    return content.get("engine", content)


def load_config(path: Path | str | None) -> EngineConfig:
    """Load an ``EngineConfig`` from a YAML/JSON file; ``None`` gives the defaults."""
    if path is None:
        return EngineConfig()
    return EngineConfig.from_dict(_load_mapping(Path(path)))


__all__ = ["EngineConfig", "TruncationCaps", "default_caps", "load_config"]
