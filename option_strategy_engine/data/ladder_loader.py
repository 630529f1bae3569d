"""Load strike ladders from CSV, JSON or YAML files."""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import yaml

from option_strategy_engine.exceptions import InvalidInputError, SchemaError
from option_strategy_engine.models.market import StrikeLadder
from option_strategy_engine.utils.logging import get_logger

REQUIRED_COLUMNS = ["strike", "call_premium", "put_premium"]
COLUMN_ALIASES = {
    "call": "call_premium",
    "put": "put_premium",
    "call_price": "call_premium",
    "put_price": "put_premium",
}

log = get_logger(__name__, component="data")


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    renamed = {c: str(c).strip().lower() for c in df.columns}
    df = df.rename(columns=renamed)
    return df.rename(columns={k: v for k, v in COLUMN_ALIASES.items() if k in df.columns and v not in df.columns})


def ladder_from_frame(df: pd.DataFrame) -> StrikeLadder:
    """Build a sorted ladder from a frame with strike and premium columns.

    Rows with a missing value are dropped; duplicate strikes are rejected.
    """

    df = _normalize_columns(df)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise SchemaError(f"Strike ladder missing required columns: {missing}")

    df = df[REQUIRED_COLUMNS].apply(pd.to_numeric, errors="coerce")
    dropped = int(df.isna().any(axis=1).sum())
    df = df.dropna()
    if dropped:
        log.warning(f"Dropped {dropped} incomplete ladder row(s)")
    if df.empty:
        raise SchemaError("Strike ladder has no complete rows")

    duplicated = df["strike"][df["strike"].duplicated()].tolist()
    if duplicated:
        raise SchemaError(f"Duplicate strikes in ladder: {sorted(set(duplicated))}")

    df = df.sort_values("strike").reset_index(drop=True)
    try:
        return StrikeLadder.from_quotes(df.itertuples(index=False, name=None), sort=False)
    except InvalidInputError as exc:
        raise SchemaError(f"Invalid strike ladder: {exc}") from exc


def load_ladder(path: Path | str) -> StrikeLadder:
    """Read a ladder from ``.csv``, ``.json`` or ``.yaml``/``.yml``.

    JSON/YAML files hold either a list of row mappings or a mapping with a
    ``strikes`` list.
    """

    path = Path(path)
    if not path.exists():
        raise SchemaError(f"Ladder file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        df = pd.read_csv(path)
    elif suffix in {".json", ".yml", ".yaml"}:
        try:
            content = json.loads(path.read_text()) if suffix == ".json" else yaml.safe_load(path.read_text())
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise SchemaError(f"Could not parse ladder file {path}: {exc}") from exc
        if isinstance(content, dict):
            content = content.get("strikes")
        if not isinstance(content, list):
            raise SchemaError("Ladder file must contain a list of strike rows")
        df = pd.DataFrame(content)
    else:
        raise SchemaError("Ladder file must be CSV, JSON or YAML")

    ladder = ladder_from_frame(df)
    log.info(f"Loaded ladder with {len(ladder)} strikes from {path}")
    return ladder


__all__ = ["REQUIRED_COLUMNS", "ladder_from_frame", "load_ladder"]
