"""Load-once container for the curated knowledge used by every generator."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from swms_risk.knowledge.base import ActivityKnowledgeBase
from swms_risk.knowledge.safety_codes import SafetyCodeRegistry
from swms_risk.knowledge.trade_defaults import TradeDefaults

DATA_DIR = Path(__file__).resolve().parent / "data"

ACTIVITIES_FILE = "activities.json"
TRADE_DEFAULTS_FILE = "trade_defaults.json"
SAFETY_CODES_FILE = "safety_codes.json"


@dataclass(frozen=True, slots=True)
class KnowledgeRepository:
    activities: ActivityKnowledgeBase
    trades: TradeDefaults
    codes: SafetyCodeRegistry


def load_repository(data_dir: Optional[Union[str, Path]] = None) -> KnowledgeRepository:
    """Read all knowledge tables from ``data_dir`` (bundled data when omitted).

    Raises KnowledgeBaseLoadError when any table is missing or malformed.
    """
    base = Path(data_dir) if data_dir else DATA_DIR
    repo = KnowledgeRepository(
        activities=ActivityKnowledgeBase.from_file(base / ACTIVITIES_FILE),
        trades=TradeDefaults.from_file(base / TRADE_DEFAULTS_FILE),
        codes=SafetyCodeRegistry.from_file(base / SAFETY_CODES_FILE),
    )
    print(
        f"[knowledge] loaded {len(repo.activities)} activity profiles, "
        f"{len(repo.trades.trades())} trade tables, {len(repo.codes.all())} safety codes from {base}"
    )
    return repo


@lru_cache(maxsize=None)
def _cached_repository(data_dir: str) -> KnowledgeRepository:
    return load_repository(data_dir)


def load_default_repository(data_dir: Optional[Union[str, Path]] = None) -> KnowledgeRepository:
    """Process-wide repository; each data directory is read at most once."""
    base = Path(data_dir) if data_dir else DATA_DIR
    return _cached_repository(str(base.resolve()))


__all__ = [
    "DATA_DIR",
    "KnowledgeRepository",
    "load_default_repository",
    "load_repository",
]
