"""Australian construction legislation, standards and codes of practice by trade."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from swms_risk.knowledge.base import KnowledgeBaseLoadError, read_json_document

ALL_TRADES = "All"


class SafetyCode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    code: str
    title: str = ""
    category: str = ""
    applicable_trades: List[str] = Field(default_factory=list)
    mandatory: bool = False
    risk_level: str = "Medium"

    def applies_to(self, trade_type: str) -> bool:
        wanted = (trade_type or "").strip().casefold()
        for trade in self.applicable_trades:
            if trade == ALL_TRADES or trade.casefold() == wanted:
                return True
        return False


class SafetyCodeRegistry:
    def __init__(self, codes: Iterable[SafetyCode]) -> None:
        self._codes: Tuple[SafetyCode, ...] = tuple(codes)

    def all(self) -> Tuple[SafetyCode, ...]:
        return self._codes

    def codes_for_trade(self, trade_type: str) -> List[SafetyCode]:
        return [c for c in self._codes if c.applies_to(trade_type)]

    def mandatory_codes_for_trade(self, trade_type: str) -> List[str]:
        return [c.code for c in self.codes_for_trade(trade_type) if c.mandatory]

    def search(self, term: str) -> List[SafetyCode]:
        needle = (term or "").strip().lower()
        if not needle:
            return []
        return [
            c
            for c in self._codes
            if needle in c.code.lower() or needle in c.title.lower() or needle in c.category.lower()
        ]

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SafetyCodeRegistry":
        doc = read_json_document(path)
        raw = doc.get("codes")
        if not isinstance(raw, list):
            raise KnowledgeBaseLoadError(f"{path}: 'codes' must be a list")
        try:
            return cls(SafetyCode.model_validate(item) for item in raw)
        except ValidationError as exc:
            raise KnowledgeBaseLoadError(f"{path}: invalid safety code: {exc}") from exc


__all__ = ["ALL_TRADES", "SafetyCode", "SafetyCodeRegistry"]
