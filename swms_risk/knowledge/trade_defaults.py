"""Per-trade generic hazard/control tables used when no curated profile exists."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from swms_risk.knowledge.base import KnowledgeBaseLoadError, read_json_document
from swms_risk.models.risk import clean_text_list


class TradeTable(BaseModel):
    """Template profile for a trade. ``{activity}`` placeholders are filled at generation time."""

    model_config = ConfigDict(frozen=True)

    description: str
    hazards: List[str] = Field(min_length=1)
    control_measures: List[str] = Field(min_length=1)
    legislation: List[str] = Field(default_factory=list)
    ppe: List[str] = Field(default_factory=list)
    training_required: List[str] = Field(default_factory=list)
    permit_required: List[str] = Field(default_factory=list)
    inspection_frequency: str
    emergency_procedures: List[str] = Field(default_factory=list)
    environmental_controls: List[str] = Field(default_factory=list)
    initial_risk_score: int = Field(ge=1, le=20)
    residual_risk_score: int = Field(ge=1, le=20)
    responsible_person: str

    @field_validator(
        "hazards",
        "control_measures",
        "legislation",
        "ppe",
        "training_required",
        "permit_required",
        "emergency_procedures",
        "environmental_controls",
        mode="before",
    )
    @classmethod
    def _strip_items(cls, value: Any) -> Any:
        return clean_text_list(value)


class TradeDefaults:
    """Read-only set of trade tables plus the universal generic table."""

    def __init__(self, generic: TradeTable, trades: Mapping[str, TradeTable]) -> None:
        self.generic = generic
        self._trades = MappingProxyType(dict(trades))
        self._folded = MappingProxyType({name.casefold(): name for name in self._trades})

    def trades(self) -> Tuple[str, ...]:
        return tuple(self._trades.keys())

    def table_for(self, trade_type: Optional[str]) -> Tuple[Optional[str], TradeTable]:
        """Return ``(matched trade name, table)``; unknown trades get ``(None, generic)``."""
        key = (trade_type or "").strip()
        if key in self._trades:
            return key, self._trades[key]
        canonical = self._folded.get(key.casefold())
        if canonical is not None:
            return canonical, self._trades[canonical]
        return None, self.generic

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "TradeDefaults":
        doc = read_json_document(path)
        generic_raw = doc.get("generic")
        trades_raw = doc.get("trades") or {}
        if not isinstance(generic_raw, dict):
            raise KnowledgeBaseLoadError(f"{path}: 'generic' table is required")
        if not isinstance(trades_raw, dict):
            raise KnowledgeBaseLoadError(f"{path}: 'trades' must be an object")
        try:
            generic = TradeTable.model_validate(generic_raw)
        except ValidationError as exc:
            raise KnowledgeBaseLoadError(f"{path}: generic table is invalid: {exc}") from exc

        trades: Dict[str, TradeTable] = {}
        for name, overrides in trades_raw.items():
            if not isinstance(overrides, dict):
                raise KnowledgeBaseLoadError(f"{path}: trade {name!r} must be an object")
            # trade entries only carry what differs from the generic table
            merged: Dict[str, Any] = {**generic_raw, **overrides}
            try:
                trades[name] = TradeTable.model_validate(merged)
            except ValidationError as exc:
                raise KnowledgeBaseLoadError(f"{path}: trade {name!r} is invalid: {exc}") from exc
        return cls(generic, trades)


__all__ = ["TradeDefaults", "TradeTable"]
