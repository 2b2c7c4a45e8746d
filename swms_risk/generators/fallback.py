"""Deterministic generic risk profiles built from the trade tables.

Used whenever neither the curated knowledge base nor the generation service
produced a profile. It performs no I/O and cannot fail for any activity or
trade: unknown trades fall through to the universal generic table.
"""

from __future__ import annotations

from typing import List, Optional

from swms_risk.knowledge.trade_defaults import TradeDefaults, TradeTable
from swms_risk.models.risk import RiskProfile


class _SafeDict(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _fill(template: str, activity: str) -> str:
    # format_map with a tolerant mapping; stray braces in authored text survive
    try:
        return template.format_map(_SafeDict(activity=activity))
    except (ValueError, IndexError):
        return template.replace("{activity}", activity)


def _fill_all(templates: List[str], activity: str) -> List[str]:
    return [_fill(t, activity) for t in templates]


class DeterministicFallbackGenerator:
    def __init__(self, trade_defaults: TradeDefaults) -> None:
        self.trade_defaults = trade_defaults

    def table_for(self, trade_type: Optional[str]) -> TradeTable:
        return self.trade_defaults.table_for(trade_type)[1]

    def generate(self, activity: str, trade_type: Optional[str]) -> RiskProfile:
        table = self.table_for(trade_type)
        label = (activity or "").strip() or "General work activity"
        return RiskProfile(
            activity_name=activity or label,
            description=_fill(table.description, label),
            hazards=_fill_all(table.hazards, label),
            control_measures=_fill_all(table.control_measures, label),
            ppe=list(table.ppe),
            training_required=list(table.training_required),
            legislation=list(table.legislation),
            permit_required=list(table.permit_required),
            inspection_frequency=table.inspection_frequency,
            emergency_procedures=list(table.emergency_procedures),
            environmental_controls=list(table.environmental_controls),
            initial_risk_score=table.initial_risk_score,
            residual_risk_score=table.residual_risk_score,
            responsible_person=table.responsible_person,
        )


__all__ = ["DeterministicFallbackGenerator"]
