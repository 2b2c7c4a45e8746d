"""Cross-activity roll-ups: compliance codes and the register summary."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Optional, Sequence

from swms_risk.generators.scoring import RiskLevel
from swms_risk.models.risk import RegisterSummary, RiskAssessment


def _dedupe(items: Iterable[object], seen: set, out: List[str]) -> None:
    for item in items:
        if not isinstance(item, str):
            continue
        if not item.strip() or item in seen:
            continue
        seen.add(item)
        out.append(item)


def aggregate(*code_lists: Iterable[object]) -> List[str]:
    """Union of code lists in first-seen order, de-duplicated by exact string.

    Accepts several lists (``aggregate(a, b)``) or one list of lists
    (``aggregate([a, b])``). Blank and non-string entries are skipped.
    """
    if len(code_lists) == 1:
        only = list(code_lists[0])
        if only and all(isinstance(entry, (list, tuple)) for entry in only):
            code_lists = tuple(only)
        else:
            code_lists = (only,)
    seen: set = set()
    out: List[str] = []
    for codes in code_lists:
        _dedupe(codes or (), seen, out)
    return out


def aggregate_assessments(
    assessments: Sequence[RiskAssessment],
    mandatory_codes: Iterable[str] = (),
) -> List[str]:
    return aggregate(*[a.legislation for a in assessments], list(mandatory_codes))


def _highest(levels: Iterable[RiskLevel]) -> Optional[RiskLevel]:
    levels = list(levels)
    return max(levels) if levels else None


def summarize_register(assessments: Sequence[RiskAssessment]) -> RegisterSummary:
    initial = [a.initial_risk_level for a in assessments]
    residual = [a.residual_risk_level for a in assessments]
    initial_counts = Counter(level.value for level in initial)
    residual_counts = Counter(level.value for level in residual)
    provenance_counts = Counter(a.provenance.value for a in assessments)
    return RegisterSummary(
        total=len(assessments),
        initial_level_counts={level.value: initial_counts.get(level.value, 0) for level in RiskLevel},
        residual_level_counts={level.value: residual_counts.get(level.value, 0) for level in RiskLevel},
        highest_initial_level=_highest(initial),
        highest_residual_level=_highest(residual),
        provenance_counts=dict(provenance_counts),
        ppe=aggregate(*[a.profile.ppe for a in assessments]),
        training_required=aggregate(*[a.profile.training_required for a in assessments]),
        permits_required=aggregate(*[a.profile.permit_required for a in assessments]),
    )


__all__ = ["aggregate", "aggregate_assessments", "summarize_register"]
