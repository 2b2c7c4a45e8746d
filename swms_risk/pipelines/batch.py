from __future__ import annotations

"""Sequential batch synthesis with pacing, a soft deadline and cooperative cancel."""

import asyncio
import time
from typing import Callable, Iterable, List, Optional, Sequence, Union

from swms_risk.generators.synthesizer import AssessmentSynthesizer
from swms_risk.knowledge.safety_codes import SafetyCodeRegistry
from swms_risk.models.risk import Activity, BatchResult, RiskAssessment

from .compliance import aggregate_assessments
from .pacing import MinIntervalPacer

ActivityInput = Union[str, Activity]


def normalize_activities(
    activities: Iterable[ActivityInput],
    project_context: Optional[str] = None,
) -> List[Activity]:
    """Validate every label up front; a blank label raises ValueError before any work."""
    out: List[Activity] = []
    for item in activities:
        if isinstance(item, Activity):
            out.append(item)
        else:
            out.append(Activity(label=item, project_context=project_context))
    return out


class BatchOrchestrator:
    """Runs the synthesizer over an ordered list of activities, one at a time.

    Output position ``i`` always corresponds to input position ``i``; duplicate
    labels are synthesized independently.
    """

    def __init__(
        self,
        synthesizer: AssessmentSynthesizer,
        pacer: Optional[MinIntervalPacer] = None,
        codes: Optional[SafetyCodeRegistry] = None,
        deadline_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.synthesizer = synthesizer
        self.pacer = pacer or MinIntervalPacer()
        self.codes = codes
        self.deadline_seconds = deadline_seconds
        self._clock = clock

    async def run(
        self,
        activities: Sequence[ActivityInput],
        trade_type: str,
        project_context: Optional[str] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> BatchResult:
        requests = normalize_activities(activities, project_context)
        self.pacer.reset()
        started = self._clock()
        assessments: List[RiskAssessment] = []
        external_calls = 0
        degraded = False

        for index, request in enumerate(requests):
            if should_cancel is not None and should_cancel():
                print(f"[batch] cancelled after {index}/{len(requests)} activities")
                return self._finish(assessments, len(requests), trade_type, partial=True)

            allow_augmentation = True
            if self.deadline_seconds is not None and self._clock() - started >= self.deadline_seconds:
                allow_augmentation = False
                if not degraded:
                    print(
                        f"[batch] deadline of {self.deadline_seconds:g}s reached at item {index + 1}; "
                        "remaining activities use curated or fallback profiles"
                    )
                    degraded = True

            outcome = await self.synthesizer.synthesize(
                request,
                trade_type,
                project_context=project_context,
                allow_augmentation=allow_augmentation,
                before_external_call=self.pacer.wait,
                after_external_call=self.pacer.mark_done,
            )
            if outcome.external_call:
                external_calls += 1
            assessments.append(outcome.assessment)

        print(f"[batch] synthesized {len(assessments)} activities for {trade_type} ({external_calls} external calls)")
        return self._finish(assessments, len(requests), trade_type, partial=False)

    def run_sync(
        self,
        activities: Sequence[ActivityInput],
        trade_type: str,
        project_context: Optional[str] = None,
        should_cancel: Optional[Callable[[], bool]] = None,
    ) -> BatchResult:
        return asyncio.run(self.run(activities, trade_type, project_context, should_cancel))

    def _finish(
        self,
        assessments: List[RiskAssessment],
        requested: int,
        trade_type: str,
        partial: bool,
    ) -> BatchResult:
        mandatory = self.codes.mandatory_codes_for_trade(trade_type) if self.codes is not None else []
        return BatchResult(
            assessments=assessments,
            requested=requested,
            partial=partial,
            compliance_codes=aggregate_assessments(assessments, mandatory),
        )


__all__ = ["BatchOrchestrator", "normalize_activities"]
