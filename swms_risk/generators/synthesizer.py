"""Per-activity synthesis: knowledge base, then generation service, then fallback."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Tuple, Union

from swms_risk.generators.augment import GenerativeAugmenter
from swms_risk.generators.fallback import DeterministicFallbackGenerator
from swms_risk.generators.resolver import MATCH_FUZZY, ActivityResolver, Resolution
from swms_risk.models.risk import Activity, Provenance, RiskAssessment, RiskProfile, new_record_id

ExternalCallHook = Callable[[], Awaitable[object]]

BLANK_ACTIVITY_LABEL = "General work activity"


@dataclass(slots=True)
class SynthesisOutcome:
    assessment: RiskAssessment
    external_call: bool = False


def _as_activity(activity: Union[str, Activity, None], project_context: Optional[str]) -> Tuple[Activity, bool]:
    """Return the request model and whether the label was blank."""
    if isinstance(activity, Activity):
        return activity, False
    if not (activity or "").strip():
        return Activity(label=BLANK_ACTIVITY_LABEL, project_context=project_context), True
    return Activity(label=activity, project_context=project_context), False


class AssessmentSynthesizer:
    """Produces exactly one RiskAssessment per requested activity.

    Resolution order is fixed: curated profile (exact or fuzzy), then the
    generation service when enabled, then the deterministic trade fallback.
    ``synthesize`` does not raise for internal failures; task cancellation is
    the only thing that propagates.
    """

    def __init__(
        self,
        resolver: ActivityResolver,
        fallback: DeterministicFallbackGenerator,
        augmenter: Optional[GenerativeAugmenter] = None,
        augmentation_enabled: bool = True,
    ) -> None:
        self.resolver = resolver
        self.fallback = fallback
        self.augmenter = augmenter
        self.augmentation_enabled = augmentation_enabled and augmenter is not None

    async def synthesize(
        self,
        activity: Union[str, Activity],
        trade_type: str,
        project_context: Optional[str] = None,
        allow_augmentation: bool = True,
        before_external_call: Optional[ExternalCallHook] = None,
        after_external_call: Optional[ExternalCallHook] = None,
    ) -> SynthesisOutcome:
        request, blank = _as_activity(activity, project_context)
        context = request.project_context or project_context
        trade = request.trade_hint or trade_type
        label = request.label
        notes: List[str] = []
        external_call = False

        if blank:
            print(f"[synth] blank activity label; using generic '{label}' profile")
            notes.append("blank activity label")
            profile = self.fallback.generate(label, trade)
            return SynthesisOutcome(
                assessment=self._assemble(request, profile, Provenance.fallback, new_record_id("fallback"), notes=notes),
            )

        try:
            resolution = self.resolver.resolve(label)
        except Exception as exc:
            print(f"[synth] resolver error for '{label}': {type(exc).__name__}: {exc}")
            notes.append("knowledge base lookup failed")
            resolution = Resolution(requested=label)

        if resolution.resolved:
            if resolution.match_type == MATCH_FUZZY:
                notes.append(f"matched curated profile '{resolution.matched_key}'")
            return SynthesisOutcome(
                assessment=self._assemble(
                    request,
                    resolution.profile,
                    Provenance.knowledge_base,
                    new_record_id("kb"),
                    matched_key=resolution.matched_key,
                    notes=notes,
                ),
            )

        if self.augmentation_enabled and allow_augmentation:
            external_call = True
            if before_external_call is not None:
                await before_external_call()
            try:
                result = await self.augmenter.augment(label, trade, context)
            except Exception as exc:
                print(f"[synth] augmenter error for '{label}': {type(exc).__name__}: {exc}")
                notes.append(f"augmentation unavailable: {type(exc).__name__}")
                result = None
            finally:
                if after_external_call is not None:
                    await after_external_call()
            if result is not None:
                if result.available:
                    if result.replaced_fields:
                        notes.append("replaced invalid generated fields: " + ", ".join(result.replaced_fields))
                    notes.extend(result.notes)
                    return SynthesisOutcome(
                        assessment=self._assemble(
                            request, result.profile, Provenance.augmented, result.augmentation_id, notes=notes
                        ),
                        external_call=external_call,
                    )
                notes.append(f"augmentation unavailable: {result.failure}")

        profile = self.fallback.generate(label, trade)
        return SynthesisOutcome(
            assessment=self._assemble(request, profile, Provenance.fallback, new_record_id("fallback"), notes=notes),
            external_call=external_call,
        )

    def synthesize_sync(
        self,
        activity: Union[str, Activity],
        trade_type: str,
        project_context: Optional[str] = None,
        allow_augmentation: bool = True,
    ) -> RiskAssessment:
        outcome = asyncio.run(
            self.synthesize(activity, trade_type, project_context=project_context, allow_augmentation=allow_augmentation)
        )
        return outcome.assessment

    @staticmethod
    def _assemble(
        activity: Activity,
        profile: RiskProfile,
        provenance: Provenance,
        record_id: str,
        matched_key: Optional[str] = None,
        notes: Optional[List[str]] = None,
    ) -> RiskAssessment:
        return RiskAssessment(
            id=record_id,
            activity=activity,
            profile=profile,
            provenance=provenance,
            matched_key=matched_key,
            notes=list(notes or []),
        )


__all__ = ["AssessmentSynthesizer", "SynthesisOutcome"]
