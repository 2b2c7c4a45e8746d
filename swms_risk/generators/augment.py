"""Generation-service augmentation with strict validation of untrusted output.

The generation service is optional and its responses are never trusted: every
field is checked on its own and replaced with a safe default phrased around the
activity when it is missing or malformed. Callers always get either a validated
RiskProfile or an explicit "unavailable" result; nothing raised by the client
escapes ``GenerativeAugmenter.augment``.
"""

from __future__ import annotations

import asyncio
import json
import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from swms_risk.config import DEFAULT_GENERATION_TIMEOUT
from swms_risk.generators.generation_client import (
    AugmentationFailure,
    GenerationClient,
    GenerationRequest,
)
from swms_risk.generators.scoring import clamp_score
from swms_risk.models.risk import RiskProfile, new_record_id

DEFAULT_INITIAL_SCORE = 9
DEFAULT_RESIDUAL_SCORE = 4
DEFAULT_RESPONSIBLE = "Site Supervisor"
DEFAULT_INSPECTION_FREQUENCY = "Daily"

# response key -> (profile field, default builder, empty list allowed)
_LIST_FIELDS: Tuple[Tuple[str, str, Callable[[str], List[str]], bool], ...] = (
    (
        "hazards",
        "hazards",
        lambda a: [f"Manual handling risks from {a}", "Tool and equipment hazards", "Workplace hazards"],
        False,
    ),
    (
        "controlMeasures",
        "control_measures",
        lambda a: [f"Follow safe work procedures for {a}", "Use appropriate tools and equipment", "Conduct safety briefing"],
        False,
    ),
    (
        "legislation",
        "legislation",
        lambda a: ["Work Health and Safety Act 2011", "Work Health and Safety Regulation 2017"],
        False,
    ),
    (
        "ppe",
        "ppe",
        lambda a: ["Safety glasses", "Hard hat", "Safety boots", "High-vis clothing"],
        False,
    ),
    (
        "trainingRequired",
        "training_required",
        lambda a: ["Site induction", f"Tool operation training for {a}"],
        False,
    ),
    ("permitRequired", "permit_required", lambda a: [], True),
    (
        "emergencyProcedures",
        "emergency_procedures",
        lambda a: ["Stop work immediately", "Call emergency services: 000", "Notify site supervisor"],
        False,
    ),
    (
        "environmentalControls",
        "environmental_controls",
        lambda a: ["Proper waste disposal", "Dust control measures"],
        False,
    ),
)

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


@dataclass(slots=True)
class AugmentationResult:
    """Validated profile, or the reason augmentation was unavailable."""

    profile: Optional[RiskProfile] = None
    augmentation_id: Optional[str] = None
    replaced_fields: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    failure: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.profile is not None


def parse_generation_payload(raw: Any) -> Dict[str, Any]:
    """Decode a raw service response into a JSON object or raise AugmentationFailure."""
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if not isinstance(raw, str):
        raise AugmentationFailure(f"unexpected response type {type(raw).__name__}")
    text = _FENCE.sub("", raw.strip()).strip()
    if not text:
        raise AugmentationFailure("empty response")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise AugmentationFailure(f"response is not valid JSON: {exc.msg}") from exc
    if not isinstance(data, dict):
        raise AugmentationFailure("response JSON is not an object")
    return data


def _valid_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    items = [v.strip() for v in value if isinstance(v, str) and v.strip()]
    return items


def _valid_score(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return clamp_score(value)


def _valid_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def validate_generated_profile(
    activity: str,
    trade_type: str,
    payload: Dict[str, Any],
) -> Tuple[RiskProfile, List[str], List[str]]:
    """Sanitize an untrusted response into a RiskProfile.

    Returns ``(profile, replaced_fields, notes)`` where replaced_fields names every
    response key that was swapped for its default.
    """
    replaced: List[str] = []
    notes: List[str] = []
    values: Dict[str, Any] = {}

    for key, attr, default, allow_empty in _LIST_FIELDS:
        items = _valid_list(payload.get(key))
        if items is None or (not items and not allow_empty):
            if key in payload or not allow_empty:
                replaced.append(key)
            items = default(activity)
        values[attr] = items

    for key, attr, default_score in (
        ("initialRiskScore", "initial_risk_score", DEFAULT_INITIAL_SCORE),
        ("residualRiskScore", "residual_risk_score", DEFAULT_RESIDUAL_SCORE),
    ):
        raw = payload.get(key)
        score = _valid_score(raw)
        if score is None:
            replaced.append(key)
            score = default_score
        elif score != raw:
            notes.append(f"{key} {raw!r} adjusted to {score}")
        values[attr] = score

    responsible = _valid_text(payload.get("responsible"))
    if responsible is None:
        replaced.append("responsible")
        responsible = DEFAULT_RESPONSIBLE

    frequency = _valid_text(payload.get("inspectionFrequency"))
    if frequency is None:
        replaced.append("inspectionFrequency")
        frequency = DEFAULT_INSPECTION_FREQUENCY

    description = _valid_text(payload.get("description")) or (
        f"{activity} in the {trade_type} trade, assessed against Australian WHS requirements."
    )

    if values["residual_risk_score"] > values["initial_risk_score"]:
        notes.append(
            f"residual score {values['residual_risk_score']} exceeds initial score {values['initial_risk_score']}"
        )

    profile = RiskProfile(
        activity_name=activity,
        description=description,
        inspection_frequency=frequency,
        responsible_person=responsible,
        **values,
    )
    return profile, replaced, notes


class GenerativeAugmenter:
    """Requests a profile from the generation service for unresolved activities."""

    def __init__(
        self,
        client: GenerationClient,
        timeout_seconds: float = DEFAULT_GENERATION_TIMEOUT,
    ) -> None:
        self.client = client
        self.timeout_seconds = timeout_seconds

    async def augment(
        self,
        activity: str,
        trade_type: str,
        project_context: Optional[str] = None,
    ) -> AugmentationResult:
        request = GenerationRequest(activity=activity, trade_type=trade_type, project_context=project_context)
        try:
            raw = await asyncio.wait_for(self.client.generate(request), timeout=self.timeout_seconds)
            payload = parse_generation_payload(raw)
            profile, replaced, notes = validate_generated_profile(activity, trade_type, payload)
        except asyncio.TimeoutError:
            reason = f"timed out after {self.timeout_seconds:g}s"
            print(f"[augment] generation failed for '{activity}': {reason}")
            return AugmentationResult(failure=reason)
        except AugmentationFailure as exc:
            print(f"[augment] generation failed for '{activity}': {exc}")
            return AugmentationResult(failure=str(exc))
        except Exception as exc:  # untrusted client code: any error means unavailable
            reason = f"{type(exc).__name__}: {exc}"
            print(f"[augment] generation failed for '{activity}': {reason}")
            return AugmentationResult(failure=reason)

        if replaced:
            print(f"[augment] '{activity}': replaced invalid fields {', '.join(replaced)}")
        for note in notes:
            print(f"[augment] '{activity}': {note}")
        return AugmentationResult(
            profile=profile,
            augmentation_id=new_record_id("ai"),
            replaced_fields=replaced,
            notes=notes,
        )


__all__ = [
    "AugmentationResult",
    "DEFAULT_INITIAL_SCORE",
    "DEFAULT_RESIDUAL_SCORE",
    "GenerativeAugmenter",
    "parse_generation_payload",
    "validate_generated_profile",
]
