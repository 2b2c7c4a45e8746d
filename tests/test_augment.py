from __future__ import annotations

import asyncio
import json

import pytest

from swms_risk.generators.augment import (
    GenerativeAugmenter,
    parse_generation_payload,
    validate_generated_profile,
)
from swms_risk.generators.generation_client import AugmentationFailure, GenerationRequest, build_prompt

from .fakes import FakeClient, valid_payload

ACTIVITY = "Underwater basket weaving"


def _augment(client, timeout: float = 1.0):
    augmenter = GenerativeAugmenter(client, timeout_seconds=timeout)
    return asyncio.run(augmenter.augment(ACTIVITY, "Carpentry", "Aquatic centre fit-out"))


def test_valid_response_is_kept():
    client = FakeClient()
    result = _augment(client)
    assert result.available
    assert result.replaced_fields == []
    assert result.augmentation_id.startswith("ai-")
    profile = result.profile
    assert profile.activity_name == ACTIVITY
    assert profile.hazards == ["Entanglement in loom mechanisms", "Drowning"]
    assert profile.responsible_person == "Dive Supervisor"
    assert profile.initial_risk_score == 14
    assert client.calls[0].project_context == "Aquatic centre fit-out"


def test_invalid_fields_are_replaced_individually():
    payload = valid_payload(
        hazards="not a list",
        controlMeasures=[],
        initialRiskScore="high",
        residualRiskScore=42,
        responsible=7,
        ppe=[1, " ", "Gloves"],
    )
    del payload["legislation"]
    profile, replaced, notes = validate_generated_profile(ACTIVITY, "Carpentry", payload)

    assert profile.hazards[0] == f"Manual handling risks from {ACTIVITY}"
    assert profile.control_measures[0] == f"Follow safe work procedures for {ACTIVITY}"
    assert profile.legislation == ["Work Health and Safety Act 2011", "Work Health and Safety Regulation 2017"]
    assert profile.initial_risk_score == 9
    assert profile.residual_risk_score == 20
    assert profile.responsible_person == "Site Supervisor"
    assert profile.ppe == ["Gloves"]
    # untouched fields survive
    assert profile.training_required == ["Occupational diver certification"]
    assert set(replaced) >= {"hazards", "controlMeasures", "legislation", "initialRiskScore", "responsible"}
    assert "ppe" not in replaced
    assert any("exceeds initial" in note for note in notes)


def test_scores_are_rounded_and_clamped():
    profile, replaced, _ = validate_generated_profile(
        ACTIVITY, "Carpentry", valid_payload(initialRiskScore=12.6, residualRiskScore=-4)
    )
    assert profile.initial_risk_score == 13
    assert profile.residual_risk_score == 1
    assert replaced == []


def test_huge_integer_score_is_clamped_not_fatal():
    result = _augment(FakeClient({ACTIVITY: valid_payload(initialRiskScore=10**400, residualRiskScore=-(10**400))}))
    assert result.available
    assert result.profile.initial_risk_score == 20
    assert result.profile.residual_risk_score == 1
    assert result.profile.hazards == ["Entanglement in loom mechanisms", "Drowning"]
    assert result.replaced_fields == []


def test_non_finite_float_score_defaults():
    profile, replaced, _ = validate_generated_profile(
        ACTIVITY, "Carpentry", valid_payload(initialRiskScore=float("inf"), residualRiskScore=float("nan"))
    )
    assert (profile.initial_risk_score, profile.residual_risk_score) == (9, 4)
    assert {"initialRiskScore", "residualRiskScore"} <= set(replaced)


def test_boolean_and_missing_scores_default():
    payload = valid_payload(initialRiskScore=True)
    del payload["residualRiskScore"]
    profile, replaced, _ = validate_generated_profile(ACTIVITY, "Carpentry", payload)
    assert (profile.initial_risk_score, profile.residual_risk_score) == (9, 4)
    assert {"initialRiskScore", "residualRiskScore"} <= set(replaced)


def test_missing_permits_mean_none_required():
    payload = valid_payload()
    del payload["permitRequired"]
    profile, replaced, _ = validate_generated_profile(ACTIVITY, "Carpentry", payload)
    assert profile.permit_required == []
    assert "permitRequired" not in replaced


def test_fenced_json_text_is_accepted():
    text = "```json\n" + json.dumps(valid_payload()) + "\n```"
    assert parse_generation_payload(text)["responsible"] == "Dive Supervisor"


@pytest.mark.parametrize("raw", ["not json at all", "[1, 2, 3]", "", 17, None])
def test_unparseable_responses_raise(raw):
    with pytest.raises(AugmentationFailure):
        parse_generation_payload(raw)


@pytest.mark.parametrize("response", ["<html>502</html>", ["hazards"], RuntimeError("connection reset")])
def test_failures_are_reported_not_raised(response):
    result = _augment(FakeClient({ACTIVITY: response}))
    assert not result.available
    assert result.profile is None
    assert result.failure


def test_timeout_is_reported_not_raised():
    result = _augment(FakeClient(delay=0.5), timeout=0.01)
    assert not result.available
    assert "timed out" in result.failure


def test_prompt_names_activity_and_trade():
    prompt = build_prompt(GenerationRequest(activity=ACTIVITY, trade_type="Carpentry"))
    assert f'"{ACTIVITY}"' in prompt
    assert "Carpentry" in prompt
    assert "General construction project in Australia" in prompt
