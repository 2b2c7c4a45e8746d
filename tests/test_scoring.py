from __future__ import annotations

import pytest

from swms_risk.generators.scoring import RiskLevel, clamp_score, classify
from swms_risk.models import Activity, Provenance, RiskAssessment, RiskProfile


@pytest.mark.parametrize(
    "score,expected",
    [
        (1, RiskLevel.low),
        (5, RiskLevel.low),
        (6, RiskLevel.medium),
        (10, RiskLevel.medium),
        (11, RiskLevel.high),
        (15, RiskLevel.high),
        (16, RiskLevel.extreme),
        (20, RiskLevel.extreme),
    ],
)
def test_classify_boundaries(score, expected):
    assert classify(score) is expected


def test_out_of_range_scores_are_clamped_first():
    assert clamp_score(0) == 1
    assert clamp_score(-7) == 1
    assert clamp_score(99) == 20
    assert clamp_score(10.6) == 11
    assert clamp_score(10**400) == 20
    assert clamp_score(-(10**400)) == 1
    assert classify(0) is RiskLevel.low
    assert classify(42) is RiskLevel.extreme


def test_classification_is_monotonic():
    levels = [classify(score) for score in range(-3, 25)]
    for lower, higher in zip(levels, levels[1:]):
        assert lower <= higher


def test_levels_order_by_rank():
    assert RiskLevel.low < RiskLevel.medium < RiskLevel.high < RiskLevel.extreme
    assert max([RiskLevel.medium, RiskLevel.extreme, RiskLevel.low]) is RiskLevel.extreme
    assert RiskLevel.high.value == "High"


def test_initial_and_residual_share_thresholds():
    for score in range(1, 21):
        profile = RiskProfile(
            activity_name="Test",
            hazards=["h"],
            control_measures=["c"],
            initial_risk_score=score,
            residual_risk_score=score,
        )
        assessment = RiskAssessment(
            id="t",
            activity=Activity(label="Test"),
            profile=profile,
            provenance=Provenance.fallback,
        )
        assert assessment.initial_risk_level is assessment.residual_risk_level


def test_profile_clamps_scores_on_construction():
    profile = RiskProfile(
        activity_name="Test",
        hazards=["h"],
        control_measures=["c"],
        initial_risk_score=27,
        residual_risk_score=0,
    )
    assert profile.initial_risk_score == 20
    assert profile.residual_risk_score == 1


def test_profile_rejects_empty_hazards():
    with pytest.raises(ValueError):
        RiskProfile(
            activity_name="Test",
            hazards=["  "],
            control_measures=["c"],
            initial_risk_score=5,
            residual_risk_score=2,
        )
