"""Data model for activity risk registers."""

from .risk import (
    Activity,
    BatchResult,
    Provenance,
    RegisterSummary,
    RiskAssessment,
    RiskProfile,
)
from swms_risk.generators.scoring import RiskLevel

__all__ = [
    "Activity",
    "BatchResult",
    "Provenance",
    "RegisterSummary",
    "RiskAssessment",
    "RiskLevel",
    "RiskProfile",
]
