from __future__ import annotations

import datetime as _dt
import enum
import uuid
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from swms_risk.generators.scoring import RiskLevel, classify, clamp_score


def new_record_id(prefix: str) -> str:
    """Time-based id with a random suffix, e.g. ``ai-1752049598074-3f9c2a1be``."""
    millis = int(_dt.datetime.now(_dt.timezone.utc).timestamp() * 1000)
    return f"{prefix}-{millis}-{uuid.uuid4().hex[:9]}"


def clean_text_list(value: Any) -> Any:
    """Strip list items and drop blanks; non-lists are left for pydantic to reject."""
    if not isinstance(value, (list, tuple)):
        return value
    out: List[str] = []
    for item in value:
        if not isinstance(item, str):
            continue
        s = item.strip()
        if s:
            out.append(s)
    return out


class Provenance(str, enum.Enum):
    knowledge_base = "KnowledgeBase"
    augmented = "Augmented"
    fallback = "Fallback"


class Activity(BaseModel):
    """A requested work activity as supplied by the caller."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    label: str
    trade_hint: Optional[str] = None
    project_context: Optional[str] = None

    @field_validator("label")
    @classmethod
    def _label_not_blank(cls, value: str) -> str:
        s = value.strip()
        if not s:
            raise ValueError("activity label must not be blank")
        return s


class RiskProfile(BaseModel):
    """Hazard/control/compliance template for one activity."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    activity_name: str
    description: str = ""
    hazards: List[str] = Field(min_length=1)
    control_measures: List[str] = Field(min_length=1)
    ppe: List[str] = Field(default_factory=list)
    training_required: List[str] = Field(default_factory=list)
    legislation: List[str] = Field(default_factory=list)
    permit_required: List[str] = Field(default_factory=list)
    inspection_frequency: str = "Daily"
    emergency_procedures: List[str] = Field(default_factory=list)
    environmental_controls: List[str] = Field(default_factory=list)
    initial_risk_score: int
    residual_risk_score: int
    responsible_person: str = "Site Supervisor"

    @field_validator(
        "hazards",
        "control_measures",
        "ppe",
        "training_required",
        "legislation",
        "permit_required",
        "emergency_procedures",
        "environmental_controls",
        mode="before",
    )
    @classmethod
    def _strip_items(cls, value: Any) -> Any:
        return clean_text_list(value)

    @field_validator("initial_risk_score", "residual_risk_score", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("risk score must be numeric")
        if isinstance(value, (int, float)):
            return clamp_score(value)
        return value

    def rebound(self, activity_name: str) -> "RiskProfile":
        """Copy of this profile carrying the caller's activity wording."""
        return self.model_copy(update={"activity_name": activity_name}, deep=True)


class RiskAssessment(BaseModel):
    """A RiskProfile bound to one requested activity, with derived levels."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    activity: Activity
    profile: RiskProfile
    provenance: Provenance
    matched_key: Optional[str] = None
    notes: List[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def initial_risk_level(self) -> RiskLevel:
        return classify(self.profile.initial_risk_score)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def residual_risk_level(self) -> RiskLevel:
        return classify(self.profile.residual_risk_score)

    @property
    def hazards(self) -> List[str]:
        return self.profile.hazards

    @property
    def control_measures(self) -> List[str]:
        return self.profile.control_measures

    @property
    def legislation(self) -> List[str]:
        return self.profile.legislation


class RegisterSummary(BaseModel):
    """Roll-up of a batch used on the register's cover page."""

    total: int = 0
    initial_level_counts: Dict[str, int] = Field(default_factory=dict)
    residual_level_counts: Dict[str, int] = Field(default_factory=dict)
    highest_initial_level: Optional[RiskLevel] = None
    highest_residual_level: Optional[RiskLevel] = None
    provenance_counts: Dict[str, int] = Field(default_factory=dict)
    ppe: List[str] = Field(default_factory=list)
    training_required: List[str] = Field(default_factory=list)
    permits_required: List[str] = Field(default_factory=list)


class BatchResult(BaseModel):
    """Ordered output of one batch run."""

    assessments: List[RiskAssessment] = Field(default_factory=list)
    requested: int = 0
    partial: bool = False
    compliance_codes: List[str] = Field(default_factory=list)

    @property
    def completed(self) -> int:
        return len(self.assessments)
