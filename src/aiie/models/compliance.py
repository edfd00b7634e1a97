"""Data models for CMS deadline tracking and state AI-law checks."""

from typing import List, Optional
from datetime import datetime, timedelta
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum


class ComplianceStatusLabel(str, Enum):
    """Deadline escalation levels, in escalation order."""
    SAFE = "safe"
    WARNING = "warning"
    CRITICAL = "critical"
    EXCEEDED = "exceeded"


class DeadlineUrgency(str, Enum):
    """CMS decision-time class."""
    URGENT = "urgent"
    STANDARD = "standard"


class DeadlinePolicy(str, Enum):
    """Escalation threshold sets."""
    TIERED = "tiered"
    PERCENTAGE_ONLY = "percentage_only"


class ComplianceStatus(BaseModel):
    """Deadline state of one request at one instant."""
    model_config = ConfigDict(use_enum_values=True, frozen=True)

    status: ComplianceStatusLabel
    time_remaining: timedelta = Field(..., description="Floored at zero")
    percentage_used: float = Field(..., description="May exceed 100 on overrun")
    deadline: datetime
    evaluated_at: datetime
    is_compliant: bool


class Decision(BaseModel):
    """How a PA decision was reached, for state AI-law checks."""
    used_ai: bool = False
    had_human_review: bool = False
    was_automated: bool = False
    patient_notified: bool = False
    explainability_provided: bool = False


class StateRequirement(BaseModel):
    """A state's AI / prior-auth rule set."""
    model_config = ConfigDict(frozen=True)

    name: str
    rule: str
    requirements: List[str] = Field(default_factory=list)


class StateComplianceLabel(str, Enum):
    COMPLIANT = "compliant"
    NON_COMPLIANT = "non_compliant"
    NOT_APPLICABLE = "not_applicable"


class ComplianceResult(BaseModel):
    """Result of checking a decision against a state's requirements."""
    model_config = ConfigDict(use_enum_values=True, frozen=True)

    compliant: bool
    status: StateComplianceLabel
    requirements: List[str] = Field(default_factory=list)
    gaps: List[str] = Field(default_factory=list)
    state_code: str = ""
    state_rule: Optional[str] = None
    state_name: Optional[str] = None
