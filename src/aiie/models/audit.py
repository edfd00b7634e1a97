"""Audit trail models for the AIIE engine."""

from typing import List, Optional, Dict, Any
from datetime import datetime, UTC
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum


class AuditActor(str, Enum):
    """Who performed an audited action."""
    SYSTEM = "system"
    AI = "ai"
    HUMAN = "human"


class ComplianceCheckStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    NA = "na"


class ActorDetails(BaseModel):
    """Identity of the actor, mostly for human reviewers."""
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    credentials: Optional[str] = None
    specialty: Optional[str] = None


class AIInvolvement(BaseModel):
    """Record of the AI contribution to an action."""
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model: Optional[str] = None
    confidence: Optional[float] = None
    recommendation: Optional[str] = None
    rationale: Optional[str] = None


class AuditEntry(BaseModel):
    """Audit trail entry. Entries are never edited once appended."""
    model_config = ConfigDict(use_enum_values=True, frozen=True)

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC), description="When the action occurred")
    action: str = Field(..., description="Action label")
    actor: AuditActor = Field(default=AuditActor.SYSTEM, description="Who performed the action")
    actor_details: Optional[ActorDetails] = Field(None, description="Actor identity")
    data: Dict[str, Any] = Field(default_factory=dict, description="Structured payload")
    ai_involvement: Optional[AIInvolvement] = Field(None, description="AI contribution, if any")


class ComplianceCheck(BaseModel):
    """A workflow compliance check, updated in place as the review progresses."""
    model_config = ConfigDict(use_enum_values=True, validate_assignment=True)

    id: str = Field(..., description="Check identifier")
    rule: str = Field(..., description="Rule description")
    status: ComplianceCheckStatus = Field(default=ComplianceCheckStatus.NA)
    message: Optional[str] = Field("Pending", description="Status detail")


class AuditSummary(BaseModel):
    """Counts derived at export time."""
    total_entries: int
    by_actor: Dict[str, int]
    compliance_passed: int
    compliance_failed: int


class AuditReport(BaseModel):
    """Export-time snapshot of the audit trail."""
    model_config = ConfigDict(frozen=True)

    exported_at: datetime
    entries: List[AuditEntry]
    compliance_status: List[ComplianceCheck]
    summary: AuditSummary
