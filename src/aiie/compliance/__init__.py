"""Compliance engine and audit trail management."""

from .audit_trail import AuditTrailRecorder, default_compliance_checks
from .deadlines import (
    ComplianceDeadlineTracker,
    calculate_deadline,
    escalation_rank,
    resolve_deadline_urgency,
    track_compliance,
)
from .state_law import StateLawChecker, check_state_compliance

__all__ = [
    "AuditTrailRecorder",
    "default_compliance_checks",
    "ComplianceDeadlineTracker",
    "calculate_deadline",
    "escalation_rank",
    "resolve_deadline_urgency",
    "track_compliance",
    "StateLawChecker",
    "check_state_compliance",
]
