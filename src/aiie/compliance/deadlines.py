"""
CMS decision-deadline tracking.

Urgent requests must be decided within 72 hours and standard requests within
7 days. A tracker holds one request's deadline and classifies any instant
into safe / warning / critical / exceeded. For a fixed deadline the status
only escalates as time advances.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Union

from .. import config
from ..models import (
    ComplianceStatus,
    ComplianceStatusLabel,
    DeadlinePolicy,
    DeadlineUrgency,
    UrgencyLevel,
    ValidationUtils,
)

logger = logging.getLogger(__name__)

URGENT_WINDOW = timedelta(hours=72)
STANDARD_WINDOW = timedelta(hours=168)

# Tiered policy: (percentage used, remaining-time cutoff per urgency)
TIERED_CRITICAL_PERCENT = 85.0
TIERED_WARNING_PERCENT = 70.0
TIERED_CRITICAL_REMAINING = {
    DeadlineUrgency.URGENT: timedelta(hours=12),
    DeadlineUrgency.STANDARD: timedelta(hours=24),
}
TIERED_WARNING_REMAINING = {
    DeadlineUrgency.URGENT: timedelta(hours=24),
    DeadlineUrgency.STANDARD: timedelta(hours=72),
}

PERCENTAGE_ONLY_CRITICAL_PERCENT = 90.0
PERCENTAGE_ONLY_WARNING_PERCENT = 75.0

ESCALATION_ORDER = [
    ComplianceStatusLabel.SAFE,
    ComplianceStatusLabel.WARNING,
    ComplianceStatusLabel.CRITICAL,
    ComplianceStatusLabel.EXCEEDED,
]


def escalation_rank(status: Union[str, ComplianceStatusLabel]) -> int:
    """Position of a status in the escalation order (safe=0 .. exceeded=3)."""
    return ESCALATION_ORDER.index(ComplianceStatusLabel(status))


def resolve_deadline_urgency(urgency: Union[str, DeadlineUrgency, UrgencyLevel, None]) -> DeadlineUrgency:
    """Map a request urgency onto a CMS deadline class.

    Emergent requests use the urgent clock; routine and unknown values use the
    standard clock.
    """
    value = urgency.value if hasattr(urgency, "value") else (urgency or "")
    value = str(value).strip().lower()
    if value in (DeadlineUrgency.URGENT.value, UrgencyLevel.EMERGENT.value):
        return DeadlineUrgency.URGENT
    return DeadlineUrgency.STANDARD


def calculate_deadline(request_time: datetime, urgency: Union[str, DeadlineUrgency, UrgencyLevel]) -> datetime:
    """Deadline from request time: urgent=72h, standard=168h."""
    window = URGENT_WINDOW if resolve_deadline_urgency(urgency) == DeadlineUrgency.URGENT else STANDARD_WINDOW
    return ValidationUtils.ensure_utc(request_time) + window


def _classify_tiered(percentage_used: float, remaining: timedelta, urgency: DeadlineUrgency) -> ComplianceStatusLabel:
    if remaining <= timedelta(0) or percentage_used >= 100:
        return ComplianceStatusLabel.EXCEEDED
    if percentage_used >= TIERED_CRITICAL_PERCENT or remaining < TIERED_CRITICAL_REMAINING[urgency]:
        return ComplianceStatusLabel.CRITICAL
    if percentage_used >= TIERED_WARNING_PERCENT or remaining < TIERED_WARNING_REMAINING[urgency]:
        return ComplianceStatusLabel.WARNING
    return ComplianceStatusLabel.SAFE


def _classify_percentage_only(percentage_used: float, remaining: timedelta, urgency: DeadlineUrgency) -> ComplianceStatusLabel:
    if remaining <= timedelta(0):
        return ComplianceStatusLabel.EXCEEDED
    if percentage_used >= PERCENTAGE_ONLY_CRITICAL_PERCENT:
        return ComplianceStatusLabel.CRITICAL
    if percentage_used >= PERCENTAGE_ONLY_WARNING_PERCENT:
        return ComplianceStatusLabel.WARNING
    return ComplianceStatusLabel.SAFE


_CLASSIFIERS: Dict[DeadlinePolicy, Callable[[float, timedelta, DeadlineUrgency], ComplianceStatusLabel]] = {
    DeadlinePolicy.TIERED: _classify_tiered,
    DeadlinePolicy.PERCENTAGE_ONLY: _classify_percentage_only,
}


class ComplianceDeadlineTracker:
    """Tracks one request's CMS deadline."""

    def __init__(
        self,
        start_time: datetime,
        urgency: Union[str, DeadlineUrgency, UrgencyLevel],
        policy: Union[str, DeadlinePolicy, None] = None,
    ):
        self.start_time = ValidationUtils.ensure_utc(start_time)
        self.urgency = resolve_deadline_urgency(urgency)
        self.policy = DeadlinePolicy(policy or config.DEADLINE_POLICY)
        self.deadline = calculate_deadline(self.start_time, self.urgency)
        self.last_polled_at: Optional[datetime] = None
        self.last_status: Optional[ComplianceStatus] = None

    @property
    def window(self) -> timedelta:
        return self.deadline - self.start_time

    def evaluate(self, now: datetime) -> ComplianceStatus:
        """Classify the deadline state at ``now``. Pure; safe to call repeatedly."""
        now = ValidationUtils.ensure_utc(now)
        total = self.window
        remaining = self.deadline - now
        elapsed = now - self.start_time
        percentage_used = (elapsed / total) * 100 if total > timedelta(0) else 100.0

        status = _CLASSIFIERS[self.policy](percentage_used, remaining, self.urgency)
        return ComplianceStatus(
            status=status,
            time_remaining=max(timedelta(0), remaining),
            percentage_used=round(percentage_used, 1),
            deadline=self.deadline,
            evaluated_at=now,
            is_compliant=status != ComplianceStatusLabel.EXCEEDED,
        )

    def poll(self, now: datetime) -> ComplianceStatus:
        """Re-evaluate at ``now`` and remember the result, logging escalations."""
        current = self.evaluate(now)
        previous = self.last_status
        if previous is not None and escalation_rank(current.status) < escalation_rank(previous.status):
            logger.warning(
                f"Deadline poll at {current.evaluated_at.isoformat()} precedes the previous poll; "
                f"status {previous.status} -> {current.status}"
            )
        elif previous is not None and previous.status != current.status:
            logger.info(
                f"Deadline status escalated {previous.status} -> {current.status} "
                f"({current.percentage_used}% used, deadline {self.deadline.isoformat()})"
            )
        if current.status == ComplianceStatusLabel.EXCEEDED and (
            previous is None or previous.status != ComplianceStatusLabel.EXCEEDED
        ):
            logger.warning(f"CMS decision deadline {self.deadline.isoformat()} exceeded")

        self.last_polled_at = current.evaluated_at
        self.last_status = current
        return current


def track_compliance(
    start_time: datetime,
    urgency: Union[str, DeadlineUrgency, UrgencyLevel],
    now: datetime,
    policy: Union[str, DeadlinePolicy, None] = None,
) -> ComplianceStatus:
    """Deadline status of a request received at ``start_time``, evaluated at ``now``."""
    return ComplianceDeadlineTracker(start_time, urgency, policy).evaluate(now)
