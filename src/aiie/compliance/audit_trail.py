"""Append-only audit trail for a single PA review session."""

import copy
import logging
from datetime import datetime, UTC
from typing import Callable, Dict, Any, Optional, List, Iterable, Union
import json

from .. import config
from ..models import (
    AuditActor,
    ActorDetails,
    AIInvolvement,
    AuditEntry,
    AuditReport,
    AuditSummary,
    ComplianceCheck,
    ComplianceCheckStatus,
)


AUDIT_LOGGER_NAME = "aiie.audit"


def default_compliance_checks() -> List[ComplianceCheck]:
    """Fresh copies of the three pending workflow checks."""
    return [ComplianceCheck(**check) for check in config.DEFAULT_COMPLIANCE_CHECKS]


class AuditTrailRecorder:
    """Audit ledger of every computation and human action on one PA request.

    Entries are only ever appended; ``reset`` is the single way to clear them.
    One recorder belongs to one review session and has a single writer. All
    recorders share the ``aiie.audit`` logger; each line carries its request id.
    """

    def __init__(
        self,
        request_id: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
        initial_checks: Optional[List[ComplianceCheck]] = None,
        required_compliance_ids: Optional[Iterable[str]] = None,
    ):
        """Initialize the audit trail recorder."""
        self.logger = logging.getLogger(AUDIT_LOGGER_NAME)
        self.logger.setLevel(config.AUDIT_LOG_LEVEL)
        self.request_id = request_id

        self._clock = clock or (lambda: datetime.now(UTC))
        self._initial_checks = [c.model_copy() for c in initial_checks] if initial_checks else None
        self.required_compliance_ids = list(
            required_compliance_ids if required_compliance_ids is not None
            else config.DEFAULT_REQUIRED_COMPLIANCE_IDS
        )

        self._entries: List[AuditEntry] = []
        self._compliance_checks: List[ComplianceCheck] = self._fresh_checks()

        # Configure structured logging
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def _fresh_checks(self) -> List[ComplianceCheck]:
        if self._initial_checks:
            return [c.model_copy() for c in self._initial_checks]
        return default_compliance_checks()

    @property
    def entries(self) -> List[AuditEntry]:
        """Entries in append order (deep copies)."""
        return [e.model_copy(deep=True) for e in self._entries]

    @property
    def compliance_checks(self) -> List[ComplianceCheck]:
        """Current compliance checks (copies)."""
        return [c.model_copy() for c in self._compliance_checks]

    def add_entry(
        self,
        action: str,
        payload: Optional[Dict[str, Any]] = None,
        actor: Union[AuditActor, str] = AuditActor.SYSTEM,
        actor_details: Optional[Union[ActorDetails, Dict[str, Any]]] = None,
        ai_involvement: Optional[Union[AIInvolvement, Dict[str, Any]]] = None,
    ) -> AuditEntry:
        """Append a timestamped entry. Existing entries are never touched."""
        data = copy.deepcopy(payload) if payload else {}
        data["_type"] = action

        entry = AuditEntry(
            timestamp=self._clock(),
            action=action,
            actor=actor,
            actor_details=actor_details,
            data=data,
            ai_involvement=ai_involvement,
        )
        self._entries.append(entry)

        # Log to structured logger
        log_data = {
            'request_id': self.request_id,
            'timestamp': entry.timestamp.isoformat(),
            'action': entry.action,
            'actor': entry.actor,
            'actor_details': entry.actor_details.model_dump() if entry.actor_details else None,
            'ai_involvement': entry.ai_involvement.model_dump() if entry.ai_involvement else None,
            'data': entry.data,
        }
        self.logger.info(f"AUDIT: {json.dumps(log_data, default=str)}")

        return entry.model_copy(deep=True)

    def log_computation(
        self,
        action: str,
        result: Dict[str, Any],
        ai_involvement: Optional[AIInvolvement] = None,
    ) -> AuditEntry:
        """Log an engine computation; attributed to the AI when it carries an AI record."""
        return self.add_entry(
            action,
            result,
            actor=AuditActor.AI if ai_involvement else AuditActor.SYSTEM,
            ai_involvement=ai_involvement,
        )

    def log_human_action(
        self,
        action: str,
        reviewer: Union[ActorDetails, Dict[str, Any]],
        payload: Optional[Dict[str, Any]] = None,
    ) -> AuditEntry:
        """Log an action taken by a human reviewer."""
        return self.add_entry(action, payload, actor=AuditActor.HUMAN, actor_details=reviewer)

    def update_check(
        self,
        check_id: str,
        status: Union[ComplianceCheckStatus, str],
        message: Optional[str] = None,
    ) -> ComplianceCheck:
        """Set the status of an existing compliance check in place."""
        for check in self._compliance_checks:
            if check.id == check_id:
                check.status = status
                if message is not None:
                    check.message = message
                return check.model_copy()
        raise ValueError(f"Unknown compliance check: {check_id}")

    def set_compliance_checks(self, checks: List[ComplianceCheck]) -> None:
        """Replace the full compliance check list."""
        self._compliance_checks = [c.model_copy() for c in checks]

    @property
    def is_complete(self) -> bool:
        """True when every required check present has passed (and at least one is present)."""
        required = [c for c in self._compliance_checks if c.id in self.required_compliance_ids]
        return len(required) > 0 and all(c.status == ComplianceCheckStatus.PASS for c in required)

    def export_trail(self) -> AuditReport:
        """Snapshot of entries, checks and derived counts, computed on every call."""
        by_actor = {actor.value: 0 for actor in AuditActor}
        for entry in self._entries:
            by_actor[entry.actor] += 1

        checks = self.compliance_checks
        return AuditReport(
            exported_at=self._clock(),
            entries=[e.model_copy(deep=True) for e in self._entries],
            compliance_status=checks,
            summary=AuditSummary(
                total_entries=len(self._entries),
                by_actor=by_actor,
                compliance_passed=sum(1 for c in checks if c.status == ComplianceCheckStatus.PASS),
                compliance_failed=sum(1 for c in checks if c.status == ComplianceCheckStatus.FAIL),
            ),
        )

    def get_entries(
        self,
        actor: Optional[Union[AuditActor, str]] = None,
        action: Optional[str] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None
    ) -> List[AuditEntry]:
        """Retrieve audit entries based on filters."""
        filtered_entries = self._entries

        if actor:
            filtered_entries = [e for e in filtered_entries if e.actor == actor]

        if action:
            filtered_entries = [e for e in filtered_entries if e.action == action]

        if start_time:
            filtered_entries = [e for e in filtered_entries if e.timestamp >= start_time]

        if end_time:
            filtered_entries = [e for e in filtered_entries if e.timestamp <= end_time]

        return [e.model_copy(deep=True) for e in filtered_entries]

    def reset(self) -> None:
        """Clear all entries and restore the pending compliance checks."""
        self._entries = []
        self._compliance_checks = self._fresh_checks()
        self.logger.info("AUDIT: trail reset")
