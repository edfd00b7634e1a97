"""Review session: one PA request, its audit ledger and its deadline clock."""

import logging
from datetime import datetime, UTC
from typing import Callable, Dict, Any, Iterable, List, Optional, Union

from ..compliance import AuditTrailRecorder, ComplianceDeadlineTracker, StateLawChecker
from ..eligibility import GoldCardEligibilityEvaluator
from ..models import (
    ActorDetails,
    AIIEPrediction,
    AppealInputs,
    ComplianceCheck,
    ComplianceCheckStatus,
    ComplianceStatus,
    Decision,
    DeadlinePolicy,
    EligibilityHistoryItem,
    PARequest,
    ReviewStatus,
    ValidationUtils,
)
from ..scoring import AppealOverturnEstimator, DenialRiskScorer
from .state import ReviewState
from .workflow import get_workflow

logger = logging.getLogger(__name__)


class ReviewSession:
    """Holds everything that belongs to a single review.

    Sessions share nothing with each other: each owns its ledger, its deadline
    tracker and (unless injected) its own evaluators. A session has a single
    writer; callers reviewing several requests concurrently use one session
    per request.
    """

    def __init__(
        self,
        request: PARequest,
        received_at: Optional[datetime] = None,
        clock: Optional[Callable[[], datetime]] = None,
        deadline_policy: Union[str, DeadlinePolicy, None] = None,
        compliance_checks: Optional[List[ComplianceCheck]] = None,
        required_compliance_ids: Optional[Iterable[str]] = None,
        scorer: Optional[DenialRiskScorer] = None,
        appeal_estimator: Optional[AppealOverturnEstimator] = None,
        gold_card_evaluator: Optional[GoldCardEligibilityEvaluator] = None,
        state_law_checker: Optional[StateLawChecker] = None,
    ):
        self.request = request
        self.clock = clock or (lambda: datetime.now(UTC))
        self.received_at = ValidationUtils.ensure_utc(received_at or self.clock())

        self.appeal_estimator = appeal_estimator or AppealOverturnEstimator()
        self.scorer = scorer or DenialRiskScorer(appeal_estimator=self.appeal_estimator)
        self.gold_card_evaluator = gold_card_evaluator or GoldCardEligibilityEvaluator()
        self.state_law_checker = state_law_checker or StateLawChecker()

        self.audit_trail = AuditTrailRecorder(
            request_id=request.id,
            clock=self.clock,
            initial_checks=compliance_checks,
            required_compliance_ids=required_compliance_ids,
        )
        self.deadline_tracker = ComplianceDeadlineTracker(
            self.received_at, request.urgency, deadline_policy
        )

        self.prediction: Optional[AIIEPrediction] = None
        self.human_reviewed = False
        self.patient_notified = False
        self.status: Optional[ReviewStatus] = None

    def run(
        self,
        now: Optional[datetime] = None,
        payer_id: Optional[str] = None,
        approval_rate: Optional[float] = None,
        order_count: Optional[int] = None,
        rate_history: Optional[List[Union[float, EligibilityHistoryItem]]] = None,
        state_code: Optional[str] = None,
        decision: Optional[Union[Decision, Dict[str, Any]]] = None,
        appeal_inputs: Optional[Union[AppealInputs, Dict[str, Any]]] = None,
    ) -> ReviewState:
        """Run the review workflow once and return its final state.

        Gold-card evaluation runs only when payer, rate and order count are all
        given; the state-law check runs only when a state code is given.
        """
        if isinstance(decision, dict):
            decision = Decision.model_validate(decision)
        if isinstance(appeal_inputs, dict):
            appeal_inputs = AppealInputs.model_validate(appeal_inputs)

        initial_state: ReviewState = {
            "session": self,
            "request": self.request,
            "now": ValidationUtils.ensure_utc(now or self.clock()),
            "payer_id": payer_id,
            "approval_rate": approval_rate,
            "order_count": order_count,
            "rate_history": rate_history,
            "state_code": state_code,
            "decision": decision,
            "appeal_inputs": appeal_inputs,
        }
        final_state = get_workflow().invoke(initial_state)
        self.status = final_state["workflow_status"]
        return final_state

    def poll_deadline(self, now: Optional[datetime] = None) -> ComplianceStatus:
        """Re-evaluate the CMS deadline at ``now`` (defaults to the session clock)."""
        return self.deadline_tracker.poll(now or self.clock())

    def record_human_review(
        self,
        reviewer: Union[ActorDetails, Dict[str, Any]],
        approved: bool,
        notes: Optional[str] = None,
        documentation_reviewed: bool = True,
    ) -> None:
        """Record a clinician's sign-off and update the dependent checks."""
        if isinstance(reviewer, dict):
            reviewer = ActorDetails.model_validate(reviewer)

        self.audit_trail.log_human_action(
            "human_review_recorded",
            reviewer,
            {
                "approved": approved,
                "notes": notes,
                "documentation_reviewed": documentation_reviewed,
                "ai_recommendation": self.prediction.recommended_action if self.prediction else None,
            },
        )
        self.human_reviewed = True

        if documentation_reviewed:
            self.audit_trail.update_check(
                "doc-review", ComplianceCheckStatus.PASS, f"Reviewed by {reviewer.name or 'reviewer'}"
            )
        self.audit_trail.update_check(
            "human-sign-off",
            ComplianceCheckStatus.PASS,
            "Approved" if approved else "Signed off with denial",
        )

        if self.status is not None and self.can_finalize:
            self.status = ReviewStatus.COMPLETE
            self.audit_trail.add_entry("review_completed", {"request_id": self.request.id})
            logger.info(f"Review of {self.request.id} complete")

    def record_patient_notification(self, channel: str = "letter") -> None:
        self.patient_notified = True
        self.audit_trail.add_entry(
            "patient_notified", {"request_id": self.request.id, "channel": channel}
        )

    def default_decision(self) -> Decision:
        """Describe how this session's decision was reached so far."""
        used_ai = self.prediction is not None
        return Decision(
            used_ai=used_ai,
            had_human_review=self.human_reviewed,
            was_automated=used_ai and not self.human_reviewed,
            patient_notified=self.patient_notified,
            explainability_provided=used_ai and len(self.prediction.factors) > 0,
        )

    @property
    def can_finalize(self) -> bool:
        return self.audit_trail.is_complete

    def reset(self) -> None:
        """Clear the ledger and review progress; the deadline clock is kept."""
        self.audit_trail.reset()
        self.prediction = None
        self.human_reviewed = False
        self.patient_notified = False
        self.status = None
