"""AIIE: prior-authorization decision and compliance engine for advanced imaging."""

from .scoring import (
    DenialRiskScorer,
    AppealOverturnEstimator,
    score_denial_risk,
    estimate_appeal_overturn,
    calculate_appeal_cost_savings,
)

from .eligibility import (
    GoldCardEligibilityEvaluator,
    evaluate_gold_card,
)

from .compliance import (
    AuditTrailRecorder,
    ComplianceDeadlineTracker,
    StateLawChecker,
    track_compliance,
    check_state_compliance,
)

from .review import ReviewSession

__all__ = [
    "DenialRiskScorer",
    "AppealOverturnEstimator",
    "score_denial_risk",
    "estimate_appeal_overturn",
    "calculate_appeal_cost_savings",
    "GoldCardEligibilityEvaluator",
    "evaluate_gold_card",
    "AuditTrailRecorder",
    "ComplianceDeadlineTracker",
    "StateLawChecker",
    "track_compliance",
    "check_state_compliance",
    "ReviewSession",
]
