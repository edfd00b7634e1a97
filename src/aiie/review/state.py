"""LangGraph state schema for a PA review run."""

from typing import Any, List, Optional, TypedDict
from datetime import datetime

from ..models import (
    PARequest,
    AIIEPrediction,
    AppealInputs,
    GoldCardStatus,
    ComplianceStatus,
    ComplianceResult,
    Decision,
    ReviewStatus,
)


class ReviewState(TypedDict, total=False):
    # Session context (ReviewSession); carries the ledger and evaluators
    session: Any
    request: PARequest
    now: datetime

    # Optional evaluator inputs
    payer_id: Optional[str]
    approval_rate: Optional[float]
    order_count: Optional[int]
    rate_history: Optional[List[float]]
    state_code: Optional[str]
    decision: Optional[Decision]
    appeal_inputs: Optional[AppealInputs]

    # Evaluator outputs
    prediction: AIIEPrediction
    post_denial_probability: Optional[float]
    gold_card_status: GoldCardStatus
    compliance_status: ComplianceStatus
    state_compliance: ComplianceResult

    workflow_status: ReviewStatus
