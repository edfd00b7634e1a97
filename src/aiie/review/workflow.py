"""LangGraph review workflow: runs the engine over one request and audits each step."""

import logging
from typing import Literal, Optional

from langgraph.graph import StateGraph, END
from langgraph.graph.state import CompiledStateGraph

from .. import config
from ..models import (
    AIInvolvement,
    ComplianceCheckStatus,
    ComplianceStatusLabel,
    RiskCategory,
    ReviewStatus,
)
from .state import ReviewState

logger = logging.getLogger(__name__)

_workflow: Optional[CompiledStateGraph] = None


def intake_node(state: ReviewState) -> ReviewState:
    session = state["session"]
    request = state["request"]
    logger.info(f"Starting review of {request.id} ({request.modality}, {request.urgency})")

    session.audit_trail.add_entry(
        "request_received",
        {
            "request_id": request.id,
            "modality": request.modality,
            "urgency": request.urgency,
            "received_at": session.received_at.isoformat(),
            "deadline": session.deadline_tracker.deadline.isoformat(),
        },
    )
    return {"workflow_status": ReviewStatus.INTAKE}


def score_node(state: ReviewState) -> ReviewState:
    session = state["session"]
    prediction = session.scorer.score(state["request"])
    session.prediction = prediction

    top_factors = [f.name for f in prediction.factors[:3]]
    session.audit_trail.log_computation(
        "denial_risk_scored",
        {
            "denial_risk_score": prediction.denial_risk_score,
            "risk_category": prediction.risk_category,
            "recommended_action": prediction.recommended_action,
            "confidence_score": prediction.confidence_score,
            "factor_ids": [f.id for f in prediction.factors],
        },
        ai_involvement=AIInvolvement(
            model=config.MODEL_ID,
            confidence=prediction.confidence_score,
            recommendation=prediction.recommended_action,
            rationale=f"Top factors: {', '.join(top_factors)}" if top_factors else None,
        ),
    )
    return {"prediction": prediction, "workflow_status": ReviewStatus.SCORED}


def appeal_node(state: ReviewState) -> ReviewState:
    session = state["session"]
    prediction = state["prediction"]

    post_denial = None
    appeal_inputs = state.get("appeal_inputs")
    if appeal_inputs is not None:
        post_denial = session.appeal_estimator.overturn_probability(appeal_inputs)

    session.audit_trail.log_computation(
        "appeal_overturn_estimated",
        {
            "pre_denial_probability": prediction.appeal_overturn_probability,
            "post_denial_probability": post_denial,
        },
    )
    return {"post_denial_probability": post_denial, "workflow_status": ReviewStatus.APPEAL_ESTIMATED}


def gold_card_node(state: ReviewState) -> ReviewState:
    session = state["session"]
    status = session.gold_card_evaluator.evaluate(
        state["approval_rate"],
        state["order_count"],
        state["payer_id"],
        history=state.get("rate_history"),
        now=state["now"],
    )
    session.audit_trail.log_computation(
        "gold_card_evaluated",
        {
            "payer_id": status.payer_id,
            "payer_matched": status.resolution.matched,
            "eligible": status.eligible,
            "gap_to_rate": status.gap_to_rate,
            "gap_to_orders": status.gap_to_orders,
            "trend": status.trend,
        },
    )
    return {"gold_card_status": status, "workflow_status": ReviewStatus.GOLD_CARD_CHECKED}


def deadline_node(state: ReviewState) -> ReviewState:
    session = state["session"]
    status = session.poll_deadline(state["now"])
    session.audit_trail.log_computation(
        "deadline_checked",
        {
            "status": status.status,
            "percentage_used": status.percentage_used,
            "hours_remaining": round(status.time_remaining.total_seconds() / 3600, 1),
            "deadline": status.deadline.isoformat(),
        },
    )
    if status.status == ComplianceStatusLabel.EXCEEDED:
        session.audit_trail.add_entry("deadline_exceeded", {"deadline": status.deadline.isoformat()})
    return {"compliance_status": status, "workflow_status": ReviewStatus.DEADLINE_CHECKED}


def state_law_node(state: ReviewState) -> ReviewState:
    session = state["session"]
    decision = state.get("decision") or session.default_decision()
    result = session.state_law_checker.check(state["state_code"], decision)
    session.audit_trail.log_computation(
        "state_law_checked",
        {
            "state_code": result.state_code,
            "status": result.status,
            "gaps": result.gaps,
            "decision": decision.model_dump(),
        },
    )
    return {"state_compliance": result, "workflow_status": ReviewStatus.STATE_LAW_CHECKED}


def finalize_node(state: ReviewState) -> ReviewState:
    session = state["session"]
    prediction = state["prediction"]

    criteria_met = prediction.risk_category != RiskCategory.HIGH_RISK
    session.audit_trail.update_check(
        "criteria-match",
        ComplianceCheckStatus.PASS if criteria_met else ComplianceCheckStatus.FAIL,
        f"Denial risk score {prediction.denial_risk_score} ({prediction.risk_category})",
    )

    status = ReviewStatus.COMPLETE if session.can_finalize else ReviewStatus.AWAITING_SIGN_OFF
    session.audit_trail.add_entry("review_step_completed", {"workflow_status": status.value})
    logger.info(f"Review of {state['request'].id} is {status.value}")
    return {"workflow_status": status}


def route_after_appeal(state: ReviewState) -> Literal["check_gold_card", "track_deadline"]:
    if all(state.get(key) is not None for key in ("payer_id", "approval_rate", "order_count")):
        return "check_gold_card"
    return "track_deadline"


def route_after_deadline(state: ReviewState) -> Literal["check_state_law", "finalize"]:
    if state.get("state_code"):
        return "check_state_law"
    return "finalize"


def create_workflow() -> CompiledStateGraph:
    workflow = StateGraph(ReviewState)
    workflow.add_node("intake", intake_node)
    workflow.add_node("score_denial_risk", score_node)
    workflow.add_node("estimate_appeal", appeal_node)
    workflow.add_node("check_gold_card", gold_card_node)
    workflow.add_node("track_deadline", deadline_node)
    workflow.add_node("check_state_law", state_law_node)
    workflow.add_node("finalize", finalize_node)

    workflow.set_entry_point("intake")
    workflow.add_edge("intake", "score_denial_risk")
    workflow.add_edge("score_denial_risk", "estimate_appeal")
    workflow.add_conditional_edges("estimate_appeal", route_after_appeal)
    workflow.add_edge("check_gold_card", "track_deadline")
    workflow.add_conditional_edges("track_deadline", route_after_deadline)
    workflow.add_edge("check_state_law", "finalize")
    workflow.add_edge("finalize", END)

    return workflow.compile()


def get_workflow() -> CompiledStateGraph:
    global _workflow
    if _workflow is None:
        _workflow = create_workflow()
    return _workflow
