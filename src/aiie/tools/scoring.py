"""Scoring tools: denial risk and appeal-overturn estimation."""

from typing import Any, Dict
from pydantic import BaseModel, Field
from langchain.tools import tool

from ..models import AppealInputs, PARequest
from ..scoring import estimate_appeal_overturn, score_denial_risk


class ScoreDenialRiskInput(BaseModel):
    """Request model for denial-risk scoring."""
    request: PARequest = Field(..., description="PA request record to score")


@tool(
    description="Scores a prior-authorization imaging request for denial risk (1-9, higher means "
    "approval is more likely) and returns the evidence-cited factors behind the score.",
    args_schema=ScoreDenialRiskInput,
)
def score_denial_risk_tool(request: PARequest) -> Dict[str, Any]:
    return score_denial_risk(request).model_dump(mode="json")


@tool(args_schema=AppealInputs)
def estimate_appeal_overturn_tool(
    documentation_score: float,
    criteria_match_score: float,
    aiie_score: float,
    historical_approval_rate: float,
    provider_specialty_match: float,
) -> Dict[str, Any]:
    """Estimates the probability (1-99%) that a denied request is overturned on appeal.

    Args:
        documentation_score: Documentation completeness, 0-100.
        criteria_match_score: RBM criteria match, 0-100.
        aiie_score: AIIE denial-risk score, 1-9.
        historical_approval_rate: Provider's historical approval rate, 0-100.
        provider_specialty_match: Fit of the ordering specialty, 0-100.
    """
    inputs = AppealInputs(
        documentation_score=documentation_score,
        criteria_match_score=criteria_match_score,
        aiie_score=aiie_score,
        historical_approval_rate=historical_approval_rate,
        provider_specialty_match=provider_specialty_match,
    )
    return {"overturn_probability": estimate_appeal_overturn(inputs)}
