"""Models for appeal-overturn estimation and appeal cost savings."""

from pydantic import BaseModel, Field


class AppealInputs(BaseModel):
    """Signals available once a denial has actually occurred.

    Values outside their domain are accepted here and clamped by the estimator.
    """
    documentation_score: float = Field(..., description="Documentation completeness (0-100)")
    criteria_match_score: float = Field(..., description="RBM criteria match (0-100)")
    aiie_score: float = Field(..., description="AIIE denial-risk score (1-9)")
    historical_approval_rate: float = Field(..., description="Historical approval rate (0-100)")
    provider_specialty_match: float = Field(..., description="Ordering specialty fit (0-100)")


class AppealCostSavings(BaseModel):
    """Savings from appeals that better upfront documentation prevented."""
    appeals_prevented: int = Field(..., ge=0)
    direct_cost: int = Field(..., ge=0, description="Dollars")
    staff_hours: float = Field(..., ge=0)
    total_savings: int = Field(..., ge=0, description="Dollars; staff time is valued separately")
