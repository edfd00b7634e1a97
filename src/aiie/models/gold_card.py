"""Data models for provider gold-card eligibility."""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, model_validator
from enum import Enum


class GoldCardTrend(str, Enum):
    """Direction of a provider's approval rate over recent months."""
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class GoldCardThreshold(BaseModel):
    """Payer-specific gold-card program requirements."""
    model_config = ConfigDict(frozen=True)

    approval_rate_percent: float = Field(..., ge=0, le=100)
    lookback_months: int = Field(..., gt=0)
    min_order_count: int = Field(..., ge=0)


class PayerResolution(BaseModel):
    """Outcome of canonicalizing a free-text payer identifier."""
    model_config = ConfigDict(frozen=True)

    raw: str = Field(..., description="Identifier as supplied by the caller")
    payer_key: str = Field(..., description="Key into the threshold table")
    matched: bool = Field(..., description="False when the default payer was substituted")


class EligibilityHistoryItem(BaseModel):
    """One point of a provider's approval-rate history (oldest first)."""
    period: str = Field(default="", description="Month label, e.g. 2026-01")
    rate: float = Field(..., description="Approval rate in percent")


class GoldCardStatus(BaseModel):
    """Gold-card verdict for one provider and payer."""
    model_config = ConfigDict(use_enum_values=True, frozen=True)

    eligible: bool
    payer_id: str = Field(..., description="Resolved payer key")
    approval_rate: float
    order_count: int
    threshold: GoldCardThreshold
    gap_to_rate: float = Field(..., ge=0)
    gap_to_orders: int = Field(..., ge=0)
    met_rate: bool
    met_orders: bool
    resolution: PayerResolution
    trend: GoldCardTrend = GoldCardTrend.STABLE
    projected_eligibility_date: Optional[datetime] = None

    @model_validator(mode='after')
    def validate_eligibility(self):
        """Eligibility requires both the rate and the volume condition."""
        if self.eligible != (self.met_rate and self.met_orders):
            raise ValueError("eligible must equal met_rate AND met_orders")
        return self
