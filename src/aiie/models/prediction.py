"""Scoring output models for the denial-risk pipeline."""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, model_validator
from enum import Enum


class RiskCategory(str, Enum):
    """Denial-risk category derived from the 1-9 score."""
    HIGH_RISK = "high_risk"
    MEDIUM_RISK = "medium_risk"
    LOW_RISK = "low_risk"


class RecommendedAction(str, Enum):
    """Action recommended to the utilization-review analyst."""
    AUTO_APPROVE = "AUTO_APPROVE"
    CLINICAL_REVIEW = "CLINICAL_REVIEW"
    LIKELY_APPROVE = "LIKELY_APPROVE"


class IcdSpecificity(str, Enum):
    """Specificity of the primary diagnosis code.

    MODERATE does not move the score but is kept distinct so explanations
    can say the code was neither specific nor unspecified.
    """
    SPECIFIC = "specific"
    MODERATE = "moderate"
    NONSPECIFIC = "nonspecific"


class EvidenceCitation(BaseModel):
    """Peer-reviewed or guideline source backing a scoring factor."""
    model_config = ConfigDict(frozen=True)

    source: str
    year: int
    finding: str
    pmid: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.source} {self.year}"


class ScoringFactor(BaseModel):
    """A single SHAP-style explanation of the score."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable factor identifier")
    name: str = Field(..., description="Display name")
    contribution: float = Field(..., ge=-1.0, le=1.0, description="Signed, normalized contribution")
    value: str = Field(..., description="Human-readable value")
    explanation: str = Field(..., description="Why the factor moved the score")
    evidence_citation: Optional[str] = Field(None, description="Literature reference, if any")


class AIIEPrediction(BaseModel):
    """Denial-risk prediction for one PA request."""
    model_config = ConfigDict(use_enum_values=True, frozen=True)

    denial_risk_score: float = Field(..., ge=1.0, le=9.0, description="1-9, higher is safer to approve")
    risk_category: RiskCategory
    recommended_action: RecommendedAction
    icd_specificity: IcdSpecificity
    appeal_overturn_probability: float = Field(..., ge=1.0, le=99.0)
    confidence_score: int = Field(..., ge=60, le=95)
    factors: List[ScoringFactor] = Field(default_factory=list)
    evidence_basis: List[EvidenceCitation] = Field(default_factory=list)
    processing_time_ms: int = Field(default=0, ge=0)

    @model_validator(mode='after')
    def validate_factor_order(self):
        """Factors must be ordered by absolute contribution, largest first."""
        magnitudes = [abs(f.contribution) for f in self.factors]
        if magnitudes != sorted(magnitudes, reverse=True):
            raise ValueError("Factors must be sorted by |contribution| descending")
        return self

    @property
    def cited_factor_count(self) -> int:
        return sum(1 for f in self.factors if f.evidence_citation)
