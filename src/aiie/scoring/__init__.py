"""Denial-risk scoring and appeal-overturn estimation."""

from .risk_factors import (
    RiskFactorExtractor,
    ExtractedFactor,
    assess_icd_specificity,
)

from .denial_risk import (
    DenialRiskScorer,
    classify_risk,
    calculate_confidence,
    score_denial_risk,
)

from .appeal import (
    AppealOverturnEstimator,
    APPEAL_COST_DATA,
    OVERTURN_WEIGHTS,
    estimate_appeal_overturn,
    calculate_appeal_cost_savings,
)

__all__ = [
    "RiskFactorExtractor",
    "ExtractedFactor",
    "assess_icd_specificity",
    "DenialRiskScorer",
    "classify_risk",
    "calculate_confidence",
    "score_denial_risk",
    "AppealOverturnEstimator",
    "APPEAL_COST_DATA",
    "OVERTURN_WEIGHTS",
    "estimate_appeal_overturn",
    "calculate_appeal_cost_savings",
]
