"""
AIIE denial-risk scoring.

Starts every request at a neutral baseline, adds the score delta of each
extracted risk factor, clamps the total into 1-9 and classifies the result.
Higher scores mean the request is safer to approve.
"""

import logging
import time
from typing import List, Optional, Tuple

from ..models import (
    PARequest,
    AIIEPrediction,
    RiskCategory,
    RecommendedAction,
    ScoringFactor,
)
from .appeal import AppealOverturnEstimator
from .risk_factors import RiskFactorExtractor, assess_icd_specificity

logger = logging.getLogger(__name__)

BASELINE_SCORE = 5.0
MIN_SCORE = 1.0
MAX_SCORE = 9.0

LOW_RISK_FLOOR = 7.0
MEDIUM_RISK_FLOOR = 4.0

BASE_CONFIDENCE = 60
CONFIDENCE_PER_CITATION = 5
MAX_CONFIDENCE = 95


def classify_risk(score: float) -> Tuple[RiskCategory, RecommendedAction]:
    """Map a clamped score to its risk category and recommended action."""
    if score >= LOW_RISK_FLOOR:
        return RiskCategory.LOW_RISK, RecommendedAction.AUTO_APPROVE
    if score >= MEDIUM_RISK_FLOOR:
        return RiskCategory.MEDIUM_RISK, RecommendedAction.CLINICAL_REVIEW
    return RiskCategory.HIGH_RISK, RecommendedAction.LIKELY_APPROVE


def calculate_confidence(factors: List[ScoringFactor]) -> int:
    """Confidence grows with the number of literature-backed factors."""
    cited = sum(1 for f in factors if f.evidence_citation)
    return min(MAX_CONFIDENCE, BASE_CONFIDENCE + cited * CONFIDENCE_PER_CITATION)


def sort_factors(factors: List[ScoringFactor]) -> List[ScoringFactor]:
    return sorted(factors, key=lambda f: abs(f.contribution), reverse=True)


class DenialRiskScorer:
    """Folds extracted factors into an AIIE prediction."""

    def __init__(
        self,
        extractor: Optional[RiskFactorExtractor] = None,
        appeal_estimator: Optional[AppealOverturnEstimator] = None,
    ):
        self.extractor = extractor or RiskFactorExtractor()
        self.appeal_estimator = appeal_estimator or AppealOverturnEstimator()

    def score(self, request: PARequest) -> AIIEPrediction:
        """Score one request. Never raises on absent optional fields."""
        started = time.perf_counter()

        extracted = self.extractor.extract(request)
        raw_score = BASELINE_SCORE + sum(e.score_delta for e in extracted)
        final_score = round(max(MIN_SCORE, min(MAX_SCORE, raw_score)), 1)

        risk_category, recommended_action = classify_risk(final_score)
        factors = [e.factor for e in extracted]

        prediction = AIIEPrediction(
            denial_risk_score=final_score,
            risk_category=risk_category,
            recommended_action=recommended_action,
            icd_specificity=assess_icd_specificity(request.primary_diagnosis.icd10),
            appeal_overturn_probability=self.appeal_estimator.pre_denial_probability(
                final_score, request.modality
            ),
            confidence_score=calculate_confidence(factors),
            factors=sort_factors(factors),
            evidence_basis=[e.evidence for e in extracted if e.evidence is not None],
            processing_time_ms=round((time.perf_counter() - started) * 1000),
        )

        logger.debug(
            f"Scored {request.id}: raw={raw_score:.2f} score={prediction.denial_risk_score} "
            f"category={prediction.risk_category} action={prediction.recommended_action}"
        )
        return prediction


_default_scorer: Optional[DenialRiskScorer] = None


def _get_scorer() -> DenialRiskScorer:
    global _default_scorer
    if _default_scorer is None:
        _default_scorer = DenialRiskScorer()
    return _default_scorer


def score_denial_risk(request: PARequest) -> AIIEPrediction:
    """Score a PA request with the shipped reference tables."""
    return _get_scorer().score(request)
