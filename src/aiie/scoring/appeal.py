"""
Appeal-overturn estimation and appeal cost utilities.

Two independent estimators live here:

* ``pre_denial_probability`` maps a denial-risk score to the chance a denial
  of the request would be overturned on appeal, adjusted by the modality's
  historical overturn rate.
* ``overturn_probability`` is used once a denial has actually occurred and
  weighs documentation, criteria match, the AIIE score, historical approval
  and specialty fit.
"""

import logging
from typing import Dict, Optional

from ..models import AppealInputs, AppealCostSavings
from ..reference_data import get_modality_baselines

logger = logging.getLogger(__name__)

# Industry data for appeal cost and time
APPEAL_COST_DATA = {
    "average_cost_per_appeal": 127,
    "staff_hours_per_appeal": 2.5,
    "p2p_call_duration_minutes": 45,
    "external_review_cost": 450,
}

OVERTURN_WEIGHTS = {
    "documentation_score": 0.25,
    "criteria_match_score": 0.25,
    "aiie_score": 0.22,
    "historical_approval_rate": 0.18,
    "provider_specialty_match": 0.10,
}

MODALITY_OVERTURN_PIVOT = 0.80
MODALITY_ADJUSTMENT_SCALE = 20


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def normalize_aiie_score(score: float) -> float:
    """Rescale a 1-9 AIIE score onto 0-100."""
    return (_clamp(score, 1, 9) - 1) / 8 * 100


class AppealOverturnEstimator:
    """Estimates the likelihood that a denial is overturned on appeal."""

    def __init__(self, modality_baselines: Optional[Dict[str, dict]] = None):
        self.modality_baselines = (
            modality_baselines if modality_baselines is not None else get_modality_baselines()
        )

    def pre_denial_probability(self, score: float, modality: str) -> float:
        """Overturn probability (1-99) derived from a denial-risk score."""
        base = normalize_aiie_score(score)
        baseline = self.modality_baselines.get(modality)
        adjustment = 0.0
        if baseline is not None:
            adjustment = (baseline["avg_appeal_overturn"] - MODALITY_OVERTURN_PIVOT) * MODALITY_ADJUSTMENT_SCALE
        return _clamp(base + adjustment, 1, 99)

    def overturn_probability(self, inputs: AppealInputs) -> float:
        """Weighted post-denial overturn probability (0-100)."""
        normalized = {
            "documentation_score": _clamp(inputs.documentation_score, 0, 100),
            "criteria_match_score": _clamp(inputs.criteria_match_score, 0, 100),
            "aiie_score": normalize_aiie_score(inputs.aiie_score),
            "historical_approval_rate": _clamp(inputs.historical_approval_rate, 0, 100),
            "provider_specialty_match": _clamp(inputs.provider_specialty_match, 0, 100),
        }
        score = sum(OVERTURN_WEIGHTS[name] * value for name, value in normalized.items())
        probability = round(_clamp(score, 0, 100), 1)
        logger.debug(f"Post-denial overturn probability {probability} from {normalized}")
        return probability

    def cost_savings(self, appeals_prevented: int) -> AppealCostSavings:
        """Savings when appeals are prevented by better upfront documentation."""
        count = max(0, int(appeals_prevented))
        direct_cost = round(count * APPEAL_COST_DATA["average_cost_per_appeal"])
        staff_hours = round(count * APPEAL_COST_DATA["staff_hours_per_appeal"], 1)
        return AppealCostSavings(
            appeals_prevented=count,
            direct_cost=direct_cost,
            staff_hours=staff_hours,
            total_savings=direct_cost,
        )


_default_estimator: Optional[AppealOverturnEstimator] = None


def _get_estimator() -> AppealOverturnEstimator:
    global _default_estimator
    if _default_estimator is None:
        _default_estimator = AppealOverturnEstimator()
    return _default_estimator


def estimate_appeal_overturn(inputs: AppealInputs) -> float:
    """Post-denial overturn probability using the shipped weights."""
    return _get_estimator().overturn_probability(inputs)


def calculate_appeal_cost_savings(appeals_prevented: int) -> AppealCostSavings:
    return _get_estimator().cost_savings(appeals_prevented)
