"""Provider gold-card eligibility."""

from .gold_card import (
    GoldCardEligibilityEvaluator,
    compute_trend,
    project_eligibility_date,
    evaluate_gold_card,
    add_months,
)

__all__ = [
    "GoldCardEligibilityEvaluator",
    "compute_trend",
    "project_eligibility_date",
    "evaluate_gold_card",
    "add_months",
]
