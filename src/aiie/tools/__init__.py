"""LangChain tools exposing the AIIE engine to an agent host."""

from .scoring import (
    score_denial_risk_tool,
    estimate_appeal_overturn_tool,
)

from .eligibility import (
    evaluate_gold_card_tool,
)

from .compliance import (
    track_compliance_tool,
    check_state_compliance_tool,
)


__all__ = [
    # Scoring tools
    "score_denial_risk_tool",
    "estimate_appeal_overturn_tool",
    # Eligibility tools
    "evaluate_gold_card_tool",
    # Compliance tools
    "track_compliance_tool",
    "check_state_compliance_tool",
]
