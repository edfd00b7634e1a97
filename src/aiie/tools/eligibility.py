"""Gold-card eligibility tool."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from langchain.tools import tool

from ..eligibility import evaluate_gold_card


class GoldCardLookup(BaseModel):
    """Request model for a provider gold-card evaluation."""
    approval_rate: float = Field(..., description="Provider PA approval rate in percent (0-100)")
    order_count: int = Field(..., description="Orders in the payer's lookback window")
    payer_id: str = Field(..., description="Payer identifier, e.g. 'UHC' or 'Blue Cross'")
    rate_history: List[float] = Field(
        default_factory=list,
        description="Monthly approval rates in percent, oldest first",
    )


@tool(
    description="Evaluates whether a provider qualifies for a payer's gold-card PA exemption and "
    "reports the gaps to the payer threshold.",
    args_schema=GoldCardLookup,
)
def evaluate_gold_card_tool(
    approval_rate: float,
    order_count: int,
    payer_id: str,
    rate_history: Optional[List[float]] = None,
) -> Dict[str, Any]:
    return evaluate_gold_card(approval_rate, order_count, payer_id, history=rate_history).model_dump(mode="json")
