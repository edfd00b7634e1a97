"""Compliance tools: CMS deadline tracking and state AI-law checks."""

from datetime import datetime, UTC
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field
from langchain.tools import tool

from ..compliance import check_state_compliance, track_compliance
from ..models import Decision


class DeadlineLookup(BaseModel):
    """Request model for a CMS deadline check."""
    start_time: datetime = Field(..., description="When the PA request was received (ISO-8601)")
    urgency: str = Field(default="standard", description="'urgent', 'emergent', 'routine' or 'standard'")
    now: Optional[datetime] = Field(None, description="Evaluation instant; defaults to the current time")


class StateComplianceLookup(BaseModel):
    """Request model for a state AI-law check."""
    state_code: str = Field(..., min_length=2, description="Two-letter state code")
    decision: Decision = Field(..., description="How the PA decision was reached")


@tool(
    description="Reports where a PA request stands against its CMS decision deadline "
    "(72h urgent, 7 days standard).",
    args_schema=DeadlineLookup,
)
def track_compliance_tool(
    start_time: datetime,
    urgency: str = "standard",
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    status = track_compliance(start_time, urgency, now or datetime.now(UTC))
    result = status.model_dump(mode="json")
    result["hours_remaining"] = round(status.time_remaining.total_seconds() / 3600, 1)
    return result


@tool(
    description="Checks a PA decision against a state's AI-use requirements and lists any gaps.",
    args_schema=StateComplianceLookup,
)
def check_state_compliance_tool(state_code: str, decision: Decision) -> Dict[str, Any]:
    return check_state_compliance(state_code, decision).model_dump(mode="json")
