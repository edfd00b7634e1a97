"""Tests for the LangChain tool wrappers."""

from aiie.demo_scenarios import DEMO_SCENARIOS
from aiie.tools import (
    check_state_compliance_tool,
    estimate_appeal_overturn_tool,
    evaluate_gold_card_tool,
    score_denial_risk_tool,
    track_compliance_tool,
)


class TestScoringTools:
    """Test scoring tools with plain JSON arguments."""

    def test_score_denial_risk(self):
        result = score_denial_risk_tool.invoke({"request": DEMO_SCENARIOS["low-risk-approval"]})
        assert result["denial_risk_score"] == 8.7
        assert result["recommended_action"] == "AUTO_APPROVE"
        assert result["factors"][0]["id"] == "red_flags"

    def test_estimate_appeal_overturn(self):
        result = estimate_appeal_overturn_tool.invoke({
            "documentation_score": 80,
            "criteria_match_score": 60,
            "aiie_score": 5,
            "historical_approval_rate": 70,
            "provider_specialty_match": 100,
        })
        assert result["overturn_probability"] == 68.6


class TestEligibilityTools:
    """Test the gold-card tool."""

    def test_evaluate_gold_card(self):
        result = evaluate_gold_card_tool.invoke({"approval_rate": 88, "order_count": 60, "payer_id": "Aetna"})
        assert result["eligible"] is False
        assert result["gap_to_rate"] == 2.0
        assert result["resolution"]["matched"] is True


class TestComplianceTools:
    """Test deadline and state-law tools."""

    def test_track_compliance(self):
        result = track_compliance_tool.invoke({
            "start_time": "2026-01-27T09:00:00Z",
            "urgency": "urgent",
            "now": "2026-01-30T07:00:00Z",
        })
        assert result["status"] == "critical"
        assert result["hours_remaining"] == 2.0
        assert result["is_compliant"] is True

    def test_check_state_compliance(self):
        result = check_state_compliance_tool.invoke({
            "state_code": "CA",
            "decision": {"used_ai": True, "was_automated": True},
        })
        assert result["compliant"] is False
        assert result["state_rule"] == "SB 1120"
        assert len(result["gaps"]) == 3
