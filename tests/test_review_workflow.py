"""Tests for the LangGraph review workflow and review sessions."""

import logging
from datetime import timedelta

import pytest

from aiie.demo_scenarios import DEMO_SCENARIOS, get_review_context, get_scenario
from aiie.main import main
from aiie.models import (
    AuditActor,
    ComplianceCheckStatus,
    ComplianceStatusLabel,
    ReviewStatus,
    StateComplianceLabel,
)
from aiie.review import ReviewSession, get_workflow


def _actions(session):
    return [e.action for e in session.audit_trail.entries]


def _check(session, check_id):
    return next(c for c in session.audit_trail.compliance_checks if c.id == check_id)


class TestWorkflowRouting:
    """Test which steps run for the inputs given."""

    def test_minimal_run_skips_optional_steps(self, strong_request, clock):
        session = ReviewSession(strong_request, clock=clock)
        state = session.run()

        assert _actions(session) == [
            "request_received",
            "denial_risk_scored",
            "appeal_overturn_estimated",
            "deadline_checked",
            "review_step_completed",
        ]
        assert state.get("gold_card_status") is None
        assert state.get("state_compliance") is None
        assert state["prediction"].denial_risk_score == 8.7
        assert state["workflow_status"] == ReviewStatus.AWAITING_SIGN_OFF

    def test_full_run(self, strong_request, clock):
        session = ReviewSession(strong_request, clock=clock)
        state = session.run(
            payer_id="UHC",
            approval_rate=93,
            order_count=110,
            state_code="TX",
            appeal_inputs={
                "documentation_score": 90,
                "criteria_match_score": 85,
                "aiie_score": 8.7,
                "historical_approval_rate": 91,
                "provider_specialty_match": 100,
            },
        )

        assert "gold_card_evaluated" in _actions(session)
        assert "state_law_checked" in _actions(session)
        assert state["gold_card_status"].eligible is True
        assert state["post_denial_probability"] is not None
        # AI-scored, no human review yet: Texas requires human oversight
        assert state["state_compliance"].status == StateComplianceLabel.NON_COMPLIANT

    def test_partial_gold_card_inputs_skip_step(self, strong_request, clock):
        session = ReviewSession(strong_request, clock=clock)
        session.run(payer_id="Aetna", approval_rate=91)
        assert "gold_card_evaluated" not in _actions(session)

    def test_workflow_is_cached(self):
        assert get_workflow() is get_workflow()


class TestAuditAttribution:
    """Test audit entries written by the workflow."""

    def test_scoring_entry_carries_ai_involvement(self, strong_request, clock):
        session = ReviewSession(strong_request, clock=clock)
        session.run()
        scored = session.audit_trail.get_entries(action="denial_risk_scored")[0]

        assert scored.actor == AuditActor.AI
        assert scored.ai_involvement.confidence == 80
        assert scored.ai_involvement.recommendation == "AUTO_APPROVE"
        assert scored.ai_involvement.model

    def test_deadline_exceeded_is_audited(self, weak_request, clock):
        received = clock.now
        session = ReviewSession(weak_request, received_at=received, clock=clock)
        state = session.run(now=received + timedelta(days=8))

        assert state["compliance_status"].status == ComplianceStatusLabel.EXCEEDED
        assert "deadline_exceeded" in _actions(session)


class TestHumanSignOff:
    """Test human-in-the-loop completion."""

    def test_sign_off_completes_review(self, strong_request, clock):
        session = ReviewSession(strong_request, clock=clock)
        session.run()
        assert session.can_finalize is False
        assert _check(session, "criteria-match").status == ComplianceCheckStatus.PASS

        session.record_human_review({"name": "Dr. Lee", "credentials": "MD"}, approved=True)

        assert session.can_finalize is True
        assert session.status == ReviewStatus.COMPLETE
        human_entries = session.audit_trail.get_entries(actor=AuditActor.HUMAN)
        assert len(human_entries) == 1
        assert human_entries[0].data["ai_recommendation"] == "AUTO_APPROVE"

    def test_sign_off_without_documentation_review(self, strong_request, clock):
        session = ReviewSession(strong_request, clock=clock)
        session.run()
        session.record_human_review({"name": "Dr. Lee"}, approved=True, documentation_reviewed=False)

        assert _check(session, "human-sign-off").status == ComplianceCheckStatus.PASS
        assert _check(session, "doc-review").status == ComplianceCheckStatus.NA
        assert session.can_finalize is False

    def test_human_review_clears_state_law_gaps(self, strong_request, clock):
        session = ReviewSession(strong_request, clock=clock)
        session.run()
        session.record_human_review({"name": "Dr. Lee"}, approved=True)
        session.record_patient_notification()

        decision = session.default_decision()
        assert decision.had_human_review is True
        assert decision.was_automated is False
        assert decision.explainability_provided is True

        state = session.run(state_code="CA")
        assert state["state_compliance"].compliant is True
        assert state["workflow_status"] == ReviewStatus.COMPLETE

    def test_reset(self, strong_request, clock):
        session = ReviewSession(strong_request, clock=clock)
        session.run()
        session.record_human_review({"name": "Dr. Lee"}, approved=True)
        session.reset()

        assert session.audit_trail.entries == []
        assert session.prediction is None
        assert session.can_finalize is False


class TestSessionIsolation:
    """Sessions never share ledgers."""

    def test_independent_ledgers(self, strong_request, weak_request, clock):
        first = ReviewSession(strong_request, clock=clock)
        second = ReviewSession(weak_request, clock=clock)
        first.run()
        first.record_human_review({"name": "Dr. Lee"}, approved=True)
        second.run()

        assert first.can_finalize is True
        assert second.can_finalize is False
        assert len(second.audit_trail.get_entries(actor=AuditActor.HUMAN)) == 0

    def test_sessions_share_one_audit_logger(self, strong_request, clock):
        first = ReviewSession(strong_request, clock=clock)
        registered = len(logging.Logger.manager.loggerDict)
        handlers = len(first.audit_trail.logger.handlers)

        sessions = [
            ReviewSession(strong_request.model_copy(update={"id": f"PA_{n}"}), clock=clock)
            for n in range(50)
        ]

        assert len(logging.Logger.manager.loggerDict) == registered
        assert all(s.audit_trail.logger is first.audit_trail.logger for s in sessions)
        assert len(first.audit_trail.logger.handlers) == handlers == 1

    def test_deadline_uses_received_time(self, strong_request, clock):
        session = ReviewSession(strong_request, clock=clock)
        assert session.deadline_tracker.deadline == clock.now + timedelta(hours=72)


class TestDemoScenarios:
    """Test the shipped demo scenarios."""

    @pytest.mark.parametrize("scenario_id", list(DEMO_SCENARIOS))
    def test_scenarios_run(self, scenario_id, clock):
        request = get_scenario(scenario_id)
        session = ReviewSession(request, clock=clock)
        state = session.run(**get_review_context(scenario_id))
        assert state["workflow_status"] == ReviewStatus.AWAITING_SIGN_OFF
        assert state["gold_card_status"] is not None
        assert state["state_compliance"] is not None

    def test_low_risk_scenario_matches_reference_case(self):
        prediction = ReviewSession(get_scenario("low-risk-approval")).run()["prediction"]
        assert prediction.denial_risk_score == 8.7

    def test_unknown_scenario(self):
        assert get_scenario("nope") is None
        assert get_review_context("nope") == {}

    def test_cli(self, capsys):
        assert main("medium-risk") == 0
        assert "Denial risk score" in capsys.readouterr().out
        assert main("nope") == 1
