"""Tests for the audit trail recorder."""

import json
import logging
from datetime import timedelta

import pytest

from aiie.compliance import AuditTrailRecorder, default_compliance_checks
from aiie.models import (
    AIInvolvement,
    AuditActor,
    ComplianceCheck,
    ComplianceCheckStatus,
)


@pytest.fixture
def recorder(clock):
    return AuditTrailRecorder(request_id="PA_1", clock=clock)


class TestEntries:
    """Test appending and reading entries."""

    def test_entries_are_appended_in_order(self, recorder, clock):
        recorder.add_entry("request_received", {"request_id": "PA_1"})
        clock.now += timedelta(minutes=5)
        recorder.log_computation("denial_risk_scored", {"score": 8.7})

        entries = recorder.entries
        assert [e.action for e in entries] == ["request_received", "denial_risk_scored"]
        assert entries[1].timestamp - entries[0].timestamp == timedelta(minutes=5)
        assert entries[0].data == {"request_id": "PA_1", "_type": "request_received"}

    def test_payload_is_copied(self, recorder):
        payload = {"factors": ["red_flags"]}
        recorder.add_entry("denial_risk_scored", payload)
        payload["factors"].append("mutated")
        assert recorder.entries[0].data["factors"] == ["red_flags"]
        assert "_type" not in payload

    def test_entries_view_is_a_copy(self, recorder):
        recorder.add_entry("request_received")
        recorder.entries.clear()
        assert len(recorder.entries) == 1

    def test_actor_attribution(self, recorder):
        recorder.log_computation("deadline_checked", {"status": "safe"})
        recorder.log_computation(
            "denial_risk_scored",
            {"score": 4.2},
            ai_involvement=AIInvolvement(model="aiie-rules-2.0.0", confidence=75),
        )
        recorder.log_human_action("human_review_recorded", {"name": "Dr. Lee", "credentials": "MD"})

        actors = [e.actor for e in recorder.entries]
        assert actors == [AuditActor.SYSTEM, AuditActor.AI, AuditActor.HUMAN]
        assert recorder.entries[2].actor_details.name == "Dr. Lee"

    def test_returned_entry_cannot_rewrite_ledger(self, recorder):
        entry = recorder.add_entry("request_received", {"request_id": "PA_1"})
        entry.data["request_id"] = "TAMPERED"
        recorder.get_entries()[0].data["extra"] = 1
        recorder.entries[0].data.clear()

        expected = {"request_id": "PA_1", "_type": "request_received"}
        assert recorder.entries[0].data == expected
        assert recorder.export_trail().entries[0].data == expected

    def test_entries_logged_as_json(self, recorder, caplog):
        with caplog.at_level(logging.INFO, logger="aiie.audit"):
            recorder.add_entry("request_received", {"score": 8.7})
        lines = [r.getMessage() for r in caplog.records if r.getMessage().startswith("AUDIT: {")]
        assert len(lines) == 1
        logged = json.loads(lines[0][len("AUDIT: "):])
        assert logged["action"] == "request_received"
        assert logged["request_id"] == "PA_1"
        assert logged["data"]["score"] == 8.7

    def test_get_entries_filters(self, recorder, clock):
        start = clock.now
        recorder.add_entry("request_received")
        clock.now += timedelta(hours=1)
        recorder.log_human_action("human_review_recorded", {"name": "Dr. Lee"})

        assert len(recorder.get_entries(actor=AuditActor.HUMAN)) == 1
        assert len(recorder.get_entries(action="request_received")) == 1
        assert len(recorder.get_entries(start_time=start + timedelta(minutes=30))) == 1
        assert len(recorder.get_entries(end_time=start)) == 1


class TestComplianceChecks:
    """Test compliance check bookkeeping."""

    def test_defaults_are_pending(self, recorder):
        checks = recorder.compliance_checks
        assert [c.id for c in checks] == ["doc-review", "criteria-match", "human-sign-off"]
        assert all(c.status == ComplianceCheckStatus.NA for c in checks)
        assert recorder.is_complete is False

    def test_complete_when_all_required_pass(self, recorder):
        for check_id in ("doc-review", "criteria-match"):
            recorder.update_check(check_id, ComplianceCheckStatus.PASS)
        assert recorder.is_complete is False
        recorder.update_check("human-sign-off", "pass", "Approved")
        assert recorder.is_complete is True

    def test_failed_check_blocks_completion(self, recorder):
        for check_id in ("doc-review", "human-sign-off"):
            recorder.update_check(check_id, ComplianceCheckStatus.PASS)
        recorder.update_check("criteria-match", ComplianceCheckStatus.FAIL)
        assert recorder.is_complete is False

    def test_unknown_check_rejected(self, recorder):
        with pytest.raises(ValueError):
            recorder.update_check("no-such-check", ComplianceCheckStatus.PASS)

    def test_empty_check_list_is_never_complete(self, recorder):
        recorder.set_compliance_checks([])
        assert recorder.is_complete is False

    def test_custom_required_ids(self, clock):
        recorder = AuditTrailRecorder(
            clock=clock,
            initial_checks=[ComplianceCheck(id="two-person", rule="Two reviewers")],
            required_compliance_ids=["two-person"],
        )
        recorder.update_check("two-person", ComplianceCheckStatus.PASS)
        assert recorder.is_complete is True

    def test_default_checks_are_fresh_copies(self):
        first = default_compliance_checks()
        first[0].status = ComplianceCheckStatus.PASS
        assert default_compliance_checks()[0].status == ComplianceCheckStatus.NA


class TestExportAndReset:
    """Test export snapshots and reset."""

    def test_export_summary(self, recorder):
        recorder.add_entry("request_received")
        recorder.log_computation("denial_risk_scored", {}, ai_involvement=AIInvolvement(model="m"))
        recorder.update_check("doc-review", ComplianceCheckStatus.PASS)
        recorder.update_check("criteria-match", ComplianceCheckStatus.FAIL)

        report = recorder.export_trail()
        assert report.summary.total_entries == 2
        assert report.summary.by_actor == {"system": 1, "ai": 1, "human": 0}
        assert report.summary.compliance_passed == 1
        assert report.summary.compliance_failed == 1

    def test_export_is_a_snapshot(self, recorder):
        recorder.add_entry("request_received")
        report = recorder.export_trail()
        recorder.add_entry("denial_risk_scored")
        assert report.summary.total_entries == 1
        assert len(report.entries) == 1
        assert recorder.export_trail().summary.total_entries == 2

    def test_reset_restores_pending_state(self, recorder):
        recorder.add_entry("request_received")
        recorder.update_check("doc-review", ComplianceCheckStatus.PASS)
        recorder.reset()

        assert recorder.entries == []
        assert all(c.status == ComplianceCheckStatus.NA for c in recorder.compliance_checks)
        assert recorder.export_trail().summary.total_entries == 0
