import logging
import sys

from .demo_scenarios import DEMO_SCENARIOS, get_review_context, get_scenario
from .review import ReviewSession


def main(scenario_id: str) -> int:
    request = get_scenario(scenario_id)
    if request is None:
        print(f"Unknown scenario: {scenario_id}")
        print(f"Available scenarios: {', '.join(DEMO_SCENARIOS)}")
        return 1

    print("=" * 50)
    print(f"Running AIIE review for {request.id} ({scenario_id})")
    print("=" * 50)

    session = ReviewSession(request)
    state = session.run(**get_review_context(scenario_id))

    prediction = state["prediction"]
    print(f"\nDenial risk score: {prediction.denial_risk_score} ({prediction.risk_category})")
    print(f"Recommended action: {prediction.recommended_action}")
    print(f"Appeal overturn probability: {prediction.appeal_overturn_probability:.2f}%")
    print(f"Confidence: {prediction.confidence_score}%")
    print("Factors:")
    for factor in prediction.factors:
        citation = f" [{factor.evidence_citation}]" if factor.evidence_citation else ""
        print(f"  {factor.contribution:+.3f}  {factor.name}: {factor.value}{citation}")

    gold_card = state.get("gold_card_status")
    if gold_card is not None:
        print(
            f"\nGold card ({gold_card.payer_id}): eligible={gold_card.eligible} "
            f"gap_to_rate={gold_card.gap_to_rate} gap_to_orders={gold_card.gap_to_orders} "
            f"trend={gold_card.trend}"
        )

    deadline = state["compliance_status"]
    print(
        f"CMS deadline: {deadline.status} ({deadline.percentage_used}% used, "
        f"due {deadline.deadline.isoformat()})"
    )

    state_compliance = state.get("state_compliance")
    if state_compliance is not None:
        print(f"State law ({state_compliance.state_code}): {state_compliance.status}")
        for gap in state_compliance.gaps:
            print(f"  - {gap}")

    report = session.audit_trail.export_trail()
    print(f"\nWorkflow status: {state['workflow_status'].value}")
    print(f"Audit entries: {report.summary.total_entries} {report.summary.by_actor}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    if len(sys.argv) > 1:
        sys.exit(main(sys.argv[1]))
    else:
        print("No scenario id provided.")
        print(f"Available scenarios: {', '.join(DEMO_SCENARIOS)}")
