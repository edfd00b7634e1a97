"""State AI / prior-authorization law gap analysis."""

import logging
import re
from typing import Dict, List, Optional, Union

from ..models import (
    ComplianceResult,
    Decision,
    StateComplianceLabel,
    StateRequirement,
    ValidationUtils,
)
from ..reference_data import get_state_requirements

logger = logging.getLogger(__name__)

HUMAN_REVIEW_PATTERN = re.compile(r"human|review|oversight", re.IGNORECASE)
AUTOMATED_ADVERSE_PATTERN = re.compile(r"automated|adverse", re.IGNORECASE)
DISCLOSURE_PATTERN = re.compile(r"disclosure|notice|patient|communicat", re.IGNORECASE)
EXPLAINABILITY_PATTERN = re.compile(r"explain|documentation", re.IGNORECASE)


def _find_requirement(requirements: List[str], pattern: re.Pattern) -> Optional[str]:
    return next((r for r in requirements if pattern.search(r)), None)


class StateLawChecker:
    """Checks a PA decision against a state's AI-use requirements."""

    def __init__(self, state_requirements: Optional[Dict[str, StateRequirement]] = None):
        self.state_requirements = (
            state_requirements if state_requirements is not None else get_state_requirements()
        )

    def check(self, state_code: str, decision: Union[Decision, dict]) -> ComplianceResult:
        """Return the gaps between ``decision`` and the state's requirements.

        Unknown states are reported as not applicable rather than failing.
        """
        if not isinstance(decision, Decision):
            decision = Decision.model_validate(decision)

        key = ValidationUtils.canonical_state_code(state_code)
        state = self.state_requirements.get(key)
        if state is None:
            logger.debug(f"No AI prior-auth rules on file for state {state_code!r}")
            return ComplianceResult(
                compliant=True,
                status=StateComplianceLabel.NOT_APPLICABLE,
                state_code=key,
            )

        requirements = state.requirements
        gaps: List[str] = []

        if (decision.used_ai or decision.was_automated) and not decision.had_human_review:
            requirement = _find_requirement(requirements, HUMAN_REVIEW_PATTERN)
            if requirement:
                gaps.append(f"Human review: {requirement}")

        if decision.was_automated and not decision.had_human_review:
            requirement = _find_requirement(requirements, AUTOMATED_ADVERSE_PATTERN)
            if requirement:
                gaps.append(f"Automated adverse: {requirement}")

        if decision.used_ai and not decision.patient_notified:
            requirement = _find_requirement(requirements, DISCLOSURE_PATTERN)
            if requirement:
                gaps.append(f"Disclosure/notice: {requirement}")

        if decision.used_ai and not decision.explainability_provided:
            requirement = _find_requirement(requirements, EXPLAINABILITY_PATTERN)
            if requirement:
                gaps.append(f"Explainability: {requirement}")

        compliant = not gaps
        if not compliant:
            logger.info(f"{state.name} ({state.rule}) compliance gaps: {gaps}")

        return ComplianceResult(
            compliant=compliant,
            status=StateComplianceLabel.COMPLIANT if compliant else StateComplianceLabel.NON_COMPLIANT,
            requirements=list(requirements),
            gaps=gaps,
            state_code=key,
            state_rule=state.rule,
            state_name=state.name,
        )


_default_checker: Optional[StateLawChecker] = None


def _get_checker() -> StateLawChecker:
    global _default_checker
    if _default_checker is None:
        _default_checker = StateLawChecker()
    return _default_checker


def check_state_compliance(state_code: str, decision: Union[Decision, dict]) -> ComplianceResult:
    """Check a decision against the shipped state requirement table."""
    return _get_checker().check(state_code, decision)
