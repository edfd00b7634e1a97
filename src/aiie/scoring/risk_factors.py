"""
Risk factor extraction for the denial-risk scorer.

Each rule inspects one aspect of a PA request and, when it applies, yields a
named factor with a signed contribution (SHAP-style, normalized to [-1, 1])
together with the raw delta it adds to the 1-9 score.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..models import (
    PARequest,
    UrgencyLevel,
    IcdSpecificity,
    ScoringFactor,
    EvidenceCitation,
    ValidationUtils,
)
from ..reference_data import get_evidence_citations, get_modality_baselines

logger = logging.getLogger(__name__)

MAX_COUNTED_RED_FLAGS = 3
HIGH_PROVIDER_APPROVAL_RATE = 0.85
LOW_PROVIDER_APPROVAL_RATE = 0.65
HIGH_MODALITY_OVERTURN_RATE = 0.80


@dataclass(frozen=True)
class ExtractedFactor:
    """A scoring factor plus the raw score delta it carries."""
    factor: ScoringFactor
    score_delta: float = 0.0
    evidence: Optional[EvidenceCitation] = None


def assess_icd_specificity(icd10: str) -> IcdSpecificity:
    """Classify a diagnosis code by the length of its decimal suffix."""
    suffix = ValidationUtils.icd10_suffix(icd10)
    if suffix is None:
        return IcdSpecificity.NONSPECIFIC
    if len(suffix) >= 2:
        return IcdSpecificity.SPECIFIC
    return IcdSpecificity.MODERATE


class RiskFactorExtractor:
    """Derives named, weighted factors from a PA request."""

    def __init__(
        self,
        evidence: Optional[Dict[str, EvidenceCitation]] = None,
        modality_baselines: Optional[Dict[str, dict]] = None,
    ):
        self.evidence = evidence if evidence is not None else get_evidence_citations()
        self.modality_baselines = (
            modality_baselines if modality_baselines is not None else get_modality_baselines()
        )

    def extract(self, request: PARequest) -> List[ExtractedFactor]:
        """Apply every rule to the request, in a fixed order."""
        has_red_flags = len(request.red_flags) > 0

        extracted: List[ExtractedFactor] = []
        for rule in (
            self._red_flags(request),
            self._prior_imaging(request),
            self._conservative_treatment(request, has_red_flags),
            self._icd_specificity(request),
            self._provider_history(request),
            self._urgency(request),
            self._modality_pattern(request),
        ):
            if rule is not None:
                extracted.append(rule)

        logger.debug(
            f"Extracted {len(extracted)} factors for {request.id}: "
            f"{[e.factor.id for e in extracted]}"
        )
        return extracted

    def _citation(self, key: str) -> Optional[EvidenceCitation]:
        return self.evidence.get(key)

    def _citation_label(self, key: str) -> Optional[str]:
        citation = self._citation(key)
        return citation.label if citation else None

    def _red_flags(self, request: PARequest) -> ExtractedFactor:
        count = len(request.red_flags)
        if count > 0:
            delta = 0.8 + min(count, MAX_COUNTED_RED_FLAGS) * 0.3
            return ExtractedFactor(
                factor=ScoringFactor(
                    id="red_flags",
                    name="Clinical Red Flags Present",
                    contribution=delta / 4,
                    value=", ".join(request.red_flags),
                    explanation=f"{count} red flag(s) detected - denial would likely be overturned",
                    evidence_citation=self._citation_label("red_flags"),
                ),
                score_delta=delta,
                evidence=self._citation("red_flags"),
            )
        return ExtractedFactor(
            factor=ScoringFactor(
                id="red_flags",
                name="Clinical Red Flags",
                contribution=-0.1,
                value="None documented",
                explanation="No red flags reduces medical necessity urgency",
                evidence_citation=self._citation_label("red_flags"),
            ),
        )

    def _prior_imaging(self, request: PARequest) -> Optional[ExtractedFactor]:
        relevant = request.relevant_prior_imaging
        if not relevant:
            return None
        return ExtractedFactor(
            factor=ScoringFactor(
                id="prior_imaging",
                name="Prior Imaging Documented",
                contribution=0.175,
                value=f"{len(relevant)} relevant prior study(ies)",
                explanation="Appropriate imaging pathway followed - supports approval",
                evidence_citation=self._citation_label("prior_imaging"),
            ),
            score_delta=0.7,
            evidence=self._citation("prior_imaging"),
        )

    def _conservative_treatment(self, request: PARequest, has_red_flags: bool) -> Optional[ExtractedFactor]:
        if request.conservative_treatment:
            return ExtractedFactor(
                factor=ScoringFactor(
                    id="conservative_tx",
                    name="Conservative Treatment Documented",
                    contribution=0.15,
                    value=", ".join(request.conservative_treatment),
                    explanation="Documentation of failed conservative treatment supports imaging necessity",
                    evidence_citation=self._citation_label("conservative_tx"),
                ),
                score_delta=0.6,
                evidence=self._citation("conservative_tx"),
            )
        if has_red_flags:
            # red flags justify skipping a conservative trial
            return None
        return ExtractedFactor(
            factor=ScoringFactor(
                id="conservative_tx",
                name="Conservative Treatment",
                contribution=-0.125,
                value="Not documented",
                explanation="No conservative treatment trial documented - denial may be defensible",
                evidence_citation=self._citation_label("conservative_tx"),
            ),
            score_delta=-0.5,
        )

    def _icd_specificity(self, request: PARequest) -> Optional[ExtractedFactor]:
        icd10 = request.primary_diagnosis.icd10
        if not ValidationUtils.validate_icd10_code(icd10):
            logger.debug(f"Diagnosis code {icd10!r} on {request.id} does not look like ICD-10")

        specificity = assess_icd_specificity(icd10)
        if specificity == IcdSpecificity.SPECIFIC:
            return ExtractedFactor(
                factor=ScoringFactor(
                    id="icd_specificity",
                    name="Diagnosis Code Specificity",
                    contribution=0.1,
                    value=f"{icd10} - Highly specific",
                    explanation="Specific diagnosis coding supports medical necessity documentation",
                    evidence_citation=self._citation_label("icd_specificity"),
                ),
                score_delta=0.4,
                evidence=self._citation("icd_specificity"),
            )
        if specificity == IcdSpecificity.NONSPECIFIC:
            return ExtractedFactor(
                factor=ScoringFactor(
                    id="icd_specificity",
                    name="Diagnosis Code Specificity",
                    contribution=-0.075,
                    value=f"{icd10} - Non-specific",
                    explanation="Non-specific coding weakens medical necessity justification",
                    evidence_citation=self._citation_label("icd_specificity"),
                ),
                score_delta=-0.3,
            )
        return None

    def _provider_history(self, request: PARequest) -> Optional[ExtractedFactor]:
        rate = request.ordering_provider.historical_approval_rate
        if rate is None:
            return None
        if rate > HIGH_PROVIDER_APPROVAL_RATE:
            return ExtractedFactor(
                factor=ScoringFactor(
                    id="provider_history",
                    name="Provider Approval History",
                    contribution=0.075,
                    value=f"{rate * 100:.0f}% historical approval rate",
                    explanation="Provider has strong track record of appropriate ordering",
                ),
                score_delta=0.3,
            )
        if rate < LOW_PROVIDER_APPROVAL_RATE:
            return ExtractedFactor(
                factor=ScoringFactor(
                    id="provider_history",
                    name="Provider Approval History",
                    contribution=-0.05,
                    value=f"{rate * 100:.0f}% historical approval rate",
                    explanation="Provider has higher-than-average denial rate - additional scrutiny warranted",
                ),
            )
        return None

    def _urgency(self, request: PARequest) -> Optional[ExtractedFactor]:
        if request.urgency != UrgencyLevel.EMERGENT:
            return None
        return ExtractedFactor(
            factor=ScoringFactor(
                id="urgency",
                name="Request Urgency",
                contribution=0.125,
                value="Emergent",
                explanation="Emergent requests have higher approval rates and appeal success",
            ),
            score_delta=0.5,
        )

    def _modality_pattern(self, request: PARequest) -> Optional[ExtractedFactor]:
        baseline = self.modality_baselines.get(request.modality)
        if baseline is None or baseline["avg_appeal_overturn"] <= HIGH_MODALITY_OVERTURN_RATE:
            return None
        overturn = baseline["avg_appeal_overturn"]
        return ExtractedFactor(
            factor=ScoringFactor(
                id="modality_risk",
                name="Modality Appeal Pattern",
                contribution=0.05,
                value=f"{request.modality} - {overturn * 100:.0f}% avg appeal overturn",
                explanation=f"{request.modality} denials have high overturn rates historically",
            ),
        )
