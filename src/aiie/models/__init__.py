"""Data models for the AIIE prior-authorization engine."""

from .core import (
    UrgencyLevel,
    Modality,
    ImagingRelevance,
    ReviewStatus,
    PriorImaging,
    Diagnosis,
    OrderingProvider,
    PARequest,
)

from .prediction import (
    RiskCategory,
    RecommendedAction,
    IcdSpecificity,
    EvidenceCitation,
    ScoringFactor,
    AIIEPrediction,
)

from .appeal import (
    AppealInputs,
    AppealCostSavings,
)

from .gold_card import (
    GoldCardTrend,
    GoldCardThreshold,
    PayerResolution,
    EligibilityHistoryItem,
    GoldCardStatus,
)

from .compliance import (
    ComplianceStatusLabel,
    DeadlineUrgency,
    DeadlinePolicy,
    ComplianceStatus,
    Decision,
    StateRequirement,
    StateComplianceLabel,
    ComplianceResult,
)

from .audit import (
    AuditActor,
    ComplianceCheckStatus,
    ActorDetails,
    AIInvolvement,
    AuditEntry,
    ComplianceCheck,
    AuditSummary,
    AuditReport,
)

from .validation import (
    ValidationUtils
)

__all__ = [
    # Core models
    "UrgencyLevel",
    "Modality",
    "ImagingRelevance",
    "ReviewStatus",
    "PriorImaging",
    "Diagnosis",
    "OrderingProvider",
    "PARequest",
    # Prediction models
    "RiskCategory",
    "RecommendedAction",
    "IcdSpecificity",
    "EvidenceCitation",
    "ScoringFactor",
    "AIIEPrediction",
    # Appeal models
    "AppealInputs",
    "AppealCostSavings",
    # Gold card models
    "GoldCardTrend",
    "GoldCardThreshold",
    "PayerResolution",
    "EligibilityHistoryItem",
    "GoldCardStatus",
    # Compliance models
    "ComplianceStatusLabel",
    "DeadlineUrgency",
    "DeadlinePolicy",
    "ComplianceStatus",
    "Decision",
    "StateRequirement",
    "StateComplianceLabel",
    "ComplianceResult",
    # Audit models
    "AuditActor",
    "ComplianceCheckStatus",
    "ActorDetails",
    "AIInvolvement",
    "AuditEntry",
    "ComplianceCheck",
    "AuditSummary",
    "AuditReport",
    # Validation utilities
    "ValidationUtils",
]
