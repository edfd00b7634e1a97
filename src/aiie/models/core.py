"""Core data models for the AIIE prior-authorization engine."""

from typing import List, Optional
from datetime import date
from pydantic import BaseModel, Field, field_validator, ConfigDict
from enum import Enum

from .validation import ValidationUtils


class UrgencyLevel(str, Enum):
    """Urgency level for PA requests."""
    ROUTINE = "routine"
    URGENT = "urgent"
    EMERGENT = "emergent"


class Modality(str, Enum):
    """Imaging modalities with known historical baselines."""
    MRI = "MRI"
    CT = "CT"
    PET = "PET"
    NUCLEAR_MEDICINE = "Nuclear Medicine"
    ULTRASOUND = "Ultrasound"


class ImagingRelevance(str, Enum):
    """How a prior imaging study relates to the current request."""
    DIRECTLY_RELATED = "directly_related"
    POSSIBLY_RELATED = "possibly_related"
    UNRELATED = "unrelated"


class ReviewStatus(str, Enum):
    """Status of a PA review session."""
    INTAKE = "intake"
    SCORED = "scored"
    APPEAL_ESTIMATED = "appeal_estimated"
    GOLD_CARD_CHECKED = "gold_card_checked"
    DEADLINE_CHECKED = "deadline_checked"
    STATE_LAW_CHECKED = "state_law_checked"
    AWAITING_SIGN_OFF = "awaiting_sign_off"
    COMPLETE = "complete"


class PriorImaging(BaseModel):
    """A previously performed imaging study."""
    model_config = ConfigDict(use_enum_values=True, frozen=True)

    modality: str = Field(..., description="Modality of the prior study")
    study_date: Optional[date] = Field(None, description="When the study was performed")
    findings: str = Field(default="", description="Summary of findings")
    relevance: ImagingRelevance = Field(
        default=ImagingRelevance.POSSIBLY_RELATED,
        description="Relation to the current request"
    )


class Diagnosis(BaseModel):
    """Primary diagnosis attached to the request."""
    model_config = ConfigDict(frozen=True)

    icd10: str = Field(..., description="ICD-10 diagnosis code")
    description: str = Field(default="", description="Diagnosis description")

    @field_validator('icd10')
    @classmethod
    def validate_icd10(cls, v):
        """Diagnosis code is a required identifier; format is not enforced."""
        cleaned = ValidationUtils.normalize_icd10(v)
        if not cleaned:
            raise ValueError("Primary diagnosis code cannot be empty")
        return cleaned


class OrderingProvider(BaseModel):
    """Profile of the provider ordering the study."""
    model_config = ConfigDict(frozen=True)

    npi: Optional[str] = Field(None, description="National Provider Identifier")
    specialty: str = Field(default="", description="Provider specialty")
    historical_approval_rate: Optional[float] = Field(
        None, description="Historical PA approval rate as a fraction (0-1)"
    )

    @field_validator('npi')
    @classmethod
    def validate_npi(cls, v):
        """Validate NPI format (10 digits) when present."""
        if v is None:
            return v
        v = ValidationUtils.sanitize_string(v)
        if not ValidationUtils.validate_npi(v):
            raise ValueError(f"NPI must be exactly 10 digits, got: {v}")
        return v

    @field_validator('historical_approval_rate')
    @classmethod
    def clamp_approval_rate(cls, v):
        if v is None:
            return v
        return max(0.0, min(1.0, v))


class PARequest(BaseModel):
    """Immutable PA request record supplied by the intake layer."""
    model_config = ConfigDict(use_enum_values=True, frozen=True)

    id: str = Field(..., description="Unique identifier for the PA request")
    member_id: str = Field(default="", description="Member identifier")
    request_date: Optional[date] = Field(None, description="Date the request was received")
    modality: str = Field(..., description="Requested imaging modality")
    body_region: str = Field(default="", description="Body region to be imaged")
    primary_diagnosis: Diagnosis = Field(..., description="Primary diagnosis")
    clinical_indication: str = Field(default="", description="Clinical indication for the study")
    ordering_provider: OrderingProvider = Field(
        default_factory=OrderingProvider, description="Ordering provider profile"
    )
    urgency: UrgencyLevel = Field(default=UrgencyLevel.ROUTINE, description="Urgency of the request")
    prior_imaging: List[PriorImaging] = Field(default_factory=list, description="Prior imaging studies")
    red_flags: List[str] = Field(default_factory=list, description="Documented clinical red flags")
    conservative_treatment: List[str] = Field(
        default_factory=list, description="Conservative treatments already tried"
    )

    @field_validator('id')
    @classmethod
    def validate_id(cls, v):
        cleaned = ValidationUtils.sanitize_string(v)
        if not cleaned:
            raise ValueError("PA request id cannot be empty")
        return cleaned

    @field_validator('modality', mode='before')
    @classmethod
    def validate_modality(cls, v):
        """Accept Modality members or free text; unknown modalities are kept as given."""
        if isinstance(v, Modality):
            return v.value
        if v is None:
            raise ValueError("modality is required")
        cleaned = ValidationUtils.sanitize_string(v)
        if not cleaned:
            raise ValueError("modality cannot be empty")
        return cleaned

    @field_validator('prior_imaging', 'red_flags', 'conservative_treatment', mode='before')
    @classmethod
    def default_empty_lists(cls, v):
        """Absent optional lists are treated as empty."""
        return v if v is not None else []

    @property
    def relevant_prior_imaging(self) -> List[PriorImaging]:
        """Prior studies that are not marked unrelated."""
        return [p for p in self.prior_imaging if p.relevance != ImagingRelevance.UNRELATED]
