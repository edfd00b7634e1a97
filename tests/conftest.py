"""Pytest configuration and fixtures for AIIE engine tests."""

import pytest
from datetime import datetime, UTC

from aiie.models import (
    PARequest,
    Diagnosis,
    OrderingProvider,
    PriorImaging,
    UrgencyLevel,
    ImagingRelevance,
)


@pytest.fixture
def strong_request() -> PARequest:
    """Well-documented urgent MRI request that should auto-approve."""
    return PARequest(
        id="PA_STRONG_001",
        member_id="MEM-789012",
        request_date="2026-01-27",
        modality="MRI",
        body_region="Lumbar Spine",
        primary_diagnosis=Diagnosis(icd10="M54.17", description="Radiculopathy, lumbosacral region"),
        clinical_indication="Progressive neurological deficit with saddle anesthesia",
        ordering_provider=OrderingProvider(
            npi="0987654321",
            specialty="Neurology",
            historical_approval_rate=0.91,
        ),
        urgency=UrgencyLevel.URGENT,
        prior_imaging=[
            PriorImaging(
                modality="X-ray",
                study_date="2026-01-15",
                findings="Degenerative changes L4-L5",
                relevance=ImagingRelevance.DIRECTLY_RELATED,
            )
        ],
        red_flags=["Progressive neurological deficit", "Saddle anesthesia", "Bladder dysfunction"],
        conservative_treatment=["Physical therapy x 6 weeks", "NSAIDs", "Muscle relaxants"],
    )


@pytest.fixture
def weak_request() -> PARequest:
    """Routine CT request with no supporting workup."""
    return PARequest(
        id="PA_WEAK_001",
        member_id="MEM-345678",
        modality="CT",
        body_region="Abdomen/Pelvis",
        primary_diagnosis=Diagnosis(icd10="R109", description="Abdominal pain"),
        clinical_indication="Abdominal pain",
        ordering_provider=OrderingProvider(
            npi="5678901234",
            specialty="Internal Medicine",
            historical_approval_rate=0.78,
        ),
        urgency=UrgencyLevel.ROUTINE,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 1, 27, 9, 0, tzinfo=UTC)


@pytest.fixture
def clock(fixed_now):
    """A clock that returns fixed_now unless advanced by the test."""
    class _Clock:
        def __init__(self, now):
            self.now = now

        def __call__(self):
            return self.now

    return _Clock(fixed_now)
