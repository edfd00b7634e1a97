"""
Demo PA requests for the review workflow.

high-risk-approval: MRI lumbar spine, nonspecific low back pain, no workup (denial likely)
low-risk-approval:  MRI lumbar spine with cauda equina red flags (auto-approve)
medium-risk:        CT abdomen/pelvis, unspecified abdominal pain (clinical review)
emergent-pet:       Emergent PET/CT restaging, no prior workup

"high" / "low" name the approval likelihood, not the denial risk.
"""

from typing import Any, Dict, Optional

from .models import PARequest


DEMO_SCENARIOS: Dict[str, Dict[str, Any]] = {
    "high-risk-approval": {
        "id": "demo-001",
        "member_id": "MEM-123456",
        "request_date": "2026-01-27",
        "modality": "MRI",
        "body_region": "Lumbar Spine",
        "primary_diagnosis": {
            "icd10": "M54.5",
            "description": "Low back pain",
        },
        "clinical_indication": "Chronic low back pain, 6 weeks duration",
        "ordering_provider": {
            "npi": "1234567890",
            "specialty": "Family Medicine",
            "historical_approval_rate": 0.72,
        },
        "urgency": "routine",
        "prior_imaging": [],
        "red_flags": [],
        "conservative_treatment": [],
    },
    "low-risk-approval": {
        "id": "demo-002",
        "member_id": "MEM-789012",
        "request_date": "2026-01-27",
        "modality": "MRI",
        "body_region": "Lumbar Spine",
        "primary_diagnosis": {
            "icd10": "M54.17",
            "description": "Radiculopathy, lumbosacral region",
        },
        "clinical_indication": "Progressive neurological deficit with saddle anesthesia",
        "ordering_provider": {
            "npi": "0987654321",
            "specialty": "Neurology",
            "historical_approval_rate": 0.91,
        },
        "urgency": "urgent",
        "prior_imaging": [
            {
                "modality": "X-ray",
                "study_date": "2026-01-15",
                "findings": "Degenerative changes L4-L5",
                "relevance": "directly_related",
            },
        ],
        "red_flags": [
            "Progressive neurological deficit",
            "Saddle anesthesia",
            "Bladder dysfunction",
        ],
        "conservative_treatment": [
            "Physical therapy x 6 weeks",
            "NSAIDs",
            "Muscle relaxants",
        ],
    },
    "medium-risk": {
        "id": "demo-003",
        "member_id": "MEM-345678",
        "request_date": "2026-01-27",
        "modality": "CT",
        "body_region": "Abdomen/Pelvis",
        "primary_diagnosis": {
            "icd10": "R10.9",
            "description": "Unspecified abdominal pain",
        },
        "clinical_indication": "Abdominal pain with elevated inflammatory markers",
        "ordering_provider": {
            "npi": "5678901234",
            "specialty": "Internal Medicine",
            "historical_approval_rate": 0.78,
        },
        "urgency": "routine",
        "prior_imaging": [],
        "red_flags": [],
        "conservative_treatment": ["Trial of PPI therapy"],
    },
    "emergent-pet": {
        "id": "demo-004",
        "member_id": "MEM-901234",
        "request_date": "2026-01-28",
        "modality": "PET",
        "body_region": "Whole Body",
        "primary_diagnosis": {
            "icd10": "C34.90",
            "description": "Malignant neoplasm of unspecified part of unspecified bronchus or lung",
        },
        "clinical_indication": "Restaging after new hemoptysis and weight loss",
        "ordering_provider": {
            "npi": "4567890123",
            "specialty": "Oncology",
            "historical_approval_rate": 0.88,
        },
        "urgency": "emergent",
        "prior_imaging": [],
        "red_flags": ["Hemoptysis", "Unexplained weight loss"],
        "conservative_treatment": [],
    },
}

# Provider / payer / state context the review workflow runs each scenario with
REVIEW_CONTEXTS: Dict[str, Dict[str, Any]] = {
    "high-risk-approval": {
        "payer_id": "Aetna",
        "approval_rate": 72.0,
        "order_count": 40,
        "rate_history": [68.0, 69.5, 70.0, 70.5, 71.0, 72.0],
        "state_code": "CA",
    },
    "low-risk-approval": {
        "payer_id": "UnitedHealthcare",
        "approval_rate": 93.0,
        "order_count": 110,
        "rate_history": [89.0, 90.0, 90.5, 91.5, 92.0, 93.0],
        "state_code": "TX",
    },
    "medium-risk": {
        "payer_id": "Blue Cross Blue Shield",
        "approval_rate": 78.0,
        "order_count": 80,
        "state_code": "NY",
    },
    "emergent-pet": {
        "payer_id": "Humana",
        "approval_rate": 88.0,
        "order_count": 65,
        "state_code": "FL",
    },
}


def get_scenario(scenario_id: str) -> Optional[PARequest]:
    data = DEMO_SCENARIOS.get(scenario_id)
    if data is None:
        return None
    return PARequest.model_validate(data)


def get_review_context(scenario_id: str) -> Dict[str, Any]:
    return dict(REVIEW_CONTEXTS.get(scenario_id, {}))
