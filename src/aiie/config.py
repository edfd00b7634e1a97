"""
config.py - Centralized configuration for the AIIE decision engine.

Environment variables are read once at import; every value has a default so
the engine runs without any configuration.
"""

import os

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

# "tiered" (70/85% plus absolute remaining-time cutoffs) or "percentage_only" (75/90%)
DEADLINE_POLICY = os.getenv("AIIE_DEADLINE_POLICY", "tiered").strip().lower() or "tiered"

# Payer whose gold-card threshold applies when a payer identifier cannot be resolved
DEFAULT_PAYER = os.getenv("AIIE_DEFAULT_PAYER", "UnitedHealthcare").strip() or "UnitedHealthcare"

AUDIT_LOG_LEVEL = os.getenv("AIIE_AUDIT_LOG_LEVEL", "INFO").strip().upper() or "INFO"

# Stamped on the AI-involvement record of every scoring audit entry
MODEL_ID = os.getenv("AIIE_MODEL_ID", "aiie-rules-2.0.0").strip() or "aiie-rules-2.0.0"


# =============================================================================
# AUDIT TRAIL DEFAULTS
# =============================================================================

DEFAULT_COMPLIANCE_CHECKS = [
    {"id": "doc-review", "rule": "Documentation reviewed"},
    {"id": "criteria-match", "rule": "RBM criteria matched"},
    {"id": "human-sign-off", "rule": "Human-in-the-loop sign-off"},
]

DEFAULT_REQUIRED_COMPLIANCE_IDS = [check["id"] for check in DEFAULT_COMPLIANCE_CHECKS]
