"""Validation utilities and identifier canonicalization for the AIIE engine."""

import re
from datetime import datetime, UTC
from typing import Optional


class ValidationUtils:
    """Utility class for data validation and sanitization."""

    # Regex patterns for common validations
    NPI_PATTERN = re.compile(r'^\d{10}$')
    ICD10_PATTERN = re.compile(r'^[A-Z]\d{2}[A-Z0-9]{0,4}(\.[A-Z0-9]{1,4})?$')

    @classmethod
    def sanitize_string(cls, value: str) -> str:
        """Sanitize string input by trimming whitespace and normalizing."""
        if not isinstance(value, str):
            return str(value)
        return value.strip()

    @classmethod
    def validate_npi(cls, npi: str) -> bool:
        """Validate National Provider Identifier format."""
        if not npi:
            return False
        return bool(cls.NPI_PATTERN.match(npi))

    @classmethod
    def normalize_icd10(cls, code: str) -> str:
        """Trim and upper-case an ICD-10 code without altering its punctuation."""
        return cls.sanitize_string(code).upper()

    @classmethod
    def validate_icd10_code(cls, code: str) -> bool:
        """Validate ICD-10 code format, with or without the decimal point."""
        if not code:
            return False
        return bool(cls.ICD10_PATTERN.match(cls.normalize_icd10(code)))

    @classmethod
    def icd10_suffix(cls, code: str) -> Optional[str]:
        """Return the part after the decimal point, or None when the code has no point."""
        parts = cls.normalize_icd10(code).split('.')
        if len(parts) > 1:
            return parts[1]
        return None

    @classmethod
    def canonical_state_code(cls, state: str) -> str:
        """Canonicalize a state identifier to its two-letter upper-case prefix."""
        if not state:
            return ""
        return cls.sanitize_string(state).upper()[:2]

    @classmethod
    def ensure_utc(cls, value: datetime) -> datetime:
        """Treat naive datetimes as UTC and convert aware ones to UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
