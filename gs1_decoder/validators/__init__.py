"""
Validation modules for the GS1 decoder.
"""

from .dates import (
    DEFAULT_CENTURY,
    ValidationResult,
    normalize_gs1_date,
    to_gs1_date,
    validate_gs1_date,
)

__all__ = [
    "DEFAULT_CENTURY",
    "ValidationResult",
    "normalize_gs1_date",
    "to_gs1_date",
    "validate_gs1_date",
]
