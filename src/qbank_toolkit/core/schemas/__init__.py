"""
Schemas Package

JSON schema definitions and validation for generated banks.
"""

from .validator import (
    validate_public_bank,
    validate_answers_bank,
    PUBLIC_BANK_SCHEMA,
    ANSWERS_BANK_SCHEMA,
)

__all__ = [
    "validate_public_bank",
    "validate_answers_bank",
    "PUBLIC_BANK_SCHEMA",
    "ANSWERS_BANK_SCHEMA",
]
