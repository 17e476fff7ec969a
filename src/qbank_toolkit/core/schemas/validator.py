"""
Bank Schema Validation

Validates assembled bank documents against the JSON schemas shipped in
this directory (``bank_public.schema.json`` / ``bank_answers.schema.json``).

A failure here means the compiler produced something it should not have:
the schemas describe what downstream consumers accept, and every author
error is supposed to be caught earlier with a file/line diagnostic.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import SchemaValidationError

PUBLIC_BANK_SCHEMA = "bank_public"
ANSWERS_BANK_SCHEMA = "bank_answers"

# Loaded lazily, never mutated after load
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


def _validate(data: dict[str, Any], schema_name: str) -> None:
    schema = _load_schema(schema_name)
    validator = jsonschema.Draft202012Validator(schema)
    errors = list(validator.iter_errors(data))
    if errors:
        first = jsonschema.exceptions.best_match(errors)
        raise SchemaValidationError(
            f"{schema_name} schema validation failed: {first.message}",
            path=".".join(str(p) for p in first.absolute_path),
            errors=[e.message for e in errors],
        )

    # Cross-field checks the schema cannot express
    subject = data["subject"]
    for i, question in enumerate(data["questions"]):
        if question["subject"] != subject:
            raise SchemaValidationError(
                f"Question subject {question['subject']!r} does not match bank subject {subject!r}",
                path=f"questions.{i}.subject",
            )
        if question["type"] == "fill-blank" and "answers" in question:
            if len(question["answers"]) != question["blankCount"]:
                raise SchemaValidationError(
                    f"{question['uid']}: answers length does not match blankCount",
                    path=f"questions.{i}.answers",
                )


def validate_public_bank(data: dict[str, Any]) -> None:
    """
    Validate a public bank document.

    Args:
        data: Output of ``Bank.to_dict()`` for the public bank

    Raises:
        SchemaValidationError: If data does not match the public schema
    """
    _validate(data, PUBLIC_BANK_SCHEMA)


def validate_answers_bank(data: dict[str, Any]) -> None:
    """
    Validate an answers bank document.

    Args:
        data: Output of ``Bank.to_dict()`` for the answers bank

    Raises:
        SchemaValidationError: If data does not match the answers schema
    """
    _validate(data, ANSWERS_BANK_SCHEMA)
