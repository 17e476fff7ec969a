"""
Module: core.errors

Purpose:
    Structured exception hierarchy for bank builds. Every error carries a
    machine-readable ``kind`` plus the source location, so callers can
    branch on the failure class instead of parsing message text.

Key Classes:
    - BankBuildError: Base class (kind="build")
    - StructuralParseError: Malformed macro structure (kind="structural")
    - SemanticValidationError: Well-formed but invalid content (kind="semantic")
    - SchemaValidationError: Assembled bank fails its JSON schema (kind="schema")
    - ConfigError: Sources configuration could not be loaded (kind="config")
    - SourceReadError: LaTeX file missing or not UTF-8 (kind="io")

Dependencies:
    - typing (std)

Used By:
    - qbank_toolkit.compiler: All parsing stages
    - qbank_toolkit.core.models.identifiers: Question id grammar
    - qbank_toolkit.core.schemas.validator: Bank validation
    - qbank_toolkit.cli: Top-level error reporting
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class BankBuildError(Exception):
    """
    Base error for everything that can abort a bank build.

    Attributes:
        kind: Failure class ("build", "structural", "semantic", "schema", "config", "io")
        message: Human-readable description without location prefix
        file: Source file the error originates from (if known)
        line: 1-based line in ``file`` (if known)
        context: Extra identifiers (uids, keys, files) for diagnostics
    """

    kind = "build"

    def __init__(
        self,
        message: str,
        *,
        file: Optional[str] = None,
        line: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.file = file
        self.line = line
        self.context: Dict[str, Any] = dict(context or {})

    @property
    def location(self) -> str:
        """Location prefix like ``file.tex:12`` (empty if no file)."""
        if self.file is None:
            return ""
        if self.line is None:
            return self.file
        return f"{self.file}:{self.line}"

    def __str__(self) -> str:
        if self.location:
            return f"[{self.location}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.file is not None:
            d["file"] = self.file
        if self.line is not None:
            d["line"] = self.line
        if self.context:
            d["context"] = self.context
        return d


class StructuralParseError(BankBuildError):
    """Unbalanced braces, missing required group, or unknown choice macro."""

    kind = "structural"


class SemanticValidationError(BankBuildError):
    """Duplicate choices/uids/content, bad answer designator, or bad id."""

    kind = "semantic"


class SchemaValidationError(BankBuildError):
    """
    Raised when an assembled bank fails its JSON schema.

    This always indicates a bug upstream of the validator, never bad
    author input.
    """

    kind = "schema"

    def __init__(
        self,
        message: str,
        path: str = "",
        errors: Optional[List[str]] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.path = path
        self.errors = errors or []


class ConfigError(BankBuildError):
    """Sources configuration is missing, unreadable, or malformed."""

    kind = "config"


class SourceReadError(BankBuildError):
    """A LaTeX source file could not be read or is not valid UTF-8."""

    kind = "io"
