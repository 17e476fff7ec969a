"""
Module: compiler.fields

Purpose:
    Field-level helpers shared by the MCQ and fill-blank extractors:
    resolving a raw id into topic/level/number/uid, and running the
    auxiliary rewrites (citations, then footnotes) over one text span.

Key Functions:
    - resolve_identity(): Raw id -> QuestionIdentity (with uid)
    - rewrite_span(): Citation + footnote processing for one span

Dependencies:
    - core.models.identifiers: Id grammar and uid derivation
    - compiler.citations, compiler.footnotes

Used By:
    - compiler.mcq
    - compiler.fill_blank
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..core.errors import SemanticValidationError
from ..core.models.identifiers import QuestionLevel, make_uid, parse_question_id
from .citations import process_citations
from .footnotes import FootnoteManager


@dataclass(frozen=True)
class QuestionIdentity:
    """Identity fields of one question (everything derived from the raw id)."""
    uid: str
    id: str
    topic: str
    level: QuestionLevel
    number: int


def resolve_identity(raw_id: str, course_code: str, file: str, line: int) -> QuestionIdentity:
    """
    Parse ``raw_id`` and derive its uid.

    Raises:
        SemanticValidationError: If the id is malformed (located at
            ``file:line``)
    """
    try:
        parsed = parse_question_id(raw_id)
    except SemanticValidationError as exc:
        raise SemanticValidationError(exc.message, file=file, line=line, context=exc.context) from exc
    return QuestionIdentity(
        uid=make_uid(course_code, raw_id),
        id=raw_id,
        topic=parsed.topic,
        level=parsed.level,
        number=parsed.number,
    )


def rewrite_span(text: str, file: str, base_line: int) -> Tuple[str, FootnoteManager]:
    """
    Run citation and footnote rewriting over one span.

    Each call uses a fresh FootnoteManager, so numbering restarts per span.

    Returns:
        Tuple of (processed text, the span's footnote manager)
    """
    footnotes = FootnoteManager(file, base_line=base_line)
    return footnotes.process(process_citations(text)), footnotes
