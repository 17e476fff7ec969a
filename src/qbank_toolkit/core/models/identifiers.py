"""
Module: identifiers

Purpose:
    Question id grammar and uid derivation. Author ids look like
    ``graph:q12`` (basic), ``basicgraph:q3`` (basic, explicit prefix) or
    ``advanceprobability:q02`` (advanced). The uid namespaces the raw id
    under a course code so it is unique across the whole corpus.

Key Functions:
    - parse_question_id(raw): Decompose a raw id into topic/level/number
    - make_uid(course_code, raw): Derive the corpus-wide uid

Dependencies:
    - re (std)
    - core.errors.SemanticValidationError

Used By:
    - compiler.fields: Identity resolution for every extracted question
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from ..errors import SemanticValidationError


class QuestionLevel(str, Enum):
    """Difficulty level encoded in the question id prefix."""
    BASIC = "basic"
    ADVANCED = "advanced"

    def __str__(self) -> str:
        return self.value


# Order matters: the generic pattern would also match "advance..." ids.
_ID_PATTERNS = (
    (re.compile(r"^advance([a-z0-9-]+):q(\d+)$", re.IGNORECASE | re.ASCII), QuestionLevel.ADVANCED),
    (re.compile(r"^basic([a-z0-9-]+):q(\d+)$", re.IGNORECASE | re.ASCII), QuestionLevel.BASIC),
    (re.compile(r"^([a-z0-9-]+):q(\d+)$", re.IGNORECASE | re.ASCII), QuestionLevel.BASIC),
)

UID_PREFIX = "latex"


@dataclass(frozen=True, slots=True)
class QuestionId:
    """
    Parsed author id.

    Attributes:
        topic: Lowercased topic slug like "graph"
        level: BASIC or ADVANCED
        number: Question number within the topic
    """
    topic: str
    level: QuestionLevel
    number: int


def parse_question_id(raw_id: str) -> QuestionId:
    """
    Decompose a raw author id.

    Args:
        raw_id: Id as written in the first group of a question macro

    Returns:
        QuestionId with lowercased topic

    Raises:
        SemanticValidationError: If the id does not follow the grammar

    Example:
        >>> parse_question_id("advanceProbability:q02")
        QuestionId(topic='probability', level=<QuestionLevel.ADVANCED: 'advanced'>, number=2)
    """
    normalized = raw_id.strip()
    for pattern, level in _ID_PATTERNS:
        match = pattern.match(normalized)
        if match:
            topic, number = match.groups()
            return QuestionId(topic=topic.lower(), level=level, number=int(number))
    raise SemanticValidationError(
        f"Invalid question id: {raw_id}",
        context={"id": raw_id},
    )


def make_uid(course_code: str, raw_id: str) -> str:
    """Derive the corpus-wide uid, e.g. ``latex:MAT3500:graph:q12``."""
    return f"{UID_PREFIX}:{course_code}:{raw_id}"
