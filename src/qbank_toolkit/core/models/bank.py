"""
Module: bank

Purpose:
    Provides the Bank dataclass - a versioned, ordered collection of
    questions for one subject in either public or answers shape.

Key Functions:
    - Bank.to_dict() / Bank.from_dict(): Serialization
    - utc_timestamp(): ISO-8601 UTC timestamp used for generatedAt

Dependencies:
    - dataclasses (std)
    - datetime (std)
    - .questions

Used By:
    - compiler.assembler: Bank construction
    - compiler.writer: JSON output
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple, Union

from .questions import AnswerQuestion, PublicQuestion, question_from_dict

BANK_VERSION = "v1"


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """
    Format a UTC timestamp like ``2026-01-31T12:00:00.000Z``.

    Args:
        now: Moment to format (defaults to the current time)
    """
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Bank:
    """
    Versioned question bank (immutable).

    The public and answers banks of one build share ``subject``,
    ``generated_at`` and question order.

    Attributes:
        subject: Subject slug like "discrete-math"
        generated_at: ISO-8601 UTC timestamp
        questions: Ordered questions, all of one shape
        version: Bank format version (always "v1")
    """
    subject: str
    generated_at: str
    questions: Tuple[Union[PublicQuestion, AnswerQuestion], ...]
    version: str = BANK_VERSION

    def __post_init__(self) -> None:
        if self.version != BANK_VERSION:
            raise ValueError(f"Unsupported bank version: {self.version!r}")

    def __len__(self) -> int:
        return len(self.questions)

    @property
    def uids(self) -> list[str]:
        return [q.uid for q in self.questions]

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "subject": self.subject,
            "generatedAt": self.generated_at,
            "questions": [q.to_dict() for q in self.questions],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Bank:
        return cls(
            subject=data["subject"],
            generated_at=data["generatedAt"],
            questions=tuple(question_from_dict(q) for q in data["questions"]),
            version=data.get("version", BANK_VERSION),
        )
