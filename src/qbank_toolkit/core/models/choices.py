"""
Module: choices

Purpose:
    Provides the Choice dataclass and the fixed A-E key alphabet used by
    multiple-choice questions.

Key Functions:
    - key_for_position(index): Map a 0-based position to its choice key
    - Choice.to_dict() / Choice.from_dict(): Serialization

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.questions
    - compiler.choices
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

CHOICE_KEYS: Tuple[str, ...] = ("A", "B", "C", "D", "E")


def key_for_position(index: int) -> str:
    """
    Map a 0-based position to its choice key.

    Args:
        index: Position in the choice list (0 for the first choice)

    Returns:
        Choice key "A".."E"

    Raises:
        ValueError: If index is outside 0-4

    Example:
        >>> key_for_position(2)
        'C'
    """
    if not (0 <= index < len(CHOICE_KEYS)):
        raise ValueError(f"choice position out of range: {index}")
    return CHOICE_KEYS[index]


@dataclass(frozen=True, slots=True)
class Choice:
    """
    One option of a multiple-choice question.

    Attributes:
        key: Positional key "A".."E"
        text: Trimmed LaTeX text of the option
    """

    key: str
    text: str

    def __post_init__(self) -> None:
        if self.key not in CHOICE_KEYS:
            raise ValueError(f"choice key must be one of {CHOICE_KEYS}: {self.key!r}")

    def with_text(self, text: str) -> Choice:
        return Choice(self.key, text)

    def to_dict(self) -> dict:
        return {"key": self.key, "text": self.text}

    @classmethod
    def from_dict(cls, data: dict) -> Choice:
        return cls(key=data["key"], text=data["text"])
