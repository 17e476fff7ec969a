"""
Module: compiler.choices

Purpose:
    Parses the choice block of a multiple-choice question. Four fixed-arity
    macros are supported, each taking the correct-choice designator first
    and then the choice texts in A, B, C... order:

        \\haipa[layout]{correct}{c1}{c2}
        \\bapa[layout]{correct}{c1}{c2}{c3}
        \\bonpa[layout]{correct}{c1}{c2}{c3}{c4}
        \\nampa[layout]{correct}{c1}{c2}{c3}{c4}{c5}

    The designator is a letter (A-E, any case) or a 1-based position (1-5).

Key Functions:
    - parse_choices_block(): Block text -> ChoiceBlock(answer_key, choices)

Dependencies:
    - compiler.scanner: Group parsing
    - core.models.choices: Choice, CHOICE_KEYS

Used By:
    - compiler.mcq
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Tuple

from ..core.errors import SemanticValidationError, StructuralParseError
from ..core.models.choices import CHOICE_KEYS, Choice
from .scanner import line_from_index, normalize_for_compare, parse_required_groups

CHOICE_MACROS: Tuple[Tuple[str, int], ...] = (
    ("\\bonpa", 4),
    ("\\haipa", 2),
    ("\\bapa", 3),
    ("\\nampa", 5),
)

_POSITION_RE = re.compile(r"^[1-5]$")


@dataclass(frozen=True)
class ChoiceBlock:
    """
    Parsed choice block.

    Attributes:
        answer_key: Key of the correct choice
        choices: Choices in positional order
        macro: Macro the block was written with
    """
    answer_key: str
    choices: Tuple[Choice, ...]
    macro: str


def parse_choices_block(
    block: str,
    file: str,
    question_id: str,
    *,
    base_line: int = 1,
) -> ChoiceBlock:
    """
    Parse a choice block.

    Args:
        block: Raw (footnote/citation-processed) text of the choices group
        file: Source file for diagnostics
        question_id: Author id of the owning question, for diagnostics
        base_line: Line number of ``block[0]`` in ``file``

    Returns:
        ChoiceBlock with the resolved answer key and ordered choices

    Raises:
        StructuralParseError: Unknown macro, unterminated layout option,
            or missing/unbalanced group
        SemanticValidationError: Bad designator, designator outside the
            macro's arity, or two choices with the same normalized text

    Example:
        >>> block = parse_choices_block("\\bonpa{2}{W}{X}{Y}{Z}", "q.tex", "t:q1")
        >>> block.answer_key
        'B'
    """
    # Line numbers must survive the trim
    leading = block[: len(block) - len(block.lstrip())]
    base_line += leading.count("\n")
    trimmed = block.strip()

    match = next(((cmd, n) for cmd, n in CHOICE_MACROS if trimmed.startswith(cmd)), None)
    if match is None:
        supported = ", ".join(cmd for cmd, _ in CHOICE_MACROS)
        raise StructuralParseError(
            f"Expected one of {supported} in choices block of {question_id}",
            file=file,
            line=base_line,
            context={"id": question_id},
        )
    macro, arity = match

    idx = len(macro)
    if idx < len(trimmed) and trimmed[idx] == "[":
        close = trimmed.find("]", idx + 1)
        if close == -1:
            raise StructuralParseError(
                f"Unterminated layout option in {macro}",
                file=file,
                line=line_from_index(trimmed, idx, base_line),
            )
        idx = close + 1

    groups, _ = parse_required_groups(trimmed, idx, arity + 1, macro, file, base_line=base_line)
    correct_raw = groups[0].content
    texts = [g.content for g in groups[1:]]

    answer_key = _resolve_designator(correct_raw, macro, file, question_id, base_line)
    allowed = CHOICE_KEYS[:arity]
    if answer_key not in allowed:
        raise SemanticValidationError(
            f"Correct choice '{answer_key}' out of range for {macro} in {question_id}",
            file=file,
            line=base_line,
            context={"id": question_id, "answer_key": answer_key, "arity": arity},
        )

    choices = tuple(Choice(key=key, text=text.strip()) for key, text in zip(allowed, texts))

    seen: Dict[str, str] = {}
    for choice in choices:
        norm = normalize_for_compare(choice.text)
        other_key = seen.get(norm)
        if other_key is not None:
            raise SemanticValidationError(
                f"Duplicate choice text in {question_id}: '{choice.text}' "
                f"(choices {other_key} and {choice.key})",
                file=file,
                line=base_line,
                context={"id": question_id, "keys": [other_key, choice.key], "text": choice.text},
            )
        seen[norm] = choice.key

    return ChoiceBlock(answer_key=answer_key, choices=choices, macro=macro)


def _resolve_designator(raw: str, macro: str, file: str, question_id: str, line: int) -> str:
    """Map a letter or 1-based position to a choice key."""
    token = raw.strip().upper()
    if token in CHOICE_KEYS:
        return token
    if _POSITION_RE.match(token):
        return CHOICE_KEYS[int(token) - 1]
    raise SemanticValidationError(
        f"Invalid correct choice code '{raw}' in {macro}",
        file=file,
        line=line,
        context={"id": question_id, "designator": raw},
    )
