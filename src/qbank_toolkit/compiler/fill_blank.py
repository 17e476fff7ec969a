"""
Module: compiler.fill_blank

Purpose:
    Extracts fill-in-the-blank questions written as

        \\baidienvao[opt][opt]{id}{prompt}{solution}

    Blanks are marked inline in the prompt. ``\\blank{ans}`` and
    ``\\answer{ans}`` are graded blanks whose content becomes an accepted
    answer; ``\\daugach{...}`` is a visual-only blank. Every marker is
    replaced by the same placeholder.

Key Functions:
    - parse_fill_blank_questions(): Cleaned document text -> ParseResult list
    - extract_inline_blanks(): Prompt -> (masked prompt, answers)

Dependencies:
    - compiler.scanner: Group parsing and marker search
    - compiler.fields: Identity and auxiliary rewrites

Used By:
    - compiler.assembler
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from ..core.models.questions import FillBlankAnswerQuestion, FillBlankPublicQuestion, ParseResult
from .citations import process_citations
from .fields import resolve_identity, rewrite_span
from .scanner import (
    find_earliest,
    line_from_index,
    parse_group,
    parse_required_groups,
    skip_bracket_groups,
    skip_whitespace,
)

logger = logging.getLogger(__name__)

FILL_BLANK_MACRO = "\\baidienvao"
BLANK_PLACEHOLDER = "\\underline{\\qquad}"

GRADED_BLANK_MARKERS: Tuple[str, ...] = ("\\blank", "\\answer")
VISUAL_BLANK_MARKER = "\\daugach"
BLANK_MARKERS: Tuple[str, ...] = GRADED_BLANK_MARKERS + (VISUAL_BLANK_MARKER,)

MAX_OPTION_GROUPS = 2


@dataclass(frozen=True)
class MaskedPrompt:
    """
    Prompt with its blank markers replaced.

    Attributes:
        text: Prompt with every marker replaced by BLANK_PLACEHOLDER
        answers: Graded answers in appearance order
    """
    text: str
    answers: Tuple[str, ...]


def extract_inline_blanks(prompt: str, file: str, *, base_line: int = 1) -> MaskedPrompt:
    """
    Replace inline blank markers and collect graded answers.

    A marker not followed by ``{`` is kept verbatim.

    Example:
        >>> masked = extract_inline_blanks("\\blank{42} + \\daugach{} = \\answer{x+y}", "q.tex")
        >>> masked.answers
        ('42', 'x+y')
    """
    answers: List[str] = []
    out: List[str] = []
    i = 0
    while i < len(prompt):
        idx, marker = find_earliest(prompt, BLANK_MARKERS, i)
        if marker is None:
            out.append(prompt[i:])
            break
        out.append(prompt[i:idx])

        pos = skip_whitespace(prompt, idx + len(marker))
        if pos >= len(prompt) or prompt[pos] != "{":
            out.append(marker)
            i = idx + len(marker)
            continue

        group = parse_group(prompt, pos, file, base_line=base_line)
        if marker in GRADED_BLANK_MARKERS:
            answers.append(group.content.strip())
        out.append(BLANK_PLACEHOLDER)
        i = group.end

    return MaskedPrompt(text="".join(out), answers=tuple(answers))


def parse_fill_blank_questions(
    content: str,
    file: str,
    course_code: str,
    subject: str,
) -> List[ParseResult]:
    """
    Extract every fill-blank question from a comment-stripped document.

    Questions whose prompt has no graded blank are dropped without error.

    Args:
        content: Document text after ``strip_comments``
        file: Source file for diagnostics
        course_code: Course code used in uids
        subject: Subject slug stored on every question

    Returns:
        ParseResults in document order

    Raises:
        StructuralParseError: Malformed macro structure
        SemanticValidationError: Bad id
    """
    results: List[ParseResult] = []
    cursor = 0
    while True:
        start = content.find(FILL_BLANK_MACRO, cursor)
        if start == -1:
            break
        pos = skip_bracket_groups(content, start + len(FILL_BLANK_MACRO), MAX_OPTION_GROUPS, file)
        groups, starts = parse_required_groups(content, pos, 3, FILL_BLANK_MACRO, file)
        cursor = groups[-1].end

        raw_id, prompt_raw, solution_raw = (g.content for g in groups)
        id_line, prompt_line, _ = (line_from_index(content, s) for s in starts)
        identity = resolve_identity(raw_id, course_code, file, id_line)

        prompt, footnotes = rewrite_span(prompt_raw, file, prompt_line)
        masked = extract_inline_blanks(prompt, file, base_line=prompt_line)
        if not masked.answers:
            logger.debug(f"[{file}:{id_line}] Skipping {identity.uid}: no graded blanks in prompt")
            continue

        final_prompt = (masked.text.strip() + footnotes.append_text()).strip()

        public_question = FillBlankPublicQuestion(
            uid=identity.uid,
            subject=subject,
            id=identity.id,
            topic=identity.topic,
            level=identity.level,
            number=identity.number,
            prompt=final_prompt,
            blank_count=len(masked.answers),
        )
        answer_question = FillBlankAnswerQuestion(
            uid=identity.uid,
            subject=subject,
            id=identity.id,
            topic=identity.topic,
            level=identity.level,
            number=identity.number,
            prompt=final_prompt,
            blank_count=len(masked.answers),
            answers=masked.answers,
            solution=process_citations(solution_raw.strip()),
        )
        results.append(ParseResult(public_question, answer_question))
        logger.debug(f"Parsed fill-blank {identity.uid} ({len(masked.answers)} blanks)")

    return results
