"""
Module: compiler.mcq

Purpose:
    Extracts single-answer multiple-choice questions written as

        \\baitracnghiem{id}{prompt}{choices block}{solution}

Key Functions:
    - parse_mcq_questions(): Cleaned document text -> ParseResult list

Dependencies:
    - compiler.scanner: Group parsing
    - compiler.fields: Identity and auxiliary rewrites
    - compiler.choices: Choice block parsing

Used By:
    - compiler.assembler
"""

from __future__ import annotations

import logging
from typing import List

from ..core.models.questions import McqAnswerQuestion, McqPublicQuestion, ParseResult
from .choices import parse_choices_block
from .citations import process_citations
from .fields import resolve_identity, rewrite_span
from .scanner import line_from_index, parse_required_groups

logger = logging.getLogger(__name__)

MCQ_MACRO = "\\baitracnghiem"


def parse_mcq_questions(
    content: str,
    file: str,
    course_code: str,
    subject: str,
) -> List[ParseResult]:
    """
    Extract every MCQ question from a comment-stripped document.

    The cursor always moves past the last group of a question, so question
    bodies never overlap. Any error aborts the whole document.

    Prompt footnotes are appended to the prompt. Footnotes inside the
    choices block are numbered separately and their texts are appended to
    the answer solution, so they never leak into the public bank.

    Args:
        content: Document text after ``strip_comments``
        file: Source file for diagnostics
        course_code: Course code used in uids
        subject: Subject slug stored on every question

    Returns:
        ParseResults in document order

    Raises:
        StructuralParseError: Malformed macro structure
        SemanticValidationError: Bad id or invalid choice block

    Example:
        >>> src = "\\baitracnghiem{t:q1}{P}{\\bonpa{B}{W}{X}{Y}{Z}}{S}"
        >>> [r.answer_question.answer_key for r in parse_mcq_questions(src, "q.tex", "MAT3500", "discrete-math")]
        ['B']
    """
    results: List[ParseResult] = []
    cursor = 0
    while True:
        start = content.find(MCQ_MACRO, cursor)
        if start == -1:
            break
        groups, starts = parse_required_groups(content, start + len(MCQ_MACRO), 4, MCQ_MACRO, file)
        cursor = groups[-1].end

        raw_id, prompt_raw, choices_raw, solution_raw = (g.content for g in groups)
        id_line, prompt_line, choices_line, _ = (line_from_index(content, s) for s in starts)
        identity = resolve_identity(raw_id, course_code, file, id_line)

        prompt, prompt_notes = rewrite_span(prompt_raw, file, prompt_line)
        choices_text, choice_notes = rewrite_span(choices_raw, file, choices_line)
        block = parse_choices_block(choices_text, file, raw_id, base_line=choices_line)

        final_prompt = (prompt.strip() + prompt_notes.append_text()).strip()
        # Choice footnotes keep their own numbering; their texts go to the solution
        solution = (process_citations(solution_raw.strip()) + choice_notes.append_text()).strip()
        if choice_notes.notes:
            logger.debug(
                f"[{file}:{choices_line}] {identity.uid}: "
                f"{len(choice_notes.notes)} choice footnote(s) appended to solution"
            )

        public_question = McqPublicQuestion(
            uid=identity.uid,
            subject=subject,
            id=identity.id,
            topic=identity.topic,
            level=identity.level,
            number=identity.number,
            prompt=final_prompt,
            choices=block.choices,
        )
        answer_question = McqAnswerQuestion(
            uid=identity.uid,
            subject=subject,
            id=identity.id,
            topic=identity.topic,
            level=identity.level,
            number=identity.number,
            prompt=final_prompt,
            choices=block.choices,
            answer_key=block.answer_key,
            solution=solution,
        )
        results.append(ParseResult(public_question, answer_question))
        logger.debug(f"Parsed MCQ {identity.uid} ({block.macro}, answer {block.answer_key})")

    return results
