"""
Module: compiler.assembler

Purpose:
    Main orchestrator for bank builds. Reads each LaTeX file in order,
    runs both extractors over the comment-stripped text, enforces
    corpus-wide uniqueness incrementally, then sorts and validates the
    two parallel banks (public and answers).

Key Functions:
    - build_banks_from_files(): Main entry point
    - parse_document(): One document's text -> ParseResults
    - assemble_banks(): Sort + validate already-extracted results
    - uid_sort_key(): Natural, case-insensitive uid ordering
    - read_source(): UTF-8 file read with SourceReadError on failure

Key Classes:
    - BuildResult: Container for build output

Dependencies:
    - compiler.mcq, compiler.fill_blank: Extraction
    - compiler.uniqueness: Duplicate detection
    - core.schemas: Bank validation

Used By:
    - qbank_toolkit.cli: Command-line builds
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from ..core.errors import BankBuildError, SourceReadError
from ..core.models.bank import Bank, utc_timestamp
from ..core.models.questions import ParseResult
from ..core.schemas.validator import validate_answers_bank, validate_public_bank
from .config import CompilerConfig
from .fill_blank import FILL_BLANK_MACRO, parse_fill_blank_questions
from .mcq import MCQ_MACRO, parse_mcq_questions
from .scanner import strip_comments
from .uniqueness import UniquenessTracker

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"(\d+)", re.ASCII)


def assert_disjoint_start_macros() -> None:
    """
    Both extractors scan the same text from position 0, which is only
    sound while neither start macro is a prefix of the other.
    """
    if MCQ_MACRO.startswith(FILL_BLANK_MACRO) or FILL_BLANK_MACRO.startswith(MCQ_MACRO):
        raise BankBuildError(f"Question start macros overlap: {MCQ_MACRO} / {FILL_BLANK_MACRO}")


assert_disjoint_start_macros()


def uid_sort_key(uid: str) -> list:
    """
    Natural sort key: digit runs compare numerically, the rest compares
    case-insensitively (``graph:q2`` < ``graph:q10``).
    """
    # re.split with a capture group puts digit runs at odd indices
    return [int(part) if i % 2 else part.casefold() for i, part in enumerate(_DIGITS_RE.split(uid))]


def read_source(path: Union[str, Path]) -> str:
    """
    Read a LaTeX file as UTF-8 with universal newlines.

    Raises:
        SourceReadError: If the file cannot be read or is not valid UTF-8
            (the line of the first bad byte is reported)
    """
    file = str(path)
    try:
        raw = Path(path).read_bytes()
    except OSError as exc:
        raise SourceReadError(f"Cannot read LaTeX file: {exc.strerror or exc}", file=file) from exc
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SourceReadError(
            f"LaTeX file is not valid UTF-8 (byte 0x{raw[exc.start]:02x})",
            file=file,
            line=raw.count(b"\n", 0, exc.start) + 1,
        ) from exc
    return text.replace("\r\n", "\n").replace("\r", "\n")


@dataclass(frozen=True)
class BuildResult:
    """
    Result of a bank build.

    Attributes:
        public_bank: Bank of public questions (no grading data)
        answers_bank: Bank of answer questions, same order as public_bank
        questions: The ParseResults both banks were built from
    """
    public_bank: Bank
    answers_bank: Bank
    questions: List[ParseResult]


def parse_document(content: str, file: str, config: CompilerConfig) -> List[ParseResult]:
    """
    Strip comments and run both extractors over one document.

    MCQ questions come first, then fill-blank questions, each in
    document order.
    """
    cleaned = strip_comments(content)
    mcq = parse_mcq_questions(cleaned, file, config.course_code, config.subject)
    fill_blank = parse_fill_blank_questions(cleaned, file, config.course_code, config.subject)
    logger.info(f"{file}: {len(mcq)} MCQ, {len(fill_blank)} fill-blank")
    return mcq + fill_blank


def assemble_banks(
    results: Iterable[ParseResult],
    config: CompilerConfig,
    *,
    generated_at: Optional[str] = None,
) -> BuildResult:
    """
    Sort results by uid and build both validated banks.

    Args:
        results: Extracted questions (already uniqueness-checked)
        config: Build configuration (subject)
        generated_at: Timestamp to stamp on both banks (defaults to now)

    Raises:
        SchemaValidationError: If either bank fails its schema
    """
    ordered = sorted(results, key=lambda r: uid_sort_key(r.uid))
    generated_at = generated_at or utc_timestamp()

    public_bank = Bank(
        subject=config.subject,
        generated_at=generated_at,
        questions=tuple(r.public_question for r in ordered),
    )
    answers_bank = Bank(
        subject=config.subject,
        generated_at=generated_at,
        questions=tuple(r.answer_question for r in ordered),
    )

    validate_public_bank(public_bank.to_dict())
    validate_answers_bank(answers_bank.to_dict())

    return BuildResult(public_bank=public_bank, answers_bank=answers_bank, questions=ordered)


def build_banks_from_files(
    file_paths: Sequence[Union[str, Path]],
    config: Optional[CompilerConfig] = None,
    *,
    generated_at: Optional[str] = None,
) -> BuildResult:
    """
    Build public and answers banks from LaTeX files.

    Pipeline:
    1. For each file, strictly in the given order:
       a. Read as UTF-8 and strip comments
       b. Extract MCQ and fill-blank questions
       c. Check uids and content signatures against earlier files
    2. Natural-sort everything by uid
    3. Validate both banks against their schemas

    Args:
        file_paths: LaTeX files to compile
        config: Build configuration (defaults to CompilerConfig())
        generated_at: Timestamp for both banks (defaults to now)

    Returns:
        BuildResult with both banks and the underlying ParseResults

    Raises:
        BankBuildError: If no files are given
        StructuralParseError: Malformed macro structure in any file
        SemanticValidationError: Invalid content or duplicates
        SchemaValidationError: Internal error producing an invalid bank
        SourceReadError: If a file is missing, unreadable or not UTF-8

    Example:
        >>> result = build_banks_from_files([Path("bank/graph.tex")])
        >>> print(f"Built {len(result.public_bank)} questions")
        Built 12 questions
    """
    if not file_paths:
        raise BankBuildError("No LaTeX files provided")

    config = config or CompilerConfig()
    tracker = UniquenessTracker()
    all_results: List[ParseResult] = []

    for path in file_paths:
        file = str(path)
        content = read_source(path)
        results = parse_document(content, file, config)
        tracker.check_batch(results, file)
        all_results.extend(results)

    built = assemble_banks(all_results, config, generated_at=generated_at)
    logger.info(f"Built {len(built.questions)} questions from {len(file_paths)} file(s)")
    return built
