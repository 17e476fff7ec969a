"""
Module: compiler.uniqueness

Purpose:
    Corpus-wide duplicate detection. Two checks run as each file's batch
    is added, so diagnostics can name the exact pair of files:

    1. uid: the same uid may appear only once across all files.
    2. content signature: the same normalized question content may not
       reappear under a different uid (copy-pasted questions).

Key Functions:
    - content_signature(): Canonical JSON of a question's substance

Key Classes:
    - UniquenessTracker: Per-build bookkeeping of seen uids and signatures

Dependencies:
    - json (std)
    - compiler.scanner.normalize_for_compare

Used By:
    - compiler.assembler
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Dict, Iterable

from ..core.errors import SemanticValidationError
from ..core.models.questions import (
    FillBlankPublicQuestion,
    McqPublicQuestion,
    ParseResult,
    PublicQuestion,
)
from .scanner import normalize_for_compare

logger = logging.getLogger(__name__)


def content_signature(question: PublicQuestion) -> str:
    """
    Canonical signature of a question's substance.

    Made of type, subject and normalized prompt plus a type-specific
    discriminator: normalized choice texts for MCQ, blank count for
    fill-blank.

    Raises:
        TypeError: For a question type without a signature rule
    """
    if isinstance(question, McqPublicQuestion):
        discriminator = [normalize_for_compare(c.text) for c in question.choices]
    elif isinstance(question, FillBlankPublicQuestion):
        discriminator = question.blank_count
    else:
        raise TypeError(f"No content signature rule for {type(question).__name__}")
    return json.dumps(
        {
            "type": question.type.value,
            "subject": question.subject,
            "prompt": normalize_for_compare(question.prompt),
            "discriminator": discriminator,
        },
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
    )


@dataclass(frozen=True)
class SeenQuestion:
    """Where a signature was first registered."""
    uid: str
    file: str
    id: str


class UniquenessTracker:
    """
    Bookkeeping for one build call.

    Create a new tracker per build; it is never shared between builds.
    """

    def __init__(self):
        self._uid_to_file: Dict[str, str] = {}
        self._signatures: Dict[str, SeenQuestion] = {}

    def __len__(self) -> int:
        return len(self._uid_to_file)

    def __contains__(self, uid: object) -> bool:
        return uid in self._uid_to_file

    def check_batch(self, results: Iterable[ParseResult], file: str) -> None:
        """
        Check and register one file's questions, in order.

        Raises:
            SemanticValidationError: On a repeated uid or repeated content
        """
        count = 0
        for result in results:
            self.register(result.public_question, file)
            count += 1
        logger.debug(f"Registered {count} question(s) from {file}")

    def register(self, question: PublicQuestion, file: str) -> None:
        """Check one question against everything registered so far, then record it."""
        other_file = self._uid_to_file.get(question.uid)
        if other_file is not None:
            raise SemanticValidationError(
                f"Duplicate uid {question.uid} found in {other_file} and {file}",
                file=file,
                context={"uid": question.uid, "files": [other_file, file]},
            )

        signature = content_signature(question)
        other = self._signatures.get(signature)
        if other is not None:
            raise SemanticValidationError(
                f"Duplicate question content found: {other.uid} ({other.file}) "
                f"and {question.uid} ({file})",
                file=file,
                context={"uids": [other.uid, question.uid], "files": [other.file, file]},
            )

        self._uid_to_file[question.uid] = file
        self._signatures[signature] = SeenQuestion(uid=question.uid, file=file, id=question.id)
