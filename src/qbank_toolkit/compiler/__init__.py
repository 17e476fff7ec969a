"""
Module: compiler

Purpose:
    LaTeX question-bank compiler. Turns ``\\baitracnghiem`` (multiple
    choice) and ``\\baidienvao`` (fill-in-the-blank) macro invocations into
    validated, uniquely identified question records and assembles them
    into parallel public/answers banks.

Key Functions:
    - build_banks_from_files(): Main entry point
    - parse_mcq_questions(), parse_fill_blank_questions(): Extractors
    - strip_comments(), parse_group(): Scanner primitives

Key Classes:
    - CompilerConfig: Configuration for a build
    - BuildResult: Container for build output

Dependencies:
    - jsonschema (via core.schemas): Bank validation
    - portalocker (via writer): Locked JSON output

Used By:
    - qbank_toolkit.cli
"""

from .config import CompilerConfig
from .assembler import BuildResult, assemble_banks, build_banks_from_files, parse_document
from .mcq import parse_mcq_questions
from .fill_blank import parse_fill_blank_questions
from .scanner import parse_group, strip_comments

__all__ = [
    "build_banks_from_files",
    "assemble_banks",
    "parse_document",
    "parse_mcq_questions",
    "parse_fill_blank_questions",
    "parse_group",
    "strip_comments",
    "CompilerConfig",
    "BuildResult",
]
