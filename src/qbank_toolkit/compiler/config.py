"""
Module: compiler.config

Purpose:
    Configuration dataclass for bank builds. Immutable settings for the
    course code (uid namespace), subject and output language.

Key Classes:
    - CompilerConfig: Main configuration for a build

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - compiler.assembler: Course code and subject for every question
    - compiler.figures: Language of "Figure"/"Table" captions
    - common.sources: Built from a sources config file
"""

from dataclasses import dataclass

DEFAULT_COURSE_CODE = "MAT3500"
DEFAULT_SUBJECT = "discrete-math"
SUPPORTED_LANGUAGES = ("vi", "en")


@dataclass(frozen=True)
class CompilerConfig:
    """
    Configuration for compiling question banks.

    Attributes:
        course_code: Course code embedded in every uid (default "MAT3500")
        subject: Subject slug stored on banks and questions (default "discrete-math")
        language: Caption language for figure/table references ("vi" or "en")
    """
    course_code: str = DEFAULT_COURSE_CODE
    subject: str = DEFAULT_SUBJECT
    language: str = "vi"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.course_code or ":" in self.course_code:
            raise ValueError(f"course_code must be non-empty and contain no ':': {self.course_code!r}")
        if not self.subject:
            raise ValueError("subject must be non-empty")
        if self.language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"language must be one of {SUPPORTED_LANGUAGES}: {self.language!r}")
