"""
Module: questions

Purpose:
    Question records produced by the compiler. Each question exists in two
    shapes: a public one (safe to serve to students, no grading data) and
    an answer one (adds answer key / accepted answers and the solution).
    Both shapes are tagged by ``type`` ("mcq-single" or "fill-blank").

Key Classes:
    - McqPublicQuestion / McqAnswerQuestion
    - FillBlankPublicQuestion / FillBlankAnswerQuestion
    - ParseResult: The public/answer pair produced together

Key Functions:
    - question_from_dict(): Deserialize either shape, dispatching on type
    - ParseResult.map_text(): Apply one text transform to both halves

Dependencies:
    - dataclasses (std)
    - .choices.Choice
    - .identifiers.QuestionLevel

Used By:
    - compiler.mcq, compiler.fill_blank: Construction
    - compiler.uniqueness: Content signatures
    - compiler.assembler: Bank assembly
    - compiler.figures: Reference rewriting
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, ClassVar, Tuple, Union

from .choices import Choice
from .identifiers import QuestionLevel

TextTransform = Callable[[str], str]


class QuestionType(str, Enum):
    """Discriminant of the question union."""
    MCQ_SINGLE = "mcq-single"
    FILL_BLANK = "fill-blank"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class QuestionBase:
    """
    Fields shared by every question shape.

    Attributes:
        uid: Corpus-wide identifier like "latex:MAT3500:graph:q12"
        subject: Subject slug like "discrete-math"
        id: Raw author id
        topic: Topic slug parsed from the id
        level: BASIC or ADVANCED
        number: Question number parsed from the id
        prompt: Processed LaTeX prompt
    """

    question_type: ClassVar[QuestionType]

    uid: str
    subject: str
    id: str
    topic: str
    level: QuestionLevel
    number: int
    prompt: str

    @property
    def type(self) -> QuestionType:
        return self.question_type

    def _base_dict(self) -> dict:
        return {
            "uid": self.uid,
            "subject": self.subject,
            "type": self.question_type.value,
            "id": self.id,
            "topic": self.topic,
            "level": QuestionLevel(self.level).value,
            "number": self.number,
            "prompt": self.prompt,
        }


@dataclass(frozen=True)
class McqPublicQuestion(QuestionBase):
    """Single-answer multiple-choice question without its answer key."""

    question_type: ClassVar[QuestionType] = QuestionType.MCQ_SINGLE

    choices: Tuple[Choice, ...]

    def __post_init__(self) -> None:
        if not self.choices:
            raise ValueError(f"{self.uid}: mcq question needs at least one choice")

    def map_text(self, transform: TextTransform) -> McqPublicQuestion:
        return replace(
            self,
            prompt=transform(self.prompt),
            choices=tuple(c.with_text(transform(c.text)) for c in self.choices),
        )

    def to_dict(self) -> dict:
        d = self._base_dict()
        d["choices"] = [c.to_dict() for c in self.choices]
        return d


@dataclass(frozen=True)
class McqAnswerQuestion(McqPublicQuestion):
    """Multiple-choice question with its correct key and solution."""

    answer_key: str
    solution: str = ""

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.answer_key not in {c.key for c in self.choices}:
            raise ValueError(
                f"{self.uid}: answer_key {self.answer_key!r} is not one of the declared choices"
            )

    def map_text(self, transform: TextTransform) -> McqAnswerQuestion:
        mapped = super().map_text(transform)
        return replace(mapped, solution=transform(self.solution) if self.solution else self.solution)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["answerKey"] = self.answer_key
        d["solution"] = self.solution
        return d


@dataclass(frozen=True)
class FillBlankPublicQuestion(QuestionBase):
    """Fill-in-the-blank question; exposes only how many blanks there are."""

    question_type: ClassVar[QuestionType] = QuestionType.FILL_BLANK

    blank_count: int

    def __post_init__(self) -> None:
        if self.blank_count < 1:
            raise ValueError(f"{self.uid}: blank_count must be positive: {self.blank_count}")

    def map_text(self, transform: TextTransform) -> FillBlankPublicQuestion:
        return replace(self, prompt=transform(self.prompt))

    def to_dict(self) -> dict:
        d = self._base_dict()
        d["blankCount"] = self.blank_count
        return d


@dataclass(frozen=True)
class FillBlankAnswerQuestion(FillBlankPublicQuestion):
    """Fill-in-the-blank question with accepted answers in blank order."""

    answers: Tuple[str, ...]
    solution: str = ""

    def __post_init__(self) -> None:
        super().__post_init__()
        if len(self.answers) != self.blank_count:
            raise ValueError(
                f"{self.uid}: {len(self.answers)} answers for {self.blank_count} blanks"
            )

    def map_text(self, transform: TextTransform) -> FillBlankAnswerQuestion:
        mapped = super().map_text(transform)
        return replace(mapped, solution=transform(self.solution) if self.solution else self.solution)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["answers"] = list(self.answers)
        d["solution"] = self.solution
        return d


PublicQuestion = Union[McqPublicQuestion, FillBlankPublicQuestion]
AnswerQuestion = Union[McqAnswerQuestion, FillBlankAnswerQuestion]


@dataclass(frozen=True)
class ParseResult:
    """
    Public and answer shapes of one question, produced together.

    Any text rewrite must go through ``map_text`` so both halves stay
    content-synchronized.
    """

    public_question: PublicQuestion
    answer_question: AnswerQuestion

    def __post_init__(self) -> None:
        if self.public_question.uid != self.answer_question.uid:
            raise ValueError(
                f"uid mismatch: {self.public_question.uid} != {self.answer_question.uid}"
            )
        if self.public_question.type != self.answer_question.type:
            raise ValueError(f"{self.uid}: public and answer question types differ")

    @property
    def uid(self) -> str:
        return self.public_question.uid

    def map_text(self, transform: TextTransform) -> ParseResult:
        return ParseResult(
            public_question=self.public_question.map_text(transform),
            answer_question=self.answer_question.map_text(transform),
        )


def question_from_dict(data: dict) -> Union[PublicQuestion, AnswerQuestion]:
    """
    Deserialize a question of either shape.

    The answer shape is chosen when grading fields are present.

    Raises:
        ValueError: If ``type`` is not a known question type
    """
    common = dict(
        uid=data["uid"],
        subject=data["subject"],
        id=data["id"],
        topic=data["topic"],
        level=QuestionLevel(data["level"]),
        number=data["number"],
        prompt=data["prompt"],
    )
    qtype = QuestionType(data["type"])
    if qtype is QuestionType.MCQ_SINGLE:
        choices = tuple(Choice.from_dict(c) for c in data["choices"])
        if "answerKey" in data:
            return McqAnswerQuestion(
                **common,
                choices=choices,
                answer_key=data["answerKey"],
                solution=data.get("solution", ""),
            )
        return McqPublicQuestion(**common, choices=choices)
    if qtype is QuestionType.FILL_BLANK:
        if "answers" in data:
            return FillBlankAnswerQuestion(
                **common,
                blank_count=data["blankCount"],
                answers=tuple(data["answers"]),
                solution=data.get("solution", ""),
            )
        return FillBlankPublicQuestion(**common, blank_count=data["blankCount"])
    raise ValueError(f"Unsupported question type: {qtype!r}")
