"""
Core Models Package

Immutable data models shared by the compiler and the writer.

All models are frozen dataclasses: the compiler builds new records
instead of mutating existing ones, which keeps the public and answer
halves of a question from drifting apart.
"""

from .choices import CHOICE_KEYS, Choice, key_for_position
from .identifiers import QuestionId, QuestionLevel, make_uid, parse_question_id
from .questions import (
    AnswerQuestion,
    FillBlankAnswerQuestion,
    FillBlankPublicQuestion,
    McqAnswerQuestion,
    McqPublicQuestion,
    ParseResult,
    PublicQuestion,
    QuestionType,
    question_from_dict,
)
from .bank import BANK_VERSION, Bank, utc_timestamp

__all__ = [
    "CHOICE_KEYS",
    "Choice",
    "key_for_position",
    "QuestionId",
    "QuestionLevel",
    "make_uid",
    "parse_question_id",
    "AnswerQuestion",
    "FillBlankAnswerQuestion",
    "FillBlankPublicQuestion",
    "McqAnswerQuestion",
    "McqPublicQuestion",
    "ParseResult",
    "PublicQuestion",
    "QuestionType",
    "question_from_dict",
    "BANK_VERSION",
    "Bank",
    "utc_timestamp",
]
