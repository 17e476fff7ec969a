"""
Unit Tests for Question and Bank Models
"""

from datetime import datetime, timezone

import pytest

from qbank_toolkit.core.models import (
    Bank,
    Choice,
    FillBlankAnswerQuestion,
    FillBlankPublicQuestion,
    McqAnswerQuestion,
    McqPublicQuestion,
    ParseResult,
    QuestionLevel,
    QuestionType,
    key_for_position,
    question_from_dict,
    utc_timestamp,
)

COMMON = dict(
    uid="latex:MAT3500:graph:q1",
    subject="discrete-math",
    id="graph:q1",
    topic="graph",
    level=QuestionLevel.BASIC,
    number=1,
    prompt="How many edges?",
)

CHOICES = (Choice("A", "6"), Choice("B", "4"))


def _mcq_pair(answer_key="A", solution="Count."):
    return ParseResult(
        McqPublicQuestion(**COMMON, choices=CHOICES),
        McqAnswerQuestion(**COMMON, choices=CHOICES, answer_key=answer_key, solution=solution),
    )


class TestChoice:
    """Tests for Choice and key_for_position."""

    def test_key_for_position_when_in_range_then_letter(self):
        assert [key_for_position(i) for i in range(5)] == ["A", "B", "C", "D", "E"]

    def test_key_for_position_when_out_of_range_then_error(self):
        with pytest.raises(ValueError):
            key_for_position(5)

    def test_choice_when_bad_key_then_error(self):
        with pytest.raises(ValueError):
            Choice("F", "x")


class TestMcqQuestions:
    """Tests for MCQ question records."""

    def test_to_dict_when_public_then_camel_case_without_key(self):
        d = McqPublicQuestion(**COMMON, choices=CHOICES).to_dict()
        assert d == {
            "uid": "latex:MAT3500:graph:q1",
            "subject": "discrete-math",
            "type": "mcq-single",
            "id": "graph:q1",
            "topic": "graph",
            "level": "basic",
            "number": 1,
            "prompt": "How many edges?",
            "choices": [{"key": "A", "text": "6"}, {"key": "B", "text": "4"}],
        }

    def test_to_dict_when_answer_then_key_and_solution(self):
        d = _mcq_pair(answer_key="B").answer_question.to_dict()
        assert d["answerKey"] == "B"
        assert d["solution"] == "Count."

    def test_answer_when_key_not_declared_then_error(self):
        with pytest.raises(ValueError, match="answer_key"):
            McqAnswerQuestion(**COMMON, choices=CHOICES, answer_key="C")

    def test_public_when_no_choices_then_error(self):
        with pytest.raises(ValueError):
            McqPublicQuestion(**COMMON, choices=())

    def test_from_dict_when_answer_shape_then_answer_class(self):
        original = _mcq_pair().answer_question
        restored = question_from_dict(original.to_dict())
        assert isinstance(restored, McqAnswerQuestion)
        assert restored == original

    def test_from_dict_when_public_shape_then_public_class(self):
        restored = question_from_dict(_mcq_pair().public_question.to_dict())
        assert type(restored) is McqPublicQuestion


class TestFillBlankQuestions:
    """Tests for fill-blank question records."""

    def test_public_when_zero_blanks_then_error(self):
        with pytest.raises(ValueError, match="blank_count"):
            FillBlankPublicQuestion(**COMMON, blank_count=0)

    def test_answer_when_count_mismatch_then_error(self):
        with pytest.raises(ValueError, match="answers"):
            FillBlankAnswerQuestion(**COMMON, blank_count=2, answers=("1",))

    def test_to_dict_when_answer_then_answers_list(self):
        d = FillBlankAnswerQuestion(**COMMON, blank_count=2, answers=("1", "2")).to_dict()
        assert d["type"] == "fill-blank"
        assert d["blankCount"] == 2
        assert d["answers"] == ["1", "2"]
        assert d["solution"] == ""


class TestParseResult:
    """Tests for ParseResult."""

    def test_init_when_uid_mismatch_then_error(self):
        other = dict(COMMON, uid="latex:MAT3500:graph:q2")
        with pytest.raises(ValueError, match="uid mismatch"):
            ParseResult(
                McqPublicQuestion(**COMMON, choices=CHOICES),
                McqAnswerQuestion(**other, choices=CHOICES, answer_key="A"),
            )

    def test_init_when_type_mismatch_then_error(self):
        with pytest.raises(ValueError, match="types differ"):
            ParseResult(
                FillBlankPublicQuestion(**COMMON, blank_count=1),
                McqAnswerQuestion(**COMMON, choices=CHOICES, answer_key="A"),
            )

    def test_map_text_when_applied_then_both_halves_changed(self):
        mapped = _mcq_pair().map_text(str.upper)
        assert mapped.public_question.prompt == "HOW MANY EDGES?"
        assert mapped.answer_question.prompt == "HOW MANY EDGES?"
        assert mapped.answer_question.solution == "COUNT."
        assert mapped.answer_question.answer_key == "A"
        assert mapped.uid == "latex:MAT3500:graph:q1"

    def test_map_text_when_empty_solution_then_not_transformed(self):
        mapped = _mcq_pair(solution="").map_text(lambda text: text + "!")
        assert mapped.answer_question.solution == ""
        assert mapped.answer_question.choices[0].text == "6!"

    def test_type_when_mcq_then_enum(self):
        assert _mcq_pair().public_question.type is QuestionType.MCQ_SINGLE


class TestBank:
    """Tests for Bank and utc_timestamp."""

    def test_utc_timestamp_when_moment_given_then_millis_and_z(self):
        moment = datetime(2026, 1, 31, 12, 0, 0, 123456, tzinfo=timezone.utc)
        assert utc_timestamp(moment) == "2026-01-31T12:00:00.123Z"

    def test_bank_when_unknown_version_then_error(self):
        with pytest.raises(ValueError):
            Bank(subject="discrete-math", generated_at="x", questions=(), version="v2")

    def test_bank_when_to_dict_then_key_order(self):
        bank = Bank(subject="discrete-math", generated_at="t", questions=(_mcq_pair().public_question,))
        d = bank.to_dict()
        assert list(d) == ["version", "subject", "generatedAt", "questions"]
        assert len(bank) == 1
        assert bank.uids == ["latex:MAT3500:graph:q1"]
