"""
Unit Tests for MCQ Extraction
"""

import pytest

from qbank_toolkit.compiler.mcq import parse_mcq_questions
from qbank_toolkit.core.errors import SemanticValidationError, StructuralParseError
from qbank_toolkit.core.models import QuestionLevel, QuestionType


def _parse(content: str):
    return parse_mcq_questions(content, "q.tex", "MAT3500", "discrete-math")


class TestParseMcqQuestions:
    """Tests for parse_mcq_questions."""

    def test_parse_when_single_question_then_both_halves_built(self):
        results = _parse(r"\baitracnghiem{graph:q1}{What?}{\bonpa{B}{W}{X}{Y}{Z}}{Because.}")
        assert len(results) == 1
        public, answer = results[0].public_question, results[0].answer_question

        assert public.uid == "latex:MAT3500:graph:q1"
        assert public.type is QuestionType.MCQ_SINGLE
        assert public.topic == "graph"
        assert public.level is QuestionLevel.BASIC
        assert public.number == 1
        assert public.prompt == "What?"
        assert [c.text for c in public.choices] == ["W", "X", "Y", "Z"]
        assert answer.answer_key == "B"
        assert answer.solution == "Because."
        assert "answerKey" not in public.to_dict()

    def test_parse_when_whitespace_between_groups_then_accepted(self):
        content = "\\baitracnghiem {graph:q1}\n  {P}\n  {\\haipa{1}{a}{b}}\n  {S}"
        results = _parse(content)
        assert results[0].answer_question.answer_key == "A"

    def test_parse_when_several_questions_then_document_order(self):
        content = (
            r"\baitracnghiem{graph:q2}{P2}{\haipa{A}{a}{b}}{}"
            "\nfiller text\n"
            r"\baitracnghiem{graph:q1}{P1}{\haipa{B}{a}{b}}{}"
        )
        assert [r.public_question.id for r in _parse(content)] == ["graph:q2", "graph:q1"]

    def test_parse_when_prompt_has_footnote_then_appended(self):
        content = r"\baitracnghiem{graph:q1}{Count edges\footnote{See \cite{rosen}.}}{\haipa{A}{6}{4}}{}"
        prompt = _parse(content)[0].public_question.prompt
        assert prompt == "Count edges[1]\n\n[1] See [rosen]."

    def test_parse_when_choice_has_footnote_then_note_in_solution(self):
        content = r"\baitracnghiem{graph:q1}{P\footnote{p}}{\haipa{A}{six\footnote{c}}{four}}{}"
        result = _parse(content)[0]
        assert result.public_question.choices[0].text == "six[1]"
        assert result.public_question.prompt == "P[1]\n\n[1] p"
        assert result.answer_question.solution == "[1] c"

    def test_parse_when_choice_footnote_and_solution_then_note_after_solution(self):
        content = r"\baitracnghiem{graph:q1}{P}{\haipa{A}{six\footnote{See \cite{west}.}}{four}}{S}"
        result = _parse(content)[0]
        assert result.answer_question.solution == "S\n\n[1] See [west]."
        assert "west" not in str(result.public_question.to_dict())

    def test_parse_when_solution_has_citation_then_rewritten(self):
        content = r"\baitracnghiem{graph:q1}{P}{\haipa{A}{a}{b}}{  By \cite{west}.  }"
        assert _parse(content)[0].answer_question.solution == "By [west]."

    def test_parse_when_advanced_id_then_level_and_topic(self):
        content = r"\baitracnghiem{advanceProbability:q02}{P}{\haipa{A}{a}{b}}{}"
        public = _parse(content)[0].public_question
        assert public.level is QuestionLevel.ADVANCED
        assert public.topic == "probability"
        assert public.number == 2
        assert public.uid == "latex:MAT3500:advanceProbability:q02"

    def test_parse_when_no_macro_then_empty(self):
        assert _parse("Just some text.") == []

    def test_parse_when_group_missing_then_structural(self):
        with pytest.raises(StructuralParseError, match=r"argument 4 of \\baitracnghiem"):
            _parse(r"\baitracnghiem{graph:q1}{P}{\haipa{A}{a}{b}} end")

    def test_parse_when_unbalanced_prompt_then_structural_with_line(self):
        content = "line one\n\\baitracnghiem{graph:q1}{P {open}{\\haipa{A}{a}{b}}{}"
        with pytest.raises(StructuralParseError) as exc_info:
            _parse(content)
        assert exc_info.value.file == "q.tex"
        assert exc_info.value.line == 2

    def test_parse_when_bad_id_then_semantic_with_location(self):
        content = "\n\n\\baitracnghiem{graph-q1}{P}{\\haipa{A}{a}{b}}{}"
        with pytest.raises(SemanticValidationError, match="Invalid question id") as exc_info:
            _parse(content)
        assert exc_info.value.file == "q.tex"
        assert exc_info.value.line == 3

    def test_parse_when_duplicate_choices_then_semantic(self):
        with pytest.raises(SemanticValidationError, match="Duplicate choice text in graph:q1"):
            _parse(r"\baitracnghiem{graph:q1}{P}{\haipa{A}{x}{ x }}{}")
