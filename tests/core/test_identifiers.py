"""
Unit Tests for Question Id Parsing and Errors
"""

import pytest

from qbank_toolkit.core.errors import (
    BankBuildError,
    ConfigError,
    SchemaValidationError,
    SemanticValidationError,
    StructuralParseError,
)
from qbank_toolkit.core.models import QuestionId, QuestionLevel, make_uid, parse_question_id


class TestParseQuestionId:
    """Tests for parse_question_id."""

    @pytest.mark.parametrize("raw,expected", [
        ("graph:q12", QuestionId("graph", QuestionLevel.BASIC, 12)),
        ("basicgraph:q3", QuestionId("graph", QuestionLevel.BASIC, 3)),
        ("advanceprobability:q02", QuestionId("probability", QuestionLevel.ADVANCED, 2)),
        ("AdvanceSet:Q7", QuestionId("set", QuestionLevel.ADVANCED, 7)),
        ("graph-coloring:q1", QuestionId("graph-coloring", QuestionLevel.BASIC, 1)),
        ("  nb:q4 ", QuestionId("nb", QuestionLevel.BASIC, 4)),
    ])
    def test_parse_when_valid_then_decomposed(self, raw, expected):
        assert parse_question_id(raw) == expected

    @pytest.mark.parametrize("raw", [
        "graph", "graph:12", "graph:q", "gr aph:q1", ":q1", "graph:q1x",
        "graph:q\u0661", "gr\u0131ph:q1",
    ])
    def test_parse_when_malformed_then_semantic_error(self, raw):
        with pytest.raises(SemanticValidationError, match="Invalid question id"):
            parse_question_id(raw)

    def test_parse_when_advance_prefix_then_not_generic_topic(self):
        assert parse_question_id("advancegraph:q1").topic == "graph"


class TestMakeUid:
    """Tests for make_uid."""

    def test_make_uid_when_raw_id_then_namespaced_verbatim(self):
        assert make_uid("MAT3500", "advanceProbability:q02") == "latex:MAT3500:advanceProbability:q02"


class TestErrors:
    """Tests for the error hierarchy."""

    @pytest.mark.parametrize("cls,kind", [
        (BankBuildError, "build"),
        (StructuralParseError, "structural"),
        (SemanticValidationError, "semantic"),
        (SchemaValidationError, "schema"),
        (ConfigError, "config"),
    ])
    def test_kind_when_subclass_then_tagged(self, cls, kind):
        err = cls("boom")
        assert err.kind == kind
        assert isinstance(err, BankBuildError)

    def test_str_when_file_and_line_then_prefixed(self):
        assert str(StructuralParseError("bad", file="a.tex", line=3)) == "[a.tex:3] bad"

    def test_str_when_file_only_then_prefixed_without_line(self):
        assert str(SemanticValidationError("dup", file="a.tex")) == "[a.tex] dup"

    def test_str_when_no_location_then_message(self):
        assert str(BankBuildError("plain")) == "plain"

    def test_to_dict_when_context_then_included(self):
        err = SemanticValidationError("dup", file="a.tex", line=1, context={"uid": "u"})
        assert err.to_dict() == {
            "kind": "semantic",
            "message": "dup",
            "file": "a.tex",
            "line": 1,
            "context": {"uid": "u"},
        }

    def test_schema_error_when_path_then_kept(self):
        err = SchemaValidationError("bad", path="questions.0.uid", errors=["x"])
        assert err.path == "questions.0.uid"
        assert err.errors == ["x"]
