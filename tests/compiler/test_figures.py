"""
Unit Tests for Figure/Table Reference Resolution
"""

import logging

from qbank_toolkit.compiler.figures import (
    apply_figure_references,
    collect_sequential_labels,
    make_reference_resolver,
    replace_figure_references,
)
from qbank_toolkit.compiler.mcq import parse_mcq_questions

DOC_ONE = r"""
\begin{figure}[h]
  \includegraphics{k4}
  \caption{$K_4$}\label{fig:k4}
\end{figure}
\begin{table}
  \label{tab:degrees}
\end{table}
\begin{figwindow}[0,r,{\includegraphics{x}},{}]
  no label here
\end{figwindow}
"""

DOC_TWO = r"""
\begin{figure}
  \label{fig:petersen}
\end{figure}
\begin{tabular}{cc}
  a & b \label{tab:truth}
\end{tabular}
"""


class TestCollectSequentialLabels:
    """Tests for collect_sequential_labels."""

    def test_collect_when_two_documents_then_counters_continue(self):
        labels = collect_sequential_labels([DOC_ONE, DOC_TWO])
        assert labels == {
            "fig:k4": "1",
            "fig:petersen": "3",
            "tab:degrees": "1",
            "tab:truth": "2",
        }

    def test_collect_when_no_environments_then_empty(self):
        assert collect_sequential_labels(["plain text"]) == {}


class TestReplaceFigureReferences:
    """Tests for replace_figure_references."""

    def test_replace_when_figurename_prefix_then_caption_in_language(self):
        out = replace_figure_references(r"\figurename~\ref{fig:k4}", {"fig:k4": "3"}, "en")
        assert out == '<a href="#fig-fig:k4" class="latex-ref">Figure 3</a>'

    def test_replace_when_tablename_in_vietnamese_then_bang(self):
        out = replace_figure_references(r"Xem \tablename~\ref{tab:a}.", {"tab:a": "2"}, "vi")
        assert out == 'Xem <a href="#fig-tab:a" class="latex-ref">Bảng 2</a>.'

    def test_replace_when_bare_ref_then_number_only_and_gap_kept(self):
        out = replace_figure_references(r"see~\ref{fig:k4}", {"fig:k4": "1"})
        assert out == 'see~<a href="#fig-fig:k4" class="latex-ref">1</a>'

    def test_replace_when_unknown_label_then_label_shown_and_warned(self, caplog):
        with caplog.at_level(logging.WARNING, logger="qbank_toolkit.compiler.figures"):
            out = replace_figure_references(r"\ref{missing}", {})
        assert out == '<a href="#fig-missing" class="latex-ref">missing</a>'
        assert "missing" in caplog.text

    def test_replace_when_empty_then_unchanged(self):
        assert replace_figure_references("", {"a": "1"}) == ""


class TestApplyFigureReferences:
    """Tests for apply_figure_references."""

    def test_apply_when_refs_everywhere_then_both_halves_rewritten(self):
        content = (
            r"\baitracnghiem{graph:q1}{In \figurename~\ref{fig:k4}?}"
            r"{\haipa{A}{\ref{fig:k4}}{none}}{By \tablename~\ref{tab:a}.}"
        )
        result = parse_mcq_questions(content, "q.tex", "MAT3500", "discrete-math")[0]
        resolver = make_reference_resolver({"fig:k4": "4", "tab:a": "1"}, "en")
        rewritten = apply_figure_references(result, resolver)

        assert "Figure 4</a>?" in rewritten.public_question.prompt
        assert rewritten.public_question.prompt == rewritten.answer_question.prompt
        assert rewritten.public_question.choices[0].text.endswith(">4</a>")
        assert rewritten.answer_question.choices == rewritten.public_question.choices
        assert "Table 1</a>" in rewritten.answer_question.solution
        assert rewritten.answer_question.answer_key == "A"
