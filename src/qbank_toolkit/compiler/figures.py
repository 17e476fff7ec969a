"""
Module: compiler.figures

Purpose:
    Resolves ``\\ref{label}`` references to figures and tables. Figure and
    table environments are numbered sequentially across the whole corpus
    (separate counters), and references are rewritten to anchor links
    carrying the resolved number.

Key Functions:
    - collect_sequential_labels(): Documents -> label -> number map
    - replace_figure_references(): Rewrite references in one text
    - apply_figure_references(): Rewrite a ParseResult (both halves)

Dependencies:
    - re (std)

Used By:
    - qbank_toolkit.cli: Applied after assembly, before writing
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, Iterable, Mapping

from ..core.models.questions import ParseResult

logger = logging.getLogger(__name__)

_FIGURE_ENV_RE = re.compile(r"\\begin\{(figure|figwindow)\}(?:\[[^\]]*\])?([\s\S]*?)\\end\{\1\}")
_TABLE_ENV_RE = re.compile(r"\\begin\{(table|tabwindow|tabular)\}(?:\[[^\]]*\])?([\s\S]*?)\\end\{\1\}")
_LABEL_RE = re.compile(r"\\label\s*\{([^}]+)\}")
_REF_RE = re.compile(r"(\\figurename|\\tablename)?(\s*~?\s*)\\ref\{([^}]+)\}")

CAPTION_NAMES: Dict[str, Dict[str, str]] = {
    "vi": {"figure": "Hình", "table": "Bảng"},
    "en": {"figure": "Figure", "table": "Table"},
}


def collect_sequential_labels(contents: Iterable[str]) -> Dict[str, str]:
    """
    Number figure and table environments in reading order.

    Figures (``figure``/``figwindow``) and tables (``table``/``tabwindow``/
    ``tabular``) keep separate counters that never reset between
    documents. Unlabeled environments still consume a number.

    Args:
        contents: Comment-stripped documents, in build order

    Returns:
        Map of label -> number string
    """
    labels: Dict[str, str] = {}
    figure_count = 0
    table_count = 0
    for text in contents:
        for match in _FIGURE_ENV_RE.finditer(text):
            figure_count += 1
            _record_label(labels, match.group(2), str(figure_count))
        for match in _TABLE_ENV_RE.finditer(text):
            table_count += 1
            _record_label(labels, match.group(2), str(table_count))
    logger.debug(f"Numbered {figure_count} figure(s), {table_count} table(s), {len(labels)} label(s)")
    return labels


def _record_label(labels: Dict[str, str], body: str, number: str) -> None:
    match = _LABEL_RE.search(body)
    if match:
        labels[match.group(1).strip()] = number


def replace_figure_references(text: str, labels: Mapping[str, str], language: str = "vi") -> str:
    """
    Rewrite ``[\\figurename|\\tablename]~\\ref{label}`` to an anchor link.

    Unknown labels are kept as their own text and logged as a warning.

    Example:
        >>> replace_figure_references("\\figurename~\\ref{fig:k4}", {"fig:k4": "3"}, "en")
        '<a href="#fig-fig:k4" class="latex-ref">Figure 3</a>'
    """
    if not text:
        return text
    names = CAPTION_NAMES[language]

    def _replace(match: re.Match) -> str:
        prefix, gap, label = match.group(1), match.group(2), match.group(3).strip()
        resolved = labels.get(label)
        if resolved is None:
            logger.warning(f"Reference label '{label}' not found in label map")
        display = resolved or label
        if prefix:
            kind = "figure" if "figure" in prefix else "table"
            display = f"{names[kind]} {display}"
            gap = ""
        return f'{gap}<a href="#fig-{label}" class="latex-ref">{display}</a>'

    return _REF_RE.sub(_replace, text)


def make_reference_resolver(labels: Mapping[str, str], language: str = "vi") -> Callable[[str], str]:
    """Bind a label map and language into a single-argument text transform."""
    return lambda text: replace_figure_references(text, labels, language)


def apply_figure_references(result: ParseResult, resolver: Callable[[str], str]) -> ParseResult:
    """Apply ``resolver`` to prompt, choices and solution of both halves."""
    return result.map_text(resolver)
