"""
Module: compiler.scanner

Purpose:
    Low-level, escape-aware scanning primitives shared by every macro
    parser: comment stripping, balanced ``{...}`` group extraction, line
    numbers for diagnostics, and "earliest of several markers" search.

Key Functions:
    - is_escaped(): Is the character at an index escaped by a backslash?
    - strip_comments(): Remove unescaped ``%`` comments line by line
    - parse_group(): Extract one balanced brace group
    - parse_required_groups(): Extract N consecutive groups after a macro
    - skip_bracket_groups(): Skip up to N optional ``[...]`` groups
    - find_earliest(): Earliest occurrence of any of several markers
    - normalize_for_compare(): Whitespace-collapse + trim

Dependencies:
    - re (std)
    - core.errors.StructuralParseError

Used By:
    - compiler.footnotes, compiler.choices
    - compiler.mcq, compiler.fill_blank
    - compiler.uniqueness (normalization)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..core.errors import StructuralParseError

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class Group:
    """
    A parsed balanced group.

    Attributes:
        content: Text between the outer braces (braces excluded)
        end: Index just past the closing brace
    """
    content: str
    end: int


def is_escaped(text: str, index: int) -> bool:
    """
    Check whether ``text[index]`` is escaped.

    Counts consecutive backslashes immediately before ``index``; an odd
    count means the character is escaped (``\\%`` is escaped, ``\\\\%`` is not).
    """
    backslashes = 0
    i = index - 1
    while i >= 0 and text[i] == "\\":
        backslashes += 1
        i -= 1
    return backslashes % 2 == 1


def strip_comments(text: str) -> str:
    """
    Remove LaTeX comments.

    Each line is truncated at its first unescaped ``%``. Line boundaries
    are kept exactly (``\\r\\n`` and ``\\n`` both count as separators, output
    uses ``\\n``), so line numbers stay valid after stripping.
    """
    lines = _LINE_SPLIT_RE.split(text)
    return "\n".join(_strip_line(line) for line in lines)


def _strip_line(line: str) -> str:
    start = 0
    while True:
        idx = line.find("%", start)
        if idx == -1:
            return line
        if not is_escaped(line, idx):
            return line[:idx]
        start = idx + 1


def line_from_index(text: str, index: int, base_line: int = 1) -> int:
    """
    1-based line number of ``text[index]``.

    Args:
        text: Text being scanned
        index: Character index
        base_line: Line number of ``text[0]`` in the originating file
    """
    return base_line + text.count("\n", 0, max(index, 0))


def parse_group(text: str, start: int, file: str, *, base_line: int = 1) -> Group:
    """
    Extract the balanced group opening at ``text[start]``.

    Escaped braces (``\\{``, ``\\}``) do not affect nesting depth.

    Args:
        text: Text being scanned
        start: Index of the opening ``{``
        file: Source file for diagnostics
        base_line: Line number of ``text[0]`` in ``file``

    Returns:
        Group with content and end index

    Raises:
        StructuralParseError: If ``text[start]`` is not ``{`` or the group
            never closes

    Example:
        >>> parse_group("{a {b} c} rest", 0, "x.tex")
        Group(content='a {b} c', end=9)
    """
    if start >= len(text) or text[start] != "{":
        raise StructuralParseError(
            "Expected '{' while parsing group",
            file=file,
            line=line_from_index(text, start, base_line),
        )
    depth = 0
    for i in range(start, len(text)):
        char = text[i]
        if char == "{" and not is_escaped(text, i):
            depth += 1
        elif char == "}" and not is_escaped(text, i):
            depth -= 1
            if depth == 0:
                return Group(content=text[start + 1:i], end=i + 1)
    raise StructuralParseError(
        "Unbalanced braces while parsing group",
        file=file,
        line=line_from_index(text, start, base_line),
    )


def skip_whitespace(text: str, pos: int) -> int:
    """Advance ``pos`` past any whitespace."""
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def parse_required_groups(
    text: str,
    pos: int,
    count: int,
    macro: str,
    file: str,
    *,
    base_line: int = 1,
) -> Tuple[List[Group], List[int]]:
    """
    Parse ``count`` consecutive groups (whitespace allowed between them).

    Args:
        text: Text being scanned
        pos: Index just after the macro name / optional arguments
        count: Number of required groups
        macro: Macro name for diagnostics (e.g. ``\\baitracnghiem``)
        file: Source file for diagnostics
        base_line: Line number of ``text[0]`` in ``file``

    Returns:
        Tuple of (groups, start indices of each group's ``{``)

    Raises:
        StructuralParseError: If a group is missing or unbalanced
    """
    groups: List[Group] = []
    starts: List[int] = []
    for i in range(count):
        pos = skip_whitespace(text, pos)
        if pos >= len(text) or text[pos] != "{":
            raise StructuralParseError(
                f"Expected '{{' for argument {i + 1} of {macro}",
                file=file,
                line=line_from_index(text, pos, base_line),
            )
        group = parse_group(text, pos, file, base_line=base_line)
        groups.append(group)
        starts.append(pos)
        pos = group.end
    return groups, starts


def skip_bracket_groups(
    text: str,
    pos: int,
    max_groups: int,
    file: str,
    *,
    base_line: int = 1,
) -> int:
    """
    Skip up to ``max_groups`` optional ``[...]`` groups (not nested).

    Returns:
        Index after the last skipped group (whitespace before a
        non-bracket character is consumed)

    Raises:
        StructuralParseError: On an unterminated ``[``
    """
    for _ in range(max_groups):
        pos = skip_whitespace(text, pos)
        if pos >= len(text) or text[pos] != "[":
            break
        close = text.find("]", pos + 1)
        if close == -1:
            raise StructuralParseError(
                "Unterminated '[' group",
                file=file,
                line=line_from_index(text, pos, base_line),
            )
        pos = close + 1
    return pos


def find_earliest(
    text: str,
    markers: Sequence[str],
    start: int = 0,
) -> Tuple[int, Optional[str]]:
    """
    Find the earliest occurrence of any marker at or after ``start``.

    Ties go to the marker listed first.

    Returns:
        Tuple of (index, marker), or (-1, None) if none occurs
    """
    best_index = -1
    best_marker: Optional[str] = None
    for marker in markers:
        idx = text.find(marker, start)
        if idx != -1 and (best_index == -1 or idx < best_index):
            best_index = idx
            best_marker = marker
    return best_index, best_marker


def normalize_for_compare(value: str) -> str:
    """Collapse whitespace runs to one space and trim (case is kept)."""
    return _WHITESPACE_RE.sub(" ", value.strip())
