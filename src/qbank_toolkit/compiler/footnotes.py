"""
Module: compiler.footnotes

Purpose:
    Rewrites ``\\footnote{...}`` markers to ``[n]`` and collects the note
    texts so they can be appended below the prompt.

Key Classes:
    - FootnoteManager: Per-span footnote rewriter

Dependencies:
    - compiler.scanner: Group parsing and marker search

Used By:
    - compiler.fields.rewrite_span
"""

from __future__ import annotations

from typing import List

from .scanner import find_earliest, parse_group, skip_whitespace

FOOTNOTE_MACRO = "\\footnote"


class FootnoteManager:
    """
    Footnote rewriter for one text span.

    Numbering starts at 1 for every instance: a question's prompt and its
    choices block each get their own manager and their own ``[1], [2]...``
    sequence.

    Example:
        >>> fn = FootnoteManager("q.tex")
        >>> fn.process("A\\footnote{first} and B\\footnote{second}")
        'A[1] and B[2]'
        >>> fn.append_text()
        '\\n\\n[1] first\\n[2] second'
    """

    def __init__(self, file: str, *, base_line: int = 1):
        self.file = file
        self.base_line = base_line
        self._notes: List[str] = []

    @property
    def notes(self) -> List[str]:
        return list(self._notes)

    def process(self, text: str) -> str:
        """
        Replace every footnote marker in ``text``.

        A marker not followed by ``{`` is left verbatim.

        Raises:
            StructuralParseError: If a footnote group is unbalanced
        """
        out: List[str] = []
        i = 0
        while i < len(text):
            idx, _ = find_earliest(text, (FOOTNOTE_MACRO,), i)
            if idx == -1:
                out.append(text[i:])
                break
            out.append(text[i:idx])

            pos = skip_whitespace(text, idx + len(FOOTNOTE_MACRO))
            if pos >= len(text) or text[pos] != "{":
                out.append(text[idx:pos])
                i = pos
                continue

            group = parse_group(text, pos, self.file, base_line=self.base_line)
            self._notes.append(group.content)
            out.append(f"[{len(self._notes)}]")
            i = group.end
        return "".join(out)

    def append_text(self) -> str:
        """Footnote block to append after the prompt ("" if none)."""
        if not self._notes:
            return ""
        return "\n\n" + "\n".join(f"[{n}] {note}" for n, note in enumerate(self._notes, start=1))
