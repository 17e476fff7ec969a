"""Citation rewriting: ``\\cite{key}`` becomes ``[key]``."""

from __future__ import annotations

import re

# Single unnested group; a comma-separated key list is kept as one key.
_CITE_RE = re.compile(r"\\cite\s*\{([^}]+)\}")


def process_citations(text: str) -> str:
    """
    Replace every ``\\cite{key}`` with ``[key]`` in one left-to-right pass.

    Example:
        >>> process_citations("see \\cite{knuth97, cormen}")
        'see [knuth97, cormen]'
    """
    return _CITE_RE.sub(lambda m: f"[{m.group(1)}]", text)
