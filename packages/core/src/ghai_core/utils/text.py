from __future__ import annotations

import re

# A reply wrapped as a whole in ``` fences, e.g. ```markdown ... ```.
_WRAPPING_FENCE_RE = re.compile(r"\A```[\w+-]*[ \t]*\n(.*)\n```\Z", re.DOTALL)


def truncate(text: str | None, max_chars: int, marker: str = "... (truncated)") -> str:
    """Cut ``text`` to ``max_chars`` characters, appending ``marker`` on its own line."""
    if not text:
        return ""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + "\n" + marker


def strip_code_fence(text: str | None) -> str:
    """Remove a code fence that wraps the whole of ``text``.

    Fences inside the text (code samples in a README) are left alone.
    """
    if not text:
        return ""
    stripped = text.strip()
    match = _WRAPPING_FENCE_RE.match(stripped)
    if match is None:
        return stripped
    return match.group(1).strip()
