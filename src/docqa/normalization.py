"""Clean up extractor output before it is chunked.

Passage offsets index the string returned by :func:`normalize_text`, never the
raw extractor output. The function is idempotent, so re-ingesting an already
normalised document reproduces the same offsets and page estimates.
"""
from __future__ import annotations

import re
import unicodedata

# Extractors emit form feeds between pages; keep them as paragraph breaks.
_PAGE_BREAK_RE = re.compile(r"\f")
_INVISIBLE_RE = re.compile(r"[\x00-\x08\x0b\x0e-\x1f\x7f\u200b-\u200d\u2060\ufeff]")
_HORIZONTAL_SPACE_RE = re.compile(r"[ \t\u00a0\u2000-\u200a\u202f\u3000]+")
_SPACE_AROUND_NEWLINE_RE = re.compile(r" ?\n ?")
# A word split across a line wrap, e.g. "retrie-\nval".
_WRAPPED_HYPHEN_RE = re.compile(r"(?<=[^\W\d_])-\n(?=[^\W\d_])")
_MULTIPLE_NEWLINES_RE = re.compile(r"\n{3,}")


def normalize_text(text: str | None, *, join_hyphenated: bool = True) -> str:
    """Return *text* in the canonical form passages are cut from.

    Unicode is composed (NFC), line endings become ``\\n``, page breaks become
    blank lines, invisible control characters are dropped, runs of horizontal
    whitespace collapse to one space and at most one blank line is kept.
    With *join_hyphenated* words hyphenated across a line wrap are rejoined.
    """

    if not text:
        return ""
    normalized = unicodedata.normalize("NFC", text)
    normalized = normalized.replace("\r\n", "\n").replace("\r", "\n")
    normalized = _PAGE_BREAK_RE.sub("\n\n", normalized)
    normalized = _INVISIBLE_RE.sub("", normalized)
    normalized = _HORIZONTAL_SPACE_RE.sub(" ", normalized)
    normalized = _SPACE_AROUND_NEWLINE_RE.sub("\n", normalized)
    if join_hyphenated:
        normalized = _WRAPPED_HYPHEN_RE.sub("", normalized)
    normalized = _MULTIPLE_NEWLINES_RE.sub("\n\n", normalized)
    return normalized.strip()


__all__ = ["normalize_text"]
