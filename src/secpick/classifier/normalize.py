"""Text normalization for keyword comparison.

Extracted fragments may carry decomposed jamo (common on macOS-produced PDFs),
stray spacing between syllables and Latin/digit noise. Everything is reduced
to a run of precomposed Hangul syllables so keywords compare reliably.
"""

from __future__ import annotations

import re
import unicodedata

__all__ = ["compose", "strip_whitespace", "normalize_text"]

_WS_RE = re.compile(r"\s+")
_NON_HANGUL_RE = re.compile(r"[^가-힣]")


def compose(raw: str) -> str:
    """Return the NFC form so combining jamo and precomposed syllables match."""
    return unicodedata.normalize("NFC", raw)


def strip_whitespace(text: str) -> str:
    return _WS_RE.sub("", text)


def normalize_text(raw: str) -> str:
    """Canonicalize ``raw`` to Hangul syllables only.

    Steps: NFC composition, whitespace removal, then every character outside
    the Hangul syllable block (U+AC00..U+D7A3) is dropped. Total for any input;
    may return an empty string.
    """
    return _NON_HANGUL_RE.sub("", strip_whitespace(compose(raw)))
