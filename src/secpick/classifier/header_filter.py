"""Table-of-contents rejection and header-candidate heuristics.

A section header is printed near the top of a page's content stream and is
short. Table-of-contents lines mention the same keywords but carry dotted
leaders or trailing page numbers, so they are rejected on the raw text before
normalization would erase those clues.
"""

from __future__ import annotations

import re

from secpick.classifier.normalize import compose, strip_whitespace
from secpick.classifier.types import TextFragment

__all__ = [
    "MAX_HEADER_POSITION",
    "MAX_HEADER_CHARS",
    "is_table_of_contents_line",
    "is_header_candidate",
]

# Headers must appear among the first fragments of a page
MAX_HEADER_POSITION = 20
# Exclusive upper bound on normalized header length
MAX_HEADER_CHARS = 50

# Dotted leader / spacing followed by a page number at end of line: "문족 .... 41"
TOC_TRAILING_PAGE_RE = re.compile(r"[.…\s]+[0-9]+\Z")
DIGITS_ONLY_RE = re.compile(r"[0-9]+")


def is_table_of_contents_line(raw_text: str) -> bool:
    """Return True if ``raw_text`` looks like a ToC entry or a bare page number.

    Operates on the whitespace-intact text; the only canonicalization applied
    is NFC composition.
    """
    text = compose(raw_text)
    if TOC_TRAILING_PAGE_RE.search(text):
        return True
    if DIGITS_ONLY_RE.fullmatch(strip_whitespace(text)):
        return True
    return ".." in text or "…" in text


def is_header_candidate(fragment: TextFragment, normalized_text: str) -> bool:
    """Position and length gate for fragments that survived ToC rejection."""
    if fragment.position_index >= MAX_HEADER_POSITION:
        return False
    return 0 < len(normalized_text) < MAX_HEADER_CHARS
