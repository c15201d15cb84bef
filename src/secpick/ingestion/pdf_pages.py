"""Page/fragment extraction using PyMuPDF (fitz), plus pre-extracted JSON loaders.

Each PDF page becomes a :class:`Page` whose fragments are the text spans in
content-stream order. That order is what ``position_index`` ranks, so pages
are read with ``sort=False`` and spans are never re-ordered by layout.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, cast

import fitz  # PyMuPDF

from secpick.classifier.types import Page, TextFragment
from secpick.errors import ExtractionError
from secpick.logging_setup import log_call

__all__ = ["extract_pages", "page_fragments", "load_pages_json", "pages_from_records"]

logger = logging.getLogger(__name__)


def page_fragments(page: Any) -> list[TextFragment]:
    """Return the non-empty text spans of a fitz page in stream order.

    Every span is ranked, empty ones included, so ``position_index`` counts
    the same items a text-content walk of the page would. Only then are the
    empty spans dropped.
    """
    data = cast(Any, page).get_text("dict", sort=False)
    frags: list[TextFragment] = []
    rank = 0
    for block in data.get("blocks", []):
        # type 1 blocks are images
        if block.get("type", 0) != 0:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text", "")
                if text:
                    frags.append(TextFragment(text=text, position_index=rank))
                rank += 1
    return frags


@log_call()
def extract_pages(pdf_path: str | Path) -> list[Page]:
    """Read every page of ``pdf_path`` as an ordered list of fragments.

    Raises:
        FileNotFoundError: If the file does not exist.
        ExtractionError: If the document cannot be opened, is password
            protected, or a page fails to yield text.
    """
    pdf_p = Path(pdf_path)
    if not pdf_p.exists():
        raise FileNotFoundError(str(pdf_p))
    try:
        doc = fitz.open(str(pdf_p))
    except Exception as exc:
        raise ExtractionError(pdf_p, "open", str(exc)) from exc
    try:
        if doc.needs_pass:
            raise ExtractionError(pdf_p, "password")
        total_pages = int(doc.page_count)
        logger.info("pdf_open path=%s pages=%s", pdf_p.name, total_pages)
        pages: list[Page] = []
        for i in range(total_pages):
            try:
                frags = page_fragments(doc.load_page(i))
            except Exception as exc:
                raise ExtractionError(pdf_p, "page", f"page {i + 1}: {exc}") from exc
            pages.append(Page(page_index=i, fragments=tuple(frags)))
        return pages
    finally:
        doc.close()


def _fragments_from_record(raw: Any, where: str) -> tuple[TextFragment, ...]:
    if not isinstance(raw, list):
        raise ValueError(f"{where}: 'fragments' must be a list")
    frags: list[TextFragment] = []
    for i, item in enumerate(raw):
        if isinstance(item, str):
            frags.append(TextFragment(text=item, position_index=i))
        elif isinstance(item, dict) and isinstance(item.get("text"), str):
            pos = item.get("position_index", i)
            if isinstance(pos, bool) or not isinstance(pos, int) or pos < 0:
                raise ValueError(f"{where}: fragment {i} has invalid position_index")
            frags.append(TextFragment(text=item["text"], position_index=pos))
        else:
            raise ValueError(f"{where}: fragment {i} must be a string or an object with text:string")
    return tuple(frags)


def pages_from_records(records: list[Any]) -> list[Page]:
    """Build pages from decoded records.

    A record is either a list of fragment texts or an object with
    ``fragments`` and an optional ``page_index``. Either every record carries a
    ``page_index`` or none does; when present, pages are ordered by it and the
    values must be contiguous from 0.
    """
    indexed: list[tuple[int | None, tuple[TextFragment, ...]]] = []
    for n, rec in enumerate(records):
        where = f"page record {n}"
        if isinstance(rec, list):
            indexed.append((None, _fragments_from_record(rec, where)))
        elif isinstance(rec, dict) and "fragments" in rec:
            idx = rec.get("page_index")
            if idx is not None and (isinstance(idx, bool) or not isinstance(idx, int) or idx < 0):
                raise ValueError(f"{where}: page_index must be a non-negative integer")
            indexed.append((idx, _fragments_from_record(rec["fragments"], where)))
        else:
            raise ValueError(f"{where}: expected a list of fragments or an object with 'fragments'")
    with_index = sum(1 for idx, _ in indexed if idx is not None)
    if 0 < with_index < len(indexed):
        raise ValueError(f"page_index given on {with_index} of {len(indexed)} page records; give it on all or none")
    if indexed and with_index == len(indexed):
        indexed.sort(key=lambda r: cast(int, r[0]))
        got = [idx for idx, _ in indexed]
        if got != list(range(len(indexed))):
            raise ValueError(f"page_index values must be contiguous from 0, got {got}")
    return [Page(page_index=i, fragments=frags) for i, (_, frags) in enumerate(indexed)]


def load_pages_json(path: str | Path) -> list[Page]:
    """Load pre-extracted pages from ``.json`` or ``.jsonl``.

    Accepted inputs:
    - .jsonl: one page record per line.
    - .json: an object with a top-level ``pages`` list of page records.

    Raises:
        ValueError: On malformed input or unsupported extension.
    """
    p = Path(path)
    suffix = p.suffix.lower()
    if suffix == ".jsonl":
        records: list[Any] = []
        with p.open("r", encoding="utf-8") as f:
            for ln, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append(json.loads(line))
                except json.JSONDecodeError as exc:
                    raise ValueError(f"Malformed JSONL at line {ln}: {exc}") from exc
        return pages_from_records(records)
    if suffix == ".json":
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {p.name}: {exc}") from exc
        if not isinstance(data, dict) or not isinstance(data.get("pages"), list):
            raise ValueError("JSON input must be an object with top-level 'pages': list")
        return pages_from_records(data["pages"])
    raise ValueError(f"Unsupported input type {suffix or '(none)'}. Use .json or .jsonl.")
