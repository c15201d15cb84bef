"""Copy selected pages from several PDFs into one output document."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

import fitz  # PyMuPDF

from secpick.errors import AssemblyError
from secpick.logging_setup import log_call

__all__ = ["merge_selected"]

logger = logging.getLogger(__name__)


def _check_indices(path: Path, indices: Sequence[int], page_count: int) -> None:
    bad = [i for i in indices if not 0 <= i < page_count]
    if bad:
        raise ValueError(f"{path.name}: page indices out of range [0, {page_count}): {bad}")


@log_call()
def merge_selected(items: Iterable[tuple[str | Path, Sequence[int]]], out_path: str | Path) -> int:
    """Write the selected pages of each source, in order, to ``out_path``.

    Args:
        items: ``(source_pdf, page_indices)`` pairs. Indices are 0-based and
            copied in the given order. A source with no indices is skipped.
        out_path: Destination PDF.

    Returns:
        Number of pages written.

    Raises:
        ValueError: If an index is out of range or nothing was selected at all.
        AssemblyError: If a source cannot be opened or copied, or the output
            cannot be written.
    """
    out_p = Path(out_path)
    merged = fitz.open()
    try:
        for src, indices in items:
            src_p = Path(src)
            if not indices:
                logger.warning("%s: no pages selected; skipping", src_p.name)
                continue
            try:
                doc = fitz.open(str(src_p))
            except Exception as exc:
                raise AssemblyError(src_p, str(exc)) from exc
            try:
                _check_indices(src_p, indices, doc.page_count)
                for i in indices:
                    merged.insert_pdf(doc, from_page=i, to_page=i)
            except ValueError:
                raise
            except Exception as exc:
                raise AssemblyError(src_p, str(exc)) from exc
            finally:
                doc.close()
            logger.info("%s: %s pages added", src_p.name, len(indices))
        written = int(merged.page_count)
        if written == 0:
            raise ValueError("No pages selected in any document")
        try:
            out_p.parent.mkdir(parents=True, exist_ok=True)
            merged.save(str(out_p), garbage=3, deflate=True)
        except Exception as exc:
            raise AssemblyError(out_p, str(exc)) from exc
        logger.info("merged_pdf path=%s pages=%s", out_p, written)
        return written
    finally:
        merged.close()
