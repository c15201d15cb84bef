"""Multi-document orchestration: extract, classify, keep input order.

Documents share nothing, so extraction may run on a thread pool. Results are
always re-sequenced to the caller's order, and each document is classified
only once its pages are fully materialized.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from tqdm import tqdm

from secpick.classifier.keywords import DEFAULT_KEYWORD_CONFIG, validate_keyword_config
from secpick.classifier.section_classifier import classify_document, validate_options
from secpick.classifier.types import ExtractionOptions, KeywordConfig, Page, SelectionResult, TraceSink
from secpick.ingestion.pdf_pages import extract_pages

__all__ = ["BatchItem", "classify_batch", "default_max_workers"]

logger = logging.getLogger(__name__)

Extractor = Callable[[Path], Sequence[Page]]


@dataclass
class BatchItem:
    """Outcome for one input document.

    Exactly one of ``result`` and ``error`` is set.
    """

    path: Path
    result: SelectionResult | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.result is not None


def default_max_workers() -> int:
    """Worker count from ``SECPICK_MAX_WORKERS`` (default 1, i.e. sequential)."""
    raw = os.getenv("SECPICK_MAX_WORKERS", "1")
    try:
        return max(1, int(raw))
    except ValueError:
        logger.warning("Ignoring invalid SECPICK_MAX_WORKERS=%r", raw)
        return 1


def _warn_missing_keywords(path: Path, options: ExtractionOptions, result: SelectionResult) -> None:
    diag = result.diagnostics
    if options.section_a and not diag.section_a_keyword_seen:
        logger.warning("%s: no section A keyword found", path.name)
    if options.section_b and not diag.section_b_keyword_seen:
        logger.warning("%s: no section B keyword found", path.name)
    if not result.selected_page_indices:
        logger.warning("%s: no pages selected", path.name)


def classify_batch(
    paths: Iterable[str | Path],
    options: ExtractionOptions,
    config: KeywordConfig = DEFAULT_KEYWORD_CONFIG,
    *,
    max_workers: int | None = None,
    skip_failures: bool = False,
    extractor: Extractor = extract_pages,
    trace: TraceSink | None = None,
    cancel_event: threading.Event | None = None,
    show_progress: bool = False,
) -> list[BatchItem]:
    """Classify several documents independently.

    Args:
        paths: Documents in the order results should be returned.
        options: Selections to compute for every document.
        config: Keyword vocabulary.
        max_workers: Extraction threads; ``None`` reads ``SECPICK_MAX_WORKERS``.
        skip_failures: Record a failed document as an errored item and keep
            going instead of raising.
        extractor: Turns a path into pages; defaults to the PyMuPDF extractor.
        trace: Optional classifier trace sink.
        cancel_event: When set, documents not yet consumed are dropped from
            the output; nothing is half-written.
        show_progress: Display a ``tqdm`` progress bar.

    Returns:
        One :class:`BatchItem` per consumed document, in input order.

    Raises:
        ConfigurationError: Before any extraction, on invalid options/config.
        Exception: The first extraction failure in input order, unless
            ``skip_failures`` is true.
    """
    validate_options(options)
    validate_keyword_config(config)
    path_list = [Path(p) for p in paths]
    workers = default_max_workers() if max_workers is None else max(1, int(max_workers))
    logger.info(
        "batch_start documents=%s workers=%s intro=%s section_a=%s section_b=%s",
        len(path_list),
        workers,
        options.intro,
        options.section_a,
        options.section_b,
    )

    items: list[BatchItem] = []
    with ThreadPoolExecutor(max_workers=workers) as ex:
        futures: list[Future[Sequence[Page]]] = [ex.submit(extractor, p) for p in path_list]
        pbar = tqdm(total=len(path_list), disable=not show_progress)
        try:
            for n, (path, fut) in enumerate(zip(path_list, futures)):
                if cancel_event is not None and cancel_event.is_set():
                    logger.info("batch_cancelled remaining=%s", len(path_list) - n)
                    break
                try:
                    pages = fut.result()
                except CancelledError:
                    logger.info("%s: extraction cancelled; omitted", path.name)
                    continue
                except Exception as exc:
                    if not skip_failures:
                        raise
                    logger.error("%s: extraction failed: %s", path.name, exc)
                    items.append(BatchItem(path=path, error=exc))
                    pbar.update(1)
                    continue
                result = classify_document(pages, options, config, trace)
                logger.info(
                    "%s: pages=%s selected=%s",
                    path.name,
                    result.total_pages,
                    len(result.selected_page_indices),
                )
                _warn_missing_keywords(path, options, result)
                items.append(BatchItem(path=path, result=result))
                pbar.update(1)
        finally:
            pbar.close()
            for fut in futures:
                fut.cancel()
    return items
