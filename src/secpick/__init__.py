"""secpick: keep the intro and section pages of PDF handouts and merge them.

Each input PDF is read page by page with PyMuPDF. Printed Hangul section
headers (급분바 and its misspellings for section A, 문족 for section B)
drive a per-document state machine that decides which pages to keep. The
kept pages can be adjusted by hand before every input is merged, in order,
into one PDF.

Typical programmatic use::

    from secpick import ExtractionOptions, classify_batch, merge_selected

    items = classify_batch(["week1.pdf", "week2.pdf"], ExtractionOptions(section_b=True))
    merge_selected([(i.path, i.result.selected_page_indices) for i in items], "out.pdf")
"""

from secpick.assembly import EditableSelection, merge_selected
from secpick.batch import BatchItem, classify_batch
from secpick.classifier import (
    DEFAULT_KEYWORD_CONFIG,
    ExtractionOptions,
    KeywordConfig,
    SelectionResult,
    classify_document,
    load_keyword_config,
)
from secpick.errors import (
    AssemblyError,
    ConfigurationError,
    ExtractionError,
    SecpickError,
    ValidationError,
)
from secpick.ingestion import extract_pages

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_KEYWORD_CONFIG",
    "AssemblyError",
    "BatchItem",
    "ConfigurationError",
    "EditableSelection",
    "ExtractionError",
    "ExtractionOptions",
    "KeywordConfig",
    "SecpickError",
    "SelectionResult",
    "ValidationError",
    "classify_batch",
    "classify_document",
    "extract_pages",
    "load_keyword_config",
    "merge_selected",
]
