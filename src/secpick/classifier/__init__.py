"""Classifier package exports.

Expose the primary entrypoint ``classify_document`` and the building blocks
it composes.
"""

from secpick.classifier.keywords import DEFAULT_KEYWORD_CONFIG, load_keyword_config, match_kind
from secpick.classifier.section_classifier import (
    aggregate_page,
    classify_document,
    classify_documents,
    logging_trace_sink,
    transition,
)
from secpick.classifier.types import (
    ClassifierState,
    ExtractionOptions,
    KeywordConfig,
    Page,
    PageEvent,
    SelectionResult,
    TextFragment,
)

__all__ = [
    "DEFAULT_KEYWORD_CONFIG",
    "ClassifierState",
    "ExtractionOptions",
    "KeywordConfig",
    "Page",
    "PageEvent",
    "SelectionResult",
    "TextFragment",
    "aggregate_page",
    "classify_document",
    "classify_documents",
    "load_keyword_config",
    "logging_trace_sink",
    "match_kind",
    "transition",
]
