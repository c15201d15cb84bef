"""Page-level section classifier.

Walks a document page by page, reduces each page's header fragments to at
most one section event, applies that event to a small state machine and
decides which pages to keep for the requested options.

The whole run is a fold over pages: state never leaks between documents and
the same input always yields the same :class:`SelectionResult`. Per-fragment
decisions can be observed through an optional trace sink instead of global
logging.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from functools import reduce

from secpick.classifier.header_filter import is_header_candidate, is_table_of_contents_line
from secpick.classifier.keywords import DEFAULT_KEYWORD_CONFIG, match_kind, validate_keyword_config
from secpick.classifier.normalize import normalize_text
from secpick.classifier.types import (
    ClassifierState,
    Diagnostics,
    ExtractionOptions,
    KeywordConfig,
    Page,
    PageEvent,
    SelectionResult,
    TextFragment,
    TraceEvent,
    TraceSink,
)
from secpick.errors import ConfigurationError

__all__ = [
    "aggregate_page",
    "transition",
    "classify_document",
    "classify_documents",
    "validate_options",
    "logging_trace_sink",
]


def validate_options(options: ExtractionOptions) -> ExtractionOptions:
    """Raise :class:`ConfigurationError` unless at least one option is set."""
    if not options.any_selected():
        raise ConfigurationError("at least one of intro, section_a, section_b must be selected")
    return options


def _emit(trace: TraceSink | None, event: TraceEvent) -> None:
    if trace is not None:
        trace(event)


def aggregate_page(
    fragments: Iterable[TextFragment],
    config: KeywordConfig = DEFAULT_KEYWORD_CONFIG,
    trace: TraceSink | None = None,
    page_index: int = -1,
) -> PageEvent:
    """Reduce all fragments of one page to its dominant section event.

    Any section A match on the page wins, regardless of how many fragments
    matched section B. This guards against a ToC line that slipped past the
    filter and raised a spurious B match on the same page.
    """
    saw_a = False
    saw_b = False
    for frag in fragments:
        if is_table_of_contents_line(frag.text):
            _emit(trace, TraceEvent("toc", page_index, frag.position_index, frag.text))
            continue
        normalized = normalize_text(frag.text)
        if not is_header_candidate(frag, normalized):
            _emit(trace, TraceEvent("skip", page_index, frag.position_index, frag.text))
            continue
        kind = match_kind(normalized, config)
        if kind is PageEvent.NONE:
            continue
        _emit(trace, TraceEvent("match", page_index, frag.position_index, frag.text, event=kind))
        if kind is PageEvent.SECTION_A:
            saw_a = True
        else:
            saw_b = True
    if saw_a:
        return PageEvent.SECTION_A
    if saw_b:
        return PageEvent.SECTION_B
    return PageEvent.NONE


def transition(current: ClassifierState, event: PageEvent) -> ClassifierState:
    """Apply one page event. A new header always starts its section."""
    if event is PageEvent.SECTION_A:
        return ClassifierState.IN_SECTION_A
    if event is PageEvent.SECTION_B:
        return ClassifierState.IN_SECTION_B
    return current


@dataclass(frozen=True, slots=True)
class _Fold:
    state: ClassifierState = ClassifierState.NONE
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def _is_selected(page_index: int, state: ClassifierState, options: ExtractionOptions) -> bool:
    if options.intro and page_index == 0:
        return True
    if options.section_a and state is ClassifierState.IN_SECTION_A:
        return True
    return options.section_b and state is ClassifierState.IN_SECTION_B


def classify_document(
    pages: Sequence[Page],
    options: ExtractionOptions,
    config: KeywordConfig = DEFAULT_KEYWORD_CONFIG,
    trace: TraceSink | None = None,
) -> SelectionResult:
    """Classify every page of one document and return the pages to keep.

    Pages are visited in sequence order; ``pages[i]`` is treated as page
    index ``i``. The state is updated before the selection decision, so a
    page carrying a section header is itself inside that section.

    Raises:
        ConfigurationError: If no option is selected or ``config`` is invalid.
    """
    validate_options(options)
    validate_keyword_config(config)
    # pages are visited in ascending order, so appends keep this sorted
    kept: list[int] = []

    def step(acc: _Fold, indexed: tuple[int, Page]) -> _Fold:
        page_index, page = indexed
        event = aggregate_page(page.fragments, config, trace, page_index)
        state = transition(acc.state, event)
        selected = _is_selected(page_index, state, options)
        _emit(trace, TraceEvent("page", page_index, event=event, state=state, selected=selected))
        diag = Diagnostics(
            section_a_keyword_seen=acc.diagnostics.section_a_keyword_seen or event is PageEvent.SECTION_A,
            section_b_keyword_seen=acc.diagnostics.section_b_keyword_seen or event is PageEvent.SECTION_B,
        )
        if selected:
            kept.append(page_index)
        return _Fold(state=state, diagnostics=diag)

    final = reduce(step, enumerate(pages), _Fold())
    return SelectionResult(
        total_pages=len(pages),
        selected_page_indices=tuple(kept),
        diagnostics=final.diagnostics,
    )


def classify_documents(
    documents: Iterable[Sequence[Page]],
    options: ExtractionOptions,
    config: KeywordConfig = DEFAULT_KEYWORD_CONFIG,
    trace: TraceSink | None = None,
) -> list[SelectionResult]:
    """Classify already-extracted documents independently, preserving order."""
    validate_options(options)
    validate_keyword_config(config)
    return [classify_document(pages, options, config, trace) for pages in documents]


def logging_trace_sink(logger: logging.Logger, level: int = logging.DEBUG) -> TraceSink:
    """Return a trace sink that writes classifier decisions to ``logger``."""

    def _sink(ev: TraceEvent) -> None:
        if not logger.isEnabledFor(level):
            return
        if ev.kind == "toc":
            logger.log(level, "[Page %s] toc/page-number line ignored: %r", ev.page_index, ev.text)
        elif ev.kind == "skip":
            logger.log(
                level,
                "[Page %s] not a header candidate (item #%s): %r",
                ev.page_index,
                ev.position_index,
                ev.text,
            )
        elif ev.kind == "match":
            logger.log(
                level,
                "[Page %s] header found (%s): %r (item #%s)",
                ev.page_index,
                ev.event.value,
                ev.text,
                ev.position_index,
            )
        else:
            logger.log(
                level,
                "Page %s | event=%s | state=%s | selected=%s",
                ev.page_index,
                ev.event.value,
                ev.state.value if ev.state is not None else None,
                ev.selected,
            )

    return _sink
