"""Type definitions for the Section Classifier.

Runtime types documenting the inputs and outputs of the page-selection API.
Pages and fragments are produced by the extraction layer; the classifier only
reads them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, TypedDict


@dataclass(frozen=True, slots=True)
class TextFragment:
    """One run of extracted text and its rank among the fragments on its page."""

    text: str
    position_index: int


@dataclass(frozen=True, slots=True)
class Page:
    """A single input page providing its index and ordered text fragments."""

    page_index: int
    fragments: tuple[TextFragment, ...] = ()

    @classmethod
    def from_texts(cls, page_index: int, texts: list[str]) -> Page:
        """Build a page whose fragment ranks follow list order."""
        return cls(
            page_index=page_index,
            fragments=tuple(TextFragment(text=t, position_index=i) for i, t in enumerate(texts)),
        )


@dataclass(frozen=True, slots=True)
class ExtractionOptions:
    """Which selections the caller asked for.

    Attributes:
        intro: Keep the very first page of each document.
        section_a: Keep pages inside section A (e.g. 급분바).
        section_b: Keep pages inside section B (e.g. 문족).
    """

    intro: bool = False
    section_a: bool = False
    section_b: bool = False

    def any_selected(self) -> bool:
        return self.intro or self.section_a or self.section_b


@dataclass(frozen=True, slots=True)
class KeywordConfig:
    """Literal keyword vocabularies for the two section kinds."""

    section_a_keywords: frozenset[str]
    section_b_keywords: frozenset[str]


class ClassifierState(str, Enum):
    NONE = "none"
    IN_SECTION_A = "in_section_a"
    IN_SECTION_B = "in_section_b"


class PageEvent(str, Enum):
    NONE = "none"
    SECTION_A = "section_a"
    SECTION_B = "section_b"


@dataclass(frozen=True, slots=True)
class Diagnostics:
    """Whether each section's keyword was seen anywhere in the document."""

    section_a_keyword_seen: bool = False
    section_b_keyword_seen: bool = False


@dataclass(frozen=True, slots=True)
class SelectionResult:
    """Per-document outcome of one classification run.

    ``selected_page_indices`` is sorted ascending, deduplicated and always
    within ``[0, total_pages)``.
    """

    total_pages: int
    selected_page_indices: tuple[int, ...] = ()
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def to_dict(self) -> SelectionResultDict:
        return {
            "total_pages": self.total_pages,
            "selected_page_indices": list(self.selected_page_indices),
            "diagnostics": {
                "section_a_keyword_seen": self.diagnostics.section_a_keyword_seen,
                "section_b_keyword_seen": self.diagnostics.section_b_keyword_seen,
            },
        }


class DiagnosticsDict(TypedDict):
    section_a_keyword_seen: bool
    section_b_keyword_seen: bool


class SelectionResultDict(TypedDict):
    """JSON shape of a :class:`SelectionResult`."""

    total_pages: int
    selected_page_indices: list[int]
    diagnostics: DiagnosticsDict


@dataclass(frozen=True, slots=True)
class TraceEvent:
    """A single classifier decision reported to an optional trace sink.

    ``kind`` is ``"toc"`` (fragment rejected as table of contents),
    ``"skip"`` (not a header candidate), ``"match"`` (candidate matched a
    keyword) or ``"page"`` (per-page summary after the transition).
    """

    kind: Literal["toc", "skip", "match", "page"]
    page_index: int
    position_index: int | None = None
    text: str = ""
    event: PageEvent = PageEvent.NONE
    state: ClassifierState | None = None
    selected: bool | None = None


TraceSink = Callable[[TraceEvent], None]
