"""User-editable page selection seeded from a classifier result.

The classifier's indices are only a starting point: a reviewer may add or
drop any page. Edits stay here and are never fed back to the classifier.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from secpick.classifier.types import SelectionResult

__all__ = ["EditableSelection", "parse_page_spec", "apply_page_edits", "selections_from_report"]

logger = logging.getLogger(__name__)


@dataclass
class EditableSelection:
    """Mutable selection over one document's pages.

    Attributes:
        name: Display name of the document.
        path: Source document path.
        total_pages: Page count of the source.
        initial: Indices proposed by the classifier.
    """

    name: str
    path: Path
    total_pages: int
    initial: tuple[int, ...] = ()
    _current: set[int] = field(default_factory=set, init=False, repr=False)

    def __post_init__(self) -> None:
        for i in self.initial:
            self._check(i)
        self._current = set(self.initial)

    @classmethod
    def from_result(cls, name: str, path: str | Path, result: SelectionResult) -> EditableSelection:
        return cls(
            name=name,
            path=Path(path),
            total_pages=result.total_pages,
            initial=tuple(result.selected_page_indices),
        )

    def _check(self, index: int) -> None:
        if not 0 <= index < self.total_pages:
            raise IndexError(f"page {index} out of range for {self.name} ({self.total_pages} pages)")

    @property
    def indices(self) -> list[int]:
        """Currently selected pages, ascending."""
        return sorted(self._current)

    @property
    def is_modified(self) -> bool:
        return self._current != set(self.initial)

    def is_selected(self, index: int) -> bool:
        return index in self._current

    def select(self, index: int) -> None:
        self._check(index)
        self._current.add(index)

    def deselect(self, index: int) -> None:
        self._check(index)
        self._current.discard(index)

    def toggle(self, index: int) -> bool:
        """Flip ``index`` and return its new selected state."""
        self._check(index)
        if index in self._current:
            self._current.remove(index)
            return False
        self._current.add(index)
        return True

    def select_all(self) -> None:
        self._current = set(range(self.total_pages))

    def clear(self) -> None:
        self._current = set()

    def reset(self) -> None:
        """Restore the classifier's proposal."""
        self._current = set(self.initial)


def parse_page_spec(spec: str) -> list[int]:
    """Turn 1-based page numbers like ``"1,3-5"`` into 0-based indices.

    Raises:
        ValueError: On an empty, non-numeric or descending item.
    """
    indices: list[int] = []
    for part in spec.split(","):
        part = part.strip()
        if not part:
            raise ValueError(f"empty page item in {spec!r}")
        first, sep, last = part.partition("-")
        try:
            lo = int(first)
            hi = int(last) if sep else lo
        except ValueError:
            raise ValueError(f"invalid page item {part!r} in {spec!r}") from None
        if lo < 1 or hi < lo:
            raise ValueError(f"invalid page range {part!r}; pages start at 1")
        indices.extend(range(lo - 1, hi))
    return indices


def _split_edit(edit: str) -> tuple[str, list[int]]:
    name, sep, spec = edit.rpartition("=")
    if not sep or not name:
        raise ValueError(f"expected FILE=PAGES, got {edit!r}")
    return name, parse_page_spec(spec)


def apply_page_edits(
    selections: Iterable[EditableSelection],
    select: Iterable[str] = (),
    deselect: Iterable[str] = (),
) -> None:
    """Apply ``FILE=PAGES`` edits in place.

    ``FILE`` matches a selection's name or its path as given. Every
    ``select`` edit is applied before any ``deselect`` edit.

    Raises:
        ValueError: If an edit is malformed or names no known document.
        IndexError: If a page is outside its document.
    """
    sel_list = list(selections)
    for edits, apply in ((select, EditableSelection.select), (deselect, EditableSelection.deselect)):
        for edit in edits:
            name, indices = _split_edit(edit)
            targets = [s for s in sel_list if name in (s.name, str(s.path))]
            if not targets:
                raise ValueError(f"no document named {name!r} in this run")
            for target in targets:
                for i in indices:
                    apply(target, i)
                logger.info("%s: edited selection now %s", target.name, target.indices)


def _report_entry(entry: Any, where: str) -> EditableSelection | None:
    if not isinstance(entry, dict) or not isinstance(entry.get("source"), str):
        raise ValueError(f"{where}: expected an object with a 'source' path")
    if "error" in entry:
        logger.warning("%s: %s failed earlier (%s); skipping", where, entry["source"], entry["error"])
        return None
    total = entry.get("total_pages")
    indices = entry.get("selected_page_indices")
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise ValueError(f"{where}: 'total_pages' must be a non-negative integer")
    if not isinstance(indices, list) or not all(isinstance(i, int) and not isinstance(i, bool) for i in indices):
        raise ValueError(f"{where}: 'selected_page_indices' must be a list of integers")
    path = Path(entry["source"])
    try:
        return EditableSelection(name=path.name, path=path, total_pages=total, initial=tuple(sorted(set(indices))))
    except IndexError as exc:
        raise ValueError(f"{where}: {exc}") from exc


def selections_from_report(path: str | Path) -> list[EditableSelection]:
    """Load editable selections from a ``secpick --report`` JSON file.

    The report may have been edited by hand. Documents recorded with an
    ``error`` are skipped.

    Raises:
        ValueError: If the file is not a report or an entry is malformed.
    """
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {p.name}: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get("documents"), list):
        raise ValueError(f"{p.name}: expected an object with top-level 'documents': list")
    selections: list[EditableSelection] = []
    for n, entry in enumerate(data["documents"]):
        sel = _report_entry(entry, f"{p.name} document {n}")
        if sel is not None:
            selections.append(sel)
    return selections
