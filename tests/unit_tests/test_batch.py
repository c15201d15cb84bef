from __future__ import annotations

import threading
from pathlib import Path

import pytest

from secpick.batch import classify_batch, default_max_workers
from secpick.classifier.types import ExtractionOptions, Page, TraceEvent
from secpick.errors import ConfigurationError, ExtractionError

DOCS: dict[str, list[Page]] = {
    "a.pdf": [Page.from_texts(0, ["표지"]), Page.from_texts(1, ["문족"]), Page.from_texts(2, ["풀이"])],
    "b.pdf": [Page.from_texts(0, ["표지"]), Page.from_texts(1, ["풀이"])],
    "c.pdf": [Page.from_texts(0, ["급분바"]), Page.from_texts(1, ["문족"])],
}


def fake_extractor(path: Path) -> list[Page]:
    if path.name == "broken.pdf":
        raise ExtractionError(path, "open", "not a PDF")
    return DOCS[path.name]


@pytest.mark.parametrize("workers", [1, 3])
def test_results_follow_input_order(workers: int):
    items = classify_batch(
        ["c.pdf", "a.pdf", "b.pdf"],
        ExtractionOptions(section_b=True),
        max_workers=workers,
        extractor=fake_extractor,
    )
    assert [i.path.name for i in items] == ["c.pdf", "a.pdf", "b.pdf"]
    assert [i.result.selected_page_indices for i in items] == [(1,), (1, 2), ()]


def test_failure_aborts_by_default():
    with pytest.raises(ExtractionError):
        classify_batch(["a.pdf", "broken.pdf"], ExtractionOptions(intro=True), extractor=fake_extractor)


def test_skip_failures_keeps_other_documents():
    items = classify_batch(
        ["a.pdf", "broken.pdf", "b.pdf"],
        ExtractionOptions(intro=True),
        skip_failures=True,
        extractor=fake_extractor,
    )
    assert [i.ok for i in items] == [True, False, True]
    assert items[1].result is None
    assert isinstance(items[1].error, ExtractionError)
    assert items[2].result.selected_page_indices == (0,)


def test_cancelled_batch_omits_remaining_documents():
    cancel = threading.Event()
    cancel.set()
    items = classify_batch(["a.pdf", "b.pdf"], ExtractionOptions(intro=True), extractor=fake_extractor, cancel_event=cancel)
    assert items == []


def test_invalid_options_fail_before_extraction():
    calls: list[Path] = []

    def tracking(path: Path) -> list[Page]:
        calls.append(path)
        return []

    with pytest.raises(ConfigurationError):
        classify_batch(["a.pdf"], ExtractionOptions(), extractor=tracking)
    assert calls == []


def test_missing_keyword_logs_warning(caplog: pytest.LogCaptureFixture):
    caplog.set_level("WARNING", logger="secpick.batch")
    classify_batch(["b.pdf"], ExtractionOptions(section_a=True), extractor=fake_extractor)
    assert "no section A keyword found" in caplog.text


def test_default_max_workers_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SECPICK_MAX_WORKERS", "4")
    assert default_max_workers() == 4
    monkeypatch.setenv("SECPICK_MAX_WORKERS", "lots")
    assert default_max_workers() == 1


def test_cancel_mid_batch_keeps_only_finished_documents(caplog: pytest.LogCaptureFixture):
    caplog.set_level("INFO", logger="secpick.batch")
    cancel = threading.Event()

    def cancel_after_first_page(event: TraceEvent) -> None:
        if event.kind == "page":
            cancel.set()

    items = classify_batch(
        ["a.pdf", "b.pdf", "c.pdf"],
        ExtractionOptions(section_b=True),
        extractor=fake_extractor,
        trace=cancel_after_first_page,
        cancel_event=cancel,
    )
    assert [i.path.name for i in items] == ["a.pdf"]
    assert items[0].result.total_pages == 3
    assert items[0].result.selected_page_indices == (1, 2)
    assert "batch_cancelled remaining=2" in caplog.text
