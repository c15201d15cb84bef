from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Ensure src/ is on sys.path so we can import secpick.* without installing.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import fitz  # noqa: E402  PyMuPDF

MakePdf = Callable[[str, list[list[str]]], Path]


@pytest.fixture
def make_pdf(tmp_path: Path) -> MakePdf:
    """Build a PDF in ``tmp_path`` where each inner list is one page of lines.

    Lines are written top to bottom with the built-in Korean font, one text
    insertion per line, so each line extracts as its own span.
    """

    def _make(name: str, pages: list[list[str]]) -> Path:
        path = tmp_path / name
        doc = fitz.open()
        for lines in pages:
            page = doc.new_page()
            for i, line in enumerate(lines):
                page.insert_text((72, 72 + 20 * i), line, fontname="korea", fontsize=11)
        doc.save(str(path))
        doc.close()
        return path

    return _make
