from __future__ import annotations

import json
from pathlib import Path

import fitz  # PyMuPDF

from secpick import cli


def test_cli_end_to_end(make_pdf, tmp_path: Path) -> None:
    first = make_pdf("first.pdf", [["표지"], ["문족"], ["풀이"]])
    second = make_pdf("second.pdf", [["표지"], ["급분바"], ["문족"]])
    out = tmp_path / "merged.pdf"
    report = tmp_path / "report.json"
    code = cli.main([str(first), str(second), "-o", str(out), "--section-b", "--report", str(report)])
    assert code == 0
    with fitz.open(str(out)) as doc:
        assert doc.page_count == 3
    data = json.loads(report.read_text(encoding="utf-8"))
    assert [d["selected_page_indices"] for d in data["documents"]] == [[1, 2], [2]]


def test_cli_validation_errors(tmp_path: Path, capsys) -> None:
    code = cli.main([])
    assert code == 2
    err = capsys.readouterr().err
    assert "at least one PDF" in err
    assert "at least one of intro" in err


def test_cli_extraction_failure(tmp_path: Path) -> None:
    bad = tmp_path / "bad.pdf"
    bad.write_bytes(b"nope")
    code = cli.main([str(bad), "-o", str(tmp_path / "merged.pdf"), "--intro"])
    assert code == 3


def test_cli_skip_failures(make_pdf, tmp_path: Path) -> None:
    good = make_pdf("good.pdf", [["표지"], ["본문"]])
    bad = tmp_path / "bad.pdf"
    bad.write_bytes(b"nope")
    out = tmp_path / "merged.pdf"
    code = cli.main([str(bad), str(good), "-o", str(out), "--intro", "--skip-failures"])
    assert code == 0
    with fitz.open(str(out)) as doc:
        assert doc.page_count == 1


def test_cli_nothing_selected(make_pdf, tmp_path: Path) -> None:
    pdf = make_pdf("plain.pdf", [["본문"]])
    code = cli.main([str(pdf), "-o", str(tmp_path / "merged.pdf"), "--section-a"])
    assert code == 4


def test_cli_malformed_keywords_file(make_pdf, tmp_path: Path, capsys) -> None:
    pdf = make_pdf("doc.pdf", [["문족"]])
    kw = tmp_path / "keywords.yaml"
    kw.write_text("section_a: [급분바\nsection_b: 문족\n", encoding="utf-8")
    code = cli.main([str(pdf), "-o", str(tmp_path / "m.pdf"), "--section-b", "--keywords", str(kw)])
    assert code == 2
    assert "keywords.yaml" in capsys.readouterr().err
    assert not (tmp_path / "m.pdf").exists()


def test_cli_unwritable_output(make_pdf, tmp_path: Path) -> None:
    pdf = make_pdf("doc.pdf", [["문족"]])
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    assert cli.main([str(pdf), "-o", str(blocker / "m.pdf"), "--section-b"]) == 4


def test_cli_merges_hand_edited_report(make_pdf, tmp_path: Path) -> None:
    first = make_pdf("first.pdf", [["표지"], ["문족"], ["풀이"]])
    report = tmp_path / "report.json"
    assert cli.main([str(first), "-o", str(tmp_path / "auto.pdf"), "--section-b", "--report", str(report)]) == 0

    data = json.loads(report.read_text(encoding="utf-8"))
    assert data["documents"][0]["selected_page_indices"] == [1, 2]
    data["documents"][0]["selected_page_indices"] = [0]
    report.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

    out = tmp_path / "edited.pdf"
    code = cli.main(["--from-report", str(report), "-o", str(out), "--select", "first.pdf=3"])
    assert code == 0
    with fitz.open(str(out)) as doc:
        assert doc.page_count == 2


def test_cli_select_and_deselect_pages(make_pdf, tmp_path: Path) -> None:
    first = make_pdf("first.pdf", [["표지"], ["문족"], ["풀이"], ["정리"]])
    out = tmp_path / "merged.pdf"
    code = cli.main(
        [str(first), "-o", str(out), "--section-b", "--select", "first.pdf=1", "--deselect", "first.pdf=3-4"]
    )
    assert code == 0
    with fitz.open(str(out)) as doc:
        assert doc.page_count == 2


def test_cli_bad_page_edits(make_pdf, tmp_path: Path, capsys) -> None:
    first = make_pdf("first.pdf", [["표지"], ["문족"]])
    out = tmp_path / "merged.pdf"
    assert cli.main([str(first), "-o", str(out), "--section-b", "--select", "other.pdf=1"]) == 2
    assert "other.pdf" in capsys.readouterr().err
    assert cli.main([str(first), "-o", str(out), "--section-b", "--select", "first.pdf=9"]) == 2
    assert cli.main([str(first), "-o", str(out), "--section-b", "--select", "first.pdf=two"]) == 2
    assert not out.exists()


def test_cli_from_report_usage_errors(make_pdf, tmp_path: Path) -> None:
    pdf = make_pdf("doc.pdf", [["문족"]])
    report = tmp_path / "report.json"
    report.write_text(json.dumps({"documents": []}), encoding="utf-8")
    assert cli.main([str(pdf), "--from-report", str(report), "-o", str(tmp_path / "m.pdf")]) == 2
    assert cli.main(["--from-report", str(report)]) == 2
    assert cli.main(["--from-report", str(tmp_path / "missing.json"), "-o", str(tmp_path / "m.pdf")]) == 2
