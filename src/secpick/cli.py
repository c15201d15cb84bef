"""End-to-end CLI: PDFs in, classified, optionally hand-edited, merged PDF out."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from secpick.assembly.editor import EditableSelection, apply_page_edits, selections_from_report
from secpick.assembly.merge import merge_selected
from secpick.batch import BatchItem, classify_batch
from secpick.classifier.keywords import DEFAULT_KEYWORD_CONFIG, load_keyword_config
from secpick.classifier.section_classifier import logging_trace_sink
from secpick.classifier.types import ExtractionOptions
from secpick.errors import AssemblyError, ConfigurationError, ExtractionError, ValidationError
from secpick.logging_setup import TRACE_LEVEL, get_logger
from secpick.validation import validate_request


def _report(items: list[BatchItem]) -> dict[str, object]:
    docs: list[dict[str, object]] = []
    for item in items:
        entry: dict[str, object] = {"source": str(item.path)}
        if item.result is not None:
            entry.update(item.result.to_dict())
        else:
            entry["error"] = str(item.error)
        docs.append(entry)
    return {"documents": docs}

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="secpick",
        description="Keep intro and section pages from PDFs and merge them in order.",
    )
    parser.add_argument("inputs", nargs="*", help="Input PDFs, in merge order")
    parser.add_argument("-o", "--output", default="", help="Path of the merged PDF")
    parser.add_argument("--intro", action="store_true", help="Keep the first page of each PDF")
    parser.add_argument("--section-a", action="store_true", help="Keep section A pages")
    parser.add_argument("--section-b", action="store_true", help="Keep section B pages")
    parser.add_argument("--keywords", help="Optional YAML keyword configuration")
    parser.add_argument("--report", help="Write per-document selections as JSON to this path")
    parser.add_argument(
        "--from-report",
        help="Merge the (possibly hand-edited) selections of an earlier --report instead of classifying",
    )
    parser.add_argument(
        "--select",
        action="append",
        default=[],
        metavar="FILE=PAGES",
        help="Also keep these 1-based pages of FILE, e.g. week1.pdf=1,3-5 (repeatable)",
    )
    parser.add_argument(
        "--deselect",
        action="append",
        default=[],
        metavar="FILE=PAGES",
        help="Drop these 1-based pages of FILE (repeatable, applied after --select)",
    )
    parser.add_argument(
        "--skip-failures",
        action="store_true",
        help="Continue with remaining PDFs when one cannot be read",
    )
    parser.add_argument("--workers", type=int, default=None, help="Parallel extraction threads")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    return parser


def _load_report_selections(args: argparse.Namespace) -> list[EditableSelection] | int:
    if args.inputs:
        print("Error: --from-report cannot be combined with input PDFs.", file=sys.stderr)
        return 2
    if not args.output.strip():
        print("Error: Provide a name for the output file.", file=sys.stderr)
        return 2
    try:
        return selections_from_report(args.from_report)
    except (ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


def _classify_selections(args: argparse.Namespace, log: logging.Logger) -> list[BatchItem] | int:
    options = ExtractionOptions(intro=args.intro, section_a=args.section_a, section_b=args.section_b)
    try:
        validate_request(args.inputs, args.output, options)
        config = load_keyword_config(args.keywords) if args.keywords else DEFAULT_KEYWORD_CONFIG
    except ValidationError as exc:
        for err in exc.errors:
            print(f"Error: {err}", file=sys.stderr)
        return 2
    except (ConfigurationError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        items = classify_batch(
            args.inputs,
            options,
            config,
            max_workers=args.workers,
            skip_failures=args.skip_failures,
            trace=logging_trace_sink(log, TRACE_LEVEL),
            show_progress=args.progress,
        )
    except (ExtractionError, FileNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 3

    if args.report:
        report_path = Path(args.report)
        try:
            report_path.parent.mkdir(parents=True, exist_ok=True)
            report_path.write_text(json.dumps(_report(items), ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            print(f"Error: cannot write report: {exc}", file=sys.stderr)
            return 4
    return items


def main(argv: list[str] | None = None) -> int:
    """Run the PDF section picker.

    Pages come either from classifying the input PDFs or from an earlier
    ``--report`` passed as ``--from-report``. ``--select``/``--deselect``
    edits are applied on top before merging.

    Args:
        argv: Optional list of command-line arguments. When ``None``,
            arguments are read from ``sys.argv``.

    Returns:
        Process exit code: ``0`` on success, ``2`` on usage or validation
        errors, ``3`` on extraction failure, ``4`` on assembly failure.
    """
    try:
        args = _build_parser().parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    log = get_logger("secpick")

    failed = 0
    if args.from_report:
        loaded = _load_report_selections(args)
        if isinstance(loaded, int):
            return loaded
        selections = loaded
    else:
        items = _classify_selections(args, log)
        if isinstance(items, int):
            return items
        failed = sum(1 for item in items if not item.ok)
        selections = [
            EditableSelection.from_result(item.path.name, item.path, item.result)
            for item in items
            if item.result is not None
        ]

    try:
        apply_page_edits(selections, args.select, args.deselect)
    except (ValueError, IndexError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        written = merge_selected([(sel.path, sel.indices) for sel in selections], args.output)
    except (AssemblyError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 4

    print(f"Wrote {written} pages to {args.output}" + (f" ({failed} document(s) skipped)" if failed else ""))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
