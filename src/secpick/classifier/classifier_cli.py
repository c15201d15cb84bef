"""Command-line interface for the Section Classifier (JSON/JSONL only).

Reads pre-extracted pages, runs the page classifier and writes a single
``selection.json`` artifact to an output directory. Raw PDFs go through the
``secpick`` CLI instead.

Accepted inputs:
- .jsonl: One page record per line (``{"page_index": 0, "fragments": [...]}``).
- .json: An object with a top-level key ``pages`` holding page records.

Usage (programmatic):
    from secpick.classifier import classifier_cli
    exit_code = classifier_cli.main(["pages.jsonl", "out_dir", "--section-b"])
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from secpick.classifier.keywords import DEFAULT_KEYWORD_CONFIG, load_keyword_config
from secpick.classifier.section_classifier import classify_document, logging_trace_sink
from secpick.classifier.types import ExtractionOptions
from secpick.errors import ConfigurationError
from secpick.ingestion.pdf_pages import load_pages_json
from secpick.logging_setup import TRACE_LEVEL, get_logger


def _write_json(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(data, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="secpick-classify",
        description="Select pages by section from pre-extracted page fragments.",
    )
    parser.add_argument("input", help="Path to pages .json or .jsonl")
    parser.add_argument("output_dir", help="Directory receiving selection.json")
    parser.add_argument("--intro", action="store_true", help="Keep the first page")
    parser.add_argument("--section-a", action="store_true", help="Keep section A pages")
    parser.add_argument("--section-b", action="store_true", help="Keep section B pages")
    parser.add_argument("--keywords", help="Optional YAML keyword configuration")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the classifier CLI.

    Args:
        argv: Command-line arguments. If None, ``sys.argv[1:]`` is used.

    Returns:
        Process exit code: 0 on success, 2 usage, 3 missing input,
        4 invalid input or configuration, 5 write failure.
    """
    try:
        args = _build_parser().parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    log = get_logger("secpick.classify")

    in_path = Path(args.input)
    out_dir = Path(args.output_dir)
    if not in_path.is_file():
        sys.stderr.write(f"Input not found: {in_path}\n")
        return 3

    options = ExtractionOptions(intro=args.intro, section_a=args.section_a, section_b=args.section_b)
    try:
        config = load_keyword_config(args.keywords) if args.keywords else DEFAULT_KEYWORD_CONFIG
        pages = load_pages_json(in_path)
        result = classify_document(pages, options, config, trace=logging_trace_sink(log, TRACE_LEVEL))
    except (ValueError, FileNotFoundError) as exc:
        # ConfigurationError is a ValueError
        kind = "configuration" if isinstance(exc, ConfigurationError) else "input"
        sys.stderr.write(f"Invalid {kind}: {exc}\n")
        return 4

    try:
        _write_json(out_dir / "selection.json", {"source": in_path.name, **result.to_dict()})
    except OSError as exc:
        sys.stderr.write(f"Failed to write outputs: {exc}\n")
        return 5

    sys.stdout.write("Wrote selection to " + str(out_dir / "selection.json") + "\n")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(main())
