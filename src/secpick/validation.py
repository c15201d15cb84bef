"""Request-level checks run before any document is opened."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from secpick.classifier.types import ExtractionOptions
from secpick.errors import ValidationError

__all__ = ["collect_request_errors", "validate_request"]


def collect_request_errors(
    files: Sequence[str | Path],
    output_name: str,
    options: ExtractionOptions,
) -> list[str]:
    """Return every failed check; an empty list means the request is valid."""
    errors: list[str] = []
    if not files:
        errors.append("Provide at least one PDF file.")
    if not options.any_selected():
        errors.append("Select at least one of intro, section A, section B.")
    if not output_name.strip():
        errors.append("Provide a name for the output file.")
    return errors


def validate_request(
    files: Sequence[str | Path],
    output_name: str,
    options: ExtractionOptions,
) -> None:
    """Raise :class:`ValidationError` listing all problems, if any."""
    errors = collect_request_errors(files, output_name, options)
    if errors:
        raise ValidationError(errors)
