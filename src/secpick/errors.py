"""Exception taxonomy shared across extraction, classification and assembly."""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "SecpickError",
    "ConfigurationError",
    "ValidationError",
    "ExtractionError",
    "AssemblyError",
]


class SecpickError(Exception):
    """Base class for all package errors."""


class ConfigurationError(SecpickError, ValueError):
    """Caller precondition violated before classification started."""


class ValidationError(SecpickError, ValueError):
    """Request-level form check failed.

    Attributes:
        errors: Every failed check, in the order they were evaluated.
    """

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class ExtractionError(SecpickError):
    """Document text could not be turned into pages and fragments.

    Attributes:
        path: Source document.
        reason: Short machine-friendly cause (``"open"``, ``"password"``, ``"page"``,
            ``"format"``).
    """

    def __init__(self, path: str | Path, reason: str, detail: str = "") -> None:
        msg = f"Cannot extract {Path(path).name}: {reason}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)
        self.path = Path(path)
        self.reason = reason


class AssemblyError(SecpickError):
    """Copying selected pages from a source document failed."""

    def __init__(self, path: str | Path, detail: str) -> None:
        super().__init__(f"Failed to assemble pages from {Path(path).name}: {detail}")
        self.path = Path(path)
