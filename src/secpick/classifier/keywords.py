"""Keyword vocabularies and the keyword matcher.

The built-in configuration recognises two section kinds:

* section A (급분바) together with the misspellings that show up in scanned
  and re-typed handouts;
* section B (문족).

A YAML file with the same two keys can replace the built-in vocabulary for a
differently spelled build; it goes through the same validation.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import yaml

from secpick.classifier.normalize import compose, normalize_text
from secpick.classifier.types import KeywordConfig, PageEvent
from secpick.errors import ConfigurationError

__all__ = [
    "SECTION_A_KEYWORDS",
    "SECTION_B_KEYWORDS",
    "DEFAULT_KEYWORD_CONFIG",
    "make_keyword_config",
    "validate_keyword_config",
    "load_keyword_config",
    "match_kind",
]

SECTION_A_KEYWORDS = ("급분바", "끕뿐빠", "끕쁀뺘")
SECTION_B_KEYWORDS = ("문족",)


def validate_keyword_config(config: KeywordConfig) -> KeywordConfig:
    """Reject empty, blank or overlapping keyword sets.

    Fragments are compared after normalization, so a keyword must already be
    in normalized form (non-empty, Hangul syllables only) to ever match.

    Raises:
        ConfigurationError: On any violation.
    """
    if not config.section_a_keywords:
        raise ConfigurationError("section A keyword set is empty")
    if not config.section_b_keywords:
        raise ConfigurationError("section B keyword set is empty")
    for label, keywords in (("A", config.section_a_keywords), ("B", config.section_b_keywords)):
        for kw in keywords:
            if not isinstance(kw, str) or not kw or normalize_text(kw) != kw:
                raise ConfigurationError(f"section {label} keyword {kw!r} must be Hangul syllables only")
    overlap = config.section_a_keywords & config.section_b_keywords
    if overlap:
        raise ConfigurationError(f"keyword sets overlap: {sorted(overlap)}")
    return config


def make_keyword_config(section_a: Iterable[str], section_b: Iterable[str]) -> KeywordConfig:
    """Build and validate a :class:`KeywordConfig` from two iterables."""
    return validate_keyword_config(
        KeywordConfig(
            section_a_keywords=frozenset(section_a),
            section_b_keywords=frozenset(section_b),
        )
    )


DEFAULT_KEYWORD_CONFIG = make_keyword_config(SECTION_A_KEYWORDS, SECTION_B_KEYWORDS)


def load_keyword_config(path: str | Path) -> KeywordConfig:
    """Load a :class:`KeywordConfig` from a YAML file.

    Expected shape::

        section_a: [급분바, 끕뿐빠]
        section_b: [문족]

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ConfigurationError: If the file is not readable YAML, keys are missing
            or values are not string lists.
    """
    src = Path(path)
    try:
        data = yaml.safe_load(src.read_text(encoding="utf-8")) or {}
    except (yaml.YAMLError, UnicodeDecodeError, IsADirectoryError, PermissionError) as exc:
        raise ConfigurationError(f"{src.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"{src.name}: expected a mapping at top level")
    missing = [k for k in ("section_a", "section_b") if k not in data]
    if missing:
        raise ConfigurationError(f"missing fields: {', '.join(missing)}")
    lists: dict[str, list[str]] = {}
    for key in ("section_a", "section_b"):
        value = data[key]
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigurationError(f"'{key}' must be a list of strings")
        lists[key] = [compose(v.strip()) for v in value]
    return make_keyword_config(lists["section_a"], lists["section_b"])


def match_kind(normalized_text: str, config: KeywordConfig) -> PageEvent:
    """Classify one normalized fragment by substring containment.

    Section A is checked first, so a fragment containing keywords of both
    kinds is reported as section A.
    """
    if any(kw in normalized_text for kw in config.section_a_keywords):
        return PageEvent.SECTION_A
    if any(kw in normalized_text for kw in config.section_b_keywords):
        return PageEvent.SECTION_B
    return PageEvent.NONE
