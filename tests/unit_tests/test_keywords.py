from pathlib import Path

import pytest

from secpick.classifier.keywords import (
    DEFAULT_KEYWORD_CONFIG,
    load_keyword_config,
    make_keyword_config,
    match_kind,
)
from secpick.classifier.types import KeywordConfig, PageEvent
from secpick.errors import ConfigurationError


def test_match_by_substring():
    assert match_kind("제일장급분바정리", DEFAULT_KEYWORD_CONFIG) is PageEvent.SECTION_A
    assert match_kind("끕쁀뺘", DEFAULT_KEYWORD_CONFIG) is PageEvent.SECTION_A
    assert match_kind("문족모음", DEFAULT_KEYWORD_CONFIG) is PageEvent.SECTION_B
    assert match_kind("문제", DEFAULT_KEYWORD_CONFIG) is PageEvent.NONE


def test_section_a_wins_within_fragment():
    assert match_kind("문족급분바", DEFAULT_KEYWORD_CONFIG) is PageEvent.SECTION_A


def test_empty_or_overlapping_sets_rejected():
    with pytest.raises(ConfigurationError):
        make_keyword_config([], ["문족"])
    with pytest.raises(ConfigurationError):
        make_keyword_config(["급분바"], [])
    with pytest.raises(ConfigurationError):
        make_keyword_config(["급분바", "문족"], ["문족"])


def test_non_hangul_keyword_rejected():
    with pytest.raises(ConfigurationError):
        make_keyword_config(["급분바 "], ["문족"])
    with pytest.raises(ConfigurationError):
        make_keyword_config(["abc"], ["문족"])


def test_load_yaml_config(tmp_path: Path):
    cfg = tmp_path / "keywords.yaml"
    cfg.write_text("section_a: [급분바, 급분빠]\nsection_b: 문족\n", encoding="utf-8")
    loaded = load_keyword_config(cfg)
    assert loaded == KeywordConfig(frozenset({"급분바", "급분빠"}), frozenset({"문족"}))


def test_load_yaml_missing_key(tmp_path: Path):
    cfg = tmp_path / "keywords.yaml"
    cfg.write_text("section_a: [급분바]\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="section_b"):
        load_keyword_config(cfg)


@pytest.mark.parametrize(
    "raw",
    [
        "section_a: [급분바\nsection_b: 문족\n".encode("utf-8"),
        b"section_a: [\xff\xfe]\n",
    ],
)
def test_load_yaml_unreadable_file_is_configuration_error(tmp_path: Path, raw: bytes):
    cfg = tmp_path / "keywords.yaml"
    cfg.write_bytes(raw)
    with pytest.raises(ConfigurationError, match="keywords.yaml"):
        load_keyword_config(cfg)


def test_load_yaml_directory_is_configuration_error(tmp_path: Path):
    with pytest.raises(ConfigurationError):
        load_keyword_config(tmp_path)
