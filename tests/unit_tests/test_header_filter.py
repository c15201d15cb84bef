import pytest

from secpick.classifier.header_filter import is_header_candidate, is_table_of_contents_line
from secpick.classifier.types import TextFragment


@pytest.mark.parametrize(
    "raw",
    [
        "Section Foo ........ 41",
        "문족 41",
        "급분바 … 5",
        "12",
        " 1 2 ",
        "문족..부록",
        "문족…",
    ],
)
def test_toc_lines_rejected(raw: str) -> None:
    assert is_table_of_contents_line(raw)


@pytest.mark.parametrize("raw", ["문족", "2. 급분바", "문족 41쪽", "제3장 문족 (2024)", "v1.2 문족"])
def test_headers_not_rejected(raw: str) -> None:
    assert not is_table_of_contents_line(raw)


def test_trailing_number_must_end_the_string():
    # "$" would also match before a trailing newline
    assert not is_table_of_contents_line("문족 41\n")


def test_candidate_position_limit():
    assert is_header_candidate(TextFragment("문족", 19), "문족")
    assert not is_header_candidate(TextFragment("문족", 20), "문족")


def test_candidate_length_bounds():
    frag = TextFragment("x", 0)
    assert not is_header_candidate(frag, "")
    assert is_header_candidate(frag, "가" * 49)
    assert not is_header_candidate(frag, "가" * 50)
