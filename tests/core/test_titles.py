import pytest

from mangashelf.core.titles import strip_series_title


def test_strips_leading_series_title() -> None:
    assert strip_series_title("My Series - Chapter 12", "My Series") == "Chapter 12"


def test_unrelated_name_is_untouched() -> None:
    assert strip_series_title("Chapter 5", "Unrelated Title") == "Chapter 5"


def test_matching_is_case_insensitive() -> None:
    assert strip_series_title("MY SERIES ch. 3", "my series") == "ch. 3"


def test_punctuation_is_skipped_on_both_sides() -> None:
    assert strip_series_title("My Series: Chapter 1", "My Series!") == "Chapter 1"
    assert strip_series_title("Title_01", "Title") == "01"


def test_whitespace_is_content_not_punctuation() -> None:
    assert strip_series_title("My-Series 2", "My Series") == "My-Series 2"


def test_diverging_content_returns_original() -> None:
    assert strip_series_title("My Story 4", "My Series") == "My Story 4"


@pytest.mark.parametrize(
    "name, title",
    [
        ("My Series - Chapter 12", "My Series"),
        ("Series, Vol 2", "Series"),
        ("Chapter 5", "Unrelated Title"),
    ],
)
def test_stripping_twice_is_stable(name: str, title: str) -> None:
    once = strip_series_title(name, title)
    assert strip_series_title(once, title) == once


def test_name_equal_to_title_strips_to_empty() -> None:
    assert strip_series_title("My Series", "My Series") == ""
    assert strip_series_title("My Series - ", "My Series") == ""


def test_empty_title_only_trims_separators() -> None:
    assert strip_series_title("- Chapter 1", "") == "Chapter 1"
