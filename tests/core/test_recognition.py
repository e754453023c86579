import pytest

from mangashelf.core.recognition import parse_chapter_number
from mangashelf.models import Chapter, Series


def number(name: str, title: str = "Some Series") -> float:
    return parse_chapter_number(Chapter(url=f"x/{name}", name=name), Series(name=title, title=title))


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Chapter 12", 12.0),
        ("ch.7", 7.0),
        ("Ch. 5.5", 5.5),
        ("Chapter 1,5", 1.5),
        ("Vol.2 Ch.10", 10.0),
        ("Volume 3 Chapter 21", 21.0),
        ("Chapter 5a", 5.1),
        ("Chapter 5b", 5.2),
        ("Chapter 8 extra", 8.99),
        ("Chapter 8 omake", 8.98),
        ("Chapter 8 special", 8.97),
        ("014", 14.0),
        ("Episode 3 part 2", 3.0),
    ],
)
def test_chapter_numbers(name: str, expected: float) -> None:
    assert number(name) == pytest.approx(expected)


def test_series_title_digits_are_ignored() -> None:
    assert number("Area 51 - 7", title="Area 51") == pytest.approx(7.0)


def test_no_number_is_unknown() -> None:
    assert number("Oneshot") == -1.0
