import re

from mangashelf.models import Chapter, Series

NUMBER = r"(\d+)(\.\d+)?(\.?[a-z]+)?"

# tags such as "vol.3", "v2" or "season 1" that carry a number but no chapter
UNWANTED_RE = re.compile(r"(?<![a-z])(?:version|volume|season|ver|vol|v|s)\s*\.?\s*\d+")
UNWANTED_WHITESPACE_RE = re.compile(r"\s(?=extra|special|omake)")
CH_RE = re.compile(r"(?<![a-z])(?:chapter|chap|ch)\.?\s*" + NUMBER)
NUMBER_RE = re.compile(NUMBER)

UNKNOWN = -1.0


def _alpha_addition(alpha: str) -> float:
    if "extra" in alpha:
        return 0.99
    if "omake" in alpha:
        return 0.98
    if "special" in alpha:
        return 0.97
    alpha = alpha.lstrip(".")
    if len(alpha) == 1:
        n = ord(alpha) - ord("a") + 1
        if 0 < n < 10:
            return n / 10
    return 0.0


def _from_match(m: re.Match) -> float:
    number = float(m.group(1))
    decimal, alpha = m.group(2), m.group(3)
    if decimal:
        return number + float(decimal)
    if alpha:
        return number + _alpha_addition(alpha)
    return number


def parse_chapter_number(chapter: Chapter, series: Series) -> float:
    """Guess the chapter number from a chapter's display name.

    Returns -1.0 when the name carries no usable number.
    """
    name = chapter.name.lower()
    title = (series.title or "").lower()
    if title and name.startswith(title):
        name = name[len(title):]
    name = name.replace(",", ".")
    name = UNWANTED_RE.sub("", name)
    name = UNWANTED_WHITESPACE_RE.sub("", name)

    m = CH_RE.search(name)
    if m:
        return _from_match(m)
    m = NUMBER_RE.search(name)
    if m:
        return _from_match(m)
    return UNKNOWN
