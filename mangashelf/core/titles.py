LEADING_SEPARATORS = " -_,:"


def _is_structural(ch: str) -> bool:
    return not ch.isalnum() and not ch.isspace()


def strip_series_title(chapter_name: str, series_title: str) -> str:
    """Remove a leading copy of the series title from a chapter name.

    Both strings are walked together, skipping punctuation on either side, so
    "My Series - Chapter 12" with title "My Series!" still reduces to
    "Chapter 12". When letters, digits or whitespace disagree the name is
    returned untouched. The result may be empty; callers keep the original
    name in that case.
    """
    i = j = 0
    while i < len(chapter_name) and j < len(series_title):
        a = chapter_name[i]
        b = series_title[j]
        if a.casefold() == b.casefold():
            i += 1
            j += 1
            continue

        a_structural = _is_structural(a)
        b_structural = _is_structural(b)
        if not a_structural and not b_structural:
            return chapter_name
        if a_structural:
            i += 1
        if b_structural:
            j += 1

    return chapter_name[i:].lstrip(LEADING_SEPARATORS)
