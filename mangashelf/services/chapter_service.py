import logging
from functools import cmp_to_key
from pathlib import Path
from typing import Callable, Iterable

from mangashelf.core.containers import Epub
from mangashelf.core.epub import EpubFile
from mangashelf.core.errors import ContainerReadError, FormatError
from mangashelf.core.filesystem import list_entries, modified_at
from mangashelf.core.formats import is_supported_file, resolve_chapter
from mangashelf.core.natural import natural_key
from mangashelf.core.recognition import parse_chapter_number
from mangashelf.core.titles import strip_series_title
from mangashelf.models import Chapter, Series

logger = logging.getLogger(__name__)

NumberParser = Callable[[Chapter, Series], float]

def _cmp(a, b) -> int:
    return (a > b) - (a < b)

def _chapter_order(sort_key: Callable[[str], object]):
    # highest number first, ties broken by descending natural name order
    def compare(c1: Chapter, c2: Chapter) -> int:
        c = _cmp(c2.chapter_number, c1.chapter_number)
        if c == 0:
            c = _cmp(sort_key(c2.name), sort_key(c1.name))
        return c
    return cmp_to_key(compare)

def fill_epub_chapter(chapter: Chapter, container: Epub):
    with EpubFile(container.path) as epub:
        meta = epub.metadata()
    if meta.title:
        chapter.name = meta.title
    if meta.publisher:
        chapter.scanlator = meta.publisher
    elif meta.creator:
        chapter.scanlator = meta.creator
    if meta.date:
        chapter.date_upload = meta.date

def build_chapter(
    entry: Path,
    series: Series,
    roots: list[Path],
    number_parser: NumberParser = parse_chapter_number,
) -> Chapter:
    chapter = Chapter(
        url=f"{series.name}/{entry.name}",
        name=entry.name if entry.is_dir() else entry.stem,
        date_upload=modified_at(entry),
    )

    try:
        container = resolve_chapter(chapter.url, roots)
        if isinstance(container, Epub):
            fill_epub_chapter(chapter, container)
    except (FormatError, ContainerReadError):
        logger.warning("Could not enrich chapter %s", chapter.url, exc_info=True)

    stripped = strip_series_title(chapter.name, series.title)
    if stripped:
        chapter.name = stripped
    chapter.chapter_number = number_parser(chapter, series)
    return chapter

def list_chapters(
    series: Series,
    roots: Iterable[Path],
    number_parser: NumberParser = parse_chapter_number,
    sort_key: Callable[[str], object] = natural_key,
) -> list[Chapter]:
    roots = [Path(r) for r in roots]
    chapters = [
        build_chapter(entry, series, roots, number_parser)
        for entry in list_entries(roots, series.name)
        if is_supported_file(entry)
    ]
    return sorted(chapters, key=_chapter_order(sort_key))
