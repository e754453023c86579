import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from mangashelf.core.config import LATEST_THRESHOLD
from mangashelf.core.containers import Epub
from mangashelf.core.epub import EpubFile
from mangashelf.core.errors import ContainerReadError, FormatError, MetadataParseError
from mangashelf.core.filesystem import list_series_dirs, modified_at
from mangashelf.core.formats import resolve_chapter
from mangashelf.core.natural import natural_key
from mangashelf.core.recognition import parse_chapter_number
from mangashelf.models import Series
from mangashelf.services.chapter_service import NumberParser, list_chapters
from mangashelf.services.cover_service import series_cover, update_cover_from_chapter

logger = logging.getLogger(__name__)

ORDER_TITLE = 0
ORDER_DATE = 1

@dataclass(frozen=True)
class OrderBy:
    index: int = ORDER_TITLE
    ascending: bool = True

POPULAR_ORDER = OrderBy(ORDER_TITLE, True)
LATEST_ORDER = OrderBy(ORDER_DATE, False)

def _sort_dirs(dirs: list[Path], order: OrderBy) -> list[Path]:
    if order.index == ORDER_TITLE:
        return sorted(dirs, key=lambda d: d.name.lower(), reverse=not order.ascending)
    if order.index == ORDER_DATE:
        return sorted(dirs, key=modified_at, reverse=not order.ascending)
    return dirs

def fill_epub_series(series: Series, container: Epub):
    with EpubFile(container.path) as epub:
        meta = epub.metadata()
    if meta.title:
        series.title = meta.title
    if meta.creator:
        series.author = meta.creator
    if meta.description:
        series.description = meta.description

def build_series(
    series_dir: Path,
    roots: list[Path],
    number_parser: NumberParser = parse_chapter_number,
    sort_key: Callable[[str], object] = natural_key,
) -> Series:
    series = Series(name=series_dir.name, title=series_dir.name, last_modified=modified_at(series_dir))

    cover = series_cover(roots, series.name)
    if cover:
        series.thumbnail_url = str(cover.resolve())

    chapters = list_chapters(series, roots, number_parser=number_parser, sort_key=sort_key)
    if not chapters:
        return series
    # lowest chapter of the descending listing
    chapter = chapters[-1]

    try:
        container = resolve_chapter(chapter.url, roots)
        if isinstance(container, Epub):
            fill_epub_series(series, container)
    except (FormatError, ContainerReadError):
        logger.exception("Could not read series metadata from %s", chapter.url)

    if series.thumbnail_url is None:
        try:
            dest = update_cover_from_chapter(roots, series.name, chapter.url)
            series.thumbnail_url = str(dest.resolve()) if dest else None
        except (FormatError, ContainerReadError):
            logger.exception("Could not copy cover for %s from %s", series.name, chapter.url)

    return series

def list_series(
    roots: Iterable[Path],
    query: str = "",
    order: OrderBy = POPULAR_ORDER,
    *,
    latest: bool = False,
    now: datetime | None = None,
    number_parser: NumberParser = parse_chapter_number,
    sort_key: Callable[[str], object] = natural_key,
) -> list[Series]:
    roots = [Path(r) for r in roots]

    # filtered per root before the first-root-wins merge
    if latest:
        threshold = (now or datetime.now(timezone.utc)) - LATEST_THRESHOLD
        dirs = list_series_dirs(roots, lambda d: modified_at(d) >= threshold)
    else:
        q = (query or "").lower()
        dirs = list_series_dirs(roots, lambda d: q in d.name.lower())

    dirs = _sort_dirs(dirs, order)
    return [build_series(d, roots, number_parser, sort_key) for d in dirs]

def list_latest(roots: Iterable[Path], now: datetime | None = None) -> list[Series]:
    return list_series(roots, order=LATEST_ORDER, latest=True, now=now)

def _is_series_name(name: str) -> bool:
    # a single visible path component
    return bool(name) and not name.startswith(".") and Path(name).name == name and "/" not in name

def get_series(roots: Iterable[Path], name: str) -> Series | None:
    if not _is_series_name(name):
        return None
    roots = list(roots)
    for root in roots:
        series_dir = Path(root) / name
        if series_dir.is_dir():
            cover = series_cover(roots, name)
            return Series(
                name=name,
                title=name,
                last_modified=modified_at(series_dir),
                thumbnail_url=str(cover.resolve()) if cover else None,
            )
    return None

def find_metadata_file(roots: Iterable[Path], name: str) -> Path | None:
    for root in roots:
        series_dir = Path(root) / name
        if not series_dir.is_dir():
            continue
        for p in sorted(series_dir.iterdir(), key=lambda p: p.name):
            if p.is_file() and p.suffix.lower() == ".json":
                return p
    return None

def merge_metadata(series: Series, obj: Mapping[str, Any]) -> Series:
    for key in ("title", "author", "artist", "description"):
        value = obj.get(key)
        if isinstance(value, str):
            setattr(series, key, value)
    genre = obj.get("genre")
    if isinstance(genre, list):
        series.genre = ", ".join(str(g) for g in genre)
    status = obj.get("status")
    if isinstance(status, int) and not isinstance(status, bool):
        series.status = status
    return series

def series_details(series: Series, roots: Iterable[Path]) -> Series:
    roots = list(roots)
    meta_file = find_metadata_file(roots, series.name)
    if meta_file is None:
        return series
    try:
        obj = json.loads(meta_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MetadataParseError(f"Could not parse {meta_file}: {e}") from e
    if not isinstance(obj, dict):
        raise MetadataParseError(f"Expected a JSON object in {meta_file}")
    return merge_metadata(series, obj)
