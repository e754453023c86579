import logging
from functools import partial
from pathlib import Path
from typing import BinaryIO, Callable, Iterable
from PIL import Image, UnidentifiedImageError

from mangashelf.core.config import COVER_NAME
from mangashelf.core.containers import MEMBER_ERRORS, Container, Entry, Epub
from mangashelf.core.epub import EpubFile
from mangashelf.core.errors import ContainerReadError
from mangashelf.core.formats import resolve_chapter
from mangashelf.core.images import ImagePredicate, is_image
from mangashelf.core.natural import natural_key

logger = logging.getLogger(__name__)

def find_cover(
    container: Container,
    is_image: ImagePredicate = is_image,
    sort_key: Callable[[str], object] = natural_key,
) -> Entry | None:
    if isinstance(container, Epub):
        return _find_epub_cover(container)

    files = sorted(
        (e for e in container.entries() if not e.is_dir),
        key=lambda e: sort_key(e.name),
    )
    candidates = (e for e in files if is_image(e.name, partial(container.open, e.name)))
    return next(candidates, None)

def _find_epub_cover(container: Epub) -> Entry | None:
    # the first image shown in reading order, not the first by name
    with EpubFile(container.path) as epub:
        images = epub.images_from_pages()
        if not images or images[0] not in epub.zf.namelist():
            return None
        return Entry(images[0])

def find_series_cover(series_dir: Path, is_image: ImagePredicate = is_image) -> Path | None:
    if not series_dir.is_dir():
        return None
    for p in sorted(series_dir.iterdir(), key=lambda p: p.name):
        if p.stem == "cover" and p.is_file() and is_image(p.name, partial(p.open, "rb")):
            return p
    return None

def series_cover(roots: Iterable[Path], series_name: str) -> Path | None:
    for root in roots:
        cover = find_series_cover(Path(root) / series_name)
        if cover:
            return cover
    return None

def update_cover(roots: Iterable[Path], series_name: str, stream: BinaryIO) -> Path | None:
    """Store stream as the series cover in the first library root.

    An existing cover file is left alone and returned as is.
    """
    roots = list(roots)
    if not roots:
        return None

    series_dir = Path(roots[0]) / series_name
    out = find_series_cover(series_dir) or series_dir / COVER_NAME
    if out.exists():
        return out

    series_dir.mkdir(parents=True, exist_ok=True)
    try:
        img = Image.open(stream).convert("RGB")
        img.save(out, "JPEG", quality=90, optimize=True)
    except (UnidentifiedImageError, OSError, *MEMBER_ERRORS) as e:
        out.unlink(missing_ok=True)
        raise ContainerReadError(f"Could not write cover for {series_name}: {e}") from e
    logger.info("Wrote cover %s", out)
    return out

def update_cover_from_chapter(roots: Iterable[Path], series_name: str, chapter_url: str) -> Path | None:
    roots = list(roots)
    container = resolve_chapter(chapter_url, roots)
    entry = find_cover(container)
    if entry is None:
        logger.debug("No cover image in %s", container.path)
        return None
    with container.open(entry.name) as stream:
        return update_cover(roots, series_name, stream)

def chapter_cover(roots: Iterable[Path], chapter_url: str) -> tuple[Entry, bytes] | None:
    container = resolve_chapter(chapter_url, roots)
    entry = find_cover(container)
    if entry is None:
        return None
    return entry, container.read(entry.name)
