from pathlib import Path
from typing import Iterable

from mangashelf.core.config import SUPPORTED_ARCHIVE_TYPES
from mangashelf.core.containers import Container, Directory, Epub, Rar, Zip
from mangashelf.core.errors import ChapterNotFound, UnsupportedFormat

ZIP_EXTS = {"zip", "cbz"}
RAR_EXTS = {"rar", "cbr"}
EPUB_EXTS = {"epub"}


def extension(path: Path) -> str:
    return path.suffix[1:].lower()


def is_supported_file(path: Path) -> bool:
    return path.is_dir() or extension(path) in SUPPORTED_ARCHIVE_TYPES


def resolve(path: Path) -> Container:
    path = Path(path)
    if path.is_dir():
        return Directory(path)
    ext = extension(path)
    if ext in ZIP_EXTS:
        return Zip(path)
    if ext in RAR_EXTS:
        return Rar(path)
    if ext in EPUB_EXTS:
        return Epub(path)
    raise UnsupportedFormat(path)


def locate_chapter(url: str, roots: Iterable[Path]) -> Path:
    # first root holding the url wins; urls never climb out of a root
    if ".." in Path(url).parts or Path(url).is_absolute():
        raise ChapterNotFound(url)
    for root in roots:
        candidate = Path(root) / url
        if candidate.exists():
            return candidate
    raise ChapterNotFound(url)


def resolve_chapter(url: str, roots: Iterable[Path]) -> Container:
    return resolve(locate_chapter(url, roots))
