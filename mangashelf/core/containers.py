"""Uniform read-only access to the storage behind a chapter.

A chapter is either a plain directory of images or a single archive file.
Every variant exposes the same three operations: iterate its entries, check
whether an entry exists and open an entry as a binary stream. Archives are
opened per call and closed before the call returns, so no handle outlives
the operation that needed it.
"""
from __future__ import annotations

import zipfile
import zlib
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, ClassVar, ContextManager, Iterator

import rarfile

from .errors import ContainerReadError


@dataclass(frozen=True)
class Entry:
    name: str
    is_dir: bool = False


@contextmanager
def _reading(path: Path):
    try:
        yield
    except (OSError, KeyError, zipfile.BadZipFile, rarfile.Error) as e:
        raise ContainerReadError(f"Could not read {path}: {e}") from e


# raised while streaming a member, e.g. a CRC mismatch or truncated data
MEMBER_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, rarfile.Error)


@contextmanager
def _streaming(path: Path):
    try:
        yield
    except MEMBER_ERRORS as e:
        raise ContainerReadError(f"Could not read {path}: {e}") from e


@dataclass(frozen=True)
class Container(ABC):
    path: Path

    kind: ClassVar[str]

    @abstractmethod
    def entries(self) -> Iterator[Entry]:
        """Yield entries in the container's native order."""

    @abstractmethod
    def open(self, name: str) -> ContextManager[BinaryIO]:
        pass

    def exists(self, name: str) -> bool:
        return any(entry.name == name for entry in self.entries())

    def read(self, name: str) -> bytes:
        with self.open(name) as stream:
            return stream.read()


@dataclass(frozen=True)
class Directory(Container):
    kind: ClassVar[str] = "directory"

    def entries(self) -> Iterator[Entry]:
        with _reading(self.path):
            children = list(self.path.iterdir())
        for p in children:
            yield Entry(p.name, p.is_dir())

    def exists(self, name: str) -> bool:
        return (self.path / name).exists()

    @contextmanager
    def open(self, name: str) -> Iterator[BinaryIO]:
        with _reading(self.path):
            stream = open(self.path / name, "rb")
        with stream:
            yield stream


@dataclass(frozen=True)
class _ZipBacked(Container):
    def entries(self) -> Iterator[Entry]:
        with _reading(self.path):
            zf = zipfile.ZipFile(self.path)
        with zf:
            for info in zf.infolist():
                yield Entry(info.filename, info.is_dir())

    def exists(self, name: str) -> bool:
        with _reading(self.path):
            with zipfile.ZipFile(self.path) as zf:
                return name in zf.namelist()

    @contextmanager
    def open(self, name: str) -> Iterator[BinaryIO]:
        with _reading(self.path):
            zf = zipfile.ZipFile(self.path)
        with zf:
            with _reading(self.path):
                stream = zf.open(name)
            with stream, _streaming(self.path):
                yield stream


@dataclass(frozen=True)
class Zip(_ZipBacked):
    kind: ClassVar[str] = "zip"


@dataclass(frozen=True)
class Epub(_ZipBacked):
    kind: ClassVar[str] = "epub"


@dataclass(frozen=True)
class Rar(Container):
    kind: ClassVar[str] = "rar"

    def entries(self) -> Iterator[Entry]:
        with _reading(self.path):
            rf = rarfile.RarFile(self.path)
        with rf:
            for info in rf.infolist():
                yield Entry(info.filename, info.is_dir())

    @contextmanager
    def open(self, name: str) -> Iterator[BinaryIO]:
        with _reading(self.path):
            rf = rarfile.RarFile(self.path)
        with rf:
            with _reading(self.path):
                stream = rf.open(name)
            with stream, _streaming(self.path):
                yield stream


CONTAINER_TYPES = (Directory, Zip, Rar, Epub)
