"""Minimal EPUB reader: package document, spine pages and the images they show.

Only the members that are asked for are read; the archive is never unpacked.
"""
from __future__ import annotations

import posixpath
import xml.etree.ElementTree as ET
import zipfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from urllib.parse import unquote

from bs4 import BeautifulSoup

from mangashelf.core.errors import ContainerReadError

CONTAINER_XML = "META-INF/container.xml"
CONTAINER_NS = {"c": "urn:oasis:names:tc:opendocument:xmlns:container"}
DC_NS = "http://purl.org/dc/elements/1.1/"


@dataclass
class EpubMetadata:
    title: str | None = None
    creator: str | None = None
    publisher: str | None = None
    description: str | None = None
    date: datetime | None = None


def _resolve_href(base: str, href: str) -> str:
    href = unquote(href.split("#", 1)[0])
    return posixpath.normpath(posixpath.join(base, href)) if base else posixpath.normpath(href)


def _parse_date(value: str | None) -> datetime | None:
    if not value:
        return None
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class EpubFile:
    def __init__(self, path: Path):
        self.path = Path(path)
        self._zf: zipfile.ZipFile | None = None

    def __enter__(self) -> "EpubFile":
        try:
            self._zf = zipfile.ZipFile(self.path)
        except (OSError, zipfile.BadZipFile) as e:
            raise ContainerReadError(f"Could not open epub {self.path}: {e}") from e
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._zf is not None:
            self._zf.close()
            self._zf = None

    @property
    def zf(self) -> zipfile.ZipFile:
        if self._zf is None:
            raise RuntimeError("EpubFile used outside of a with block")
        return self._zf

    def read_bytes(self, name: str) -> bytes:
        try:
            return self.zf.read(name)
        except (KeyError, OSError, zipfile.BadZipFile) as e:
            raise ContainerReadError(f"Could not read {name} from {self.path}: {e}") from e

    def _xml(self, name: str) -> ET.Element:
        try:
            return ET.fromstring(self.read_bytes(name))
        except ET.ParseError as e:
            raise ContainerReadError(f"Malformed XML {name} in {self.path}: {e}") from e

    def package_href(self) -> str:
        if CONTAINER_XML in self.zf.namelist():
            root = self._xml(CONTAINER_XML)
            for rf in root.findall(".//c:rootfile", CONTAINER_NS):
                full = rf.attrib.get("full-path")
                if full:
                    return full
        for name in self.zf.namelist():
            if name.lower().endswith(".opf"):
                return name
        raise ContainerReadError(f"No package document in {self.path}")

    def package_document(self) -> tuple[str, ET.Element]:
        href = self.package_href()
        return href, self._xml(href)

    def pages(self) -> list[str]:
        """Archive paths of the spine documents, in reading order."""
        href, root = self.package_document()
        ns = {"opf": root.tag.split("}")[0].strip("{")} if root.tag.startswith("{") else {}
        prefix = "opf:" if ns else ""
        manifest = {}
        for item in root.findall(f".//{prefix}manifest/{prefix}item", ns):
            item_id = item.attrib.get("id")
            item_href = item.attrib.get("href")
            if item_id and item_href:
                manifest[item_id] = item_href
        base = posixpath.dirname(href)
        pages = []
        for ref in root.findall(f".//{prefix}spine/{prefix}itemref", ns):
            idref = ref.attrib.get("idref")
            if idref in manifest:
                pages.append(_resolve_href(base, manifest[idref]))
        return pages

    def images_from_pages(self) -> list[str]:
        """Archive paths of every image the spine pages show, in reading order."""
        names = set(self.zf.namelist())
        images = []
        for page in self.pages():
            if page not in names:
                continue
            soup = BeautifulSoup(self.read_bytes(page), "lxml-xml")
            base = posixpath.dirname(page)
            for tag in soup.find_all(["img", "image"]):
                src = tag.get("src") or tag.get("xlink:href") or tag.get("href")
                if src:
                    images.append(_resolve_href(base, src))
        return images

    def metadata(self) -> EpubMetadata:
        _, root = self.package_document()

        def dc(tag: str) -> str | None:
            values = [el.text.strip() for el in root.iter(f"{{{DC_NS}}}{tag}") if el.text and el.text.strip()]
            return " ".join(values) or None

        date = _parse_date(dc("date"))
        if date is None:
            for meta in root.iter():
                if meta.tag.endswith("meta") and meta.attrib.get("property") == "dcterms:modified":
                    date = _parse_date(meta.text)
                    break
        return EpubMetadata(
            title=dc("title"),
            creator=dc("creator"),
            publisher=dc("publisher"),
            description=dc("description"),
            date=date,
        )
