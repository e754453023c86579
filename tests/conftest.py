from __future__ import annotations

import io
import zipfile
from pathlib import Path
from xml.sax.saxutils import escape

import pytest
from PIL import Image


def png_bytes(color=(255, 0, 0), size=(8, 12)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


def write_zip(path: Path, members: dict[str, bytes]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return path


def bmp_bytes(color=(255, 0, 0), size=(8, 12)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="BMP")
    return buf.getvalue()


def write_bad_crc_zip(path: Path, name: str, data: bytes) -> Path:
    """Store one uncompressed member, then flip its last data byte."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_STORED) as zf:
        zf.writestr(name, data)
    raw = bytearray(buf.getvalue())
    offset = raw.find(data)
    raw[offset + len(data) - 1] ^= 0xFF
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(bytes(raw))
    return path


CONTAINER_XML ="""<?xml version="1.0"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

PAGE_XHTML = """<?xml version="1.0" encoding="utf-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>page</title></head>
<body><div><img src="{src}" alt=""/></div></body>
</html>
"""


def write_epub(
    path: Path,
    *,
    pages: list[str],
    images: dict[str, bytes],
    title: str | None = None,
    creator: str | None = None,
    publisher: str | None = None,
    description: str | None = None,
    date: str | None = None,
    with_container: bool = True,
) -> Path:
    """Write a minimal EPUB whose spine pages each show one image.

    `pages` lists image hrefs relative to OEBPS/text/, one page per image;
    `images` maps archive paths to image bytes.
    """
    meta = []
    for tag, value in (
        ("title", title),
        ("creator", creator),
        ("publisher", publisher),
        ("description", description),
        ("date", date),
    ):
        if value is not None:
            meta.append(f"<dc:{tag}>{escape(value)}</dc:{tag}>")
    manifest = []
    spine = []
    members: dict[str, bytes] = {}
    for i, src in enumerate(pages, start=1):
        manifest.append(f'<item id="p{i}" href="text/page{i}.xhtml" media-type="application/xhtml+xml"/>')
        spine.append(f'<itemref idref="p{i}"/>')
        members[f"OEBPS/text/page{i}.xhtml"] = PAGE_XHTML.format(src=src).encode("utf-8")
    opf = (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<package xmlns="http://www.idpf.org/2007/opf" version="3.0">\n'
        f'<metadata xmlns:dc="http://purl.org/dc/elements/1.1/">{"".join(meta)}</metadata>\n'
        f"<manifest>{''.join(manifest)}</manifest>\n"
        f"<spine>{''.join(spine)}</spine>\n"
        "</package>\n"
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("mimetype", "application/epub+zip")
        if with_container:
            zf.writestr("META-INF/container.xml", CONTAINER_XML)
        zf.writestr("OEBPS/content.opf", opf)
        for name, data in members.items():
            zf.writestr(name, data)
        for name, data in images.items():
            zf.writestr(name, data)
    return path


@pytest.fixture
def root(tmp_path: Path) -> Path:
    p = tmp_path / "library"
    p.mkdir()
    return p
