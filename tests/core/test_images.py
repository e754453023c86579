import io
from contextlib import nullcontext

from conftest import png_bytes
from mangashelf.core.images import is_image


def opener(data: bytes):
    return lambda: nullcontext(io.BytesIO(data))


def test_known_extensions() -> None:
    assert is_image("001.JPG")
    assert is_image("dir/page.webp")
    assert not is_image("ComicInfo.xml")


def test_unknown_extension_is_sniffed() -> None:
    assert is_image("page", opener(png_bytes()))
    assert not is_image("notes.txt", opener(b"plain text"))
