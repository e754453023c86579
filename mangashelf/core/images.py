from pathlib import PurePosixPath
from typing import BinaryIO, Callable, ContextManager, Optional

from PIL import Image, UnidentifiedImageError

from mangashelf.core.config import IMG_EXTS

StreamOpener = Callable[[], ContextManager[BinaryIO]]
ImagePredicate = Callable[[str, Optional[StreamOpener]], bool]


def is_image(name: str, open_stream: StreamOpener | None = None) -> bool:
    """Tell whether an entry holds an image.

    The extension decides when it is a known image type. Anything else is
    sniffed with Pillow if a stream opener is available.
    """
    suffix = PurePosixPath(name).suffix.lower()
    if suffix in IMG_EXTS:
        return True
    if open_stream is None:
        return False
    try:
        with open_stream() as stream:
            with Image.open(stream) as img:
                return img.format is not None
    except (UnidentifiedImageError, OSError, ValueError):
        return False
