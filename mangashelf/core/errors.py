class MangashelfError(Exception):
    pass


class FormatError(MangashelfError):
    """A chapter could not be mapped to a container."""


class UnsupportedFormat(FormatError):
    def __init__(self, path):
        super().__init__(f"Unsupported chapter format: {path}")
        self.path = path


class ChapterNotFound(FormatError):
    def __init__(self, url: str):
        super().__init__(f"Chapter not found in any library root: {url}")
        self.url = url


class ContainerReadError(MangashelfError):
    """The backing archive is corrupt or could not be read."""


class MetadataParseError(MangashelfError):
    pass
