from .chapter import Chapter
from .series import Series, SeriesStatus
from .settings import StorageRoot

__all__ = ["Chapter", "Series", "SeriesStatus", "StorageRoot"]
