from datetime import datetime
from enum import IntEnum
from typing import Optional

from sqlmodel import Field, SQLModel


class SeriesStatus(IntEnum):
    UNKNOWN = 0
    ONGOING = 1
    COMPLETED = 2
    LICENSED = 3


class Series(SQLModel):
    name: str
    title: str
    author: Optional[str] = None
    artist: Optional[str] = None
    description: Optional[str] = None
    genre: Optional[str] = None
    status: int = Field(default=SeriesStatus.UNKNOWN)
    thumbnail_url: Optional[str] = None
    last_modified: Optional[datetime] = None

    def __repr__(self):
        return f"Series(name={self.name!r}, title={self.title!r})"
