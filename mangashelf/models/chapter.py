from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel


class Chapter(SQLModel):
    url: str
    name: str
    chapter_number: float = -1.0
    date_upload: Optional[datetime] = None
    scanlator: Optional[str] = None

    def __repr__(self):
        return f"Chapter(url={self.url!r}, name={self.name!r}, number={self.chapter_number})"
