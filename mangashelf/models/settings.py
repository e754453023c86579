from sqlmodel import SQLModel, Field


class StorageRoot(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    path: str = Field(index=True, unique=True)
    position: int = Field(default=0)
