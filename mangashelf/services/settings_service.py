import os
from pathlib import Path
from sqlmodel import select
from mangashelf.core.config import ROOTS_ENV
from mangashelf.db.session import get_session
from mangashelf.models.settings import StorageRoot

def get_storage_roots() -> list[Path]:
    env = os.environ.get(ROOTS_ENV)
    if env:
        return [Path(p) for p in env.split(os.pathsep) if p]
    with get_session() as session:
        rows = session.exec(select(StorageRoot).order_by(StorageRoot.position)).all()
        return [Path(r.path) for r in rows]

def set_storage_roots(paths: list[str | Path]):
    with get_session() as session:
        for row in session.exec(select(StorageRoot)).all():
            session.delete(row)
        session.flush()
        seen = set()
        for p in paths:
            p = str(p)
            if p in seen:
                continue
            seen.add(p)
            session.add(StorageRoot(path=p, position=len(seen) - 1))
        session.commit()

def add_storage_root(path: str | Path):
    with get_session() as session:
        rows = session.exec(select(StorageRoot).order_by(StorageRoot.position)).all()
        if any(r.path == str(path) for r in rows):
            return
        position = rows[-1].position + 1 if rows else 0
        session.add(StorageRoot(path=str(path), position=position))
        session.commit()
