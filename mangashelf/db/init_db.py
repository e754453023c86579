from sqlmodel import SQLModel
from mangashelf.core.config import DATA_DIR
from mangashelf.db.session import engine
from mangashelf.models import StorageRoot

def init_db():
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)
