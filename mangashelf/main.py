from contextlib import asynccontextmanager
from fastapi import FastAPI
from mangashelf.api.library import router as library_router
from mangashelf.db.init_db import init_db

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield

app = FastAPI(title="Mangashelf", lifespan=lifespan)
app.include_router(library_router, prefix="/library")
