import os
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = Path(os.environ.get("MANGASHELF_DATA_DIR") or BASE_DIR / "data")
DB_PATH = DATA_DIR / "app.db"

# os.pathsep separated list of library roots, overrides the stored ones
ROOTS_ENV = "MANGASHELF_ROOTS"

SUPPORTED_ARCHIVE_TYPES = {"zip", "rar", "cbr", "cbz", "epub"}
IMG_EXTS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".avif", ".heif", ".jxl"}

COVER_NAME = "cover.jpg"
LATEST_THRESHOLD = timedelta(days=7)
