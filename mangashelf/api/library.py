import logging
import mimetypes
from pathlib import Path
from fastapi import APIRouter, Depends, HTTPException, Response
from mangashelf.core.errors import ChapterNotFound, ContainerReadError, MetadataParseError, UnsupportedFormat
from mangashelf.core.formats import resolve_chapter
from mangashelf.models import Chapter, Series
from mangashelf.services.chapter_service import list_chapters
from mangashelf.services.cover_service import chapter_cover
from mangashelf.services.library_service import OrderBy, get_series, list_latest, list_series, series_details
from mangashelf.services.settings_service import get_storage_roots

logger = logging.getLogger(__name__)

router = APIRouter(tags=["library"])

def get_roots() -> list[Path]:
    return get_storage_roots()

def _series_or_404(roots: list[Path], name: str) -> Series:
    series = get_series(roots, name)
    if series is None:
        raise HTTPException(status_code=404, detail=f"Series not found: {name}")
    return series

@router.get("/")
def list_library(q: str = "", order: int = 0, ascending: bool = True, roots: list[Path] = Depends(get_roots)) -> list[Series]:
    return list_series(roots, q, OrderBy(order, ascending))

@router.get("/latest")
def list_library_latest(roots: list[Path] = Depends(get_roots)) -> list[Series]:
    return list_latest(roots)

@router.get("/{name}")
def get_series_details(name: str, roots: list[Path] = Depends(get_roots)) -> Series:
    series = _series_or_404(roots, name)
    try:
        return series_details(series, roots)
    except MetadataParseError as e:
        raise HTTPException(status_code=422, detail=str(e))

@router.get("/{name}/chapters")
def get_chapters(name: str, roots: list[Path] = Depends(get_roots)) -> list[Chapter]:
    series = _series_or_404(roots, name)
    try:
        series = series_details(series, roots)
    except MetadataParseError:
        logger.warning("Ignoring metadata of %s", name, exc_info=True)
    return list_chapters(series, roots)

@router.get("/{name}/chapters/{entry}/format")
def get_chapter_format(name: str, entry: str, roots: list[Path] = Depends(get_roots)):
    url = f"{name}/{entry}"
    try:
        container = resolve_chapter(url, roots)
    except ChapterNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnsupportedFormat as e:
        raise HTTPException(status_code=415, detail=str(e))
    return {"url": url, "format": container.kind, "path": str(container.path)}

@router.get("/{name}/chapters/{entry}/cover")
def get_chapter_cover(name: str, entry: str, roots: list[Path] = Depends(get_roots)):
    url = f"{name}/{entry}"
    try:
        found = chapter_cover(roots, url)
    except ChapterNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnsupportedFormat as e:
        raise HTTPException(status_code=415, detail=str(e))
    except ContainerReadError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if found is None:
        raise HTTPException(status_code=404, detail=f"No cover image in {url}")
    cover, data = found
    media_type = mimetypes.guess_type(cover.name)[0] or "application/octet-stream"
    return Response(content=data, media_type=media_type)
