"""Batch action API endpoints (operate on the current selection)."""

from fastapi import APIRouter, Depends, HTTPException

from ..services.gallery_session import GallerySession
from .deps import get_session

router = APIRouter(prefix="/batch", tags=["batch"])


async def _selected(session: GallerySession):
    files = await session.selected_files()
    if not files:
        raise HTTPException(status_code=400, detail="Nothing selected")
    return files


@router.post("/download")
async def download(session: GallerySession = Depends(get_session)):
    return await session.batch.download(await _selected(session))


@router.post("/share")
async def share(session: GallerySession = Depends(get_session)):
    return await session.batch.share_links(await _selected(session))


@router.post("/copy-names")
async def copy_names(session: GallerySession = Depends(get_session)):
    return await session.batch.copy_names(await _selected(session))


@router.post("/delete")
async def delete(session: GallerySession = Depends(get_session)):
    return await session.batch.delete(await _selected(session))
