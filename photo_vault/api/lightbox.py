"""Lightbox viewer API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..services.gallery_session import GallerySession
from ..utils.formatting import format_bytes, format_timestamp
from .deps import get_session

router = APIRouter(prefix="/lightbox", tags=["lightbox"])


class OpenRequest(BaseModel):
    index: int = 0


class KeyRequest(BaseModel):
    key: str


def _describe(session: GallerySession) -> dict:
    box = session.lightbox
    file = box.current
    info = None
    if file is not None:
        info = {
            "size": format_bytes(file.size),
            "type": file.mime_type,
            "uploaded": format_timestamp(file.uploaded_at),
        }
    return {
        "open": box.is_open,
        "index": box.index,
        "position": box.position,
        "has_next": box.has_next,
        "has_prev": box.has_prev,
        "file": file,
        "info": info,
    }


@router.get("")
async def get_lightbox(session: GallerySession = Depends(get_session)):
    return _describe(session)


@router.post("/open")
async def open_lightbox(req: OpenRequest, session: GallerySession = Depends(get_session)):
    await session.open_lightbox(req.index)
    return _describe(session)


@router.post("/next")
async def next_item(session: GallerySession = Depends(get_session)):
    session.lightbox.next()
    return _describe(session)


@router.post("/prev")
async def prev_item(session: GallerySession = Depends(get_session)):
    session.lightbox.prev()
    return _describe(session)


@router.post("/close")
async def close(session: GallerySession = Depends(get_session)):
    session.lightbox.close()
    return _describe(session)


@router.post("/key")
async def key(req: KeyRequest, session: GallerySession = Depends(get_session)):
    handled = session.lightbox.handle_key(req.key)
    return {"handled": handled, **_describe(session)}


def _current(session: GallerySession):
    file = session.lightbox.current
    if file is None:
        raise HTTPException(status_code=409, detail="Lightbox is closed")
    return file


@router.post("/download")
async def download(session: GallerySession = Depends(get_session)):
    return await session.batch.download_one(_current(session))


@router.post("/share")
async def share(session: GallerySession = Depends(get_session)):
    return await session.batch.share_one(_current(session))
