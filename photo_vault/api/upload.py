"""Upload API endpoints."""

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..backends.local_file import LocalFile
from ..errors import UploadInProgress
from ..services.gallery_session import GallerySession
from .deps import get_session

router = APIRouter(prefix="/upload", tags=["upload"])


class UploadRequest(BaseModel):
    path: str
    mime_type: str = ""


@router.post("")
async def start_upload(req: UploadRequest, session: GallerySession = Depends(get_session)):
    source = LocalFile(Path(req.path).expanduser(), mime_type=req.mime_type)
    try:
        state = await session.uploads.start(source)
    except UploadInProgress as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"upload": state}


@router.get("")
async def get_upload(session: GallerySession = Depends(get_session)):
    return {"upload": session.uploads.state}


@router.post("/cancel")
async def cancel_upload(session: GallerySession = Depends(get_session)):
    cancelled = await session.uploads.cancel()
    if not cancelled:
        raise HTTPException(status_code=404, detail="No upload in progress")
    return {"cancelled": True}
