"""Gallery grid API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..models.gallery import Section
from ..services.gallery_session import GallerySession
from .deps import get_session

router = APIRouter(prefix="/gallery", tags=["gallery"])


class SectionRequest(BaseModel):
    section: Section


class SearchRequest(BaseModel):
    query: str = ""


@router.get("")
async def get_gallery(session: GallerySession = Depends(get_session)):
    return await session.view()


@router.put("/section")
async def set_section(req: SectionRequest, session: GallerySession = Depends(get_session)):
    session.set_section(req.section)
    return await session.view()


@router.put("/search")
async def set_search(req: SearchRequest, session: GallerySession = Depends(get_session)):
    session.set_query(req.query)
    return await session.view()


@router.post("/refresh")
async def refresh(session: GallerySession = Depends(get_session)):
    files = await session.refresh()
    return {"total": len(files)}


@router.post("/tap/{file_id}")
async def tap(file_id: str, session: GallerySession = Depends(get_session)):
    result = await session.tap(file_id)
    if result is None:
        raise HTTPException(status_code=404, detail="File not displayed")
    return {"result": result}


@router.get("/storage")
async def storage(session: GallerySession = Depends(get_session)):
    return await session.storage_summary()


@router.get("/notices")
async def notices(session: GallerySession = Depends(get_session)):
    return session.notifier.history
