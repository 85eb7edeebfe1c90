"""Selection mode API endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from ..services.gallery_session import GallerySession
from .deps import get_session

router = APIRouter(prefix="/selection", tags=["selection"])


def _describe(session: GallerySession) -> dict:
    state = session.selection.state
    return {
        "active": state.active,
        "count": state.count,
        "selected_ids": sorted(state.selected_ids),
    }


@router.get("")
async def get_selection(session: GallerySession = Depends(get_session)):
    return _describe(session)


@router.post("/long-press/{file_id}")
async def long_press(file_id: str, session: GallerySession = Depends(get_session)):
    if not await session.long_press(file_id):
        raise HTTPException(status_code=404, detail="File not displayed")
    return _describe(session)


@router.post("/toggle/{file_id}")
async def toggle(file_id: str, session: GallerySession = Depends(get_session)):
    if not await session.toggle(file_id):
        raise HTTPException(status_code=404, detail="File not displayed")
    return _describe(session)


@router.post("/select-all")
async def select_all(session: GallerySession = Depends(get_session)):
    await session.select_all()
    return _describe(session)


@router.post("/clear")
async def clear(session: GallerySession = Depends(get_session)):
    session.selection.clear()
    return _describe(session)
