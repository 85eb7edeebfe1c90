"""Profile and logout endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..services.gallery_session import GallerySession, SessionStore
from .deps import get_session, get_store

router = APIRouter(tags=["account"])


class ProfileRequest(BaseModel):
    name: str = Field(..., min_length=1)


@router.get("/profile")
async def get_profile(session: GallerySession = Depends(get_session)):
    profile = await session.profile()
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not set up")
    return profile


@router.put("/profile")
async def save_profile(req: ProfileRequest, session: GallerySession = Depends(get_session)):
    return await session.save_profile(req.name)


@router.post("/logout")
async def logout(
    session: GallerySession = Depends(get_session),
    store: SessionStore = Depends(get_store),
):
    store.drop(session.caller)
    return {"logged_out": True}
