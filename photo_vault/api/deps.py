"""Request-scoped lookups shared by the routers."""

from typing import Optional

from fastapi import Header, HTTPException, Request

from ..services.gallery_session import GallerySession, SessionStore


def get_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_session(request: Request, x_caller: Optional[str] = Header(None)) -> GallerySession:
    """The caller's session; the identity provider sets `X-Caller`."""
    if not x_caller:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return get_store(request).get(x_caller)
