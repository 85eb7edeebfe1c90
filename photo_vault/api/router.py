"""Aggregate all API sub-routers."""

from fastapi import APIRouter

from . import account, batch, gallery, lightbox, selection, upload, ws

api_router = APIRouter()

api_router.include_router(gallery.router)
api_router.include_router(selection.router)
api_router.include_router(lightbox.router)
api_router.include_router(upload.router)
api_router.include_router(batch.router)
api_router.include_router(account.router)
api_router.include_router(ws.router)
