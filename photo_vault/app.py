"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .config import settings
from .errors import Rejected, RemoteUnavailable
from .api.router import api_router
from .runtime import build_store
from .services.gallery_session import SessionStore

# Configure logging for our modules
logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(name)s: %(message)s")
if settings.debug:
    logging.getLogger("photo_vault").setLevel(logging.DEBUG)


class NoStoreApiMiddleware(BaseHTTPMiddleware):
    """Gallery state is live; never let a browser cache an API answer."""
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            response.headers["Cache-Control"] = "no-store"
        return response


def create_app(store: Optional[SessionStore] = None) -> FastAPI:
    app = FastAPI(
        title="photo-vault",
        version="0.1.0",
        description="Date-grouped media gallery over a remote file registry",
    )

    app.state.sessions = store or build_store(settings)
    app.add_middleware(NoStoreApiMiddleware)
    app.include_router(api_router, prefix="/api")

    @app.exception_handler(RemoteUnavailable)
    async def remote_unavailable(request: Request, exc: RemoteUnavailable):
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.exception_handler(Rejected)
    async def rejected(request: Request, exc: Rejected):
        return JSONResponse(status_code=422, content={"detail": exc.reason})

    return app
