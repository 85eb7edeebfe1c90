"""WebSocket endpoint for upload progress and notices."""

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from ..models.common import Notice
from ..models.upload import UploadState
from ..services.gallery_session import GallerySession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])


class ConnectionManager:
    def __init__(self):
        self.active: list[WebSocket] = []

    async def connect(self, ws: WebSocket):
        await ws.accept()
        self.active.append(ws)

    def disconnect(self, ws: WebSocket):
        if ws in self.active:
            self.active.remove(ws)

    async def send(self, ws: WebSocket, message: dict):
        try:
            await ws.send_json(message)
        except Exception:
            self.disconnect(ws)


manager = ConnectionManager()


@router.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    # same identity header as the HTTP routes, checked before accepting
    caller = ws.headers.get("x-caller")
    if not caller:
        await ws.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await manager.connect(ws)
    subscriptions: list[tuple[GallerySession, object, object]] = []

    try:
        while True:
            data = await ws.receive_text()
            try:
                msg = json.loads(data)
            except json.JSONDecodeError:
                continue

            if msg.get("action") != "subscribe":
                continue
            if subscriptions:
                await manager.send(ws, {"type": "subscribed", "caller": caller})
                continue

            session = ws.app.state.sessions.get(caller)

            async def upload_cb(state: UploadState):
                await manager.send(ws, {
                    "type": "upload_progress",
                    "upload": state.model_dump(mode="json"),
                })

            async def notice_cb(notice: Notice):
                await manager.send(ws, {
                    "type": "notice",
                    "notice": notice.model_dump(mode="json"),
                })

            session.uploads.add_progress_listener(upload_cb)
            session.notifier.add_listener(notice_cb)
            subscriptions.append((session, upload_cb, notice_cb))
            await manager.send(ws, {"type": "subscribed", "caller": session.caller})

    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WebSocket handler failed")
    finally:
        manager.disconnect(ws)
        for session, upload_cb, notice_cb in subscriptions:
            session.uploads.remove_progress_listener(upload_cb)
            session.notifier.remove_listener(notice_cb)
