"""User-visible notices (the toasts of the gallery)."""

import logging
from collections import deque
from typing import Awaitable, Callable

from ..models.common import Notice, NoticeLevel

logger = logging.getLogger(__name__)

NoticeListener = Callable[[Notice], Awaitable[None]]


class Notifier:
    def __init__(self, history: int = 50):
        self._history: deque[Notice] = deque(maxlen=history)
        self._listeners: list[NoticeListener] = []

    @property
    def history(self) -> list[Notice]:
        return list(self._history)

    def add_listener(self, callback: NoticeListener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: NoticeListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    async def success(self, message: str) -> Notice:
        return await self._emit(NoticeLevel.SUCCESS, message)

    async def error(self, message: str) -> Notice:
        return await self._emit(NoticeLevel.ERROR, message)

    async def info(self, message: str) -> Notice:
        return await self._emit(NoticeLevel.INFO, message)

    async def _emit(self, level: NoticeLevel, message: str) -> Notice:
        notice = Notice(level=level, message=message)
        self._history.append(notice)
        log = logger.warning if level == NoticeLevel.ERROR else logger.info
        log(f"[{level.value}] {message}")
        for cb in list(self._listeners):
            try:
                await cb(notice)
            except Exception:
                logger.exception("Notice listener failed")
        return notice
