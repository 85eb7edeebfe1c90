"""Local files picked for upload."""

import asyncio
import mimetypes
from pathlib import Path

from ..errors import LocalIOError


class LocalFile:
    def __init__(self, path: Path, mime_type: str = ""):
        self.path = Path(path)
        self.mime_type = mime_type or mimetypes.guess_type(self.path.name)[0] or ""

    @property
    def name(self) -> str:
        return self.path.name

    async def read_bytes(self) -> bytes:
        try:
            return await asyncio.to_thread(self.path.read_bytes)
        except OSError as e:
            raise LocalIOError(f"cannot read {self.path}: {e}") from e

    def __repr__(self) -> str:
        return f"LocalFile({str(self.path)!r})"
