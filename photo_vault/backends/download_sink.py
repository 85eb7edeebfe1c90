"""Materialise downloaded bytes as local files."""

import asyncio
import logging
from pathlib import Path

from ..errors import LocalIOError

logger = logging.getLogger(__name__)


class DownloadSink:
    def __init__(self, destination: Path):
        self.destination = Path(destination)

    async def save(self, name: str, data: bytes) -> Path:
        """Write `data` under `name`, never overwriting an existing file."""
        try:
            return await asyncio.to_thread(self._write, name, data)
        except OSError as e:
            raise LocalIOError(f"cannot save {name}: {e}") from e

    def _write(self, name: str, data: bytes) -> Path:
        self.destination.mkdir(parents=True, exist_ok=True)
        path = self._unique_path(self.destination / (Path(name).name or "download"))
        path.write_bytes(data)
        return path

    def _unique_path(self, path: Path) -> Path:
        """If path exists, add a numeric suffix."""
        if not path.exists():
            return path
        stem = path.stem
        suffix = path.suffix
        parent = path.parent
        counter = 1
        while True:
            new_path = parent / f"{stem}_{counter}{suffix}"
            if not new_path.exists():
                return new_path
            counter += 1
