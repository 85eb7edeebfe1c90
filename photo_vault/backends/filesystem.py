"""Blob store backed by a local directory."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from ..errors import BlobUnavailable
from .base import BlobStore, ProgressCallback, progress_steps

logger = logging.getLogger(__name__)


class FilesystemBlobStore(BlobStore):
    """One file per blob under `root`, written chunk by chunk."""

    def __init__(self, root: Path, progress_step: int = 25):
        self.root = Path(root)
        self.progress_step = progress_step

    def _path(self, blob_id: str) -> Path:
        # ids are generated locally, but never let one escape the root
        safe = Path(blob_id).name
        if not safe or safe in (".", ".."):
            raise BlobUnavailable(f"invalid blob id: {blob_id!r}")
        return self.root / safe

    async def fetch_bytes(self, blob_id: str) -> bytes:
        path = self._path(blob_id)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise BlobUnavailable(f"cannot read blob {blob_id}: {e}") from e

    def direct_url(self, blob_id: str) -> str:
        return self._path(blob_id).resolve().as_uri()

    async def store(
        self,
        blob_id: str,
        data: bytes,
        on_progress: Optional[ProgressCallback] = None,
    ) -> str:
        path = self._path(blob_id)
        partial = path.with_name(path.name + ".part")
        total = len(data)
        written = 0
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            with open(partial, "wb") as f:
                for pct in progress_steps(self.progress_step):
                    end = total * pct // 100
                    await asyncio.to_thread(f.write, data[written:end])
                    written = end
                    if on_progress:
                        await on_progress(pct)
            partial.replace(path)
        except OSError as e:
            raise BlobUnavailable(f"cannot store blob {blob_id}: {e}") from e
        finally:
            partial.unlink(missing_ok=True)
        logger.debug(f"Stored blob {blob_id} ({total} bytes) at {path}")
        return blob_id
