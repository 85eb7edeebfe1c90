"""In-process collaborators, used by the dev server and the tests."""

import asyncio
import logging
import time
from typing import Optional

from ..errors import BlobUnavailable, Rejected
from ..models.common import FileRecord, UserProfile
from .base import BlobStore, Clipboard, FileRegistry, ProgressCallback, progress_steps

logger = logging.getLogger(__name__)


class InMemoryRegistry(FileRegistry):
    def __init__(self, quota_bytes: int = 1_000_000_000_000_000):
        self.quota_bytes = quota_bytes
        self._files: dict[str, dict[str, FileRecord]] = {}
        self._handles: dict[str, str] = {}
        self._profiles: dict[str, UserProfile] = {}

    async def list_files(self, caller: str) -> list[FileRecord]:
        return list(self._files.get(caller, {}).values())

    async def save_file_reference(
        self,
        caller: str,
        file_id: str,
        blob_handle: str,
        name: str,
        size: int,
        mime_type: str,
    ) -> None:
        files = self._files.setdefault(caller, {})
        used = sum(f.size for f in files.values())
        if used + size > self.quota_bytes:
            raise Rejected("quota exceeded")
        files[file_id] = FileRecord(
            id=file_id,
            name=name,
            size=size,
            mime_type=mime_type,
            uploaded_at=time.time_ns(),
        )
        self._handles[file_id] = blob_handle

    async def remove_file_reference(self, caller: str, file_id: str) -> None:
        files = self._files.get(caller, {})
        if file_id not in files:
            raise Rejected(f"file not found: {file_id}")
        del files[file_id]
        self._handles.pop(file_id, None)

    async def get_user_profile(self, caller: str) -> Optional[UserProfile]:
        return self._profiles.get(caller)

    async def save_user_profile(self, caller: str, profile: UserProfile) -> None:
        self._profiles[caller] = profile

    async def get_quota(self, caller: str) -> int:
        return self.quota_bytes


class InMemoryBlobStore(BlobStore):
    def __init__(self, progress_step: int = 25):
        self.progress_step = progress_step
        self._blobs: dict[str, bytes] = {}

    async def fetch_bytes(self, blob_id: str) -> bytes:
        try:
            return self._blobs[blob_id]
        except KeyError:
            raise BlobUnavailable(f"no blob stored for {blob_id}") from None

    def direct_url(self, blob_id: str) -> str:
        return f"memory://blobs/{blob_id}"

    async def store(
        self,
        blob_id: str,
        data: bytes,
        on_progress: Optional[ProgressCallback] = None,
    ) -> str:
        total = len(data)
        for pct in progress_steps(self.progress_step):
            self._blobs[blob_id] = data[: total * pct // 100]
            if on_progress:
                await on_progress(pct)
            await asyncio.sleep(0)
        return blob_id


class InMemoryClipboard(Clipboard):
    def __init__(self):
        self.text = ""

    async def write_text(self, text: str) -> None:
        self.text = text
