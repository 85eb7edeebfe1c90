"""Upload lifecycle: read -> store blob -> save reference -> invalidate.

One upload is tracked per viewer. The in-progress indicator (`state`) is
cleared on every exit path, including cancellation.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ..backends.base import BlobStore, FileRegistry
from ..backends.local_file import LocalFile
from ..errors import GalleryError, Rejected, UploadInProgress
from ..models.upload import UploadOutcome, UploadState, UploadStatus
from ..utils.ids import IdGenerator, timestamp_id
from .notifier import Notifier
from .query_cache import QueryCache, files_key, quota_key

logger = logging.getLogger(__name__)

ProgressListener = Callable[[UploadState], Awaitable[None]]


class UploadManager:
    def __init__(
        self,
        caller: str,
        registry: FileRegistry,
        blobs: BlobStore,
        cache: QueryCache,
        notifier: Notifier,
        default_mime_type: str = "application/octet-stream",
        id_generator: IdGenerator = timestamp_id,
    ):
        self.caller = caller
        self._registry = registry
        self._blobs = blobs
        self._cache = cache
        self._notifier = notifier
        self._default_mime_type = default_mime_type
        self._new_id = id_generator
        self._state: Optional[UploadState] = None
        self._task: Optional[asyncio.Task] = None
        self._last_task: Optional[asyncio.Task] = None
        self._progress_listeners: list[ProgressListener] = []

    @property
    def state(self) -> Optional[UploadState]:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state is not None

    def add_progress_listener(self, callback: ProgressListener) -> None:
        self._progress_listeners.append(callback)

    def remove_progress_listener(self, callback: ProgressListener) -> None:
        if callback in self._progress_listeners:
            self._progress_listeners.remove(callback)

    async def start(self, source: LocalFile) -> UploadState:
        """Run the upload in the background; the caller polls `state`."""
        if self.is_busy:
            raise UploadInProgress(f"already uploading {self._state.file_name}")
        state = self._state = UploadState(file_name=source.name)
        self._task = asyncio.create_task(self._run(source, state))
        self._last_task = self._task
        # a task cancelled before it first runs never reaches _run's finally
        self._task.add_done_callback(lambda _task: self._release(state))
        return state

    async def upload(self, source: LocalFile) -> UploadOutcome:
        """Run the upload to completion. Never raises."""
        if self.is_busy:
            await self._notifier.error("Another upload is still in progress")
            return UploadOutcome(file_name=source.name, error="upload in progress")
        state = self._state = UploadState(file_name=source.name)
        return await self._run(source, state)

    async def cancel(self) -> bool:
        """Stop tracking the running upload. Cleanup still runs."""
        task = self._task
        if task is None or task.done():
            return False
        task.cancel()
        return True

    async def wait(self) -> Optional[UploadOutcome]:
        """Await the most recent background upload."""
        task = self._last_task
        if task is None:
            return None
        await asyncio.wait([task])
        if task.cancelled():
            return None
        return task.result()

    async def _run(self, source: LocalFile, state: UploadState) -> UploadOutcome:
        outcome = UploadOutcome(file_name=source.name)

        async def on_progress(pct: int) -> None:
            # a late callback must never touch another upload's indicator
            if state is not self._state:
                return
            pct = min(max(int(pct), 0), 100)
            if pct <= state.progress_percent:
                return
            state.progress_percent = pct
            await self._notify_progress(state)

        try:
            state.status = UploadStatus.READING
            await self._notify_progress(state)
            data = await source.read_bytes()

            file_id = self._new_id()
            logger.info(f"Uploading {source.name} ({len(data)} bytes) as {file_id}")

            state.status = UploadStatus.STORING
            await self._notify_progress(state)
            handle = await self._blobs.store(file_id, data, on_progress)

            state.status = UploadStatus.SAVING
            await self._notify_progress(state)
            await self._registry.save_file_reference(
                self.caller,
                file_id,
                handle,
                source.name,
                len(data),
                source.mime_type or self._default_mime_type,
            )
            # only now is the new file visible remotely
            self._cache.invalidate(files_key(self.caller))
            self._cache.invalidate(quota_key(self.caller))

            state.status = UploadStatus.COMPLETED
            state.progress_percent = 100
            outcome.success = True
            outcome.file_id = file_id
            await self._notifier.success(f'"{source.name}" uploaded successfully')

        except asyncio.CancelledError:
            logger.info(f"Upload of {source.name} cancelled")
            state.status = UploadStatus.CANCELLED
            outcome.error = "cancelled"
            await self._notifier.info(f'Upload of "{source.name}" cancelled')
        except GalleryError as e:
            logger.warning(f"Upload of {source.name} failed: {e}")
            state.status = UploadStatus.FAILED
            outcome.error = str(e)
            if isinstance(e, Rejected):
                await self._notifier.error(f"Upload failed: {e.reason}")
            else:
                await self._notifier.error("Upload failed. Please try again.")
        except Exception as e:
            logger.exception(f"Unexpected error uploading {source.name}")
            state.status = UploadStatus.FAILED
            outcome.error = str(e)
            await self._notifier.error("Upload failed. Please try again.")
        finally:
            await self._finish(state)

        return outcome

    async def _finish(self, state: UploadState) -> None:
        self._release(state)
        await self._notify_progress(state)

    def _release(self, state: UploadState) -> None:
        if self._state is state:
            self._state = None
            self._task = None

    async def _notify_progress(self, state: UploadState) -> None:
        for cb in list(self._progress_listeners):
            try:
                await cb(state)
            except Exception:
                logger.exception("Upload progress listener failed")
