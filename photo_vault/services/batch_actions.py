"""Batch operations over the selected files.

Every action walks its files one at a time. Download isolates failures per
item and carries on; delete stops at the first failure and reports it as one
aggregate notice, so the caller must trust the re-fetched listing rather
than any local bookkeeping.
"""

import asyncio
import logging
from typing import Sequence

from ..backends.base import BlobStore, Clipboard, FileRegistry
from ..backends.download_sink import DownloadSink
from ..models.batch import BatchAction, BatchOutcome
from ..models.common import FileRecord
from .notifier import Notifier
from .query_cache import QueryCache, files_key, quota_key
from .selection import SelectionMachine

logger = logging.getLogger(__name__)


class BatchActions:
    def __init__(
        self,
        caller: str,
        registry: FileRegistry,
        blobs: BlobStore,
        clipboard: Clipboard,
        sink: DownloadSink,
        cache: QueryCache,
        notifier: Notifier,
        selection: SelectionMachine,
        download_delay: float = 0.3,
    ):
        self.caller = caller
        self._registry = registry
        self._blobs = blobs
        self._clipboard = clipboard
        self._sink = sink
        self._cache = cache
        self._notifier = notifier
        self._selection = selection
        self.download_delay = download_delay

    async def download(self, files: Sequence[FileRecord]) -> BatchOutcome:
        outcome = BatchOutcome(action=BatchAction.DOWNLOAD, attempted=len(files))
        for file in files:
            try:
                path = await self._download(file)
                outcome.succeeded.append(file.id)
                outcome.saved_paths.append(str(path))
                # spaces out writes for the benefit of download managers
                if self.download_delay > 0:
                    await asyncio.sleep(self.download_delay)
            except Exception as e:
                logger.warning(f"Download of {file.name} ({file.id}) failed: {e}")
                outcome.failed.append(file.id)
                await self._notifier.error(f'Failed to download "{file.name}"')

        # counts attempted files, failed ones included
        await self._notifier.success(f"{len(files)} file(s) downloaded")
        return outcome

    async def download_one(self, file: FileRecord) -> BatchOutcome:
        """Lightbox download of the file being viewed."""
        outcome = BatchOutcome(action=BatchAction.DOWNLOAD, attempted=1)
        try:
            path = await self._download(file)
        except Exception as e:
            logger.warning(f"Download of {file.name} ({file.id}) failed: {e}")
            outcome.failed.append(file.id)
            outcome.error = str(e)
            await self._notifier.error("Download failed")
            return outcome
        outcome.succeeded.append(file.id)
        outcome.saved_paths.append(str(path))
        await self._notifier.success("Download started")
        return outcome

    async def share_links(self, files: Sequence[FileRecord]) -> BatchOutcome:
        links = [self._link(file) for file in files]
        return await self._copy(
            BatchAction.SHARE,
            files,
            "\n".join(links),
            ok=f"{len(files)} link(s) copied to clipboard",
            failed="Failed to copy links",
        )

    async def share_one(self, file: FileRecord) -> BatchOutcome:
        return await self._copy(
            BatchAction.SHARE,
            [file],
            self._link(file),
            ok="Link copied to clipboard",
            failed="Failed to copy link",
        )

    async def copy_names(self, files: Sequence[FileRecord]) -> BatchOutcome:
        return await self._copy(
            BatchAction.COPY_NAMES,
            files,
            "\n".join(f.name for f in files),
            ok=f"{len(files)} file name(s) copied",
            failed="Failed to copy",
        )

    async def delete(self, files: Sequence[FileRecord]) -> BatchOutcome:
        outcome = BatchOutcome(action=BatchAction.DELETE)
        try:
            for file in files:
                outcome.attempted += 1
                try:
                    await self._registry.remove_file_reference(self.caller, file.id)
                except Exception:
                    outcome.failed.append(file.id)
                    raise
                outcome.succeeded.append(file.id)
            await self._notifier.success(f"{len(files)} file(s) deleted")
        except Exception as e:
            logger.warning(
                f"Batch delete stopped after {len(outcome.succeeded)}/{len(files)} "
                f"removals: {e}"
            )
            outcome.error = str(e)
            await self._notifier.error("Failed to delete some files")
        finally:
            if outcome.succeeded:
                self._cache.invalidate(files_key(self.caller))
                self._cache.invalidate(quota_key(self.caller))
            self._selection.clear()
            await self._refetch()
        return outcome

    async def _download(self, file: FileRecord):
        data = await self._blobs.fetch_bytes(file.id)
        path = await self._sink.save(file.name, data)
        logger.info(f"Downloaded {file.name} to {path}")
        return path

    def _link(self, file: FileRecord) -> str:
        try:
            return self._blobs.direct_url(file.id)
        except Exception as e:
            logger.debug(f"No direct URL for {file.id}, using the id: {e}")
            return file.id

    async def _copy(
        self,
        action: BatchAction,
        files: Sequence[FileRecord],
        text: str,
        ok: str,
        failed: str,
    ) -> BatchOutcome:
        outcome = BatchOutcome(action=action, attempted=len(files))
        try:
            await self._clipboard.write_text(text)
        except Exception as e:
            logger.warning(f"Clipboard write for {action.value} failed: {e}")
            outcome.error = str(e)
            outcome.failed = [f.id for f in files]
            await self._notifier.error(failed)
            return outcome
        outcome.succeeded = [f.id for f in files]
        await self._notifier.success(ok)
        return outcome

    async def _refetch(self) -> None:
        try:
            await self._cache.refetch(files_key(self.caller), self._load_files)
        except Exception as e:
            logger.warning(f"Re-fetch of files for {self.caller} failed: {e}")
            await self._notifier.error("Could not refresh your files")

    async def _load_files(self) -> list[FileRecord]:
        return await self._registry.list_files(self.caller)
