"""Per-viewer gallery state and the routing between its parts."""

import logging
from pathlib import Path
from typing import Optional

from ..backends.base import BlobStore, Clipboard, FileRegistry
from ..backends.download_sink import DownloadSink
from ..models.common import FileRecord, UserProfile
from ..models.gallery import FileView, GalleryView, GroupView, Section, StorageSummary
from ..utils.formatting import (
    file_icon,
    file_type_label,
    format_bytes,
    format_timestamp,
    mime_category,
    storage_percentage,
)
from .batch_actions import BatchActions
from .date_grouping import group_by_date
from .lightbox import Lightbox
from .notifier import Notifier
from .query_cache import QueryCache, files_key, profile_key, quota_key
from .section_filter import describe_empty, filter_files
from .selection import SelectionMachine
from .upload_manager import UploadManager

logger = logging.getLogger(__name__)


def _position(files: list[FileRecord], file_id: str) -> Optional[int]:
    for index, file in enumerate(files):
        if file.id == file_id:
            return index
    return None


class GallerySession:
    def __init__(
        self,
        caller: str,
        registry: FileRegistry,
        blobs: BlobStore,
        clipboard: Clipboard,
        cache: QueryCache,
        download_dir: Path,
        download_delay: float = 0.3,
        default_mime_type: str = "application/octet-stream",
        notice_history: int = 50,
    ):
        self.caller = caller
        self._registry = registry
        self._cache = cache
        self.section = Section.GALLERY
        self.query = ""
        self.notifier = Notifier(history=notice_history)
        self.selection = SelectionMachine()
        self.lightbox = Lightbox()
        self.uploads = UploadManager(
            caller,
            registry,
            blobs,
            cache,
            self.notifier,
            default_mime_type=default_mime_type,
        )
        self.batch = BatchActions(
            caller,
            registry,
            blobs,
            clipboard,
            DownloadSink(download_dir),
            cache,
            self.notifier,
            self.selection,
            download_delay=download_delay,
        )

    # Listing

    async def files(self) -> list[FileRecord]:
        return await self._cache.fetch(files_key(self.caller), self._load_files)

    async def refresh(self) -> list[FileRecord]:
        return await self._cache.refetch(files_key(self.caller), self._load_files)

    async def display_files(self) -> list[FileRecord]:
        return filter_files(await self.files(), self.section, self.query)

    async def view(self, now_ms: Optional[int] = None) -> GalleryView:
        displayed = await self.display_files()
        view = GalleryView(
            section=self.section,
            query=self.query,
            total=len(displayed),
            selecting=self.selection.active,
            selected_count=self.selection.state.count,
        )
        if not displayed:
            view.empty = describe_empty(self.query)
            return view

        index_of = {id(f): i for i, f in enumerate(displayed)}
        for group in group_by_date(displayed, now_ms):
            view.groups.append(GroupView(
                label=group.label,
                files=[self._file_view(f, index_of[id(f)]) for f in group.files],
            ))
        return view

    def set_section(self, section: Section) -> None:
        self.section = section
        self.selection.clear()

    def set_query(self, query: str) -> None:
        self.query = query

    # Selection and lightbox routing

    async def tap(self, file_id: str) -> Optional[str]:
        """Toggle while selecting, otherwise open the viewer on the file.

        Only displayed files can be tapped; anything else returns None.
        """
        displayed = await self.display_files()
        index = _position(displayed, file_id)
        if index is None:
            return None
        if self.selection.active:
            self.selection.toggle(file_id)
            return "toggled"
        self.lightbox.open(displayed, index)
        return "opened"

    async def long_press(self, file_id: str) -> bool:
        if _position(await self.display_files(), file_id) is None:
            return False
        self.selection.long_press(file_id)
        return True

    async def toggle(self, file_id: str) -> bool:
        if _position(await self.display_files(), file_id) is None:
            return False
        self.selection.toggle(file_id)
        return True

    async def select_all(self) -> None:
        self.selection.select_all(f.id for f in await self.display_files())

    async def selected_files(self) -> list[FileRecord]:
        return [f for f in await self.display_files() if self.selection.is_selected(f.id)]

    async def open_lightbox(self, index: int) -> bool:
        return self.lightbox.open(await self.display_files(), index)

    # Account

    async def storage_summary(self) -> StorageSummary:
        files = await self.files()
        quota = await self._cache.fetch(quota_key(self.caller), self._load_quota)
        used = sum(f.size for f in files)
        percent = storage_percentage(used, quota)
        if percent > 80:
            level = "critical"
        elif percent > 50:
            level = "warning"
        else:
            level = "ok"
        return StorageSummary(
            file_count=len(files),
            used_bytes=used,
            used_label=format_bytes(used),
            quota_bytes=quota,
            quota_label=format_bytes(quota),
            percent=percent,
            level=level,
        )

    async def profile(self) -> Optional[UserProfile]:
        return await self._cache.fetch(profile_key(self.caller), self._load_profile)

    async def save_profile(self, name: str) -> UserProfile:
        profile = UserProfile(name=name.strip())
        await self._registry.save_user_profile(self.caller, profile)
        self._cache.invalidate(profile_key(self.caller))
        return profile

    def logout(self) -> None:
        dropped = self._cache.clear_scope(self.caller)
        self.selection.clear()
        self.lightbox.close()
        logger.info(f"Logged out {self.caller}, dropped {dropped} cached queries")

    def _file_view(self, file: FileRecord, index: int) -> FileView:
        return FileView(
            file=file,
            index=index,
            size_label=format_bytes(file.size),
            uploaded_label=format_timestamp(file.uploaded_at),
            type_label=file_type_label(file.mime_type),
            icon=file_icon(file.mime_type),
            category=mime_category(file.mime_type),
            selected=self.selection.is_selected(file.id),
        )

    async def _load_files(self) -> list[FileRecord]:
        return await self._registry.list_files(self.caller)

    async def _load_quota(self) -> int:
        return await self._registry.get_quota(self.caller)

    async def _load_profile(self) -> Optional[UserProfile]:
        return await self._registry.get_user_profile(self.caller)


class SessionStore:
    """Hands out one session per caller over shared collaborators."""

    def __init__(
        self,
        registry: FileRegistry,
        blobs: BlobStore,
        clipboard: Clipboard,
        cache: QueryCache,
        download_dir: Path,
        download_delay: float = 0.3,
        default_mime_type: str = "application/octet-stream",
        notice_history: int = 50,
    ):
        self.registry = registry
        self.blobs = blobs
        self.clipboard = clipboard
        self.cache = cache
        self._options = dict(
            download_dir=download_dir,
            download_delay=download_delay,
            default_mime_type=default_mime_type,
            notice_history=notice_history,
        )
        self._sessions: dict[str, GallerySession] = {}

    def get(self, caller: str) -> GallerySession:
        session = self._sessions.get(caller)
        if session is None:
            session = GallerySession(
                caller, self.registry, self.blobs, self.clipboard, self.cache, **self._options
            )
            self._sessions[caller] = session
        return session

    def drop(self, caller: str) -> None:
        session = self._sessions.pop(caller, None)
        if session:
            session.logout()
