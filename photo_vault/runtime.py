"""Wire the bundled collaborators into a session store."""

import logging

from .backends import (
    CommandClipboard,
    FilesystemBlobStore,
    InMemoryBlobStore,
    InMemoryClipboard,
    InMemoryRegistry,
    find_copy_command,
)
from .config import Settings
from .services.gallery_session import SessionStore
from .services.query_cache import QueryCache

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> SessionStore:
    registry = InMemoryRegistry(quota_bytes=settings.default_quota_bytes)

    if settings.blob_dir is not None:
        blobs = FilesystemBlobStore(settings.blob_dir, progress_step=settings.upload_progress_step)
        logger.info(f"Storing blobs under {settings.blob_dir}")
    else:
        blobs = InMemoryBlobStore(progress_step=settings.upload_progress_step)

    command = find_copy_command()
    if command:
        clipboard = CommandClipboard(command)
        logger.info(f"Using {command[0]} for the clipboard")
    else:
        clipboard = InMemoryClipboard()
        logger.info("No clipboard command found, keeping copies in memory")

    return SessionStore(
        registry,
        blobs,
        clipboard,
        QueryCache(),
        download_dir=settings.download_dir,
        download_delay=settings.download_delay_seconds,
        default_mime_type=settings.default_mime_type,
        notice_history=settings.notice_history,
    )
