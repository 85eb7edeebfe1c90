"""Data models."""

from .common import FileRecord, Notice, NoticeLevel, UserProfile
from .gallery import (
    DateGroup,
    EmptyState,
    FileView,
    GalleryView,
    GroupView,
    Section,
    SelectionState,
    StorageSummary,
)
from .upload import UploadOutcome, UploadState, UploadStatus
from .batch import BatchAction, BatchOutcome

__all__ = [
    "FileRecord",
    "Notice",
    "NoticeLevel",
    "UserProfile",
    "DateGroup",
    "EmptyState",
    "FileView",
    "GalleryView",
    "GroupView",
    "Section",
    "SelectionState",
    "StorageSummary",
    "UploadOutcome",
    "UploadState",
    "UploadStatus",
    "BatchAction",
    "BatchOutcome",
]
