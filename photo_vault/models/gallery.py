"""Derived, non-persisted gallery views."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .common import FileRecord


class Section(str, Enum):
    GALLERY = "gallery"
    ALBUMS = "albums"  # reserved for album grouping, behaves like library
    LIBRARY = "library"


class DateGroup(BaseModel):
    label: str
    files: list[FileRecord] = Field(default_factory=list)


class EmptyState(BaseModel):
    title: str
    message: str
    due_to_search: bool = False


class SelectionState(BaseModel):
    """Selected ids; selection mode is active exactly when the set is non-empty."""

    model_config = ConfigDict(frozen=True)

    selected_ids: frozenset[str] = frozenset()

    @property
    def active(self) -> bool:
        return bool(self.selected_ids)

    @property
    def count(self) -> int:
        return len(self.selected_ids)


class FileView(BaseModel):
    """A file record plus the labels the grid displays for it."""

    file: FileRecord
    index: int  # position in the displayed sequence
    size_label: str
    uploaded_label: str
    type_label: str
    icon: str
    category: str
    selected: bool = False


class GroupView(BaseModel):
    label: str
    files: list[FileView] = Field(default_factory=list)


class GalleryView(BaseModel):
    section: Section
    query: str = ""
    total: int = 0
    groups: list[GroupView] = Field(default_factory=list)
    empty: Optional[EmptyState] = None
    selecting: bool = False
    selected_count: int = 0


class StorageSummary(BaseModel):
    file_count: int = 0
    used_bytes: int = 0
    used_label: str = "0 B"
    quota_bytes: int = 0
    quota_label: str = "0 B"
    percent: float = 0.0
    level: str = "ok"  # ok | warning | critical
