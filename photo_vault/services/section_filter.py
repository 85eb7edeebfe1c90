"""Section and search filtering."""

from typing import Iterable

from ..models.common import FileRecord
from ..models.gallery import EmptyState, Section
from ..utils.formatting import is_media


def matches_search(file: FileRecord, query: str) -> bool:
    """Case-insensitive substring match on the file name; empty matches all."""
    if not query:
        return True
    return query.lower() in file.name.lower()


def filter_files(files: Iterable[FileRecord], section: Section, query: str = "") -> list[FileRecord]:
    """Return the files visible in `section` for `query`, preserving order."""
    found = [f for f in files if matches_search(f, query)]
    if section == Section.GALLERY:
        found = [f for f in found if is_media(f.mime_type)]
    return found


def describe_empty(query: str = "") -> EmptyState:
    if query:
        return EmptyState(
            title="No results found",
            message=f'No photos match "{query}"',
            due_to_search=True,
        )
    return EmptyState(
        title="No photos yet",
        message="Upload your first photo or video using the + button below",
    )
