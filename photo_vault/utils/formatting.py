"""Display formatting for sizes, timestamps and mime types.

All helpers are total: any input, including empty strings and zero, has a
defined output.
"""

from datetime import datetime

KB = 1024
MB = KB * 1024
GB = MB * 1024
TB = GB * 1024

_ARCHIVE_MARKERS = ("zip", "rar", "tar", "gzip")
_CODE_MARKERS = ("javascript", "typescript", "json", "xml")


def format_bytes(n: int) -> str:
    if n == 0:
        return "0 B"
    if n < KB:
        return f"{n} B"
    if n < MB:
        return f"{n / KB:.1f} KB"
    if n < GB:
        return f"{n / MB:.1f} MB"
    if n < TB:
        return f"{n / GB:.2f} GB"
    return f"{n / TB:.2f} TB"


def format_timestamp(ns: int) -> str:
    """Nanosecond timestamp -> 'Oct 5, 2026, 02:07 PM' in local time."""
    dt = datetime.fromtimestamp((ns // 1_000_000) / 1000)
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M %p}"


def storage_percentage(used_bytes: int, quota_bytes: int) -> float:
    if quota_bytes <= 0:
        return 0.0
    return used_bytes / quota_bytes * 100


def mime_category(mime_type: str) -> str:
    # case-sensitive, like the browser-reported types it classifies
    mime = mime_type or ""
    if mime.startswith("image/"):
        return "image"
    if mime.startswith("video/"):
        return "video"
    if mime.startswith("audio/"):
        return "audio"
    if mime == "application/pdf" or mime.startswith("text/") or "document" in mime or "word" in mime:
        return "document"
    return "other"


def is_media(mime_type: str) -> bool:
    """Photos and videos are what the gallery section shows."""
    return mime_category(mime_type) in ("image", "video")


def file_icon(mime_type: str) -> str:
    if not mime_type:
        return "📄"
    if mime_type.startswith("image/"):
        return "🖼️"
    if mime_type.startswith("video/"):
        return "🎬"
    if mime_type.startswith("audio/"):
        return "🎵"
    if mime_type == "application/pdf":
        return "📕"
    if any(marker in mime_type for marker in _ARCHIVE_MARKERS):
        return "🗜️"
    if "word" in mime_type or "document" in mime_type:
        return "📝"
    if "excel" in mime_type or "spreadsheet" in mime_type:
        return "📊"
    if "powerpoint" in mime_type or "presentation" in mime_type:
        return "📋"
    if mime_type.startswith("text/"):
        return "📃"
    if any(marker in mime_type for marker in _CODE_MARKERS):
        return "💻"
    return "📄"


def file_type_label(mime_type: str) -> str:
    if not mime_type:
        return "File"
    if mime_type.startswith(("image/", "video/", "audio/")):
        return mime_type.split("/")[1].upper()
    if mime_type == "application/pdf":
        return "PDF"
    if "zip" in mime_type:
        return "ZIP"
    if "word" in mime_type:
        return "DOCX"
    if "excel" in mime_type:
        return "XLSX"
    return mime_type.split("/")[-1].upper()[:6]
