"""Collaborator contracts and bundled implementations."""

from .base import BlobStore, Clipboard, FileRegistry, ProgressCallback
from .memory import InMemoryBlobStore, InMemoryClipboard, InMemoryRegistry
from .filesystem import FilesystemBlobStore
from .clipboard import CommandClipboard, find_copy_command
from .download_sink import DownloadSink
from .local_file import LocalFile

__all__ = [
    "BlobStore",
    "Clipboard",
    "FileRegistry",
    "ProgressCallback",
    "InMemoryBlobStore",
    "InMemoryClipboard",
    "InMemoryRegistry",
    "FilesystemBlobStore",
    "CommandClipboard",
    "find_copy_command",
    "DownloadSink",
    "LocalFile",
]
