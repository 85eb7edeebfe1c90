"""Failure kinds raised by collaborators and caught by the orchestrators."""


class GalleryError(Exception):
    """Base class for every failure the gallery knows how to report."""


class LocalIOError(GalleryError):
    """A local file could not be read."""


class RemoteUnavailable(GalleryError):
    """The file registry could not be reached."""


class BlobUnavailable(RemoteUnavailable):
    """The blob store could not be reached or refused the request."""


class Rejected(GalleryError):
    """The remote side refused the request (quota, unknown id, ...)."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ClipboardDenied(GalleryError):
    """The clipboard refused a write."""


class UploadInProgress(GalleryError):
    """An upload is already tracked for this viewer."""
