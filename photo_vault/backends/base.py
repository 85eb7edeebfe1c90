"""Abstract collaborator contracts the gallery depends on."""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional

from ..models.common import FileRecord, UserProfile

ProgressCallback = Callable[[int], Awaitable[None]]


class FileRegistry(ABC):
    """Remote key-value service holding file references per caller.

    Implementations raise `RemoteUnavailable` when unreachable and
    `Rejected` when the request is refused.
    """

    @abstractmethod
    async def list_files(self, caller: str) -> list[FileRecord]:
        ...

    @abstractmethod
    async def save_file_reference(
        self,
        caller: str,
        file_id: str,
        blob_handle: str,
        name: str,
        size: int,
        mime_type: str,
    ) -> None:
        ...

    @abstractmethod
    async def remove_file_reference(self, caller: str, file_id: str) -> None:
        """Remove a reference. Unknown ids are reported, not ignored."""
        ...

    @abstractmethod
    async def get_user_profile(self, caller: str) -> Optional[UserProfile]:
        ...

    @abstractmethod
    async def save_user_profile(self, caller: str, profile: UserProfile) -> None:
        ...

    @abstractmethod
    async def get_quota(self, caller: str) -> int:
        ...


class BlobStore(ABC):
    """Raw file bytes addressed by file id. Failures raise `BlobUnavailable`."""

    @abstractmethod
    async def fetch_bytes(self, blob_id: str) -> bytes:
        ...

    @abstractmethod
    def direct_url(self, blob_id: str) -> str:
        ...

    @abstractmethod
    async def store(
        self,
        blob_id: str,
        data: bytes,
        on_progress: Optional[ProgressCallback] = None,
    ) -> str:
        """Store `data` and return its handle, reporting percent progress."""
        ...


class Clipboard(ABC):
    @abstractmethod
    async def write_text(self, text: str) -> None:
        """Replace the clipboard contents. Raises `ClipboardDenied`."""
        ...


def progress_steps(step: int) -> list[int]:
    """Percent values a chunked store reports, always ending at 100."""
    step = min(max(step, 1), 100)
    steps = list(range(step, 100, step))
    steps.append(100)
    return steps
