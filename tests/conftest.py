from __future__ import annotations

import pytest

from photo_vault.backends import InMemoryBlobStore, InMemoryClipboard, InMemoryRegistry
from photo_vault.models import FileRecord
from photo_vault.services.gallery_session import SessionStore
from photo_vault.services.query_cache import QueryCache

NOW_MS = 1_760_000_000_000  # fixed "now" for date tests
MS_PER_DAY = 86_400_000


def ns(ms: int) -> int:
    return ms * 1_000_000


@pytest.fixture
def make_record():
    def _make(file_id, name=None, mime_type="image/png", size=10, uploaded_ms=NOW_MS):
        return FileRecord(
            id=file_id,
            name=name or f"{file_id}.png",
            size=size,
            mime_type=mime_type,
            uploaded_at=ns(uploaded_ms),
        )

    return _make


@pytest.fixture
def registry():
    return InMemoryRegistry(quota_bytes=1000)


@pytest.fixture
def blobs():
    return InMemoryBlobStore(progress_step=50)


@pytest.fixture
def clipboard():
    return InMemoryClipboard()


@pytest.fixture
def store(registry, blobs, clipboard, tmp_path):
    return SessionStore(
        registry,
        blobs,
        clipboard,
        QueryCache(),
        download_dir=tmp_path / "downloads",
        download_delay=0,
    )
