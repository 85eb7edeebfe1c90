from __future__ import annotations

import asyncio
import shutil

import pytest

from photo_vault.backends import CommandClipboard, FilesystemBlobStore, LocalFile
from photo_vault.backends.base import progress_steps
from photo_vault.errors import BlobUnavailable, ClipboardDenied, LocalIOError


def test_progress_steps_always_end_at_100():
    assert progress_steps(25) == [25, 50, 75, 100]
    assert progress_steps(30) == [30, 60, 90, 100]
    assert progress_steps(0) == list(range(1, 101))
    assert progress_steps(500) == [100]


def test_filesystem_store_round_trip(tmp_path):
    store = FilesystemBlobStore(tmp_path / "blobs", progress_step=50)
    seen = []

    async def on_progress(pct):
        seen.append(pct)

    async def scenario():
        handle = await store.store("abc", b"payload", on_progress)
        return handle, await store.fetch_bytes(handle)

    handle, data = asyncio.run(scenario())

    assert handle == "abc"
    assert data == b"payload"
    assert seen == [50, 100]
    assert list((tmp_path / "blobs").iterdir()) == [tmp_path / "blobs" / "abc"]
    assert store.direct_url("abc").startswith("file://")


def test_interrupted_store_leaves_no_partial_file(tmp_path):
    store = FilesystemBlobStore(tmp_path, progress_step=50)

    async def on_progress(pct):
        raise RuntimeError("connection dropped")

    with pytest.raises(RuntimeError):
        asyncio.run(store.store("abc", b"payload", on_progress))

    assert list(tmp_path.iterdir()) == []


def test_blob_ids_cannot_escape_the_root(tmp_path):
    store = FilesystemBlobStore(tmp_path / "blobs")

    asyncio.run(store.store("../outside", b"x"))

    assert (tmp_path / "blobs" / "outside").exists()
    with pytest.raises(BlobUnavailable):
        asyncio.run(store.fetch_bytes(".."))


def test_missing_blob_is_unavailable(tmp_path):
    with pytest.raises(BlobUnavailable):
        asyncio.run(FilesystemBlobStore(tmp_path).fetch_bytes("nope"))


def test_local_file_guesses_mime_type(tmp_path):
    assert LocalFile(tmp_path / "a.jpg").mime_type == "image/jpeg"
    assert LocalFile(tmp_path / "a.jpg", mime_type="image/heic").mime_type == "image/heic"
    with pytest.raises(LocalIOError):
        asyncio.run(LocalFile(tmp_path / "missing.jpg").read_bytes())


@pytest.mark.skipif(shutil.which("cat") is None, reason="needs cat")
def test_command_clipboard_pipes_text():
    asyncio.run(CommandClipboard(["cat"]).write_text("hello"))


@pytest.mark.skipif(shutil.which("false") is None, reason="needs false")
def test_command_clipboard_failure_is_denied():
    with pytest.raises(ClipboardDenied):
        asyncio.run(CommandClipboard(["false"]).write_text("hello"))


def test_missing_clipboard_command_is_denied():
    with pytest.raises(ClipboardDenied):
        asyncio.run(CommandClipboard(["no-such-clipboard-tool"]).write_text("hello"))
