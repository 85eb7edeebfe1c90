from __future__ import annotations

import asyncio

from photo_vault.backends import DownloadSink, InMemoryRegistry
from photo_vault.errors import ClipboardDenied, Rejected
from photo_vault.models import NoticeLevel
from photo_vault.services.batch_actions import BatchActions
from photo_vault.services.notifier import Notifier
from photo_vault.services.query_cache import QueryCache, files_key
from photo_vault.services.selection import SelectionMachine


class _DeniedClipboard:
    async def write_text(self, text):
        raise ClipboardDenied("clipboard blocked")


class _NoUrlBlobs:
    def direct_url(self, blob_id):
        raise NotImplementedError


class _FlakyRegistry(InMemoryRegistry):
    """Refuses to remove the ids in `refuse` and counts listings."""

    def __init__(self, refuse=()):
        super().__init__()
        self.refuse = set(refuse)
        self.listings = 0
        self.removed = []

    async def list_files(self, caller):
        self.listings += 1
        return await super().list_files(caller)

    async def remove_file_reference(self, caller, file_id):
        if file_id in self.refuse:
            raise Rejected(f"cannot remove {file_id}")
        await super().remove_file_reference(caller, file_id)
        self.removed.append(file_id)


def _actions(tmp_path, registry, blobs, clipboard, cache=None, selection=None, delay=0):
    notifier = Notifier()
    actions = BatchActions(
        "alice",
        registry,
        blobs,
        clipboard,
        DownloadSink(tmp_path / "downloads"),
        cache or QueryCache(),
        notifier,
        selection or SelectionMachine(),
        download_delay=delay,
    )
    return actions, notifier


async def _seed(registry, blobs, *files):
    records = []
    for name, data in files:
        handle = await blobs.store(name, data)
        await registry.save_file_reference("alice", name, handle, name, len(data), "image/png")
    for record in await registry.list_files("alice"):
        records.append(record)
    return records


def test_download_continues_past_failed_items(tmp_path, registry, blobs, clipboard, make_record):
    actions, notifier = _actions(tmp_path, registry, blobs, clipboard)

    async def scenario():
        records = await _seed(registry, blobs, ("a.png", b"aaa"), ("c.png", b"ccc"))
        missing = make_record("b", name="b.png")
        return await actions.download([records[0], missing, records[1]])

    outcome = asyncio.run(scenario())

    assert outcome.succeeded == ["a.png", "c.png"]
    assert outcome.failed == ["b"]
    assert (tmp_path / "downloads" / "a.png").read_bytes() == b"aaa"
    assert (tmp_path / "downloads" / "c.png").read_bytes() == b"ccc"
    messages = [n.message for n in notifier.history]
    assert messages == ['Failed to download "b.png"', "3 file(s) downloaded"]


def test_download_spaces_out_successful_items(
    tmp_path, registry, blobs, clipboard, monkeypatch
):
    actions, _ = _actions(tmp_path, registry, blobs, clipboard, delay=0.3)
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    async def scenario():
        records = await _seed(registry, blobs, ("a.png", b"a"), ("b.png", b"b"))
        monkeypatch.setattr("photo_vault.services.batch_actions.asyncio.sleep", fake_sleep)
        return await actions.download(records)

    assert asyncio.run(scenario()).success
    assert delays == [0.3, 0.3]


def test_download_never_overwrites_local_files(tmp_path, registry, blobs, clipboard):
    actions, _ = _actions(tmp_path, registry, blobs, clipboard)
    (tmp_path / "downloads").mkdir()
    (tmp_path / "downloads" / "a.png").write_bytes(b"old")

    async def scenario():
        [record] = await _seed(registry, blobs, ("a.png", b"new"))
        return await actions.download_one(record)

    outcome = asyncio.run(scenario())

    assert outcome.saved_paths == [str(tmp_path / "downloads" / "a_1.png")]
    assert (tmp_path / "downloads" / "a.png").read_bytes() == b"old"


def test_download_one_failure(tmp_path, registry, blobs, clipboard, make_record):
    actions, notifier = _actions(tmp_path, registry, blobs, clipboard)

    outcome = asyncio.run(actions.download_one(make_record("gone")))

    assert not outcome.success
    assert notifier.history[-1].level == NoticeLevel.ERROR
    assert notifier.history[-1].message == "Download failed"


def test_share_links_joins_urls_with_newlines(tmp_path, registry, blobs, clipboard, make_record):
    actions, notifier = _actions(tmp_path, registry, blobs, clipboard)

    asyncio.run(actions.share_links([make_record("a"), make_record("b")]))

    assert clipboard.text == "memory://blobs/a\nmemory://blobs/b"
    assert notifier.history[-1].message == "2 link(s) copied to clipboard"


def test_share_falls_back_to_the_file_id(tmp_path, registry, clipboard, make_record):
    actions, notifier = _actions(tmp_path, registry, _NoUrlBlobs(), clipboard)

    outcome = asyncio.run(actions.share_one(make_record("abc")))

    assert outcome.success
    assert clipboard.text == "abc"
    assert notifier.history[-1].message == "Link copied to clipboard"


def test_clipboard_denied_reports_failure(tmp_path, registry, blobs, make_record):
    actions, notifier = _actions(tmp_path, registry, blobs, _DeniedClipboard())

    outcome = asyncio.run(actions.copy_names([make_record("a"), make_record("b")]))

    assert outcome.failed == ["a", "b"]
    assert notifier.history[-1].level == NoticeLevel.ERROR
    assert notifier.history[-1].message == "Failed to copy"


def test_copy_names(tmp_path, registry, blobs, clipboard, make_record):
    actions, notifier = _actions(tmp_path, registry, blobs, clipboard)

    asyncio.run(actions.copy_names([make_record("a", name="one.jpg"), make_record("b", name="two.mp4")]))

    assert clipboard.text == "one.jpg\ntwo.mp4"
    assert notifier.history[-1].message == "2 file name(s) copied"


def test_partial_delete_reports_once_and_refetches(tmp_path, blobs, clipboard):
    registry = _FlakyRegistry(refuse={"b.png"})
    cache = QueryCache()
    selection = SelectionMachine()
    actions, notifier = _actions(
        tmp_path, registry, blobs, clipboard, cache=cache, selection=selection
    )

    async def scenario():
        records = await _seed(
            registry, blobs, ("a.png", b"a"), ("b.png", b"b"), ("c.png", b"c")
        )
        selection.long_press("a.png")
        selection.toggle("b.png")
        selection.toggle("c.png")
        listings_before = registry.listings
        outcome = await actions.delete(records)
        return outcome, registry.listings - listings_before

    outcome, refetches = asyncio.run(scenario())

    assert registry.removed == ["a.png"]
    assert outcome.succeeded == ["a.png"]
    assert outcome.failed == ["b.png"]
    assert outcome.attempted == 2
    assert [n.message for n in notifier.history] == ["Failed to delete some files"]
    assert not selection.active
    assert refetches == 1
    assert [f.id for f in cache.peek(files_key("alice"))] == ["b.png", "c.png"]


def test_delete_all_succeed(tmp_path, blobs, clipboard):
    registry = _FlakyRegistry()
    selection = SelectionMachine()
    actions, notifier = _actions(tmp_path, registry, blobs, clipboard, selection=selection)

    async def scenario():
        records = await _seed(registry, blobs, ("a.png", b"a"), ("b.png", b"b"))
        selection.select_all(r.id for r in records)
        return await actions.delete(records)

    outcome = asyncio.run(scenario())

    assert outcome.success
    assert registry.removed == ["a.png", "b.png"]
    assert notifier.history[-1].message == "2 file(s) deleted"
    assert not selection.active


def test_failed_refetch_is_reported(tmp_path, blobs, clipboard, make_record):
    class _OfflineRegistry(InMemoryRegistry):
        async def list_files(self, caller):
            raise ConnectionError("offline")

    actions, notifier = _actions(tmp_path, _OfflineRegistry(), blobs, clipboard)

    outcome = asyncio.run(actions.delete([make_record("x")]))

    assert not outcome.success
    assert [n.message for n in notifier.history] == [
        "Failed to delete some files",
        "Could not refresh your files",
    ]
