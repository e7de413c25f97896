"""Tests for the storage bucket wrapper."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from google.api_core.exceptions import NotFound

from clientdb.blobs import BlobStore, download_url


def test_download_url_encodes_path():
    url = download_url("my-bucket", "qr-codes/1450 Scanner Program.png", "abc")
    assert url == ("https://firebasestorage.googleapis.com/v0/b/my-bucket/o/"
                   "qr-codes%2F1450%20Scanner%20Program.png?alt=media&token=abc")


def test_download_url_without_token():
    assert download_url("b", "x.png").endswith("/o/x.png?alt=media")


@pytest.fixture
def storage_client():
    blobs = {
        "qr-codes/a.png": SimpleNamespace(name="qr-codes/a.png",
                                          metadata={"firebaseStorageDownloadTokens": "t1,t2"}),
        "qr-codes/b c.png": SimpleNamespace(name="qr-codes/b c.png", metadata=None),
    }
    client = MagicMock()
    client.bucket.return_value.get_blob.side_effect = lambda path: blobs.get(path)
    client.list_blobs.return_value = [
        SimpleNamespace(name="qr-codes/"),
        SimpleNamespace(name="qr-codes/a.png"),
        SimpleNamespace(name="qr-codes/b c.png"),
    ]
    return client


@pytest.mark.asyncio
async def test_resolve_uses_first_token(storage_client):
    store = BlobStore("bkt", client=storage_client)
    url = await store.resolve_download_reference("qr-codes/a.png")
    assert url == download_url("bkt", "qr-codes/a.png", "t1")
    storage_client.bucket.assert_called_with("bkt")


@pytest.mark.asyncio
async def test_resolve_without_token(storage_client):
    store = BlobStore("bkt", client=storage_client)
    url = await store.resolve_download_reference("qr-codes/b c.png")
    assert url == download_url("bkt", "qr-codes/b c.png")


@pytest.mark.asyncio
async def test_resolve_missing_raises_not_found(storage_client):
    store = BlobStore("bkt", client=storage_client)
    with pytest.raises(NotFound):
        await store.resolve_download_reference("qr-codes/nope.png")


@pytest.mark.asyncio
async def test_list_children(storage_client):
    store = BlobStore("bkt", client=storage_client)
    names = await store.list_children("qr-codes")
    assert names == ["a.png", "b c.png"]
    storage_client.list_blobs.assert_called_once_with("bkt", prefix="qr-codes/", delimiter="/")


def test_gs_address():
    assert BlobStore("bkt", client=MagicMock()).gs_address("qr-codes/a.png") == "gs://bkt/qr-codes/a.png"


def test_close(storage_client):
    BlobStore("bkt", client=storage_client).close()
    storage_client.close.assert_called_once()


def test_close_without_client(monkeypatch):
    created = []
    monkeypatch.setattr("clientdb.blobs.storage.Client", lambda: created.append(1))
    BlobStore("bkt").close()
    assert created == []
