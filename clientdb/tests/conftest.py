"""Shared test fixtures for clientdb tests."""

import copy
import sys
from pathlib import Path

import pytest
from google.api_core.exceptions import NotFound

# Ensure clientdb package is importable
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from clientdb.blobs import download_url  # noqa: E402


class FakeStore:
    """In-memory stand-in for FirestoreStore."""

    def __init__(self, collections=None):
        self.collections = copy.deepcopy(collections or {})
        self.updates = []
        self._next_id = 1

    async def list_all(self, collection):
        return [(doc_id, copy.deepcopy(rec)) for doc_id, rec in self.collections.get(collection, {}).items()]

    async def get(self, collection, doc_id):
        rec = self.collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(rec) if rec is not None else None

    async def update(self, collection, doc_id, fields):
        docs = self.collections.get(collection, {})
        if doc_id not in docs:
            raise NotFound(f"No document to update: {collection}/{doc_id}")
        docs[doc_id].update(copy.deepcopy(fields))
        self.updates.append((collection, doc_id, dict(fields)))
        return True

    async def set(self, collection, doc_id, record):
        self.collections.setdefault(collection, {})[doc_id] = copy.deepcopy(record)

    async def add(self, collection, record):
        doc_id = f"auto{self._next_id}"
        self._next_id += 1
        self.collections.setdefault(collection, {})[doc_id] = copy.deepcopy(record)
        return doc_id

    async def count(self, collection):
        return len(self.collections.get(collection, {}))

    def close(self):
        pass


class FakeBlobs:
    """In-memory stand-in for BlobStore."""

    def __init__(self, objects=(), bucket="test-bucket"):
        self.bucket_name = bucket
        self.objects = set(objects)

    def gs_address(self, path):
        return f"gs://{self.bucket_name}/{path}"

    async def resolve_download_reference(self, path):
        if path not in self.objects:
            raise NotFound(f"No object at {self.gs_address(path)}")
        return download_url(self.bucket_name, path, "tok")

    async def list_children(self, folder):
        prefix = folder.rstrip("/") + "/"
        return sorted(p[len(prefix):] for p in self.objects
                      if p.startswith(prefix) and "/" not in p[len(prefix):])


@pytest.fixture
def sample_clients():
    """A small clients collection covering each QR configuration."""
    return {
        "c1": {"name": "AAA Grocery", "inventoryType": "scan",
               "qrFileName": "AAA Grocery.png", "qrUrl": "https://example.com/old.png"},
        "c2": {"name": "Bob's Market", "inventoryTypes": ["scan", "count"],
               "qrPath": "qr-codes/bob.png"},
        "c3": {"name": "Corner Shop"},
        "c4": {"name": "Dart Commercial", "inventoryType": "count", "qrFileName": "dart.png"},
    }


@pytest.fixture
def fake_store(sample_clients):
    return FakeStore({"clients": sample_clients})


@pytest.fixture
def fake_blobs():
    return FakeBlobs({
        "qr-codes/1450 Scanner Program.png",
        "qr-codes/AAA Grocery.png",
        "qr-codes/dart.png",
        "logos/msi.png",
    })
