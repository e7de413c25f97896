"""Firestore document store — list/get/update over schema-less collections."""

import logging
from typing import Any

from google.cloud.firestore import AsyncClient

log = logging.getLogger("clientdb.store")


class StoreUnavailable(RuntimeError):
    """Raised when the store cannot be opened (missing project, bad credentials)."""


class FirestoreStore:
    """Thin async wrapper around a Firestore client.

    Errors from Firestore are not caught here: a failed read or write aborts
    the maintenance run that issued it.
    """

    def __init__(self, client: AsyncClient):
        self._db = client

    async def list_all(self, collection: str) -> list[tuple[str, dict]]:
        """Every document in a collection as (id, record) pairs."""
        results = []
        async for doc in self._db.collection(collection).stream():
            results.append((doc.id, doc.to_dict() or {}))
        log.debug("Listed %d documents from %s", len(results), collection)
        return results

    async def get(self, collection: str, doc_id: str) -> dict | None:
        doc = await self._db.collection(collection).document(doc_id).get()
        if doc.exists:
            return doc.to_dict() or {}
        return None

    async def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> bool:
        """Merge fields into an existing document."""
        await self._db.collection(collection).document(doc_id).update(fields)
        return True

    async def set(self, collection: str, doc_id: str, record: dict[str, Any]):
        """Create or overwrite a document under a known ID."""
        await self._db.collection(collection).document(doc_id).set(record)

    async def add(self, collection: str, record: dict[str, Any]) -> str:
        """Create a document with a generated ID and return the ID."""
        _, doc_ref = await self._db.collection(collection).add(record)
        return doc_ref.id

    async def count(self, collection: str) -> int:
        query = self._db.collection(collection).count()
        result = await query.get()
        return result[0][0].value if result and result[0] else 0

    def close(self):
        self._db.close()


def connect(project: str) -> FirestoreStore:
    """Open a Firestore client for the given GCP project."""
    if not project:
        raise StoreUnavailable("GCP project not set — cannot open Firestore")
    try:
        client = AsyncClient(project=project)
    except Exception as e:
        raise StoreUnavailable(f"Firestore init failed: {e}") from e
    log.info("Firestore connected (project=%s)", project)
    return FirestoreStore(client)
