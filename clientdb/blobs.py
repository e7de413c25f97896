"""Cloud Storage access for QR code images."""

import asyncio
import logging
from urllib.parse import quote

from google.api_core.exceptions import NotFound
from google.cloud import storage

log = logging.getLogger("clientdb.blobs")

DOWNLOAD_HOST = "https://firebasestorage.googleapis.com"
TOKEN_METADATA_KEY = "firebaseStorageDownloadTokens"


def download_url(bucket: str, path: str, token: str | None = None) -> str:
    """Build the Firebase download URL for an object path."""
    url = f"{DOWNLOAD_HOST}/v0/b/{bucket}/o/{quote(path, safe='')}?alt=media"
    if token:
        url += f"&token={token}"
    return url


class BlobStore:
    """Read-only view of one storage bucket.

    The storage client is blocking, so every call runs in a worker thread.
    """

    def __init__(self, bucket_name: str, client: storage.Client | None = None):
        self.bucket_name = bucket_name
        self._client = client

    @property
    def client(self) -> storage.Client:
        if self._client is None:
            self._client = storage.Client()
        return self._client

    def gs_address(self, path: str) -> str:
        return f"gs://{self.bucket_name}/{path}"

    def _resolve(self, path: str) -> str:
        blob = self.client.bucket(self.bucket_name).get_blob(path)
        if blob is None:
            raise NotFound(f"No object at {self.gs_address(path)}")
        tokens = (blob.metadata or {}).get(TOKEN_METADATA_KEY, "")
        token = tokens.split(",")[0] if tokens else None
        return download_url(self.bucket_name, path, token)

    async def resolve_download_reference(self, path: str) -> str:
        """Download URL for an object; raises NotFound when it does not exist."""
        url = await asyncio.to_thread(self._resolve, path)
        log.debug("Resolved %s -> %s", path, url)
        return url

    def _list(self, folder: str) -> list[str]:
        prefix = folder.rstrip("/") + "/"
        blobs = self.client.list_blobs(self.bucket_name, prefix=prefix, delimiter="/")
        names = []
        for blob in blobs:
            name = blob.name[len(prefix):]
            if name:  # skip the folder placeholder object
                names.append(name)
        return names

    async def list_children(self, folder: str) -> list[str]:
        """Names of the objects directly under a folder."""
        return await asyncio.to_thread(self._list, folder)

    def close(self):
        if self._client is not None:
            self._client.close()


def connect(bucket_name: str) -> BlobStore:
    log.info("Storage bucket: %s", bucket_name)
    return BlobStore(bucket_name)
