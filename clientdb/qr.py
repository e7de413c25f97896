"""QR code reference resolution for client records.

A client can point at its scanner QR image through three optional fields,
filled in by different generations of the account form:

    qrUrl       full download address (web or gs://), set by the upload flow
    qrFileName  bare file name inside the QR folder
    qrPath      folder-relative path, storage address or web address

Exactly one of them decides the image, in that order, and clients with none
of them fall back to the organization-wide default image. Resolution is pure:
no I/O and no configuration lookups, the settings are handed in.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote

STORAGE_SCHEMES = ("gs://",)
WEB_SCHEMES = ("https://", "http://")

SOURCE_URL = "qrUrl"
SOURCE_FILE_NAME = "qrFileName"
SOURCE_PATH = "qrPath"
SOURCE_DEFAULT = "default"


@dataclass(frozen=True)
class QRSettings:
    storage_bucket: str = ""
    default_folder: str = "qr-codes"
    default_file_name: str = "1450 Scanner Program.png"
    url_schemes: tuple[str, ...] = ("https://", "gs://")

    @property
    def default_reference(self) -> str:
        return f"{self.default_folder}/{self.default_file_name}"

    def in_folder(self, file_name: str) -> str:
        return f"{self.default_folder}/{file_name}"


DEFAULT_SETTINGS = QRSettings()


@dataclass(frozen=True)
class QRResolution:
    """The resolved reference and the tier that produced it."""

    reference: str
    source: str
    # Only set for qrPath: "folder", "storage", "web" or "external"
    path_kind: str | None = None

    @property
    def is_default(self) -> bool:
        return self.source == SOURCE_DEFAULT


def _text(record: Mapping[str, Any] | None, field: str) -> str | None:
    if not record:
        return None
    try:
        value = record.get(field)
    except AttributeError:
        return None
    if isinstance(value, str) and value:
        return value
    return None


def valid_qr_url(record: Mapping[str, Any] | None,
                 settings: QRSettings = DEFAULT_SETTINGS) -> str | None:
    """Return qrUrl if it starts with a recognized scheme, else None."""
    url = _text(record, SOURCE_URL)
    if url and url.startswith(tuple(settings.url_schemes)):
        return url
    return None


def has_valid_qr_url(record: Mapping[str, Any] | None,
                     settings: QRSettings = DEFAULT_SETTINGS) -> bool:
    return valid_qr_url(record, settings) is not None


def classify_path(path: str, settings: QRSettings = DEFAULT_SETTINGS) -> str:
    """Classify a qrPath value. The value itself is never rewritten."""
    if path.startswith(f"{settings.default_folder}/"):
        return "folder"
    if path.startswith(STORAGE_SCHEMES):
        return "storage"
    if path.startswith(WEB_SCHEMES):
        return "web"
    return "external"


def explain_qr_reference(record: Mapping[str, Any] | None,
                         settings: QRSettings = DEFAULT_SETTINGS) -> QRResolution:
    """Resolve a record's QR image and report which field won."""
    url = valid_qr_url(record, settings)
    if url:
        return QRResolution(url, SOURCE_URL)

    file_name = _text(record, SOURCE_FILE_NAME)
    if file_name:
        # Spaces are kept as-is; fetchers encode the path themselves.
        return QRResolution(settings.in_folder(file_name), SOURCE_FILE_NAME)

    path = _text(record, SOURCE_PATH)
    if path:
        return QRResolution(path, SOURCE_PATH, classify_path(path, settings))

    return QRResolution(settings.default_reference, SOURCE_DEFAULT)


def resolve_qr_reference(record: Mapping[str, Any] | None,
                         settings: QRSettings = DEFAULT_SETTINGS) -> str:
    """Map a client record to exactly one QR image reference. Never raises."""
    return explain_qr_reference(record, settings).reference


def resolve_all(clients: Iterable[tuple[str, Mapping[str, Any]]],
                settings: QRSettings = DEFAULT_SETTINGS) -> dict[str, str]:
    """Resolve every (id, record) pair. Order between records is irrelevant."""
    return {client_id: resolve_qr_reference(record, settings)
            for client_id, record in clients}


def filename_from_download_url(url: str | None,
                               settings: QRSettings = DEFAULT_SETTINGS) -> str | None:
    """Pull the decoded file name out of a storage download URL.

    Download URLs percent-encode the object path, so an image in the QR folder
    shows up as ``.../o/qr-codes%2F<name>?alt=media``.
    """
    if not isinstance(url, str) or not url:
        return None
    pattern = re.escape(settings.default_folder) + r"%2F([^?]+)"
    match = re.search(pattern, url)
    if not match:
        return None
    return unquote(match.group(1))
