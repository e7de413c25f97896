"""QR code diagnostics: audit, default image check, qrUrl repair."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from google.api_core.exceptions import NotFound

from .clients import display_name, is_scan_account
from .qr import (
    DEFAULT_SETTINGS,
    QRResolution,
    QRSettings,
    explain_qr_reference,
    filename_from_download_url,
    has_valid_qr_url,
)

log = logging.getLogger("clientdb.qr_audit")


@dataclass
class ClientQR:
    client_id: str
    name: str
    qr_url: str | None
    qr_file_name: str | None
    qr_path: str | None
    resolution: QRResolution


@dataclass
class QRAudit:
    configured: list[ClientQR] = field(default_factory=list)
    default: list[ClientQR] = field(default_factory=list)
    issues: list[tuple[ClientQR, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.configured) + len(self.default)


def _text(record: Mapping[str, Any], field_name: str) -> str | None:
    value = record.get(field_name)
    return value if isinstance(value, str) and value else None


def describe(client_id: str, record: Mapping[str, Any],
             settings: QRSettings = DEFAULT_SETTINGS) -> ClientQR:
    return ClientQR(
        client_id=client_id,
        name=display_name(client_id, record),
        qr_url=_text(record, "qrUrl"),
        qr_file_name=_text(record, "qrFileName"),
        qr_path=_text(record, "qrPath"),
        resolution=explain_qr_reference(record, settings),
    )


def audit_clients(clients: Iterable[tuple[str, Mapping[str, Any]]],
                  settings: QRSettings = DEFAULT_SETTINGS) -> QRAudit:
    """Split clients into configured / default and flag risky file names."""
    audit = QRAudit()
    for client_id, record in clients:
        entry = describe(client_id, record, settings)
        if entry.resolution.is_default:
            audit.default.append(entry)
            continue
        audit.configured.append(entry)
        if (not has_valid_qr_url(record, settings)
                and isinstance(entry.qr_file_name, str) and " " in entry.qr_file_name):
            audit.issues.append((entry, "qrFileName has spaces - may cause path issues"))
    return audit


@dataclass
class ClientInspection:
    client: ClientQR
    url_file_name: str | None = None

    @property
    def mismatch(self) -> bool:
        """qrUrl points at a different file than qrFileName names."""
        return (self.url_file_name is not None
                and self.url_file_name != self.client.qr_file_name)


def inspect_client(client_id: str, record: Mapping[str, Any],
                   settings: QRSettings = DEFAULT_SETTINGS) -> ClientInspection:
    entry = describe(client_id, record, settings)
    return ClientInspection(entry, filename_from_download_url(entry.qr_url, settings))


@dataclass
class DefaultQRCheck:
    path: str
    gs_address: str
    exists: bool = False
    url: str | None = None
    error: str | None = None
    folder_items: list[str] = field(default_factory=list)
    listing_error: str | None = None


async def check_default_qr(blobs, settings: QRSettings = DEFAULT_SETTINGS) -> DefaultQRCheck:
    """Look up the default image and list what the QR folder holds."""
    path = settings.default_reference
    check = DefaultQRCheck(path=path, gs_address=blobs.gs_address(path))
    try:
        check.url = await blobs.resolve_download_reference(path)
        check.exists = True
    except NotFound as e:
        log.warning("Default QR code missing at %s", check.gs_address)
        check.error = str(e)

    try:
        check.folder_items = await blobs.list_children(settings.default_folder)
    except Exception as e:
        log.error("Listing %s failed: %s", settings.default_folder, e)
        check.listing_error = str(e)
    return check


@dataclass
class SyncItem:
    client_id: str
    name: str
    qr_file_name: str
    storage_path: str
    current_url: str | None
    correct_url: str


@dataclass
class SyncPlan:
    scan_accounts: int = 0
    updates: list[SyncItem] = field(default_factory=list)
    missing: list[tuple[str, str, str]] = field(default_factory=list)  # (id, name, path)


async def plan_qr_url_sync(clients: Iterable[tuple[str, Mapping[str, Any]]], blobs,
                           settings: QRSettings = DEFAULT_SETTINGS) -> SyncPlan:
    """Find scan accounts whose qrUrl does not match their stored image."""
    plan = SyncPlan()
    for client_id, record in clients:
        if not is_scan_account(record):
            continue
        plan.scan_accounts += 1
        file_name = record.get("qrFileName")
        if not isinstance(file_name, str) or not file_name:
            continue

        name = display_name(client_id, record)
        storage_path = settings.in_folder(file_name)
        try:
            correct = await blobs.resolve_download_reference(storage_path)
        except NotFound:
            log.warning("%s (%s): %s does not exist in storage", name, client_id, storage_path)
            plan.missing.append((client_id, name, storage_path))
            continue

        current = _text(record, "qrUrl")
        if current != correct:
            plan.updates.append(SyncItem(client_id, name, file_name, storage_path, current, correct))
    return plan


async def apply_qr_url_sync(store, collection: str, items: Iterable[SyncItem],
                            now: datetime | None = None) -> int:
    """Write corrected qrUrl / qrPath values. Store errors abort the run."""
    stamp = now or datetime.now(timezone.utc)
    updated = 0
    for item in items:
        await store.update(collection, item.client_id, {
            "qrUrl": item.correct_url,
            "qrPath": item.storage_path,
            "updatedAt": stamp,
        })
        log.info("Updated qrUrl for %s (%s)", item.name, item.client_id)
        updated += 1
    return updated
