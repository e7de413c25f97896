"""Client record helpers shared by the maintenance scripts."""

from collections.abc import Iterable, Mapping
from typing import Any

NOT_SPECIFIED = "Not specified"


def display_name(client_id: str, record: Mapping[str, Any]) -> str:
    return record.get("name") or client_id


def is_scan_account(record: Mapping[str, Any]) -> bool:
    """True for clients counted with scanners (the ones that need a QR image)."""
    if record.get("inventoryType") == "scan":
        return True
    types = record.get("inventoryTypes")
    return isinstance(types, list) and "scan" in types


def find_by_name(clients: Iterable[tuple[str, Mapping[str, Any]]],
                 needle: str) -> tuple[str, Mapping[str, Any]] | None:
    """First client whose name contains needle, case-insensitive."""
    needle = needle.lower()
    for client_id, record in clients:
        name = record.get("name")
        if isinstance(name, str) and needle in name.lower():
            return client_id, record
    return None


def pdf_summary(record: Mapping[str, Any]) -> dict[str, str]:
    """The header values the instructions PDF shows for a client."""
    return {
        "Inventory": record.get("inventoryType") or record.get("accountType") or NOT_SPECIFIED,
        "PIC": record.get("PIC") or NOT_SPECIFIED,
        "Store Start Time": record.get("startTime") or record.get("storeStartTime") or NOT_SPECIFIED,
        "Verification": record.get("verification") or NOT_SPECIFIED,
    }
