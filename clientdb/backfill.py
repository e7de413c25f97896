"""Apply field defaults across a collection.

Each old one-off "add field X to every client" script is expressed as a list
of FieldDefault entries run through apply_field_defaults().
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .clients import display_name

log = logging.getLogger("clientdb.backfill")

Predicate = Callable[[dict], bool]


def blank(name: str) -> Predicate:
    """Field is missing, None, or otherwise falsy ("" / [] / 0 / False)."""
    return lambda record: not record.get(name)


def absent(name: str) -> Predicate:
    """Field key is not present at all."""
    return lambda record: name not in record


def not_instance(name: str, kind: type) -> Predicate:
    """Field is missing or holds a value of the wrong type."""
    return lambda record: not isinstance(record.get(name), kind)


def constant(value: Any) -> Callable[[dict], Any]:
    return lambda record: value


@dataclass(frozen=True)
class FieldDefault:
    field: str
    produce: Callable[[dict], Any] | None = None
    needs_default: Predicate | None = None
    # Filled with the run timestamp instead of a produced value
    stamp: bool = False

    def missing_from(self, record: dict) -> bool:
        check = self.needs_default or blank(self.field)
        return check(record)


@dataclass
class BackfillResult:
    scanned: int = 0
    updated: int = 0
    skipped: int = 0
    updated_ids: list[str] = field(default_factory=list)


def pending_updates(record: dict, defaults: Sequence[FieldDefault],
                    force: bool = False,
                    now: datetime | None = None) -> dict[str, Any]:
    """Fields this record needs, with their default values."""
    updates = {}
    for fd in defaults:
        if force or fd.missing_from(record):
            if fd.stamp:
                updates[fd.field] = now or datetime.now(timezone.utc)
            else:
                updates[fd.field] = fd.produce(record)
    return updates


async def apply_field_defaults(store, collection: str,
                               defaults: Sequence[FieldDefault], *,
                               touch_updated_at: bool = True,
                               force: bool = False,
                               dry_run: bool = False,
                               now: datetime | None = None) -> BackfillResult:
    """Write default values for missing fields into every document.

    Store errors propagate; a half-finished run is safe to repeat since
    already-filled documents are skipped.
    """
    result = BackfillResult()
    docs = await store.list_all(collection)
    if not docs:
        log.info("No documents found in %s", collection)
        return result

    log.info("Found %d documents in %s", len(docs), collection)
    stamp = now or datetime.now(timezone.utc)

    for doc_id, record in docs:
        result.scanned += 1
        label = display_name(doc_id, record)
        updates = pending_updates(record, defaults, force=force, now=stamp)
        if not updates:
            result.skipped += 1
            log.debug("Skipping %s — fields already present", label)
            continue

        if touch_updated_at:
            updates["updatedAt"] = stamp

        if dry_run:
            log.info("[dry-run] Would update %s (%s): %s", label, doc_id, ", ".join(updates))
        else:
            await store.update(collection, doc_id, updates)
            log.info("Updated %s (%s): %s", label, doc_id, ", ".join(updates))
        result.updated += 1
        result.updated_ids.append(doc_id)

    return result
