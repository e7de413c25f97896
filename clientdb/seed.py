"""Seed sample clients and instruction section templates."""

import logging
import re
from datetime import datetime, timezone

log = logging.getLogger("clientdb.seed")

SAMPLE_CLIENTS = [
    "RUSSELL S/M",
    "ALLEN'S SUPERMARKET",
    "DART COMMERCIAL SERVICES",
]

SECTION_TEMPLATES = [
    {
        "sectionName": "Pre-Inventory",
        "content": "General pre-inventory instructions for the team.",
        "subsections": [
            {
                "sectionName": "Area Mapping",
                "content": "Instructions on mapping each area of the store prior to inventory.",
            },
            {
                "sectionName": "Store Prep Instructions",
                "content": "Instructions for preparing the store, including clearing shelves "
                           "and labeling sections.",
            },
        ],
    },
]


def section_id(section_name: str) -> str:
    """Document ID for a section: every non-alphanumeric becomes '_'."""
    return re.sub(r"[^a-zA-Z0-9]", "_", section_name)


async def seed_clients(store, collection: str, names=None) -> tuple[int, int]:
    """Add sample clients, skipping names that already exist.

    Returns (added, skipped).
    """
    names = SAMPLE_CLIENTS if names is None else names
    existing = {record.get("name") for _, record in await store.list_all(collection)}

    added = 0
    skipped = 0
    for name in names:
        if name in existing:
            skipped += 1
            continue
        doc_id = await store.add(collection, {
            "name": name,
            "createdAt": datetime.now(timezone.utc),
            "active": True,
        })
        existing.add(name)
        log.info("Added client %s (ID: %s)", name, doc_id)
        added += 1
    return added, skipped


async def seed_sections(store, collection: str, sections=None) -> list[str]:
    """Upsert section templates. Returns the written document IDs."""
    sections = SECTION_TEMPLATES if sections is None else sections
    written = []
    for section in sections:
        doc_id = section_id(section["sectionName"])
        stamp = datetime.now(timezone.utc)
        await store.set(collection, doc_id, {
            "sectionName": section["sectionName"],
            "content": section["content"],
            "subsections": section.get("subsections", []),
            "createdAt": stamp,
            "updatedAt": stamp,
            "active": True,
        })
        log.info("Added section %s with ID %s", section["sectionName"], doc_id)
        written.append(doc_id)
    return written
