"""Named field back-fills for the clients collection."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import datetime

from .backfill import (
    BackfillResult,
    FieldDefault,
    absent,
    apply_field_defaults,
    blank,
    constant,
    not_instance,
)

DEFAULT_PIC = "Stores to be contacted via phone prior to counts to confirm inventory."
DEFAULT_START_TIME = "8:00 AM"
DEFAULT_VERIFICATION = (
    "Audit trails will be provided, as requested, during the count, within reason "
    "(do not provide audit trails on the entire store.)"
)

INVENTORY_FLOW_SECTION = {
    "sectionName": "Inventory Flow",
    "content": "Inventory flow procedures and guidelines for this client.",
    "subsections": [
        {
            "sectionName": "Flow Process",
            "content": "Step-by-step inventory flow process.",
        },
        {
            "sectionName": "Quality Control",
            "content": "Quality control checkpoints during inventory flow.",
        },
    ],
}


@dataclass(frozen=True)
class Migration:
    name: str
    description: str
    fields: tuple[FieldDefault, ...]
    touch_updated_at: bool = True


def empty_text(*names: str) -> tuple[FieldDefault, ...]:
    """String fields that default to "" and keep any existing string, even empty."""
    return tuple(FieldDefault(n, constant(""), not_instance(n, str)) for n in names)


def _sections(record: dict) -> list:
    sections = record.get("sections")
    return list(sections) if isinstance(sections, list) else []


def _lacks_inventory_flow(record: dict) -> bool:
    return not any(isinstance(s, dict) and s.get("sectionName") == INVENTORY_FLOW_SECTION["sectionName"]
                   for s in _sections(record))


def _with_inventory_flow(record: dict) -> list:
    sections = _sections(record)
    if _lacks_inventory_flow(record):
        sections.append(copy.deepcopy(INVENTORY_FLOW_SECTION))
    return sections


def _inventory_types(record: dict) -> list:
    inventory_type = record.get("inventoryType")
    return [inventory_type] if inventory_type else []


MISSING_FIELDS = (
    FieldDefault("inventoryType", constant("scan")),
    FieldDefault("accountType", constant("Convenience")),
    FieldDefault("PIC", constant(DEFAULT_PIC)),
    FieldDefault("startTime", constant(DEFAULT_START_TIME)),
    FieldDefault("storeStartTime", constant(DEFAULT_START_TIME)),
    FieldDefault("verification", constant(DEFAULT_VERIFICATION)),
    FieldDefault("updatedAt", stamp=True),
    FieldDefault("inventoryTypes", _inventory_types, not_instance("inventoryTypes", list)),
    FieldDefault("scannerQRCode", constant(""), absent("scannerQRCode")),
)

MIGRATIONS: dict[str, Migration] = {m.name: m for m in (
    Migration("additional-notes", "Add empty additionalNotes", empty_text("additionalNotes")),
    Migration("alr", "Add empty ALR", empty_text("ALR")),
    Migration("departments", "Add empty Departments", empty_text("Departments")),
    Migration("inv-flow", "Add empty Inv_Flow", empty_text("Inv_Flow")),
    Migration(
        "inv-flow-section",
        "Add Inv_Flow and append the Inventory Flow section",
        empty_text("Inv_Flow") + (
            FieldDefault("sections", _with_inventory_flow, _lacks_inventory_flow),
        ),
    ),
    Migration("inventory-audit", "Add empty Inv_Proc and Audits", empty_text("Inv_Proc", "Audits")),
    Migration(
        "missing-fields",
        "Fill required account fields (type, PIC, times, verification, ...)",
        MISSING_FIELDS,
        touch_updated_at=False,
    ),
    Migration("noncount", "Add empty noncount", empty_text("noncount")),
    Migration(
        "qr-code-image",
        "Add empty scannerQRCodeImageUrl",
        (FieldDefault("scannerQRCodeImageUrl", constant("")),),
        touch_updated_at=False,
    ),
    Migration(
        "reports",
        "Add empty Prog_Rep, Finalize, Fin_Rep and Processing",
        empty_text("Prog_Rep", "Finalize", "Fin_Rep", "Processing"),
    ),
    Migration(
        "special-notes",
        "Add Has_Special_Notes=false and empty Special_Notes",
        (
            FieldDefault("Has_Special_Notes", constant(False), not_instance("Has_Special_Notes", bool)),
            FieldDefault("Special_Notes", constant(""), not_instance("Special_Notes", str)),
        ),
    ),
    Migration("team-instr", "Add empty Team-Instr", empty_text("Team-Instr")),
)}


async def run_migration(store, name: str, collection: str, *,
                        force: bool = False, dry_run: bool = False,
                        now: datetime | None = None) -> BackfillResult:
    """Run one catalogue migration. Raises KeyError for unknown names."""
    migration = MIGRATIONS[name]
    return await apply_field_defaults(
        store, collection, migration.fields,
        touch_updated_at=migration.touch_updated_at,
        force=force, dry_run=dry_run, now=now,
    )
