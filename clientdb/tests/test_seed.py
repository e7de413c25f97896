"""Tests for seeding sample data."""

import pytest

from clientdb.seed import SAMPLE_CLIENTS, section_id, seed_clients, seed_sections

from conftest import FakeStore


def test_section_id():
    assert section_id("Pre-Inventory") == "Pre_Inventory"
    assert section_id("Store Prep / Instructions") == "Store_Prep___Instructions"


@pytest.mark.asyncio
async def test_seed_clients_skips_existing():
    store = FakeStore({"clients": {"x": {"name": "RUSSELL S/M"}}})

    added, skipped = await seed_clients(store, "clients")

    assert (added, skipped) == (len(SAMPLE_CLIENTS) - 1, 1)
    names = sorted(r["name"] for r in store.collections["clients"].values())
    assert names == sorted(SAMPLE_CLIENTS)
    new = store.collections["clients"]["auto1"]
    assert new["active"] is True
    assert "createdAt" in new


@pytest.mark.asyncio
async def test_seed_clients_twice():
    store = FakeStore()
    await seed_clients(store, "clients", ["A", "B"])
    added, skipped = await seed_clients(store, "clients", ["A", "B", "C"])
    assert (added, skipped) == (1, 2)
    assert await store.count("clients") == 3


@pytest.mark.asyncio
async def test_seed_sections():
    store = FakeStore()
    written = await seed_sections(store, "sections")

    assert written == ["Pre_Inventory"]
    doc = store.collections["sections"]["Pre_Inventory"]
    assert doc["sectionName"] == "Pre-Inventory"
    assert doc["active"] is True
    assert [s["sectionName"] for s in doc["subsections"]] == ["Area Mapping", "Store Prep Instructions"]
