"""Tests for the generic field back-fill."""

from datetime import datetime, timezone

import pytest
from google.api_core.exceptions import NotFound

from clientdb.backfill import (
    FieldDefault,
    absent,
    apply_field_defaults,
    blank,
    constant,
    not_instance,
    pending_updates,
)

from conftest import FakeStore

NOW = datetime(2026, 1, 15, tzinfo=timezone.utc)


def test_predicates():
    assert blank("x")({}) and blank("x")({"x": ""}) and blank("x")({"x": None})
    assert not blank("x")({"x": "v"})
    assert absent("x")({}) and not absent("x")({"x": None})
    assert not_instance("x", str)({"x": 1}) and not not_instance("x", str)({"x": ""})


def test_pending_updates_only_missing():
    defaults = [FieldDefault("a", constant("A")), FieldDefault("b", constant("B"))]
    assert pending_updates({"a": "set"}, defaults) == {"b": "B"}
    assert pending_updates({"a": "set"}, defaults, force=True) == {"a": "A", "b": "B"}


def test_produce_sees_record():
    fd = FieldDefault("label", lambda rec: rec["name"].upper())
    assert pending_updates({"name": "shop"}, [fd]) == {"label": "SHOP"}


@pytest.mark.asyncio
async def test_fills_missing_fields_and_stamps():
    store = FakeStore({"clients": {"1": {"name": "A"}, "2": {"name": "B", "ALR": "x"}}})
    defaults = [FieldDefault("ALR", constant(""), not_instance("ALR", str))]

    result = await apply_field_defaults(store, "clients", defaults, now=NOW)

    assert result.scanned == 2
    assert result.updated == 1
    assert result.skipped == 1
    assert result.updated_ids == ["1"]
    assert store.collections["clients"]["1"] == {"name": "A", "ALR": "", "updatedAt": NOW}
    assert store.collections["clients"]["2"] == {"name": "B", "ALR": "x"}


@pytest.mark.asyncio
async def test_second_run_is_a_no_op():
    store = FakeStore({"clients": {"1": {"name": "A"}}})
    defaults = [FieldDefault("noncount", constant(""), not_instance("noncount", str))]

    await apply_field_defaults(store, "clients", defaults, now=NOW)
    again = await apply_field_defaults(store, "clients", defaults, now=NOW)

    assert again.updated == 0
    assert again.skipped == 1
    assert len(store.updates) == 1


@pytest.mark.asyncio
async def test_force_overwrites():
    store = FakeStore({"clients": {"1": {"ALR": "keep?"}}})
    defaults = [FieldDefault("ALR", constant(""))]

    result = await apply_field_defaults(store, "clients", defaults, force=True,
                                        touch_updated_at=False)

    assert result.updated == 1
    assert store.collections["clients"]["1"] == {"ALR": ""}


@pytest.mark.asyncio
async def test_dry_run_writes_nothing():
    store = FakeStore({"clients": {"1": {}, "2": {}}})
    result = await apply_field_defaults(store, "clients", [FieldDefault("x", constant(1))], dry_run=True)

    assert result.updated == 2
    assert store.updates == []
    assert store.collections["clients"]["1"] == {}


@pytest.mark.asyncio
async def test_empty_collection():
    result = await apply_field_defaults(FakeStore(), "clients", [FieldDefault("x", constant(1))])
    assert (result.scanned, result.updated, result.skipped) == (0, 0, 0)


@pytest.mark.asyncio
async def test_store_failure_propagates():
    class BrokenStore(FakeStore):
        async def update(self, collection, doc_id, fields):
            raise NotFound("gone")

    store = BrokenStore({"clients": {"1": {}}})
    with pytest.raises(NotFound):
        await apply_field_defaults(store, "clients", [FieldDefault("x", constant(1))])


def test_stamped_field_uses_run_time():
    defaults = [FieldDefault("updatedAt", stamp=True), FieldDefault("a", constant("A"))]
    assert pending_updates({}, defaults, now=NOW) == {"updatedAt": NOW, "a": "A"}
    assert pending_updates({"updatedAt": "old", "a": "x"}, defaults, now=NOW) == {}


@pytest.mark.asyncio
async def test_stamped_field_without_touch():
    store = FakeStore({"clients": {"1": {"name": "A"}}})
    defaults = [FieldDefault("updatedAt", stamp=True)]

    await apply_field_defaults(store, "clients", defaults, touch_updated_at=False, now=NOW)

    assert store.collections["clients"]["1"] == {"name": "A", "updatedAt": NOW}
