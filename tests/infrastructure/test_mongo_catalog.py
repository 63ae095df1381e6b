"""Tests for the MongoDB catalog backend against an in-memory collection."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from bson import ObjectId
from pymongo import DESCENDING
from pymongo.errors import ServerSelectionTimeoutError

from storefront.application.store_hours import load_store_hours
from storefront.domain.exceptions import EntityNotFoundError, RemoteUnavailableError
from storefront.domain.model.product import ProductDraft
from storefront.domain.model.store_hours import DayHours, StoreHours
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.mongo_catalog_repository import (
    MongoCatalogRepository,
    MongoSettingsRepository,
)

TOMAT = ProductDraft(name="Tomat", price=Money(7000), stock=12, category="Sayur")


class _ChangeStream:

    def __init__(self, events: list[dict]) -> None:
        self._events = events

    def __enter__(self):
        return iter(self._events)

    def __exit__(self, *exc) -> None:
        return None


class _Cursor:

    def __init__(self, docs: list[dict]) -> None:
        self._docs = docs

    def sort(self, key: str, direction: int) -> list[dict]:
        return sorted(self._docs, key=lambda d: d[key], reverse=direction == DESCENDING)


class FakeCollection:
    """Just enough of pymongo's Collection for the repositories."""

    def __init__(self) -> None:
        self.docs: dict = {}
        self.events: list[dict] = []
        self.down = False

    def find(self) -> _Cursor:
        self._check()
        return _Cursor([dict(d) for d in self.docs.values()])

    def find_one(self, query: dict) -> dict | None:
        self._check()
        doc = self.docs.get(query["_id"])
        return None if doc is None else dict(doc)

    def insert_one(self, doc: dict) -> SimpleNamespace:
        self._check()
        doc["_id"] = ObjectId()
        self.docs[doc["_id"]] = dict(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    def update_one(self, query: dict, update: dict) -> SimpleNamespace:
        self._check()
        doc = self.docs.get(query["_id"])
        if doc is None:
            return SimpleNamespace(matched_count=0)
        doc.update(update["$set"])
        return SimpleNamespace(matched_count=1)

    def delete_one(self, query: dict) -> None:
        self._check()
        self.docs.pop(query["_id"], None)

    def replace_one(self, query: dict, doc: dict, upsert: bool = False) -> None:
        self._check()
        self.docs[query["_id"]] = dict(doc)

    def watch(self) -> _ChangeStream:
        self._check()
        return _ChangeStream(self.events)

    def _check(self) -> None:
        if self.down:
            raise ServerSelectionTimeoutError("no servers available")


class TestMongoCatalogRepository:

    def test_insert_and_get(self):
        repo = MongoCatalogRepository(FakeCollection())
        created = repo.insert(TOMAT)
        assert ObjectId.is_valid(created.id)
        fetched = repo.get_by_id(created.id)
        assert fetched.name == "Tomat"
        assert fetched.price == Money(7000)

    def test_list_newest_first(self):
        collection = FakeCollection()
        for name, month in (("Old", 1), ("New", 2)):
            oid = ObjectId()
            collection.docs[oid] = {
                "_id": oid,
                "name": name,
                "price": 1000,
                "stock": 1,
                "category": "Sayur",
                "createdAt": datetime(2024, month, 1, tzinfo=timezone.utc),
            }
        assert [p.name for p in MongoCatalogRepository(collection).list_all()] == ["New", "Old"]

    def test_malformed_id_is_not_found(self):
        repo = MongoCatalogRepository(FakeCollection())
        assert repo.get_by_id("not-an-object-id") is None
        with pytest.raises(EntityNotFoundError):
            repo.update_stock("not-an-object-id", 1)

    def test_update_unknown_id(self):
        repo = MongoCatalogRepository(FakeCollection())
        with pytest.raises(EntityNotFoundError):
            repo.update_stock(str(ObjectId()), 1)

    def test_update_keeps_other_fields(self):
        repo = MongoCatalogRepository(FakeCollection())
        created = repo.insert(TOMAT)
        updated = repo.update(created.id, ProductDraft("Tomat Merah", Money(8000), 3, "Sayur"))
        assert updated.name == "Tomat Merah"
        assert updated.created_at == created.created_at

    def test_writes_publish_snapshots(self):
        repo = MongoCatalogRepository(FakeCollection())
        seen = []
        repo.subscribe(lambda products: seen.append(len(products)))
        created = repo.insert(TOMAT)
        repo.update_stock(created.id, 2)
        repo.delete(created.id)
        assert seen == [1, 1, 0]

    def test_server_down_is_unavailable(self):
        collection = FakeCollection()
        collection.down = True
        with pytest.raises(RemoteUnavailableError):
            MongoCatalogRepository(collection).list_all()

    def test_watch_publishes_per_change(self):
        collection = FakeCollection()
        collection.events = [{"operationType": "insert"}, {"operationType": "update"}]
        repo = MongoCatalogRepository(collection)
        seen = []
        repo.subscribe(seen.append)
        repo.watch()
        assert len(seen) == 2


class TestMongoSettingsRepository:

    def test_round_trip(self):
        repo = MongoSettingsRepository(FakeCollection())
        assert repo.get_store_hours() is None
        hours = StoreHours.default().with_day("sunday", DayHours(is_open=False))
        repo.save_store_hours(hours)
        assert repo.get_store_hours() == hours

    def test_server_down_is_unavailable(self):
        collection = FakeCollection()
        collection.down = True
        with pytest.raises(RemoteUnavailableError):
            MongoSettingsRepository(collection).get_store_hours()

    def test_malformed_hours_fall_back_to_default(self):
        collection = FakeCollection()
        collection.docs["storeHours"] = {"_id": "storeHours", "hours": {"monday": "garbage"}}
        repo = MongoSettingsRepository(collection)
        with pytest.raises(RemoteUnavailableError, match="malformed"):
            repo.get_store_hours()
        assert load_store_hours(repo) == StoreHours.default()
