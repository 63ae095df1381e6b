"""MongoDB-backed implementation of the catalog and settings repositories.

Used when ``STOREFRONT_MONGO_URL`` is set.  Products live in the
``products`` collection, opening hours in ``settings`` under the
``storeHours`` document.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from storefront.domain.exceptions import (
    EntityNotFoundError,
    RemoteUnavailableError,
    ValidationError,
)
from storefront.domain.model.product import CatalogProduct, ProductDraft
from storefront.domain.model.store_hours import StoreHours
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.repository.settings_repository import SettingsRepository
from storefront.infrastructure.persistence.documents import (
    draft_to_document,
    hours_from_document,
    hours_to_document,
    product_from_document,
)

logger = structlog.get_logger(__name__)


def _oid(product_id: str) -> ObjectId | None:
    try:
        return ObjectId(product_id)
    except (InvalidId, TypeError):
        return None


class MongoCatalogRepository(CatalogRepository):

    def __init__(self, collection: Collection) -> None:
        super().__init__()
        self._collection = collection

    # --- CatalogRepository interface ------------------------------------------

    def list_all(self) -> list[CatalogProduct]:
        try:
            docs = list(self._collection.find().sort("createdAt", DESCENDING))
        except PyMongoError as exc:
            raise RemoteUnavailableError(f"Catalog could not be read: {exc}") from exc
        return [product_from_document(str(doc["_id"]), doc) for doc in docs]

    def get_by_id(self, product_id: str) -> CatalogProduct | None:
        oid = _oid(product_id)
        if oid is None:
            return None
        try:
            doc = self._collection.find_one({"_id": oid})
        except PyMongoError as exc:
            raise RemoteUnavailableError(f"Catalog could not be read: {exc}") from exc
        return None if doc is None else product_from_document(product_id, doc)

    def insert(self, draft: ProductDraft) -> CatalogProduct:
        now = datetime.now(timezone.utc)
        doc = {**draft_to_document(draft), "createdAt": now, "updatedAt": now}
        try:
            result = self._collection.insert_one(doc)
        except PyMongoError as exc:
            raise RemoteUnavailableError(f"Product could not be added: {exc}") from exc
        self.publish()
        return product_from_document(str(result.inserted_id), doc)

    def update(self, product_id: str, draft: ProductDraft) -> CatalogProduct:
        self._set(product_id, draft_to_document(draft))
        product = self.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        return product

    def update_stock(self, product_id: str, stock: int) -> None:
        self._set(product_id, {"stock": stock})

    def delete(self, product_id: str) -> None:
        oid = _oid(product_id)
        if oid is None:
            return
        try:
            self._collection.delete_one({"_id": oid})
        except PyMongoError as exc:
            raise RemoteUnavailableError(f"Product could not be deleted: {exc}") from exc
        self.publish()

    # --- Realtime push --------------------------------------------------------

    def watch(self) -> None:
        """Republish a snapshot for every change-stream event (blocking).

        Change streams need a replica set; a plain standalone server raises
        and the error is reported as the catalog being unavailable.
        """
        try:
            with self._collection.watch() as stream:
                for change in stream:
                    logger.debug("catalog_changed", operation=change.get("operationType"))
                    self.publish()
        except PyMongoError as exc:
            raise RemoteUnavailableError(f"Catalog change stream failed: {exc}") from exc

    # --- Internal helpers -----------------------------------------------------

    def _set(self, product_id: str, fields: dict) -> None:
        oid = _oid(product_id)
        if oid is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        try:
            result = self._collection.update_one(
                {"_id": oid},
                {"$set": {**fields, "updatedAt": datetime.now(timezone.utc)}},
            )
        except PyMongoError as exc:
            raise RemoteUnavailableError(f"Product could not be updated: {exc}") from exc
        if result.matched_count == 0:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
        self.publish()


class MongoSettingsRepository(SettingsRepository):

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def get_store_hours(self) -> StoreHours | None:
        try:
            doc = self._collection.find_one({"_id": "storeHours"})
        except PyMongoError as exc:
            raise RemoteUnavailableError(f"Store hours could not be read: {exc}") from exc
        if not doc or "hours" not in doc:
            return None
        try:
            return hours_from_document(doc["hours"])
        except (AttributeError, TypeError, ValueError, ValidationError) as exc:
            raise RemoteUnavailableError(f"Stored store hours are malformed: {exc}") from exc

    def save_store_hours(self, hours: StoreHours) -> None:
        try:
            self._collection.replace_one(
                {"_id": "storeHours"},
                {"_id": "storeHours", "hours": hours_to_document(hours)},
                upsert=True,
            )
        except PyMongoError as exc:
            raise RemoteUnavailableError(f"Store hours could not be saved: {exc}") from exc
