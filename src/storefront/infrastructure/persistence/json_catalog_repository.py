"""JSON-file-backed implementation of the catalog and settings repositories.

Stands in for the hosted document database on a single machine.  Product
documents keep the same field names the hosted store uses.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path

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


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class JsonCatalogRepository(CatalogRepository):

    def __init__(self, file_path: Path) -> None:
        super().__init__()
        self._file_path = file_path
        self._ensure_file()

    # --- CatalogRepository interface ------------------------------------------

    def list_all(self) -> list[CatalogProduct]:
        products = [product_from_document(doc["id"], doc) for doc in self._load_raw()]
        # Newest first, like the hosted query ordered by createdAt desc.
        epoch = datetime.min.replace(tzinfo=timezone.utc)
        products.sort(key=lambda p: p.created_at or epoch, reverse=True)
        return products

    def get_by_id(self, product_id: str) -> CatalogProduct | None:
        for doc in self._load_raw():
            if doc["id"] == product_id:
                return product_from_document(product_id, doc)
        return None

    def insert(self, draft: ProductDraft) -> CatalogProduct:
        now = _now_iso()
        doc = {
            "id": uuid.uuid4().hex[:20],
            **draft_to_document(draft),
            "createdAt": now,
            "updatedAt": now,
        }
        records = self._load_raw()
        records.append(doc)
        self._persist_raw(records)
        return product_from_document(doc["id"], doc)

    def update(self, product_id: str, draft: ProductDraft) -> CatalogProduct:
        return self._patch(product_id, draft_to_document(draft))

    def update_stock(self, product_id: str, stock: int) -> None:
        self._patch(product_id, {"stock": stock})

    def delete(self, product_id: str) -> None:
        records = self._load_raw()
        remaining = [doc for doc in records if doc["id"] != product_id]
        if len(remaining) != len(records):
            self._persist_raw(remaining)

    # --- Internal helpers -----------------------------------------------------

    def _patch(self, product_id: str, fields: dict) -> CatalogProduct:
        records = self._load_raw()
        for i, doc in enumerate(records):
            if doc["id"] == product_id:
                records[i] = {**doc, **fields, "updatedAt": _now_iso()}
                self._persist_raw(records)
                return product_from_document(product_id, records[i])
        raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise RemoteUnavailableError(f"Catalog could not be read: {exc}") from exc
        if not isinstance(records, list):
            raise RemoteUnavailableError("Catalog could not be read: not a list")
        return records

    def _persist_raw(self, records: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise RemoteUnavailableError(f"Catalog could not be written: {exc}") from exc
        self.publish()

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


class JsonSettingsRepository(SettingsRepository):
    """``settings.json`` holding ``{"storeHours": {"hours": {...}}}``."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def get_store_hours(self) -> StoreHours | None:
        doc = self._load().get("storeHours")
        if not doc or "hours" not in doc:
            return None
        try:
            return hours_from_document(doc["hours"])
        except (AttributeError, TypeError, ValueError, ValidationError) as exc:
            raise RemoteUnavailableError(f"Store hours could not be read: {exc}") from exc

    def save_store_hours(self, hours: StoreHours) -> None:
        data = self._load()
        data["storeHours"] = {"hours": hours_to_document(hours)}
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")

    def _load(self) -> dict:
        if not self._file_path.exists():
            return {}
        try:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise RemoteUnavailableError(f"Settings could not be read: {exc}") from exc
        return data if isinstance(data, dict) else {}
