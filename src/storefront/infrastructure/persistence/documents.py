"""Mapping between domain objects and stored JSON-like documents.

Shared by every adapter so a local file and a hosted document database
hold the same document shapes.
"""

from __future__ import annotations

from datetime import datetime

from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import Customer, Order, OrderLine, OrderStatus
from storefront.domain.model.product import CatalogProduct, ProductDraft
from storefront.domain.model.shipping import Coordinates, LocationFix
from storefront.domain.model.store_hours import DAYS, DayHours, StoreHours
from storefront.domain.model.value_objects import Money

# --- Catalog ------------------------------------------------------------------


def draft_to_document(draft: ProductDraft) -> dict:
    return {
        "name": draft.name,
        "price": draft.price.amount,
        "stock": draft.stock,
        "category": draft.category,
        "imageUrl": draft.image_url,
    }


def product_from_document(product_id: str, doc: dict) -> CatalogProduct:
    return CatalogProduct(
        id=product_id,
        name=doc.get("name", ""),
        price=Money(int(doc.get("price", 0))),
        stock=int(doc.get("stock", 0)),
        category=doc.get("category", ""),
        image_url=doc.get("imageUrl", ""),
        created_at=_parse_time(doc.get("createdAt")),
        updated_at=_parse_time(doc.get("updatedAt")),
    )


def _parse_time(value) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


# --- Store hours --------------------------------------------------------------


def hours_to_document(hours: StoreHours) -> dict:
    doc = {}
    for day in DAYS:
        h = hours.for_day(day)
        doc[day] = {"open": h.open, "close": h.close, "isOpen": h.is_open}
    return doc


def hours_from_document(doc: dict) -> StoreHours:
    return StoreHours(
        {
            day: DayHours(
                open=doc[day].get("open", "09:00"),
                close=doc[day].get("close", "17:00"),
                is_open=bool(doc[day].get("isOpen", True)),
            )
            for day in DAYS
            if day in doc
        }
    )


# --- Cart ---------------------------------------------------------------------


def cart_line_to_document(line: CartLine) -> dict:
    return {
        "id": line.id,
        "name": line.name,
        "price": line.price.amount,
        "image_url": line.image_url,
        "quantity": line.quantity,
        "selected": line.selected,
    }


def cart_line_from_document(doc: dict) -> CartLine:
    quantity = doc["quantity"]
    selected = doc.get("selected", True)
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValueError(f"Invalid cart quantity {quantity!r}")
    if not isinstance(selected, bool):
        raise ValueError(f"Invalid cart selection flag {selected!r}")
    return CartLine(
        id=doc["id"],
        name=doc["name"],
        price=Money(doc["price"]),
        quantity=quantity,
        selected=selected,
        image_url=doc.get("image_url", ""),
    )



# --- Location ----------------------------------------------------------------


def location_fix_to_document(fix: LocationFix) -> dict:
    return {
        "latitude": fix.coordinates.latitude,
        "longitude": fix.coordinates.longitude,
        "taken_at": fix.taken_at.isoformat(),
    }


def location_fix_from_document(doc: dict) -> LocationFix:
    taken_at = datetime.fromisoformat(doc["taken_at"])
    if taken_at.tzinfo is None:
        raise ValueError(f"Location fix time {doc['taken_at']!r} has no timezone")
    return LocationFix(
        coordinates=Coordinates(latitude=float(doc["latitude"]), longitude=float(doc["longitude"])),
        taken_at=taken_at,
    )


# --- Orders -------------------------------------------------------------------


def customer_to_document(customer: Customer) -> dict:
    return {"name": customer.name, "address": customer.address, "phone": customer.phone}


def customer_from_document(doc: dict) -> Customer:
    return Customer(name=doc["name"], address=doc["address"], phone=doc["phone"])


def order_to_document(order: Order) -> dict:
    return {
        "id": order.id,
        "items": [
            {
                "product_id": item.product_id,
                "name": item.name,
                "price": item.unit_price.amount,
                "quantity": item.quantity,
                "image_url": item.image_url,
            }
            for item in order.items
        ],
        "subtotal": order.subtotal.amount,
        "shipping": order.shipping.amount,
        "total": order.total.amount,
        "customer": customer_to_document(order.customer),
        "notes": order.notes,
        "status": order.status.value,
        "created_at": order.created_at.isoformat(),
        "distance_km": order.distance_km,
    }


def order_from_document(doc: dict) -> Order:
    return Order(
        id=doc["id"],
        items=tuple(
            OrderLine(
                product_id=i["product_id"],
                name=i["name"],
                unit_price=Money(i["price"]),
                quantity=i["quantity"],
                image_url=i.get("image_url", ""),
            )
            for i in doc["items"]
        ),
        subtotal=Money(doc["subtotal"]),
        shipping=Money(doc["shipping"]),
        total=Money(doc["total"]),
        customer=customer_from_document(doc["customer"]),
        notes=doc.get("notes", ""),
        status=OrderStatus(doc.get("status", OrderStatus.WAITING.value)),
        created_at=datetime.fromisoformat(doc["created_at"]),
        distance_km=doc.get("distance_km"),
    )
