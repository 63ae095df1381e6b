"""Domain service: plaintext order summary and messaging deep link."""

from __future__ import annotations

from urllib.parse import quote

from storefront.domain.model.order import Order

# Characters encodeURIComponent leaves alone.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def compose_order_message(order: Order) -> str:
    lines = ["Hello, I would like to order:", ""]
    for item in order.items:
        lines.append(f"- {item.name} x{item.quantity} ({item.line_total})")
    lines.append("")
    lines.append(f"Subtotal: {order.subtotal}")
    if order.distance_km is not None:
        lines.append(f"Shipping: {order.shipping} ({order.distance_km:.1f} km)")
    else:
        lines.append(f"Shipping: {order.shipping}")
    lines.append(f"Total: {order.total}")
    lines.append("")
    lines.append(f"Name: {order.customer.name}")
    lines.append(f"Address: {order.customer.address}")
    lines.append(f"Phone: {order.customer.phone}")
    lines.append(f"Notes: {order.notes or '-'}")
    lines.append("")
    lines.append("Thank you")
    return "\n".join(lines)


def build_deep_link(base_url: str, recipient: str, message: str) -> str:
    """``<base>/<recipient>?text=<encoded message>``."""
    return f"{base_url.rstrip('/')}/{recipient}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"
