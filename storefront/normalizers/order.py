# storefront/normalizers/order.py
from typing import Any

from ..i18n.locale import NormalizationContext
from ..models import Order
from ..utils.coercion import to_entity_id, to_money_string, to_safe_string
from ..utils.envelope import unwrap_collection
from .cart import normalize_order_item
from .common import DEFAULT_CONTEXT, as_mapping, coalesce


def normalize_order(order: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> Order:
    o = as_mapping(order)
    total = coalesce(o.get("total"), o.get("total_amount"), o.get("subtotal"), "0")

    return Order(
        id=to_entity_id(o.get("id")),
        order_number=to_safe_string(coalesce(o.get("order_number"), o.get("order_no"))),
        status=to_safe_string(o.get("status")),
        items=[normalize_order_item(item, ctx) for item in unwrap_collection(o.get("items"))],
        subtotal=to_money_string(coalesce(o.get("subtotal"), total)),
        total=to_money_string(total),
        created_at=to_safe_string(o.get("created_at")),
    )
