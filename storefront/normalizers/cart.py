# storefront/normalizers/cart.py
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Dict

from ..i18n.locale import NormalizationContext
from ..models import Cart, CartItem, OrderItem
from ..utils.coercion import to_entity_id, to_int, to_money, to_money_string
from ..utils.envelope import unwrap_collection
from ..utils.formatters import format_money
from .catalog import normalize_product, normalize_product_variant
from .common import DEFAULT_CONTEXT, as_mapping, coalesce, is_present


def line_item_fields(item: Any, ctx: NormalizationContext) -> Dict[str, Any]:
    """Fields shared by cart lines and order lines"""
    i = as_mapping(item)
    quantity = to_int(i.get("quantity"), 0, minimum=0)
    unit_price = to_money(coalesce(i.get("unit_price"), i.get("price"), "0"))
    subtotal = i.get("subtotal")

    return {
        "id": to_entity_id(i.get("id")),
        "product": normalize_product(i.get("product") or {}, ctx),
        "variant": normalize_product_variant(i["variant"], ctx) if is_present(i.get("variant")) else None,
        "quantity": quantity,
        "unit_price": format_money(unit_price),
        "subtotal": format_money(unit_price * quantity) if subtotal is None else to_money_string(subtotal),
    }


def normalize_cart_item(item: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> CartItem:
    return CartItem(**line_item_fields(item, ctx))


def normalize_order_item(item: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> OrderItem:
    """Order line; seller listings send `product_id`/`name`/`price` instead of a product"""
    i = as_mapping(item)
    if not is_present(i.get("product")):
        product = {
            key: value for key, value in (
                ("id", i.get("product_id")),
                ("name", i.get("name")),
                ("price", i.get("price")),
            ) if value is not None
        }
        i = {**i, "product": product}
    return OrderItem(**line_item_fields(i, ctx))


def normalize_cart(payload: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> Cart:
    """
    Cart with its totals.

    Totals come from `summary` when the backend nests them there, otherwise
    from the top level. Whatever is missing is derived from the items.
    items_count is always the sum of the line quantities.
    """
    c = as_mapping(payload)
    items = [normalize_cart_item(item, ctx) for item in unwrap_collection(c.get("items"))]
    summary = c.get("summary")
    if not isinstance(summary, Mapping):
        summary = c

    subtotal = coalesce(summary.get("subtotal"), summary.get("total"))
    if subtotal is None:
        subtotal = sum((Decimal(item.subtotal) for item in items), Decimal(0))
    total = coalesce(summary.get("total"), subtotal)

    return Cart(
        items=items,
        items_count=sum(item.quantity for item in items),
        subtotal=to_money_string(subtotal),
        total=to_money_string(total),
    )
