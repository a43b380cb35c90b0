import asyncio
import copy
from decimal import Decimal

import pytest

from storefront.i18n import LocaleState, NormalizationContext

ASSET_BASE = "https://shop.example.com"
SHIPPING = Decimal("5.00")


def make_cart_payload():
    """Server-side cart: two lines, totals include a flat shipping fee"""
    cart = {
        "items": [
            {
                "id": 1,
                "product": {"id": 10, "name": "Shoe", "price": "10.00", "in_stock": True},
                "variant": None,
                "quantity": 2,
                "unit_price": "10.00",
                "subtotal": "20.00",
            },
            {
                "id": 2,
                "product": {"id": 11, "name": "Sock", "price": "5.50"},
                "variant": {"id": 7, "size": "M", "stock": 3},
                "quantity": 1,
                "unit_price": "5.50",
                "subtotal": "5.50",
            },
        ],
    }
    _recompute(cart)
    return cart


def _recompute(cart):
    subtotal = sum(Decimal(item["subtotal"]) for item in cart["items"])
    cart["summary"] = {
        "items_count": sum(item["quantity"] for item in cart["items"]),
        "subtotal": f"{subtotal:.2f}",
        "total": f"{subtotal + SHIPPING:.2f}" if cart["items"] else "0.00",
    }


class FakeCartService:
    """
    In-memory CartService.

    `gate` (an asyncio.Event) holds every mutation until it is set, `error`
    is raised by the next mutation and `fetch_error` by the next fetch.
    """

    def __init__(self):
        self.server_cart = make_cart_payload()
        self.calls = []
        self.gate = None
        self.error = None
        self.fetch_error = None
        self.coupon_response = {"data": {"summary": {"subtotal": "25.50", "total": "20.50"}}}

    async def fetch_cart(self):
        self.calls.append(("fetch_cart",))
        if self.fetch_error is not None:
            error, self.fetch_error = self.fetch_error, None
            raise error
        return {"data": copy.deepcopy(self.server_cart)}

    async def add_item(self, product_id, variant_id=None, quantity=1):
        self.calls.append(("add_item", product_id, variant_id, quantity))
        await self._hold()
        self.server_cart["items"].append({
            "id": 3,
            "product": {"id": product_id, "name": "Hat", "price": "12.00"},
            "quantity": quantity,
            "unit_price": "12.00",
            "subtotal": f"{Decimal('12.00') * quantity:.2f}",
        })
        _recompute(self.server_cart)
        return await self.fetch_cart()

    async def update_item_quantity(self, item_id, quantity):
        self.calls.append(("update_item_quantity", item_id, quantity))
        await self._hold()
        for item in self.server_cart["items"]:
            if item["id"] == item_id:
                item["quantity"] = quantity
                item["subtotal"] = f"{Decimal(item['unit_price']) * quantity:.2f}"
        _recompute(self.server_cart)
        return await self.fetch_cart()

    async def remove_item(self, item_id):
        self.calls.append(("remove_item", item_id))
        await self._hold()
        self.server_cart["items"] = [i for i in self.server_cart["items"] if i["id"] != item_id]
        _recompute(self.server_cart)
        return await self.fetch_cart()

    async def apply_coupon(self, code):
        self.calls.append(("apply_coupon", code))
        await self._hold()
        return self.coupon_response

    async def clear_cart(self):
        self.calls.append(("clear_cart",))
        await self._hold()
        self.server_cart = {"items": []}
        _recompute(self.server_cart)

    async def _hold(self):
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            error, self.error = self.error, None
            raise error


@pytest.fixture
def cart_service():
    return FakeCartService()


@pytest.fixture
def locale_state():
    return LocaleState("en", asset_base_url=ASSET_BASE)


@pytest.fixture
def ctx():
    def _make(locale="en"):
        return NormalizationContext(locale=locale, asset_base_url=ASSET_BASE)
    return _make


async def _settle():
    for _ in range(3):
        await asyncio.sleep(0)


@pytest.fixture
def settle():
    """Awaitable that lets pending tasks run up to their next suspension point"""
    return _settle
