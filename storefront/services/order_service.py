# storefront/services/order_service.py
import logging
from typing import List

from ..i18n.locale import LocaleState
from ..models import EntityId, Order
from ..normalizers import normalize_order
from ..normalizers.common import as_mapping
from ..utils.envelope import unwrap_collection, unwrap_keyed, unwrap_resource
from .api_client import ApiClient


class OrderService:
    """Checkout and order history"""

    def __init__(self, api: ApiClient, locale: LocaleState):
        self.api = api
        self.locale = locale
        self.logger = logging.getLogger(__name__)

    async def create_order(self, address_id: EntityId, payment_method: str = "cod") -> List[Order]:
        """Place the cart; the backend may answer with several orders"""
        ctx = self.locale.context()
        data = as_mapping(await self.api.post("/orders", {
            "address_id": address_id,
            "payment_method": payment_method,
        }))
        orders = [normalize_order(o, ctx) for o in unwrap_collection(data.get("orders"))]
        self.logger.info(f"Placed {len(orders)} order(s) for address {address_id}")
        return orders

    async def get_orders(self) -> List[Order]:
        ctx = self.locale.context()
        data = await self.api.get("/orders")
        return [normalize_order(o, ctx) for o in unwrap_collection(data)]

    async def get_order(self, order_id: EntityId) -> Order:
        data = await self.api.get(f"/orders/{order_id}")
        return normalize_order(unwrap_resource(data), self.locale.context())

    async def cancel_order(self, order_id: EntityId) -> Order:
        data = await self.api.post(f"/orders/{order_id}/cancel")
        return normalize_order(unwrap_keyed(data, "order"), self.locale.context())

    async def get_seller_orders(self) -> List[Order]:
        ctx = self.locale.context()
        data = await self.api.get("/seller/orders")
        return [normalize_order(o, ctx) for o in unwrap_collection(unwrap_resource(data))]

    async def update_order_status(self, order_id: EntityId, status: str) -> Order:
        data = await self.api.put(f"/seller/orders/{order_id}/status", {"status": status})
        return normalize_order(unwrap_keyed(data, "order"), self.locale.context())
