# storefront/services/cart_service.py
from typing import Any, Optional, Protocol

from ..exceptions import ApiError, MutationRejectedError
from ..models import EntityId
from .api_client import ApiClient


class CartService(Protocol):
    """Cart-mutation surface the cart controller depends on.

    Every method except clear_cart returns a raw cart payload, possibly
    wrapped in a `data` envelope.
    """

    async def fetch_cart(self) -> Any: ...

    async def add_item(self, product_id: EntityId, variant_id: Optional[EntityId] = None,
                       quantity: int = 1) -> Any: ...

    async def update_item_quantity(self, item_id: EntityId, quantity: int) -> Any: ...

    async def remove_item(self, item_id: EntityId) -> Any: ...

    async def apply_coupon(self, code: str) -> Any: ...

    async def clear_cart(self) -> None: ...


class HttpCartService:
    """CartService over the REST API; mutations re-read the cart afterwards"""

    def __init__(self, api: ApiClient):
        self.api = api

    async def fetch_cart(self) -> Any:
        return await self.api.get("/cart")

    async def add_item(self, product_id: EntityId, variant_id: Optional[EntityId] = None,
                       quantity: int = 1) -> Any:
        await self._mutate(self.api.post("/cart", {
            "product_id": product_id,
            "variant_id": variant_id,
            "quantity": quantity,
        }))
        return await self.fetch_cart()

    async def update_item_quantity(self, item_id: EntityId, quantity: int) -> Any:
        await self._mutate(self.api.put(f"/cart/{item_id}", {"quantity": quantity}))
        return await self.fetch_cart()

    async def remove_item(self, item_id: EntityId) -> Any:
        await self._mutate(self.api.delete(f"/cart/{item_id}"))
        return await self.fetch_cart()

    async def apply_coupon(self, code: str) -> Any:
        """Returns the coupon response; it carries the discounted subtotal/total"""
        return await self._mutate(self.api.post("/cart/coupon", {"code": code}))

    async def clear_cart(self) -> None:
        await self._mutate(self.api.delete("/cart"))

    @staticmethod
    async def _mutate(call) -> Any:
        try:
            return await call
        except MutationRejectedError:
            raise
        except ApiError as e:
            raise MutationRejectedError(e.message, status=e.status, payload=e.payload) from e
