# storefront/controllers/cart_controller.py
"""
Live cart state with optimistic mutations.

Quantity changes and removals are applied to the local cart before the
request goes out, then reconciled with the backend: on success the server's
cart replaces the local one wholesale, on failure the cart is re-fetched from
scratch and the error is re-raised to the caller.

Each cart item runs its own small state machine::

    IDLE --submit--> PENDING --confirm--> CONFIRMED --settle--> IDLE
                             --fail-----> ROLLED_BACK --settle--> IDLE

Only one mutation per item may be PENDING; a second one is rejected with
MutationInProgressError instead of racing the first.
"""
import logging
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from ..exceptions import CartItemNotFoundError, CartStateError, MutationInProgressError
from ..i18n.locale import LocaleState
from ..models import EMPTY_CART, Cart, CartItem, EntityId
from ..normalizers import normalize_cart
from ..normalizers.common import coalesce
from ..services.cart_service import CartService
from ..utils.coercion import to_money, to_money_string
from ..utils.envelope import unwrap_resource
from ..utils.formatters import format_money


class ItemState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


class ItemEvent(str, Enum):
    SUBMIT = "submit"
    CONFIRM = "confirm"
    FAIL = "fail"
    SETTLE = "settle"


TRANSITIONS = {
    (ItemState.IDLE, ItemEvent.SUBMIT): ItemState.PENDING,
    (ItemState.PENDING, ItemEvent.CONFIRM): ItemState.CONFIRMED,
    (ItemState.PENDING, ItemEvent.FAIL): ItemState.ROLLED_BACK,
    (ItemState.CONFIRMED, ItemEvent.SETTLE): ItemState.IDLE,
    (ItemState.ROLLED_BACK, ItemEvent.SETTLE): ItemState.IDLE,
}


def next_item_state(item_id: EntityId, state: ItemState, event: ItemEvent) -> ItemState:
    """Reducer for the per-item state machine"""
    try:
        return TRANSITIONS[(state, event)]
    except KeyError:
        if event is ItemEvent.SUBMIT:
            raise MutationInProgressError(item_id) from None
        raise CartStateError(f"Illegal transition {state.value} --{event.value}--> for cart item {item_id}") from None


# ============ Local cart arithmetic ============


def recalculate(cart: Cart, items: List[CartItem]) -> Cart:
    """New cart with `items` and totals recomputed from them"""
    subtotal = sum((to_money(item.unit_price) * item.quantity for item in items), Decimal(0))
    subtotal_text = format_money(subtotal)
    return cart.model_copy(update={
        "items": items,
        "items_count": sum(item.quantity for item in items),
        "subtotal": subtotal_text,
        "total": subtotal_text,
    })


def with_item_quantity(cart: Cart, item_id: EntityId, quantity: int) -> Cart:
    items = [
        item.model_copy(update={
            "quantity": quantity,
            "subtotal": format_money(to_money(item.unit_price) * quantity),
        }) if item.id == item_id else item
        for item in cart.items
    ]
    return recalculate(cart, items)


def without_item(cart: Cart, item_id: EntityId) -> Cart:
    return recalculate(cart, [item for item in cart.items if item.id != item_id])


def merge_totals(cart: Cart, payload: Any) -> Cart:
    """Take subtotal/total from a coupon response, keep the items"""
    data = unwrap_resource(payload)
    if not isinstance(data, Mapping):
        return cart
    summary = data.get("summary")
    if not isinstance(summary, Mapping):
        summary = data
    return cart.model_copy(update={
        "subtotal": to_money_string(coalesce(summary.get("subtotal"), cart.subtotal)),
        "total": to_money_string(coalesce(summary.get("total"), cart.total)),
    })


class CartStateController:
    """Owns the cart shown to the user and mediates every change to it"""

    def __init__(self, service: CartService, locale: Optional[LocaleState] = None):
        self.service = service
        self.locale = locale or LocaleState()
        self.logger = logging.getLogger(__name__)
        self._cart: Cart = EMPTY_CART
        self._confirmed: Cart = EMPTY_CART
        self._item_states: Dict[EntityId, ItemState] = {}
        self._listeners: List[Callable[[Cart], None]] = []

    @property
    def cart(self) -> Cart:
        return self._cart

    def item_state(self, item_id: EntityId) -> ItemState:
        return self._item_states.get(item_id, ItemState.IDLE)

    def is_mutation_allowed(self, item_id: EntityId) -> bool:
        """False while a change to this item is waiting for the backend"""
        return self.item_state(item_id) is ItemState.IDLE

    def subscribe(self, listener: Callable[[Cart], None]) -> Callable[[], None]:
        """Call `listener` with every new cart; returns an unsubscribe callable"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ============ Operations ============

    async def refresh(self) -> Cart:
        """Replace the cart with the backend's"""
        payload = await self.service.fetch_cart()
        cart = self._normalize(payload)
        self._replace(cart, confirmed=True)
        return cart

    async def add_item(self, product_id: EntityId, variant_id: Optional[EntityId] = None,
                       quantity: int = 1) -> Cart:
        """Add a product; waits for the backend since there is nothing local to show yet"""
        try:
            payload = await self.service.add_item(product_id, variant_id, quantity)
        except Exception as e:
            self.logger.error(f"Failed to add product {product_id} to cart: {e}")
            await self._resync()
            raise
        cart = self._normalize(payload)
        self._replace(cart, confirmed=True)
        return cart

    async def change_quantity(self, item_id: EntityId, delta: int) -> Cart:
        """Optimistically change an item's quantity; dropping below 1 removes it"""
        self._require_idle(item_id)
        item = self._require_item(item_id)
        quantity = item.quantity + delta
        if quantity < 1:
            return await self.remove_item(item_id)

        self._dispatch(item_id, ItemEvent.SUBMIT)
        self._replace(with_item_quantity(self._cart, item_id, quantity))
        return await self._confirm(item_id, lambda: self.service.update_item_quantity(item_id, quantity))

    async def remove_item(self, item_id: EntityId) -> Cart:
        """Optimistically remove an item"""
        self._require_idle(item_id)
        self._require_item(item_id)
        self._dispatch(item_id, ItemEvent.SUBMIT)
        self._replace(without_item(self._cart, item_id))
        return await self._confirm(item_id, lambda: self.service.remove_item(item_id))

    async def apply_coupon(self, code: str) -> Cart:
        """Apply a coupon code; totals need the backend so this is not optimistic"""
        try:
            payload = await self.service.apply_coupon(code)
        except Exception as e:
            self.logger.error(f"Coupon {code!r} was not applied: {e}")
            raise
        cart = merge_totals(self._cart, payload)
        self._replace(cart, confirmed=not self._item_states)
        return cart

    async def clear(self) -> Cart:
        try:
            await self.service.clear_cart()
        except Exception as e:
            self.logger.error(f"Failed to clear cart: {e}")
            await self._resync()
            raise
        self._replace(EMPTY_CART, confirmed=True)
        return self._cart

    # ============ Internals ============

    async def _confirm(self, item_id: EntityId, call: Callable[[], Awaitable[Any]]) -> Cart:
        try:
            payload = await call()
        except Exception as e:
            self._dispatch(item_id, ItemEvent.FAIL)
            self.logger.warning(f"Mutation of cart item {item_id} failed, resyncing: {e}")
            try:
                await self._resync()
            finally:
                self._dispatch(item_id, ItemEvent.SETTLE)
            raise

        cart = self._normalize(payload)
        self._dispatch(item_id, ItemEvent.CONFIRM)
        self._replace(cart, confirmed=True)
        self._dispatch(item_id, ItemEvent.SETTLE)
        return cart

    async def _resync(self):
        """Full re-fetch; falls back to the last confirmed cart if that fails too"""
        try:
            await self.refresh()
        except Exception as e:
            self.logger.error(f"Cart resync failed, restoring last confirmed cart: {e}")
            self._replace(self._confirmed)

    def _dispatch(self, item_id: EntityId, event: ItemEvent):
        state = next_item_state(item_id, self.item_state(item_id), event)
        if state is ItemState.IDLE:
            self._item_states.pop(item_id, None)
        else:
            self._item_states[item_id] = state

    def _require_idle(self, item_id: EntityId):
        # a pending removal has already dropped the item from the local cart
        if not self.is_mutation_allowed(item_id):
            raise MutationInProgressError(item_id)

    def _require_item(self, item_id: EntityId) -> CartItem:
        item = self._cart.get_item(item_id)
        if item is None:
            raise CartItemNotFoundError(item_id)
        return item

    def _normalize(self, payload: Any) -> Cart:
        return normalize_cart(unwrap_resource(payload), self.locale.context())

    def _replace(self, cart: Cart, confirmed: bool = False):
        self._cart = cart
        if confirmed:
            self._confirmed = cart
        for listener in list(self._listeners):
            try:
                listener(cart)
            except Exception:
                self.logger.exception("Cart listener failed")
