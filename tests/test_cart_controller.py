import asyncio
import logging

import pytest

from storefront.controllers import CartStateController, ItemEvent, ItemState
from storefront.controllers.cart_controller import next_item_state
from storefront.exceptions import (
    CartItemNotFoundError,
    CartStateError,
    MutationInProgressError,
    MutationRejectedError,
    TransportError,
)
from storefront.models import EMPTY_CART
from storefront.normalizers import normalize_cart

from conftest import make_cart_payload


@pytest.fixture
def controller(cart_service, locale_state):
    return CartStateController(cart_service, locale_state)


@pytest.mark.asyncio
async def test_refresh_loads_server_cart(controller, locale_state):
    cart = await controller.refresh()

    assert cart == normalize_cart(make_cart_payload(), locale_state.context())
    assert controller.cart is cart
    assert cart.total == "30.50"


@pytest.mark.asyncio
async def test_quantity_change_is_applied_before_the_backend_answers(controller, cart_service, settle):
    await controller.refresh()
    cart_service.gate = asyncio.Event()

    task = asyncio.create_task(controller.change_quantity(1, 1))
    await settle()

    item = controller.cart.get_item(1)
    assert item.quantity == 3
    assert item.subtotal == "30.00"
    assert controller.cart.items_count == 4
    assert controller.cart.subtotal == "35.50"
    assert controller.item_state(1) is ItemState.PENDING

    cart_service.gate.set()
    cart = await task

    assert controller.item_state(1) is ItemState.IDLE
    assert cart.get_item(1).quantity == 3


@pytest.mark.asyncio
async def test_server_cart_replaces_optimistic_totals(controller, cart_service):
    await controller.refresh()

    cart = await controller.change_quantity(1, 1)

    # the backend adds shipping, which the local estimate knows nothing about
    assert cart.subtotal == "35.50"
    assert cart.total == "40.50"
    assert controller.cart == cart
    assert ("update_item_quantity", 1, 3) in cart_service.calls


@pytest.mark.asyncio
async def test_second_mutation_on_pending_item_is_rejected(controller, cart_service, settle):
    await controller.refresh()
    cart_service.gate = asyncio.Event()

    task = asyncio.create_task(controller.change_quantity(1, 1))
    await settle()

    assert not controller.is_mutation_allowed(1)
    assert controller.is_mutation_allowed(2)
    with pytest.raises(MutationInProgressError):
        await controller.change_quantity(1, 1)
    with pytest.raises(MutationInProgressError):
        await controller.remove_item(1)
    assert controller.cart.get_item(1).quantity == 3

    # other items stay mutable
    other = asyncio.create_task(controller.change_quantity(2, 1))
    await settle()
    assert controller.item_state(2) is ItemState.PENDING

    cart_service.gate.set()
    await task
    cart = await other

    assert cart.get_item(1).quantity == 3
    assert cart.get_item(2).quantity == 2
    assert controller.is_mutation_allowed(1)
    assert [c for c in cart_service.calls if c[0] == "update_item_quantity"] == [
        ("update_item_quantity", 1, 3),
        ("update_item_quantity", 2, 2),
    ]


@pytest.mark.asyncio
async def test_rejected_mutation_rolls_back_to_fresh_server_cart(controller, cart_service, locale_state):
    before = await controller.refresh()
    cart_service.error = MutationRejectedError("Only 2 left in stock", status=422)

    with pytest.raises(MutationRejectedError, match="Only 2 left in stock"):
        await controller.change_quantity(1, 1)

    assert controller.cart == before
    assert controller.cart == normalize_cart(make_cart_payload(), locale_state.context())
    assert controller.item_state(1) is ItemState.IDLE
    assert cart_service.calls[-1] == ("fetch_cart",)


@pytest.mark.asyncio
async def test_rollback_picks_up_concurrent_server_changes(controller, cart_service):
    await controller.refresh()
    cart_service.server_cart["items"][1]["quantity"] = 4
    cart_service.server_cart["items"][1]["subtotal"] = "22.00"
    cart_service.error = MutationRejectedError("Rejected")

    with pytest.raises(MutationRejectedError):
        await controller.change_quantity(1, 1)

    assert controller.cart.get_item(1).quantity == 2
    assert controller.cart.get_item(2).quantity == 4


@pytest.mark.asyncio
async def test_failed_resync_restores_last_confirmed_cart(controller, cart_service, caplog):
    before = await controller.refresh()
    cart_service.error = MutationRejectedError("Rejected")
    cart_service.fetch_error = TransportError("offline")

    with caplog.at_level(logging.ERROR, logger="storefront.controllers.cart_controller"):
        with pytest.raises(MutationRejectedError):
            await controller.remove_item(2)

    assert controller.cart == before
    assert controller.is_mutation_allowed(2)
    assert "resync failed" in caplog.text


@pytest.mark.asyncio
async def test_quantity_below_one_removes_item(controller, cart_service):
    await controller.refresh()

    cart = await controller.change_quantity(2, -1)

    assert cart.get_item(2) is None
    assert ("remove_item", 2) in cart_service.calls
    assert not any(c[0] == "update_item_quantity" for c in cart_service.calls)


@pytest.mark.asyncio
async def test_remove_is_optimistic(controller, cart_service, settle):
    await controller.refresh()
    cart_service.gate = asyncio.Event()

    task = asyncio.create_task(controller.remove_item(2))
    await settle()

    assert controller.cart.get_item(2) is None
    assert controller.cart.items_count == 2
    assert controller.cart.subtotal == "20.00"
    assert controller.item_state(2) is ItemState.PENDING

    cart_service.gate.set()
    cart = await task

    assert cart.total == "25.00"
    assert controller.item_state(2) is ItemState.IDLE


@pytest.mark.asyncio
async def test_pending_removal_rejects_further_mutations(controller, cart_service, settle):
    await controller.refresh()
    cart_service.gate = asyncio.Event()

    task = asyncio.create_task(controller.remove_item(2))
    await settle()

    assert controller.cart.get_item(2) is None
    with pytest.raises(MutationInProgressError):
        await controller.remove_item(2)
    with pytest.raises(MutationInProgressError):
        await controller.change_quantity(2, -1)

    cart_service.gate.set()
    await task
    assert [c for c in cart_service.calls if c[0] == "remove_item"] == [("remove_item", 2)]
    with pytest.raises(CartItemNotFoundError):
        await controller.remove_item(2)


@pytest.mark.asyncio
async def test_transport_failure_during_mutation_resyncs(controller, cart_service):
    before = await controller.refresh()
    cart_service.error = TransportError("offline")

    with pytest.raises(TransportError, match="offline"):
        await controller.change_quantity(1, 1)

    assert controller.cart == before
    assert controller.item_state(1) is ItemState.IDLE
    assert cart_service.calls[-1] == ("fetch_cart",)


@pytest.mark.asyncio
async def test_unknown_item(controller):
    await controller.refresh()

    with pytest.raises(CartItemNotFoundError):
        await controller.change_quantity(99, 1)
    with pytest.raises(CartItemNotFoundError):
        await controller.remove_item(99)


@pytest.mark.asyncio
async def test_coupon_merges_totals_and_keeps_items(controller, cart_service):
    before = await controller.refresh()

    cart = await controller.apply_coupon("SAVE5")

    assert cart.items == before.items
    assert cart.subtotal == "25.50"
    assert cart.total == "20.50"
    assert ("apply_coupon", "SAVE5") in cart_service.calls


@pytest.mark.asyncio
async def test_coupon_with_top_level_totals(controller, cart_service):
    await controller.refresh()
    cart_service.coupon_response = {"total": 18}

    cart = await controller.apply_coupon("SAVE5")

    assert cart.subtotal == "25.50"
    assert cart.total == "18.00"


@pytest.mark.asyncio
async def test_rejected_coupon_leaves_cart_alone(controller, cart_service):
    before = await controller.refresh()
    cart_service.error = MutationRejectedError("Coupon expired", status=422)
    fetches = cart_service.calls.count(("fetch_cart",))

    with pytest.raises(MutationRejectedError, match="Coupon expired"):
        await controller.apply_coupon("OLD")

    assert controller.cart == before
    assert cart_service.calls.count(("fetch_cart",)) == fetches


@pytest.mark.asyncio
async def test_add_item(controller, cart_service):
    await controller.refresh()

    cart = await controller.add_item(30, quantity=1)

    assert [item.id for item in cart.items] == [1, 2, 3]
    assert cart.get_item(3).product.name == "Hat"
    assert cart.total == "42.50"
    assert ("add_item", 30, None, 1) in cart_service.calls


@pytest.mark.asyncio
async def test_failed_add_resyncs(controller, cart_service):
    before = await controller.refresh()
    cart_service.error = MutationRejectedError("Product unavailable")

    with pytest.raises(MutationRejectedError):
        await controller.add_item(30)

    assert controller.cart == before
    assert cart_service.calls[-1] == ("fetch_cart",)


@pytest.mark.asyncio
async def test_clear(controller):
    await controller.refresh()

    cart = await controller.clear()

    assert cart == EMPTY_CART
    assert cart.is_empty


@pytest.mark.asyncio
async def test_subscribers_see_every_cart(controller, caplog):
    seen = []
    controller.subscribe(lambda cart: seen.append(cart.total))

    def broken(cart):
        raise RuntimeError("boom")

    unsubscribe_broken = controller.subscribe(broken)

    with caplog.at_level(logging.ERROR, logger="storefront.controllers.cart_controller"):
        await controller.refresh()
        await controller.change_quantity(1, 1)

    assert seen == ["30.50", "35.50", "40.50"]
    assert "Cart listener failed" in caplog.text

    unsubscribe_broken()
    caplog.clear()
    await controller.refresh()
    assert "Cart listener failed" not in caplog.text


@pytest.mark.asyncio
async def test_cart_follows_locale(cart_service, locale_state):
    cart_service.server_cart["items"][0]["product"]["name_ar"] = "حذاء"
    controller = CartStateController(cart_service, locale_state)

    locale_state.set_locale("ar")
    cart = await controller.refresh()

    assert cart.get_item(1).product.name == "حذاء"


class TestItemStateMachine:
    def test_happy_path(self):
        state = next_item_state(1, ItemState.IDLE, ItemEvent.SUBMIT)
        assert state is ItemState.PENDING
        state = next_item_state(1, state, ItemEvent.CONFIRM)
        assert state is ItemState.CONFIRMED
        assert next_item_state(1, state, ItemEvent.SETTLE) is ItemState.IDLE

    def test_failure_path(self):
        state = next_item_state(1, ItemState.PENDING, ItemEvent.FAIL)
        assert state is ItemState.ROLLED_BACK
        assert next_item_state(1, state, ItemEvent.SETTLE) is ItemState.IDLE

    @pytest.mark.parametrize("state", [ItemState.PENDING, ItemState.CONFIRMED, ItemState.ROLLED_BACK])
    def test_submit_outside_idle(self, state):
        with pytest.raises(MutationInProgressError) as exc_info:
            next_item_state(7, state, ItemEvent.SUBMIT)
        assert exc_info.value.item_id == 7

    @pytest.mark.parametrize("state, event", [
        (ItemState.IDLE, ItemEvent.CONFIRM),
        (ItemState.IDLE, ItemEvent.FAIL),
        (ItemState.IDLE, ItemEvent.SETTLE),
        (ItemState.CONFIRMED, ItemEvent.FAIL),
        (ItemState.PENDING, ItemEvent.SETTLE),
    ])
    def test_illegal_transitions(self, state, event):
        with pytest.raises(CartStateError):
            next_item_state(1, state, event)
