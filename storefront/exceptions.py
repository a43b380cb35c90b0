# storefront/exceptions.py
from typing import Any, Optional


class StorefrontError(Exception):
    """Base class for every error raised by the client core"""


class TransportError(StorefrontError):
    """The request never produced a usable response (network, DNS, bad JSON)"""


class ApiError(StorefrontError):
    """The backend answered with a non-2xx status"""

    def __init__(self, message: str, status: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload


class MutationRejectedError(ApiError):
    """The backend refused a cart mutation (e.g. stock unavailable)"""


class CartStateError(StorefrontError):
    """Local cart state does not allow the requested operation"""


class MutationInProgressError(CartStateError):
    """Another mutation on the same cart item is still pending"""

    def __init__(self, item_id: Any):
        super().__init__(f"Cart item {item_id} already has a pending mutation")
        self.item_id = item_id


class CartItemNotFoundError(CartStateError):
    """The cart item id is not part of the current cart"""

    def __init__(self, item_id: Any):
        super().__init__(f"Cart item {item_id} is not in the cart")
        self.item_id = item_id
