from .cart_controller import CartStateController, ItemEvent, ItemState

__all__ = [
    'CartStateController',
    'ItemEvent',
    'ItemState',
]
