"""Backend services"""
from .api_client import ApiClient
from .cart_service import CartService, HttpCartService
from .catalog_service import CatalogService
from .account_service import AccountService
from .order_service import OrderService
from .coupon_service import CouponService

__all__ = [
    'ApiClient',
    'CartService',
    'HttpCartService',
    'CatalogService',
    'AccountService',
    'OrderService',
    'CouponService',
]
