"""Payload normalizers: unknown JSON in, canonical entity out"""
from .common import DEFAULT_CONTEXT
from .catalog import (
    normalize_slide,
    normalize_category,
    normalize_vendor,
    normalize_product_variant,
    normalize_product,
    normalize_home,
    normalize_product_page,
)
from .cart import normalize_cart_item, normalize_order_item, normalize_cart
from .account import normalize_address, normalize_user
from .order import normalize_order
from .coupon import normalize_coupon

__all__ = [
    'DEFAULT_CONTEXT',
    'normalize_slide',
    'normalize_category',
    'normalize_vendor',
    'normalize_product_variant',
    'normalize_product',
    'normalize_home',
    'normalize_product_page',
    'normalize_cart_item',
    'normalize_order_item',
    'normalize_cart',
    'normalize_address',
    'normalize_user',
    'normalize_order',
    'normalize_coupon',
]
