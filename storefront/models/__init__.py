"""Canonical entity models"""
from .base import CanonicalModel, EntityId
from .slide import Slide
from .category import Category
from .vendor import Vendor
from .product import Product, ProductVariant
from .cart import Cart, CartItem, EMPTY_CART
from .address import Address
from .order import Order, OrderItem
from .user import User
from .coupon import Coupon, CouponType
from .home import HomeFeed, PageMeta, ProductPage

__all__ = [
    'CanonicalModel',
    'EntityId',
    'Slide',
    'Category',
    'Vendor',
    'Product',
    'ProductVariant',
    'Cart',
    'CartItem',
    'EMPTY_CART',
    'Address',
    'Order',
    'OrderItem',
    'User',
    'Coupon',
    'CouponType',
    'HomeFeed',
    'PageMeta',
    'ProductPage',
]
