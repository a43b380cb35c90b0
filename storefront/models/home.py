# storefront/models/home.py
from typing import List
from .base import CanonicalModel
from .slide import Slide
from .category import Category
from .product import Product


class HomeFeed(CanonicalModel):
    """Everything the home screen renders in one response"""
    slides: List[Slide] = []
    categories: List[Category] = []
    new_arrivals: List[Product] = []
    featured_products: List[Product] = []
    popular_products: List[Product] = []

class PageMeta(CanonicalModel):
    current_page: int = 1
    last_page: int = 1
    per_page: int = 0
    total: int = 0

class ProductPage(CanonicalModel):
    """One page of a product listing or search"""
    data: List[Product] = []
    meta: PageMeta = PageMeta()
