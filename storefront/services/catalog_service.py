# storefront/services/catalog_service.py
from typing import Any, Dict, List, Optional, Tuple

from ..i18n.locale import LocaleState
from ..models import Category, EntityId, HomeFeed, Product, ProductPage, Vendor
from ..normalizers import (
    normalize_category,
    normalize_home,
    normalize_product,
    normalize_product_page,
    normalize_vendor,
)
from ..normalizers.common import as_mapping
from ..utils.envelope import unwrap_collection, unwrap_resource
from .api_client import ApiClient


class CatalogService:
    """Home feed, categories, products, vendors and the wishlist"""

    def __init__(self, api: ApiClient, locale: LocaleState):
        self.api = api
        self.locale = locale

    async def get_home(self) -> HomeFeed:
        data = await self.api.get("/home")
        return normalize_home(unwrap_resource(data), self.locale.context())

    async def get_categories(self) -> List[Category]:
        ctx = self.locale.context()
        data = await self.api.get("/categories")
        return [normalize_category(c, ctx) for c in unwrap_collection(data)]

    async def get_category(self, slug: str) -> Tuple[Category, List[Product]]:
        """Category page: the category and its products"""
        ctx = self.locale.context()
        data = as_mapping(await self.api.get(f"/categories/{slug}"))
        category = normalize_category(unwrap_resource(data.get("category")) or {}, ctx)
        products = [normalize_product(p, ctx) for p in unwrap_collection(data.get("products"))]
        return category, products

    async def get_products(self, **filters: Any) -> ProductPage:
        """Product listing; filters: category_id, vendor_id, min_price, max_price, q, sort_by, sort_order, per_page, page"""
        data = await self.api.get("/products", params=filters)
        return normalize_product_page(data, self.locale.context())

    async def search_products(self, query: str) -> ProductPage:
        data = await self.api.get("/products/search", params={"q": query})
        return normalize_product_page(data, self.locale.context())

    async def get_product(self, slug: str) -> Tuple[Product, List[Product]]:
        """Product detail and related products"""
        ctx = self.locale.context()
        data = as_mapping(await self.api.get(f"/products/{slug}"))
        product = unwrap_resource(data.get("product")) or data
        related = [normalize_product(p, ctx) for p in unwrap_collection(data.get("related"))]
        return normalize_product(product, ctx), related

    async def get_vendors(self) -> List[Vendor]:
        ctx = self.locale.context()
        data = await self.api.get("/vendors")
        return [normalize_vendor(v, ctx) for v in unwrap_collection(data)]

    async def get_vendor(self, slug: str) -> Tuple[Vendor, List[Product]]:
        ctx = self.locale.context()
        data = as_mapping(await self.api.get(f"/vendors/{slug}"))
        vendor = normalize_vendor(unwrap_resource(data.get("vendor")) or {}, ctx)
        products = [normalize_product(p, ctx) for p in unwrap_collection(data.get("products"))]
        return vendor, products

    async def get_wishlist(self) -> List[Product]:
        ctx = self.locale.context()
        data = as_mapping(await self.api.get("/wishlist"))
        return [normalize_product(p, ctx) for p in unwrap_collection(data.get("products"))]

    async def toggle_wishlist(self, product_id: EntityId) -> bool:
        """Returns True when the product is now wishlisted"""
        data = as_mapping(await self.api.post("/wishlist/toggle", {"product_id": product_id}))
        return bool(data.get("wishlisted"))

    async def get_translations(self, locale: Optional[str] = None) -> Dict[str, str]:
        """UI string table for a locale"""
        data = await self.api.get(f"/translations/{locale or self.locale.locale}")
        return {str(k): str(v) for k, v in as_mapping(data).items()}
