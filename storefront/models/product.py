# storefront/models/product.py
from typing import Optional, List, Dict
from pydantic import Field
from .base import CanonicalModel, EntityId
from .category import Category
from .vendor import Vendor


class ProductVariant(CanonicalModel):
    """Purchasable size/color variant of a product"""
    id: EntityId = 0
    name: str = ""
    sku: str = ""
    price: str = "0.00"
    compare_price: Optional[str] = None
    stock: int = Field(default=0, ge=0)
    attributes: Dict[str, str] = {}

class Product(CanonicalModel):
    """Product model for catalog listings and detail pages"""
    id: EntityId = 0
    name: str = ""
    slug: str = ""
    description: str = ""
    short_description: str = ""
    name_en: str = ""
    name_ar: str = ""
    name_ku: str = ""
    name_ku_sorani: str = ""
    name_ku_badini: str = ""
    description_en: str = ""
    description_ar: str = ""
    description_ku: str = ""
    description_ku_sorani: str = ""
    description_ku_badini: str = ""
    price: str = "0.00"
    compare_price: Optional[str] = None
    discount_percentage: Optional[float] = None
    is_wishlisted: Optional[bool] = None
    status: str = ""
    is_active: Optional[bool] = None
    images: List[str] = []
    thumbnail: str = ""
    category: Optional[Category] = None
    vendor: Optional[Vendor] = None
    variants: List[ProductVariant] = []
    in_stock: bool = False
    average_rating: float = 0.0
    reviews_count: int = 0
