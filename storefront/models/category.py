# storefront/models/category.py
from typing import Optional, List
from .base import CanonicalModel, EntityId


class Category(CanonicalModel):
    """Category model for product categorization"""
    id: EntityId = 0
    name: str = ""
    slug: str = ""
    icon: str = ""
    image: str = ""
    hero_images: List[str] = []
    name_en: str = ""
    name_ar: str = ""
    name_ku: str = ""
    name_ku_sorani: str = ""
    name_ku_badini: str = ""
    parent_id: Optional[EntityId] = None
    products_count: Optional[int] = None

    # Supplied whole by the backend, one level or many
    children: List['Category'] = []
