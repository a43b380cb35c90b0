# storefront/models/vendor.py
from .base import CanonicalModel, EntityId


class Vendor(CanonicalModel):
    """Seller storefront"""
    id: EntityId = 0
    name: str = ""
    slug: str = ""
    description: str = ""
    logo: str = ""
    banner: str = ""
    is_verified: bool = False
