# storefront/models/user.py
from typing import Optional
from .base import CanonicalModel, EntityId


class User(CanonicalModel):
    """Signed-in customer or seller"""
    id: EntityId = 0
    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    avatar: Optional[str] = None
    is_vendor: bool = False
