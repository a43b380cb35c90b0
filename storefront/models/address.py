# storefront/models/address.py
from .base import CanonicalModel, EntityId


class Address(CanonicalModel):
    """Shipping address saved on the user's account"""
    id: EntityId = 0
    label: str = ""
    recipient_name: str = ""
    phone: str = ""
    street_address: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    is_default: bool = False
    full_address: str = ""
