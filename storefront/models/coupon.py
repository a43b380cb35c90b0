# storefront/models/coupon.py
from enum import Enum
from typing import Optional
from .base import CanonicalModel, EntityId


class CouponType(str, Enum):
    """Coupon kinds"""
    PERCENT = "percent"  # percentage of the subtotal
    FIXED = "fixed"  # fixed amount

class Coupon(CanonicalModel):
    """Seller-managed discount code"""
    id: EntityId = 0
    code: str = ""
    type: CouponType = CouponType.PERCENT
    value: str = "0"
    expires_at: Optional[str] = None  # None means no expiry
    is_active: bool = False
