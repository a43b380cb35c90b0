# storefront/normalizers/coupon.py
from typing import Any

from ..i18n.locale import NormalizationContext
from ..models import Coupon, CouponType
from ..utils.coercion import to_boolean, to_entity_id, to_safe_string
from .common import DEFAULT_CONTEXT, as_mapping, coalesce


def normalize_coupon(coupon: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> Coupon:
    c = as_mapping(coupon)
    expires_at = c.get("expires_at")

    return Coupon(
        id=to_entity_id(c.get("id")),
        code=to_safe_string(c.get("code")),
        type=CouponType.FIXED if c.get("type") == CouponType.FIXED else CouponType.PERCENT,
        value=to_safe_string(coalesce(c.get("value"), "0")),
        # absent, null and "" all mean the coupon never expires
        expires_at=to_safe_string(expires_at) if expires_at else None,
        is_active=to_boolean(c.get("is_active"), "coupon.is_active"),
    )
