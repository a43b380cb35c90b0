# storefront/services/coupon_service.py
from typing import Any, Dict, List

from ..i18n.locale import LocaleState
from ..models import Coupon, EntityId
from ..normalizers import normalize_coupon
from ..utils.envelope import unwrap_collection, unwrap_keyed, unwrap_resource
from .api_client import ApiClient


class CouponService:
    """Seller coupon management"""

    def __init__(self, api: ApiClient, locale: LocaleState):
        self.api = api
        self.locale = locale

    async def get_coupons(self) -> List[Coupon]:
        ctx = self.locale.context()
        data = await self.api.get("/seller/coupons")
        return [normalize_coupon(c, ctx) for c in unwrap_collection(unwrap_resource(data))]

    async def create_coupon(self, coupon_data: Dict[str, Any]) -> Coupon:
        data = await self.api.post("/seller/coupons", coupon_data)
        return normalize_coupon(unwrap_keyed(data, "coupon"), self.locale.context())

    async def update_coupon(self, coupon_id: EntityId, coupon_data: Dict[str, Any]) -> Coupon:
        data = await self.api.put(f"/seller/coupons/{coupon_id}", coupon_data)
        return normalize_coupon(unwrap_keyed(data, "coupon"), self.locale.context())

    async def delete_coupon(self, coupon_id: EntityId) -> None:
        await self.api.delete(f"/seller/coupons/{coupon_id}")
