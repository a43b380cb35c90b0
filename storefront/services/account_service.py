# storefront/services/account_service.py
from typing import Any, Dict, List

from ..i18n.locale import LocaleState
from ..models import Address, EntityId, User
from ..normalizers import normalize_address, normalize_user
from ..utils.envelope import unwrap_collection, unwrap_keyed, unwrap_resource
from .api_client import ApiClient


class AccountService:
    """Profile and saved addresses"""

    def __init__(self, api: ApiClient, locale: LocaleState):
        self.api = api
        self.locale = locale

    async def get_profile(self) -> User:
        data = await self.api.get("/profile")
        return normalize_user(unwrap_resource(data), self.locale.context())

    async def update_profile(self, profile_data: Dict[str, Any]) -> User:
        data = await self.api.put("/profile", profile_data)
        return normalize_user(unwrap_keyed(data, "user"), self.locale.context())

    async def change_password(self, current_password: str, new_password: str) -> None:
        await self.api.put("/profile/password", {
            "current_password": current_password,
            "password": new_password,
            "password_confirmation": new_password,
        })

    async def get_addresses(self) -> List[Address]:
        ctx = self.locale.context()
        data = await self.api.get("/addresses")
        return [normalize_address(a, ctx) for a in unwrap_collection(data)]

    async def create_address(self, address_data: Dict[str, Any]) -> Address:
        data = await self.api.post("/addresses", address_data)
        return normalize_address(unwrap_keyed(data, "address"), self.locale.context())

    async def update_address(self, address_id: EntityId, address_data: Dict[str, Any]) -> Address:
        data = await self.api.put(f"/addresses/{address_id}", address_data)
        return normalize_address(unwrap_keyed(data, "address"), self.locale.context())

    async def delete_address(self, address_id: EntityId) -> None:
        await self.api.delete(f"/addresses/{address_id}")

    async def set_default_address(self, address_id: EntityId) -> Address:
        data = await self.api.post(f"/addresses/{address_id}/default")
        return normalize_address(unwrap_keyed(data, "address"), self.locale.context())

