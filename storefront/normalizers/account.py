# storefront/normalizers/account.py
from typing import Any

from ..i18n.locale import NormalizationContext
from ..models import Address, User
from ..utils.coercion import to_boolean, to_entity_id, to_safe_string
from .common import DEFAULT_CONTEXT, as_mapping, coalesce


def normalize_address(address: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> Address:
    a = as_mapping(address)
    return Address(
        id=to_entity_id(a.get("id")),
        label=to_safe_string(a.get("label")),
        recipient_name=to_safe_string(coalesce(a.get("recipient_name"), a.get("full_name"))),
        phone=to_safe_string(a.get("phone")),
        street_address=to_safe_string(coalesce(a.get("street_address"), a.get("address_line_1"))),
        city=to_safe_string(a.get("city")),
        state=to_safe_string(a.get("state")),
        postal_code=to_safe_string(a.get("postal_code")),
        country=to_safe_string(a.get("country")),
        is_default=to_boolean(a.get("is_default"), "address.is_default"),
        full_address=to_safe_string(a.get("full_address")),
    )


def normalize_user(user: Any, ctx: NormalizationContext = DEFAULT_CONTEXT) -> User:
    """Profile; `is_vendor` falls back to the user's role"""
    u = as_mapping(user)
    if u.get("is_vendor") is not None:
        is_vendor = to_boolean(u["is_vendor"], "user.is_vendor")
    else:
        is_vendor = u.get("role") == "vendor"

    phone = u.get("phone")
    avatar = u.get("avatar")
    return User(
        id=to_entity_id(u.get("id")),
        name=to_safe_string(u.get("name")),
        email=to_safe_string(u.get("email")),
        phone=None if phone is None else to_safe_string(phone),
        avatar=None if avatar is None else to_safe_string(avatar),
        is_vendor=is_vendor,
    )
