# storefront/normalizers/common.py
from collections.abc import Mapping
from typing import Any, Dict, Tuple

from pydantic import BaseModel

from ..config import Config
from ..i18n.locale import NormalizationContext, locale_variant
from ..utils.images import get_image_url

DEFAULT_CONTEXT = NormalizationContext()


def as_mapping(raw: Any) -> Mapping:
    """Raw payload as a mapping; canonical models are dumped back first"""
    if isinstance(raw, BaseModel):
        return raw.model_dump()
    if isinstance(raw, Mapping):
        return raw
    return {}


def coalesce(*values: Any) -> Any:
    """First value that is not None"""
    return next((value for value in values if value is not None), None)


def image_url(value: Any, ctx: NormalizationContext) -> str:
    return get_image_url(value, ctx.asset_base_url) or ""


def locale_variants(source: Mapping, field: str,
                    locales: Tuple[str, ...] = Config.SUPPORTED_LOCALES) -> Dict[str, str]:
    """`{field}_{locale}` attributes for every supported locale"""
    return {f"{field}_{locale}": locale_variant(source, field, locale) for locale in locales}


def plain_text(value: Any) -> str:
    """The value when it is already a string, otherwise empty"""
    return value if isinstance(value, str) else ""


def is_present(value: Any) -> bool:
    """Whether a nested reference was actually sent (a non-empty object)"""
    if isinstance(value, BaseModel):
        return True
    return isinstance(value, Mapping) and bool(value)
