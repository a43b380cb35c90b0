# storefront/i18n/locale.py
"""
Localized field resolution.

Translatable content reaches the client in three shapes depending on the
entity and the migration it came from: flat suffixed columns (``name_ar``),
an embedded per-locale mapping (``name: {"en": ..., "ar": ...}``) and a
separate ``translations``/``i18n`` table. ``get_localized_field`` is the one
place that knows the lookup order.
"""
import logging
from collections.abc import Mapping
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict

from ..config import Config

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en"


class NormalizationContext(BaseModel):
    """Everything a normalizer needs besides the raw payload"""
    locale: str = FALLBACK_LOCALE
    asset_base_url: str = Config.ASSET_BASE_URL

    model_config = ConfigDict(frozen=True)


def _read_localized_value(value: Any, locale: str) -> Any:
    if not value:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        if value.get(locale):
            return value[locale]
        if value.get(FALLBACK_LOCALE):
            return value[FALLBACK_LOCALE]
    return None


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def get_localized_field(source: Any, field: str, fallback: str = "",
                        locale: str = FALLBACK_LOCALE) -> str:
    """Resolve `field` on `source` for `locale`, falling back to `fallback`"""
    if not isinstance(source, Mapping) or not source:
        return fallback

    suffixed = source.get(f"{field}_{locale}")
    if suffixed:
        return _as_text(suffixed)

    field_value = source.get(field)
    localized = _read_localized_value(field_value, locale)
    if localized:
        return _as_text(localized)

    translations = source.get("translations") or source.get("i18n")
    if isinstance(translations, Mapping):
        entry = translations.get(locale)
        if isinstance(entry, Mapping) and entry.get(field):
            return _as_text(entry[field])

    if isinstance(field_value, str):
        return field_value
    return fallback


def locale_variant(source: Any, field: str, locale: str) -> str:
    """The value stored for one specific locale (used for `name_ar`-style attributes)"""
    if not isinstance(source, Mapping):
        return ""
    suffixed = source.get(f"{field}_{locale}")
    if suffixed:
        return _as_text(suffixed)

    base = source.get(field)
    if isinstance(base, Mapping):
        value = base.get(locale)
        return _as_text(value) if value else ""
    if locale == FALLBACK_LOCALE and isinstance(base, str):
        return base
    return ""


class LocaleState:
    """
    Owner of the active locale.

    Starts at the configured default and changes only through set_locale().
    Persisting the choice is up to whoever listens for changes.
    """

    def __init__(self, locale: Optional[str] = None,
                 asset_base_url: str = Config.ASSET_BASE_URL):
        self._locale = locale or Config.DEFAULT_LOCALE
        self.asset_base_url = asset_base_url
        self._listeners: List[Callable[[str], None]] = []

    @property
    def locale(self) -> str:
        return self._locale

    def set_locale(self, locale: Optional[str]) -> str:
        """Switch locale; an empty value resets to the default"""
        normalized = locale or Config.DEFAULT_LOCALE
        if normalized == self._locale:
            return normalized

        if normalized not in Config.SUPPORTED_LOCALES:
            logger.warning(f"Locale {normalized!r} is not in the supported list")
        self._locale = normalized
        logger.info(f"Locale changed to {normalized}")
        for listener in list(self._listeners):
            listener(normalized)
        return normalized

    def on_change(self, listener: Callable[[str], None]) -> Callable[[], None]:
        """Register a change listener; returns a callable that removes it"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def context(self) -> NormalizationContext:
        return NormalizationContext(locale=self._locale, asset_base_url=self.asset_base_url)
