from .locale import (
    LocaleState,
    NormalizationContext,
    get_localized_field,
    locale_variant,
)

__all__ = [
    'LocaleState',
    'NormalizationContext',
    'get_localized_field',
    'locale_variant',
]
