# storefront/utils/coercion.py
"""
Total conversions from loosely-typed JSON values to strict Python values.

Backend booleans arrive as native booleans, 0/1 integers or strings depending
on the endpoint's vintage; numbers and prices arrive as numbers or strings.
None of the functions here raise.
"""
import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from ..models.base import EntityId
from .formatters import format_money, round2

logger = logging.getLogger(__name__)

TRUE_STRINGS = frozenset({"true", "yes", "on"})
FALSE_STRINGS = frozenset({"false", "no", "off", ""})

Number = Union[int, float]


def to_boolean(value: Any, label: Optional[str] = None) -> bool:
    """Convert any value to a strict bool"""
    if value is True or value is False:
        return value

    if isinstance(value, (int, float, Decimal)):
        if value == 1:
            return True
        if value == 0:
            return False
    if value == "1":
        return True
    if value == "0":
        return False

    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_STRINGS:
            return True
        if normalized in FALSE_STRINGS:
            return False
        if label:
            logger.warning(f"{label} expected boolean, received {value!r}")
        return False

    if value is None:
        return False

    # numbers are truthy unless NaN; containers and objects always are
    if isinstance(value, (int, float, Decimal)):
        return not _is_nan(value)
    return True


def to_safe_string(value: Any, fallback: str = "") -> str:
    if value is None:
        return fallback
    return str(value)


def to_safe_number(value: Any, fallback: Number = 0) -> Number:
    """Parse a number; non-finite or unparseable input gives `fallback`"""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else fallback
    if isinstance(value, Decimal):
        return float(value) if value.is_finite() else fallback
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return fallback
        try:
            return int(text)
        except ValueError:
            pass
        try:
            parsed = float(text)
        except ValueError:
            return fallback
        return parsed if math.isfinite(parsed) else fallback
    return fallback


def to_int(value: Any, fallback: int = 0, minimum: Optional[int] = None) -> int:
    """Whole-number variant of to_safe_number, optionally clamped from below"""
    number = int(to_safe_number(value, fallback))
    if minimum is not None and number < minimum:
        return minimum
    return number


def to_money(value: Any, fallback: Decimal = Decimal(0)) -> Decimal:
    """Parse a monetary value to a Decimal rounded to cents"""
    if value is None or isinstance(value, bool):
        return round2(fallback)
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            return round2(fallback)
        amount = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            return round2(fallback)
    else:
        return round2(fallback)

    if not amount.is_finite():
        return round2(fallback)
    try:
        return round2(amount)
    except InvalidOperation:
        # more digits than the decimal context can hold
        return round2(fallback)


def to_money_string(value: Any, fallback: Decimal = Decimal(0)) -> str:
    return format_money(to_money(value, fallback))


def to_optional_money_string(value: Any) -> Optional[str]:
    """Money string, or None when the backend sent nothing"""
    if value is None or value == "":
        return None
    return to_money_string(value)


def to_entity_id(value: Any, fallback: EntityId = 0) -> EntityId:
    """Backend ids are ints or strings; keep whichever arrived"""
    if isinstance(value, bool):
        return fallback
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value != "":
        return value
    return fallback


def _is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)
