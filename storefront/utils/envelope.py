# storefront/utils/envelope.py
from collections.abc import Mapping
from typing import Any, List


def unwrap_collection(value: Any) -> List[Any]:
    """Return the list behind an optionally `{data: [...]}`-wrapped collection"""
    if isinstance(value, list):
        return value
    if isinstance(value, Mapping) and isinstance(value.get("data"), list):
        return value["data"]
    return []


def unwrap_resource(value: Any) -> Any:
    """Return the payload nested under `data`, or the value itself"""
    if isinstance(value, Mapping) and "data" in value:
        return value["data"]
    return value


def unwrap_keyed(value: Any, key: str) -> Any:
    """Payload under `key` (e.g. `{"address": {...}}`), else the `data` envelope"""
    if isinstance(value, Mapping) and value.get(key) is not None:
        return value[key]
    return unwrap_resource(value)
