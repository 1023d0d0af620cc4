"""Helpers shared by filters: sorting, de-duplication and argument checks."""

from __future__ import annotations

import copy
import json
import math
import struct
from collections.abc import Callable
from typing import Any

from stencilkit.errors import TemplateError

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _display(value: Any) -> str:
    """Render a JSON value compactly, as used in error messages."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def total_order_key(value: float) -> int:
    """Integer key ordering floats by the IEEE 754 totalOrder predicate."""
    (bits,) = struct.unpack("<q", struct.pack("<d", float(value)))
    if bits < 0:
        bits ^= 0x7FFFFFFFFFFFFFFF
    return bits


def _number_key(val: Any) -> int:
    if not _is_number(val):
        raise TemplateError(f"expected number got {_display(val)}")
    return total_order_key(float(val))


def _int_key(val: Any) -> int:
    if not isinstance(val, int) or isinstance(val, bool) or not _I64_MIN <= val <= _I64_MAX:
        raise TemplateError(f"expected number got {_display(val)}")
    return val


def _bool_key(val: Any) -> bool:
    if not isinstance(val, bool):
        raise TemplateError(f"expected bool got {_display(val)}")
    return val


def _string_key(val: Any) -> str:
    if not isinstance(val, str):
        raise TemplateError(f"expected string got {_display(val)}")
    return val


def _array_len_key(val: Any) -> int:
    if not isinstance(val, list):
        raise TemplateError(f"expected array got {_display(val)}")
    return len(val)


class SortPairs:
    """Collects (value, key) pairs and returns the values ordered by key."""

    def __init__(self, key_of: Callable[[Any], Any]) -> None:
        self._key_of = key_of
        self._pairs: list[tuple[Any, Any]] = []

    def try_add_pair(self, val: Any, key: Any) -> None:
        """Add ``val`` sorted under ``key``; raise if ``key`` has the wrong type."""
        self._pairs.append((copy.deepcopy(val), self._key_of(key)))

    def sort(self) -> list[Any]:
        """Return the values in stable order of their keys."""
        self._pairs.sort(key=lambda pair: pair[1])
        return [copy.deepcopy(value) for value, _ in self._pairs]


class UniqueSet:
    """Remembers which values were seen."""

    def __init__(self, key_of: Callable[[Any], Any], case_sensitive: bool = True) -> None:
        self._key_of = key_of
        self._case_sensitive = case_sensitive
        self._seen: set[Any] = set()

    def insert(self, val: Any) -> bool:
        """Record ``val``; return True if it had not been seen before."""
        key = self._key_of(val)
        if isinstance(key, str) and not self._case_sensitive:
            key = key.lower()
        if key in self._seen:
            return False
        self._seen.add(key)
        return True


def get_sort_strategy_for_type(ty: Any) -> SortPairs:
    """Pick the sorter matching the type of the sample value ``ty``."""
    if ty is None:
        raise TemplateError("Null is not a sortable value")
    if isinstance(ty, bool):
        return SortPairs(_bool_key)
    if _is_number(ty):
        return SortPairs(_number_key)
    if isinstance(ty, str):
        return SortPairs(_string_key)
    if isinstance(ty, list):
        return SortPairs(_array_len_key)
    if isinstance(ty, dict):
        raise TemplateError("Object is not a sortable value")
    raise TemplateError(f"{type(ty).__name__} is not a sortable value")


def get_unique_strategy_for_type(ty: Any, case_sensitive: bool) -> UniqueSet:
    """Pick the de-duplicator matching the type of the sample value ``ty``."""
    if ty is None:
        raise TemplateError("Null is not a unique value")
    if isinstance(ty, bool):
        return UniqueSet(_bool_key)
    if isinstance(ty, float):
        raise TemplateError("Unique floats are not implemented")
    if isinstance(ty, int):
        return UniqueSet(_int_key)
    if isinstance(ty, str):
        return UniqueSet(_string_key, case_sensitive)
    if isinstance(ty, list):
        raise TemplateError("Unique arrays are not implemented")
    if isinstance(ty, dict):
        raise TemplateError("Unique objects are not implemented")
    raise TemplateError(f"{type(ty).__name__} is not a unique value")


_TYPE_NAMES = {
    str: "String",
    int: "i64",
    float: "f64",
    bool: "bool",
    list: "Vec<Value>",
    dict: "Map<String, Value>",
}


def _convert(expected_type: type, val: Any) -> Any:
    if expected_type is bool:
        if isinstance(val, bool):
            return val
    elif expected_type is int:
        if isinstance(val, int) and not isinstance(val, bool) and _I64_MIN <= val <= _I64_MAX:
            return val
    elif expected_type is float:
        if _is_number(val) and not (isinstance(val, float) and math.isnan(val)):
            return float(val)
    elif isinstance(val, expected_type) and not isinstance(val, bool):
        return copy.deepcopy(val)
    raise TypeError


def try_get_value(filter_name: str, var_name: str, expected_type: type, val: Any) -> Any:
    """Return ``val`` as ``expected_type`` or raise a filter argument error."""
    try:
        return _convert(expected_type, val)
    except TypeError:
        type_name = _TYPE_NAMES.get(expected_type, expected_type.__name__)
        if var_name == "value":
            message = (
                f"Filter `{filter_name}` was called on an incorrect value: "
                f"got `{_display(val)}` but expected a {type_name}"
            )
        else:
            message = (
                f"Filter `{filter_name}` received an incorrect type for arg `{var_name}`: "
                f"got `{_display(val)}` but expected a {type_name}"
            )
        raise TemplateError(message) from None