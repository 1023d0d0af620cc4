"""The rendering context and helpers for working with JSON-like values."""

from __future__ import annotations

import dataclasses
import math
import re
from collections.abc import Iterator, Mapping
from decimal import Decimal
from typing import Any

from stencilkit.errors import JsonError, TemplateError

_I64_MIN = -(2**63)
_U64_MAX = 2**64 - 1

_JSON_POINTER_RE = re.compile(r'"[^"]*"|[^.]+')
_INDEX_RE = re.compile(r"[0-9]+")

_MISSING = object()


def _to_value(val: Any) -> Any:
    """Convert a Python object to a plain JSON value, raising JsonError on failure."""
    if val is None or isinstance(val, (bool, str)):
        return val
    if isinstance(val, int):
        if not _I64_MIN <= val <= _U64_MAX:
            raise JsonError(ValueError(f"number out of range: {val}"))
        return val
    if isinstance(val, float):
        return val if math.isfinite(val) else None
    if isinstance(val, (list, tuple)):
        return [_to_value(item) for item in val]
    if isinstance(val, Mapping):
        result: dict[str, Any] = {}
        for key, item in val.items():
            if isinstance(key, str):
                name = key
            elif isinstance(key, int) and not isinstance(key, bool):
                name = str(key)
            else:
                raise JsonError(TypeError("key must be a string"))
            result[name] = _to_value(item)
        return result
    if dataclasses.is_dataclass(val) and not isinstance(val, type):
        return {
            field.name: _to_value(getattr(val, field.name))
            for field in dataclasses.fields(val)
        }
    raise JsonError(TypeError(f"{type(val).__name__} is not JSON serializable"))


class Context:
    """Named values made available to a template while it renders."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def insert(self, key: str, val: Any) -> None:
        """Convert ``val`` to a JSON value and store it under ``key``.

        Raises JsonError if ``val`` cannot be represented as JSON.
        """
        self.try_insert(key, val)

    def try_insert(self, key: str, val: Any) -> None:
        """Convert ``val`` to a JSON value and store it, raising JsonError on failure."""
        self._data[str(key)] = _to_value(val)

    def extend(self, source: Context) -> None:
        """Copy every entry of ``source`` into this context, overwriting existing keys."""
        self._data.update(source._data)

    def into_json(self) -> dict[str, Any]:
        """Return the context as a JSON object with keys in sorted order."""
        return {key: self._data[key] for key in sorted(self._data)}

    @classmethod
    def from_value(cls, obj: Any) -> Context:
        """Build a context from a JSON object (a dict)."""
        if not isinstance(obj, dict):
            raise TemplateError(
                "Creating a Context from a Value/Serialize requires it being a JSON object"
            )
        context = cls()
        context._data = dict(obj)
        return context

    @classmethod
    def from_serialize(cls, value: Any) -> Context:
        """Build a context from any object that converts to a JSON object."""
        return cls.from_value(_to_value(value))

    def get(self, index: str) -> Any:
        """Return the value stored under ``index``, or None if there is none."""
        return self._data.get(index)

    def remove(self, index: str) -> Any:
        """Remove ``index`` and return its value, or None if it was not present."""
        return self._data.pop(index, None)

    def __contains__(self, index: object) -> bool:
        return index in self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Context):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Context({self.into_json()!r})"


def _format_float(number: float) -> str:
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    text = format(Decimal(repr(number)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def render_value(value: Any) -> str:
    """Render a JSON value as text the way it appears in template output."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, list):
        return "[" + ", ".join(render_value(item) for item in value) + "]"
    if isinstance(value, dict):
        return "[object]"
    raise TypeError(f"cannot render value of type {type(value).__name__}")


def to_number(value: Any) -> float:
    """Return a JSON number as a float; raise TemplateError for anything else."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise TemplateError(f"expected a number, got {render_value(value)!r}")


def is_truthy(value: Any) -> bool:
    """Whether a JSON value counts as true in a template condition."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, float):
        return value != 0.0 and not math.isnan(value)
    if isinstance(value, (str, list, dict)):
        return len(value) > 0
    return bool(value)


def get_json_pointer(key: str) -> str:
    """Convert a dotted path to a slash-separated JSON pointer."""
    if '"' in key:
        return "".join("/" + match.strip('"') for match in _JSON_POINTER_RE.findall(key))
    return "/" + key.replace(".", "/")


def iter_pointer_segments(pointer: str) -> Iterator[str]:
    """Split a dotted or square-bracketed path into its segments, dropping quotes."""
    single_quoted = False
    dual_quoted = False
    escaped = False
    position = 0
    while True:
        result: str | None = None
        offset = 0
        for i, character in enumerate(pointer[position:]):
            if character == "\\":
                escaped = True
                continue
            if character in "\"'":
                if not escaped:
                    if character == '"':
                        dual_quoted = not dual_quoted
                    else:
                        single_quoted = not single_quoted
                    if i == offset:
                        offset += 1
                    else:
                        segment = pointer[position + offset : position + i]
                        position += i + 1
                        if segment:
                            result = segment
                            break
            elif not single_quoted and not dual_quoted and not escaped:
                if character == "[":
                    segment = pointer[position + offset : position + i]
                    position += i + 1
                    if segment:
                        result = segment
                        break
                elif character == "]":
                    offset += 1
                elif character == ".":
                    if i == offset:
                        offset += 1
                    else:
                        segment = pointer[position + offset : position + i]
                        position += i + 1
                        if segment:
                            result = segment
                            break
            escaped = False
        if result is not None:
            yield result
            continue
        if position + offset < len(pointer):
            yield pointer[position + offset :]
        return


def _parse_index(text: str) -> int | None:
    if text.startswith("+") or (text.startswith("0") and len(text) != 1):
        return None
    if not _INDEX_RE.fullmatch(text):
        return None
    return int(text)


def dotted_pointer(value: Any, pointer: str) -> Any:
    """Look up a dotted path inside a JSON value; return None if it is not there."""
    if not pointer:
        return value
    target = value
    for segment in iter_pointer_segments(pointer):
        part = segment.replace("~1", "/").replace("~0", "~")
        if isinstance(target, dict):
            target = target.get(part, _MISSING)
        elif isinstance(target, list):
            index = _parse_index(part)
            target = target[index] if index is not None and index < len(target) else _MISSING
        else:
            target = _MISSING
        if target is _MISSING:
            return None
    return target