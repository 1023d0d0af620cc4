"""State of a ``{% for %}`` loop while a template renders."""

from __future__ import annotations

import enum
from typing import Any, Optional

import regex

from stencilkit.errors import TemplateError

_GRAPHEME_RE = regex.compile(r"\X")


class ForLoopKind(enum.Enum):
    """Whether a loop yields plain values or key/value pairs."""

    VALUE = "value"
    KEY_VALUE = "key_value"


class ForLoopState(enum.Enum):
    """Where a loop stands after its last tag."""

    NORMAL = "normal"
    BREAK = "break"
    CONTINUE = "continue"


class ForLoop:
    """The container being iterated, the loop variable names and the position.

    Build instances with :meth:`from_array`, :meth:`from_string` or
    :meth:`from_object`.
    """

    def __init__(
        self,
        value_name: str,
        values: Any,
        kind: ForLoopKind,
        key_name: Optional[str] = None,
    ) -> None:
        self.key_name = key_name
        self.value_name = value_name
        self.values = values
        self.kind = kind
        self.current = 0
        self.state = ForLoopState.NORMAL
        self._graphemes: Optional[list[str]] = None

    def __repr__(self) -> str:
        return (
            f"ForLoop(key_name={self.key_name!r}, value_name={self.value_name!r}, "
            f"current={self.current}, kind={self.kind}, state={self.state})"
        )

    @classmethod
    def from_array(cls, value_name: str, values: list[Any]) -> ForLoop:
        """Loop over the items of a JSON array."""
        if not isinstance(values, list):
            raise TemplateError(f"Tried to iterate over a non-array value as an array: {values!r}")
        return cls(value_name, values, ForLoopKind.VALUE)

    @classmethod
    def from_string(cls, value_name: str, values: str) -> ForLoop:
        """Loop over the grapheme clusters of a string."""
        if not isinstance(values, str):
            raise TemplateError(f"Tried to iterate over a non-string value as a string: {values!r}")
        loop = cls(value_name, values, ForLoopKind.VALUE)
        loop._graphemes = _GRAPHEME_RE.findall(values)
        return loop

    @classmethod
    def from_object(cls, key_name: str, value_name: str, obj: dict[str, Any]) -> ForLoop:
        """Loop over the key/value pairs of a JSON object, in key order."""
        if not isinstance(obj, dict):
            raise TemplateError(
                "Tried to create a Forloop from an object but it wasn't an object"
            )
        pairs = [(str(key), obj[key]) for key in sorted(obj)]
        return cls(value_name, pairs, ForLoopKind.KEY_VALUE, key_name=key_name)

    def increment(self) -> None:
        """Move to the next item and reset the state."""
        self.current += 1
        self.state = ForLoopState.NORMAL

    def is_key_value(self) -> bool:
        """Whether this loop yields key/value pairs."""
        return self.kind is ForLoopKind.KEY_VALUE

    def break_loop(self) -> None:
        """Mark the loop as broken out of."""
        self.state = ForLoopState.BREAK

    def continue_loop(self) -> None:
        """Mark the rest of the current iteration as skipped."""
        self.state = ForLoopState.CONTINUE

    def current_value(self) -> Any:
        """Return the value at the current position."""
        if self.kind is ForLoopKind.KEY_VALUE:
            return self.values[self.current][1]
        if self._graphemes is not None:
            return self._graphemes[self.current]
        return self.values[self.current]

    def current_key(self) -> str:
        """Return the key at the current position of a key/value loop."""
        if self.kind is not ForLoopKind.KEY_VALUE:
            raise TemplateError("No key in array list or string")
        return self.values[self.current][0]

    def is_key(self, name: str) -> bool:
        """Whether ``name`` is the key variable of this loop."""
        if self.kind is ForLoopKind.VALUE:
            return False
        return self.key_name is not None and self.key_name == name

    def __len__(self) -> int:
        # Strings count code points here, not grapheme clusters.
        return len(self.values)