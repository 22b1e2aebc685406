"""Conversion of resolved Lua values into native Python values."""

from __future__ import annotations

from typing import Any, Callable, NamedTuple

from lupa import lua_type

from luaconf.types import ValueKind

__all__ = ["Conversion", "TypeConverter", "lua_type_name"]

NOT_A_NUMBER = "Not a number"
NOT_A_STRING = "Not a string"

_DEFAULTS: dict[ValueKind, Any] = {
    ValueKind.INTEGER: 0,
    ValueKind.FLOAT: 0.0,
    ValueKind.BOOLEAN: False,
    ValueKind.STRING: "null",
}


class Conversion(NamedTuple):
    """A converted value and, if the Lua type was wrong, why."""

    value: Any
    reason: str | None = None

    @property
    def mismatch(self) -> bool:
        return self.reason is not None


def lua_type_name(value: Any) -> str:
    """Name of the Lua type behind a value handed back by lupa."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, (str, bytes)):
        return "string"
    return lua_type(value) or type(value).__name__


class TypeConverter:
    """Validates a value's Lua type and extracts a native value.

    Conversion never raises. A value of the wrong type is still coerced the
    way Lua itself would coerce it and the result carries the reason, so the
    caller can report it.

    Lua's own ``tonumber`` and ``tostring`` do the coercion, captured from a
    runtime before any user script can rebind them. Lua strings are raw
    bytes; they are decoded with ``encoding`` and undecodable bytes are
    replaced rather than raised.
    """

    def __init__(
        self,
        tonumber: Callable[[Any], Any],
        tostring: Callable[[Any], Any],
        encoding: str = "utf-8",
    ) -> None:
        self._tonumber = tonumber
        self._tostring = tostring
        self._encoding = encoding

    @classmethod
    def from_runtime(cls, lua: Any, encoding: str = "utf-8") -> TypeConverter:
        tonumber, tostring = lua.execute(b"return tonumber, tostring")
        return cls(tonumber, tostring, encoding)

    def decode(self, value: bytes) -> str:
        return value.decode(self._encoding, errors="replace")

    @staticmethod
    def default_for(kind: ValueKind) -> Any:
        return _DEFAULTS[kind]

    def convert(self, kind: ValueKind, value: Any) -> Conversion:
        if kind is ValueKind.INTEGER:
            return self._to_integer(value)
        if kind is ValueKind.FLOAT:
            return self._to_float(value)
        if kind is ValueKind.BOOLEAN:
            # Lua truthiness: only nil and false are false.
            return Conversion(value is not None and value is not False)
        if kind is ValueKind.STRING:
            return self._to_string(value)
        raise AssertionError(f"unhandled kind {kind!r}")

    def _number(self, value: Any) -> int | float | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return value
        if isinstance(value, str):
            value = value.encode(self._encoding, errors="replace")
        if isinstance(value, bytes):
            # Numeric strings count as numbers, as with lua_isnumber.
            return self._tonumber(value)
        return None

    def _to_integer(self, value: Any) -> Conversion:
        number = self._number(value)
        if number is None:
            return Conversion(0, NOT_A_NUMBER)
        try:
            return Conversion(int(number))
        except (ValueError, OverflowError):
            # nan and inf have no integer value.
            return Conversion(0, NOT_A_NUMBER)

    def _to_float(self, value: Any) -> Conversion:
        number = self._number(value)
        if number is None:
            return Conversion(0.0, NOT_A_NUMBER)
        return Conversion(float(number))

    def _to_string(self, value: Any) -> Conversion:
        if isinstance(value, str):
            return Conversion(value)
        if isinstance(value, bytes):
            return Conversion(self.decode(value))
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            text = self._tostring(value)
            if isinstance(text, bytes):
                text = self.decode(text)
            return Conversion(text)
        return Conversion(_DEFAULTS[ValueKind.STRING], NOT_A_STRING)
