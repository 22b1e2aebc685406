"""Value kinds and read outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from luaconf.errors import LuaConfError, UnsupportedKindError

__all__ = [
    "ValueKind",
    "ReadStatus",
    "ReadResult",
    "KindLike",
]


class ValueKind(str, Enum):
    """Native type a Lua value is converted into."""

    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    STRING = "string"

    @classmethod
    def coerce(cls, kind: KindLike) -> ValueKind:
        """Accept a ValueKind, its name, or one of int/float/bool/str.

        Raises:
            UnsupportedKindError: For anything else.
        """
        if isinstance(kind, ValueKind):
            return kind
        if isinstance(kind, type):
            try:
                return _PYTHON_TYPE_MAP[kind]
            except KeyError:
                raise UnsupportedKindError(kind) from None
        if isinstance(kind, str):
            try:
                return cls(kind.lower())
            except ValueError:
                raise UnsupportedKindError(kind) from None
        raise UnsupportedKindError(kind)


KindLike = ValueKind | type | str

# Checked by identity, so bool does not fall through to int.
_PYTHON_TYPE_MAP: dict[type, ValueKind] = {
    int: ValueKind.INTEGER,
    float: ValueKind.FLOAT,
    bool: ValueKind.BOOLEAN,
    str: ValueKind.STRING,
}


class ReadStatus(str, Enum):
    """Where the value of a read came from."""

    FOUND = "found"
    DEFAULT = "default"
    TYPE_MISMATCH = "type_mismatch"
    NOT_LOADED = "not_loaded"


@dataclass
class ReadResult:
    """Outcome of a single read: the value plus its provenance.

    Attributes:
        path: The dotted path that was requested.
        kind: The requested kind (element kind for list reads).
        value: The value handed to the caller, default included.
        status: How the value was obtained.
        errors: Every recoverable failure hit during the read, in order.
    """

    path: str
    kind: ValueKind
    value: Any
    status: ReadStatus = ReadStatus.FOUND
    errors: list[LuaConfError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is ReadStatus.FOUND

    @property
    def error(self) -> LuaConfError | None:
        return self.errors[0] if self.errors else None

    def unwrap(self) -> Any:
        """Return the value, or raise the first recorded error."""
        if self.errors:
            raise self.errors[0]
        return self.value
