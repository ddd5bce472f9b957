"""
detourcfg Value Model

The closed set of value types a store may hold, and the helpers that
normalise incoming values and render them as text.
"""

import json
from enum import Enum
from typing import Any, Union

import numpy as np

from detourcfg.config.constants import (
    FALSE_LITERAL,
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    TRUE_LITERAL,
)
from detourcfg.utils.exceptions import TypeMismatchError


class ConfigArray(tuple):
    """Immutable ordered array of heterogeneous values.

    Items are strings, booleans, numbers, ``None`` or nested arrays.
    """

    def __new__(cls, items=()):
        return super().__new__(cls, (_normalise_item(item) for item in items))

    def to_list(self) -> list[Any]:
        """Return a plain, mutable copy with nested arrays converted to lists."""
        return [item.to_list() if isinstance(item, ConfigArray) else item for item in self]

    def to_json(self) -> str:
        """Render as compact JSON text."""
        return json.dumps(self.to_list(), separators=(",", ":"), ensure_ascii=False)

    def __repr__(self) -> str:
        return f"ConfigArray({list(self)!r})"


ConfigValue = Union[str, bool, int, float, np.float32, ConfigArray]


class ValueKind(Enum):
    """Runtime kind of a stored value."""
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    LONG = "long"
    DOUBLE = "double"
    FLOAT = "float"
    ARRAY = "array"

    @classmethod
    def of(cls, value: ConfigValue) -> "ValueKind":
        """Classify a normalised value."""
        if isinstance(value, ConfigArray):
            return cls.ARRAY
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, int):
            return cls.INTEGER if INT32_MIN <= value <= INT32_MAX else cls.LONG
        if isinstance(value, np.float32):
            return cls.FLOAT
        if isinstance(value, float):
            return cls.DOUBLE
        if isinstance(value, str):
            return cls.STRING
        raise TypeMismatchError(
            f"Unsupported value type {type(value).__name__}",
            actual=type(value).__name__,
        )


def _normalise_item(item: Any) -> Any:
    if item is None:
        return None
    if isinstance(item, (list, tuple)) and not isinstance(item, ConfigArray):
        return ConfigArray(item)
    if isinstance(item, np.floating):
        return float(item)
    return normalise_value(item)


def normalise_value(value: Any) -> ConfigValue | None:
    """Coerce an incoming value into the closed value set.

    ``None`` passes through so callers can treat it as "unset".
    """
    if value is None or isinstance(value, ConfigArray):
        return value
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, np.integer)):
        value = int(value)
        if not INT64_MIN <= value <= INT64_MAX:
            raise TypeMismatchError(
                f"Integer {value} does not fit in 64 bits",
                expected="long",
                actual="int",
            )
        return value
    if isinstance(value, np.float32):
        return value
    if isinstance(value, (float, np.floating)):
        return float(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ConfigArray(value)
    raise TypeMismatchError(
        f"Unsupported value type {type(value).__name__}",
        actual=type(value).__name__,
    )


def stringify(value: ConfigValue) -> str:
    """Render a value the way typed accessors read it."""
    if isinstance(value, bool):
        return TRUE_LITERAL if value else FALSE_LITERAL
    if isinstance(value, ConfigArray):
        return value.to_json()
    return str(value)
