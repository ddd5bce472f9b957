"""
detourcfg Configuration Store

Holds explicit parameter values, resolves parameters through their detour
chains, converts resolved values to typed results and merges stores.

Resolution order for a parameter:
1. An explicit value assigned in this store
2. The parameter's detour: a ``Reference`` is followed to the referenced
   parameter, a ``Literal`` supplies its value
3. Nothing: the parameter is unresolved
"""

import re
from typing import Any

import numpy as np

from detourcfg.config.constants import FALSE_LITERAL, INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, TRUE_LITERAL
from detourcfg.config.parameters import Literal, Parameter, ParameterRegistry
from detourcfg.config.settings import Settings, get_settings
from detourcfg.config.values import ConfigArray, ConfigValue, ValueKind, normalise_value, stringify
from detourcfg.utils.decorators import strict_conversion
from detourcfg.utils.exceptions import (
    CyclicDetourError,
    RegistryMismatchError,
    TypeMismatchError,
    UnresolvedParameterError,
)
from detourcfg.utils.logging import get_logger

logger = get_logger(__name__)

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

KeyOrParameter = str | Parameter


class ConfigurationStore:
    """Explicit parameter values bound to one ``ParameterRegistry``."""

    def __init__(self, registry: ParameterRegistry, settings: Settings | None = None):
        self._registry = registry
        self._settings = settings if settings is not None else get_settings()
        self._values: dict[Parameter, ConfigValue] = {}

    @property
    def registry(self) -> ParameterRegistry:
        return self._registry

    @property
    def settings(self) -> Settings:
        return self._settings

    # Population

    def _require(self, key: KeyOrParameter) -> Parameter:
        """Return the registered parameter for ``key`` or raise."""
        if isinstance(key, Parameter):
            if key not in self._registry:
                raise UnresolvedParameterError(key.path)
            return key
        parameter = self._registry.lookup(key)
        if parameter is None:
            raise UnresolvedParameterError(key)
        return parameter

    def assign(self, key: KeyOrParameter, value: Any) -> None:
        """Set an explicit value. Assigning ``None`` clears it."""
        parameter = self._require(key)
        normalised = normalise_value(value)
        if normalised is None:
            self._values.pop(parameter, None)
        else:
            self._values[parameter] = normalised

    def unassign(self, key: KeyOrParameter) -> None:
        """Remove the explicit value for ``key``, if any."""
        self._values.pop(self._require(key), None)

    def has_explicit(self, key: KeyOrParameter) -> bool:
        """Whether ``key`` has an explicit value in this store."""
        return self._require(key) in self._values

    def explicit_values(self) -> dict[str, ConfigValue]:
        """Copy of the explicit values, keyed by parameter path."""
        return {parameter.path: value for parameter, value in self._values.items()}

    def copy(self) -> "ConfigurationStore":
        """Independent store sharing this store's registry and settings."""
        duplicate = ConfigurationStore(self._registry, self._settings)
        duplicate._values = dict(self._values)
        return duplicate

    # Resolution

    def resolve(self, key: str | None) -> ConfigValue:
        """Resolve ``key`` to a value.

        Raises:
            UnresolvedParameterError: if the key is unknown or nothing along
                its detour chain supplies a value.
            CyclicDetourError: if the detour chain does not terminate.
        """
        parameter = self._registry.lookup(key)
        if parameter is None:
            raise UnresolvedParameterError(key)
        value = self.resolve_parameter(parameter)
        if value is None:
            raise UnresolvedParameterError(key)
        return value

    def resolve_parameter(self, parameter: Parameter) -> ConfigValue | None:
        """Resolve ``parameter`` through its detour chain; ``None`` if absent."""
        if parameter not in self._registry:
            raise UnresolvedParameterError(parameter.path)

        max_depth = self._settings.max_detour_depth
        chain: list[str] = []
        seen: set[Parameter] = set()
        current = parameter

        while True:
            if current in seen or len(chain) >= max_depth:
                raise CyclicDetourError(parameter.path, chain + [current.path])
            seen.add(current)
            chain.append(current.path)

            if current in self._values:
                return self._values[current]

            detour = current.detour
            if detour is None:
                return None
            if isinstance(detour, Literal):
                return detour.value

            target = self._registry.lookup(detour.key) or detour.target
            if target is None:
                logger.warning("dangling_detour", path=current.path, target=detour.key)
                return None
            current = target

    def _resolve_any(self, key: KeyOrParameter) -> ConfigValue:
        if isinstance(key, Parameter):
            value = self.resolve_parameter(key)
            if value is None:
                raise UnresolvedParameterError(key.path)
            return value
        return self.resolve(key)

    def as_dict(self) -> dict[str, ConfigValue | None]:
        """Resolved value of every registered parameter, keyed by path."""
        return {
            parameter.path: value
            for parameter, value in self._registry.all_parameters(self).items()
        }

    # Typed accessors

    def get_string(self, key: KeyOrParameter) -> str:
        return stringify(self._resolve_any(key))

    def get_char(self, key: KeyOrParameter) -> str:
        """Single-character value."""
        text = self.get_string(key)
        if len(text) != 1:
            raise TypeMismatchError(
                f"Argument for parameter {key} is not a single character: {text!r}",
                config_key=str(key),
                expected="char",
                actual=ValueKind.STRING.value,
            )
        return text

    @strict_conversion("boolean")
    def get_boolean(self, key: KeyOrParameter) -> bool:
        """Boolean value.

        Only ``true`` (any casing) is True. Anything else is False, unless
        ``strict_booleans`` is set, in which case it must read ``false``.
        """
        text = self.get_string(key).lower()
        if text == TRUE_LITERAL:
            return True
        if text != FALSE_LITERAL:
            if self._settings.strict_booleans:
                raise ValueError(text)
            logger.debug("lenient_boolean", key=str(key), raw_value=text)
        return False

    @strict_conversion("integer")
    def get_integer(self, key: KeyOrParameter) -> int:
        return _parse_bounded_int(self.get_string(key), INT32_MIN, INT32_MAX)

    @strict_conversion("long")
    def get_long(self, key: KeyOrParameter) -> int:
        return _parse_bounded_int(self.get_string(key), INT64_MIN, INT64_MAX)

    @strict_conversion("double")
    def get_double(self, key: KeyOrParameter) -> float:
        return _parse_float(self.get_string(key))

    @strict_conversion("float")
    def get_float(self, key: KeyOrParameter) -> float:
        """Value narrowed to single precision."""
        wide = _parse_float(self.get_string(key))
        with np.errstate(over="ignore"):
            narrow = np.float32(wide)
        if np.isinf(narrow) and not np.isinf(wide):
            raise OverflowError(wide)
        return float(narrow)

    def get_array(self, key: KeyOrParameter) -> ConfigArray:
        value = self._resolve_any(key)
        if not isinstance(value, ConfigArray):
            kind = ValueKind.of(value)
            raise TypeMismatchError(
                f"Argument for parameter {key} is not an array",
                config_key=str(key),
                expected=ValueKind.ARRAY.value,
                actual=kind.value,
            )
        return value

    # Merge

    def merge(self, other: "ConfigurationStore") -> "ConfigurationStore":
        """Combine two stores into a new one.

        Explicit values of ``other`` win over this store's; unset entries of
        ``other`` leave this store's values in place. Neither operand changes.
        """
        if other._registry is not self._registry:
            raise RegistryMismatchError()

        merged = self.copy()
        overridden = 0
        for parameter, value in other._values.items():
            if value is None:
                continue
            if parameter in merged._values:
                overridden += 1
            merged._values[parameter] = value

        logger.debug(
            "stores_merged",
            base_values=len(self._values),
            overlay_values=len(other._values),
            overridden=overridden,
        )
        return merged

    def __or__(self, other: "ConfigurationStore") -> "ConfigurationStore":
        if not isinstance(other, ConfigurationStore):
            return NotImplemented
        return self.merge(other)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ConfigurationStore({self.explicit_values()!r})"


def _parse_bounded_int(text: str, lower: int, upper: int) -> int:
    if not _INTEGER_PATTERN.fullmatch(text):
        raise ValueError(text)
    value = int(text)
    if not lower <= value <= upper:
        raise OverflowError(text)
    return value


def _parse_float(text: str) -> float:
    if "_" in text or not text.isascii():
        raise ValueError(text)
    return float(text)
