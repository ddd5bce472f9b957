"""
detourcfg Parameters and Registry

A ``Parameter`` is a case-insensitive key with an optional detour: either a
``Literal`` default value or a ``Reference`` to another parameter's key. The
``ParameterRegistry`` owns the set of known parameters and is passed
explicitly to every store that resolves against it.
"""

import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Union

from detourcfg.config.values import ConfigValue, normalise_value
from detourcfg.utils.exceptions import (
    ConfigurationError,
    CyclicDetourError,
    DuplicateParameterError,
    InvalidParameterError,
)
from detourcfg.utils.logging import get_logger

if TYPE_CHECKING:
    from detourcfg.config.store import ConfigurationStore

logger = get_logger(__name__)


def normalise_key(key: str) -> str:
    """Case-insensitive identity of a parameter key."""
    return key.casefold()


@dataclass(frozen=True)
class Literal:
    """Detour to a fixed default value."""
    value: ConfigValue

    def __post_init__(self):
        value = normalise_value(self.value)
        if value is None:
            raise ConfigurationError("Literal detour requires a value", error_code="invalid_literal")
        object.__setattr__(self, "value", value)


@dataclass(frozen=True)
class Reference:
    """Detour to another parameter, by key.

    ``target`` keeps the parameter object when the detour was given as one, so
    the chain can still be followed if that parameter is never registered.
    """
    key: str
    target: Optional["Parameter"] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if not isinstance(self.key, str) or not self.key:
            raise InvalidParameterError(self.key)


DetourTarget = Union[Literal, Reference, None]


def as_detour(detour: Any) -> DetourTarget:
    """Normalise a user-supplied detour into a ``DetourTarget``."""
    if detour is None or isinstance(detour, (Literal, Reference)):
        return detour
    if isinstance(detour, Parameter):
        return Reference(detour.path, target=detour)
    return Literal(detour)


@dataclass(frozen=True, eq=False)
class Parameter:
    """A configuration parameter.

    Parameters compare by identity; two parameters with the same path are only
    interchangeable through the registry that owns them.

    Args:
        path: Key of the parameter, matched case-insensitively.
        detour: Default value, ``Literal``, ``Reference`` or another
            ``Parameter`` to consult when no explicit value is assigned.
    """
    path: str
    detour: DetourTarget = field(default=None)

    def __post_init__(self):
        if not isinstance(self.path, str) or not self.path:
            raise InvalidParameterError(self.path)
        object.__setattr__(self, "detour", as_detour(self.detour))

    @property
    def key(self) -> str:
        return normalise_key(self.path)

    def __str__(self) -> str:
        return self.path

    def __repr__(self) -> str:
        return f"Parameter({self.path!r}, detour={self.detour!r})"


class ParameterRegistry:
    """Case-insensitive registry of known parameters.

    Parameters are only ever added. Registration is serialised with a lock;
    lookups do not take it.
    """

    def __init__(self, parameters: list[Parameter] | None = None):
        self._parameters: dict[str, Parameter] = {}
        self._lock = threading.RLock()
        for parameter in parameters or []:
            self.define(parameter)

    def define(self, parameter: Parameter | str, detour: Any = None) -> Parameter:
        """Register a parameter.

        Accepts either a ready ``Parameter`` or a path plus optional detour.

        Raises:
            DuplicateParameterError: if the key is already registered under
                any casing. The registry is left unchanged.
        """
        if not isinstance(parameter, Parameter):
            parameter = Parameter(parameter, detour)
        elif detour is not None:
            raise InvalidParameterError(
                parameter.path,
                details={"reason": "detour given alongside a Parameter instance"},
            )

        with self._lock:
            existing = self._parameters.get(parameter.key)
            if existing is not None:
                raise DuplicateParameterError(parameter.path, existing_key=existing.path)
            self._parameters[parameter.key] = parameter

        logger.debug("parameter_defined", path=parameter.path, detour=repr(parameter.detour))
        return parameter

    def lookup(self, key: str | None) -> Parameter | None:
        """Return the parameter registered under ``key``, or ``None``."""
        if not isinstance(key, str) or not key:
            return None
        return self._parameters.get(normalise_key(key))

    def all_parameters(self, store: "ConfigurationStore") -> dict[Parameter, ConfigValue | None]:
        """Map every known parameter to its resolved value in ``store``.

        Parameters that do not resolve, including those on a cyclic chain,
        map to ``None``.
        """
        result: dict[Parameter, ConfigValue | None] = {}
        for parameter in self:
            try:
                result[parameter] = store.resolve_parameter(parameter)
            except CyclicDetourError as e:
                logger.warning("cyclic_detour", path=parameter.path, chain=e.chain)
                result[parameter] = None
        return result

    def keys(self) -> list[str]:
        """Registered paths, in registration order, with original casing."""
        return [parameter.path for parameter in self._parameters.values()]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Parameter):
            return self._parameters.get(item.key) is item
        if isinstance(item, str):
            return self.lookup(item) is not None
        return False

    def __iter__(self) -> Iterator[Parameter]:
        return iter(list(self._parameters.values()))

    def __len__(self) -> int:
        return len(self._parameters)

    def __repr__(self) -> str:
        return f"ParameterRegistry({self.keys()!r})"
