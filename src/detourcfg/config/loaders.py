"""
detourcfg Store Loaders

Adapters that feed already-parsed data into a ``ConfigurationStore``:
nested Python mappings (for example the result of a JSON or YAML parser
owned by the caller) and process environment variables.
"""

import os
from collections.abc import Iterator, Mapping
from typing import Any

from detourcfg.config.constants import PATH_SEPARATOR
from detourcfg.config.parameters import Parameter
from detourcfg.config.store import ConfigurationStore
from detourcfg.config.values import normalise_value
from detourcfg.utils.exceptions import UnresolvedParameterError
from detourcfg.utils.logging import get_logger

logger = get_logger(__name__)


def flatten_mapping(data: Mapping[str, Any], parent_key: str = "") -> Iterator[tuple[str, Any]]:
    """Yield ``(dotted.path, value)`` pairs for every leaf of a nested mapping."""
    for k, v in data.items():
        new_key = f"{parent_key}{PATH_SEPARATOR}{k}" if parent_key else str(k)
        if isinstance(v, Mapping):
            yield from flatten_mapping(v, new_key)
        else:
            yield new_key, v


def load_mapping(
    store: ConfigurationStore,
    data: Mapping[str, Any],
    *,
    strict: bool = True,
) -> int:
    """Assign every leaf of ``data`` to the matching parameter in ``store``.

    Nested mappings address parameters by dotted path. ``None`` leaves clear
    any explicit value.

    Args:
        store: Store to populate.
        data: Nested mapping of values.
        strict: Raise on paths the registry does not know; otherwise skip them.

    Every path and value is checked before the first assignment, so a
    failure leaves ``store`` untouched.

    Returns:
        Number of paths assigned.

    Raises:
        UnresolvedParameterError: for an unknown path when ``strict``.
        TypeMismatchError: for a value outside the supported value types.
    """
    pending: list[tuple[Parameter, Any]] = []
    skipped: list[str] = []

    for path, value in flatten_mapping(data):
        parameter = store.registry.lookup(path)
        if parameter is None:
            if strict:
                raise UnresolvedParameterError(path)
            skipped.append(path)
            continue
        pending.append((parameter, normalise_value(value)))

    for parameter, value in pending:
        store.assign(parameter, value)

    if skipped:
        logger.warning("unknown_parameters_skipped", paths=skipped)
    logger.debug("mapping_loaded", assigned=len(pending))
    return len(pending)


def environment_variable_name(path: str, prefix: str = "") -> str:
    """Environment variable consulted for a parameter path."""
    return f"{prefix}{path}".upper().replace(".", "_").replace("-", "_")


def load_environment(
    store: ConfigurationStore,
    prefix: str = "",
    environ: Mapping[str, str] | None = None,
) -> int:
    """Assign registered parameters from environment variables.

    Values are stored as raw strings; typed accessors parse them on read.

    Returns:
        Number of parameters assigned.
    """
    env = os.environ if environ is None else environ
    assigned = 0

    for parameter in store.registry:
        env_key = environment_variable_name(parameter.path, prefix)
        env_value = env.get(env_key)
        if env_value is not None:
            store.assign(parameter, env_value)
            assigned += 1

    logger.debug("environment_loaded", prefix=prefix, assigned=assigned)
    return assigned
