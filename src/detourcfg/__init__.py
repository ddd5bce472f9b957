"""
detourcfg - Detour-Aware Configuration Parameters

Named configuration parameters that fall back to other parameters or to
literal defaults, with typed accessors and deterministic store merging.

License: Apache-2.0
Version: 1.0.0
"""

__version__ = "1.0.0"

from detourcfg.config import (
    ConfigArray,
    ConfigurationStore,
    Literal,
    Parameter,
    ParameterRegistry,
    Reference,
    Settings,
    ValueKind,
    get_settings,
    load_environment,
    load_mapping,
)
from detourcfg.utils.exceptions import (
    ConfigurationError,
    CyclicDetourError,
    DetourCfgError,
    DuplicateParameterError,
    InvalidParameterError,
    RegistryMismatchError,
    TypeMismatchError,
    UnresolvedParameterError,
    ValueConversionError,
)
from detourcfg.utils.logging import get_logger, setup_logging

__all__ = [
    "__version__",
    "ConfigArray",
    "ConfigurationStore",
    "Literal",
    "Parameter",
    "ParameterRegistry",
    "Reference",
    "Settings",
    "ValueKind",
    "get_settings",
    "load_environment",
    "load_mapping",
    "DetourCfgError",
    "ConfigurationError",
    "InvalidParameterError",
    "DuplicateParameterError",
    "UnresolvedParameterError",
    "CyclicDetourError",
    "RegistryMismatchError",
    "TypeMismatchError",
    "ValueConversionError",
    "get_logger",
    "setup_logging",
]
