"""
detourcfg Utility Modules

Common utilities for logging, exceptions and decorators.
"""

from detourcfg.utils.decorators import strict_conversion
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
    "get_logger",
    "setup_logging",
    "DetourCfgError",
    "ConfigurationError",
    "InvalidParameterError",
    "DuplicateParameterError",
    "UnresolvedParameterError",
    "CyclicDetourError",
    "RegistryMismatchError",
    "TypeMismatchError",
    "ValueConversionError",
    "strict_conversion",
]
