"""
detourcfg Configuration Module

Parameter registration and resolution with support for:
- Case-insensitive parameter keys
- Detours to other parameters or literal defaults
- Typed accessors over resolved values
- Precedence-preserving merges of stores
"""

from detourcfg.config.loaders import load_environment, load_mapping
from detourcfg.config.parameters import Literal, Parameter, ParameterRegistry, Reference
from detourcfg.config.settings import Settings, get_settings
from detourcfg.config.store import ConfigurationStore
from detourcfg.config.values import ConfigArray, ValueKind

__all__ = [
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
]
