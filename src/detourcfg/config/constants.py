"""
detourcfg Default Constants

Library defaults and the numeric limits used by the typed accessors.
"""

from typing import Any

# Default library settings, overridable through the environment
DEFAULT_SETTINGS: dict[str, Any] = {
    "max_detour_depth": 32,
    "strict_booleans": False,
    "log_level": "INFO",
    "environment": "development",
}

ENV_PREFIX = "DETOURCFG_"

# Signed ranges enforced by get_integer / get_long
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

TRUE_LITERAL = "true"
FALSE_LITERAL = "false"

# Separator used when flattening nested mappings into parameter paths
PATH_SEPARATOR = "."
