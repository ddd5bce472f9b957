"""
detourcfg Utility Decorators

Decorators shared by the typed accessor layer.
"""

from collections.abc import Callable
from functools import wraps
from typing import Any

from detourcfg.utils.exceptions import ValueConversionError
from detourcfg.utils.logging import get_logger

logger = get_logger(__name__)


def strict_conversion(expected: str) -> Callable:
    """Translate parse failures inside a typed accessor into ValueConversionError.

    The wrapped method must take the store as ``self`` and the key or parameter
    as its first positional argument.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self, key, *args, **kwargs) -> Any:
            try:
                return func(self, key, *args, **kwargs)
            except (ValueError, OverflowError) as e:
                raw_value = self.get_string(key)
                logger.debug(
                    "conversion_failed",
                    key=str(key),
                    expected=expected,
                    raw_value=raw_value,
                )
                raise ValueConversionError(str(key), expected, raw_value) from e

        return wrapper
    return decorator
