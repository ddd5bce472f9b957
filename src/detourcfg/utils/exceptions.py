"""
detourcfg Custom Exceptions

Defines the exception hierarchy raised by parameter registration, resolution
and typed conversion.
"""

from typing import Any


class DetourCfgError(Exception):
    """Base exception class for detourcfg-specific errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ConfigurationError(DetourCfgError):
    """Raised when there's an error in configuration management."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.config_key = config_key


class InvalidParameterError(ConfigurationError):
    """Raised when a parameter is constructed with an unusable path."""

    def __init__(self, path: Any, **kwargs):
        super().__init__(
            f"Parameter path must be a non-empty string, got {path!r}",
            error_code="invalid_parameter",
            **kwargs
        )
        self.path = path


class DuplicateParameterError(ConfigurationError):
    """Raised when a key collides case-insensitively with a registered parameter."""

    def __init__(
        self,
        key: str,
        existing_key: str | None = None,
        **kwargs
    ):
        super().__init__(
            f"Parameter {key} is already defined as {existing_key or key}.",
            config_key=key,
            error_code="duplicate_parameter",
            details={"existing_key": existing_key},
            **kwargs
        )
        self.existing_key = existing_key


class UnresolvedParameterError(ConfigurationError):
    """Raised when a key is unknown or resolves to no value."""

    def __init__(self, key: str | None, **kwargs):
        shown = key if key else "<null>"
        super().__init__(
            f"Argument for parameter {shown} was not defined.",
            config_key=key,
            error_code="unresolved_parameter",
            **kwargs
        )


class CyclicDetourError(ConfigurationError):
    """Raised when following a detour chain revisits a parameter."""

    def __init__(
        self,
        key: str,
        chain: list[str],
        **kwargs
    ):
        super().__init__(
            f"Detour chain for parameter {key} does not terminate: {' -> '.join(chain)}",
            config_key=key,
            error_code="cyclic_detour",
            details={"chain": list(chain)},
            **kwargs
        )
        self.chain = list(chain)


class RegistryMismatchError(ConfigurationError):
    """Raised when stores bound to different registries are combined."""

    def __init__(self, message: str = "Cannot merge stores bound to different registries", **kwargs):
        super().__init__(message, error_code="registry_mismatch", **kwargs)


class TypeMismatchError(ConfigurationError):
    """Raised when a resolved value does not have the requested type."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        expected: str | None = None,
        actual: str | None = None,
        **kwargs
    ):
        kwargs.setdefault("error_code", "type_mismatch")
        super().__init__(message, config_key=config_key, **kwargs)
        self.expected = expected
        self.actual = actual


class ValueConversionError(TypeMismatchError):
    """Raised when strict parsing of a resolved value fails."""

    def __init__(
        self,
        config_key: str | None,
        expected: str,
        raw_value: str,
        **kwargs
    ):
        super().__init__(
            f"Argument for parameter {config_key} cannot be read as {expected}: {raw_value!r}",
            config_key=config_key,
            expected=expected,
            actual="str",
            error_code="value_conversion",
            details={"raw_value": raw_value},
            **kwargs
        )
        self.raw_value = raw_value
