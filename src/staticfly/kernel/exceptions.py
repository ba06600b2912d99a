"""Unified exception hierarchy for staticfly.

All framework exceptions inherit from StaticFlyException, enabling unified
error handling across modules.

Categories:
- ConfigurationError: configuration that cannot be bound at startup
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class StaticFlyException(Exception):
    """Base exception for all staticfly errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CONFIG_CONVERSION").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(StaticFlyException):
    """Configuration could not be loaded or bound."""


class UnknownPropertyError(ConfigurationError):
    """A configuration key has no matching field in the bound schema."""

    def __init__(self, key: str) -> None:
        super().__init__(
            f"Unknown configuration property '{key}'",
            code="CONFIG_UNKNOWN_PROPERTY",
            context={"key": key},
        )
        self.key = key


class PropertyConversionError(ConfigurationError):
    """A configuration value could not be converted to the field's type."""

    def __init__(self, key: str, value: object, target: str, reason: str | None = None) -> None:
        message = f"Cannot convert value {value!r} of property '{key}' to {target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            code="CONFIG_CONVERSION",
            context={"key": key, "value": value, "target": target},
        )
        self.key = key
        self.value = value
