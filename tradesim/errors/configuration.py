"""
Configuration error classifications for simulation settings.

These exceptions describe property values that could not be turned into
simulation parameters. All of them are unrecoverable: the caller must fix
the offending property and load the configuration again.
"""

from typing import Any, Optional, Sequence


class IllegalConfigurationError(Exception):
    """Base class for malformed configuration values."""

    def __init__(self, message: str, property_name: Optional[str] = None,
                 raw_value: Optional[str] = None, cause: Optional[BaseException] = None,
                 context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.property_name = property_name
        self.raw_value = raw_value
        self.cause = cause
        self.context = context or {}
        self.recoverable = False
        if cause is not None:
            self.__cause__ = cause


class InvalidDateFormatError(IllegalConfigurationError):
    """Date value matched none of the supported patterns."""

    def __init__(self, message: str, supported_formats: Optional[Sequence[str]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.supported_formats = tuple(supported_formats or ())


class InvalidFeeAmountError(IllegalConfigurationError):
    """Numeric trading fee could not be parsed."""


class FeeStrategyInstantiationError(IllegalConfigurationError):
    """Named fee strategy could not be found or constructed."""

    def __init__(self, message: str, strategy_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.strategy_name = strategy_name


class InvalidGroupedValueError(IllegalConfigurationError):
    """A group of a symbol-keyed setting is malformed or its value failed conversion."""

    def __init__(self, message: str, group: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.group = group
