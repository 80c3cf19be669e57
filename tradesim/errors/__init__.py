"""
Error classification for simulation configuration.

Every malformed property value surfaces as an IllegalConfigurationError
subclass carrying the property name, the raw value and the underlying cause.
"""

from .configuration import (
    IllegalConfigurationError,
    InvalidDateFormatError,
    InvalidFeeAmountError,
    FeeStrategyInstantiationError,
    InvalidGroupedValueError,
)

__all__ = [
    "IllegalConfigurationError",
    "InvalidDateFormatError",
    "InvalidFeeAmountError",
    "FeeStrategyInstantiationError",
    "InvalidGroupedValueError",
]
