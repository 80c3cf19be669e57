"""
Parsers for structured simulation property values.

Dates, trading fee specifications and symbol-keyed grouped settings are the
three value formats that need more than a plain type conversion.
"""

from .dates import DATE_FORMATS, SUPPORTED_PATTERNS, format_datetime, parse_datetime, to_local_datetime
from .fees import (
    FeeStrategyRegistry,
    FixedAmountFee,
    PercentageFee,
    TradingFees,
    default_registry,
    register_fee_strategy,
    resolve_trading_fees,
)
from .grouped import REFERENCE_KEY, GroupedSetting, parse_amount, parse_grouped_setting

__all__ = [
    "DATE_FORMATS",
    "SUPPORTED_PATTERNS",
    "format_datetime",
    "parse_datetime",
    "to_local_datetime",
    "FeeStrategyRegistry",
    "FixedAmountFee",
    "PercentageFee",
    "TradingFees",
    "default_registry",
    "register_fee_strategy",
    "resolve_trading_fees",
    "REFERENCE_KEY",
    "GroupedSetting",
    "parse_amount",
    "parse_grouped_setting",
]
