"""Strict decimal parsing shared by fee and grouped-setting parsers."""

import math
import re

# Plain decimal literals only: no underscores, no inf/nan, optional exponent.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def parse_decimal(text: str) -> float:
    """
    Parse a decimal literal into a float.

    Args:
        text: Literal such as "2000", "0.1" or "1e-3"; surrounding whitespace is ignored

    Returns:
        Parsed float value

    Raises:
        ValueError: If the text is not a finite decimal literal
    """
    if text is None:
        raise ValueError("Cannot parse a decimal from None")

    literal = text.strip()
    if not _DECIMAL_RE.fullmatch(literal):
        raise ValueError(f"Invalid decimal literal: '{text}'")

    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Decimal literal out of range: '{text}'")
    return value
