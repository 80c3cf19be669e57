"""
Wall-clock defaults for the simulation window.

Simulation timestamps are naive local datetimes. An unset window start or end
is replaced by a value derived from the current wall-clock time on every
read, so a long-lived configuration always reports a window ending "now".
"""

from datetime import datetime
from typing import Optional


def now_local() -> datetime:
    """Current local wall-clock time as a naive datetime."""
    return datetime.now()


def years_before(ts: datetime, years: int = 1) -> datetime:
    """
    Shift a timestamp back by whole calendar years.

    February 29th maps to February 28th when the target year is not a leap year.

    Args:
        ts: Timestamp to shift
        years: Number of calendar years to go back

    Returns:
        Timestamp with the same month, day and time of day, `years` earlier
    """
    try:
        return ts.replace(year=ts.year - years)
    except ValueError:
        return ts.replace(year=ts.year - years, day=28)


def window_start_or_default(start: Optional[datetime], lookback_years: int = 1) -> datetime:
    """
    Resolve the simulation start, defaulting to `lookback_years` before now.

    Args:
        start: Configured start, or None when absent
        lookback_years: Years to look back when no start is configured

    Returns:
        The configured start, or a wall-clock derived default
    """
    if start is not None:
        return start

    return years_before(now_local(), lookback_years)


def window_end_or_default(end: Optional[datetime]) -> datetime:
    """Resolve the simulation end, defaulting to the current wall-clock time."""
    if end is not None:
        return end

    return now_local()
