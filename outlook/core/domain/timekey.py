"""
TimeKey Normalizer - Canonical hour-beginning UTC instants.

Every source labels its hourly intervals either by the hour they end
(Dayzer ``Hour`` 1-24) or by the hour they begin (ISO fundamentals,
``local_datetime_ib``). Callers must declare which one applies; nothing here
guesses.
"""

import numbers
from datetime import date, datetime, time, timedelta, timezone
from typing import Literal

from outlook.core.domain.errors import InvalidHourIndex

HourConvention = Literal["hour_ending", "hour_beginning"]

HOUR_ENDING: HourConvention = "hour_ending"
HOUR_BEGINNING: HourConvention = "hour_beginning"

_HOUR_RANGES = {
    HOUR_ENDING: range(1, 25),
    HOUR_BEGINNING: range(0, 24),
}


def _check_hour(hour_index: object, convention: str) -> int:
    if convention not in _HOUR_RANGES:
        raise ValueError(f"Unknown hour convention: {convention!r}")
    # bool is an int subclass; True/False are never valid hours
    if isinstance(hour_index, bool) or not isinstance(hour_index, numbers.Integral):
        raise InvalidHourIndex(hour_index, convention)
    if hour_index not in _HOUR_RANGES[convention]:
        raise InvalidHourIndex(hour_index, convention)
    return int(hour_index)


def normalize(calendar_date: date, hour_index: int, convention: HourConvention) -> datetime:
    """
    Resolve a (date, hour, convention) triple to the UTC instant starting that hour.

    Args:
        calendar_date: Calendar day the hour belongs to
        hour_index: 1-24 for hour-ending, 0-23 for hour-beginning
        convention: Declared labelling convention of the source

    Returns:
        Timezone-aware UTC datetime (hour-beginning)

    Raises:
        InvalidHourIndex: hour outside the range of the declared convention
    """
    hour = _check_hour(hour_index, convention)
    if isinstance(calendar_date, datetime):
        calendar_date = calendar_date.date()
    midnight = datetime.combine(calendar_date, time(0), tzinfo=timezone.utc)
    if convention == HOUR_ENDING:
        return midnight + timedelta(hours=hour - 1)
    return midnight + timedelta(hours=hour)


def denormalize(instant: datetime, convention: HourConvention) -> tuple[date, int]:
    """Inverse of ``normalize``: the (date, hour index) a source would label ``instant`` with."""
    if convention not in _HOUR_RANGES:
        raise ValueError(f"Unknown hour convention: {convention!r}")
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc)
    if convention == HOUR_ENDING:
        return instant.date(), instant.hour + 1
    return instant.date(), instant.hour


def hours_for(selected_hours: list[int], convention: HourConvention) -> list[int]:
    """
    Translate a dashboard hour selection (hour-ending, 1-24) into the hour
    indices stored by a source using ``convention``.
    """
    he_hours = [_check_hour(h, HOUR_ENDING) for h in selected_hours]
    if convention == HOUR_ENDING:
        return sorted(set(he_hours))
    if convention == HOUR_BEGINNING:
        return sorted({h - 1 for h in he_hours})
    raise ValueError(f"Unknown hour convention: {convention!r}")
