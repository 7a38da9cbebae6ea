"""
Validators for schedule forms
"""

import math
from typing import Dict, List, Mapping, Optional

from ..api_client.models import PriceLevel, TimeWindow, Weekday
from .fields import NUMBER_PATTERN
from .result import Invalid, Valid, ValidationResult


INVALID_TIME = "Invalid time, should be HH:MM on 24h format"

MIN_SCHEDULE_TEMP = 0.0
MAX_SCHEDULE_TEMP = 100.0


def price_level(raw: Optional[str]) -> ValidationResult[PriceLevel]:
    if not raw:
        return Invalid("Price level is required")
    try:
        return Valid(PriceLevel(raw))
    except ValueError:
        return Invalid("Unknown price level")


def days(raw: List[str]) -> ValidationResult[List[Weekday]]:
    """Uppercased, deduplicated weekdays in first-seen order"""
    if not raw:
        return Invalid("Minimum one day is required")
    normalized = [day.upper() for day in raw]
    try:
        weekdays = [Weekday(day) for day in normalized]
    except ValueError:
        return Invalid("Unknown weekday")
    return Valid(list(dict.fromkeys(weekdays)))


def naive_time(raw: str) -> ValidationResult[str]:
    """Parse a 24h ``HH:MM`` time, returned zero-padded"""
    if len(raw) != 5 or raw[2] != ':':
        return Invalid(INVALID_TIME)
    hour_str, minute_str = raw[:2], raw[3:]
    if not (hour_str.isascii() and hour_str.isdigit() and minute_str.isascii() and minute_str.isdigit()):
        return Invalid(INVALID_TIME)
    hour, minute = int(hour_str), int(minute_str)
    if hour > 23 or minute > 59:
        return Invalid(INVALID_TIME)
    return Valid(f"{hour:02d}:{minute:02d}")


def hours(from_: List[str], to: List[str]) -> ValidationResult[List[TimeWindow]]:
    """
    Pair ``from_[i]`` with ``to[i]`` into time windows

    Windows where ``to`` is earlier than ``from`` are accepted as they are;
    whether they mean an overnight span is left to the service.
    """
    if not from_ or not to or len(from_) != len(to):
        return Invalid("Invalid time windows")
    windows = []
    for start_raw, end_raw in zip(from_, to):
        start = naive_time(start_raw)
        if not start.valid:
            return start
        end = naive_time(end_raw)
        if not end.valid:
            return end
        windows.append(TimeWindow(start.data, end.data))
    return Valid(windows)


def price_level_temps(raw: Mapping[PriceLevel, Optional[str]]) -> ValidationResult[Dict[PriceLevel, float]]:
    """
    Target temperature per price level; levels left blank are omitted

    At least one level must have a temperature.
    """
    filled = {level: value for level, value in raw.items() if value is not None and value.strip() != ""}
    if not filled:
        return Invalid("Must define temperature for at least one price level")
    temps: Dict[PriceLevel, float] = {}
    for level, value in filled.items():
        if not NUMBER_PATTERN.match(value):
            return Invalid("Invalid temperature")
        number = float(value)
        if not math.isfinite(number) or number < MIN_SCHEDULE_TEMP or number > MAX_SCHEDULE_TEMP:
            return Invalid("Invalid temperature")
        temps[level] = number
    return Valid(temps)
