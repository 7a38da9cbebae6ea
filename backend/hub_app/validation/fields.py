"""
Validators for primitive form fields

Each validator takes the raw, possibly missing form value and returns a
``Valid`` with the typed value or an ``Invalid`` with the message shown next
to the field. Validators never raise.
"""

import math
import re
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from ..api_client.models import ActionType
from .result import Invalid, Valid, ValidationResult


IPV4_PATTERN = re.compile(
    r'^(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.'
    r'(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.'
    r'(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.'
    r'(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$',
    re.ASCII
)

NUMBER_PATTERN = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$', re.ASCII)

MIN_TEMP = 1.0
MAX_TEMP = 30.0


def non_empty_string(raw: Optional[str]) -> ValidationResult[str]:
    """Require a value with at least one non-blank character"""
    if raw is None or not raw.strip():
        return Invalid("Required")
    return Valid(raw.strip())


def non_empty_list(raw: Optional[List[str]]) -> ValidationResult[List[str]]:
    """Require at least one element and no empty elements"""
    if not raw or any(len(element) == 0 for element in raw):
        return Invalid("Can't be empty")
    return Valid(list(raw))


def ipv4_address(raw: Optional[str]) -> ValidationResult[str]:
    if not raw:
        return Invalid("IP address is required")
    if not IPV4_PATTERN.fullmatch(raw):
        return Invalid("Not a valid IPv4 address")
    return Valid(raw)


def _parse_number(raw: Optional[str]) -> Optional[float]:
    if raw is None or not NUMBER_PATTERN.match(raw):
        return None
    try:
        number = float(raw)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def positive_non_zero_integer(raw: Optional[str]) -> ValidationResult[int]:
    number = _parse_number(raw)
    if number is None or not number.is_integer():
        return Invalid("Not a valid integer")
    if number < 1:
        return Invalid("Not a valid positive integer")
    return Valid(int(number))


def temperature_or_null(raw: Optional[str]) -> ValidationResult[Optional[float]]:
    """Optional temperature in whole or decimal degrees between 1 and 30"""
    if raw is None or raw.strip() == "":
        return Valid(None)
    number = _parse_number(raw)
    if number is None:
        return Invalid("Not a valid temperature")
    if number < MIN_TEMP or number > MAX_TEMP:
        return Invalid("Temperature must be between 1 and 30 degrees")
    return Valid(number)


def date_time(date_str: Optional[str], time_str: Optional[str]) -> ValidationResult[str]:
    """
    Combine a ``YYYY-MM-DD`` date and an ``HH:MM`` time into a naive timestamp

    Returns:
        ``YYYY-MM-DDTHH:MM:00`` on success
    """
    if not date_str or len(date_str) != 10 or not time_str or len(time_str) != 5:
        return Invalid("Date and time are required")
    try:
        parsed = datetime.strptime(f"{date_str}T{time_str}", "%Y-%m-%dT%H:%M")
    except ValueError:
        return Invalid("Not a valid date and time")
    return Valid(parsed.strftime("%Y-%m-%dT%H:%M:00"))


def date_time_or_null(date_str: Optional[str], time_str: Optional[str]) -> ValidationResult[Optional[str]]:
    """Like ``date_time`` but accepts a pair where both parts are absent"""
    if not date_str and not time_str:
        return Valid(None)
    return date_time(date_str, time_str)


def _describe(allowed: Sequence[str]) -> str:
    if len(allowed) == 1:
        return allowed[0]
    return f"{', '.join(allowed[:-1])} or {allowed[-1]}"


def enum_membership(allowed: Sequence[str]) -> Callable[[Optional[str]], ValidationResult[str]]:
    """
    Build a validator accepting exactly one of the ``allowed`` literals

    Args:
        allowed: Accepted values, compared case-sensitively
    """
    allowed = tuple(allowed)
    message = f"Must be {_describe(allowed)}"

    def validate(raw: Optional[str]) -> ValidationResult[str]:
        if raw is None or raw not in allowed:
            return Invalid(message)
        return Valid(raw)

    return validate


_action_type_literal = enum_membership([a.value for a in ActionType])


def action_type(raw: Optional[str]) -> ValidationResult[ActionType]:
    result = _action_type_literal(raw)
    if not result.valid:
        return result
    return Valid(ActionType(result.data))
