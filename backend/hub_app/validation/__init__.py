"""
Validation of dashboard form input into domain documents
"""

from .result import (
    Valid,
    Invalid,
    ValidationResult,
    FormErrors,
    collect_errors,
)
from .fields import (
    non_empty_string,
    non_empty_list,
    ipv4_address,
    positive_non_zero_integer,
    temperature_or_null,
    date_time,
    date_time_or_null,
    enum_membership,
    action_type,
)
from .schedule import (
    price_level,
    days,
    hours,
    naive_time,
    price_level_temps,
)
from .forms import (
    RawFields,
    decode_form,
    parse_intent,
    validate_room_form,
    validate_plug_form,
    validate_button_form,
    validate_schedule_form,
    validate_temp_action_form,
    validate_temp_sensor_form,
    validate_notification_settings_form,
    handle_submission,
    handle_settings_submission,
)

__all__ = [
    # Results
    "Valid",
    "Invalid",
    "ValidationResult",
    "FormErrors",
    "collect_errors",

    # Field validators
    "non_empty_string",
    "non_empty_list",
    "ipv4_address",
    "positive_non_zero_integer",
    "temperature_or_null",
    "date_time",
    "date_time_or_null",
    "enum_membership",
    "action_type",

    # Schedule validators
    "price_level",
    "days",
    "hours",
    "naive_time",
    "price_level_temps",

    # Forms
    "RawFields",
    "decode_form",
    "parse_intent",
    "validate_room_form",
    "validate_plug_form",
    "validate_button_form",
    "validate_schedule_form",
    "validate_temp_action_form",
    "validate_temp_sensor_form",
    "validate_notification_settings_form",
    "handle_submission",
    "handle_settings_submission",
]
