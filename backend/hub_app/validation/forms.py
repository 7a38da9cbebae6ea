"""
Form decoding, per-entity form validation and submission handling

Submitted forms are first decoded into ``RawFields`` (string values only),
then each field is validated independently. If any field is invalid the
caller gets one ``FormErrors`` holding every field error and the id of the
edited document; otherwise it gets the validated document.
"""

import logging
from typing import Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, TypeVar, Union

from ..api_client.models import (
    Button,
    Document,
    NotificationSettings,
    Plug,
    PriceLevel,
    Room,
    Schedule,
    TempAction,
    TempSensor,
)
from ..api_client.repository import ResourceRepository, SingletonResource
from ..core.structured_logger import log_async_operation
from ..submission.status import Intent, parse_intent
from . import fields as field_validators
from . import schedule as schedule_validators
from .result import FormErrors, Invalid, Valid, ValidationResult, collect_errors


logger = logging.getLogger(__name__)

DocT = TypeVar("DocT", bound=Document)

TEMP_FIELD_PREFIX = "temp_"


class RawFields:
    """Decoded form data: every field maps to the list of its string values"""

    def __init__(self, values: Optional[Dict[str, List[str]]] = None):
        self._values = values or {}

    def get(self, name: str) -> Optional[str]:
        """First value of ``name``, None if the field was not submitted"""
        values = self._values.get(name)
        return values[0] if values else None

    def get_all(self, name: str) -> List[str]:
        return list(self._values.get(name, []))

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __repr__(self) -> str:
        return f"RawFields({sorted(self._values)})"


FormValidator = Callable[[RawFields], Union[DocT, FormErrors]]
Refresh = Callable[[], Awaitable[object]]


def _pairs(data):
    if hasattr(data, "multi_items"):
        return data.multi_items()
    pairs = []
    for name, value in data.items():
        if isinstance(value, (list, tuple)):
            pairs.extend((name, item) for item in value)
        else:
            pairs.append((name, value))
    return pairs


def decode_form(data: Mapping[str, Union[str, Sequence[str]]]) -> ValidationResult[RawFields]:
    """
    Decode untyped form data into RawFields

    Accepts a mapping of field name to a string or a list of strings, or any
    multi-dict exposing ``multi_items()`` (e.g. Starlette's FormData).
    """
    values: Dict[str, List[str]] = {}
    for name, value in _pairs(data):
        if not isinstance(name, str) or not isinstance(value, str):
            return Invalid(f"Unsupported value for field '{name}'")
        values.setdefault(name, []).append(value)
    return Valid(RawFields(values))


def validate_room_form(fields: RawFields) -> Union[Room, FormErrors]:
    document_id = fields.get("id")
    results = {
        "name": field_validators.non_empty_string(fields.get("name")),
        "min_temp": field_validators.temperature_or_null(fields.get("min_temp")),
    }
    errors = collect_errors(document_id, results)
    if errors:
        return errors
    return Room(id=document_id, name=results["name"].data, min_temp=results["min_temp"].data)


def validate_plug_form(fields: RawFields) -> Union[Plug, FormErrors]:
    document_id = fields.get("id")
    results = {
        "name": field_validators.non_empty_string(fields.get("name")),
        "ip": field_validators.ipv4_address(fields.get("ip")),
        "username": field_validators.non_empty_string(fields.get("username")),
        "password": field_validators.non_empty_string(fields.get("password")),
        "room_id": field_validators.non_empty_string(fields.get("room_id")),
    }
    errors = collect_errors(document_id, results)
    if errors:
        return errors
    return Plug(id=document_id, **{name: result.data for name, result in results.items()})


def validate_button_form(fields: RawFields) -> Union[Button, FormErrors]:
    document_id = fields.get("id")
    results = {
        "name": field_validators.non_empty_string(fields.get("name")),
        "ip": field_validators.ipv4_address(fields.get("ip")),
        "username": field_validators.non_empty_string(fields.get("username")),
        "password": field_validators.non_empty_string(fields.get("password")),
        "plug_ids": field_validators.non_empty_list(fields.get_all("plug_ids")),
    }
    errors = collect_errors(document_id, results)
    if errors:
        return errors
    return Button(id=document_id, **{name: result.data for name, result in results.items()})


def validate_schedule_form(fields: RawFields) -> Union[Schedule, FormErrors]:
    """
    Validate a schedule form

    Temperatures are submitted per price level as ``temp_<PriceLevel>``
    (e.g. ``temp_VeryCheap``), time windows as repeated ``from``/``to``.
    """
    document_id = fields.get("id")
    raw_temps = {level: fields.get(f"{TEMP_FIELD_PREFIX}{level.value}") for level in PriceLevel}
    results = {
        "temps": schedule_validators.price_level_temps(raw_temps),
        "days": schedule_validators.days(fields.get_all("days")),
        "time_windows": schedule_validators.hours(fields.get_all("from"), fields.get_all("to")),
        "room_ids": field_validators.non_empty_list(fields.get_all("room_ids")),
    }
    errors = collect_errors(document_id, results)
    if errors:
        return errors
    return Schedule(id=document_id, **{name: result.data for name, result in results.items()})


def validate_temp_action_form(fields: RawFields) -> Union[TempAction, FormErrors]:
    document_id = fields.get("id")
    results = {
        "room_ids": field_validators.non_empty_list(fields.get_all("room_ids")),
        "action_type": field_validators.action_type(fields.get("action_type")),
        "expires_at": field_validators.date_time(fields.get("expires_at-date"), fields.get("expires_at-time")),
    }
    errors = collect_errors(document_id, results)
    if errors:
        return errors
    return TempAction(id=document_id, **{name: result.data for name, result in results.items()})


def validate_temp_sensor_form(fields: RawFields) -> Union[TempSensor, FormErrors]:
    """The id is the hardware sensor id, so sensor forms submit intent=create explicitly"""
    document_id = fields.get("id")
    results = {
        "id": field_validators.non_empty_string(document_id),
        "room_id": field_validators.non_empty_string(fields.get("room_id")),
    }
    errors = collect_errors(document_id, results)
    if errors:
        return errors
    return TempSensor(id=results["id"].data, room_id=results["room_id"].data)


def validate_notification_settings_form(fields: RawFields) -> Union[NotificationSettings, FormErrors]:
    results = {
        "max_consumption": field_validators.positive_non_zero_integer(fields.get("max_consumption")),
        "max_consumption_timeout_minutes": field_validators.positive_non_zero_integer(
            fields.get("max_consumption_timeout_minutes")
        ),
        "ntfy_topic": field_validators.non_empty_string(fields.get("ntfy_topic")),
    }
    errors = collect_errors(None, results)
    if errors:
        return errors
    return NotificationSettings(**{name: result.data for name, result in results.items()})


@log_async_operation("form_submission")
async def handle_submission(
    repository: ResourceRepository[DocT],
    fields: RawFields,
    validate: FormValidator,
    refresh: Optional[Refresh] = None
) -> Optional[FormErrors]:
    """
    Run one create/update/delete form submission

    Args:
        repository: Repository of the submitted entity kind
        fields: Decoded form fields
        validate: Form validator for the entity kind
        refresh: Awaited after a successful mutation

    Returns:
        FormErrors if validation failed, None once the mutation succeeded

    Raises:
        TransportError: If the mutation fails; never swallowed here
    """
    intent = parse_intent(fields)
    document_id = fields.get("id")

    if intent is Intent.DELETE:
        if not document_id:
            return FormErrors(id=None, other="Missing id of the document to delete")
        await repository.delete(document_id)
    else:
        result = validate(fields)
        if isinstance(result, FormErrors):
            logger.debug(f"Rejected {intent.value} form for {repository.path}: {result.fields}")
            return result
        if intent is Intent.CREATE:
            await repository.create(result)
        else:
            await repository.update(result)

    if refresh is not None:
        await refresh()
    return None


@log_async_operation("settings_submission")
async def handle_settings_submission(
    resource: SingletonResource[NotificationSettings],
    fields: RawFields,
    refresh: Optional[Refresh] = None
) -> Optional[FormErrors]:
    """Validate and save the notification settings form"""
    result = validate_notification_settings_form(fields)
    if isinstance(result, FormErrors):
        return result
    await resource.upsert(result)
    if refresh is not None:
        await refresh()
    return None
