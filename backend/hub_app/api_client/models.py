"""
Pydantic models for the documents exchanged with the device-control service

Every writable entity derives from ``Document``. Documents built client-side
carry ``id=None`` until the service has persisted them.
"""

import re
from enum import Enum
from typing import Dict, List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


NAIVE_TIME_PATTERN = re.compile(r'^(\d{2}):(\d{2})(?::(\d{2}))?$', re.ASCII)


class Weekday(str, Enum):
    """Days a schedule can apply to"""
    MON = "MON"
    TUE = "TUE"
    WED = "WED"
    THU = "THU"
    FRI = "FRI"
    SAT = "SAT"
    SUN = "SUN"


class PriceLevel(str, Enum):
    """Tariff cost buckets, cheapest first"""
    VERY_CHEAP = "VeryCheap"
    CHEAP = "Cheap"
    NORMAL = "Normal"
    EXPENSIVE = "Expensive"
    VERY_EXPENSIVE = "VeryExpensive"


class ActionType(str, Enum):
    """Temporary action kinds"""
    ON = "ON"
    OFF = "OFF"


class TimePeriod(str, Enum):
    """Range of a room temperature graph"""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class TimeWindow(NamedTuple):
    """Clock times bounding when a schedule applies, both HH:MM"""
    from_time: str
    to_time: str


def normalize_naive_time(value: str) -> str:
    """Reduce an ``HH:MM`` or ``HH:MM:SS`` string to ``HH:MM``"""
    match = NAIVE_TIME_PATTERN.match(value)
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM or HH:MM:SS")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time '{value}', out of range")
    return f"{hour:02d}:{minute:02d}"


class Document(BaseModel):
    """Base model for entities persisted by the device-control service"""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[str] = Field(None, description="Server-assigned identifier")

    def to_request_body(self, include_id: bool = False) -> Dict:
        """Serialize the document as a JSON request body"""
        exclude = None if include_id else {"id"}
        return self.model_dump(mode="json", exclude=exclude)


class Room(Document):
    name: str
    min_temp: Optional[float] = None


class Plug(Document):
    name: str
    ip: str
    username: str
    password: str
    room_id: str


class Button(Document):
    name: str
    ip: str
    username: str
    password: str
    plug_ids: List[str] = Field(default_factory=list)


class Schedule(Document):
    """Target temperatures per price level, active on given days and time windows"""
    temps: Dict[PriceLevel, float]
    days: List[Weekday]
    time_windows: List[TimeWindow] = Field(default_factory=list)
    room_ids: List[str] = Field(default_factory=list)

    @field_validator('time_windows', mode='before')
    @classmethod
    def normalize_time_windows(cls, v):
        """Accept windows as pairs of HH:MM or HH:MM:SS strings"""
        if v is None:
            return []
        normalized = []
        for window in v:
            if isinstance(window, dict):
                pair = (window.get('from_time'), window.get('to_time'))
            else:
                pair = tuple(window)
            if len(pair) != 2 or not all(isinstance(t, str) for t in pair):
                raise ValueError("Time window must be a pair of times")
            normalized.append(TimeWindow(normalize_naive_time(pair[0]), normalize_naive_time(pair[1])))
        return normalized

    @field_serializer('time_windows', when_used='json')
    def serialize_time_windows(self, windows: List[TimeWindow]):
        # the service stores naive times with seconds
        return [[f"{w.from_time}:00", f"{w.to_time}:00"] for w in windows]


class TempSensor(Document):
    """Temperature sensor; its id is the hardware id chosen when registering it"""
    id: str
    room_id: str


class TempAction(Document):
    room_ids: List[str]
    action_type: ActionType
    expires_at: str = Field(..., description="Naive timestamp, YYYY-MM-DDTHH:MM:SS")


class NotificationSettings(BaseModel):
    """Consumption alert settings, a single record per installation"""
    max_consumption: int = Field(..., ge=1)
    max_consumption_timeout_minutes: int = Field(..., ge=1)
    ntfy_topic: str


class PriceInfo(BaseModel):
    amount: float
    currency: str
    ext_price_level: PriceLevel
    price_level: Optional[PriceLevel] = None
    starts_at: str

    @property
    def level(self) -> PriceLevel:
        """Effective level, the local override if set"""
        return self.price_level or self.ext_price_level


class TemperatureGraphPoint(BaseModel):
    label: str
    temp: float


__all__ = [
    'Weekday',
    'PriceLevel',
    'ActionType',
    'TimePeriod',
    'TimeWindow',
    'normalize_naive_time',
    'Document',
    'Room',
    'Plug',
    'Button',
    'Schedule',
    'TempSensor',
    'TempAction',
    'NotificationSettings',
    'PriceInfo',
    'TemperatureGraphPoint',
]
