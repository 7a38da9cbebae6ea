"""
Dashboard API Client Package

This package provides a client for the device-control service REST API
with failure classification, bounded retry and pydantic document models.
"""

from .client import DashboardApiClient
from .config import ApiClientConfig, ConfigManager
from .exceptions import (
    DashboardClientError,
    ApiConfigurationError,
    TransportError,
    FetchError,
    CreateError,
    UpdateError,
    DeleteError,
    ErrorSeverity,
)
from .retry_logic import (
    RetryConfig,
    FailureKind,
    DEFAULT_RETRY_CONFIG,
)
from .transport import RetryingTransport
from .repository import (
    ERROR,
    ResourceRepository,
    SingletonResource,
)
from .models import (
    Document,
    Room,
    Plug,
    Button,
    Schedule,
    TempSensor,
    TempAction,
    NotificationSettings,
    PriceInfo,
    TemperatureGraphPoint,

    # Enums
    Weekday,
    PriceLevel,
    ActionType,
    TimePeriod,
    TimeWindow,
)

__all__ = [
    # Client classes
    "DashboardApiClient",
    "RetryingTransport",
    "ResourceRepository",
    "SingletonResource",
    "ERROR",

    # Configuration classes
    "ApiClientConfig",
    "ConfigManager",
    "RetryConfig",
    "FailureKind",
    "DEFAULT_RETRY_CONFIG",

    # Exception classes
    "DashboardClientError",
    "ApiConfigurationError",
    "TransportError",
    "FetchError",
    "CreateError",
    "UpdateError",
    "DeleteError",
    "ErrorSeverity",

    # Models
    "Document",
    "Room",
    "Plug",
    "Button",
    "Schedule",
    "TempSensor",
    "TempAction",
    "NotificationSettings",
    "PriceInfo",
    "TemperatureGraphPoint",
    "Weekday",
    "PriceLevel",
    "ActionType",
    "TimePeriod",
    "TimeWindow",
]
