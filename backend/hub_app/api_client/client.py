"""
Dashboard API Client Module

This module provides the client the dashboard uses to read and write rooms,
plugs, buttons, schedules, sensors, temporary actions and notification
settings on the device-control service.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import httpx

from .config import ApiClientConfig, ConfigManager
from .exceptions import (
    ApiConfigurationError,
    TransportError,
    FetchError,
    wrap_transport_error,
)
from .models import (
    Room,
    Plug,
    Button,
    Schedule,
    TempSensor,
    TempAction,
    NotificationSettings,
    PriceInfo,
    TemperatureGraphPoint,
    TimePeriod,
)
from .repository import (
    ERROR,
    ErrorSentinel,
    ResourceRepository,
    SingletonResource,
    parse_model,
    parse_model_list,
)
from .retry_logic import RetryConfig
from .transport import RetryingTransport, JSON_HEADERS


logger = logging.getLogger(__name__)

ROOMS_PATH = "rooms/"
PLUGS_PATH = "plugs/"
BUTTONS_PATH = "buttons/"
SCHEDULES_PATH = "schedules/"
TEMP_ACTIONS_PATH = "temp_actions/"
TEMP_SENSORS_PATH = "temp_sensors/"
NOTIFICATION_SETTINGS_PATH = "notification_settings/"
CURRENT_PRICE_PATH = "prices/current"
TEMPERATURE_LOGS_PATH = "temperature_logs/{room_id}/{period}"
TRIGGER_REFRESH_PATH = "trigger_refresh"


class DashboardApiClient:
    """
    Client for the device-control service REST API

    Owns one HTTP connection pool and one RetryingTransport shared by a
    repository per entity kind.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        retry_config: Optional[RetryConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the dashboard API client

        Args:
            base_url: Base URL of the service (e.g., "http://raspi-rust-api:8080/")
            timeout: Per-attempt request timeout in seconds
            retry_config: Custom retry configuration
            http_client: Pre-built HTTP client, mainly for tests
        """
        if not base_url:
            raise ApiConfigurationError("Base URL is required")

        self.base_url = base_url.rstrip('/') + '/'
        self.timeout = timeout

        self.client = http_client or httpx.AsyncClient(
            headers=JSON_HEADERS,
            timeout=timeout,
            base_url=self.base_url
        )
        self.transport = RetryingTransport(self.client, retry_config)

        self.rooms: ResourceRepository[Room] = ResourceRepository(self.transport, ROOMS_PATH, Room)
        self.plugs: ResourceRepository[Plug] = ResourceRepository(self.transport, PLUGS_PATH, Plug)
        self.buttons: ResourceRepository[Button] = ResourceRepository(self.transport, BUTTONS_PATH, Button)
        self.schedules: ResourceRepository[Schedule] = ResourceRepository(self.transport, SCHEDULES_PATH, Schedule)
        self.temp_actions: ResourceRepository[TempAction] = ResourceRepository(
            self.transport, TEMP_ACTIONS_PATH, TempAction
        )
        self.temp_sensors: ResourceRepository[TempSensor] = ResourceRepository(
            self.transport, TEMP_SENSORS_PATH, TempSensor, include_id_on_create=True
        )
        self.notification_settings: SingletonResource[NotificationSettings] = SingletonResource(
            self.transport, NOTIFICATION_SETTINGS_PATH, NotificationSettings
        )

        logger.info(f"DashboardApiClient initialized for {self.base_url}")

    @classmethod
    def from_config(cls, config: ApiClientConfig) -> 'DashboardApiClient':
        """
        Create DashboardApiClient from ApiClientConfig object

        Args:
            config: Configuration object

        Returns:
            DashboardApiClient: Configured client instance
        """
        return cls(
            base_url=config.base_url,
            timeout=config.timeout,
            retry_config=RetryConfig(
                max_attempts=config.max_attempts,
                base_delay=config.retry_delay,
                max_delay=config.max_retry_delay
            )
        )

    @classmethod
    def from_env(cls, prefix: str = 'HUB_') -> 'DashboardApiClient':
        """
        Create DashboardApiClient from environment variables

        Raises:
            ApiConfigurationError: If a variable holds an invalid value
        """
        try:
            config = ConfigManager().load_from_env(prefix)
        except ValueError as e:
            raise ApiConfigurationError(f"Failed to create client from environment: {str(e)}", original_exception=e)
        return cls.from_config(config)

    @classmethod
    def from_config_file(cls, config_path: Optional[Union[str, Path]] = None) -> 'DashboardApiClient':
        """
        Create DashboardApiClient from a JSON configuration file

        Raises:
            ApiConfigurationError: If configuration file is not found or invalid
        """
        try:
            config = ConfigManager(config_path).load_from_file()
        except (FileNotFoundError, ValueError) as e:
            raise ApiConfigurationError(f"Failed to create client from config file: {str(e)}", original_exception=e)
        return cls.from_config(config)

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

    async def close(self):
        """Close the HTTP client"""
        await self.client.aclose()

    async def get_current_price(self) -> PriceInfo:
        """
        Get the electricity price of the current hour

        Raises:
            FetchError: If the request fails after retries
        """
        try:
            response = await self.transport.execute("GET", CURRENT_PRICE_PATH)
        except TransportError as e:
            raise wrap_transport_error(FetchError, e)
        return parse_model(PriceInfo, response, CURRENT_PRICE_PATH)

    async def get_current_price_or_error(self) -> Union[PriceInfo, ErrorSentinel]:
        """Get the current price, or ``"ERROR"`` if it can't be loaded"""
        try:
            return await self.get_current_price()
        except FetchError as e:
            logger.warning(f"Current price unavailable: {e.message}")
            return ERROR

    async def get_room_temperature_logs(
        self,
        room_id: str,
        period: Union[TimePeriod, str] = TimePeriod.DAY
    ) -> List[TemperatureGraphPoint]:
        """
        Get the temperature graph of a room

        Args:
            room_id: Room identifier
            period: "day", "week" or "month"

        Raises:
            ValueError: If period is not a known time period
            FetchError: If the request fails after retries
        """
        period = TimePeriod(period)
        path = TEMPERATURE_LOGS_PATH.format(room_id=room_id, period=period.value)
        try:
            response = await self.transport.execute("GET", path)
        except TransportError as e:
            raise wrap_transport_error(FetchError, e)
        return parse_model_list(TemperatureGraphPoint, response, path)

    async def trigger_refresh(self) -> bool:
        """
        Ask the service to reload its schedules and device states

        Never raises; a failed refresh is logged and reported as False since
        the service also refreshes on its own timer.
        """
        try:
            response = await self.client.get(TRIGGER_REFRESH_PATH)
        except httpx.HTTPError as e:
            logger.warning(f"Error when triggering refresh: {e!r}")
            return False
        if not response.is_success:
            logger.warning(f"Failed to trigger refresh, response status: {response.status_code}")
            return False
        return True
