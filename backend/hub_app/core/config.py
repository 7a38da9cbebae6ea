from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

from ..api_client.config import ApiClientConfig


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or a .env file.
    """

    # Device-control service
    DASHBOARD_API_URL: str = "http://127.0.0.1:8080/"
    REQUEST_TIMEOUT: float = 10.0   # seconds per attempt
    MAX_ATTEMPTS: int = 6           # first attempt included
    RETRY_BASE_DELAY: float = 0.1
    RETRY_MAX_DELAY: float = 2.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = ""
    ENVIRONMENT: str = "development"

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent.parent.parent / ".env",
        extra="ignore",
        case_sensitive=True
    )

    def api_client_config(self) -> ApiClientConfig:
        return ApiClientConfig(
            base_url=self.DASHBOARD_API_URL,
            timeout=self.REQUEST_TIMEOUT,
            max_attempts=self.MAX_ATTEMPTS,
            retry_delay=self.RETRY_BASE_DELAY,
            max_retry_delay=self.RETRY_MAX_DELAY,
        )


def get_settings() -> Settings:
    return Settings()
