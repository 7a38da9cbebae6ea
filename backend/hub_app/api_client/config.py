"""Configuration management for the dashboard API client."""

import os
import json
from pathlib import Path
from typing import Optional, Dict, Any, Union
from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class ApiClientConfig(BaseModel):
    """Configuration model for the dashboard API client."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        extra='forbid'
    )

    base_url: str = Field(default="http://127.0.0.1:8080/", description="Device-control service base URL")
    timeout: float = Field(default=10.0, ge=0.5, le=300.0, description="Per-attempt request timeout in seconds")
    max_attempts: int = Field(default=6, ge=1, le=20, description="Total attempts per request, first one included")
    retry_delay: float = Field(default=0.1, ge=0.0, le=60.0, description="Base retry delay in seconds")
    max_retry_delay: float = Field(default=2.0, ge=0.0, le=300.0, description="Upper bound of a single retry delay")

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v):
        """Validate and normalize base URL."""
        if not v:
            raise ValueError("base_url cannot be empty")

        # Add protocol if missing
        if not v.startswith(('http://', 'https://')):
            v = f'http://{v}'

        # Collection paths are relative, keep exactly one trailing slash
        return v.rstrip('/') + '/'

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    def to_json(self) -> str:
        """Convert configuration to JSON string."""
        return self.model_dump_json(indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ApiClientConfig':
        """Create configuration from dictionary."""
        return cls(**data)


class ConfigManager:
    """Manages dashboard API client configuration."""

    DEFAULT_CONFIG_PATHS = [
        Path.home() / '.hub_app' / 'config.json',
        Path.cwd() / '.hub_app.json',
    ]

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to configuration file
        """
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[ApiClientConfig] = None

    def load_from_env(self, prefix: str = 'HUB_') -> ApiClientConfig:
        """Load configuration from environment variables.

        Args:
            prefix: Environment variable prefix (default: 'HUB_')

        Returns:
            ApiClientConfig: Loaded configuration

        Raises:
            ValueError: If a variable holds a value of the wrong type
        """
        fields = {
            'base_url': str,
            'timeout': float,
            'max_attempts': int,
            'retry_delay': float,
            'max_retry_delay': float,
        }

        config_data = {}
        for field, converter in fields.items():
            env_var = f'{prefix}{field.upper()}'
            value = os.getenv(env_var)
            if value:
                try:
                    config_data[field] = converter(value)
                except (ValueError, TypeError) as e:
                    raise ValueError(f"Invalid value for {env_var}: {value}") from e

        self._config = ApiClientConfig(**config_data)
        return self._config

    def load_from_file(self, config_path: Optional[Union[str, Path]] = None) -> ApiClientConfig:
        """Load configuration from a JSON file.

        Args:
            config_path: Path to configuration file. If None, searches default paths.

        Returns:
            ApiClientConfig: Loaded configuration

        Raises:
            FileNotFoundError: If configuration file is not found
            ValueError: If configuration file is invalid
        """
        if config_path:
            path = Path(config_path)
        elif self.config_path:
            path = self.config_path
        else:
            path = next((p for p in self.DEFAULT_CONFIG_PATHS if p.exists()), None)
            if not path:
                raise FileNotFoundError(
                    f"Configuration file not found in default locations: "
                    f"{[str(p) for p in self.DEFAULT_CONFIG_PATHS]}"
                )

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file {path}: {e}") from e

        try:
            self._config = ApiClientConfig.from_dict(data)
        except Exception as e:
            raise ValueError(f"Error loading configuration from {path}: {e}") from e
        self.config_path = path
        return self._config

    def get_config(self) -> Optional[ApiClientConfig]:
        """Get current configuration, None if nothing was loaded yet."""
        return self._config
