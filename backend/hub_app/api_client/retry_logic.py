"""
Retry Logic Module for the Dashboard API Client

Implements the retry policy shared by every request: bounded attempts,
exponential backoff with jitter and failure classification.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx


class FailureKind(Enum):
    """How a single attempt ended"""
    SUCCESS = "success"
    SERVER_ERROR = "server_error"   # 5xx, retried
    CLIENT_ERROR = "client_error"   # anything else outside 2xx, not retried
    NETWORK_ERROR = "network_error" # below HTTP, retried


@dataclass
class RetryConfig:
    """Configuration for retry behavior"""
    max_attempts: int = 6
    base_delay: float = 0.1
    max_delay: float = 2.0
    exponential_base: float = 2.0
    jitter: bool = True
    retriable_exceptions: tuple = (
        httpx.TransportError,
    )

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0 or self.max_delay < 0:
            raise ValueError("Retry delays cannot be negative")

    @property
    def max_retries(self) -> int:
        """Additional attempts allowed after the first one"""
        return self.max_attempts - 1


def calculate_delay(config: RetryConfig, attempt: int) -> float:
    """Calculate delay for given attempt with exponential backoff and jitter"""
    delay = min(
        config.base_delay * (config.exponential_base ** attempt),
        config.max_delay
    )

    if config.jitter:
        delay *= (0.5 + random.random() * 0.5)  # Add 0-50% jitter

    return delay


def classify_status(status_code: int) -> FailureKind:
    """Classify an HTTP status code for retry purposes"""
    if 200 <= status_code < 300:
        return FailureKind.SUCCESS
    if 500 <= status_code < 600:
        return FailureKind.SERVER_ERROR
    return FailureKind.CLIENT_ERROR


def is_retriable_exception(config: RetryConfig, exception: Exception) -> bool:
    """Check if an exception raised while sending a request is retriable"""
    return isinstance(exception, config.retriable_exceptions)


def classify_exception(config: RetryConfig, exception: Exception) -> Optional[FailureKind]:
    """NETWORK_ERROR for a retriable send failure, None for one that must propagate"""
    if is_retriable_exception(config, exception):
        return FailureKind.NETWORK_ERROR
    return None


DEFAULT_RETRY_CONFIG = RetryConfig()
