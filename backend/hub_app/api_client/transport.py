"""
HTTP transport with bounded retry for the device-control service.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import httpx

from .exceptions import TransportError, ErrorSeverity
from .retry_logic import (
    RetryConfig,
    FailureKind,
    DEFAULT_RETRY_CONFIG,
    calculate_delay,
    classify_status,
    classify_exception,
)


logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class RetryingTransport:
    """
    Executes single logical requests against the device-control service.

    Server errors (5xx) and failures below HTTP share one attempt counter and
    are retried until ``retry_config.max_attempts`` is reached. Any other
    non-2xx status fails immediately. The transport keeps no state between
    calls, so concurrent callers do not interfere.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        retry_config: Optional[RetryConfig] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        """
        Args:
            client: HTTP client bound to the service base URL
            retry_config: Retry policy, defaults to 6 attempts with jittered backoff
            sleep: Coroutine used to wait between attempts
        """
        self.client = client
        self.retry_config = retry_config or DEFAULT_RETRY_CONFIG
        self._sleep = sleep

    async def execute(self, method: str, url: str, body: Any = None) -> httpx.Response:
        """
        Execute a request, retrying transient failures

        Args:
            method: HTTP method (GET, POST or DELETE)
            url: Path relative to the client's base URL
            body: JSON-serializable request body, never sent for DELETE

        Returns:
            The first 2xx response

        Raises:
            TransportError: On a non-retriable status or when the attempt budget is exhausted
        """
        method = method.upper()
        max_attempts = self.retry_config.max_attempts
        last_status: Optional[int] = None
        last_exception: Optional[Exception] = None
        last_body: Optional[str] = None

        for attempt in range(1, max_attempts + 1):
            logger.debug(f"{method} {url} attempt {attempt}/{max_attempts}")
            try:
                response = await self._send(method, url, body)
            except Exception as e:
                if classify_exception(self.retry_config, e) is not FailureKind.NETWORK_ERROR:
                    raise
                last_exception = e
                last_status = None
                last_body = None
                logger.warning(f"{method} {url} attempt {attempt} failed: {e!r}")
            else:
                kind = classify_status(response.status_code)
                if kind is FailureKind.SUCCESS:
                    if attempt > 1:
                        logger.info(f"{method} {url} succeeded after {attempt} attempts")
                    return response

                if kind is FailureKind.CLIENT_ERROR:
                    raise TransportError(
                        f"{method} {url} failed with HTTP {response.status_code}",
                        status_code=response.status_code,
                        attempts=attempt,
                        body=response.text,
                        severity=ErrorSeverity.MEDIUM
                    )

                last_status = response.status_code
                last_exception = None
                last_body = response.text
                logger.warning(f"{method} {url} attempt {attempt} returned HTTP {response.status_code}")

            if attempt < max_attempts:
                delay = calculate_delay(self.retry_config, attempt - 1)
                logger.debug(f"Retrying {method} {url} in {delay:.2f}s")
                await self._sleep(delay)

        if last_exception is not None:
            last_error = repr(last_exception)
        else:
            last_error = f"HTTP {last_status}"
        logger.error(f"All {max_attempts} attempts exhausted for {method} {url}. Last error: {last_error}")
        raise TransportError(
            f"{method} {url} failed after {max_attempts} attempts: {last_error}",
            status_code=last_status,
            attempts=max_attempts,
            body=last_body,
            original_exception=last_exception
        )

    async def _send(self, method: str, url: str, body: Any) -> httpx.Response:
        if method == "DELETE" or body is None:
            return await self.client.request(method, url, headers=JSON_HEADERS)
        return await self.client.request(method, url, json=body, headers=JSON_HEADERS)
