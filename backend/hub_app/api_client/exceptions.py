"""
Dashboard API Client Exceptions

Custom exception classes for the device-control service client.
"""

import logging
from enum import Enum
from typing import Dict, Any, Optional


logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Error severity levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class DashboardClientError(Exception):
    """
    Base exception class for dashboard API client errors
    """

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.details = details or {}
        self.original_exception = original_exception
        self._log_error()

    def _log_error(self):
        """Log the error based on severity"""
        log_message = f"{self.__class__.__name__}: {self.message}"
        if self.details:
            log_message += f" - Details: {self.details}"

        if self.severity == ErrorSeverity.LOW:
            logger.debug(log_message)
        elif self.severity == ErrorSeverity.MEDIUM:
            logger.warning(log_message)
        elif self.severity == ErrorSeverity.HIGH:
            logger.error(log_message)
        elif self.severity == ErrorSeverity.CRITICAL:
            logger.critical(log_message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "severity": self.severity.value,
            "details": self.details
        }


class ApiConfigurationError(DashboardClientError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str = "Configuration error", **kwargs):
        super().__init__(message, severity=ErrorSeverity.CRITICAL, **kwargs)


class TransportError(DashboardClientError):
    """
    Raised when a request to the device-control service fails.

    ``status_code`` is the last HTTP status observed (None when the failure
    happened below HTTP), ``attempts`` the number of attempts made and
    ``body`` the raw response text of the failing response, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        attempts: int = 1,
        body: Optional[str] = None,
        **kwargs
    ):
        self.status_code = status_code
        self.attempts = attempts
        self.body = body
        details = kwargs.pop('details', {})
        details['attempts'] = attempts
        if status_code is not None:
            details['status_code'] = status_code
        kwargs.setdefault('severity', ErrorSeverity.HIGH)
        super().__init__(message, details=details, **kwargs)

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500


class FetchError(TransportError):
    """Raised when loading a collection or resource fails"""

    def __init__(self, message: str = "Failed to load data", **kwargs):
        super().__init__(message, **kwargs)


class CreateError(TransportError):
    """Raised when creating a document fails"""

    def __init__(self, message: str = "Failed to create", **kwargs):
        super().__init__(message, **kwargs)


class UpdateError(TransportError):
    """Raised when updating a document fails"""

    def __init__(self, message: str = "Failed to update", **kwargs):
        super().__init__(message, **kwargs)


class DeleteError(TransportError):
    """Raised when deleting a document fails"""

    def __init__(self, message: str = "Failed to delete", **kwargs):
        super().__init__(message, **kwargs)


def wrap_transport_error(error_class, error: TransportError, message: Optional[str] = None) -> TransportError:
    """
    Re-raise a transport failure as a repository-level error

    Args:
        error_class: TransportError subclass to create
        error: Original transport failure
        message: Optional message overriding the class default

    Returns:
        New error instance carrying the status code and attempt count of ``error``
    """
    kwargs = dict(
        status_code=error.status_code,
        attempts=error.attempts,
        body=error.body,
        original_exception=error,
        severity=ErrorSeverity.MEDIUM if error.is_client_error else ErrorSeverity.HIGH,
    )
    if message is not None:
        return error_class(message, **kwargs)
    return error_class(**kwargs)
