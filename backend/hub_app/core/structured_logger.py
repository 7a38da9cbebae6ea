"""
Structured logging for the dashboard core.
JSON formatting, request/operation context carried across awaits.
"""

import logging
import json
import traceback
import time
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from functools import wraps
from typing import Iterator, Optional
import sys
import os

# Context variables tracking the logical request across async calls
request_context: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
operation_context: ContextVar[Optional[str]] = ContextVar('operation', default=None)

_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename', 'module',
    'lineno', 'funcName', 'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'message', 'exc_info', 'exc_text', 'stack_info', 'taskName',
}


class StructuredFormatter(logging.Formatter):
    """Formats log records as one JSON object per line"""

    def __init__(self, include_extra: bool = True):
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        if request_context.get():
            log_data["request_id"] = request_context.get()
        if operation_context.get():
            log_data["operation"] = operation_context.get()

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info)
            }

        if self.include_extra:
            for key, value in record.__dict__.items():
                if key not in _RESERVED_ATTRS:
                    log_data[key] = value

        return json.dumps(log_data, default=str, ensure_ascii=False)


@contextmanager
def request_scope(request_id: Optional[str] = None) -> Iterator[str]:
    """Bind a request id to every log line emitted inside the block"""
    request_id = request_id or uuid.uuid4().hex[:12]
    token = request_context.set(request_id)
    try:
        yield request_id
    finally:
        request_context.reset(token)


def log_async_operation(operation_name: str):
    """Decorator logging start, duration and failure of an async operation"""
    def decorator(func):
        logger = logging.getLogger(func.__module__)

        @wraps(func)
        async def wrapper(*args, **kwargs):
            token = operation_context.set(operation_name)
            start = time.monotonic()
            try:
                logger.debug(f"Starting operation: {operation_name}")
                result = await func(*args, **kwargs)
                duration_ms = (time.monotonic() - start) * 1000
                logger.debug(
                    f"Operation {operation_name} finished in {duration_ms:.1f}ms",
                    extra={"duration_ms": duration_ms, "status": "success"}
                )
                return result
            except Exception as e:
                duration_ms = (time.monotonic() - start) * 1000
                logger.error(
                    f"Operation {operation_name} failed: {str(e)}",
                    extra={"duration_ms": duration_ms, "status": "error", "error_type": type(e).__name__}
                )
                raise
            finally:
                operation_context.reset(token)

        return wrapper
    return decorator


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None, structured: Optional[bool] = None) -> None:
    """
    Configure the root logger

    Args:
        level: Logging level name
        log_dir: Directory for a JSON ``app.log`` file, no file logging if None
        structured: JSON console output; defaults to ENVIRONMENT == "production"
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if structured is None:
        structured = os.getenv("ENVIRONMENT") == "production"

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    if structured:
        console_handler.setFormatter(StructuredFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
    root_logger.addHandler(console_handler)

    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(os.path.join(log_dir, 'app.log'))
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(StructuredFormatter())
            root_logger.addHandler(file_handler)
        except (FileNotFoundError, PermissionError) as e:
            root_logger.warning(f"File logging disabled: {e}")

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
