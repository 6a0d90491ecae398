"""Structured logging utilities with correlation IDs, performance timing, and sensitive data handling."""

import logging
import time
import uuid
import re
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Optional, Dict
from datetime import datetime, timezone

from marketplace.utils.logging_config import LoggingConfig, get_logger


_correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

_EMAIL_PATTERN = re.compile(r'[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}', re.IGNORECASE)


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for request tracing."""
    return f"req_{uuid.uuid4().hex[:12]}"


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from context."""
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: Optional[str]) -> None:
    """Set the correlation ID in context."""
    _correlation_id_var.set(correlation_id)


@contextmanager
def correlation_context(correlation_id: Optional[str] = None):
    """Context manager for correlation ID propagation."""
    if not correlation_id:
        correlation_id = generate_correlation_id()

    old_id = get_correlation_id()
    set_correlation_id(correlation_id)
    try:
        yield correlation_id
    finally:
        set_correlation_id(old_id)


def mask_sensitive_data(text: str) -> str:
    """Mask sensitive data in text (emails, keys)."""
    if not text or not LoggingConfig.LOG_MASK_SENSITIVE:
        return text

    text = _EMAIL_PATTERN.sub('[REDACTED_EMAIL]', text)

    # Supabase anon/service keys are JWTs
    text = re.sub(
        r'eyJ[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}',
        '[REDACTED_JWT]',
        text
    )

    text = re.sub(
        r'(?i)(api[_-]?key|token|secret|password|apikey)[\s:=]+([A-Za-z0-9_-]{20,})',
        r'\1=[REDACTED]',
        text
    )

    return text


def mask_email(email: Optional[str]) -> Optional[str]:
    """Keep the domain of an email for debugging, hide the mailbox."""
    if not email or not LoggingConfig.LOG_MASK_SENSITIVE:
        return email

    local, _, domain = email.partition("@")
    if not domain:
        return mask_sensitive_data(email)
    return f"{local[:1]}***@{domain}"


class StructuredLogger:
    """Logger with structured logging support."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _get_extra(self, **kwargs: Any) -> Dict[str, Any]:
        """Build extra fields for structured logging."""
        extra = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            extra["correlation_id"] = correlation_id

        extra.update(kwargs)

        return extra

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message with structured fields."""
        self.logger.debug(message, extra=self._get_extra(**kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message with structured fields."""
        self.logger.info(message, extra=self._get_extra(**kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message with structured fields."""
        self.logger.warning(message, extra=self._get_extra(**kwargs))

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log error message with structured fields."""
        self.logger.error(message, extra=self._get_extra(**kwargs), exc_info=exc_info)


def get_structured_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance."""
    return StructuredLogger(get_logger(name))


@contextmanager
def log_timing(operation_name: str, logger: Optional[StructuredLogger] = None, **context: Any):
    """Context manager for timing operations."""
    if logger is None:
        logger = get_structured_logger(__name__)

    start_time = time.perf_counter()
    logger.debug(f"Starting {operation_name}", operation=operation_name, **context)

    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Completed {operation_name}",
            operation=operation_name,
            processing_time_ms=round(elapsed_ms, 2),
            **context
        )

        if elapsed_ms > LoggingConfig.LOG_SLOW_OPERATION_THRESHOLD_MS:
            logger.warning(
                f"Slow operation detected: {operation_name}",
                operation=operation_name,
                processing_time_ms=round(elapsed_ms, 2),
                threshold_ms=LoggingConfig.LOG_SLOW_OPERATION_THRESHOLD_MS,
                **context
            )

