"""Logging setup for the marketplace functions. Vercel collects stdout."""

import os
import logging
import sys
from pythonjsonlogger import jsonlogger

from marketplace.utils.config import SERVICE_NAME

# Client libraries that log every HTTP round trip to Supabase at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "hpack", "postgrest", "storage3", "supabase")


class LoggingConfig:
    """Logging settings read once per cold start."""

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "json").lower()
    LOG_MASK_SENSITIVE = os.environ.get("LOG_MASK_SENSITIVE", "true").lower() == "true"
    LOG_CORRELATION_ID_HEADER = os.environ.get("LOG_CORRELATION_ID_HEADER", "X-Correlation-ID")
    LOG_SLOW_OPERATION_THRESHOLD_MS = int(os.environ.get("LOG_SLOW_OPERATION_THRESHOLD_MS", "1000"))

    _configured = False

    @classmethod
    def level(cls) -> int:
        return getattr(logging, cls.LOG_LEVEL, logging.INFO)

    @classmethod
    def build_formatter(cls) -> logging.Formatter:
        """JSON records tagged with the service name, or plain text for local runs."""
        if cls.LOG_FORMAT != "json":
            return logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

        return jsonlogger.JsonFormatter(
            "%(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level"},
            static_fields={"service": SERVICE_NAME},
            timestamp=True,
        )

    @classmethod
    def setup_logging(cls, force: bool = False) -> None:
        """Install the stdout handler on the root logger, once per process."""
        if cls._configured and not force:
            return

        stream = logging.StreamHandler(sys.stdout)
        stream.setFormatter(cls.build_formatter())

        root_logger = logging.getLogger()
        root_logger.handlers = [stream]
        root_logger.setLevel(cls.level())

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

        cls._configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
