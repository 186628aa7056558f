"""Structured logging for the duplicate face check function.

Every invocation binds its request id and image to structlog's context
variables through ``invocation_context``, so each line logged while the
check runs can be traced back to the upload that triggered it.
"""
import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

import structlog
from structlog.stdlib import ProcessorFormatter

from face_dedup.core.config import Settings, settings as default_settings

# Libraries whose INFO output would drown the function's own events
QUIET_LOGGERS = ("boto3", "botocore", "aiobotocore", "aioboto3", "urllib3")


def _renderer(settings: Settings) -> structlog.types.Processor:
    if settings.ENVIRONMENT == "development":
        return structlog.dev.ConsoleRenderer(colors=True)
    # CloudWatch Logs Insights parses one JSON object per line
    return structlog.processors.JSONRenderer()


def _service_fields(settings: Settings) -> structlog.types.Processor:
    def add_service(logger: Any, method_name: str, event_dict: dict) -> dict:
        event_dict.setdefault("service", settings.PROJECT_NAME)
        event_dict.setdefault("version", settings.VERSION)
        return event_dict
    return add_service


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Route structlog through a single stdout handler on the root logger.

    The Lambda runtime installs its own handler on the root logger, which is
    replaced so records are not written twice.
    """
    settings = settings or default_settings

    processors: List[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _service_fields(settings),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if settings.ENVIRONMENT != "development":
        processors.append(structlog.processors.format_exc_info)
    processors.append(ProcessorFormatter.wrap_for_formatter)

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ProcessorFormatter(processor=_renderer(settings)))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def invocation_context(**values: Any) -> Iterator[None]:
    """Bind values to every log line emitted until the block exits.

    Values left by a previous invocation in the same process are cleared
    first, and everything is cleared again on exit.
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**values)
    try:
        yield
    finally:
        structlog.contextvars.clear_contextvars()


def bind_context(**values: Any) -> None:
    """Add values to the current invocation's logging context."""
    structlog.contextvars.bind_contextvars(**values)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance compatible with standard logging.

    Args:
        name: Name for the logger, typically __name__

    Returns:
        structlog.stdlib.BoundLogger: Configured logger instance
    """
    return structlog.get_logger(name)
