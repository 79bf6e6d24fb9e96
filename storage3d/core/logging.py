"""
Logging configuration for the MCP service.
"""

import logging
import re
import sys

import structlog

_SECRET_KEYS = ("secret_key", "access_key", "token", "authorization")
_BASE64_BLOB = re.compile(r"[A-Za-z0-9+/=]{512,}")


def redact_secrets_processor(logger, method_name, event_dict):
    """
    Structlog processor that keeps credentials and inline payloads out of logs.

    Masks values whose key looks like a credential and truncates long
    base64 runs (uploaded file bodies) in string values.
    """
    for key, value in list(event_dict.items()):
        if any(marker in key.lower() for marker in _SECRET_KEYS):
            event_dict[key] = "***"
        elif isinstance(value, str) and len(value) >= 512:
            event_dict[key] = _BASE64_BLOB.sub("<base64 omitted>", value)

    return event_dict


def setup_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Setup structured logging with structlog.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_logs: Render JSON lines (default) or the console renderer
    """

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        stream=sys.stdout,
        format="%(message)s",
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        redact_secrets_processor,
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
