"""Logging utilities with request context and merchant-text protection."""
import logging
import uuid
from typing import Any, Dict, Optional

import structlog

logger = structlog.get_logger()

# Keys whose values are never written to logs verbatim.
REDACTED_KEYS = ("email", "phone", "address", "shop_token", "access_token", "session", "authorization")


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure structlog for JSON output.

    Args:
        log_level: Minimum level name (DEBUG, INFO, WARNING, ...)
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger_with_context(
    request_id: Optional[str] = None,
    locale: Optional[str] = None,
    event_type: Optional[str] = None,
) -> structlog.BoundLogger:
    """
    Get logger bound to a planning request.

    Args:
        request_id: Request ID assigned by the adapter
        locale: Locale sent with the request
        event_type: Event type (required for all events)

    Returns:
        Bound logger with context
    """
    context: Dict[str, Any] = {"event_type": event_type or "unknown"}

    if request_id:
        context["request_id"] = request_id

    if locale:
        context["locale"] = locale

    context["event_id"] = str(uuid.uuid4())

    return logger.bind(**context)


def sanitize_for_logging(data: Any, max_length: int = 200) -> Any:
    """
    Sanitize data for logging (redact secrets, truncate long strings).

    Args:
        data: Data to sanitize
        max_length: Maximum length for strings

    Returns:
        Sanitized data
    """
    if isinstance(data, str):
        if len(data) > max_length:
            return data[:max_length] + "..."
        return data
    elif isinstance(data, dict):
        sanitized = {}
        for key, value in data.items():
            if str(key).lower() in REDACTED_KEYS:
                if isinstance(value, str):
                    sanitized[key] = f"<{len(value)} chars>"
                else:
                    sanitized[key] = "<redacted>"
            else:
                sanitized[key] = sanitize_for_logging(value, max_length)
        return sanitized
    elif isinstance(data, (list, tuple)):
        return [sanitize_for_logging(item, max_length) for item in data]
    else:
        return data


def log_event(
    event_type: str,
    request_id: Optional[str] = None,
    locale: Optional[str] = None,
    level: str = "info",
    **kwargs,
):
    """
    Log event with required fields.

    Args:
        event_type: Event type (required)
        request_id: Request ID (optional)
        locale: Request locale (optional)
        level: Log level (info, warning, error, debug)
        **kwargs: Additional log fields
    """
    log = get_logger_with_context(
        request_id=request_id,
        locale=locale,
        event_type=event_type,
    )

    sanitized_kwargs = sanitize_for_logging(kwargs)

    log_method = getattr(log, level.lower(), log.info)
    log_method(event_type, **sanitized_kwargs)
