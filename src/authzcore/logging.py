"""Logging utilities for authzcore.

This module provides:
- Logging configuration from AuthzConfig
- Length-bounded previews of values for log lines
- A formatter carrying user_id / project_key request context
- A logger adapter that attaches that context to every record
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import AuthzConfig, LogLevel

_CONTEXT_FIELDS = ("user_id", "project_key")

_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "taskName", "exc_info", "exc_text", "stack_info",
        *_CONTEXT_FIELDS,
    }
)


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a single-line, length-bounded preview of a value for logging.

    Args:
        value: The value to preview (any type)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list, set, tuple)):
        try:
            s = json.dumps(value if not isinstance(value, set) else sorted(value, key=str), default=str)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


class AuthzFormatter(logging.Formatter):
    """Formatter that includes request context and optional JSON output."""

    def __init__(self, json_format: bool = True, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in _CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            log_data["level"],
            log_data["logger"],
        ]
        for key in _CONTEXT_FIELDS:
            if key in log_data:
                parts.append(f"{key}={log_data[key]}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class AuthzLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds user_id and project_key to log records.

    Usage:
        logger = get_authz_logger(__name__, user_id=uid)
        logger.info("Aggregated permissions", project_key="demo")
    """

    def __init__(
        self,
        logger: logging.Logger,
        user_id: Optional[str] = None,
        project_key: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.user_id = user_id
        self.project_key = project_key

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        user_id = kwargs.pop("user_id", self.user_id)
        project_key = kwargs.pop("project_key", self.project_key)

        extra = kwargs.get("extra", {})
        if user_id:
            extra["user_id"] = user_id
        if project_key:
            extra["project_key"] = project_key
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(
    config: Optional[AuthzConfig] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Configure root logging from an AuthzConfig.

    Args:
        config: AuthzConfig instance (if None, loads from environment)
        json_format: Override ``config.log_json``
    """
    if config is None:
        from .config import load_config_from_env
        config = load_config_from_env()

    level_map = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
        LogLevel.CRITICAL: logging.CRITICAL,
    }
    log_level = level_map.get(LogLevel(config.log_level), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        AuthzFormatter(json_format=config.log_json if json_format is None else json_format)
    )
    root_logger.addHandler(console_handler)

    if config.service_name:
        logging.getLogger(config.service_name).setLevel(log_level)


def get_authz_logger(
    name: str,
    user_id: Optional[str] = None,
    project_key: Optional[str] = None,
) -> AuthzLoggerAdapter:
    """Get a logger adapter bound to a request's user and project.

    Example:
        logger = get_authz_logger(__name__, user_id=uid)
        logger.warning("collaboration mode lookup failed: %s", err)
    """
    logger = logging.getLogger(name)
    return AuthzLoggerAdapter(logger, user_id=user_id, project_key=project_key)


__all__ = [
    "AuthzFormatter",
    "AuthzLoggerAdapter",
    "get_authz_logger",
    "safe_preview",
    "setup_logging",
]
