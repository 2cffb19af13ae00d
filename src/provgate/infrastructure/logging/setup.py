from __future__ import annotations

import copy
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

import structlog

from provgate.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)

# Uvicorn's own logger layout; formatters get swapped for structlog below.
_UVICORN_LOGGING: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {},
    "handlers": {
        "default": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
        },
        "access": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "uvicorn": {"handlers": ["default"], "level": "INFO", "propagate": False},
        "uvicorn.error": {"level": "INFO"},
        "uvicorn.access": {"handlers": ["access"], "level": "INFO", "propagate": False},
        "httpx": {"level": "WARNING"},
    },
}


def _drop_color_message(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    # uvicorn duplicates every message as "color_message".
    event_dict.pop("color_message", None)
    return event_dict


def _add_record_created_timestamp_utc(
    _: Any, __: Any, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Stamp foreign (stdlib) records with their creation time, in UTC."""
    record = event_dict.get("_record")
    if isinstance(record, logging.LogRecord):
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        event_dict["timestamp"] = dt.isoformat().replace("+00:00", "Z")
    return event_dict


def _renderer(config: AppConfig) -> structlog.typing.Processor:
    if config.log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def build_logging_config(config: AppConfig) -> dict[str, Any]:
    """
    Build a dictConfig for stdlib + uvicorn loggers, rendered through structlog.

    The same dict is handed to ``uvicorn.run(log_config=...)`` so that
    uvicorn does not install its own formatters on startup.
    """
    cfg = copy.deepcopy(_UVICORN_LOGGING)

    cfg["formatters"]["structlog"] = {
        "()": structlog.stdlib.ProcessorFormatter,
        "foreign_pre_chain": [
            _drop_color_message,
            structlog.contextvars.merge_contextvars,
            _add_record_created_timestamp_utc,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
        ],
        "processors": [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(config),
        ],
    }
    for handler in cfg["handlers"].values():
        handler["formatter"] = "structlog"

    level = config.log_level
    for name, logger_cfg in cfg["loggers"].items():
        # httpx stays quieter than the app unless we are debugging.
        if name == "httpx" and level != "DEBUG":
            continue
        logger_cfg["level"] = level

    cfg["root"] = {"handlers": ["default"], "level": level}
    return cfg


def configure_logging(config: AppConfig) -> dict[str, Any]:
    """
    Configure structlog + stdlib logging.

    Returns the dictConfig that was applied (also passed on to uvicorn).
    """
    structlog.configure(
        processors=[
            _drop_color_message,
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    cfg = build_logging_config(config)
    logging.config.dictConfig(cfg)

    log.info(
        "logging_configured", log_format=config.log_format, log_level=config.log_level
    )
    return cfg
