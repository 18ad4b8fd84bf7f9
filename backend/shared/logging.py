"""Structured logging configuration with structlog.

Level and output format are normally passed in from service settings. When a
caller leaves them unset they fall back to the environment:
- LOG_FORMAT: "json" for log aggregation, "console" or unset for
  human-readable output.
- LOG_LEVEL: "DEBUG", "INFO" (default), "WARNING", "ERROR", or "CRITICAL".
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from typing import Any

LOG_FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

LOG_FORMATS = frozenset({"json", "console"})
LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _enum_value(value: object) -> object:
    return value.value if isinstance(value, Enum) else value


def _serialize_enums(
    _logger: object,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Replace Enum instances with their .value for readable log output.

    Also reaches one level into dicts (keys and values) and into lists, tuples
    and sets, which is where Side and status enums show up in log fields.
    """
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
        elif isinstance(value, dict):
            event_dict[key] = {_enum_value(k): _enum_value(v) for k, v in value.items()}
        elif isinstance(value, list | tuple | set | frozenset):
            event_dict[key] = [_enum_value(v) for v in value]
    return event_dict


def _is_test() -> bool:
    return "pytest" in sys.modules


def resolve_log_format(value: str | None = None) -> bool:
    """Return True for JSON output. ``None`` reads LOG_FORMAT."""
    if value is None:
        value = os.environ.get("LOG_FORMAT", "")
    value = value.lower()
    if value and value not in LOG_FORMATS:
        msg = f"Invalid log format {value!r}. Must be 'json', 'console', or unset."
        raise ValueError(msg)
    return value == "json"


def resolve_log_level(value: int | str | None = None) -> int:
    """Map a level name or number to a logging level. ``None`` reads LOG_LEVEL, defaulting to INFO."""
    if isinstance(value, int):
        return value
    if value is None:
        value = os.environ.get("LOG_LEVEL", "INFO")
    name = value.upper()
    if name not in LOG_LEVELS:
        msg = f"Invalid log level {value!r}. Must be one of {', '.join(sorted(LOG_LEVELS))}."
        raise ValueError(msg)
    return getattr(logging, name)


def _build_formatter(*, json_mode: bool, colors: bool = False) -> logging.Formatter:
    renderer = structlog.processors.JSONRenderer() if json_mode else structlog.dev.ConsoleRenderer(colors=colors)
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )


def setup_logging(
    log_dir: Path | str | None = None,
    *,
    level: int | str | None = None,
    log_format: str | None = None,
) -> Path | None:
    """Configure structlog with stdout and optional file output.

    When log_dir is provided, a datetime-stamped log file is created inside
    it and its path returned; otherwise returns None.
    """
    json_mode = resolve_log_format(log_format)
    resolved_level = resolve_log_level(level)

    # format_exc_info runs in the formatter so file output renders tracebacks once
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _serialize_enums,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(_build_formatter(json_mode=json_mode, colors=sys.stdout.isatty()))
    root_logger.addHandler(stdout_handler)

    if log_dir is None or _is_test():
        return None

    dir_path = Path(log_dir)
    dir_path.mkdir(parents=True, exist_ok=True)
    file_path = dir_path / f"{datetime.now(tz=UTC).strftime(LOG_FILE_TIMESTAMP_FORMAT)}.log"
    file_handler = logging.FileHandler(file_path)
    file_handler.setFormatter(_build_formatter(json_mode=json_mode))
    root_logger.addHandler(file_handler)
    return file_path
