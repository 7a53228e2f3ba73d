"""Logging configuration using structlog.

Modules in this package log through the standard library
(`logging.getLogger(__name__)`); `configure_logging` routes those records
through a structlog formatter so console and JSON output share one pipeline.
"""

from __future__ import annotations

import logging
import sys

import structlog

from .settings import Settings, load_settings

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def _resolve_level(value: str | int | None, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if value is None:
        return logging.INFO
    if isinstance(value, int):
        return value
    if value.strip().isdigit():
        return int(value.strip())
    mapping = logging.getLevelNamesMapping()
    return mapping.get(value.strip().upper(), logging.INFO)


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    log_file: str | None = None,
    json: bool | None = None,
    force: bool = False,
    settings: Settings | None = None,
) -> None:
    """Configure stdlib logging and structlog with a shared formatter.

    Explicit arguments win over settings; settings default to the current
    environment.

    Args:
        level: Level name or number.
        debug: Force DEBUG level.
        log_file: Optional file path that receives a copy of the output.
        json: Render JSON lines instead of console output.
        force: Replace existing root handlers instead of leaving them alone.
        settings: Settings snapshot to read defaults from.
    """

    settings = settings if settings is not None else load_settings()
    resolved_level = _resolve_level(level if level is not None else settings.log_level, debug)
    resolved_json = settings.log_json if json is None else json
    resolved_log_file = settings.log_file if log_file is None else log_file

    renderer: structlog.types.Processor
    if resolved_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=_PRE_CHAIN,
    )

    root_logger = logging.getLogger()
    if not root_logger.handlers or force:
        handlers: list[logging.Handler] = []
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        handlers.append(stream_handler)

        if resolved_log_file:
            file_handler = logging.FileHandler(resolved_log_file)
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)

        if force:
            for handler in list(root_logger.handlers):
                root_logger.removeHandler(handler)
                handler.close()

        root_logger.setLevel(resolved_level)
        for handler in handlers:
            root_logger.addHandler(handler)

    for name in settings.quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
