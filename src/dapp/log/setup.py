"""
Structured logging setup.

structlog is wired onto the standard logging module through
``structlog.stdlib.ProcessorFormatter``: structlog loggers and plain
``logging`` loggers share one pipeline and are rendered by the same handlers
(a stderr console handler and a rolling file appender).
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, List, Optional

import structlog

from dapp.errors import LogSetupError
from dapp.path.validity import first_creatable_path, is_creatable
from dapp.path.xdg import BaseDirectories
from dapp.settings import LogSettings, get_settings

# Marks handlers installed here so re-configuration only replaces our own.
_HANDLER_ATTR = "_dapp_handler"

_ROTATION_WHEN = {
    "minutely": "M",
    "hourly": "H",
    "daily": "midnight",
}


def _shared_processors() -> List[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def _formatter(log_format: str, colors: bool = False) -> structlog.stdlib.ProcessorFormatter:
    if log_format == "json":
        processors = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=colors),
        ]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=processors,
    )


def default_log_file(app_name: str) -> Path:
    """``<app_name>.log`` in the first creatable of the XDG state and cache homes."""
    dirs = BaseDirectories(app_name)
    filename = f"{app_name}.log"
    path = first_creatable_path([dirs.state_home / filename, dirs.cache_home / filename])
    if path is None:
        raise LogSetupError(f"no creatable log directory for {app_name!r}")
    return path


def _file_handler(path: Path, rotation: str, backup_count: int) -> logging.Handler:
    if not is_creatable(path):
        raise LogSetupError(f"log file is not creatable: {path}")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if rotation == "never":
            return logging.FileHandler(path, encoding="utf-8")
        return TimedRotatingFileHandler(
            path,
            when=_ROTATION_WHEN[rotation],
            backupCount=backup_count,
            encoding="utf-8",
            utc=True,
        )
    except OSError as e:
        raise LogSetupError(f"could not open log file {path}: {e}") from e


def shutdown_logging() -> None:
    """Remove and close the handlers installed by ``configure_logging``."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            root.removeHandler(handler)
            handler.close()


def configure_logging(
    app_name: Optional[str] = None,
    *,
    level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str | Path] = None,
    rotation: Optional[str] = None,
    console: Optional[bool] = None,
    file: Optional[bool] = None,
    settings: Optional[LogSettings] = None,
) -> Optional[Path]:
    """
    Configure structlog and the root logger.

    Arguments left as None fall back to ``settings`` (or the global
    LogSettings). Calling again replaces the handlers from the previous call.

    Returns:
        The log file path, or None when file output is disabled.

    Raises:
        LogSetupError: If the log file cannot be created.
    """
    base = settings if settings is not None else get_settings().log
    values = base.model_dump()
    overrides = {
        "level": level,
        "format": log_format,
        "file": str(log_file) if log_file is not None else None,
        "rotation": rotation,
        "console": console,
        "file_enabled": file,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    resolved = LogSettings.model_validate(values)
    app = app_name or get_settings().app_name

    handlers: List[logging.Handler] = []
    if resolved.console:
        stream = logging.StreamHandler(sys.stderr)
        stream.setFormatter(_formatter(resolved.format, colors=sys.stderr.isatty()))
        handlers.append(stream)

    file_path: Optional[Path] = None
    if resolved.file_enabled:
        file_path = Path(resolved.file) if resolved.file else default_log_file(app)
        file_handler = _file_handler(file_path, resolved.rotation, resolved.backup_count)
        file_handler.setFormatter(_formatter(resolved.format))
        handlers.append(file_handler)

    shutdown_logging()
    root = logging.getLogger()
    root.setLevel(getattr(logging, resolved.level))
    for handler in handlers:
        setattr(handler, _HANDLER_ATTR, True)
        root.addHandler(handler)

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    structlog.get_logger(__name__).debug(
        "logging_configured",
        app=app,
        level=resolved.level,
        format=resolved.format,
        log_file=str(file_path) if file_path else None,
        rotation=resolved.rotation,
    )
    return file_path


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
