"""Structured log output (structlog on top of the logging module)."""

from dapp.log.setup import configure_logging, default_log_file, get_logger, shutdown_logging

__all__ = ["configure_logging", "default_log_file", "get_logger", "shutdown_logging"]
