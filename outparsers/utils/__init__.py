"""Utility modules for outparsers."""

from .logger import LogCategory, LogConfig, configure_logging, get_logger


__all__ = [
    "LogCategory",
    "LogConfig",
    "configure_logging",
    "get_logger",
]
