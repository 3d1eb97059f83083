"""Logging utility for outparsers.

Uses structlog for structured logging with optional JSON output.
Parsers log at debug level under the ``parsing`` category, which is
disabled by default so that hot parse loops stay quiet.

Configuration:
    Environment variables:
    - OUTPARSERS_LOG_LEVEL: Global log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - OUTPARSERS_JSON_LOGS: Enable JSON output ("1", "true", "yes")
    - OUTPARSERS_LOG_PARSING: Enable parser logs ("1", "true", "yes")
    - OUTPARSERS_LOG_CONFIG: Enable configuration logs ("1", "true", "yes")

    Or use LogConfig programmatically:
    >>> from outparsers.utils.logger import configure_logging, LogConfig
    >>> configure_logging(config=LogConfig(level="DEBUG", enable_parsing_logs=True))
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog


class LogCategory(Enum):
    """Categories of logs that can be enabled/disabled."""

    PARSING = "parsing"  # Output parser extraction
    CONFIG = "config"  # Config file resolution and loading
    CLI = "cli"  # Command line invocations
    GENERAL = "general"


@dataclass
class LogConfig:
    """Configuration for outparsers logging.

    Example:
        >>> config = LogConfig(
        ...     level="DEBUG",
        ...     json_logs=True,
        ...     enable_parsing_logs=True,
        ... )
    """

    level: str = "INFO"

    json_logs: bool = False

    enable_parsing_logs: bool = False
    enable_config_logs: bool = False
    enable_cli_logs: bool = True

    # Always log errors regardless of category settings
    errors_always_logged: bool = True

    # Always log warnings regardless of category settings
    warnings_always_logged: bool = True

    def is_category_enabled(self, category: LogCategory) -> bool:
        """Check if a log category is enabled."""
        category_map = {
            LogCategory.PARSING: self.enable_parsing_logs,
            LogCategory.CONFIG: self.enable_config_logs,
            LogCategory.CLI: self.enable_cli_logs,
            LogCategory.GENERAL: True,
        }
        return category_map.get(category, True)

    @classmethod
    def from_env(cls) -> "LogConfig":
        """Create LogConfig from environment variables."""

        def parse_bool(val: str | None) -> bool:
            return val is not None and val.lower() in ("1", "true", "yes")

        return cls(
            level=os.getenv("OUTPARSERS_LOG_LEVEL", "INFO"),
            json_logs=parse_bool(os.getenv("OUTPARSERS_JSON_LOGS")),
            enable_parsing_logs=parse_bool(os.getenv("OUTPARSERS_LOG_PARSING")),
            enable_config_logs=parse_bool(os.getenv("OUTPARSERS_LOG_CONFIG")),
            enable_cli_logs=parse_bool(os.getenv("OUTPARSERS_LOG_CLI", "1")),
            errors_always_logged=True,
            warnings_always_logged=True,
        )


_log_config: LogConfig = LogConfig.from_env()


def _make_category_filter(config: LogConfig):
    """Create a structlog processor that drops events from disabled categories.

    Errors and warnings pass through when the config says they always should.
    """

    def category_filter(logger, method_name, event_dict):
        log_level = event_dict.get("level", "info").lower()

        if config.errors_always_logged and log_level in ("error", "critical", "exception"):
            return event_dict

        if config.warnings_always_logged and log_level == "warning":
            return event_dict

        category_str = event_dict.get("category", "general")
        try:
            category = LogCategory(category_str)
        except ValueError:
            category = LogCategory.GENERAL

        if not config.is_category_enabled(category):
            raise structlog.DropEvent

        return event_dict

    return category_filter


def _configure_structlog(config: LogConfig) -> None:
    """Configure structlog with appropriate processors."""
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _make_category_filter(config),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if config.json_logs:
        processors = [
            *shared_processors,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


_configure_structlog(_log_config)


def get_logger(name: str, category: LogCategory | None = None) -> Any:
    """Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__).
        category: Optional log category for filtering.

    Returns:
        Configured structlog logger instance.

    Example:
        >>> logger = get_logger(__name__, category=LogCategory.PARSING)
        >>> logger.debug("Extracted values", keys=["action"])
    """
    # Lazy proxy: the logger is built on each call, so configure_logging()
    # also applies to module-level loggers created at import time.
    if category is not None:
        return structlog.get_logger(name, category=category.value)

    return structlog.get_logger(name)


def get_config() -> LogConfig:
    """Get the current logging configuration."""
    return _log_config


def configure_logging(
    level: str = "INFO",
    json_logs: bool | None = None,
    config: LogConfig | None = None,
) -> None:
    """Configure global logging settings.

    Args:
        level: Logging level.
        json_logs: If True, output JSON logs. If None, keeps the current setting.
        config: Optional LogConfig instance for full control.
    """
    global _log_config

    if config is not None:
        _log_config = config
    else:
        _log_config = LogConfig(
            level=level,
            json_logs=json_logs if json_logs is not None else _log_config.json_logs,
            enable_parsing_logs=_log_config.enable_parsing_logs,
            enable_config_logs=_log_config.enable_config_logs,
            enable_cli_logs=_log_config.enable_cli_logs,
        )

    _configure_structlog(_log_config)

