"""
Main logging module for the keplog CLI.

This module provides the primary logging interface, logger setup with
daily rotation, and structured API call logging.
"""

import logging
import logging.handlers
import os
import sys
from typing import Optional, Dict, Any

from keplog.constants import ENV_LOG_LEVEL
from .config import LogConfig, LogLevel, get_log_file_path
from .formatters import KeplogFormatter, APICallFormatter
from .utils import cleanup_old_logs


# Loggers handed out by get_logger, keyed by name
_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False


def _level_from_environment(config: LogConfig) -> None:
    user_level = os.environ.get(ENV_LOG_LEVEL, "").upper()
    if user_level in [lev.value for lev in LogLevel]:
        config.default_level = LogLevel(user_level)


def _rotating_handler(log_file_path, config: LogConfig) -> logging.Handler:
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_file_path,
        when='midnight',
        interval=1,
        backupCount=config.log_retention_days,
        encoding='utf-8',
        utc=False
    )
    # Rotated files are suffixed YYYY-MM-DD
    handler.suffix = "%Y-%m-%d"
    return handler


def _attach(
    logger: logging.Logger,
    handler: logging.Handler,
    level: int,
    formatter: logging.Formatter,
) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def setup_logging(config: Optional[LogConfig] = None, force_reconfigure: bool = False) -> None:
    """
    Configure the ``keplog`` logger tree.

    Records go to a daily-rotated file. They are echoed to stderr only at
    DEBUG level or when a console level below ERROR is configured. API call
    records go only to the file, in their own format.
    ``KEPLOG_LOG_LEVEL`` overrides the file level when no config is given.

    Args:
        config: LogConfig instance, uses default if None
        force_reconfigure: Rebuild handlers even if logging is already set up
    """
    global _logging_configured

    if _logging_configured and not force_reconfigure:
        return

    if config is None:
        config = LogConfig()
        _level_from_environment(config)

    log_file_path = get_log_file_path(config)
    file_level = getattr(logging, config.default_level.value)
    sanitizing = dict(
        sanitize_sensitive=config.sanitize_sensitive_data,
        sensitive_keys=config.sensitive_keys,
    )

    root_logger = logging.getLogger("keplog")
    root_logger.setLevel(file_level)
    root_logger.handlers.clear()
    _attach(
        root_logger,
        _rotating_handler(log_file_path, config),
        file_level,
        KeplogFormatter(
            include_timestamps=config.include_timestamps,
            include_process_info=config.include_process_info,
            **sanitizing,
        ),
    )
    # Commands print their own errors; echo records only when asked to
    if config.console_level != LogLevel.ERROR or config.default_level == LogLevel.DEBUG:
        _attach(
            root_logger,
            logging.StreamHandler(sys.stderr),
            getattr(logging, config.console_level.value),
            KeplogFormatter(include_timestamps=False, **sanitizing),
        )

    api_logger = logging.getLogger("keplog.api")
    api_logger.setLevel(logging.DEBUG)
    api_logger.handlers.clear()
    api_logger.propagate = False
    if config.log_api_requests:
        _attach(
            api_logger,
            _rotating_handler(log_file_path, config),
            logging.DEBUG,
            APICallFormatter(**sanitizing),
        )

    try:
        cleanup_old_logs(log_file_path.parent, config.log_retention_days)
    except OSError:
        pass

    _logging_configured = True

    get_logger("keplog.setup").info(
        f"Logging initialized - File: {log_file_path}, "
        f"Level: {config.default_level.value}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified name.

    Args:
        name: Logger name (e.g., 'keplog.commands.upload')

    Returns:
        logging.Logger: Logger instance
    """
    if not _logging_configured:
        setup_logging()

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]


def log_api_call(
    method: str,
    url: str,
    status_code: Optional[int] = None,
    duration: Optional[float] = None,
    request_size: Optional[int] = None,
    error: Optional[str] = None,
    logger_name: str = "keplog.api"
) -> None:
    """
    Log an API call with structured information.

    Args:
        method: HTTP method
        url: Request URL
        status_code: Response status code
        duration: Request duration in seconds
        request_size: Request payload size in bytes
        error: Error message if request failed
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)

    extra = {
        "api_method": method,
        "api_url": url,
        "api_status": status_code,
        "api_duration": duration or 0,
    }
    if request_size is not None:
        extra["api_request_size"] = request_size
    if error:
        extra["api_error"] = error

    if error or (status_code and status_code >= 500):
        logger.error("API call failed", extra=extra)
    elif status_code and 400 <= status_code < 500:
        logger.warning("API call client error", extra=extra)
    else:
        logger.debug("API call completed", extra=extra)


def log_application_event(
    event: str,
    level: str = "info",
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "keplog.app"
) -> None:
    """
    Log application-level events at appropriate levels.

    Args:
        event: Description of the event
        level: Log level (debug, info, warning, error)
        details: Additional event details
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {"app_event": event}

    if details:
        extra["app_details"] = details

    log_method = getattr(logger, level.lower(), logger.info)
    log_method(f"Application: {event}", extra=extra)
