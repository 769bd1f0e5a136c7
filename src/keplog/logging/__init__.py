"""
keplog Logging Module

This module provides logging for the keplog CLI. Log records go to a
single daily-rotated file in a platform-specific directory. Commands
print their own user-facing errors, so stderr echo is off by default.

Key Features:
- Single log file with daily rotation
- Cross-platform log directory detection
- API call logging with method, URL, status and timing
- Automatic sanitization of API keys and other secrets
"""

from .logger import (
    get_logger,
    setup_logging,
    log_api_call,
    log_application_event,
)
from .config import LogConfig, LogLevel
from .utils import sanitize_data, get_log_directory

__all__ = [
    "get_logger",
    "setup_logging",
    "log_api_call",
    "log_application_event",
    "LogLevel",
    "LogConfig",
    "sanitize_data",
    "get_log_directory"
]
