"""
Logging configuration for the keplog CLI.

Settings for the log file and levels, and the per-platform log directory.
"""

import os
import platform
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from keplog.constants import LOG_FILE_NAME, LOG_RETENTION_DAYS, SENSITIVE_KEYS


class LogLevel(Enum):
    """Levels accepted by KEPLOG_LOG_LEVEL"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class LogConfig:
    """Knobs for setup_logging"""

    log_filename: str = f"{LOG_FILE_NAME}.log"
    log_retention_days: int = LOG_RETENTION_DAYS

    # File level; stderr only shows warnings and above
    default_level: LogLevel = LogLevel.INFO
    console_level: LogLevel = LogLevel.ERROR

    include_timestamps: bool = True
    include_process_info: bool = False

    # One record per HTTP request on the keplog.api logger
    log_api_requests: bool = True

    sanitize_sensitive_data: bool = True
    sensitive_keys: tuple = SENSITIVE_KEYS


def _platform_log_root() -> Path:
    system = platform.system().lower()

    if system == "windows":
        # %APPDATA%\keplog\logs
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata and Path(appdata).exists() else Path.home()
        return base / LOG_FILE_NAME / "logs"

    if system == "darwin":
        return Path.home() / "Library" / "Logs" / LOG_FILE_NAME

    # $XDG_DATA_HOME/keplog/logs, ~/.local/share by default
    xdg_data_home = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data_home) if xdg_data_home else Path.home() / ".local" / "share"
    return base / LOG_FILE_NAME / "logs"


def get_log_directory() -> Path:
    """
    Create and return the directory keplog writes its log file to.

    Falls back to ./logs when the platform directory cannot be created.
    """
    log_dir = _platform_log_root()
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir
    except OSError:
        fallback_dir = Path.cwd() / "logs"
        fallback_dir.mkdir(exist_ok=True)
        return fallback_dir


def get_log_file_path(config: Optional[LogConfig] = None) -> Path:
    """Full path of the active log file"""
    if config is None:
        config = LogConfig()

    return get_log_directory() / config.log_filename
