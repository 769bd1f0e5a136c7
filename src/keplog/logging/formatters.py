"""
Custom formatters for keplog logging.

This module provides the formatter for general application logs and a
specialized one for API call records.
"""

import logging
from datetime import datetime
from .utils import sanitize_data, sanitize_string
from keplog.constants import SENSITIVE_KEYS


class KeplogFormatter(logging.Formatter):
    """
    Custom formatter for keplog log entries.

    Provides structured formatting with optional components and
    automatic sanitization of sensitive data.
    """

    def __init__(
        self,
        include_timestamps: bool = True,
        include_process_info: bool = False,
        sanitize_sensitive: bool = True,
        sensitive_keys: tuple = None,
    ):
        self.include_timestamps = include_timestamps
        self.include_process_info = include_process_info
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        fmt_parts = []
        if include_timestamps:
            fmt_parts.append("%(asctime)s")
        fmt_parts.extend(["%(levelname)s", "[%(name)s]", "%(message)s"])
        if include_process_info:
            fmt_parts.insert(-1, "[PID:%(process)d]")
        super().__init__(fmt=" ".join(fmt_parts), datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record with optional sanitization.

        Args:
            record: The log record to format

        Returns:
            str: Formatted log message
        """
        if self.sanitize_sensitive:
            if isinstance(record.msg, (dict, list)):
                record.msg = sanitize_data(record.msg, self.sensitive_keys)
            elif isinstance(record.args, (tuple, list)):
                record.args = tuple(
                    sanitize_data(arg, self.sensitive_keys)
                    if isinstance(arg, (dict, list)) else arg
                    for arg in record.args
                )

        return super().format(record)


class APICallFormatter(logging.Formatter):
    """
    Specialized formatter for API call logging.

    Produces one line per request with method, URL, status and duration,
    followed by the error message when the call failed.
    """

    def __init__(self, sanitize_sensitive: bool = True, sensitive_keys: tuple = None):
        self.sanitize_sensitive = sanitize_sensitive
        self.sensitive_keys = sensitive_keys or SENSITIVE_KEYS
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        method = getattr(record, "api_method", "UNKNOWN")
        url = getattr(record, "api_url", "")
        status = getattr(record, "api_status", None) or "---"
        duration = round(getattr(record, "api_duration", 0) * 1000, 2)

        if self.sanitize_sensitive:
            url = sanitize_string(url, self.sensitive_keys)

        # Example: 2026-02-02 17:27:34 DEBUG [keplog.api] GET https://... -> 200 (120.0ms)
        line = (
            f"{timestamp} {record.levelname} [{record.name}] "
            f"{method} {url} -> {status} ({duration}ms)"
        )
        request_size = getattr(record, "api_request_size", None)
        if request_size:
            line += f" sent {request_size} bytes"
        lines = [line]

        api_error = getattr(record, "api_error", None)
        if api_error:
            lines.append(f"    Error: {api_error}")

        return "\n".join(lines)
