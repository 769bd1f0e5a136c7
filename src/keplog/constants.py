"""
Global constants for the keplog CLI.
"""

__version__ = "1.0.0"

# Configuration files
LOCAL_CONFIG_FILENAME = ".keplog.json"
GLOBAL_CONFIG_FILENAME = ".keplogrc"

# Environment variables
ENV_PROJECT_ID = "KEPLOG_PROJECT_ID"
ENV_API_KEY = "KEPLOG_API_KEY"
ENV_API_URL = "KEPLOG_API_URL"
ENV_RELEASE = "KEPLOG_RELEASE"
ENV_LOG_LEVEL = "KEPLOG_LOG_LEVEL"
ENV_DEBUG = "DEBUG"

# API constants
DEFAULT_API_URL = "https://api.keplog.io"
API_PREFIX = "/api/v1/cli"
API_KEY_HEADER = "X-API-Key"

# Source maps
SOURCE_MAP_SUFFIX = ".map"
MULTIPART_FILE_FIELD = "files"

# Issue listing defaults
DEFAULT_ISSUE_STATUS = "open"
DEFAULT_ISSUE_LIMIT = 50
DEFAULT_EVENT_LIMIT = 20
ISSUE_STATUSES = ("open", "in_progress", "resolved", "ignored")

# Logging constants
LOG_APP_NAME = "keplog"
LOG_FILE_NAME = "keplog"
LOG_RETENTION_DAYS = 7
LOG_LINES_TO_SHOW = 20

# Sensitive data keys for sanitization
SENSITIVE_KEYS = (
    "password", "token", "key", "secret", "authorization",
    "x-api-key", "api_key", "apikey", "bearer", "session", "cookie"
)
