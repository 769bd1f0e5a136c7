"""
Exceptions raised by the keplog client.

Every failure a command can present to the user derives from KeplogError,
so command handlers only need one except clause to turn it into exit code 1.
"""

from enum import Enum
from typing import Optional


class KeplogError(Exception):
    """Base keplog error."""
    pass


class ConfigurationError(KeplogError):
    """A required credential or identifier could not be resolved."""
    pass


class InvalidPatternError(KeplogError):
    """A file pattern could not be parsed as a glob."""

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid glob pattern: {pattern} ({reason})")
        self.pattern = pattern
        self.reason = reason


class NetworkFailure(Enum):
    """Transport failures the client tells apart."""
    DNS = "dns"
    CONNECTION_REFUSED = "connection_refused"
    NO_RESPONSE = "no_response"


class NetworkError(KeplogError):
    """The request never produced an HTTP response."""

    def __init__(self, message: str, kind: NetworkFailure, url: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.url = url


class ApiError(KeplogError):
    """The server answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
