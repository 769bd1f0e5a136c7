"""
URL construction utilities.

This module builds API URLs from the configured base URL, keeping the
base's own path (reverse-proxy context) and percent-encoding path segments.
"""

from urllib.parse import quote

from keplog.constants import API_PREFIX


def encode_segment(value: str) -> str:
    """Percent-encode a single path segment, including any slashes"""
    return quote(str(value), safe="")


def construct_api_url(base_url: str, endpoint: str) -> str:
    """
    Construct an API URL under the CLI namespace.

    Args:
        base_url: The base URL (e.g. https://api.keplog.io or https://host/keplog)
        endpoint: Endpoint below the CLI prefix (e.g. /projects/1/sourcemaps)

    Returns:
        Full API URL
    """
    base_url = base_url.rstrip("/")
    endpoint = endpoint or ""

    if not endpoint.startswith("/"):
        endpoint = "/" + endpoint

    # Callers may already pass the full /api/v1/cli path
    if not endpoint.startswith(API_PREFIX + "/") and endpoint != API_PREFIX:
        endpoint = API_PREFIX + endpoint

    return f"{base_url}{endpoint}"
