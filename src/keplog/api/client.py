"""
HTTP client for the Keplog CLI API.

Every request carries the project API key in the ``X-API-Key`` header and is
attempted exactly once. Transport failures and non-2xx responses are
translated into keplog exceptions with a message fit for the terminal.
"""

import socket
import time
from typing import Any, BinaryIO, Dict, List, Optional, Tuple

import httpx

from keplog.api.models import (
    IssueDetails,
    Issue,
    IssueEvent,
    ReleaseList,
    SourceMapList,
    UploadResult,
)
from keplog.constants import API_KEY_HEADER, MULTIPART_FILE_FIELD
from keplog.exceptions import ApiError, ConfigurationError, NetworkError, NetworkFailure
from keplog.logging import get_logger, log_api_call
from keplog.utils.url import construct_api_url, encode_segment

# (field filename, open binary file, content type)
FilePart = Tuple[str, BinaryIO, str]

_DNS_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated",
)
_REFUSED_MARKERS = ("connection refused", "errno 111", "errno 61", "winerror 10061")


def _exception_chain(exc: BaseException):
    seen = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        yield exc
        exc = exc.__cause__ or exc.__context__


def classify_connect_error(exc: BaseException) -> NetworkFailure:
    """Tell a DNS lookup failure from a refused connection"""
    for link in _exception_chain(exc):
        if isinstance(link, ConnectionRefusedError):
            return NetworkFailure.CONNECTION_REFUSED
        if isinstance(link, socket.gaierror):
            return NetworkFailure.DNS
        text = str(link).lower()
        if any(marker in text for marker in _REFUSED_MARKERS):
            return NetworkFailure.CONNECTION_REFUSED
        if any(marker in text for marker in _DNS_MARKERS):
            return NetworkFailure.DNS
    return NetworkFailure.DNS


def network_error_message(kind: NetworkFailure, api_url: str) -> str:
    if kind == NetworkFailure.CONNECTION_REFUSED:
        return f"Connection refused to {api_url}. Please check the API URL."
    if kind == NetworkFailure.DNS:
        return f"Could not connect to {api_url}. Please check your internet connection."
    return "No response from server. Please check your internet connection."


def extract_error_message(response: httpx.Response) -> str:
    """Server's ``error`` field when present, else the status line"""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])

    if response.reason_phrase:
        return f"HTTP {response.status_code}: {response.reason_phrase}"
    return f"HTTP {response.status_code}"


class KeplogClient:
    """Thin wrapper over httpx for the /api/v1/cli endpoints"""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        project_id: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.api_key = api_key
        self.project_id = project_id
        # None disables httpx timeouts; large uploads must not be cut off
        self.timeout = timeout
        self.transport = transport
        self.logger = get_logger("keplog.api.client")

    def _project_endpoint(self, suffix: str = "") -> str:
        if not self.project_id:
            raise ConfigurationError("Project ID is required")
        return f"/projects/{encode_segment(self.project_id)}{suffix}"

    def _headers(self) -> Dict[str, str]:
        return {API_KEY_HEADER: self.api_key, "Accept": "application/json"}

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[List[Tuple[str, FilePart]]] = None,
    ) -> Dict[str, Any]:
        """
        Send one request and return the decoded JSON body.

        Args:
            method: HTTP method
            endpoint: Path below /api/v1/cli
            params: Query parameters; None values are dropped
            data: Form fields (multipart when files are given)
            files: Multipart file parts

        Returns:
            Decoded JSON object ({} for an empty body)

        Raises:
            NetworkError: DNS failure, refused connection or no response
            ApiError: non-2xx response
        """
        url = construct_api_url(self.api_url, endpoint)
        method_upper = method.upper()
        query = {k: v for k, v in (params or {}).items() if v is not None}
        start_time = time.time()

        self.logger.debug(f"Starting {method_upper} request to {url}")

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.request(
                    method_upper,
                    url,
                    headers=self._headers(),
                    params=query or None,
                    data=data,
                    files=files,
                )
        except httpx.ConnectError as e:
            raise self._network_error(method_upper, url, start_time, classify_connect_error(e), e) from e
        except httpx.ConnectTimeout as e:
            raise self._network_error(method_upper, url, start_time, NetworkFailure.DNS, e) from e
        except httpx.TransportError as e:
            raise self._network_error(method_upper, url, start_time, NetworkFailure.NO_RESPONSE, e) from e

        duration = time.time() - start_time
        content_length = response.request.headers.get("Content-Length")
        request_size = int(content_length) if content_length else None

        if not response.is_success:
            message = extract_error_message(response)
            log_api_call(
                method=method_upper,
                url=url,
                status_code=response.status_code,
                duration=duration,
                request_size=request_size,
                error=message,
            )
            raise ApiError(message, status_code=response.status_code, url=url)

        log_api_call(
            method=method_upper,
            url=url,
            status_code=response.status_code,
            duration=duration,
            request_size=request_size,
        )

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as e:
            raise ApiError(
                "Invalid JSON response from server",
                status_code=response.status_code,
                url=url,
            ) from e
        return body if isinstance(body, dict) else {"data": body}

    def _network_error(
        self,
        method: str,
        url: str,
        start_time: float,
        kind: NetworkFailure,
        cause: Exception,
    ) -> NetworkError:
        log_api_call(
            method=method,
            url=url,
            duration=time.time() - start_time,
            error=f"{kind.value}: {cause}",
        )
        return NetworkError(network_error_message(kind, self.api_url), kind=kind, url=url)

    # Source maps

    def upload_source_maps(self, release: str, files: List[FilePart]) -> UploadResult:
        """POST /projects/{id}/sourcemaps as one multipart body"""
        body = self.request(
            "POST",
            self._project_endpoint("/sourcemaps"),
            data={"release": release},
            files=[(MULTIPART_FILE_FIELD, part) for part in files],
        )
        return UploadResult.from_dict(body, release=release)

    def list_source_maps(self, release: str) -> SourceMapList:
        """GET /projects/{id}/sourcemaps?release="""
        body = self.request(
            "GET",
            self._project_endpoint("/sourcemaps"),
            params={"release": release},
        )
        return SourceMapList.from_dict(body, release=release)

    def delete_source_map(self, release: str, filename: str) -> None:
        """DELETE /projects/{id}/sourcemaps/{filename}?release="""
        self.request(
            "DELETE",
            self._project_endpoint(f"/sourcemaps/{encode_segment(filename)}"),
            params={"release": release},
        )

    def list_releases(self) -> ReleaseList:
        """GET /projects/{id}/sourcemaps/releases"""
        body = self.request("GET", self._project_endpoint("/sourcemaps/releases"))
        return ReleaseList.from_dict(body)

    # Issues

    def list_issues(
        self,
        status: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> List[Issue]:
        """GET /projects/{id}/issues"""
        body = self.request(
            "GET",
            self._project_endpoint("/issues"),
            params={
                "status": status,
                "limit": limit,
                "offset": offset,
                "date_from": date_from,
                "date_to": date_to,
            },
        )
        return [Issue.from_dict(item) for item in body.get("issues") or []]

    def get_issue(self, issue_id: str) -> IssueDetails:
        """GET /issues/{id}"""
        body = self.request("GET", f"/issues/{encode_segment(issue_id)}")
        return IssueDetails.from_dict(body.get("issue") or {})

    def get_issue_events(
        self,
        issue_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[IssueEvent]:
        """GET /issues/{id}/events"""
        body = self.request(
            "GET",
            f"/issues/{encode_segment(issue_id)}/events",
            params={"limit": limit, "offset": offset},
        )
        return [IssueEvent.from_dict(item) for item in body.get("events") or []]
