"""
HTTP Client

Thin synchronous wrapper over a requests session used by the transport.
"""

from __future__ import annotations

import json as json_module
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """
    Response from an HTTP request.
    """
    status_code: int
    content: bytes
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        """Check if request was successful (2xx status)."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        """Get response content as text."""
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Parse response as JSON."""
        return json_module.loads(self.content)

    def raise_for_status(self) -> None:
        """Raise exception if status is not 2xx."""
        if not self.ok:
            raise HttpError(
                f"HTTP {self.status_code}",
                status_code=self.status_code,
                response=self,
            )


class HttpError(Exception):
    """HTTP request error."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[HttpResponse] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class HttpClient:
    """
    HTTP client over a pooled requests session.

    Usage:
        client = HttpClient(timeout=5.0, max_retries=3)

        response = client.post("https://node.example.com/v1/client/relay", json=body)
        if response.ok:
            data = response.json()
    """

    def __init__(
        self,
        *,
        timeout: float = 5.0,
        max_retries: int = 0,
        verify: bool = True,
        default_headers: Optional[dict[str, str]] = None,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            timeout: Default request timeout in seconds
            max_retries: Connection-level retries done by the session adapter
            verify: Verify TLS certificates
            default_headers: Headers to include in all requests
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.verify = verify
        self.default_headers = default_headers or {}
        # One session per client, shared by every calling thread
        self._session = self._build_session()

    def _build_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update(self.default_headers)
        adapter = HTTPAdapter(max_retries=self.max_retries)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        data: Optional[Any] = None,
        json: Optional[Any] = None,
        timeout: Optional[float] = None,
        verify: Optional[bool] = None,
    ) -> HttpResponse:
        """
        Make an HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL
            headers: Additional headers
            data: Request body (raw)
            json: Request body (JSON)
            timeout: Request timeout in seconds
            verify: Override TLS verification for this request

        Returns:
            HttpResponse with status, content, and headers
        """
        effective_timeout = timeout or self.timeout
        effective_verify = self.verify if verify is None else verify

        request_headers = dict(self.default_headers)
        if headers:
            request_headers.update(headers)

        logger.debug(f"{method} {url} (timeout={effective_timeout}s)")
        try:
            response = self._session.request(
                method=method,
                url=url,
                headers=request_headers,
                data=data,
                json=json,
                timeout=effective_timeout,
                verify=effective_verify,
            )
        except requests.RequestException as e:
            raise HttpError(str(e)) from e

        return HttpResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
            url=str(response.url),
            elapsed_ms=response.elapsed.total_seconds() * 1000,
        )

    def post(
        self,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        data: Optional[Any] = None,
        json: Optional[Any] = None,
        timeout: Optional[float] = None,
        verify: Optional[bool] = None,
    ) -> HttpResponse:
        """Make a POST request."""
        return self.request(
            "POST", url,
            headers=headers,
            data=data,
            json=json,
            timeout=timeout,
            verify=verify,
        )

    def close(self) -> None:
        """Close the pooled connections."""
        self._session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
