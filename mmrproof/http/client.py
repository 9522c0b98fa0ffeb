"""
HTTP Client

Thin wrapper over a requests session used to POST GraphQL bodies to the indexer.
"""

from __future__ import annotations

import json as jsonlib
import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests


logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """Status, body and round-trip time of one indexer call."""
    status_code: int
    content: bytes
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return jsonlib.loads(self.content)


class HttpError(Exception):
    """The request never produced a response."""


class HttpTimeoutError(HttpError):
    """Request did not complete within its timeout."""

    def __init__(self, message: str, timeout: float) -> None:
        super().__init__(message)
        self.timeout = timeout


class HttpClient:
    """
    POST-only client with a lazily created session.

    Usage:
        with HttpClient(timeout=10.0) as client:
            response = client.post(url, json={"query": "..."})
            if response.ok:
                data = response.json()
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        default_headers: Optional[dict[str, str]] = None,
        proxy: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Args:
            timeout: Default request timeout in seconds
            default_headers: Headers sent with every request
            proxy: Proxy URL used for both http and https
            session: Pre-built session (tests inject fakes here)
        """
        self.timeout = timeout
        self.default_headers = default_headers or {}
        self.proxy = proxy
        self._session = session

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.default_headers)
            if self.proxy:
                self._session.proxies = {"http": self.proxy, "https": self.proxy}
        return self._session

    def post(
        self,
        url: str,
        *,
        json: Any,
        headers: Optional[dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        """
        POST a JSON body.

        An explicit timeout, including 0, overrides the client default.

        Raises:
            HttpTimeoutError: If the request timed out
            HttpError: For any other transport failure
        """
        effective_timeout = timeout if timeout is not None else self.timeout
        request_headers = {**self.default_headers, **(headers or {})}

        logger.debug("POST %s (timeout=%ss)", url, effective_timeout)

        try:
            response = self._get_session().request(
                method="POST",
                url=url,
                headers=request_headers,
                json=json,
                timeout=effective_timeout,
            )
        except requests.Timeout as e:
            raise HttpTimeoutError(
                f"Request to {url} timed out after {effective_timeout}s",
                timeout=effective_timeout,
            ) from e
        except requests.RequestException as e:
            raise HttpError(str(e)) from e

        return HttpResponse(
            status_code=response.status_code,
            content=response.content,
            elapsed_ms=response.elapsed.total_seconds() * 1000,
        )

    def close(self) -> None:
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
