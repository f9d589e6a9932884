"""HTTP building blocks: the step's base transport and bearer-token auth."""

from __future__ import annotations

import time
from collections.abc import Generator

import httpx
import structlog

from .config import DEFAULT_USER_AGENT

logger = structlog.get_logger(__name__)


class ActionTransport(httpx.BaseTransport):
    """Base transport that identifies the process and logs every round trip."""

    def __init__(
        self,
        inner: httpx.BaseTransport | None = None,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._inner = inner if inner is not None else httpx.HTTPTransport()
        self.user_agent = user_agent

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        # httpx fills in its own User-Agent by default; replace only that one.
        current = request.headers.get("User-Agent", "")
        if not current or current.startswith("python-httpx/"):
            request.headers["User-Agent"] = self.user_agent

        logger.debug("http_request", method=request.method, url=str(request.url))
        started = time.monotonic()
        try:
            response = self._inner.handle_request(request)
        except httpx.TransportError as e:
            logger.debug(
                "http_request_failed",
                method=request.method,
                url=str(request.url),
                error=str(e),
            )
            raise
        logger.debug(
            "http_response",
            method=request.method,
            url=str(request.url),
            status=response.status_code,
            elapsed_ms=round((time.monotonic() - started) * 1000, 1),
        )
        return response

    def close(self) -> None:
        self._inner.close()


class BearerAuth(httpx.Auth):
    """Static token source: the same bearer token on every request."""

    def __init__(self, token: str) -> None:
        if not token:
            raise ValueError("token must not be empty")
        self._token = token

    def __repr__(self) -> str:
        return "BearerAuth(token=***)"

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request


__all__ = ["ActionTransport", "BearerAuth"]
