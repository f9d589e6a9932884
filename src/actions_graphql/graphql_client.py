"""Synchronous GraphQL executor for the GitHub API."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from .config import DEFAULT_GRAPHQL_URL

logger = structlog.get_logger(__name__)


class GraphQLError(ValueError):
    """A GraphQL round trip did not produce usable data."""


def _status_error(e: httpx.HTTPStatusError) -> GraphQLError:
    try:
        body = e.response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        gh_message = body["message"]
    else:
        gh_message = e.response.text or "Unknown error"

    status = e.response.status_code
    if status == 401:
        return GraphQLError(f"Invalid GitHub token: {gh_message}")
    if status in (403, 429):
        return GraphQLError(f"GitHub API rate limit exceeded or forbidden: {gh_message}")
    return GraphQLError(f"GitHub API error ({status}): {gh_message}")


def _first_error_message(errors: Any) -> str:
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        message = errors[0].get("message")
        if isinstance(message, str) and message:
            return message
    return "Unknown GraphQL error"


def _header_int(headers: httpx.Headers, name: str) -> int | None:
    try:
        return int(headers[name])
    except (KeyError, ValueError):
        return None


class GitHubGraphQLClient:
    """Sends query documents over an authenticated ``httpx.Client``."""

    def __init__(self, http: httpx.Client, url: str = DEFAULT_GRAPHQL_URL):
        self.http = http
        self.url = url
        self.rate_limit_remaining: int | None = None
        self.rate_limit_reset: int | None = None
        self.rate_limit_used: int | None = None

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> GitHubGraphQLClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _update_rate_limits(self, response: httpx.Response) -> None:
        # Unparsable values leave the last known figure in place.
        headers = response.headers
        remaining = _header_int(headers, "X-RateLimit-Remaining")
        if remaining is not None:
            self.rate_limit_remaining = remaining
        reset = _header_int(headers, "X-RateLimit-Reset")
        if reset is not None:
            self.rate_limit_reset = reset
        used = _header_int(headers, "X-RateLimit-Used")
        if used is not None:
            self.rate_limit_used = used

    def query(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        *,
        operation_name: str | None = None,
    ) -> dict[str, Any]:
        """Execute ``query`` and return its ``data`` member."""
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        operation = operation_name or "anonymous"

        try:
            logger.info("github_graphql_request", operation=operation)
            response = self.http.post(self.url, json=payload)
            self._update_rate_limits(response)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "github_graphql_http_error",
                operation=operation,
                status=e.response.status_code,
            )
            raise _status_error(e) from e
        except httpx.RequestError as e:
            logger.error("github_graphql_connection_failed", operation=operation, error=str(e))
            raise GraphQLError(f"GitHub API connection failed: {e}") from e

        try:
            result = response.json()
        except ValueError as e:
            logger.error("github_graphql_bad_response", operation=operation, error=str(e))
            raise GraphQLError(f"GitHub API returned invalid JSON: {e}") from e

        if not isinstance(result, dict):
            raise GraphQLError("GitHub API returned an unexpected response")

        if result.get("errors"):
            logger.error(
                "github_graphql_error",
                operation=operation,
                errors=result["errors"],
                rate_limit_remaining=self.rate_limit_remaining,
            )
            raise GraphQLError(f"GraphQL error: {_first_error_message(result['errors'])}")

        data = result.get("data")
        if not isinstance(data, dict):
            raise GraphQLError("GraphQL response has no data")

        logger.info(
            "github_graphql_success",
            operation=operation,
            rate_limit_remaining=self.rate_limit_remaining,
            rate_limit_used=self.rate_limit_used,
        )
        return data


__all__ = ["GitHubGraphQLClient", "GraphQLError"]
