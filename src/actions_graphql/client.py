"""Authenticated GraphQL client for workflow steps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from .action import Action
from .graphql_client import GitHubGraphQLClient, GraphQLError
from .schemas import RATE_LIMIT_QUERY, RateLimit, format_rfc3339
from .transport import BearerAuth


def _query_rate_limit(graphql: GitHubGraphQLClient) -> RateLimit:
    data = graphql.query(RATE_LIMIT_QUERY, operation_name="rate_limit")
    try:
        return RateLimit.model_validate(data.get("rateLimit"))
    except ValidationError as e:
        raise GraphQLError(f"Malformed rate limit response: {e}") from e


@dataclass(slots=True, frozen=True)
class Client:
    """GitHub GraphQL executor paired with the action that created it."""

    graphql: GitHubGraphQLClient
    action: Action
    initial_rate_limit: RateLimit | None = None

    def query(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        *,
        operation_name: str | None = None,
    ) -> dict[str, Any]:
        return self.graphql.query(query, variables, operation_name=operation_name)

    def rate_limit(self) -> RateLimit:
        return _query_rate_limit(self.graphql)

    def close(self) -> None:
        self.graphql.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def new_client(action: Action, token_var: str) -> Client:
    """Return a client authenticated with the token stored in ``token_var``.

    The token is checked with a rate limit query before the client is
    returned. A missing token or a failed query stops the step through
    :meth:`Action.fatal`, so callers never see a half-built client.
    """
    token = action.getenv(token_var)
    if not token:
        action.fatal(f"{token_var} is not set.")

    http = httpx.Client(
        transport=action.http_transport(),
        auth=BearerAuth(token),
        timeout=action.config.timeout,
    )
    graphql = GitHubGraphQLClient(http, url=action.config.graphql_url)

    try:
        rl = _query_rate_limit(graphql)
    except GraphQLError as e:
        graphql.close()
        action.fatal(f"Failed to query rate limit: {e}.")

    action.debug(
        f"Rate limit remaining: {rl.remaining}, reset at: {format_rfc3339(rl.reset_at)}."
    )
    return Client(graphql=graphql, action=action, initial_rate_limit=rl)


__all__ = ["Client", "new_client"]
