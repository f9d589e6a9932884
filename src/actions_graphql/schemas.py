"""Pydantic models for GraphQL responses."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

RATE_LIMIT_QUERY = """
query {
  rateLimit {
    cost
    limit
    remaining
    resetAt
  }
}
"""


class RateLimit(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    cost: int
    limit: int
    remaining: int
    reset_at: AwareDatetime = Field(alias="resetAt")


def format_rfc3339(value: datetime) -> str:
    """Format ``value`` as RFC 3339 with second precision, ``Z`` for UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


__all__ = ["RATE_LIMIT_QUERY", "RateLimit", "format_rfc3339"]
