"""Configuration loading for the action context."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from . import __version__

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"
DEFAULT_USER_AGENT = f"actions-graphql/{__version__}"
DEFAULT_TIMEOUT = 30.0


@dataclass(slots=True, frozen=True)
class ActionConfig:
    """Settings shared by everything running inside one workflow step."""

    graphql_url: str = DEFAULT_GRAPHQL_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"
    output_path: Path | None = None


def load_from_env(env: Mapping[str, str]) -> ActionConfig:
    timeout = DEFAULT_TIMEOUT
    if env.get("ACTIONS_GRAPHQL_TIMEOUT"):
        raw = env["ACTIONS_GRAPHQL_TIMEOUT"]
        try:
            timeout = float(raw)
        except ValueError:
            raise ValueError(f"ACTIONS_GRAPHQL_TIMEOUT must be a number, got {raw!r}") from None
        if timeout <= 0:
            raise ValueError("ACTIONS_GRAPHQL_TIMEOUT must be positive")
    # The runner sets RUNNER_DEBUG=1 when step debug logging is enabled.
    if env.get("RUNNER_DEBUG") == "1":
        log_level = "DEBUG"
    else:
        log_level = env.get("LOG_LEVEL", "INFO").upper()
    output_path = Path(env["GITHUB_OUTPUT"]) if env.get("GITHUB_OUTPUT") else None
    return ActionConfig(
        graphql_url=env.get("GITHUB_GRAPHQL_URL") or DEFAULT_GRAPHQL_URL,
        user_agent=env.get("ACTIONS_GRAPHQL_USER_AGENT") or DEFAULT_USER_AGENT,
        timeout=timeout,
        log_level=log_level,
        output_path=output_path,
    )


__all__ = ["ActionConfig", "DEFAULT_GRAPHQL_URL", "DEFAULT_USER_AGENT", "load_from_env"]
