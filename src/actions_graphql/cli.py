"""CLI entry point: verify a token from inside a workflow step."""

from __future__ import annotations

from .action import Action
from .client import new_client
from .config import ActionConfig
from .logging_config import configure_logging
from .schemas import format_rfc3339

DEFAULT_TOKEN_VAR = "GITHUB_TOKEN"


def main() -> None:
    try:
        action = Action()
    except ValueError as e:
        Action(config=ActionConfig()).fatal(f"Invalid configuration: {e}.")
    configure_logging(action.config.log_level)

    token_var = action.get_input("token-var") or DEFAULT_TOKEN_VAR
    with new_client(action, token_var) as client:
        rl = client.initial_rate_limit
    action.set_output("remaining", str(rl.remaining))
    action.set_output("reset-at", format_rfc3339(rl.reset_at))


if __name__ == "__main__":
    main()
