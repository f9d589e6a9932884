"""GitHub Actions step context: environment, inputs, outputs and workflow commands."""

from __future__ import annotations

import os
import sys
import uuid
from collections.abc import Mapping
from typing import NoReturn, TextIO

import httpx

from .config import ActionConfig, load_from_env
from .logging_config import configure_default_logging
from .transport import ActionTransport


class ActionFailed(SystemExit):
    """Raised by :meth:`Action.fatal`; terminates the step with exit status 1."""

    def __init__(self, message: str) -> None:
        super().__init__(1)
        self.message = message

    def __str__(self) -> str:
        return self.message


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class Action:
    """Access to the runner: environment lookup, workflow commands and abort."""

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        out: TextIO | None = None,
        config: ActionConfig | None = None,
    ) -> None:
        self.env = env if env is not None else os.environ
        self.out = out if out is not None else sys.stdout
        self.config = config if config is not None else load_from_env(self.env)
        configure_default_logging()

    def getenv(self, name: str) -> str:
        return self.env.get(name, "")

    def get_input(self, name: str) -> str:
        """Return the step input ``name`` as the runner passes it (``INPUT_<NAME>``)."""
        key = "INPUT_" + name.replace(" ", "_").upper()
        return self.getenv(key).strip()

    def _command(self, command: str, message: str) -> None:
        print(f"::{command}::{escape_data(message)}", file=self.out, flush=True)

    def debug(self, message: str) -> None:
        self._command("debug", message)

    def notice(self, message: str) -> None:
        self._command("notice", message)

    def warning(self, message: str) -> None:
        self._command("warning", message)

    def error(self, message: str) -> None:
        self._command("error", message)

    def fatal(self, message: str) -> NoReturn:
        """Report ``message`` as an error and stop the step."""
        self.error(message)
        raise ActionFailed(message)

    def set_output(self, name: str, value: str) -> None:
        path = self.config.output_path
        if path is None:
            self._command(f"set-output name={name}", value)
            return
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            line = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
        else:
            line = f"{name}={value}\n"
        with path.open("a", encoding="utf-8") as fh:
            fh.write(line)

    def http_transport(self) -> httpx.BaseTransport:
        """Base transport for HTTP clients created on behalf of this step."""
        return ActionTransport(user_agent=self.config.user_agent)


__all__ = ["Action", "ActionFailed", "escape_data"]
