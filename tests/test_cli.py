import pytest
import respx
from structlog.testing import capture_logs
from httpx import Response

from actions_graphql import cli
from actions_graphql.action import ActionFailed

GRAPHQL_URL = "https://api.github.com/graphql"
RATE_LIMIT_BODY = {
    "data": {
        "rateLimit": {
            "cost": 1,
            "limit": 5000,
            "remaining": 4999,
            "resetAt": "2024-01-15T11:00:00Z",
        }
    }
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "GITHUB_TOKEN",
        "GITHUB_GRAPHQL_URL",
        "GITHUB_OUTPUT",
        "RUNNER_DEBUG",
        "INPUT_TOKEN-VAR",
        "ACTIONS_GRAPHQL_USER_AGENT",
        "ACTIONS_GRAPHQL_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_LEVEL", "ERROR")


@pytest.fixture(autouse=True)
def captured_logs(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)
    with capture_logs() as logs:
        yield logs


@respx.mock
def test_main_writes_outputs(monkeypatch, tmp_path, capsys, captured_logs):
    route = respx.post(GRAPHQL_URL).mock(return_value=Response(200, json=RATE_LIMIT_BODY))
    output = tmp_path / "github_output"
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_example123")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))

    cli.main()

    assert route.call_count == 1
    assert output.read_text() == "remaining=4999\nreset-at=2024-01-15T11:00:00Z\n"
    assert capsys.readouterr().out == (
        "::debug::Rate limit remaining: 4999, reset at: 2024-01-15T11:00:00Z.\n"
    )
    events = [entry["event"] for entry in captured_logs]
    assert events.count("github_graphql_success") == 1


@respx.mock
def test_main_honours_token_var_input(monkeypatch, tmp_path):
    route = respx.post(GRAPHQL_URL).mock(return_value=Response(200, json=RATE_LIMIT_BODY))
    monkeypatch.setenv("INPUT_TOKEN-VAR", "MY_PAT")
    monkeypatch.setenv("MY_PAT", "ghp_personal")
    monkeypatch.setenv("GITHUB_OUTPUT", str(tmp_path / "github_output"))

    cli.main()

    assert route.calls.last.request.headers["Authorization"] == "Bearer ghp_personal"


def test_main_missing_token_exits(capsys):
    with pytest.raises(ActionFailed) as excinfo:
        cli.main()

    assert excinfo.value.code == 1
    assert capsys.readouterr().out == "::error::GITHUB_TOKEN is not set.\n"


def test_main_configures_logging(monkeypatch):
    called = {}

    def fake_configure(level: str) -> None:
        called["level"] = level

    monkeypatch.setattr(cli, "configure_logging", fake_configure)
    monkeypatch.setenv("RUNNER_DEBUG", "1")

    with pytest.raises(ActionFailed):
        cli.main()

    assert called["level"] == "DEBUG"


@pytest.mark.parametrize(
    "timeout, reason",
    [
        ("abc", "ACTIONS_GRAPHQL_TIMEOUT must be a number, got 'abc'"),
        ("0", "ACTIONS_GRAPHQL_TIMEOUT must be positive"),
    ],
)
def test_main_invalid_configuration_exits(monkeypatch, capsys, timeout, reason):
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_example123")
    monkeypatch.setenv("ACTIONS_GRAPHQL_TIMEOUT", timeout)

    with respx.mock(assert_all_called=False) as router:
        route = router.post(GRAPHQL_URL).mock(return_value=Response(200, json=RATE_LIMIT_BODY))
        with pytest.raises(ActionFailed) as excinfo:
            cli.main()

    assert excinfo.value.code == 1
    assert not route.called
    assert capsys.readouterr().out == f"::error::Invalid configuration: {reason}.\n"
