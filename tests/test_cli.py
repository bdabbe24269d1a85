"""Tests for the antijection CLI."""

import io
import json
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
from pydantic import SecretStr

from antijection_node.cli import main
from antijection_node.config import Settings
from antijection_node.exceptions import ConfigError
from antijection_node.models import DetectionMethod


def _settings(**kwargs: object) -> Settings:
    data: dict[str, object] = {"api_key": SecretStr("cli-key"), "base_url": "https://api.test"}
    data.update(kwargs)
    return Settings.model_construct(**data)  # type: ignore[arg-type]


@contextmanager
def _api(
    handler: Callable[[httpx.Request], httpx.Response], settings: Settings | None = None
) -> Iterator[list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    http_client = httpx.Client(transport=httpx.MockTransport(recording))
    with (
        patch("antijection_node.cli.get_settings_eager", return_value=settings or _settings()),
        patch("antijection_node.cli.configure_logging"),
        patch("antijection_node.client.httpx.Client", return_value=http_client),
    ):
        yield seen


def _ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"risk_score": 3, "prompt": json.loads(request.content)["prompt"]})


class TestDetectCommand:
    def test_single_prompt(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _api(_ok) as seen:
            exit_code = main(["detect", "hello there", "--method", "SAFETY_GUARD"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output == [
            {"json": {"risk_score": 3, "prompt": "hello there"}, "pairedItem": {"item": 0}}
        ]
        assert json.loads(seen[0].content)["detection_method"] == "SAFETY_GUARD"

    def test_default_method_from_settings(self) -> None:
        settings = _settings(detection_method=DetectionMethod.INJECTION_GUARD)
        with _api(_ok, settings) as seen:
            main(["detect", "hello"])

        assert json.loads(seen[0].content)["detection_method"] == "INJECTION_GUARD"

    def test_prompt_from_stdin(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _api(_ok), patch("sys.stdin", io.StringIO("from stdin")):
            exit_code = main(["detect"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)[0]["json"]["prompt"] == "from stdin"

    def test_rule_flags(self) -> None:
        with _api(_ok) as seen:
            main(
                [
                    "detect",
                    "SELECT 1",
                    "--disable-category",
                    "sql_injection",
                    "--block",
                    "secret",
                    "--block",
                    "token",
                ]
            )

        assert json.loads(seen[0].content)["rule_settings"] == {
            "enabled": True,
            "disabled_categories": ["sql_injection"],
            "blocked_keywords": ["secret", "token"],
        }

    def test_items_file_with_continue_on_fail(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        items_file = tmp_path / "items.json"
        items_file.write_text(json.dumps([{"prompt": "a"}, {"prompt": ""}, {"prompt": "c"}]))

        with _api(_ok):
            exit_code = main(["detect", "--file", str(items_file), "--continue-on-fail"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert len(output) == 3
        assert output[1] == {
            "json": {"error": "Prompt cannot be empty", "details": ""},
            "pairedItem": {"item": 1},
        }

    def test_failure_aborts(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _api(lambda r: httpx.Response(401, json={})):
            exit_code = main(["detect", "hello"])

        assert exit_code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Item 0: Authentication failed" in captured.err

    def test_continue_on_fail_from_settings(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _api(lambda r: httpx.Response(403, json={}), _settings(continue_on_fail=True)):
            exit_code = main(["detect", "hello"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)[0]["json"]["error"] == "Access forbidden"

    def test_bad_items_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        items_file = tmp_path / "items.json"
        items_file.write_text('{"prompt": "not a list"}')

        with _api(_ok):
            exit_code = main(["detect", "--file", str(items_file)])

        assert exit_code == 1
        assert "JSON list" in capsys.readouterr().err

    def test_config_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch(
            "antijection_node.cli.get_settings_eager",
            side_effect=ConfigError("Invalid YAML syntax", file_path="antijection.yaml", line=2),
        ):
            exit_code = main(["detect", "hello"])

        assert exit_code == 1
        assert "antijection.yaml at line 2" in capsys.readouterr().err


class TestTestCredentialsCommand:
    def test_ok(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _api(lambda r: httpx.Response(200, json={})) as seen:
            exit_code = main(["test-credentials"])

        assert exit_code == 0
        assert "Credentials OK" in capsys.readouterr().out
        assert json.loads(seen[0].content)["prompt"] == "health check"

    def test_rejected(self, capsys: pytest.CaptureFixture[str]) -> None:
        with _api(lambda r: httpx.Response(401, json={})):
            exit_code = main(["test-credentials"])

        assert exit_code == 1
        assert "Authentication failed" in capsys.readouterr().err


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_serve_runs_server(self) -> None:
        with patch("antijection_node.server.main") as serve:
            assert main(["serve"]) == 0

        serve.assert_called_once()
