"""Tests for the validate CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from regform.cli import cli
from regform.plugins import PluginManager, hookimpl

VALID_ARGS = [
    "validate",
    "--name",
    "Ana Perez",
    "--email",
    "ana@example.com",
    "--phone",
    "8095551234",
    "--password",
    "secret1",
    "--confirm-password",
    "secret1",
]


class _BrokenPlugin:
    @hookimpl
    def register_rules(self) -> dict[str, list[object]]:
        raise RuntimeError("boom")


class TestValidateCommand:
    def test_valid(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, VALID_ARGS)
        assert result.exit_code == 0, result.output
        assert "OK: validate" in result.output

    def test_valid_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", *VALID_ARGS])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert set(data["data"]["fields"]) == {
            "name",
            "email",
            "phone",
            "password",
            "confirmPassword",
        }

    def test_invalid_exits_nonzero(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "validate", "--phone", "7095551234"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error"]["code"] == "VALIDATION_FAILED"
        assert data["error"]["detail"]["errors"]["phone"] == ["format: 8095551234"]
        assert data["error"]["detail"]["errors"]["name"] == ["name is required"]

    def test_from_json_with_flag_override(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        payload = tmp_path / "reg.json"
        payload.write_text(
            json.dumps(
                {
                    "name": "Ana",
                    "email": "ana@example.com",
                    "phone": "8295551234",
                    "password": "secret1",
                    "confirmPassword": "secret1",
                }
            )
        )
        result = cli_runner.invoke(
            cli, ["--json", "validate", "--from-json", str(payload), "--password", "secret2"]
        )
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["error"]["detail"]["errors"] == {
            "confirmPassword": ["passwords do not match"]
        }

    def test_unknown_json_key(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        payload = tmp_path / "reg.json"
        payload.write_text(json.dumps({"username": "ana"}))
        result = cli_runner.invoke(cli, ["--json", "validate", "--from-json", str(payload)])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "UNKNOWN_FIELD"

    def test_bad_json_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        payload = tmp_path / "reg.json"
        payload.write_text("[1, 2]")
        result = cli_runner.invoke(cli, ["validate", "--from-json", str(payload)])
        assert result.exit_code == 2
        assert "JSON object" in result.output

    def test_trace(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", *VALID_ARGS, "--trace"])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert list(payload["data"]) == ["fields"]
        assert payload["meta"]["events"][0] == "value_changed:name"

    def test_invalid_config_value(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "bad.toml"
        config.write_text("[password]\nmin_length = 0\n")
        result = cli_runner.invoke(cli, ["-c", str(config), *VALID_ARGS])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error: Invalid config in" in result.output
        assert "password.min_length" in result.output

    def test_skipped_plugin_rules_warn_on_stderr(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def load_broken(self: PluginManager) -> list[str]:
            self.register_plugin(_BrokenPlugin())
            return self.list_plugin_names()

        monkeypatch.setattr(PluginManager, "discover_and_load", load_broken)
        result = cli_runner.invoke(cli, VALID_ARGS)
        assert result.exit_code == 0, result.output
        assert "WARNING: Failed to collect rules from plugin _BrokenPlugin: boom" in result.output
        assert "OK: validate" in result.output

    def test_config_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "strict.toml"
        config.write_text("[password]\nmin_length = 10\n")
        result = cli_runner.invoke(cli, ["--json", "-c", str(config), *VALID_ARGS])
        assert result.exit_code == 1
        errors = json.loads(result.output)["error"]["detail"]["errors"]
        assert errors == {"password": ["minimum 10 characters"]}

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["validate", "--examples"])
        assert result.exit_code == 0
        assert "regform validate" in result.output


class TestRootGroup:
    def test_no_subcommand_shows_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "validate" in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output
