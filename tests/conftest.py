"""Shared pytest fixtures and test helpers for regform tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from regform.domain.fields import FieldName
from regform.form.model import FormModel


class Recorder:
    """Subscribes to every channel of a form and logs ``channel:field`` strings."""

    def __init__(self, form: FormModel) -> None:
        self.events: list[str] = []
        form.on_value_changed(lambda f: self.events.append(f"value:{f}"))
        form.on_errors_changed(lambda f: self.events.append(f"errors:{f}"))
        form.on_error_text_changed(lambda f: self.events.append(f"text:{f}"))

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep stray regform.toml files and REGFORM_* env vars out of tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("REGFORM_CONFIG", str(tmp_path / "absent.toml"))
    for var in ("REGFORM_JSON_OUTPUT", "REGFORM_QUIET", "REGFORM_VERBOSE", "REGFORM_LOG_JSON"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def form() -> FormModel:
    """A fresh form with the default rules."""
    return FormModel()


@pytest.fixture
def recorder(form: FormModel) -> Recorder:
    return Recorder(form)


@pytest.fixture
def valid_values() -> dict[str, str]:
    return {
        FieldName.NAME: "Ana Perez",
        FieldName.EMAIL: "ana@example.com",
        FieldName.PHONE: "8095551234",
        FieldName.PASSWORD: "secret1",
        FieldName.CONFIRM_PASSWORD: "secret1",
    }
