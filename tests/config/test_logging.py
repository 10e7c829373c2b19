"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from regform.config.logging import configure_logging
from regform.form.model import FormModel


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    regform_logger = logging.getLogger("regform")
    regform_level = regform_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    regform_logger.setLevel(regform_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("regform").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("regform").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("regform.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "regform.test"
        assert "timestamp" in parsed

    def test_form_debug_lines_are_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        FormModel().set_field("name", "Ana")
        lines = [json.loads(line) for line in capfd.readouterr().err.splitlines() if line]
        assert lines
        assert all(line["logger"] == "regform.form.model" for line in lines)
        assert lines[0]["event"] == "Field name changed to 'Ana'"

    def test_password_values_not_logged(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        FormModel().set_field("password", "hunter22")
        assert "hunter22" not in capfd.readouterr().err

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1
