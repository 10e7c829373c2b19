"""Errors raised by regform.

Validation failures are never exceptions; they are messages stored per field.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError


class UnknownFieldError(ValueError):
    """Raised when a caller names a field the registration form does not have."""

    def __init__(self, field: Any) -> None:
        self.field = field
        super().__init__(f"Unknown form field: {field!r}")


class ConfigError(click.ClickException):
    """Raised when ``regform.toml`` or a ``REGFORM_*`` variable is unusable.

    A :class:`click.ClickException`, so the CLI prints ``Error: ...`` and
    exits 1 instead of showing a traceback.
    """

    @classmethod
    def from_validation(cls, exc: ValidationError, source: Path | str) -> ConfigError:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return cls(f"Invalid config in {source}: {problems}")
