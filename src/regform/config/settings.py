"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``REGFORM_*`` prefix, nested sections with ``__``
  3. TOML file    — ``regform.toml``, loaded by :func:`load_config`
  4. Code defaults — baked into the section models

The TOML file goes through the same :func:`load_config` path as library
callers, so a bad value in it is reported as a :class:`ConfigError`
naming the file.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from regform.config.discovery import find_config, load_config
from regform.config.models import (
    FormConfig,
    MessagesConfig,
    PasswordConfig,
    PhoneConfig,
)
from regform.errors import ConfigError


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Feed the overrides of a validated ``regform.toml`` into the settings."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is not None and toml_path.is_file():
            self._data = load_config(toml_path).model_dump(exclude_unset=True)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the sections the file sets, for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class RegformSettings(BaseSettings):
    """Unified settings for the regform CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.

    Attributes:
        config_path: The TOML file that was loaded, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "REGFORM_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    password: PasswordConfig = Field(default_factory=PasswordConfig)
    phone: PhoneConfig = Field(default_factory=PhoneConfig)
    messages: MessagesConfig = Field(default_factory=MessagesConfig)

    @property
    def form(self) -> FormConfig:
        """The rule-related sections as a :class:`FormConfig`."""
        return FormConfig(password=self.password, phone=self.phone, messages=self.messages)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> RegformSettings:
        """Construct settings from CLI invocation.

        Discovers ``regform.toml`` via walk-up from *start* (or uses the
        explicit *config_path*) and merges CLI flags as highest-priority
        overrides.

        Raises:
            ConfigError: The TOML file or a ``REGFORM_*`` variable holds an
                invalid value.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        except ValidationError as exc:
            raise ConfigError.from_validation(exc, "settings") from exc
        finally:
            _tls.toml_path = None
