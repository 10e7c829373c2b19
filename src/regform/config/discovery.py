"""Locate and load ``regform.toml``.

Lookup order: the ``REGFORM_CONFIG`` env var, then the first
``regform.toml`` found walking up from the working directory (the way git
finds ``.git/``).  The file holds overrides only; anything it leaves out
keeps the default baked into :mod:`regform.config.models`.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from regform.config.models import FormConfig
from regform.errors import ConfigError

CONFIG_FILENAME = "regform.toml"
CONFIG_ENV_VAR = "REGFORM_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), or None.

    A set ``REGFORM_CONFIG`` is authoritative: when it names a missing file
    there is no config and no walk-up happens.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        candidate = Path(override)
        return candidate if candidate.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> FormConfig:
    """Parse and validate a config file into a :class:`FormConfig`.

    With no *path*, the file is discovered from *cwd*; with none found the
    defaults are returned.  Only the keys the file sets count as set on the
    result (``model_dump(exclude_unset=True)`` yields just the overrides).

    Raises:
        ConfigError: The file is not valid TOML or holds an invalid value.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return FormConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    try:
        return FormConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError.from_validation(exc, path) from exc
