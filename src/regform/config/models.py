"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, regform.toml only contains overrides.
With no config file at all, the form enforces the stock registration rules.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# --- regform.toml sections ---


class PasswordConfig(BaseModel):
    """[password] section."""

    model_config = {"frozen": True}

    min_length: int = Field(default=6, ge=1)


class PhoneConfig(BaseModel):
    """[phone] section."""

    model_config = {"frozen": True}

    prefixes: list[str] = Field(default_factory=lambda: ["809", "829", "849"])
    subscriber_digits: int = Field(default=7, ge=1)

    @field_validator("prefixes")
    @classmethod
    def prefixes_are_digits(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one phone prefix is required")
        for prefix in value:
            if not (prefix.isascii() and prefix.isdigit()):
                raise ValueError(f"phone prefix must be digits: {prefix!r}")
        return value


class MessagesConfig(BaseModel):
    """[messages] section: text of every built-in error message."""

    model_config = {"frozen": True}

    name_required: str = "name is required"
    email_required: str = "email is required"
    email_invalid: str = "invalid email"
    phone_required: str = "phone is required"
    phone_format: str = "format: 8095551234"
    password_required: str = "password is required"
    password_min_length: str = "minimum {min_length} characters"
    confirm_password_required: str = "password confirmation is required"
    passwords_mismatch: str = "passwords do not match"


class FormConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    password: PasswordConfig = Field(default_factory=PasswordConfig)
    phone: PhoneConfig = Field(default_factory=PhoneConfig)
    messages: MessagesConfig = Field(default_factory=MessagesConfig)
