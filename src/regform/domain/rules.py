"""Validation rules for registration fields.

Each rule is a callable with the signature::

    def rule(value: str, values: Mapping[FieldName, str]) -> list[str]:
        '''Return error messages, or an empty list if valid.'''

*values* is a read-only view of every field's current value, so a rule can
depend on another field (``equals_field`` compares against the password).

All rules are factories that bind their message (and parameters) and return
the rule.  Only :func:`required` rejects a blank value; every other rule
treats blank input as valid, so a presence error and a format error are
never reported together.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping

from regform.domain.fields import FieldName

Rule = Callable[[str, Mapping[FieldName, str]], list[str]]


def is_blank(value: str | None) -> bool:
    """True for ``None``, the empty string, and whitespace-only strings."""
    return not value or not value.strip()


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(message: str) -> Rule:
    """Value must be present and not whitespace-only."""

    def check(value: str, values: Mapping[FieldName, str]) -> list[str]:
        if is_blank(value):
            return [message]
        return []

    return check


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def min_length(n: int, message: str) -> Rule:
    """Value must be at least *n* characters."""

    def check(value: str, values: Mapping[FieldName, str]) -> list[str]:
        if is_blank(value):
            return []
        if len(value) < n:
            return [message]
        return []

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Structure only, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def email(message: str) -> Rule:
    """Value must look like an email address."""

    def check(value: str, values: Mapping[FieldName, str]) -> list[str]:
        if is_blank(value):
            return []
        if not _EMAIL_RE.fullmatch(value):
            return [message]
        return []

    return check


def matches(pattern: str | re.Pattern[str], message: str) -> Rule:
    """Whole value must match *pattern*."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    def check(value: str, values: Mapping[FieldName, str]) -> list[str]:
        if is_blank(value):
            return []
        if not compiled.fullmatch(value):
            return [message]
        return []

    return check


def phone_pattern(prefixes: Iterable[str], subscriber_digits: int) -> re.Pattern[str]:
    """Compile the phone pattern: one allowed prefix, then *subscriber_digits* digits.

    The default configuration yields ``^(809|829|849)[0-9]{7}$``.  Digits
    are ASCII only; ``\\d`` would also accept e.g. Arabic-Indic digits.
    """
    alternatives = "|".join(re.escape(p) for p in prefixes)
    return re.compile(rf"^({alternatives})[0-9]{{{subscriber_digits}}}$")


# ---------------------------------------------------------------------------
# Cross-field
# ---------------------------------------------------------------------------


def equals_field(other: FieldName, message: str) -> Rule:
    """Value must equal the current value of *other* (exact comparison)."""

    def check(value: str, values: Mapping[FieldName, str]) -> list[str]:
        if is_blank(value):
            return []
        if value != values.get(other, ""):
            return [message]
        return []

    return check


# ---------------------------------------------------------------------------
# Chains
# ---------------------------------------------------------------------------


def evaluate(
    rules: Iterable[Rule],
    value: str,
    values: Mapping[FieldName, str],
) -> list[str]:
    """Run *rules* in order and collect every message they produce."""
    messages: list[str] = []
    for rule in rules:
        messages.extend(rule(value, values))
    return messages
