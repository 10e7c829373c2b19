"""Built-in rule chains for the registration form."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from regform.config.models import FormConfig
from regform.domain.fields import FieldName, coerce_field
from regform.domain.rules import (
    Rule,
    email,
    equals_field,
    matches,
    min_length,
    phone_pattern,
    required,
)

RuleSet = dict[FieldName, tuple[Rule, ...]]


def build_rule_set(config: FormConfig | None = None) -> RuleSet:
    """Return the ordered rule chain of every field.

    Order inside a chain is the order messages are reported in, so the
    presence check always comes first.
    """
    config = config or FormConfig()
    msg = config.messages
    return {
        FieldName.NAME: (required(msg.name_required),),
        FieldName.EMAIL: (
            required(msg.email_required),
            email(msg.email_invalid),
        ),
        FieldName.PHONE: (
            required(msg.phone_required),
            matches(
                phone_pattern(config.phone.prefixes, config.phone.subscriber_digits),
                msg.phone_format,
            ),
        ),
        FieldName.PASSWORD: (
            required(msg.password_required),
            min_length(
                config.password.min_length,
                msg.password_min_length.format(min_length=config.password.min_length),
            ),
        ),
        FieldName.CONFIRM_PASSWORD: (
            required(msg.confirm_password_required),
            equals_field(FieldName.PASSWORD, msg.passwords_mismatch),
        ),
    }


def extend_rule_set(rule_set: RuleSet, extra: Mapping[Any, Sequence[Rule]]) -> RuleSet:
    """Return a copy of *rule_set* with *extra* rules appended per field.

    Raises:
        UnknownFieldError: If *extra* names a field the form does not have.
    """
    extended = dict(rule_set)
    for field, rules in extra.items():
        key = coerce_field(field)
        extended[key] = (*extended.get(key, ()), *rules)
    return extended
