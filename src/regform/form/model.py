"""FormModel: field values, rule evaluation, and change notification.

Every mutation goes through :meth:`FormModel.set_field`:

1. Unchanged value: nothing happens (no validation, no notification).
2. Store the value, emit ``value_changed``.
3. Revalidate the field, then every field that depends on it
   (changing ``password`` revalidates ``confirmPassword``).

Revalidating a field always follows the same sequence: clear its entry,
run its rule chain, store the messages if any, emit ``errors_changed``
and ``error_text_changed``.  The two error notifications fire even when
the field ends up valid, so a UI can clear a message it is showing.

INVARIANT: ``has_errors`` is True iff at least one field has a message.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from regform.config.models import FormConfig
from regform.domain.errors import ErrorStore
from regform.domain.fields import SECRET_FIELDS, FieldName, coerce_field, dependents_of
from regform.domain.rules import Rule, evaluate
from regform.form.channel import Listener, NotificationChannel, Subscription
from regform.form.ruleset import build_rule_set, extend_rule_set

logger = logging.getLogger(__name__)


class FormModel:
    """Reactive state of one registration form.

    Instances are independent: each owns its values, rules, error store
    and channels.  All work happens synchronously on the calling thread.

    Parameters:
        config: Rule parameters and messages. Defaults to :class:`FormConfig`.
        extra_rules: Additional rules per field, appended after the
            built-in chain (plugins contribute rules this way).
    """

    def __init__(
        self,
        config: FormConfig | None = None,
        *,
        extra_rules: Mapping[Any, Sequence[Rule]] | None = None,
    ) -> None:
        rule_set = build_rule_set(config)
        if extra_rules:
            rule_set = extend_rule_set(rule_set, extra_rules)
        self._rules = rule_set
        self._values: dict[FieldName, str] = dict.fromkeys(FieldName, "")
        self._errors = ErrorStore()

        self.value_changed = NotificationChannel("value_changed")
        self.errors_changed = NotificationChannel("errors_changed")
        self.error_text_changed = NotificationChannel("error_text_changed")

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_field(self, field: FieldName | str, value: str | None) -> None:
        """Set *field* to *value* and revalidate what depends on it.

        ``None`` is stored as ``""``.

        Raises:
            UnknownFieldError: If *field* is not a form field.
        """
        key = coerce_field(field)
        new_value = "" if value is None else value
        if self._values[key] == new_value:
            return

        self._values[key] = new_value
        if key in SECRET_FIELDS:
            logger.debug("Field %s changed", key)
        else:
            logger.debug("Field %s changed to %r", key, new_value)
        self.value_changed.emit(key)

        self._validate(key)
        for dependent in dependents_of(key):
            self._validate(dependent)

    def validate_all(self) -> bool:
        """Revalidate every field in declaration order.

        Fields never touched by :meth:`set_field` only get their
        "required" message this way.  Returns True when the form is valid.
        """
        for field in FieldName:
            self._validate(field)
        return not self.has_errors

    def _validate(self, field: FieldName) -> None:
        self._errors.clear(field)
        messages = evaluate(self._rules[field], self._values[field], self._values_view())
        self._errors.store(field, messages)
        if messages:
            logger.debug("Field %s invalid: %s", field, messages)
        else:
            logger.debug("Field %s valid", field)
        self.errors_changed.emit(field)
        self.error_text_changed.emit(field)

    def _values_view(self) -> Mapping[FieldName, str]:
        return MappingProxyType(self._values)

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def get_field_value(self, field: FieldName | str) -> str:
        return self._values[coerce_field(field)]

    def get_error_text(self, field: FieldName | str) -> str:
        """First message of *field*, or ``""`` when it is valid.

        Later messages are kept (see :meth:`get_errors`) but a UI shows
        only the first failure.
        """
        return self._errors.first(coerce_field(field))

    def get_errors(self, field: FieldName | str) -> list[str]:
        """All messages of *field* in the order its rules produced them."""
        return list(self._errors.get(coerce_field(field)))

    @property
    def has_errors(self) -> bool:
        return bool(self._errors)

    def values(self) -> dict[str, str]:
        """Snapshot of every field value, keyed by field name."""
        return {str(field): value for field, value in self._values.items()}

    def errors(self) -> dict[str, list[str]]:
        """Snapshot of every field that currently has messages."""
        return self._errors.as_dict()

    @property
    def name_error(self) -> str:
        return self.get_error_text(FieldName.NAME)

    @property
    def email_error(self) -> str:
        return self.get_error_text(FieldName.EMAIL)

    @property
    def phone_error(self) -> str:
        return self.get_error_text(FieldName.PHONE)

    @property
    def password_error(self) -> str:
        return self.get_error_text(FieldName.PASSWORD)

    @property
    def confirm_password_error(self) -> str:
        return self.get_error_text(FieldName.CONFIRM_PASSWORD)

    # ------------------------------------------------------------------
    # Subscription shortcuts
    # ------------------------------------------------------------------

    def on_value_changed(self, callback: Listener) -> Subscription:
        return self.value_changed.subscribe(callback)

    def on_errors_changed(self, callback: Listener) -> Subscription:
        return self.errors_changed.subscribe(callback)

    def on_error_text_changed(self, callback: Listener) -> Subscription:
        return self.error_text_changed.subscribe(callback)

    def __repr__(self) -> str:
        return f"FormModel(errors={self._errors.as_dict()!r})"
