"""Pluggy hook specifications for regform.

One setup-time hook lets plugins contribute extra validation rules.
Two observer hooks mirror the form's notification channels.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from regform.domain.fields import FieldName
    from regform.domain.rules import Rule
    from regform.form.model import FormModel

hookspec = pluggy.HookspecMarker("regform")


class RegformHookSpec:
    """Hook specifications for the regform plugin system."""

    @hookspec
    def register_rules(self) -> dict[str, list[Rule]] | None:
        """Return field name -> rules appended after the built-in chain."""

    @hookspec
    def form_value_changed(self, form: FormModel, field: FieldName) -> None:
        """Called after a field value changed."""

    @hookspec
    def form_errors_changed(self, form: FormModel, field: FieldName) -> None:
        """Called after a field was revalidated."""
