"""RegistrationService: fill a registration form and report its state."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from regform.domain.fields import FieldName, coerce_field
from regform.errors import UnknownFieldError
from regform.form.model import FormModel
from regform.services.result import ServiceResult

if TYPE_CHECKING:
    from regform.config.models import FormConfig
    from regform.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class RegistrationService:
    """Runs a :class:`FormModel` over a batch of submitted values.

    Parameters:
        config: Rule parameters and messages for the form.
        plugins: Optional plugin manager; contributes extra rules and is
            attached to the form as an observer.
    """

    def __init__(
        self,
        config: FormConfig | None = None,
        *,
        plugins: PluginManager | None = None,
    ) -> None:
        self._config = config
        self._plugins = plugins

    def build_form(self) -> FormModel:
        """Create a form with plugin rules and observers in place."""
        extra = self._plugins.collect_rules() if self._plugins is not None else None
        form = FormModel(self._config, extra_rules=extra)
        if self._plugins is not None:
            self._plugins.attach(form)
        return form

    def validate(
        self,
        values: Mapping[str, str | None],
        *,
        trace: bool = False,
    ) -> ServiceResult:
        """Set each submitted value, then validate every field.

        Values are applied in form declaration order regardless of the
        order of *values*, so ``confirmPassword`` always sees the final
        password.
        """
        op = "validate"
        try:
            submitted = {coerce_field(k): v for k, v in values.items()}
        except UnknownFieldError as exc:
            return ServiceResult.failure(op, "UNKNOWN_FIELD", str(exc), field=str(exc.field))

        form = self.build_form()
        warnings = self._plugins.rule_warnings if self._plugins is not None else []
        events: list[str] = []
        if trace:
            form.on_value_changed(lambda f: events.append(f"value_changed:{f}"))
            form.on_errors_changed(lambda f: events.append(f"errors_changed:{f}"))
            form.on_error_text_changed(lambda f: events.append(f"error_text_changed:{f}"))

        for field in FieldName:
            if field in submitted:
                form.set_field(field, submitted[field])
        valid = form.validate_all()

        meta = {"events": events} if trace else None
        fields = {
            str(field): {
                "provided": field in submitted and not _is_empty(submitted[field]),
                "valid": not form.get_errors(field),
                "error": form.get_error_text(field),
            }
            for field in FieldName
        }

        if not valid:
            errors = form.errors()
            logger.debug("Registration invalid: %s", sorted(errors))
            return ServiceResult.failure(
                op,
                "VALIDATION_FAILED",
                f"{len(errors)} field(s) invalid: {', '.join(errors)}",
                warnings=warnings,
                meta=meta,
                errors=errors,
                fields=fields,
            )

        return ServiceResult(ok=True, op=op, data={"fields": fields}, warnings=warnings, meta=meta)


def _is_empty(value: str | None) -> bool:
    return value is None or value == ""
