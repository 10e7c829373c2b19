"""Form fields and the dependencies between them.

The field set is closed: every slot of the registration form is a member of
:class:`FieldName`, and caller input is coerced through :func:`coerce_field`
so an unknown name fails fast instead of being silently ignored.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from regform.errors import UnknownFieldError


class FieldName(StrEnum):
    """Input slots of the registration form, in declaration order."""

    NAME = "name"
    EMAIL = "email"
    PHONE = "phone"
    PASSWORD = "password"
    CONFIRM_PASSWORD = "confirmPassword"


# Fields whose rules read another field's value. When the key changes,
# every listed field is revalidated right after it.
DEPENDENTS: dict[FieldName, tuple[FieldName, ...]] = {
    FieldName.PASSWORD: (FieldName.CONFIRM_PASSWORD,),
}

# Never written to logs or echoed back by the CLI.
SECRET_FIELDS: frozenset[FieldName] = frozenset(
    {FieldName.PASSWORD, FieldName.CONFIRM_PASSWORD}
)


def coerce_field(field: Any) -> FieldName:
    """Return *field* as a :class:`FieldName`.

    Accepts enum members and their string values.

    Raises:
        UnknownFieldError: If *field* does not name a form field.

    Examples:
        >>> coerce_field("email")
        <FieldName.EMAIL: 'email'>
        >>> coerce_field(FieldName.PHONE)
        <FieldName.PHONE: 'phone'>
    """
    if isinstance(field, FieldName):
        return field
    try:
        return FieldName(field)
    except ValueError:
        raise UnknownFieldError(field) from None


def dependents_of(field: FieldName) -> tuple[FieldName, ...]:
    """Fields that must be revalidated whenever *field* changes."""
    return DEPENDENTS.get(field, ())
