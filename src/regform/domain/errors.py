"""Per-field error bookkeeping.

INVARIANT: A field is an entry only while it has at least one message.
An empty message list is never observable as an entry, so
``bool(store)`` is exactly "the form has errors".
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from regform.domain.fields import FieldName


class ErrorStore:
    """Fixed record of error messages, one slot per :class:`FieldName`.

    Every field always has a slot; an empty tuple means "no entry".
    Slots are replaced wholesale, never patched.
    """

    __slots__ = ("_slots",)

    def __init__(self) -> None:
        self._slots: dict[FieldName, tuple[str, ...]] = dict.fromkeys(FieldName, ())

    def clear(self, field: FieldName) -> None:
        """Drop the entry for *field*."""
        self._slots[field] = ()

    def store(self, field: FieldName, messages: Iterable[str]) -> None:
        """Replace the entry for *field*; an empty *messages* clears it."""
        self._slots[field] = tuple(messages)

    def get(self, field: FieldName) -> tuple[str, ...]:
        return self._slots[field]

    def first(self, field: FieldName) -> str:
        """First message for *field*, or ``""`` when it has no entry."""
        messages = self._slots[field]
        return messages[0] if messages else ""

    def fields(self) -> list[FieldName]:
        """Fields that currently have an entry, in declaration order."""
        return [f for f, messages in self._slots.items() if messages]

    def as_dict(self) -> dict[str, list[str]]:
        return {str(f): list(messages) for f, messages in self._slots.items() if messages}

    def __contains__(self, field: object) -> bool:
        return bool(self._slots.get(field, ()))  # type: ignore[call-overload]

    def __iter__(self) -> Iterator[FieldName]:
        return iter(self.fields())

    def __len__(self) -> int:
        return sum(1 for messages in self._slots.values() if messages)

    def __bool__(self) -> bool:
        return any(self._slots.values())

    def __repr__(self) -> str:
        return f"ErrorStore({self.as_dict()!r})"
