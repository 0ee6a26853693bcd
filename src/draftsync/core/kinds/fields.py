"""Generic per-field change computation."""

from __future__ import annotations

from typing import Any, ClassVar

from draftsync.core.contracts.actions import ActionComputer
from draftsync.core.contracts.resource import ChangeOperation, Draft, OperationType, Resource, canonical


def set_action(field: str) -> str:
    """``orderHint`` -> ``setOrderHint``."""
    return f"set{field[:1].upper()}{field[1:]}"


class FieldActionComputer(ActionComputer):
    """Emits one ``set`` operation per declared field whose value differs.

    A field absent from the draft is unset. Values compare in canonical form, so a
    reference by key and the same reference by id are equal once resolved.
    """

    kind: ClassVar[str] = ""
    fields: ClassVar[tuple[str, ...]] = ()

    def compute(self, existing: Resource, draft: Draft) -> list[ChangeOperation]:
        operations: list[ChangeOperation] = []
        for field in self.fields:
            operation = self.set_if_changed(field, existing.fields.get(field), draft.fields.get(field))
            if operation is not None:
                operations.append(operation)
        return operations

    @staticmethod
    def set_if_changed(field: str, current: Any, desired: Any) -> ChangeOperation | None:
        if canonical(current) == canonical(desired):
            return None
        return ChangeOperation(action=set_action(field), type=OperationType.SET, field=field, value=desired)
