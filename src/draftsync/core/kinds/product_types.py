"""Product types with ordered attribute definitions."""

from __future__ import annotations

from typing import Any

from draftsync.core.contracts.resource import ChangeOperation, Draft, OperationType, Resource, canonical
from draftsync.core.kinds.fields import FieldActionComputer

ATTRIBUTES = "attributes"


def _definitions(fields: dict[str, Any]) -> dict[str, dict[str, Any]]:
    definitions: dict[str, dict[str, Any]] = {}
    for definition in fields.get(ATTRIBUTES) or []:
        if isinstance(definition, dict) and definition.get("name"):
            definitions[definition["name"]] = definition
    return definitions


class ProductTypeActionComputer(FieldActionComputer):
    """Scalar fields first, then attribute definitions: removals, additions, reorder.

    A changed definition is replaced (remove then add). Attribute types may nest
    references to other product types at any depth, e.g. a ``set`` of ``set`` of
    ``nested`` types.
    """

    kind = "product-types"
    fields = ("name", "description")

    def compute(self, existing: Resource, draft: Draft) -> list[ChangeOperation]:
        operations = super().compute(existing, draft)

        current = _definitions(existing.fields)
        desired = _definitions(draft.fields)

        replaced = {
            name for name in current.keys() & desired.keys() if canonical(current[name]) != canonical(desired[name])
        }
        for name in current:
            if name not in desired or name in replaced:
                operations.append(
                    ChangeOperation(
                        action="removeAttributeDefinition",
                        type=OperationType.REMOVE,
                        field=ATTRIBUTES,
                        value=name,
                    )
                )

        for name, definition in desired.items():
            if name not in current or name in replaced:
                operations.append(
                    ChangeOperation(
                        action="addAttributeDefinition",
                        type=OperationType.ADD,
                        field=ATTRIBUTES,
                        value=definition,
                    )
                )

        kept = [name for name in current if name in desired and name not in replaced]
        added = [name for name in desired if name not in current or name in replaced]
        desired_order = list(desired)
        if kept + added != desired_order:
            operations.append(
                ChangeOperation(
                    action="changeAttributeOrder",
                    type=OperationType.REORDER,
                    field=ATTRIBUTES,
                    value=desired_order,
                )
            )
        return operations
