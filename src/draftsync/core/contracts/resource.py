"""Draft, resource, reference and change-operation contracts."""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator, Sequence
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_REFERENCE_MEMBERS = frozenset({"typeId", "key", "id"})


class Reference(BaseModel):
    """Pointer to another resource, by key, by id, or both once resolved."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type_id: str = Field(alias="typeId")
    key: str | None = None
    id: str | None = None

    @model_validator(mode="after")
    def validate_target(self) -> Reference:
        if not self.key and not self.id:
            raise ValueError("reference requires a key or an id")
        return self

    def identity(self) -> tuple[str, str, str]:
        if self.id:
            return ("id", self.type_id, self.id)
        return ("key", self.type_id, self.key or "")

    def with_id(self, resource_id: str) -> Reference:
        return self.model_copy(update={"id": resource_id})

    def with_key(self, key: str) -> Reference:
        return self.model_copy(update={"key": key})


class OperationType(StrEnum):
    SET = "set"
    ADD = "add"
    REMOVE = "remove"
    REORDER = "reorder"


class ChangeOperation(BaseModel):
    """One atomic field-level instruction. Lists of operations are applied in order."""

    model_config = ConfigDict(frozen=True)

    action: str
    type: OperationType
    field: str
    value: Any = None


class Draft(BaseModel):
    kind: str
    key: str | None = None
    fields: dict[str, Any] = Field(default_factory=dict)

    @field_validator("fields", mode="before")
    @classmethod
    def parse_field_references(cls, value: Any) -> Any:
        return parse_references(value)


class Resource(BaseModel):
    id: str
    kind: str
    key: str | None = None
    version: int = Field(ge=0)
    fields: dict[str, Any] = Field(default_factory=dict)

    @field_validator("fields", mode="before")
    @classmethod
    def parse_field_references(cls, value: Any) -> Any:
        return parse_references(value)


def parse_references(value: Any) -> Any:
    """Turn ``{"typeId": ..., "key"|"id": ...}`` objects into ``Reference`` at any depth."""
    if isinstance(value, Reference):
        return value
    if isinstance(value, dict):
        if "typeId" in value and set(value) <= _REFERENCE_MEMBERS and (value.get("key") or value.get("id")):
            return Reference.model_validate(value)
        return {name: parse_references(item) for name, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [parse_references(item) for item in value]
    return value


def iter_references(value: Any) -> Iterator[Reference]:
    if isinstance(value, Reference):
        yield value
    elif isinstance(value, BaseModel):
        yield from iter_references(value.model_dump())
    elif isinstance(value, dict):
        for item in value.values():
            yield from iter_references(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from iter_references(item)


def map_references(value: Any, mapper: Callable[[Reference], Reference]) -> Any:
    if isinstance(value, Reference):
        return mapper(value)
    if isinstance(value, dict):
        return {name: map_references(item, mapper) for name, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [map_references(item, mapper) for item in value]
    return value


def canonical(value: Any) -> Any:
    """Comparison form: references compare by id when known, otherwise by key."""
    if isinstance(value, Reference):
        return value.identity()
    if isinstance(value, dict):
        return {name: canonical(item) for name, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [canonical(item) for item in value]
    return value


def to_json_value(value: Any) -> Any:
    if isinstance(value, Reference):
        return value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, dict):
        return {name: to_json_value(item) for name, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    return value


def apply_operations(
    fields: dict[str, Any],
    operations: Sequence[ChangeOperation],
    *,
    item_key: str = "name",
) -> dict[str, Any]:
    """Return a copy of *fields* with *operations* applied in order.

    List items targeted by ``remove``/``reorder`` are identified by their *item_key* member.
    """
    result = copy.deepcopy(fields)
    for operation in operations:
        if operation.type == OperationType.SET:
            if operation.value is None:
                result.pop(operation.field, None)
            else:
                result[operation.field] = copy.deepcopy(operation.value)
        elif operation.type == OperationType.ADD:
            result.setdefault(operation.field, []).append(copy.deepcopy(operation.value))
        elif operation.type == OperationType.REMOVE:
            items = result.get(operation.field, [])
            result[operation.field] = [item for item in items if _item_name(item, item_key) != operation.value]
        elif operation.type == OperationType.REORDER:
            items = result.get(operation.field, [])
            position = {name: index for index, name in enumerate(operation.value or [])}
            result[operation.field] = sorted(
                items,
                key=lambda item: position.get(_item_name(item, item_key), len(position)),
            )
    return result


def _item_name(item: Any, item_key: str) -> Any:
    if isinstance(item, dict):
        return item.get(item_key)
    return item
