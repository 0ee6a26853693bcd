from __future__ import annotations

import pytest
from pydantic import ValidationError

from draftsync.core.contracts.resource import (
    ChangeOperation,
    Draft,
    OperationType,
    Reference,
    apply_operations,
    canonical,
    iter_references,
    map_references,
    parse_references,
    to_json_value,
)


def test_reference_requires_key_or_id() -> None:
    with pytest.raises(ValidationError):
        Reference(type_id="categories")


def test_reference_accepts_json_alias() -> None:
    ref = Reference.model_validate({"typeId": "categories", "key": "a"})

    assert ref.type_id == "categories"
    assert ref.identity() == ("key", "categories", "a")
    assert ref.with_id("c-1").identity() == ("id", "categories", "c-1")


def test_draft_fields_parse_references_at_any_depth() -> None:
    draft = Draft(
        kind="product-types",
        key="pt",
        fields={
            "attributes": [
                {"name": "n", "type": {"name": "set", "elementType": {"typeReference": {"typeId": "x", "key": "y"}}}}
            ],
            "notARef": {"typeId": "x", "key": "y", "extra": 1},
        },
    )

    assert [ref.key for ref in iter_references(draft.fields)] == ["y"]
    assert isinstance(draft.fields["notARef"], dict)


def test_parse_references_ignores_dicts_without_target() -> None:
    assert parse_references({"typeId": "x"}) == {"typeId": "x"}


def test_map_references_and_json_value() -> None:
    fields = {"parent": Reference(type_id="categories", key="a"), "tags": ["t"]}

    mapped = map_references(fields, lambda ref: ref.with_id("c-1"))

    assert to_json_value(mapped) == {"parent": {"typeId": "categories", "key": "a", "id": "c-1"}, "tags": ["t"]}
    assert fields["parent"].id is None


def test_canonical_compares_references_by_id_when_known() -> None:
    by_id = Reference(type_id="categories", id="c-1")
    resolved = Reference(type_id="categories", key="a", id="c-1")

    assert canonical({"p": by_id}) == canonical({"p": resolved})
    assert canonical(Reference(type_id="categories", key="a")) != canonical(resolved)


def test_apply_operations_in_order() -> None:
    fields = {"name": "Old", "slug": "s", "attributes": [{"name": "a"}, {"name": "b"}]}
    operations = [
        ChangeOperation(action="setName", type=OperationType.SET, field="name", value="New"),
        ChangeOperation(action="setSlug", type=OperationType.SET, field="slug", value=None),
        ChangeOperation(action="removeAttributeDefinition", type=OperationType.REMOVE, field="attributes", value="a"),
        ChangeOperation(
            action="addAttributeDefinition", type=OperationType.ADD, field="attributes", value={"name": "c"}
        ),
        ChangeOperation(
            action="changeAttributeOrder", type=OperationType.REORDER, field="attributes", value=["c", "b"]
        ),
    ]

    result = apply_operations(fields, operations)

    assert result == {"name": "New", "attributes": [{"name": "c"}, {"name": "b"}]}
    assert fields["name"] == "Old"
