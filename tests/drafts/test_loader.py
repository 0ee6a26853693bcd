from __future__ import annotations

import json
from pathlib import Path

import pytest

from draftsync.core.contracts.exceptions import DraftLoadError
from draftsync.core.contracts.resource import Reference
from draftsync.core.drafts import DraftLoader


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_splits_key_from_fields(drafts_file: Path) -> None:
    drafts = DraftLoader().load(drafts_file, "categories")

    assert [draft.key for draft in drafts if draft is not None] == ["apparel", "shirts"]
    shirts = drafts[1]
    assert shirts is not None
    assert shirts.kind == "categories"
    assert "key" not in shirts.fields
    assert shirts.fields["parent"] == Reference(type_id="categories", key="apparel")


def test_load_keeps_null_entries_and_kind_override(tmp_path: Path) -> None:
    path = _write(tmp_path / "drafts.json", [None, {"key": "a", "kind": "product-types", "name": "A"}, {"name": "b"}])

    drafts = DraftLoader().load(path, "categories")

    assert drafts[0] is None
    assert drafts[1] is not None and drafts[1].kind == "product-types"
    assert drafts[2] is not None and drafts[2].key is None


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DraftLoadError, match="missing drafts file"):
        DraftLoader().load(tmp_path / "missing.json", "categories")


def test_load_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "drafts.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(DraftLoadError, match="invalid JSON"):
        DraftLoader().load(path, "categories")


def test_load_requires_array(tmp_path: Path) -> None:
    path = _write(tmp_path / "drafts.json", {"key": "a"})

    with pytest.raises(DraftLoadError, match="JSON array"):
        DraftLoader().load(path, "categories")


def test_load_rejects_non_object_entry(tmp_path: Path) -> None:
    path = _write(tmp_path / "drafts.json", [{"key": "a"}, "b"])

    with pytest.raises(DraftLoadError, match="draft #1 must be an object or null"):
        DraftLoader().load(path, "categories")
