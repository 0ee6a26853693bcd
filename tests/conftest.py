"""Shared test fixtures for draftsync tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from draftsync.core.contracts.config import DraftSyncConfig
from draftsync.core.contracts.resource import Draft
from tests.fakes.catalog import FakeCatalog


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def category_drafts() -> list[Draft]:
    """A parent and a child category; the child precedes its parent."""
    return [
        Draft(
            kind="categories",
            key="shirts",
            fields={"name": "Shirts", "slug": "shirts", "parent": {"typeId": "categories", "key": "apparel"}},
        ),
        Draft(kind="categories", key="apparel", fields={"name": "Apparel", "slug": "apparel"}),
    ]


@pytest.fixture
def drafts_file(tmp_path: Path) -> Path:
    path = tmp_path / "drafts.json"
    path.write_text(
        json.dumps(
            [
                {"key": "apparel", "name": "Apparel", "slug": "apparel"},
                {"key": "shirts", "name": "Shirts", "parent": {"typeId": "categories", "key": "apparel"}},
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def sample_config(tmp_path: Path, drafts_file: Path) -> DraftSyncConfig:
    return DraftSyncConfig(
        base_url="https://catalog.example.test/api",
        kind="categories",
        drafts_path=drafts_file,
        auth="none",
    )
