from __future__ import annotations

import json
from pathlib import Path

import pytest

from draftsync.core.config import load_config
from draftsync.core.contracts.exceptions import ConfigError


def _write_config(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_config_resolves_relative_drafts_path(tmp_path: Path) -> None:
    config_path = _write_config(
        tmp_path / "draftsync.json",
        {"base_url": "https://x", "kind": "categories", "drafts_path": "data/drafts.json", "batch_size": 20},
    )

    config = load_config(config_path)

    assert config.drafts_path == (tmp_path / "data" / "drafts.json").resolve()
    assert config.batch_size == 20
    assert config.auth == "env"


def test_load_config_keeps_absolute_drafts_path(tmp_path: Path) -> None:
    absolute = tmp_path / "elsewhere" / "drafts.json"
    config_path = _write_config(
        tmp_path / "draftsync.json",
        {"base_url": "https://x", "kind": "categories", "drafts_path": str(absolute)},
    )

    assert load_config(config_path).drafts_path == absolute


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="failed reading config file"):
        load_config(tmp_path / "nope.json")


def test_load_config_invalid_json(tmp_path: Path) -> None:
    config_path = tmp_path / "draftsync.json"
    config_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid JSON"):
        load_config(config_path)


@pytest.mark.parametrize(
    "payload",
    [
        {"kind": "categories", "drafts_path": "d.json"},
        {"base_url": "https://x", "kind": "categories", "drafts_path": "d.json", "auth": "token"},
        {"base_url": "https://x", "kind": "categories", "drafts_path": "d.json", "max_concurrency": 0},
        ["not", "an", "object"],
    ],
)
def test_load_config_rejects_invalid_config(tmp_path: Path, payload: object) -> None:
    config_path = _write_config(tmp_path / "draftsync.json", payload)

    with pytest.raises(ConfigError, match="invalid config"):
        load_config(config_path)
