from __future__ import annotations

import pytest

from draftsync.core.contracts.exceptions import ConfigError
from draftsync.core.kinds import (
    CategoryActionComputer,
    FieldActionComputer,
    ProductTypeActionComputer,
    available_kinds,
    create_action_computer,
    register,
)
from draftsync.core.kinds import registry


class _ChannelActionComputer(FieldActionComputer):
    kind = "channels"
    fields = ("name",)


def test_known_kinds_create_their_computers() -> None:
    assert isinstance(create_action_computer("categories"), CategoryActionComputer)
    assert isinstance(create_action_computer("product-types"), ProductTypeActionComputer)
    assert available_kinds() == ["categories", "product-types"]


def test_unknown_kind_lists_available_kinds() -> None:
    with pytest.raises(ConfigError, match="Available: categories, product-types"):
        create_action_computer("widgets")


def test_register_adds_kind(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(registry, "_REGISTRY", dict(registry._REGISTRY))

    register(_ChannelActionComputer)

    assert isinstance(create_action_computer("channels"), _ChannelActionComputer)
