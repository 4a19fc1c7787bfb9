"""add-on 状态存储单元测试"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from addonctl.core.addon_config import AddOnConfigStore
from addonctl.core.exceptions import ConfigError
from addonctl.core.models import AddOnConfig


class TestAddOnConfigStore:
    def test_missing_file(self, tmp_path: Path) -> None:
        assert AddOnConfigStore(tmp_path / "addons.json").load() == {}

    def test_put_and_load(self, tmp_path: Path) -> None:
        store = AddOnConfigStore(tmp_path / "nested" / "addons.json")
        store.put(AddOnConfig("anyuid", True, 2))
        store.put(AddOnConfig("admin-user", False, 0))
        assert store.load() == {
            "anyuid": AddOnConfig("anyuid", True, 2),
            "admin-user": AddOnConfig("admin-user", False, 0),
        }
        data = json.loads(store.config_file.read_text(encoding="utf-8"))
        assert list(data) == ["admin-user", "anyuid"]
        assert data["anyuid"] == {"enabled": True, "priority": 2}

    def test_put_overwrites(self, tmp_path: Path) -> None:
        store = AddOnConfigStore(tmp_path / "addons.json")
        store.put(AddOnConfig("anyuid", True, 2))
        store.put(AddOnConfig("anyuid", False, 2))
        assert store.load()["anyuid"].enabled is False

    def test_remove(self, tmp_path: Path) -> None:
        store = AddOnConfigStore(tmp_path / "addons.json")
        store.put(AddOnConfig("anyuid", True, 0))
        assert store.remove("anyuid") is True
        assert store.remove("anyuid") is False
        assert store.load() == {}

    def test_invalid_json(self, tmp_path: Path) -> None:
        f = tmp_path / "addons.json"
        f.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError):
            AddOnConfigStore(f).load()

    def test_not_an_object(self, tmp_path: Path) -> None:
        f = tmp_path / "addons.json"
        f.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="JSON"):
            AddOnConfigStore(f).load()

    def test_invalid_entry_skipped(self, tmp_path: Path) -> None:
        f = tmp_path / "addons.json"
        f.write_text('{"a": 1, "b": {"enabled": true}}', encoding="utf-8")
        assert AddOnConfigStore(f).load() == {"b": AddOnConfig("b", True, 0)}

    @pytest.mark.parametrize("priority", ['"x"', "null", "[1]"])
    def test_invalid_priority_skipped(self, tmp_path: Path, priority: str) -> None:
        f = tmp_path / "addons.json"
        f.write_text(
            f'{{"a": {{"enabled": true, "priority": {priority}}}, "b": {{"priority": 2}}}}',
            encoding="utf-8",
        )
        assert AddOnConfigStore(f).load() == {"b": AddOnConfig("b", False, 2)}
