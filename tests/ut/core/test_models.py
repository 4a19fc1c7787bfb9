"""add-on 模型与排序键单元测试"""

from __future__ import annotations

from addonctl.core.models import (
    AddOn,
    AddOnConfig,
    AddOnMetadata,
    by_priority,
    by_status_then_name,
    by_status_then_priority_then_name,
)


def _make(name: str, enabled: bool = False, priority: int = 0) -> AddOn:
    addon = AddOn(AddOnMetadata(name=name, description=("d",)), [], f"/tmp/{name}")
    addon.enabled = enabled
    addon.priority = priority
    return addon


def _names(addons: list[AddOn]) -> list[str]:
    return [a.name for a in addons]


class TestSortKeys:
    def test_by_priority(self) -> None:
        addons = [_make("a", priority=3), _make("b", priority=1), _make("c", priority=2)]
        assert _names(sorted(addons, key=by_priority)) == ["b", "c", "a"]

    def test_by_status_then_name(self) -> None:
        addons = [_make("d"), _make("c", True), _make("b"), _make("a", True)]
        assert _names(sorted(addons, key=by_status_then_name)) == ["a", "c", "b", "d"]

    def test_by_status_then_priority_then_name(self) -> None:
        addons = [
            _make("z", False, 0),
            _make("b", True, 2),
            _make("a", True, 2),
            _make("c", True, 1),
            _make("y", False, 1),
        ]
        assert _names(sorted(addons, key=by_status_then_priority_then_name)) == [
            "c", "a", "b", "z", "y",
        ]


class TestAddOn:
    def test_defaults(self) -> None:
        addon = _make("anyuid")
        assert addon.enabled is False
        assert addon.priority == 0
        assert addon.commands == ()
        assert addon.has_remove is False
        assert "anyuid" in repr(addon)


class TestAddOnConfig:
    def test_round_trip(self) -> None:
        cfg = AddOnConfig("anyuid", True, 3)
        assert AddOnConfig.from_dict("anyuid", cfg.to_dict()) == cfg

    def test_from_dict_defaults(self) -> None:
        assert AddOnConfig.from_dict("x", {}) == AddOnConfig("x", False, 0)
