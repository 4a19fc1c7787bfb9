"""add-on 领域模型

AddOnMetadata / AddOn / AddOnConfig 集中定义，解析器、管理器和 CLI 统一从此处导入。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from addonctl.core.versions import VersionConstraint

if TYPE_CHECKING:
    from addonctl.addon.commands import Command

NAME_TAG = "Name"
DESCRIPTION_TAG = "Description"
REQUIRED_VARS_TAG = "Required-Vars"
VAR_DEFAULTS_TAG = "Var-Defaults"
OPENSHIFT_VERSION_TAG = "OpenShift-Version"
URL_TAG = "Url"


@dataclass(frozen=True)
class AddOnMetadata:
    """add-on 头部元数据（只读）"""

    name: str
    description: tuple[str, ...]
    required_vars: tuple[str, ...] = ()
    var_defaults: tuple[tuple[str, str], ...] = ()
    openshift_version: VersionConstraint = field(default_factory=VersionConstraint)
    headers: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def url(self) -> str:
        return self.get_value(URL_TAG)

    def get_value(self, tag: str) -> str:
        """按标签取原始头部值，未定义时返回空串"""
        value = self.headers.get(tag, "")
        if isinstance(value, list):
            return "\n".join(value)
        return value


class AddOn:
    """一个已解析的 add-on

    元数据和命令序列创建后不可变；enabled / priority 由管理器根据持久化配置和用户命令修改。
    """

    def __init__(
        self,
        metadata: AddOnMetadata,
        commands: list[Command],
        install_path: str | Path,
        *,
        remove_metadata: AddOnMetadata | None = None,
        remove_commands: list[Command] | None = None,
    ) -> None:
        self._metadata = metadata
        self._commands = tuple(commands)
        self._remove_metadata = remove_metadata
        self._remove_commands = tuple(remove_commands or ())
        self._install_path = str(Path(install_path).absolute())
        self.enabled = False
        self.priority = 0

    @property
    def name(self) -> str:
        return self._metadata.name

    @property
    def metadata(self) -> AddOnMetadata:
        return self._metadata

    @property
    def commands(self) -> tuple[Command, ...]:
        return self._commands

    @property
    def remove_metadata(self) -> AddOnMetadata | None:
        return self._remove_metadata

    @property
    def remove_commands(self) -> tuple[Command, ...]:
        return self._remove_commands

    @property
    def has_remove(self) -> bool:
        return self._remove_metadata is not None

    @property
    def install_path(self) -> str:
        return self._install_path

    def __repr__(self) -> str:
        return (f"AddOn(name={self.name!r}, enabled={self.enabled}, "
                f"priority={self.priority}, path={self._install_path!r})")


@dataclass
class AddOnConfig:
    """持久化的 add-on 状态"""

    name: str
    enabled: bool = False
    priority: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"enabled": self.enabled, "priority": self.priority}

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> AddOnConfig:
        return cls(
            name=name,
            enabled=bool(data.get("enabled", False)),
            priority=int(data.get("priority", 0)),
        )


# =========================================================================
# 排序键，配合 sorted(addons, key=...) 使用
# =========================================================================

def by_priority(addon: AddOn) -> int:
    """按优先级升序"""
    return addon.priority


def by_status_then_name(addon: AddOn) -> tuple[bool, str]:
    """已启用在前，组内按名称升序"""
    return (not addon.enabled, addon.name)


def by_status_then_priority_then_name(addon: AddOn) -> tuple[bool, int, str]:
    """已启用在前，其次按优先级升序，最后按名称升序"""
    return (not addon.enabled, addon.priority, addon.name)
