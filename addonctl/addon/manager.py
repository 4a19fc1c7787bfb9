"""add-on 管理器

职责:
- 发现 base_dir 下的全部 add-on，合并持久化的启用状态 / 优先级
- 安装 / 卸载 add-on 目录
- 启用 / 禁用（返回需持久化的 AddOnConfig，由调用方写入）
- 按优先级应用已启用的 add-on，或应用 / 移除单个 add-on

失败语义:
- 发现阶段的 ParseError 记 warning 后跳过该目录，其余错误上抛
- 应用阶段任何错误立即上抛，Apply 不再继续后续 add-on
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from addonctl.addon.parser import AddOnParser
from addonctl.addon.probe import current_openshift_version
from addonctl.core.exceptions import (
    AlreadyInstalledError,
    InvalidBaseError,
    InvalidSourceError,
    MissingVarsError,
    NotFoundError,
    ParseError,
    VersionMismatchError,
)
from addonctl.core.models import AddOn, AddOnConfig, by_priority
from addonctl.utils.fs import copy_tree, remove_tree, working_directory

if TYPE_CHECKING:
    from addonctl.addon.commands import Command
    from addonctl.addon.context import ExecutionContext

logger = logging.getLogger(__name__)

ADDON_NAME_VAR = "addon-name"


class AddOnManager:
    """单个 add-on 根目录的管理器"""

    def __init__(
        self,
        base_dir: str | Path,
        configs: Mapping[str, AddOnConfig] | None = None,
        *,
        parser: AddOnParser | None = None,
    ) -> None:
        self._base_dir = Path(base_dir)
        if not self._base_dir.is_dir():
            raise InvalidBaseError(
                f"Unable to create addon manager for non existing directory {base_dir}"
            )
        self._parser = parser or AddOnParser()
        self._addons: dict[str, AddOn] = {}
        self._discover(configs or {})

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _discover(self, configs: Mapping[str, AddOnConfig]) -> None:
        for entry in sorted(self._base_dir.iterdir()):
            if not entry.is_dir():
                continue
            try:
                addon = self._parser.parse(entry)
            except ParseError as e:
                logger.warning("跳过 add-on '%s' (%s)，解析失败: %s", entry.name, entry, e)
                continue
            self._apply_config(addon, configs)
            self._addons[addon.name] = addon
        logger.info("已发现 %d 个 add-on: %s", len(self._addons), self._base_dir)

    @staticmethod
    def _apply_config(addon: AddOn, configs: Mapping[str, AddOnConfig]) -> None:
        config = configs.get(addon.name)
        if config is None:
            return
        addon.enabled = config.enabled
        addon.priority = config.priority

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    def list(self, key: Callable[[AddOn], Any] | None = None) -> list[AddOn]:
        """全部 add-on；指定 key 时按其排序"""
        addons = list(self._addons.values())
        if key is not None:
            addons.sort(key=key)
        return addons

    def get(self, name: str) -> AddOn | None:
        return self._addons.get(name)

    def is_installed(self, name: str) -> bool:
        return name in self._addons

    def _require(self, name: str) -> AddOn:
        addon = self._addons.get(name)
        if addon is None:
            raise NotFoundError(
                f"Unable to find addon {name} in addon directory {self._base_dir}"
            )
        return addon

    # ------------------------------------------------------------------
    # 安装 / 卸载
    # ------------------------------------------------------------------

    def install(self, source: str | Path, force: bool = False) -> str:
        """复制 add-on 目录到 base_dir，返回 add-on 名称"""
        source_path = Path(source)
        if not source_path.is_dir():
            raise InvalidSourceError(
                f"The source of an addon needs to be a directory. '{source}' is not"
            )
        try:
            addon = self._parser.parse(source_path)
        except ParseError as e:
            raise InvalidSourceError(f"Unable to parse specified addon: {e}") from e

        target = self._base_dir / source_path.absolute().name
        if target.exists():
            if not force:
                raise AlreadyInstalledError(
                    f"Addon already exists in target directory '{target}'"
                )
            if source_path.resolve() != target.resolve():
                remove_tree(target)
                copy_tree(source_path, target)
        else:
            copy_tree(source_path, target)

        installed = self._parser.parse(target)
        previous = self._addons.get(installed.name)
        if previous is not None:
            installed.enabled = previous.enabled
            installed.priority = previous.priority
        self._addons[installed.name] = installed
        logger.info("add-on 已安装: %s -> %s", addon.name, target)
        return installed.name

    def uninstall(self, name: str) -> None:
        addon = self._require(name)
        remove_tree(addon.install_path)
        del self._addons[name]
        logger.info("add-on 已卸载: %s", name, extra={"addon": name})

    # ------------------------------------------------------------------
    # 启用 / 禁用
    # ------------------------------------------------------------------

    def enable(self, name: str, priority: int = 0) -> AddOnConfig:
        addon = self._require(name)
        addon.enabled = True
        addon.priority = priority
        return AddOnConfig(name=name, enabled=True, priority=priority)

    def disable(self, name: str) -> AddOnConfig:
        addon = self._require(name)
        addon.enabled = False
        return AddOnConfig(name=name, enabled=False, priority=addon.priority)

    # ------------------------------------------------------------------
    # 应用 / 移除
    # ------------------------------------------------------------------

    def apply(self, ctx: ExecutionContext) -> list[str]:
        """按优先级升序应用所有已启用的 add-on，返回已应用的名称"""
        enabled = sorted((a for a in self._addons.values() if a.enabled), key=by_priority)
        applied = []
        for addon in enabled:
            self.apply_addon(addon, ctx)
            applied.append(addon.name)
        return applied

    def apply_addon(self, addon: AddOn, ctx: ExecutionContext) -> None:
        """应用单个 add-on（不论是否启用）"""
        logger.info("应用 add-on: %s", addon.name, extra={"addon": addon.name})
        self._run(addon, addon.commands, ctx)
        logger.info("add-on 已应用: %s", addon.name, extra={"addon": addon.name})

    def remove_addon(self, addon: AddOn, ctx: ExecutionContext) -> None:
        """执行 add-on 的移除命令"""
        logger.info("移除 add-on: %s", addon.name, extra={"addon": addon.name})
        self._run(addon, addon.remove_commands, ctx)
        logger.info("add-on 已移除: %s", addon.name, extra={"addon": addon.name})

    def _run(self, addon: AddOn, commands: Iterable[Command], ctx: ExecutionContext) -> None:
        with self._addon_scope(addon, ctx):
            self._check_version(addon, ctx)
            self._check_required_vars(addon, ctx)
            with working_directory(addon.install_path):
                for command in commands:
                    command.execute(ctx)

    @contextmanager
    def _addon_scope(self, addon: AddOn, ctx: ExecutionContext) -> Iterator[None]:
        """绑定 addon-name 和未被调用方覆盖的默认变量，退出时解绑"""
        ctx.bind(ADDON_NAME_VAR, addon.name)
        added_defaults = []
        try:
            for key, value in addon.metadata.var_defaults:
                if not ctx.is_bound(key):
                    ctx.bind(key, value)
                    added_defaults.append(key)
            yield
        finally:
            for key in added_defaults:
                ctx.unbind(key)
            ctx.unbind(ADDON_NAME_VAR)

    @staticmethod
    def _check_version(addon: AddOn, ctx: ExecutionContext) -> None:
        constraint = addon.metadata.openshift_version
        if constraint.is_empty():
            return
        actual = current_openshift_version(ctx.docker)
        try:
            supported = constraint.matches(actual)
        except ValueError:
            supported = False
        if not supported:
            raise VersionMismatchError(addon.name, actual, str(constraint))

    @staticmethod
    def _check_required_vars(addon: AddOn, ctx: ExecutionContext) -> None:
        bound = set(ctx.vars())
        missing = [v for v in addon.metadata.required_vars if v not in bound]
        if missing:
            raise MissingVarsError(addon.name, missing)
