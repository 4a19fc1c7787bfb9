"""服务容器：由 Config 懒加载创建 add-on 管理器、配置存储和各 commander

依赖关系（→ 表示依赖）:
  manager → store
  docker  → ssh
  execution_context → oc, docker, ssh

用法:
    container = ServiceContainer(config=Config.from_file(path))
    manager = container.manager
    ctx = container.execution_context(["USER=developer"])
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from addonctl.core.exceptions import ConfigError

if TYPE_CHECKING:
    from addonctl.addon.context import ExecutionContext
    from addonctl.addon.manager import AddOnManager
    from addonctl.commanders.docker import VmDockerCommander
    from addonctl.commanders.oc import CliOcRunner
    from addonctl.commanders.ssh import BinarySSHCommander
    from addonctl.core.addon_config import AddOnConfigStore
    from addonctl.core.config import Config

logger = logging.getLogger(__name__)

IP_VAR = "ip"
ROUTING_SUFFIX_VAR = "routing-suffix"

DEFAULT_ADDONS_DIR = Path(__file__).resolve().parent.parent / "assets" / "addons"


def parse_env_pairs(pairs: Iterable[str]) -> dict[str, str]:
    """解析 KEY=VALUE 列表，格式错误抛 ConfigError"""
    result: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"add-on 变量必须为 KEY=VALUE 格式: '{pair}'")
        result[key.strip()] = value.strip()
    return result


class ServiceContainer:
    """懒加载服务容器，同一容器内的实例共享"""

    def __init__(self, config: Config | None = None) -> None:
        self._instances: dict[str, object] = {}
        if config is None:
            from addonctl.core.config import get_config
            config = get_config()
        self._config = config

    @property
    def config(self) -> Config:
        return self._config

    # ---- add-on ----

    @property
    def store(self) -> AddOnConfigStore:
        if "store" not in self._instances:
            from addonctl.core.addon_config import AddOnConfigStore
            self._instances["store"] = AddOnConfigStore(self._config.addon_config_path)
        return self._instances["store"]  # type: ignore[return-value]

    @property
    def manager(self) -> AddOnManager:
        if "manager" not in self._instances:
            from addonctl.addon.manager import AddOnManager
            base_dir = self._config.addons_path
            base_dir.mkdir(parents=True, exist_ok=True)
            self._instances["manager"] = AddOnManager(base_dir, self.store.load())
        return self._instances["manager"]  # type: ignore[return-value]

    # ---- commanders ----

    @property
    def ssh(self) -> BinarySSHCommander:
        if "ssh" not in self._instances:
            from addonctl.commanders.ssh import BinarySSHCommander
            cfg = self._config
            self._instances["ssh"] = BinarySSHCommander(
                cfg.ssh_host or cfg.ip, user=cfg.ssh_user, port=cfg.ssh_port,
                key_path=cfg.ssh_key, timeout=cfg.command_timeout or None,
            )
        return self._instances["ssh"]  # type: ignore[return-value]

    @property
    def docker(self) -> VmDockerCommander:
        if "docker" not in self._instances:
            from addonctl.commanders.docker import VmDockerCommander
            self._instances["docker"] = VmDockerCommander(self.ssh)
        return self._instances["docker"]  # type: ignore[return-value]

    @property
    def oc(self) -> CliOcRunner:
        if "oc" not in self._instances:
            from addonctl.commanders.oc import CliOcRunner
            cfg = self._config
            self._instances["oc"] = CliOcRunner(
                cfg.oc_path, cfg.kubeconfig, timeout=cfg.command_timeout or None,
            )
        return self._instances["oc"]  # type: ignore[return-value]

    def execution_context(self, addon_env: Iterable[str] = ()) -> ExecutionContext:
        """新建执行上下文，预置 ip / routing-suffix 以及配置和命令行给出的变量

        命令行变量覆盖配置文件中的同名变量。
        """
        from addonctl.addon.context import ExecutionContext

        ctx = ExecutionContext(self.oc, self.docker, self.ssh)
        cfg = self._config
        if cfg.ip:
            ctx.bind(IP_VAR, cfg.ip)
        if cfg.routing_suffix:
            ctx.bind(ROUTING_SUFFIX_VAR, cfg.routing_suffix)
        variables = parse_env_pairs(cfg.addon_env)
        variables.update(parse_env_pairs(addon_env))
        for key, value in variables.items():
            ctx.bind(key, value)
        return ctx


# =========================================================================
# 全局单例
# =========================================================================

_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    global _container  # noqa: PLW0603
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """重置全局容器（配置切换或测试时使用）"""
    global _container  # noqa: PLW0603
    _container = None
