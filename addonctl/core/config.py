"""集中配置管理

提供统一的配置入口，支持从 YAML 文件加载 + 编程式覆盖。
相对路径的 addons_dir / addon_config_file 均以 home_dir 为根。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from addonctl.core.exceptions import ConfigError
from addonctl.utils.file_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_HOME = "~/.addonctl"
DEFAULT_CONFIG_FILE = os.path.join(DEFAULT_HOME, "config.yml")


@dataclass
class Config:
    """全局配置"""

    # 目录
    home_dir: str = DEFAULT_HOME
    addons_dir: str = "addons"
    addon_config_file: str = "addons.json"

    # oc 客户端
    oc_path: str = "oc"
    kubeconfig: str = "~/.kube/config"

    # 虚拟机 SSH 连接
    ssh_host: str = ""
    ssh_port: int = 22
    ssh_user: str = "docker"
    ssh_key: str = ""

    # 插值上下文预置变量
    ip: str = ""
    routing_suffix: str = ""
    addon_env: list[str] = field(default_factory=list)

    # 单条外部命令超时（秒），0 表示不限制
    command_timeout: int = 0

    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(os.path.expanduser(path))
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k.replace("-", "_"): v for k, v in data.items()
                   if k.replace("-", "_") in known}
        extra = {k: v for k, v in data.items() if k.replace("-", "_") not in known}
        addon_env = matched.get("addon_env")
        if addon_env is not None and not isinstance(addon_env, list):
            raise ConfigError(f"addon_env 必须是 KEY=VALUE 列表: {path}")
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def _under_home(self, value: str) -> Path:
        p = Path(os.path.expanduser(value))
        if p.is_absolute():
            return p
        return Path(os.path.expanduser(self.home_dir)) / p

    @property
    def addons_path(self) -> Path:
        return self._under_home(self.addons_dir)

    @property
    def addon_config_path(self) -> Path:
        return self._under_home(self.addon_config_file)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = DEFAULT_CONFIG_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
