"""add-on 状态持久化

JSON 文档格式::

    {
      "anyuid": {"enabled": true, "priority": 0},
      "admin-user": {"enabled": false, "priority": 5}
    }

由 CLI 在 enable / disable / uninstall 之后写入；管理器只消费加载后的映射。
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from addonctl.core.exceptions import ConfigError
from addonctl.core.models import AddOnConfig
from addonctl.utils.file_io import load_json, save_json

logger = logging.getLogger(__name__)


class AddOnConfigStore:
    """add-on 启用状态 / 优先级存储"""

    def __init__(self, config_file: str | Path) -> None:
        self.config_file = Path(config_file)

    def load(self) -> dict[str, AddOnConfig]:
        """加载全部记录，文件不存在时返回空映射"""
        try:
            data = load_json(self.config_file, default={})
        except json.JSONDecodeError as e:
            raise ConfigError(f"add-on 配置文件格式错误: {self.config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"add-on 配置文件必须是 JSON 对象: {self.config_file}")
        configs: dict[str, AddOnConfig] = {}
        for name, entry in data.items():
            if not isinstance(entry, dict):
                logger.warning("忽略无效的 add-on 配置项: %s", name)
                continue
            try:
                configs[name] = AddOnConfig.from_dict(name, entry)
            except (TypeError, ValueError) as e:
                logger.warning("忽略无效的 add-on 配置项: %s (%s)", name, e)
        return configs

    def save(self, configs: dict[str, AddOnConfig]) -> None:
        """原子性保存全部记录"""
        data = {name: cfg.to_dict() for name, cfg in sorted(configs.items())}
        save_json(self.config_file, data)

    def put(self, config: AddOnConfig) -> AddOnConfig:
        """写入单条记录并保存"""
        configs = self.load()
        configs[config.name] = config
        self.save(configs)
        logger.info("add-on 配置已更新: %s (enabled=%s, priority=%d)",
                    config.name, config.enabled, config.priority)
        return config

    def remove(self, name: str) -> bool:
        """删除单条记录"""
        configs = self.load()
        if name not in configs:
            return False
        del configs[name]
        self.save(configs)
        return True
