"""addonctl 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import os

import click

from addonctl import __version__
from addonctl.core.config import DEFAULT_CONFIG_FILE, init_config
from addonctl.services.container import ServiceContainer, get_container, reset_container
from addonctl.utils.logger import setup_logging_from_env


def _svc() -> ServiceContainer:
    """获取全局服务容器的快捷方式"""
    return get_container()


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "config_path",
    default=lambda: os.getenv("ADDONCTL_CONFIG", DEFAULT_CONFIG_FILE),
    show_default="$ADDONCTL_CONFIG 或 ~/.addonctl/config.yml",
    help="配置文件路径",
)
def main(config_path: str) -> None:
    """addonctl - OpenShift 单节点集群 add-on 管理"""
    setup_logging_from_env()
    init_config(config_path)
    reset_container()


# 注册各领域子命令
from addonctl.cli.cmd_addons import register as _reg_addons  # noqa: E402

_reg_addons(main)
