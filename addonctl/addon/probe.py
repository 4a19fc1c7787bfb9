"""OpenShift 版本探测"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from addonctl.addon.commands import OPENSHIFT_CONTAINER, OPENSHIFT_EXEC
from addonctl.core.exceptions import ExecutionError

if TYPE_CHECKING:
    from addonctl.core.protocols import DockerCommander

logger = logging.getLogger(__name__)


def parse_openshift_version(output: str) -> str:
    """从 `openshift version` 输出中提取版本号

    首行形如 ``openshift v3.6.0+c4dd4cf``，返回 ``3.6.0``。
    """
    lines = output.strip().splitlines()
    fields = lines[0].split() if lines else []
    if len(fields) < 2:
        raise ExecutionError(f"无法解析 OpenShift 版本输出: '{output.strip()}'")
    version = fields[1].split("+", 1)[0]
    if version.startswith("v"):
        version = version[1:]
    return version.strip()


def current_openshift_version(docker: DockerCommander) -> str:
    """查询 origin 容器中运行的 OpenShift 版本"""
    output = docker.exec(" ", OPENSHIFT_CONTAINER, OPENSHIFT_EXEC, "version")
    version = parse_openshift_version(output)
    logger.debug("当前 OpenShift 版本: %s", version)
    return version
