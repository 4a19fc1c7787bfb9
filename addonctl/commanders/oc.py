"""oc 客户端执行器"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
from typing import IO

from addonctl.core.exceptions import ConfigError
from addonctl.utils.shell import CommandExecutor, LocalExecutor

logger = logging.getLogger(__name__)


def split_args(command: str) -> list[str]:
    """按 shell 引号规则拆分参数；引号不配对时退回按空白拆分"""
    try:
        return shlex.split(command)
    except ValueError:
        logger.debug("引号不配对，按空白拆分: %s", command)
        return command.split()


class CliOcRunner:
    """以 `oc --config=<kubeconfig> <args>` 形式调用本地 oc 二进制"""

    def __init__(
        self,
        oc_path: str,
        kubeconfig_path: str,
        *,
        timeout: int | None = None,
        executor: CommandExecutor | None = None,
    ) -> None:
        resolved = shutil.which(os.path.expanduser(oc_path))
        if resolved is None:
            raise ConfigError(f"The specified path to oc '{oc_path}' does not exist")
        kubeconfig_path = os.path.expanduser(kubeconfig_path)
        if not os.path.exists(kubeconfig_path):
            raise ConfigError(
                f"The specified path to the kube config '{kubeconfig_path}' does not exist"
            )
        self.oc_path = resolved
        self.kubeconfig_path = kubeconfig_path
        self.timeout = timeout
        self._executor = executor or LocalExecutor()

    def run(
        self, command: str, stdout: IO[str] | None = None, stderr: IO[str] | None = None,
    ) -> int:
        args = [self.oc_path, f"--config={self.kubeconfig_path}", *split_args(command)]
        logger.debug("oc: %s", command)
        r = self._executor.execute(args, timeout=self.timeout)
        if stdout is not None:
            stdout.write(r.stdout)
        if stderr is not None:
            stderr.write(r.stderr)
        return r.returncode
