"""基于系统 ssh 客户端的 SSH commander"""

from __future__ import annotations

import logging
import os

from addonctl.core.exceptions import ConfigError
from addonctl.utils.shell import CommandExecutor, LocalExecutor, run_cmd

logger = logging.getLogger(__name__)

SSH_OPTIONS = (
    "-o", "StrictHostKeyChecking=no",
    "-o", "UserKnownHostsFile=/dev/null",
    "-o", "LogLevel=quiet",
    "-o", "BatchMode=yes",
)


class BinarySSHCommander:
    """通过 `ssh user@host <cmd>` 在虚拟机上执行命令"""

    def __init__(
        self,
        host: str,
        *,
        user: str = "docker",
        port: int = 22,
        key_path: str = "",
        timeout: int | None = None,
        executor: CommandExecutor | None = None,
    ) -> None:
        if not host:
            raise ConfigError("未配置虚拟机 SSH 主机 (ssh_host)")
        self.host = host
        self.user = user
        self.port = port
        self.key_path = os.path.expanduser(key_path) if key_path else ""
        self.timeout = timeout
        self._executor = executor or LocalExecutor()

    def _args(self, command: str) -> list[str]:
        args = ["ssh", *SSH_OPTIONS, "-p", str(self.port)]
        if self.key_path:
            args += ["-i", self.key_path]
        args += [f"{self.user}@{self.host}", command]
        return args

    def ssh_command(self, command: str) -> str:
        logger.debug("SSH [%s@%s]: %s", self.user, self.host, command)
        r = run_cmd(
            self._args(command), executor=self._executor,
            timeout=self.timeout, label=f"ssh {command}",
        )
        return r.stdout
