"""虚拟机内 docker 的 commander：所有 docker 命令经 SSH 执行"""

from __future__ import annotations

import logging
import time

from addonctl.core.exceptions import ExecutionError
from addonctl.core.protocols import SSHCommander

logger = logging.getLogger(__name__)


class VmDockerCommander:
    """DockerCommander 协议的 SSH 实现"""

    def __init__(
        self,
        ssh: SSHCommander,
        *,
        restart_retries: int = 5,
        retry_interval: float = 1.0,
        settle_time: float = 3.0,
    ) -> None:
        self._ssh = ssh
        self.restart_retries = restart_retries
        self.retry_interval = retry_interval
        self.settle_time = settle_time

    def _run(self, cmd: str) -> str:
        logger.debug("docker: %s", cmd)
        return self._ssh.ssh_command(cmd)

    def ps(self) -> str:
        return self._run("docker ps")

    def status(self, container: str) -> str:
        return self._run(f"docker inspect -f '{{{{.State.Status}}}}' {container}").strip()

    def get_id(self, container: str) -> str:
        return self._run(f"docker inspect -f '{{{{.Id}}}}' {container}").strip()

    def start(self, container: str) -> bool:
        self._run(f"docker start {container}")
        return True

    def stop(self, container: str) -> bool:
        self._run(f"docker stop {container}")
        return True

    def restart(self, container: str) -> bool:
        """stop + start，然后轮询直到容器状态为 running"""
        self.stop(container)
        self.start(container)
        time.sleep(self.settle_time)

        status = ""
        for attempt in range(1, self.restart_retries + 1):
            status = self.status(container)
            if status == "running":
                return True
            logger.debug("容器 %s 状态为 %s，第 %d 次重试", container, status, attempt)
            time.sleep(self.retry_interval)
        raise ExecutionError(f"Unexpected container state '{status}'")

    def cp(self, source: str, container: str, target: str) -> None:
        self._run(f"docker cp {source} {container}:{target}")

    def exec(self, options: str, container: str, command: str, args: str) -> str:
        return self._run(f"docker exec {options} {container} {command} {args}")

    def local_exec(self, command: str) -> str:
        return self._run(command)
