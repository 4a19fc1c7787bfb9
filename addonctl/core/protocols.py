"""外部协作者协议

add-on 引擎只通过这三个协议影响外部世界，具体实现见 addonctl.commanders。
"""

from __future__ import annotations

from typing import IO, Protocol


class OcRunner(Protocol):
    """oc 客户端执行器"""

    def run(
        self, command: str, stdout: IO[str] | None = None, stderr: IO[str] | None = None,
    ) -> int:
        """执行 `oc <command>`，输出写入给定流，返回退出码"""
        ...


class SSHCommander(Protocol):
    """虚拟机 SSH 执行器"""

    def ssh_command(self, command: str) -> str:
        """在虚拟机上执行 shell 命令，返回 stdout；失败抛 ExecutionError"""
        ...


class DockerCommander(Protocol):
    """虚拟机内的 docker 执行器

    引擎只用到 exec / local_exec；其余方法供 CLI 和探测使用。
    所有方法失败时抛 ExecutionError。
    """

    def ps(self) -> str:
        ...

    def status(self, container: str) -> str:
        ...

    def start(self, container: str) -> bool:
        ...

    def stop(self, container: str) -> bool:
        ...

    def restart(self, container: str) -> bool:
        ...

    def cp(self, source: str, container: str, target: str) -> None:
        ...

    def get_id(self, container: str) -> str:
        ...

    def exec(self, options: str, container: str, command: str, args: str) -> str:
        """执行 `docker exec <options> <container> <command> <args>`"""
        ...

    def local_exec(self, command: str) -> str:
        """在虚拟机 shell 中执行命令（不进入容器）"""
        ...
