"""执行上下文：插值上下文 + oc / docker / ssh 三个 commander"""

from __future__ import annotations

from typing import TYPE_CHECKING

from addonctl.addon.interpolation import InterpolationContext

if TYPE_CHECKING:
    from addonctl.core.protocols import DockerCommander, OcRunner, SSHCommander


class ExecutionContext:
    """一次 apply / remove 期间命令共享的上下文"""

    def __init__(
        self,
        oc: OcRunner,
        docker: DockerCommander,
        ssh: SSHCommander,
        interpolation: InterpolationContext | None = None,
    ) -> None:
        self._oc = oc
        self._docker = docker
        self._ssh = ssh
        self._interpolation = interpolation or InterpolationContext()

    @property
    def oc(self) -> OcRunner:
        return self._oc

    @property
    def docker(self) -> DockerCommander:
        return self._docker

    @property
    def ssh(self) -> SSHCommander:
        return self._ssh

    def bind(self, name: str, value: str) -> None:
        self._interpolation.bind(name, value)

    def unbind(self, name: str) -> None:
        self._interpolation.unbind(name)

    def is_bound(self, name: str) -> bool:
        return self._interpolation.is_bound(name)

    def vars(self) -> list[str]:
        return self._interpolation.vars()

    def interpolate(self, text: str) -> str:
        return self._interpolation.interpolate(text)
