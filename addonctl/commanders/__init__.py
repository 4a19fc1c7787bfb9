"""oc / ssh / docker commander 的具体实现"""

from addonctl.commanders.docker import VmDockerCommander
from addonctl.commanders.oc import CliOcRunner
from addonctl.commanders.ssh import BinarySSHCommander

__all__ = [
    "BinarySSHCommander",
    "CliOcRunner",
    "VmDockerCommander",
]
