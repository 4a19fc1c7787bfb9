"""命令处理链

按固定顺序逐个检查关键字前缀，第一个匹配的命令类构造命令对象；
都不匹配时抛 UnknownCommandError。顺序决定前缀重叠时的优先级，不可调整。
"""

from __future__ import annotations

from addonctl.addon.commands import (
    CatCommand,
    Command,
    DockerCommand,
    EchoCommand,
    OcCommand,
    OpenShiftCommand,
    SleepCommand,
    SSHCommand,
)
from addonctl.core.exceptions import UnknownCommandError

DEFAULT_HANDLERS: tuple[type[Command], ...] = (
    OcCommand,
    OpenShiftCommand,
    DockerCommand,
    SleepCommand,
    SSHCommand,
    EchoCommand,
    CatCommand,
)

KEYWORDS = tuple(cls.keyword for cls in DEFAULT_HANDLERS)


def starts_with_keyword(line: str, keyword: str) -> bool:
    """line 以 keyword 开头，且其后是空白或行尾"""
    if not line.startswith(keyword):
        return False
    rest = line[len(keyword):]
    return rest == "" or rest[0].isspace()


class CommandHandlerChain:
    """命令行 → Command"""

    def __init__(self, handlers: tuple[type[Command], ...] = DEFAULT_HANDLERS) -> None:
        self._handlers = handlers

    def handle(self, line: str, ignore_error: bool = False, output_variable: str = "") -> Command:
        line = line.strip()
        for command_cls in self._handlers:
            if starts_with_keyword(line, command_cls.keyword):
                return command_cls(
                    line, ignore_error=ignore_error, output_variable=output_variable,
                )
        raise UnknownCommandError(line)
