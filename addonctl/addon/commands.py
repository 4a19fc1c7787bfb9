"""add-on 命令

每条命令行对应一个 Command 对象。公共流程（Command.execute）:

  1. 子类 _do_execute 先对原始命令插值，再交给对应 commander 执行，返回文本输出
  2. 有 output_variable 时，输出 strip 后绑定到上下文；否则输出写到 stdout
  3. 执行失败且 ignore_error 为 True 时吞掉错误，只记 warning 日志
"""

from __future__ import annotations

import io
import logging
import re
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import click

from addonctl.core.exceptions import (
    CommandFailedError,
    ExecutionError,
    InvalidCommandError,
)

if TYPE_CHECKING:
    from addonctl.addon.context import ExecutionContext

logger = logging.getLogger(__name__)

OPENSHIFT_CONTAINER = "origin"
OPENSHIFT_EXEC = "openshift"

_SLEEP_RE = re.compile(r"^sleep\s+(\d+)")


class Command(ABC):
    """命令基类"""

    keyword: str = ""

    def __init__(self, raw: str, *, ignore_error: bool = False, output_variable: str = "") -> None:
        self.raw = raw
        self.ignore_error = ignore_error
        self.output_variable = output_variable

    def execute(self, ctx: ExecutionContext) -> None:
        logger.debug("执行命令: %s", self.raw)
        try:
            output = self._do_execute(ctx)
        except (CommandFailedError, InvalidCommandError) as e:
            if not self.ignore_error:
                raise
            logger.warning("忽略命令错误: %s", e)
            return
        if output is None:
            return
        if self.output_variable:
            ctx.bind(self.output_variable, output.strip())
        else:
            self._emit(output)

    @abstractmethod
    def _do_execute(self, ctx: ExecutionContext) -> str | None:
        """执行命令，返回文本输出（无输出返回 None）"""

    def _emit(self, output: str) -> None:
        if output:
            click.echo(output, nl=False)

    def _arguments(self, text: str) -> str:
        """去掉开头的关键字及其后的一个空白字符"""
        return text[len(self.keyword) + 1:]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Command):
            return NotImplemented
        return (type(self) is type(other) and self.raw == other.raw
                and self.ignore_error == other.ignore_error
                and self.output_variable == other.output_variable)

    def __repr__(self) -> str:
        prefix = "!" if self.ignore_error else ""
        if self.output_variable:
            prefix += f"{self.output_variable} := "
        return f"{type(self).__name__}({prefix}{self.raw!r})"


class OcCommand(Command):
    """oc <args>：通过 oc 客户端执行"""

    keyword = "oc"

    def _do_execute(self, ctx: ExecutionContext) -> str | None:
        args = self._arguments(ctx.interpolate(self.raw))
        stdout, stderr = io.StringIO(), io.StringIO()
        status = ctx.oc.run(args, stdout, stderr)
        if status != 0:
            reason = stderr.getvalue().strip() or f"exit status {status}"
            raise CommandFailedError(self.raw, reason)
        return stdout.getvalue()


class OpenShiftCommand(Command):
    """openshift <args>：在 origin 容器内执行 openshift 命令"""

    keyword = "openshift"

    def _do_execute(self, ctx: ExecutionContext) -> str | None:
        args = self._arguments(ctx.interpolate(self.raw))
        try:
            return ctx.docker.exec("-t", OPENSHIFT_CONTAINER, OPENSHIFT_EXEC, args)
        except ExecutionError as e:
            raise CommandFailedError(self.raw, str(e)) from e


class DockerCommand(Command):
    """docker <args>：整行交给虚拟机 shell 执行"""

    keyword = "docker"

    def _do_execute(self, ctx: ExecutionContext) -> str | None:
        try:
            return ctx.docker.local_exec(ctx.interpolate(self.raw))
        except ExecutionError as e:
            raise CommandFailedError(self.raw, str(e)) from e


class SSHCommand(Command):
    """ssh <cmd>：通过 SSH 在虚拟机上执行"""

    keyword = "ssh"

    def _do_execute(self, ctx: ExecutionContext) -> str | None:
        cmd = self._arguments(ctx.interpolate(self.raw))
        try:
            return ctx.ssh.ssh_command(cmd)
        except ExecutionError as e:
            raise CommandFailedError(self.raw, str(e)) from e


class SleepCommand(Command):
    """sleep <N>：暂停 N 秒，N 之后的内容忽略"""

    keyword = "sleep"

    def seconds(self, ctx: ExecutionContext | None = None) -> int:
        text = ctx.interpolate(self.raw) if ctx is not None else self.raw
        m = _SLEEP_RE.match(text)
        if m is None:
            raise InvalidCommandError(f"Unable to extract sleep time from cmd: {self.raw}")
        return int(m.group(1))

    def _do_execute(self, ctx: ExecutionContext) -> str | None:
        time.sleep(self.seconds(ctx))
        return None


class EchoCommand(Command):
    """echo <text>：换行并缩进两格后原样输出"""

    keyword = "echo"

    def _do_execute(self, ctx: ExecutionContext) -> str | None:
        return self._arguments(ctx.interpolate(self.raw))

    def _emit(self, output: str) -> None:
        click.echo("\n  " + output, nl=False)


class CatCommand(Command):
    """cat <file>：读取文件内容，相对路径以 add-on 目录为基准"""

    keyword = "cat"

    def _do_execute(self, ctx: ExecutionContext) -> str | None:
        path = self._arguments(ctx.interpolate(self.raw)).strip()
        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError as e:
            raise CommandFailedError(self.raw, f"File {path} doesn't exist") from e
        except UnicodeDecodeError as e:
            raise CommandFailedError(self.raw, f"File {path} is not valid UTF-8 text") from e
        except OSError as e:
            raise CommandFailedError(self.raw, str(e)) from e
