"""Shell 命令执行工具：统一子进程调用

通过 CommandExecutor 协议抽象子进程执行，oc / ssh commander 都经由它调用外部程序，
测试时可注入 mock 实现，无需 patch subprocess。
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Protocol

from addonctl.core.exceptions import ExecutionError

logger = logging.getLogger(__name__)


# =========================================================================
# 命令执行结果
# =========================================================================

@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


# =========================================================================
# 命令执行器协议
# =========================================================================

class CommandExecutor(Protocol):
    """命令执行器协议：抽象子进程调用"""

    def execute(
        self,
        cmd: str | list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        """执行命令并返回结果"""
        ...


# =========================================================================
# 默认实现: 本地执行器
# =========================================================================

class LocalExecutor:
    """本地命令执行器（默认实现）

    找不到可执行文件或超时不抛异常，而是折算成非零返回码，
    由调用方按返回码统一处理。
    """

    def execute(
        self,
        cmd: str | list[str],
        *,
        cwd: str = ".",
        env: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        args = shlex.split(cmd) if isinstance(cmd, str) else cmd
        logger.debug("执行: %s", " ".join(shlex.quote(a) for a in args))
        try:
            r = subprocess.run(
                args, capture_output=True, text=True,
                cwd=cwd, env=env, check=False, timeout=timeout,
            )
        except FileNotFoundError as e:
            return CommandResult(returncode=127, stdout="", stderr=str(e))
        except subprocess.TimeoutExpired:
            return CommandResult(
                returncode=-1, stdout="", stderr=f"命令超时 ({timeout}s)",
            )
        return CommandResult(
            returncode=r.returncode,
            stdout=r.stdout,
            stderr=r.stderr,
        )


# =========================================================================
# 便捷函数
# =========================================================================

def run_cmd(
    cmd: str | list[str],
    *,
    executor: CommandExecutor | None = None,
    cwd: str = ".",
    timeout: int | None = None,
    label: str = "cmd",
) -> CommandResult:
    """执行命令，失败抛 ExecutionError

    Args:
        cmd: 命令字符串或参数列表
        executor: 命令执行器，缺省使用 LocalExecutor
        cwd: 工作目录
        timeout: 超时时间（秒）
        label: 日志和错误信息中的标签
    """
    executor = executor or LocalExecutor()
    r = executor.execute(cmd, cwd=cwd, timeout=timeout)
    if not r.success:
        detail = (r.stderr or r.stdout).strip()[:500]
        raise ExecutionError(f"{label}失败 (rc={r.returncode}): {detail}")
    return r
