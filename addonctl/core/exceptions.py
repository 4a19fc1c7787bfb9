"""统一异常体系

所有业务异常继承 AddonError。CLI 层据此输出友好提示，
管理器据此区分「解析失败跳过」与「需要上抛」两类错误。
"""

from __future__ import annotations


class AddonError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(AddonError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"


class ExecutionError(AddonError):
    """外部程序（oc / ssh / docker）执行失败"""

    code = "EXECUTION_ERROR"


# =========================================================================
# 解析阶段
# =========================================================================

class ParseError(AddonError):
    """add-on 目录或定义文件格式错误"""

    code = "PARSE_ERROR"

    def __init__(self, message: str, addon_name: str = "", addon_dir: str = "") -> None:
        super().__init__(message)
        self.addon_name = addon_name
        self.addon_dir = addon_dir


class UnknownCommandError(ParseError):
    """命令行不以任何已知关键字开头"""

    code = "UNKNOWN_COMMAND"

    def __init__(self, line: str) -> None:
        super().__init__(f"Unable to process command: '{line}'")
        self.line = line


class InvalidNameError(AddonError):
    """变量名不能用于插值"""

    code = "INVALID_NAME"


# =========================================================================
# 管理器
# =========================================================================

class InvalidBaseError(AddonError):
    """add-on 根目录不存在或不是目录"""

    code = "INVALID_BASE"


class NotFoundError(AddonError):
    """指定名称的 add-on 未安装"""

    code = "NOT_FOUND"


class AlreadyInstalledError(AddonError):
    """目标目录已存在且未指定 force"""

    code = "ALREADY_INSTALLED"


class InvalidSourceError(AddonError):
    """安装源不是合法的 add-on 目录"""

    code = "INVALID_SOURCE"


# =========================================================================
# 执行阶段
# =========================================================================

class MissingVarsError(AddonError):
    """必需变量未绑定"""

    code = "MISSING_VARS"

    def __init__(self, addon_name: str, missing: list[str]) -> None:
        super().__init__(
            f"Add-on '{addon_name}' 缺少必需变量: {', '.join(missing)}"
        )
        self.addon_name = addon_name
        self.missing = list(missing)


class VersionMismatchError(AddonError):
    """OpenShift 版本不满足 add-on 的版本约束"""

    code = "VERSION_MISMATCH"

    def __init__(self, addon_name: str, actual: str, required: str) -> None:
        super().__init__(
            f"Add-on '{addon_name}' 不支持 OpenShift {actual}，要求: {required}"
        )
        self.addon_name = addon_name
        self.actual = actual
        self.required = required


class InvalidCommandError(AddonError):
    """命令内容无法执行（如 sleep 时长非法）"""

    code = "INVALID_COMMAND"


class CommandFailedError(AddonError):
    """命令执行失败且未标记忽略错误"""

    code = "COMMAND_FAILED"

    def __init__(self, command: str, reason: str = "") -> None:
        message = f"Error executing command '{command}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.command = command
