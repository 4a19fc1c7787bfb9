"""add-on 引擎

- interpolation.py: 变量插值上下文
- context.py: 执行上下文（插值 + 三个 commander）
- commands.py: 各类命令
- handlers.py: 命令行 → 命令对象
- metadata.py: 头部 → 元数据
- parser.py: add-on 目录解析
- manager.py: 发现 / 安装 / 启用 / 应用
- probe.py: OpenShift 版本探测
"""

from addonctl.addon.context import ExecutionContext
from addonctl.addon.interpolation import InterpolationContext
from addonctl.addon.manager import AddOnManager
from addonctl.addon.parser import AddOnParser

__all__ = [
    "AddOnManager",
    "AddOnParser",
    "ExecutionContext",
    "InterpolationContext",
]
