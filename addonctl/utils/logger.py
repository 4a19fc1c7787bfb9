"""addonctl 日志配置

日志统一输出到 stderr，stdout 留给 add-on 命令（echo / cat 等）的用户输出。
级别与格式由环境变量控制:

    ADDONCTL_LOG_LEVEL   DEBUG / INFO / WARNING（默认）/ ERROR
    ADDONCTL_LOG_JSON    为 1 时输出 JSON 行

管理器在日志记录上附带 ``extra={"addon": name}``，JSON 输出中对应 ``addon`` 字段。
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Mapping
from datetime import datetime, timezone

LEVEL_ENV = "ADDONCTL_LOG_LEVEL"
JSON_ENV = "ADDONCTL_LOG_JSON"

TEXT_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """每条记录输出一行 JSON::

        {"timestamp": "...", "level": "INFO", "logger": "addonctl.addon.manager",
         "message": "add-on 已应用: anyuid", "addon": "anyuid", "line": 42}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "line": record.lineno,
        }
        addon = getattr(record, "addon", None)
        if addon:
            entry["addon"] = addon
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def setup_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """配置根日志器；重复调用会替换已有 handler，非法级别回退到 WARNING"""
    reset_logging()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if json_output else logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)


def setup_logging_from_env(environ: Mapping[str, str] | None = None) -> None:
    """按 ADDONCTL_LOG_LEVEL / ADDONCTL_LOG_JSON 配置日志"""
    env = os.environ if environ is None else environ
    setup_logging(
        level=env.get(LEVEL_ENV, "WARNING"),
        json_output=env.get(JSON_ENV, "") == "1",
    )


def reset_logging() -> None:
    """移除根日志器上的全部 handler"""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
