"""文件系统辅助函数"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


@contextmanager
def working_directory(path: str | Path) -> Iterator[Path]:
    """临时切换进程工作目录，退出时（含异常路径）恢复原目录"""
    previous = os.getcwd()
    os.chdir(path)
    try:
        yield Path(path)
    finally:
        os.chdir(previous)


def copy_tree(source: str | Path, target: str | Path) -> None:
    """递归复制目录，目标目录不得已存在"""
    logger.debug("复制目录: %s -> %s", source, target)
    shutil.copytree(str(source), str(target))


def remove_tree(path: str | Path) -> None:
    """递归删除目录，不存在时忽略"""
    p = Path(path)
    if p.exists():
        shutil.rmtree(p)
