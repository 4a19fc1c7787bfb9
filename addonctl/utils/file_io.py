"""配置文件读写

- YAML: 全局配置（config.yml），只读
- JSON: add-on 启用状态（addons.json），读写

写入一律走 atomic_write：同目录临时文件 + os.replace，中途失败不会留下半个文件。
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# 配置文件最大大小限制 (10MB)
MAX_FILE_SIZE = 10 * 1024 * 1024


def atomic_write(path: Path, content: str) -> None:
    """原子写入文件，父目录不存在时自动创建"""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp, str(path))
    except Exception:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def _check_size(p: Path) -> None:
    size = p.stat().st_size
    if size > MAX_FILE_SIZE:
        raise ValueError(f"文件过大: {p} ({size} 字节), 超过限制 {MAX_FILE_SIZE} 字节")


def load_yaml(path: str | Path) -> dict[str, Any]:
    """读取 YAML 映射

    返回:
        dict: 文件不存在、为空或顶层不是映射时返回空字典

    异常:
        yaml.YAMLError: YAML 格式错误
        ValueError: 文件超过 MAX_FILE_SIZE
    """
    p = Path(path)
    if not p.exists():
        return {}
    _check_size(p)
    try:
        with open(p, encoding="utf-8") as f:
            result = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error("解析 YAML 文件失败: %s, 错误: %s", path, e)
        raise

    if result is None:
        return {}
    if not isinstance(result, dict):
        logger.warning("%s 顶层不是映射 (实际类型: %s)，按空配置处理",
                       path, type(result).__name__)
        return {}
    return result


def load_json(path: str | Path, default: Any = None) -> Any:
    """读取 JSON 文档，文件不存在时返回 default；格式错误抛 json.JSONDecodeError"""
    p = Path(path)
    if not p.exists():
        return default
    _check_size(p)
    with open(p, encoding="utf-8") as f:
        return json.load(f)


def save_json(path: str | Path, data: Any) -> None:
    atomic_write(Path(path), json.dumps(data, indent=2, ensure_ascii=False) + "\n")
