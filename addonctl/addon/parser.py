"""add-on 目录解析

目录结构::

    anyuid/
      anyuid.addon           必须且只能有一个
      anyuid.addon.remove    可选，最多一个

定义文件 = 头部（开头连续的 # 行）+ 命令体。头部每行去掉 ``#`` 和一个可选空格后
按 ``Tag: value`` 解析；Description 支持续行。命令体中空行和 # 注释行被跳过，
其余每行可带 ``!`` 前缀（忽略错误）和 ``NAME :=`` 前缀（捕获输出）。
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from addonctl.addon.commands import Command
from addonctl.addon.handlers import CommandHandlerChain
from addonctl.addon.metadata import create_metadata
from addonctl.core.exceptions import ParseError
from addonctl.core.models import DESCRIPTION_TAG, AddOn, AddOnMetadata

logger = logging.getLogger(__name__)

COMMENT_CHAR = "#"
ADDON_SUFFIX = ".addon"
REMOVE_SUFFIX = ".addon.remove"

NO_ADDON_DEFINITION_ERROR = "There needs to be an addon file per addon directory. Found none in {}"
MULTIPLE_ADDON_DEFINITIONS_ERROR = "There can only be one addon file per addon directory. Found {}"
MULTIPLE_REMOVE_DEFINITIONS_ERROR = (
    "There can only be one addon remove file per addon directory. Found {}"
)

_TAG_RE = re.compile(r"^([A-Za-z-]+):(.*)$")
_CAPTURE_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_.-]*)\s*:=\s*(.*)$")


def split_header(lines: list[str]) -> tuple[list[str], list[str]]:
    """拆分头部与命令体：头部为开头连续的注释行"""
    index = 0
    while index < len(lines) and lines[index].startswith(COMMENT_CHAR):
        index += 1
    return lines[:index], lines[index:]


def extract_headers(header: list[str]) -> dict[str, Any]:
    """头部行 → {tag: value}，Description 的值为行列表"""
    headers: dict[str, Any] = {}
    in_description = False
    for line in header:
        content = line[len(COMMENT_CHAR):]
        if content.startswith(" "):
            content = content[1:]
        m = _TAG_RE.match(content.rstrip())
        if m:
            tag, value = m.group(1), m.group(2).strip()
            in_description = tag == DESCRIPTION_TAG
            if in_description:
                description = headers.setdefault(DESCRIPTION_TAG, [])
                if value:
                    description.append(value)
            else:
                headers[tag] = value
        elif in_description:
            value = content.strip()
            if value:
                headers[DESCRIPTION_TAG].append(value)
    return headers


class AddOnParser:
    """add-on 解析器"""

    def __init__(self, handler_chain: CommandHandlerChain | None = None) -> None:
        self._handlers = handler_chain or CommandHandlerChain()

    def parse(self, addon_dir: str | Path) -> AddOn:
        """解析 add-on 目录，失败抛 ParseError"""
        path = Path(addon_dir)
        if not path.is_dir():
            raise ParseError("Addon directory does not exist", addon_dir=str(addon_dir))

        addon_file, remove_file = self._definition_files(path)
        meta, commands = self._parse_file(addon_file, path)
        if not commands:
            raise ParseError(
                f"Addon '{meta.name}' does not contain any commands",
                addon_name=meta.name, addon_dir=str(path),
            )

        remove_meta: AddOnMetadata | None = None
        remove_commands: list[Command] = []
        if remove_file is not None:
            remove_meta, remove_commands = self._parse_file(remove_file, path)

        logger.debug("已解析 add-on: %s (%d 条命令, %d 条移除命令)",
                     meta.name, len(commands), len(remove_commands))
        return AddOn(
            meta, commands, path,
            remove_metadata=remove_meta, remove_commands=remove_commands,
        )

    def parse_content(self, text: str) -> tuple[AddOnMetadata, list[Command]]:
        """解析定义文件内容，返回元数据和命令序列"""
        header, body = split_header(text.splitlines())
        meta = create_metadata(extract_headers(header))
        try:
            commands = self.parse_commands(body)
        except ParseError as e:
            e.addon_name = e.addon_name or meta.name
            raise
        return meta, commands

    def parse_commands(self, lines: list[str]) -> list[Command]:
        commands = []
        for line in lines:
            line = line.strip()
            if not line or line.startswith(COMMENT_CHAR):
                continue
            commands.append(self.parse_command_line(line))
        return commands

    def parse_command_line(self, line: str) -> Command:
        """单条命令行 → Command，处理 ! 和 NAME := 前缀"""
        line = line.strip()
        ignore_error = False
        if line.startswith("!"):
            ignore_error = True
            line = line[1:].strip()
        output_variable = ""
        m = _CAPTURE_RE.match(line)
        if m:
            output_variable, line = m.group(1), m.group(2).strip()
        return self._handlers.handle(line, ignore_error, output_variable)

    def _definition_files(self, path: Path) -> tuple[Path, Path | None]:
        entries = sorted(p.name for p in path.iterdir() if p.is_file())
        addon_files = [n for n in entries if n.endswith(ADDON_SUFFIX)]
        remove_files = [n for n in entries if n.endswith(REMOVE_SUFFIX)]
        if not addon_files:
            raise ParseError(NO_ADDON_DEFINITION_ERROR.format(path), addon_dir=str(path))
        if len(addon_files) > 1:
            raise ParseError(
                MULTIPLE_ADDON_DEFINITIONS_ERROR.format(", ".join(addon_files)),
                addon_dir=str(path),
            )
        if len(remove_files) > 1:
            raise ParseError(
                MULTIPLE_REMOVE_DEFINITIONS_ERROR.format(", ".join(remove_files)),
                addon_dir=str(path),
            )
        remove_file = path / remove_files[0] if remove_files else None
        return path / addon_files[0], remove_file

    def _parse_file(self, file: Path, addon_dir: Path) -> tuple[AddOnMetadata, list[Command]]:
        try:
            text = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(
                f"Unable to open addon definition '{file.name}': {e}", addon_dir=str(addon_dir),
            ) from e
        try:
            meta, commands = self.parse_content(text)
        except ParseError as e:
            e.addon_dir = str(addon_dir)
            raise
        if meta.name != addon_dir.name:
            raise ParseError(
                f"Addon name '{meta.name}' in '{file.name}' does not match "
                f"the addon directory name '{addon_dir.name}'",
                addon_name=meta.name, addon_dir=str(addon_dir),
            )
        return meta, commands
