"""测试共享 fixture：假 commander、执行上下文、add-on 目录工厂"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from addonctl.addon.context import ExecutionContext


class FakeOcRunner:
    """记录调用的 oc 执行器，按命令返回预设输出和退出码"""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.outputs: dict[str, str] = {}
        self.exit_codes: dict[str, int] = {}

    def run(self, command, stdout=None, stderr=None) -> int:
        self.calls.append(command)
        if stdout is not None:
            stdout.write(self.outputs.get(command, ""))
        code = self.exit_codes.get(command, 0)
        if code and stderr is not None:
            stderr.write(f"oc {command} failed")
        return code


@pytest.fixture()
def oc() -> FakeOcRunner:
    return FakeOcRunner()


@pytest.fixture()
def docker() -> MagicMock:
    d = MagicMock()
    d.exec.return_value = ""
    d.local_exec.return_value = ""
    return d


@pytest.fixture()
def ssh() -> MagicMock:
    s = MagicMock()
    s.ssh_command.return_value = ""
    return s


@pytest.fixture()
def ctx(oc: FakeOcRunner, docker: MagicMock, ssh: MagicMock) -> ExecutionContext:
    return ExecutionContext(oc, docker, ssh)


@pytest.fixture()
def addons_dir(tmp_path: Path) -> Path:
    d = tmp_path / "addons"
    d.mkdir()
    return d


@pytest.fixture()
def write_addon(addons_dir: Path):
    """add-on 目录工厂: write_addon(name, content, remove=None, base=None)"""

    def _write(name: str, content: str, remove: str | None = None,
               base: Path | None = None) -> Path:
        d = (base or addons_dir) / name
        d.mkdir(parents=True)
        (d / f"{name}.addon").write_text(content, encoding="utf-8")
        if remove is not None:
            (d / f"{name}.addon.remove").write_text(remove, encoding="utf-8")
        return d

    return _write
