"""变量插值上下文

命令中的 ``#{name}`` 在执行前替换为绑定值。替换只做一遍，
替换值中的 ``#{...}``、``$1``、反斜杠等均按字面保留。
"""

from __future__ import annotations

import re

from addonctl.core.exceptions import InvalidNameError

VAR_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.-]*$")
_TOKEN_RE = re.compile(r"#\{([^{}]*)\}")


def is_valid_name(name: str) -> bool:
    return bool(VAR_NAME_RE.match(name))


class InterpolationContext:
    """变量名 → 值 的有序映射"""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def bind(self, name: str, value: str) -> None:
        """绑定变量，已存在则覆盖"""
        if not is_valid_name(name):
            raise InvalidNameError(
                f"Unable to add {name}/{value} to interpolation context: invalid name"
            )
        self._values[name] = value

    def unbind(self, name: str) -> None:
        self._values.pop(name, None)

    def is_bound(self, name: str) -> bool:
        return name in self._values

    def get(self, name: str) -> str | None:
        return self._values.get(name)

    def vars(self) -> list[str]:
        return list(self._values)

    def interpolate(self, text: str) -> str:
        def _replace(m: re.Match[str]) -> str:
            value = self._values.get(m.group(1))
            return m.group(0) if value is None else value

        return _TOKEN_RE.sub(_replace, text)
