"""OpenShift 版本比较与版本约束

约束语法: 逗号分隔的若干约束，全部满足才算匹配（AND）::

    3.7.0            精确匹配（补零归一化后相等）
    >=3.10, <3.12    比较约束，支持 >= > <= <

版本比较按点分数字逐段比较，段数不足补零；数字部分相同时，
带预发布后缀（如 -alpha.1）的版本低于正式版，后缀之间按字典序比较。
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from addonctl.core.exceptions import ParseError

_CONSTRAINT_RE = re.compile(r"^(>=|<=|>|<)?\s*([0-9]+(?:\.[0-9]+){0,2})$")
_VERSION_RE = re.compile(r"^v?([0-9]+(?:\.[0-9]+)*)(?:-(.+))?$")

_OPERATORS = {
    "": lambda c: c == 0,
    ">=": lambda c: c >= 0,
    ">": lambda c: c > 0,
    "<=": lambda c: c <= 0,
    "<": lambda c: c < 0,
}


def _split(version: str) -> tuple[list[int], str]:
    m = _VERSION_RE.match(version.strip())
    if m is None:
        raise ValueError(f"非法版本号: '{version}'")
    return [int(p) for p in m.group(1).split(".")], m.group(2) or ""


def compare_versions(a: str, b: str) -> int:
    """比较两个版本号，返回 -1 / 0 / 1"""
    nums_a, suffix_a = _split(a)
    nums_b, suffix_b = _split(b)
    width = max(len(nums_a), len(nums_b))
    nums_a += [0] * (width - len(nums_a))
    nums_b += [0] * (width - len(nums_b))
    key_a = (nums_a, not suffix_a, suffix_a)
    key_b = (nums_b, not suffix_b, suffix_b)
    return (key_a > key_b) - (key_a < key_b)


@dataclass(frozen=True)
class Constraint:
    """单个版本约束"""

    operator: str
    version: str

    def matches(self, version: str) -> bool:
        return _OPERATORS[self.operator](compare_versions(version, self.version))

    def __str__(self) -> str:
        return f"{self.operator}{self.version}"


@dataclass(frozen=True)
class VersionConstraint:
    """版本约束集合（AND 关系），空集合不做任何限制"""

    constraints: tuple[Constraint, ...] = ()
    expression: str = ""

    @classmethod
    def parse(cls, expression: str | None) -> VersionConstraint:
        """解析约束表达式，不符合语法时抛 ParseError"""
        expression = (expression or "").strip()
        if not expression:
            return cls()
        constraints = []
        for token in expression.split(","):
            m = _CONSTRAINT_RE.match(token.strip())
            if m is None:
                raise ParseError(
                    "Add-on only supports OpenShift version semantics "
                    f"eg. 3.6.0 or >3.6.0, <3.9.0 or >=3.5 etc. Got '{expression}'"
                )
            constraints.append(Constraint(m.group(1) or "", m.group(2)))
        return cls(tuple(constraints), expression)

    def is_empty(self) -> bool:
        return not self.constraints

    def matches(self, version: str) -> bool:
        return all(c.matches(version) for c in self.constraints)

    def __str__(self) -> str:
        return self.expression
