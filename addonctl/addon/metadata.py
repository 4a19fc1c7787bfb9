"""头部标签 → AddOnMetadata

Name、Description 必填；Required-Vars、Var-Defaults、OpenShift-Version 在此校验，
其余标签原样保留在 headers 中。
"""

from __future__ import annotations

from typing import Any

from addonctl.addon.interpolation import is_valid_name
from addonctl.core.exceptions import ParseError
from addonctl.core.models import (
    DESCRIPTION_TAG,
    NAME_TAG,
    OPENSHIFT_VERSION_TAG,
    REQUIRED_VARS_TAG,
    VAR_DEFAULTS_TAG,
    AddOnMetadata,
)
from addonctl.core.versions import VersionConstraint

REQUIRED_TAGS = (NAME_TAG, DESCRIPTION_TAG)


def _missing_tag(tag: str) -> ParseError:
    return ParseError(f"Metadata does not contain a mandatory entry for '{tag}'")


def parse_required_vars(value: str) -> tuple[str, ...]:
    """逗号分隔的变量名列表，空项忽略，名称中不得含空白"""
    names = []
    for token in value.split(","):
        name = token.strip()
        if not name:
            continue
        if any(ch.isspace() for ch in name):
            raise ParseError(f"Invalid variable name '{name}' in {REQUIRED_VARS_TAG}: '{value}'")
        names.append(name)
    return tuple(names)


def parse_var_defaults(value: str) -> tuple[tuple[str, str], ...]:
    """逗号分隔的 KEY=VALUE 列表，任一项非法则整体失败"""
    defaults = []
    for token in value.split(","):
        key, sep, val = token.partition("=")
        key, val = key.strip(), val.strip()
        if not sep or not key or not val or not is_valid_name(key):
            raise ParseError(
                f"{VAR_DEFAULTS_TAG} entries must have the format KEY=VALUE. Got '{value}'"
            )
        defaults.append((key, val))
    return tuple(defaults)


def create_metadata(headers: dict[str, Any]) -> AddOnMetadata:
    """校验头部并构造元数据，失败抛 ParseError"""
    name = headers.get(NAME_TAG)
    if not isinstance(name, str) or not name:
        raise _missing_tag(NAME_TAG)
    description = headers.get(DESCRIPTION_TAG)
    if not description:
        raise _missing_tag(DESCRIPTION_TAG)

    required_vars: tuple[str, ...] = ()
    if headers.get(REQUIRED_VARS_TAG):
        required_vars = parse_required_vars(headers[REQUIRED_VARS_TAG])

    var_defaults: tuple[tuple[str, str], ...] = ()
    if headers.get(VAR_DEFAULTS_TAG):
        var_defaults = parse_var_defaults(headers[VAR_DEFAULTS_TAG])

    return AddOnMetadata(
        name=name,
        description=tuple(description),
        required_vars=required_vars,
        var_defaults=var_defaults,
        openshift_version=VersionConstraint.parse(headers.get(OPENSHIFT_VERSION_TAG)),
        headers=dict(headers),
    )
