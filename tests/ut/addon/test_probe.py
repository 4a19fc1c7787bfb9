"""OpenShift 版本探测单元测试"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from addonctl.addon.probe import current_openshift_version, parse_openshift_version
from addonctl.core.exceptions import ExecutionError


class TestParseVersion:
    @pytest.mark.parametrize("output,expected", [
        ("openshift v3.6.0+c4dd4cf\nkubernetes v1.6.1+5115d708d7\n", "3.6.0"),
        ("openshift v3.10.0\n", "3.10.0"),
        ("openshift v3.11.0-alpha.0+abc\n", "3.11.0-alpha.0"),
        ("\n  openshift 3.7.1\n", "3.7.1"),
    ])
    def test_parse(self, output: str, expected: str) -> None:
        assert parse_openshift_version(output) == expected

    @pytest.mark.parametrize("output", ["", "openshift", "\n\n"])
    def test_unparsable(self, output: str) -> None:
        with pytest.raises(ExecutionError):
            parse_openshift_version(output)


def test_current_version() -> None:
    docker = MagicMock()
    docker.exec.return_value = "openshift v3.9.0+191fece\n"
    assert current_openshift_version(docker) == "3.9.0"
    docker.exec.assert_called_once_with(" ", "origin", "openshift", "version")
