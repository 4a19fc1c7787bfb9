"""元数据校验单元测试"""

from __future__ import annotations

import pytest

from addonctl.addon.metadata import create_metadata, parse_required_vars, parse_var_defaults
from addonctl.core.exceptions import ParseError


class TestRequiredVars:
    def test_single(self) -> None:
        assert parse_required_vars("USER") == ("USER",)

    def test_list_with_whitespace(self) -> None:
        assert parse_required_vars(" USER , PASSWORD,HOST ") == ("USER", "PASSWORD", "HOST")

    def test_empty_tokens_skipped(self) -> None:
        assert parse_required_vars("USER,,HOST,") == ("USER", "HOST")

    def test_inner_whitespace_rejected(self) -> None:
        with pytest.raises(ParseError, match="Invalid variable name"):
            parse_required_vars("MY USER")


class TestVarDefaults:
    def test_pairs(self) -> None:
        assert parse_var_defaults("USER=admin, PASSWORD = secret") == (
            ("USER", "admin"), ("PASSWORD", "secret"),
        )

    @pytest.mark.parametrize("value", ["USER", "USER=", "=admin", "USER=admin,", "a b=c"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ParseError, match="KEY=VALUE"):
            parse_var_defaults(value)


class TestCreateMetadata:
    def test_minimal(self) -> None:
        meta = create_metadata({"Name": "foo", "Description": ["bar"]})
        assert meta.name == "foo"
        assert meta.description == ("bar",)
        assert meta.required_vars == ()
        assert meta.var_defaults == ()
        assert meta.openshift_version.is_empty()
        assert meta.url == ""

    def test_get_value(self) -> None:
        meta = create_metadata({"Name": "foo", "Description": ["a", "b"], "Url": "http://x"})
        assert meta.get_value("Url") == "http://x"
        assert meta.get_value("Description") == "a\nb"
        assert meta.get_value("Missing") == ""

    def test_empty_description(self) -> None:
        with pytest.raises(ParseError, match="Description"):
            create_metadata({"Name": "foo", "Description": []})

    def test_invalid_version(self) -> None:
        with pytest.raises(ParseError, match="OpenShift version semantics"):
            create_metadata({"Name": "foo", "Description": ["d"], "OpenShift-Version": "latest"})
