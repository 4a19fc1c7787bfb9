"""Config 单元测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from addonctl.core import config as config_mod
from addonctl.core.config import Config, get_config, init_config
from addonctl.core.exceptions import ConfigError


class TestConfig:
    def test_defaults_when_missing(self, tmp_path: Path) -> None:
        cfg = Config.from_file(str(tmp_path / "missing.yml"))
        assert cfg.oc_path == "oc"
        assert cfg.ssh_user == "docker"
        assert cfg.addon_env == []

    def test_load(self, tmp_path: Path) -> None:
        f = tmp_path / "config.yml"
        f.write_text(
            "home_dir: /opt/addonctl\n"
            "ssh-host: 192.168.42.10\n"
            "routing-suffix: 192.168.42.10.nip.io\n"
            "addon_env:\n  - USER=developer\n"
            "custom: 1\n",
            encoding="utf-8",
        )
        cfg = Config.from_file(str(f))
        assert cfg.ssh_host == "192.168.42.10"
        assert cfg.routing_suffix == "192.168.42.10.nip.io"
        assert cfg.addon_env == ["USER=developer"]
        assert cfg.extra == {"custom": 1}
        assert cfg.addons_path == Path("/opt/addonctl/addons")
        assert cfg.addon_config_path == Path("/opt/addonctl/addons.json")

    def test_absolute_addons_dir(self, tmp_path: Path) -> None:
        cfg = Config(home_dir=str(tmp_path), addons_dir=str(tmp_path / "elsewhere"))
        assert cfg.addons_path == tmp_path / "elsewhere"

    def test_addon_env_must_be_list(self, tmp_path: Path) -> None:
        f = tmp_path / "config.yml"
        f.write_text("addon_env: USER=developer\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            Config.from_file(str(f))

    def test_init_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config_mod, "_current", None)
        f = tmp_path / "config.yml"
        f.write_text("ip: 10.0.0.1\n", encoding="utf-8")
        cfg = init_config(str(f))
        assert get_config() is cfg
        assert cfg.ip == "10.0.0.1"
