"""oc / ssh / docker commander 单元测试（注入假执行器，不调用真实程序）"""

from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from addonctl.commanders.docker import VmDockerCommander
from addonctl.commanders.oc import CliOcRunner
from addonctl.commanders.ssh import BinarySSHCommander
from addonctl.core.exceptions import ConfigError, ExecutionError
from addonctl.utils.shell import CommandResult


def _executor(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    ex = MagicMock()
    ex.execute.return_value = CommandResult(returncode, stdout, stderr)
    return ex


class TestBinarySSHCommander:
    def test_requires_host(self) -> None:
        with pytest.raises(ConfigError):
            BinarySSHCommander("")

    def test_command_line(self) -> None:
        ex = _executor(stdout="ok\n")
        ssh = BinarySSHCommander("10.0.0.42", user="docker", port=2222,
                                 key_path="/keys/id_rsa", executor=ex)
        assert ssh.ssh_command("sudo ls /etc") == "ok\n"
        args = ex.execute.call_args.args[0]
        assert args[0] == "ssh"
        assert args[args.index("-p") + 1] == "2222"
        assert args[args.index("-i") + 1] == "/keys/id_rsa"
        assert args[-2:] == ["docker@10.0.0.42", "sudo ls /etc"]

    def test_no_key(self) -> None:
        ex = _executor()
        BinarySSHCommander("host", executor=ex).ssh_command("true")
        assert "-i" not in ex.execute.call_args.args[0]

    def test_failure(self) -> None:
        ex = _executor(returncode=1, stderr="permission denied")
        with pytest.raises(ExecutionError, match="permission denied"):
            BinarySSHCommander("host", executor=ex).ssh_command("rm /x")


class TestVmDockerCommander:
    def _docker(self, *outputs: str) -> tuple[VmDockerCommander, MagicMock]:
        ssh = MagicMock()
        ssh.ssh_command.side_effect = list(outputs) if outputs else None
        ssh.ssh_command.return_value = ""
        return VmDockerCommander(ssh, retry_interval=0, settle_time=0), ssh

    def test_exec(self) -> None:
        docker, ssh = self._docker("openshift v3.9.0\n")
        assert docker.exec("-t", "origin", "openshift", "version") == "openshift v3.9.0\n"
        ssh.ssh_command.assert_called_once_with("docker exec -t origin openshift version")

    def test_local_exec(self) -> None:
        docker, ssh = self._docker("done")
        assert docker.local_exec("docker pull busybox") == "done"
        ssh.ssh_command.assert_called_once_with("docker pull busybox")

    def test_status(self) -> None:
        docker, ssh = self._docker("running\n")
        assert docker.status("origin") == "running"
        ssh.ssh_command.assert_called_once_with("docker inspect -f '{{.State.Status}}' origin")

    def test_get_id(self) -> None:
        docker, ssh = self._docker("abc123\n")
        assert docker.get_id("origin") == "abc123"
        ssh.ssh_command.assert_called_once_with("docker inspect -f '{{.Id}}' origin")

    def test_cp(self) -> None:
        docker, ssh = self._docker("")
        docker.cp("/tmp/a", "origin", "/etc/a")
        ssh.ssh_command.assert_called_once_with("docker cp /tmp/a origin:/etc/a")

    def test_restart(self) -> None:
        docker, ssh = self._docker("", "", "restarting\n", "running\n")
        with patch("addonctl.commanders.docker.time.sleep"):
            assert docker.restart("origin") is True
        calls = [c.args[0] for c in ssh.ssh_command.call_args_list]
        assert calls[:2] == ["docker stop origin", "docker start origin"]
        assert len(calls) == 4

    def test_restart_never_running(self) -> None:
        docker, _ = self._docker("", "", *(["exited\n"] * 5))
        with patch("addonctl.commanders.docker.time.sleep"):
            with pytest.raises(ExecutionError, match="Unexpected container state 'exited'"):
                docker.restart("origin")


class TestCliOcRunner:
    @pytest.fixture()
    def kubeconfig(self, tmp_path: Path) -> Path:
        f = tmp_path / "kubeconfig"
        f.write_text("apiVersion: v1\n", encoding="utf-8")
        return f

    def test_missing_binary(self, kubeconfig: Path) -> None:
        with patch("addonctl.commanders.oc.shutil.which", return_value=None):
            with pytest.raises(ConfigError, match="path to oc"):
                CliOcRunner("/nope/oc", str(kubeconfig))

    def test_missing_kubeconfig(self, tmp_path: Path) -> None:
        with patch("addonctl.commanders.oc.shutil.which", return_value="/usr/bin/oc"):
            with pytest.raises(ConfigError, match="kube config"):
                CliOcRunner("oc", str(tmp_path / "missing"))

    def test_run(self, kubeconfig: Path) -> None:
        ex = _executor(stdout="developer\n", stderr="warn\n")
        with patch("addonctl.commanders.oc.shutil.which", return_value="/usr/bin/oc"):
            runner = CliOcRunner("oc", str(kubeconfig), executor=ex)
        out, err = io.StringIO(), io.StringIO()
        assert runner.run("get user 'dev user'", out, err) == 0
        assert out.getvalue() == "developer\n"
        assert err.getvalue() == "warn\n"
        assert ex.execute.call_args.args[0] == [
            "/usr/bin/oc", f"--config={kubeconfig}", "get", "user", "dev user",
        ]

    def test_run_unbalanced_quote(self, kubeconfig: Path) -> None:
        ex = _executor()
        with patch("addonctl.commanders.oc.shutil.which", return_value="/usr/bin/oc"):
            runner = CliOcRunner("oc", str(kubeconfig), executor=ex)
        assert runner.run("annotate ns default note=it's") == 0
        assert ex.execute.call_args.args[0][2:] == ["annotate", "ns", "default", "note=it's"]

    def test_run_failure_status(self, kubeconfig: Path) -> None:
        ex = _executor(returncode=1, stderr="forbidden")
        with patch("addonctl.commanders.oc.shutil.which", return_value="/usr/bin/oc"):
            runner = CliOcRunner("oc", str(kubeconfig), executor=ex)
        assert runner.run("delete project x") == 1
