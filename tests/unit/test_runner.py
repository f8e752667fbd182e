"""Unit tests for running the sandbox tool.

The sandbox tool is replaced by a small Python script (see ``conftest.py``)
run with the test interpreter as its "node" binary.
"""

import json
import subprocess
import sys
from unittest.mock import patch

import pytest

from sandbox_cli.core.config import SandboxConfig
from sandbox_cli.core.runner import SandboxRunner
from sandbox_cli.exceptions import (
    SandboxExecError,
    SandboxNotInstalledError,
    SandboxOutputError,
)
from sandbox_cli.types import SandboxOutput


class TestCheckInstalled:
    """Tests for SandboxRunner.check_installed()."""

    def test_missing_entry_script(self, tmp_path):
        runner = SandboxRunner(SandboxConfig(sandbox_dir=tmp_path, node_path=sys.executable))
        with pytest.raises(SandboxNotInstalledError, match="sandbox.js not found"):
            runner.check_installed()

    def test_missing_node(self, sandbox_dir):
        runner = SandboxRunner(SandboxConfig(sandbox_dir=sandbox_dir))
        with patch("sandbox_cli.core.config.shutil.which", return_value=None):
            with pytest.raises(SandboxNotInstalledError, match="No node runtime"):
                runner.check_installed()

    def test_returns_node(self, sandbox_config):
        assert SandboxRunner(sandbox_config).check_installed() == sys.executable


class TestBuildCommand:
    """Tests for SandboxRunner.build_command()."""

    def test_node_script_command_then_args(self, sandbox_config, sandbox_dir):
        cmd = SandboxRunner(sandbox_config).build_command("project/deploy", ["proj", "--yarn"])
        assert cmd == [
            sys.executable,
            str(sandbox_dir / "sandbox.js"),
            "project/deploy",
            "proj",
            "--yarn",
        ]


class TestExec:
    """Tests for captured invocations."""

    def test_forwards_flattened_arguments(self, sandbox_config):
        output = SandboxRunner(sandbox_config).exec(
            "project/get-metadata",
            ("proj",),
            {"env": ".env", "exclude": "web", "include": ""},
            string_flags=["env", "include", "exclude"],
        )
        assert output.entity == {
            "argv": ["project/get-metadata", "proj", "--env", ".env", "--exclude", "web"]
        }

    def test_decodes_structured_output(self, sandbox_config, monkeypatch):
        monkeypatch.setenv(
            "FAKE_SANDBOX_RESPONSE",
            json.dumps({"captured": ["Deploying project 'p'"], "table": [{"a": 1}]}),
        )
        output = SandboxRunner(sandbox_config).exec("project/deploy", ("p",), {})
        assert output == SandboxOutput(captured=["Deploying project 'p'"], table=[{"a": 1}])

    def test_error_field_raises_with_output(self, sandbox_config, monkeypatch):
        monkeypatch.setenv(
            "FAKE_SANDBOX_RESPONSE",
            json.dumps({"captured": ["partial"], "error": "deploy failed"}),
        )
        monkeypatch.setenv("FAKE_SANDBOX_EXIT", "1")

        with pytest.raises(SandboxOutputError, match="deploy failed") as exc_info:
            SandboxRunner(sandbox_config).exec("project/deploy", ("p",), {})
        assert exc_info.value.output.captured == ["partial"]

    def test_non_zero_exit_with_json_body_is_not_an_error(self, sandbox_config, monkeypatch):
        monkeypatch.setenv("FAKE_SANDBOX_RESPONSE", json.dumps({"formatted": ["ok"]}))
        monkeypatch.setenv("FAKE_SANDBOX_EXIT", "1")

        output = SandboxRunner(sandbox_config).exec("project/deploy", ("p",), {})
        assert output.formatted == ["ok"]

    def test_non_zero_exit_without_output_uses_stderr(self, sandbox_config, monkeypatch):
        monkeypatch.setenv("FAKE_SANDBOX_RAW", "")
        monkeypatch.setenv("FAKE_SANDBOX_STDERR", "Cannot find module 'x'\n")
        monkeypatch.setenv("FAKE_SANDBOX_EXIT", "3")

        with pytest.raises(SandboxExecError, match="Cannot find module") as exc_info:
            SandboxRunner(sandbox_config).exec("project/deploy", ("p",), {})
        assert exc_info.value.returncode == 3

    def test_non_zero_exit_without_any_output(self, sandbox_config, monkeypatch):
        monkeypatch.setenv("FAKE_SANDBOX_RAW", "")
        monkeypatch.setenv("FAKE_SANDBOX_EXIT", "4")

        with pytest.raises(SandboxExecError, match="exited with status 4"):
            SandboxRunner(sandbox_config).exec("project/deploy", ("p",), {})

    def test_empty_output_on_success(self, sandbox_config, monkeypatch):
        monkeypatch.setenv("FAKE_SANDBOX_RAW", "")
        output = SandboxRunner(sandbox_config).exec("project/deploy", ("p",), {})
        assert output == SandboxOutput()

    def test_non_json_output_raises(self, sandbox_config, monkeypatch):
        monkeypatch.setenv("FAKE_SANDBOX_RAW", "Welcome to nim!")

        with pytest.raises(SandboxExecError, match="not JSON") as exc_info:
            SandboxRunner(sandbox_config).exec("project/deploy", ("p",), {})
        assert exc_info.value.stdout == "Welcome to nim!"

    def test_json_array_raises(self, sandbox_config, monkeypatch):
        monkeypatch.setenv("FAKE_SANDBOX_RAW", "[1, 2]")

        with pytest.raises(SandboxExecError, match="unexpected JSON"):
            SandboxRunner(sandbox_config).exec("project/deploy", ("p",), {})

    def test_undecodable_output_raises(self, sandbox_config, monkeypatch):
        monkeypatch.setenv("FAKE_SANDBOX_RAW_HEX", "fffe7b7d")

        with pytest.raises(SandboxExecError, match="not UTF-8"):
            SandboxRunner(sandbox_config).exec("project/deploy", ("p",), {})

    @pytest.mark.parametrize(
        "table", ["rows", [1, 2], [{"a": 1}, "b"], {"a": 1}]
    )
    def test_malformed_table_raises(self, sandbox_config, monkeypatch, table):
        monkeypatch.setenv("FAKE_SANDBOX_RESPONSE", json.dumps({"table": table}))

        with pytest.raises(SandboxExecError, match="not a list of rows"):
            SandboxRunner(sandbox_config).exec("project/get-metadata", ("p",), {})

    def test_bare_string_transcript_is_one_line(self, sandbox_config, monkeypatch):
        monkeypatch.setenv("FAKE_SANDBOX_RESPONSE", json.dumps({"captured": "done"}))

        output = SandboxRunner(sandbox_config).exec("project/deploy", ("p",), {})
        assert output.captured == ["done"]

    def test_launch_failure_raises(self, sandbox_config):
        runner = SandboxRunner(sandbox_config)
        with patch("sandbox_cli.core.runner.subprocess.run", side_effect=OSError("denied")):
            with pytest.raises(SandboxExecError, match="Unable to run the sandbox tool"):
                runner.exec("project/deploy", ("p",), {})

    def test_timeout_raises(self, sandbox_dir):
        runner = SandboxRunner(
            SandboxConfig(sandbox_dir=sandbox_dir, node_path=sys.executable, timeout=5)
        )
        timeout = subprocess.TimeoutExpired(cmd=["node"], timeout=5)
        with patch("sandbox_cli.core.runner.subprocess.run", side_effect=timeout) as run:
            with pytest.raises(SandboxExecError, match="within 5"):
                runner.exec("project/deploy", ("p",), {})
        assert run.call_args.kwargs["timeout"] == 5

    def test_not_installed_raises_before_running(self, tmp_path):
        runner = SandboxRunner(SandboxConfig(sandbox_dir=tmp_path, node_path=sys.executable))
        with patch("sandbox_cli.core.runner.subprocess.run") as run:
            with pytest.raises(SandboxNotInstalledError):
                runner.exec("project/deploy", ("p",), {})
        run.assert_not_called()

    def test_auth_is_redacted_in_debug_log(self, sandbox_config, caplog):
        with caplog.at_level("DEBUG", logger="sandbox_cli"):
            SandboxRunner(sandbox_config).exec(
                "project/deploy", ("p",), {"auth": "s3cret"}, string_flags=["auth"]
            )
        command_lines = [getattr(r, "command_line", "") for r in caplog.records]
        assert any("--auth [REDACTED]" in line for line in command_lines)
        assert not any("s3cret" in line for line in command_lines)


class TestExecStreaming:
    """Tests for streaming invocations."""

    def test_returns_zero_on_success(self, sandbox_config):
        code = SandboxRunner(sandbox_config).exec_streaming(
            "project/watch", ("p",), {"yarn": True}, boolean_flags=["yarn"]
        )
        assert code == 0

    def test_does_not_capture_output(self, sandbox_config):
        runner = SandboxRunner(sandbox_config)
        completed = subprocess.CompletedProcess(args=[], returncode=0)
        with patch("sandbox_cli.core.runner.subprocess.run", return_value=completed) as run:
            runner.exec_streaming("project/watch", ("p",), {"yarn": True}, boolean_flags=["yarn"])

        args, kwargs = run.call_args
        assert args[0][2:] == ["project/watch", "p", "--yarn"]
        assert "capture_output" not in kwargs
        assert "stdout" not in kwargs

    def test_non_zero_exit_raises(self, sandbox_config, monkeypatch):
        monkeypatch.setenv("FAKE_SANDBOX_EXIT", "2")

        with pytest.raises(SandboxExecError, match="exited with status 2") as exc_info:
            SandboxRunner(sandbox_config).exec_streaming("project/watch", ("p",), {})
        assert exc_info.value.returncode == 2

    def test_launch_failure_raises(self, sandbox_config):
        runner = SandboxRunner(sandbox_config)
        with patch("sandbox_cli.core.runner.subprocess.run", side_effect=OSError("nope")):
            with pytest.raises(SandboxExecError):
                runner.exec_streaming("project/watch", ("p",), {})
