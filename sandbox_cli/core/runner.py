"""
Invocation of the external sandbox tool.

The sandbox tool is a node program installed in the sandbox directory. Every
command runs it as ``node sandbox.js <command> <args...>``. Captured
invocations read a single JSON document from its stdout; streaming
invocations hand the terminal to the tool and only report its exit status.
"""

from __future__ import annotations

import json
import logging
import subprocess
from typing import Sequence

from sandbox_cli.core.config import SandboxConfig
from sandbox_cli.core.flags import flat_args
from sandbox_cli.exceptions import (
    SandboxExecError,
    SandboxNotInstalledError,
    SandboxOutputError,
)
from sandbox_cli.types import CommandOptions, SandboxOutput
from sandbox_cli.utils.logging import log_sandbox_command, log_with_context


class SandboxRunner:
    """Runs sandbox tool commands using the locations from a SandboxConfig."""

    def __init__(self, config: SandboxConfig) -> None:
        self.config = config
        self._node: str | None = None

    def check_installed(self) -> str:
        """
        Verify the sandbox tool and a node runtime are available.

        Returns:
            The node executable to use

        Raises:
            SandboxNotInstalledError: If either piece is missing
        """
        if not self.config.entry_script.is_file():
            raise SandboxNotInstalledError(
                f"The sandbox is not installed: {self.config.entry_script} not found. "
                "Set 'sandbox_dir' in your config file if it lives elsewhere."
            )
        node = self.config.resolve_node()
        if node is None:
            raise SandboxNotInstalledError(
                "No node runtime was found for the sandbox. "
                "Set 'node_path' in your config file or put node on your PATH."
            )
        self._node = node
        return node

    def build_command(self, command: str, args: Sequence[str]) -> list[str]:
        """Build the full argument vector for one tool command."""
        node = self._node or self.check_installed()
        return [node, str(self.config.entry_script), command, *args]

    def exec(
        self,
        command: str,
        args: Sequence[str],
        options: CommandOptions,
        boolean_flags: Sequence[str] = (),
        string_flags: Sequence[str] = (),
    ) -> SandboxOutput:
        """
        Run a tool command and decode its structured output.

        Args:
            command: Tool command name, e.g. ``project/deploy``
            args: Positional arguments
            options: Command options keyed by flag name
            boolean_flags: Boolean flags to forward
            string_flags: String flags to forward

        Returns:
            The decoded SandboxOutput

        Raises:
            SandboxExecError: If the tool cannot be run or its output is unreadable
            SandboxOutputError: If the tool reports an error
        """
        cmd = self.build_command(
            command, flat_args(args, options, boolean_flags, string_flags)
        )
        log_sandbox_command(cmd)

        try:
            process = subprocess.run(
                cmd,
                text=True,
                encoding="utf-8",
                capture_output=True,
                check=False,
                timeout=self.config.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise SandboxExecError(
                f"The sandbox tool did not finish {command} within {self.config.timeout} seconds",
                cmd=cmd,
            ) from e
        except UnicodeDecodeError as e:
            raise SandboxExecError(
                f"The sandbox tool produced output that is not UTF-8: {e}", cmd=cmd
            ) from e
        except OSError as e:
            raise SandboxExecError(
                f"Unable to run the sandbox tool: {e}", cmd=cmd
            ) from e

        log_with_context(
            logging.DEBUG, f"Sandbox tool exited with status {process.returncode}"
        )
        if process.stderr:
            log_with_context(logging.DEBUG, f"Sandbox tool stderr: {process.stderr.strip()}")

        output = self._decode(cmd, process)
        if output.error:
            raise SandboxOutputError(output.error, output)
        return output

    def exec_streaming(
        self,
        command: str,
        args: Sequence[str],
        options: CommandOptions,
        boolean_flags: Sequence[str] = (),
        string_flags: Sequence[str] = (),
    ) -> int:
        """
        Run a tool command with its output attached to the terminal.

        Raises:
            SandboxExecError: If the tool cannot be run or exits non-zero
        """
        cmd = self.build_command(
            command, flat_args(args, options, boolean_flags, string_flags)
        )
        log_sandbox_command(cmd, streaming=True)

        try:
            process = subprocess.run(cmd, check=False)
        except OSError as e:
            raise SandboxExecError(
                f"Unable to run the sandbox tool: {e}", cmd=cmd
            ) from e

        if process.returncode != 0:
            raise SandboxExecError(
                f"The sandbox tool exited with status {process.returncode}",
                cmd=cmd,
                returncode=process.returncode,
            )
        return process.returncode

    @staticmethod
    def _decode(
        cmd: list[str], process: subprocess.CompletedProcess[str]
    ) -> SandboxOutput:
        stdout = process.stdout.strip()
        if not stdout:
            if process.returncode != 0:
                message = (
                    process.stderr.strip()
                    or f"The sandbox tool exited with status {process.returncode}"
                )
                raise SandboxExecError(
                    message,
                    cmd=cmd,
                    returncode=process.returncode,
                    stderr=process.stderr,
                )
            return SandboxOutput()

        # A non-zero exit with a JSON body still carries the error text in the body
        try:
            data = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise SandboxExecError(
                f"The sandbox tool produced output that is not JSON: {e}",
                cmd=cmd,
                returncode=process.returncode,
                stdout=process.stdout,
                stderr=process.stderr,
            ) from e

        if not isinstance(data, dict):
            raise SandboxExecError(
                "The sandbox tool produced an unexpected JSON document",
                cmd=cmd,
                returncode=process.returncode,
                stdout=process.stdout,
                stderr=process.stderr,
            )

        table = data.get("table")
        if table is not None and not (
            isinstance(table, list) and all(isinstance(row, dict) for row in table)
        ):
            raise SandboxExecError(
                "The sandbox tool produced a table that is not a list of rows",
                cmd=cmd,
                returncode=process.returncode,
                stdout=process.stdout,
                stderr=process.stderr,
            )
        return SandboxOutput.from_dict(data)
