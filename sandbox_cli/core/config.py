"""
Configuration module for the doctl sandbox commands.

This module provides functions for loading configuration settings from a YAML
file and for locating the installed sandbox tool and its node runtime.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import click
import yaml

from sandbox_cli.constants import (
    APP_NAME,
    BUNDLED_NODE_NAME,
    DEFAULT_NODE_BINARY,
    DOCTL_APP_NAME,
    SANDBOX_DIR_NAME,
    SANDBOX_ENTRY_SCRIPT,
)
from sandbox_cli.exceptions import ConfigError
from sandbox_cli.utils.logging import log_with_context


def default_config_path() -> Path:
    """Return the per-user configuration file path."""
    return Path(click.get_app_dir(APP_NAME)) / "config.yaml"


def default_sandbox_dir() -> Path:
    """Return the directory the sandbox tool is installed into by doctl."""
    return Path(click.get_app_dir(DOCTL_APP_NAME)) / SANDBOX_DIR_NAME


@dataclass
class SandboxConfig:
    """Typed configuration for the sandbox commands.

    All fields have defaults that match a stock doctl installation.
    """

    sandbox_dir: Path = field(default_factory=default_sandbox_dir)
    node_path: str = ""

    # Fallback credentials for deploy and watch
    apihost: str = ""
    auth: str = ""

    # Seconds to wait for a captured invocation; None waits forever
    timeout: float | None = None

    def __post_init__(self) -> None:
        self.sandbox_dir = Path(self.sandbox_dir).expanduser()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SandboxConfig:
        """Create a SandboxConfig from a raw config dictionary."""
        sandbox_dir = data.get("sandbox_dir")
        timeout = data.get("timeout")
        if timeout is not None:
            try:
                timeout = float(timeout)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"'timeout' must be a number, got {timeout!r}") from e
        return cls(
            sandbox_dir=Path(sandbox_dir) if sandbox_dir else default_sandbox_dir(),
            node_path=str(data.get("node_path") or ""),
            apihost=str(data.get("apihost") or ""),
            auth=str(data.get("auth") or ""),
            timeout=timeout,
        )

    @property
    def entry_script(self) -> Path:
        """Path to the sandbox tool's entry script."""
        return self.sandbox_dir / SANDBOX_ENTRY_SCRIPT

    def resolve_node(self) -> str | None:
        """
        Locate the node binary used to run the sandbox tool.

        An explicit ``node_path`` wins, then the node bundled in the sandbox
        directory, then ``node`` on PATH.

        Returns:
            The node executable path, or None if none can be found
        """
        if self.node_path:
            candidate = Path(self.node_path).expanduser()
            if candidate.exists():
                return str(candidate)
            return shutil.which(self.node_path)

        bundled = self.sandbox_dir / BUNDLED_NODE_NAME
        if bundled.is_file():
            return str(bundled)

        return shutil.which(DEFAULT_NODE_BINARY)


def load_config(config_path: Path) -> SandboxConfig:
    """
    Load configuration from YAML file and apply default values.

    If the file doesn't exist or cannot be parsed, a warning is logged and
    default settings are used.

    Args:
        config_path: Path to the config YAML file

    Returns:
        SandboxConfig with all necessary defaults applied

    Raises:
        ConfigError: If the file parses but is not a mapping
    """
    raw: Any = {}

    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                loaded_config = yaml.safe_load(f)
                # Handle None result from empty file
                if loaded_config is not None:
                    raw = loaded_config
            log_with_context(logging.DEBUG, f"Loaded configuration from {config_path}")
        except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
            log_with_context(
                logging.WARNING, f"Failed to load config file {config_path}: {e}"
            )
    else:
        log_with_context(
            logging.DEBUG,
            f"Config file {config_path} not found, using default settings",
        )

    if not isinstance(raw, dict):
        raise ConfigError(
            f"Config file {config_path} must contain a mapping, got {type(raw).__name__}"
        )

    return SandboxConfig.from_dict(raw)
