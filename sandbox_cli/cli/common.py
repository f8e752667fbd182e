"""Shared CLI infrastructure: option decorators, error handlers, and the CLI group."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

import click

import sandbox_cli
from sandbox_cli.constants import (
    APP_NAME,
    CLI_PREFIX,
    FLAG_APIHOST,
    FLAG_AUTH,
)
from sandbox_cli.core.config import SandboxConfig, default_config_path, load_config
from sandbox_cli.core.runner import SandboxRunner
from sandbox_cli.exceptions import SandboxError, SandboxNotInstalledError
from sandbox_cli.types import CommandOptions
from sandbox_cli.utils.logging import log_with_context

# Create logger instance
logger = logging.getLogger("sandbox_cli")


# ---------------------------------------------------------------------------
# Shared option decorators
# ---------------------------------------------------------------------------


def common_options(f: Callable[..., None]) -> Callable[..., None]:
    """Decorator that adds options shared by every subcommand.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with common options attached.
    """
    f = click.option(
        "--config",
        default=str(default_config_path()),
        show_default=True,
        help="Path to config YAML",
    )(f)
    f = click.option(
        "--verbose",
        "-v",
        is_flag=True,
        default=False,
        help="Enable verbose console logging (shows DEBUG level messages)",
    )(f)
    return f


def build_options(f: Callable[..., None]) -> Callable[..., None]:
    """Decorator that adds the build and upload options of deploy and watch.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with build options attached.
    """
    string_options = [
        ("--env", "Path to runtime environment file"),
        ("--build-env", "Path to build-time environment file"),
        ("--apihost", "API host to use"),
        ("--auth", "OpenWhisk auth token to use"),
        ("--include", "Functions and/or packages to include"),
        ("--exclude", "Functions and/or packages to exclude"),
    ]
    flag_options = [
        ("--insecure", "Ignore SSL Certificates"),
        ("--verbose-build", "Display build details"),
        ("--verbose-zip", "Display start/end of zipping phase for each function"),
        ("--yarn", "Use yarn instead of npm for node builds"),
        ("--remote-build", "Run builds remotely"),
    ]
    # Applied in reverse so --help lists options in declaration order
    for name, help_text in reversed(flag_options):
        f = click.option(name, is_flag=True, default=False, help=help_text)(f)
    for name, help_text in reversed(string_options):
        f = click.option(name, default="", help=help_text)(f)
    return f


def collect_options(params: dict[str, Any]) -> CommandOptions:
    """Key click parameters by the flag names the sandbox tool uses."""
    return {name.replace("_", "-"): value for name, value in params.items()}


def command_name(name: str) -> str:
    """Full command name used in argument errors."""
    return f"{CLI_PREFIX} {name}"


def prepare_runner(config: str) -> tuple[SandboxConfig, SandboxRunner]:
    """Load configuration and build a runner for the installed sandbox tool."""
    cfg = load_config(Path(config))
    return cfg, SandboxRunner(cfg)


def apply_credential_defaults(options: CommandOptions, cfg: SandboxConfig) -> None:
    """Fill ``--apihost``/``--auth`` from config when not given on the command line."""
    if not options.get(FLAG_APIHOST) and cfg.apihost:
        options[FLAG_APIHOST] = cfg.apihost
    if not options.get(FLAG_AUTH) and cfg.auth:
        options[FLAG_AUTH] = cfg.auth


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=sandbox_cli.__version__, prog_name=APP_NAME)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Develop functions in a sandbox before deploying them in an app.

    Args:
        ctx: The Click context (injected by ``@click.pass_context``).
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------


def handle_exception(e: BaseException) -> None:
    """Handle different types of exceptions.

    Args:
        e: The exception to handle.
    """
    if isinstance(e, SandboxNotInstalledError):
        log_with_context(logging.ERROR, str(e))
        log_with_context(
            logging.INFO,
            f"Run '{CLI_PREFIX} install' from doctl to install the sandbox, "
            "or set 'sandbox_dir' in your config file.",
        )
    elif isinstance(e, SandboxError):
        log_with_context(logging.ERROR, str(e))
    elif isinstance(e, FileNotFoundError):
        log_with_context(logging.ERROR, f"File not found: {e}")
        log_with_context(
            logging.INFO,
            "Please check that all required files exist and paths are correct.",
        )
    elif isinstance(e, KeyboardInterrupt):
        log_with_context(logging.WARNING, "Command interrupted by user.")
    else:
        log_with_context(logging.ERROR, f"Sandbox command failed: {e}", exc_info=True)

