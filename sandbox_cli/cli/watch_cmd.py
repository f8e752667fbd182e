"""CLI command handler for watching a sandbox area and deploying on change.

Unlike the other commands this one is long-running: the sandbox tool owns
the terminal until the user interrupts it.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import click

from sandbox_cli.cli.common import (
    apply_credential_defaults,
    build_options,
    cli,
    collect_options,
    command_name,
    common_options,
    handle_exception,
    prepare_runner,
)
from sandbox_cli.cli.deploy_cmd import DEPLOY_STRING_FLAGS
from sandbox_cli.constants import (
    FLAG_INSECURE,
    FLAG_REMOTE_BUILD,
    FLAG_VERBOSE_BUILD,
    FLAG_VERBOSE_ZIP,
    FLAG_YARN,
    PROJECT_WATCH,
)
from sandbox_cli.core.flags import adjust_include_and_exclude, ensure_one_arg
from sandbox_cli.core.runner import SandboxRunner
from sandbox_cli.types import CommandOptions
from sandbox_cli.utils.logging import log_with_context, setup_logger

WATCH_BOOLEAN_FLAGS = [
    FLAG_INSECURE,
    FLAG_VERBOSE_BUILD,
    FLAG_VERBOSE_ZIP,
    FLAG_YARN,
    FLAG_REMOTE_BUILD,
]


def run_watch(
    runner: SandboxRunner, paths: tuple[str, ...], options: CommandOptions
) -> None:
    """Hand the terminal to ``project/watch`` until it exits or is interrupted."""
    adjust_include_and_exclude(options)
    ensure_one_arg(paths, command_name("watch"))

    try:
        runner.exec_streaming(
            PROJECT_WATCH,
            paths,
            options,
            boolean_flags=WATCH_BOOLEAN_FLAGS,
            string_flags=DEPLOY_STRING_FLAGS,
        )
    except KeyboardInterrupt:
        log_with_context(logging.INFO, "Stopped watching.")


# ---------------------------------------------------------------------------
# watch subcommand
# ---------------------------------------------------------------------------


@cli.command("watch")
@common_options
@build_options
@click.argument("paths", nargs=-1, metavar="<directory>")
def watch(paths: tuple[str, ...], config: str, verbose: bool, **flags: Any) -> None:
    """Watch a sandbox directory, deploying incrementally on change.

    Type `doctl sandbox watch <directory>` in a separate terminal window. It
    will run until interrupted. It will watch the directory (which should be
    one you initialized for sandbox use) and will deploy the contents to the
    cloud incrementally as it detects changes.
    """
    setup_logger(verbose)
    options = collect_options(flags)

    try:
        cfg, runner = prepare_runner(config)
        apply_credential_defaults(options, cfg)
        run_watch(runner, paths, options)
    except Exception as e:
        handle_exception(e)
        sys.exit(1)
