"""CLI command handler for initializing a local sandbox area."""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable

import click

from sandbox_cli.cli.common import (
    cli,
    collect_options,
    command_name,
    common_options,
    handle_exception,
    prepare_runner,
)
from sandbox_cli.constants import (
    DEFAULT_LANGUAGE,
    FLAG_LANGUAGE,
    FLAG_OVERWRITE,
    PROJECT_CREATE,
)
from sandbox_cli.core.flags import ensure_one_arg
from sandbox_cli.core.runner import SandboxRunner
from sandbox_cli.exceptions import SandboxError
from sandbox_cli.services.branding import fix_init_error_message, format_init_success
from sandbox_cli.types import CommandOptions
from sandbox_cli.utils.logging import log_with_context, setup_logger


def run_init(
    runner: SandboxRunner,
    paths: tuple[str, ...],
    options: CommandOptions,
    echo: Callable[[str], Any] = click.echo,
) -> None:
    """Create a sandbox area through ``project/create`` and report where it is."""
    ensure_one_arg(paths, command_name("init"))

    try:
        output = runner.exec(
            PROJECT_CREATE,
            paths,
            options,
            boolean_flags=[FLAG_OVERWRITE],
            string_flags=[FLAG_LANGUAGE],
        )
    except SandboxError as e:
        text = fix_init_error_message(str(e))
        if text != str(e):
            raise SandboxError(text) from e
        raise

    log_with_context(logging.DEBUG, f"project/create returned entity: {output.entity!r}")
    echo(format_init_success(output.entity))


# ---------------------------------------------------------------------------
# init subcommand
# ---------------------------------------------------------------------------


@cli.command("init")
@common_options
@click.option(
    "--language",
    "-l",
    default=DEFAULT_LANGUAGE,
    show_default=True,
    help="Language for the initial sample code",
)
@click.option(
    "--overwrite",
    is_flag=True,
    default=False,
    help="Clears and reuses an existing directory",
)
@click.argument("paths", nargs=-1, metavar="<path>")
def init(
    paths: tuple[str, ...],
    config: str,
    verbose: bool,
    language: str,
    overwrite: bool,
) -> None:
    """Initialize a local file system directory for the sandbox.

    The `doctl sandbox init` command specifies a directory in your file system
    which will hold functions and supporting artifacts while you're developing
    them. When ready, you can upload these to the cloud for testing. Later,
    after the area is committed to a `git` repository, you can create an app
    from them.
    """
    setup_logger(verbose)
    options = collect_options({"language": language, "overwrite": overwrite})

    try:
        _, runner = prepare_runner(config)
        run_init(runner, paths, options)
    except Exception as e:
        handle_exception(e)
        sys.exit(1)
