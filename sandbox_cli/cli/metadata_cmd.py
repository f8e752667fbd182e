"""CLI command handler for reading the metadata of a sandbox area."""

from __future__ import annotations

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
from sandbox_cli.constants import FLAG_ENV, FLAG_EXCLUDE, FLAG_INCLUDE, PROJECT_GET_METADATA
from sandbox_cli.core.flags import adjust_include_and_exclude, ensure_one_arg
from sandbox_cli.core.runner import SandboxRunner
from sandbox_cli.services.output import print_sandbox_text_output
from sandbox_cli.types import CommandOptions
from sandbox_cli.utils.logging import setup_logger

METADATA_STRING_FLAGS = [FLAG_ENV, FLAG_INCLUDE, FLAG_EXCLUDE]


def run_get_metadata(
    runner: SandboxRunner,
    paths: tuple[str, ...],
    options: CommandOptions,
    echo: Callable[[str], Any] = click.echo,
) -> None:
    """Print the metadata ``project/get-metadata`` reports for a sandbox area."""
    adjust_include_and_exclude(options)
    ensure_one_arg(paths, command_name("get-metadata"))

    output = runner.exec(
        PROJECT_GET_METADATA,
        paths,
        options,
        string_flags=METADATA_STRING_FLAGS,
    )
    print_sandbox_text_output(output, echo)


# ---------------------------------------------------------------------------
# get-metadata subcommand
# ---------------------------------------------------------------------------


@cli.command("get-metadata")
@common_options
@click.option("--env", default="", help="Path to environment file")
@click.option("--include", default="", help="Functions or packages to include")
@click.option("--exclude", default="", help="Functions or packages to exclude")
@click.argument("paths", nargs=-1, metavar="<directory>")
def get_metadata(
    paths: tuple[str, ...],
    config: str,
    verbose: bool,
    env: str,
    include: str,
    exclude: str,
) -> None:
    """Obtain metadata of a sandbox directory.

    The `doctl sandbox get-metadata` command produces a JSON structure that
    summarizes the contents of a directory you have designated for functions
    development. This can be useful for feeding into other tools.
    """
    setup_logger(verbose)
    options = collect_options({"env": env, "include": include, "exclude": exclude})

    try:
        _, runner = prepare_runner(config)
        run_get_metadata(runner, paths, options)
    except Exception as e:
        handle_exception(e)
        sys.exit(1)
