"""CLI command handler for deploying a sandbox area to the cloud."""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable

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
from sandbox_cli.constants import (
    FLAG_APIHOST,
    FLAG_AUTH,
    FLAG_BUILD_ENV,
    FLAG_ENV,
    FLAG_EXCLUDE,
    FLAG_INCLUDE,
    FLAG_INCREMENTAL,
    FLAG_INSECURE,
    FLAG_REMOTE_BUILD,
    FLAG_VERBOSE_BUILD,
    FLAG_VERBOSE_ZIP,
    FLAG_YARN,
    PROJECT_DEPLOY,
)
from sandbox_cli.core.flags import adjust_include_and_exclude, ensure_one_arg
from sandbox_cli.core.runner import SandboxRunner
from sandbox_cli.exceptions import SandboxOutputError
from sandbox_cli.services.branding import rewrite_deploy_transcript
from sandbox_cli.services.output import print_sandbox_text_output
from sandbox_cli.types import CommandOptions
from sandbox_cli.utils.logging import log_with_context, setup_logger

DEPLOY_BOOLEAN_FLAGS = [
    FLAG_INSECURE,
    FLAG_VERBOSE_BUILD,
    FLAG_VERBOSE_ZIP,
    FLAG_YARN,
    FLAG_REMOTE_BUILD,
    FLAG_INCREMENTAL,
]
DEPLOY_STRING_FLAGS = [
    FLAG_ENV,
    FLAG_BUILD_ENV,
    FLAG_APIHOST,
    FLAG_AUTH,
    FLAG_INCLUDE,
    FLAG_EXCLUDE,
]


def run_deploy(
    runner: SandboxRunner,
    paths: tuple[str, ...],
    options: CommandOptions,
    echo: Callable[[str], Any] = click.echo,
) -> None:
    """
    Deploy a sandbox area through ``project/deploy``.

    The transcript is reworded for doctl even when the deploy fails, since it
    is often needed to make sense of the error.

    Raises:
        SandboxOutputError: If the deploy fails; the transcript is printed first
    """
    adjust_include_and_exclude(options)
    ensure_one_arg(paths, command_name("deploy"))

    try:
        output = runner.exec(
            PROJECT_DEPLOY,
            paths,
            options,
            boolean_flags=DEPLOY_BOOLEAN_FLAGS,
            string_flags=DEPLOY_STRING_FLAGS,
        )
    except SandboxOutputError as e:
        if not e.output.captured:
            raise
        e.output.captured = rewrite_deploy_transcript(e.output.captured)
        echo("\n".join(e.output.captured))
        raise

    output.captured = rewrite_deploy_transcript(output.captured)
    log_with_context(logging.DEBUG, f"Deploy transcript has {len(output.captured)} lines")
    print_sandbox_text_output(output, echo)


# ---------------------------------------------------------------------------
# deploy subcommand
# ---------------------------------------------------------------------------


@cli.command("deploy")
@common_options
@build_options
@click.option(
    "--incremental",
    is_flag=True,
    default=False,
    help="Deploy only changes since last deploy",
)
@click.argument("paths", nargs=-1, metavar="<directories>")
def deploy(paths: tuple[str, ...], config: str, verbose: bool, **flags: Any) -> None:
    """Deploy sandbox local assets to the cloud.

    At any time you can use `doctl sandbox deploy` to upload the contents of a
    directory in your file system for testing in the cloud. The area must be
    organized in the fashion expected by an App Platform Functions component.
    The `doctl sandbox init` command will create a properly organized
    directory for you to work in.
    """
    setup_logger(verbose)
    options = collect_options(flags)

    try:
        cfg, runner = prepare_runner(config)
        apply_credential_defaults(options, cfg)
        run_deploy(runner, paths, options)
    except Exception as e:
        handle_exception(e)
        sys.exit(1)
