"""
Flag handling shared by the sandbox commands.

Covers positional argument validation, the ``web`` keyword adjustments the
sandbox tool needs for ``--include``/``--exclude``, and flattening click
options into the argument list the tool expects.
"""

from __future__ import annotations

import logging
from typing import Sequence

from sandbox_cli.constants import (
    FLAG_EXCLUDE,
    FLAG_INCLUDE,
    KEYWORD_WEB,
    KEYWORD_WEB_PACKAGE,
)
from sandbox_cli.exceptions import MissingArgsError, TooManyArgsError
from sandbox_cli.types import CommandOptions
from sandbox_cli.utils.logging import log_with_context


def ensure_one_arg(args: Sequence[str], command_name: str) -> None:
    """
    Check that exactly one positional argument was supplied.

    Args:
        args: Positional arguments given to the command
        command_name: Command name used in the error message

    Raises:
        MissingArgsError: If no argument was given
        TooManyArgsError: If more than one argument was given
    """
    if len(args) == 0:
        raise MissingArgsError(command_name)
    if len(args) > 1:
        raise TooManyArgsError(command_name)


def qualify_web_with_slash(original: str) -> str:
    """
    Rewrite every ``web`` token in a comma-separated list as ``web/``.

    The sandbox tool reads a bare ``web`` as the web content folder; the
    trailing slash makes it refer to a package called ``web`` instead.

    Args:
        original: Comma-separated list of functions and/or packages

    Returns:
        The list with each exact ``web`` token qualified
    """
    tokens = original.split(",")
    tokens = [KEYWORD_WEB_PACKAGE if token == KEYWORD_WEB else token for token in tokens]
    return ",".join(tokens)


def adjust_include_and_exclude(options: CommandOptions) -> None:
    """
    Prepare ``--include`` and ``--exclude`` for the sandbox tool, in place.

    Any ``web`` token is qualified as a package, and ``web`` is always added
    to the exclusions so a project's web folder is not deployed as content.

    Args:
        options: Command options keyed by flag name
    """
    includes = options.get(FLAG_INCLUDE)
    if includes:
        options[FLAG_INCLUDE] = qualify_web_with_slash(str(includes))

    excludes = options.get(FLAG_EXCLUDE)
    if excludes:
        options[FLAG_EXCLUDE] = f"{qualify_web_with_slash(str(excludes))},{KEYWORD_WEB}"
    else:
        options[FLAG_EXCLUDE] = KEYWORD_WEB

    log_with_context(
        logging.DEBUG,
        f"Adjusted include={options.get(FLAG_INCLUDE)!r} exclude={options[FLAG_EXCLUDE]!r}",
    )


def flat_args(
    args: Sequence[str],
    options: CommandOptions,
    boolean_flags: Sequence[str],
    string_flags: Sequence[str],
) -> list[str]:
    """
    Flatten positional arguments and selected options into a tool argument list.

    Positional arguments come first, then ``--flag`` for each listed boolean
    that is set, then ``--flag value`` for each listed string that is
    non-empty. Options not named in either list are never forwarded.

    Args:
        args: Positional arguments
        options: Command options keyed by flag name
        boolean_flags: Boolean flags to forward, in order
        string_flags: String flags to forward, in order

    Returns:
        The argument list to pass after the tool command name
    """
    result = list(args)
    for flag in boolean_flags:
        if options.get(flag) is True:
            result.append(f"--{flag}")
    for flag in string_flags:
        value = options.get(flag)
        if isinstance(value, str) and value:
            result.extend([f"--{flag}", value])
    return result
