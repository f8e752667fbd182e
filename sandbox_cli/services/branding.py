"""
Rewriting of sandbox tool text so it reads as doctl output.

The sandbox tool phrases its messages for its own command line; these helpers
replace the parts that would point users at the wrong command or wording.
"""

from __future__ import annotations

from typing import Any

from sandbox_cli.constants import (
    ALREADY_EXISTS_PHRASE,
    CLI_PREFIX,
    DEPLOYED_ACTIONS_PHRASE,
    DEPLOYED_FUNCTIONS_LINE,
    DEPLOYED_PHRASE,
    DEPLOYING_PROJECT_PHRASE,
    LONG_OVERWRITE_FLAG,
    SHORT_OVERWRITE_FLAG,
)

INIT_FALLBACK_MESSAGE = "Sandbox initialized successfully in the local file system"


def rewrite_deploy_transcript(lines: list[str]) -> list[str]:
    """
    Reword a deploy transcript for doctl.

    Args:
        lines: Captured transcript lines from ``project/deploy``

    Returns:
        A new list with the deploy summary lines rewritten
    """
    rewritten = []
    for line in lines:
        if DEPLOYING_PROJECT_PHRASE in line:
            line = line.replace(DEPLOYING_PROJECT_PHRASE, DEPLOYED_PHRASE, 1)
        elif DEPLOYED_ACTIONS_PHRASE in line:
            line = DEPLOYED_FUNCTIONS_LINE
        rewritten.append(line)
    return rewritten


def fix_init_error_message(text: str) -> str:
    """Point an 'already exists' error at ``--overwrite`` instead of ``-o``."""
    if ALREADY_EXISTS_PHRASE in text:
        return text.replace(SHORT_OVERWRITE_FLAG, LONG_OVERWRITE_FLAG, 1)
    return text


def format_init_success(entity: Any) -> str:
    """
    Build the message shown after a successful ``init``.

    Args:
        entity: The structured result of ``project/create``

    Returns:
        Instructions naming the created area, or a generic confirmation when
        the result does not carry the project path
    """
    if isinstance(entity, dict):
        created = entity.get("project")
        if isinstance(created, str):
            return (
                f"A local sandbox area '{created}' was created for you.\n"
                "You may deploy it by running the command shown on the next line:\n"
                f"  {CLI_PREFIX} deploy {created}\n"
            )
    return INIT_FALLBACK_MESSAGE
