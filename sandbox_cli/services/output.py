"""Rendering of sandbox tool results as plain text."""

from __future__ import annotations

import json
from typing import Any, Callable

import click

from sandbox_cli.types import SandboxOutput

COLUMN_GAP = "  "


def format_table(rows: list[dict[str, Any]]) -> str:
    """
    Render rows as aligned text columns.

    Headers come from the first row's keys, upper-cased. Missing cells render
    empty.

    Args:
        rows: Table rows from the sandbox tool

    Returns:
        The table as a newline-joined string
    """
    if not rows:
        return ""

    columns = list(rows[0].keys())
    cells = [[column.upper() for column in columns]]
    for row in rows:
        cells.append(["" if row.get(c) is None else str(row.get(c)) for c in columns])

    widths = [max(len(line[i]) for line in cells) for i in range(len(columns))]
    lines = [
        COLUMN_GAP.join(cell.ljust(widths[i]) for i, cell in enumerate(line)).rstrip()
        for line in cells
    ]
    return "\n".join(lines)


def format_entity(entity: Any) -> str:
    """Render a structured result; strings are shown as they are."""
    if isinstance(entity, str):
        return entity
    return json.dumps(entity, indent=2)


def render_sandbox_output(output: SandboxOutput) -> str | None:
    """
    Choose the text to show for a result.

    The first populated of table, captured, formatted and entity wins.

    Returns:
        The text to print, or None if the result is empty
    """
    if output.table:
        return format_table(output.table)
    if output.captured:
        return "\n".join(output.captured)
    if output.formatted:
        return "\n".join(output.formatted)
    if output.entity is not None:
        return format_entity(output.entity)
    return None


def print_sandbox_text_output(
    output: SandboxOutput, echo: Callable[[str], Any] = click.echo
) -> None:
    """Print a sandbox tool result to stdout."""
    text = render_sandbox_output(output)
    if text is not None:
        echo(text)
