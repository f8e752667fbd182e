"""Shared type definitions for the sandbox commands.

Provides the structured result shape produced by the sandbox tool and the
option mapping shape passed between the CLI layer and the runner.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Union

# ---------------------------------------------------------------------------
# Command options as collected by click (flag name -> value)
# ---------------------------------------------------------------------------

OptionValue = Union[str, bool, None]
CommandOptions = Dict[str, OptionValue]


# ---------------------------------------------------------------------------
# Sandbox tool result
# ---------------------------------------------------------------------------


@dataclass
class SandboxOutput:
    """Structured result of one sandbox tool invocation.

    The tool writes a single JSON object on stdout. At most one of ``table``,
    ``captured``, ``formatted`` or ``entity`` is normally populated; ``error``
    is non-empty when the invocation failed.
    """

    table: list[dict[str, Any]] = field(default_factory=list)
    captured: list[str] = field(default_factory=list)
    formatted: list[str] = field(default_factory=list)
    entity: Any = None
    error: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SandboxOutput:
        """Create a SandboxOutput from the decoded JSON document."""
        return cls(
            table=data.get("table") or [],
            captured=_as_lines(data.get("captured")),
            formatted=_as_lines(data.get("formatted")),
            entity=data.get("entity"),
            error=data.get("error") or "",
        )


def _as_lines(value: Any) -> list[str]:
    """Normalize a lines field; a bare string is a single line."""
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(line) for line in value]
