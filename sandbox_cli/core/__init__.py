"""Core sandbox logic including configuration, flag handling and tool execution."""

__all__ = [
    "config",
    "flags",
    "runner",
]
