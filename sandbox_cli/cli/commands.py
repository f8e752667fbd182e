#!/usr/bin/env python3
"""
Main execution module for the doctl sandbox commands.

Importing the subcommand modules registers them on the ``cli`` group; this
module re-exports the group and its shared handlers for callers and tests.
"""

from sandbox_cli.cli import deploy_cmd, init_cmd, metadata_cmd, watch_cmd  # noqa: F401
from sandbox_cli.cli.common import cli, handle_exception


def main() -> None:
    """Main entry point for the doctl sandbox commands."""
    cli()


__all__ = ["cli", "handle_exception", "main"]


if __name__ == "__main__":
    main()
