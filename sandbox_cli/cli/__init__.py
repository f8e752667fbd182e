"""Click command group and subcommands for the sandbox."""

__all__ = [
    "commands",
    "common",
    "deploy_cmd",
    "init_cmd",
    "metadata_cmd",
    "watch_cmd",
]
