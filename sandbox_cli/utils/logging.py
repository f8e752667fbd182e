"""
Logging module for the doctl sandbox commands
"""

import logging
from typing import Any, List

LOGGER_NAME = "sandbox_cli"

# Flags whose following value must never reach a log line
_SENSITIVE_FLAGS = ("--auth",)


# Define an enhanced formatter class that adds module context in verbose mode
class EnhancedFormatter(logging.Formatter):
    """
    Custom formatter that switches to a detailed layout in verbose mode and
    appends the sandbox tool command line when one is attached to the record
    """

    def __init__(
        self,
        fmt=None,
        datefmt=None,
        style="%",
        verbose=False,
    ):
        # Use more detailed format for verbose mode
        if verbose:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - [%(module)s:%(lineno)d] - %(message)s"
        elif not fmt:
            fmt = "%(levelname)s - %(message)s"

        super().__init__(fmt, datefmt, style)
        self.verbose = verbose

    def format(self, record):
        result = super().format(record)

        # Only include the command line in verbose mode
        if self.verbose and getattr(record, "command_line", None):
            result += f"\nCommand: {record.command_line}"

        return result


def setup_logger(verbose: bool = False) -> logging.Logger:
    """
    Set up and return the logger with appropriate formatting.

    Args:
        verbose: If True, set console handler to DEBUG level; otherwise INFO level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)

    # Clear any existing handlers to prevent duplicate messages
    if logger.handlers:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

    logger.setLevel(logging.DEBUG)  # Always set logger to DEBUG to capture all logs

    # Console handler writes to stderr so command output on stdout stays clean
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(EnhancedFormatter(verbose=verbose))

    logger.addHandler(console_handler)
    return logger


def log_with_context(level: int, message: str, **kwargs: Any) -> None:
    """
    Log a message with additional context information.

    Args:
        level: The logging level (e.g., logging.INFO)
        message: The log message
        **kwargs: Additional context to include in the log record
    """
    # Filter out None values from kwargs
    extras = {k: v for k, v in kwargs.items() if v is not None}

    # exc_info is a logging keyword, not record context
    exc_info = extras.pop("exc_info", None)

    logger = logging.getLogger(LOGGER_NAME)
    logger.log(level, message, extra=extras, exc_info=exc_info)


def redact_command(cmd: List[str]) -> List[str]:
    """Return a copy of ``cmd`` with the values of sensitive flags replaced."""
    redacted = list(cmd)
    for index, token in enumerate(redacted[:-1]):
        if token in _SENSITIVE_FLAGS:
            redacted[index + 1] = "[REDACTED]"
    return redacted


def log_sandbox_command(cmd: List[str], streaming: bool = False) -> None:
    """
    Log a sandbox tool invocation at DEBUG level with credentials redacted.

    Args:
        cmd: The full argument vector about to be executed
        streaming: Whether the tool output goes straight to the terminal
    """
    command_line = " ".join(redact_command(cmd))
    mode = "streaming" if streaming else "captured"
    log_with_context(
        logging.DEBUG,
        f"Running sandbox tool ({mode}): {cmd[2] if len(cmd) > 2 else cmd}",
        command_line=command_line,
    )


def get_logger():
    """Get the sandbox_cli logger, creating it with defaults if needed."""
    sandbox_logger = logging.getLogger(LOGGER_NAME)
    if not sandbox_logger.handlers:
        # If no handlers, set up a basic logger
        sandbox_logger.setLevel(logging.INFO)
        handler = logging.StreamHandler()
        handler.setLevel(logging.INFO)
        handler.setFormatter(EnhancedFormatter())
        sandbox_logger.addHandler(handler)
    return sandbox_logger


# Module logger - will be properly initialized when setup_logger is called
logger = get_logger()
