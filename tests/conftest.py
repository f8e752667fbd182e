"""Shared test fixtures for the sandbox_cli test suite."""

import logging
import sys
import textwrap

import pytest

from sandbox_cli.core.config import SandboxConfig

# Stands in for sandbox.js: run by the configured "node" (the test interpreter)
FAKE_SANDBOX_TOOL = textwrap.dedent(
    """
    import json
    import os
    import sys

    raw = os.environ.get("FAKE_SANDBOX_RAW")
    raw_hex = os.environ.get("FAKE_SANDBOX_RAW_HEX")
    response = os.environ.get("FAKE_SANDBOX_RESPONSE")
    stderr = os.environ.get("FAKE_SANDBOX_STDERR")

    if stderr:
        sys.stderr.write(stderr)
    if raw_hex is not None:
        sys.stdout.buffer.write(bytes.fromhex(raw_hex))
    elif raw is not None:
        sys.stdout.write(raw)
    elif response is not None:
        sys.stdout.write(response)
    else:
        sys.stdout.write(json.dumps({"entity": {"argv": sys.argv[1:]}}))
    sys.exit(int(os.environ.get("FAKE_SANDBOX_EXIT", "0")))
    """
)


@pytest.fixture(autouse=True)
def _clean_logger():
    """Remove all handlers from the sandbox_cli logger after each test."""
    yield
    logger = logging.getLogger("sandbox_cli")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)


@pytest.fixture()
def sandbox_dir(tmp_path):
    """Create a sandbox directory holding the fake sandbox tool."""
    directory = tmp_path / "sandbox"
    directory.mkdir()
    (directory / "sandbox.js").write_text(FAKE_SANDBOX_TOOL)
    return directory


@pytest.fixture()
def sandbox_config(sandbox_dir):
    """Return a SandboxConfig that runs the fake tool with this interpreter."""
    return SandboxConfig(sandbox_dir=sandbox_dir, node_path=sys.executable)


@pytest.fixture()
def config_file(tmp_path, sandbox_dir):
    """Write a config YAML pointing at the fake sandbox and return its path."""
    path = tmp_path / "config.yaml"
    path.write_text(
        f"sandbox_dir: {sandbox_dir}\n"
        f"node_path: {sys.executable}\n"
    )
    return path
