"""Unit test configuration and shared fixtures."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from sandbox_cli.core.config import SandboxConfig
from sandbox_cli.core.runner import SandboxRunner
from sandbox_cli.types import SandboxOutput

# ---------------------------------------------------------------------------
# Shared mock runner factory
# ---------------------------------------------------------------------------


def _build_mock_runner(**kwargs: Any) -> MagicMock:
    """Build a MagicMock that behaves like SandboxRunner.

    ``exec`` returns an empty ``SandboxOutput`` unless ``output`` is given;
    ``error`` sets a side effect instead. Other keyword arguments are set
    directly on the mock.
    """
    m = MagicMock(spec=SandboxRunner)
    m.config = SandboxConfig()
    m.exec.return_value = kwargs.pop("output", SandboxOutput())
    m.exec_streaming.return_value = 0
    error = kwargs.pop("error", None)
    if error is not None:
        m.exec.side_effect = error
    for key, value in kwargs.items():
        setattr(m, key, value)
    return m


@pytest.fixture()
def make_mock_runner():
    """Factory fixture — call with kwargs to get a configured mock runner.

    Usage in tests::

        def test_something(make_mock_runner):
            runner = make_mock_runner(output=SandboxOutput(captured=["done"]))
    """
    return _build_mock_runner


@pytest.fixture()
def echoed():
    """Collect lines passed to an ``echo`` callable."""
    lines: list[str] = []
    return lines


# ---------------------------------------------------------------------------
# Data builders
# ---------------------------------------------------------------------------


@pytest.fixture()
def deploy_transcript() -> list[str]:
    """Return captured lines resembling a ``project/deploy`` transcript."""
    return [
        "Deploying project '/home/dev/hello'",
        "  to namespace 'fn-1234'",
        "  on host 'https://faas.example.com'",
        "",
        "Deployed actions ('nim action get <actionName> --url' for URL):",
        "  - sample/hello",
    ]
