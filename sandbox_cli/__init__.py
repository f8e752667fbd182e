#!/usr/bin/env python3
"""
Sandbox (serverless functions) commands for the doctl CLI
"""

__version__ = "0.1.0"

from sandbox_cli.core.config import load_config
from sandbox_cli.core.flags import adjust_include_and_exclude, qualify_web_with_slash

# Import the main classes and functions for easier access
from sandbox_cli.core.runner import SandboxRunner
from sandbox_cli.services.output import print_sandbox_text_output
from sandbox_cli.types import SandboxOutput
