#!/usr/bin/env python3
"""
Main execution module for the doctl sandbox commands
"""

from sandbox_cli.cli.commands import main

if __name__ == "__main__":
    main()
