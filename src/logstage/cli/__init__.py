"""Command-line interface for logstage.

This module provides the CLI entry point.

Commands:
- logstage LOCAL REMOTE: Stage, compress and deliver rotated logs
"""

from __future__ import annotations

from logstage.cli.config import ConfigError, build_config, load_config
from logstage.cli.transfer import (
    EXIT_FAILED,
    EXIT_LOCAL_MISSING,
    EXIT_REMOTE_MISSING,
    setup_logging,
    transfer,
)

cli = transfer


def main() -> None:
    """Entry point for the CLI."""
    cli()


__all__ = [
    # Main entry points
    "cli",
    "main",
    # Exit codes
    "EXIT_FAILED",
    "EXIT_LOCAL_MISSING",
    "EXIT_REMOTE_MISSING",
    # Config utilities
    "ConfigError",
    "build_config",
    "load_config",
    "setup_logging",
]
