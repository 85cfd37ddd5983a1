"""Transfer command for the logstage CLI.

Commands:
- logstage LOCAL REMOTE: Stage, compress and deliver rotated logs

Exit codes:
- 0: Transfer completed
- 1: Local path missing
- 2: Remote path missing
- 3: Transfer failed or configuration invalid
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from logstage import __version__
from logstage.cli.config import ConfigError, build_config, load_config

EXIT_LOCAL_MISSING = 1
EXIT_REMOTE_MISSING = 2
EXIT_FAILED = 3

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbosity: int) -> None:
    """Configure the logstage logger to write to stderr.

    Args:
        verbosity: 0 for warnings, 1 for info, 2 or more for debug.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logstage_logger = logging.getLogger("logstage")
    # Remove any existing handlers
    for existing in logstage_logger.handlers[:]:
        logstage_logger.removeHandler(existing)
    logstage_logger.addHandler(handler)
    logstage_logger.setLevel(level)
    logstage_logger.propagate = False


@click.command()
@click.argument("local_path", required=False, type=click.Path(path_type=Path))
@click.argument("remote_path", required=False, type=click.Path(path_type=Path))
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file with transfer settings.",
)
@click.option(
    "--temp-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Parent directory for the staging area.",
)
@click.option(
    "--follow-link-chains",
    is_flag=True,
    help="Resolve chained symlinks to their final target.",
)
@click.option("--compress-level", type=click.IntRange(1, 9), help="gzip level (1-9).")
@click.option("--verbose", "-v", count=True, help="Increase log output (-vv for debug).")
@click.version_option(version=__version__)
def transfer(
    local_path: Path | None,
    remote_path: Path | None,
    config_file: Path | None,
    temp_dir: Path | None,
    follow_link_chains: bool,
    compress_level: int | None,
    verbose: int,
) -> None:
    """Stage rotated logs from LOCAL_PATH, compress them, deliver to REMOTE_PATH.

    Symbolic links and the files they point to are skipped, so rotated
    content is never delivered twice.
    """
    from logstage.stage import StageError, TransferOrchestrator

    if local_path is None:
        click.echo("Error: missing local log directory.", err=True)
        sys.exit(EXIT_LOCAL_MISSING)
    if remote_path is None:
        click.echo("Error: missing remote log directory.", err=True)
        sys.exit(EXIT_REMOTE_MISSING)

    setup_logging(verbose)

    try:
        values = load_config(config_file) if config_file else {}
        config = build_config(
            values,
            temp_dir=temp_dir,
            follow_link_chains=follow_link_chains or None,
            compress_level=compress_level,
        )
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_FAILED)

    orchestrator = TransferOrchestrator(local_path, remote_path, config, echo=click.echo)
    try:
        orchestrator.run()
    except StageError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_FAILED)
