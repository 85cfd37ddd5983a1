"""Association of log files with their relative destination names.

This module provides:
- AssociationStrategy: How a directory's files are selected
- links / targets / candidates: The link-exclusion steps for a local scan
- names: Relative names for a sequence of entries
- associate: Relative name -> entry mapping for a directory

A local scan stages only candidates: files that are neither a symbolic link
nor the target of a link found in the same scan. For the rotation pattern
"current.log -> current.log.<timestamp>" both sides drop out, so the same
content is never staged under two names. Staging and remote directories use
the raw listing instead.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from logstage.stage.catalog import Directory, LogEntry

logger = logging.getLogger(__name__)

# Relative name (root prefix stripped) -> entry, in listing order
AssociationMap = dict[str, LogEntry]


class AssociationStrategy(str, Enum):
    """Selection of files when associating a directory."""

    LOCAL = "local"  # exclude links and link targets
    RAW = "raw"  # every listed file


def links(entries: Sequence[LogEntry]) -> list[LogEntry]:
    """Entries that are symbolic links."""
    return [entry for entry in entries if entry.is_link]


def targets(entries: Sequence[LogEntry]) -> set[str]:
    """Resolved targets of every link among the entries, deduplicated."""
    return {str(entry.target) for entry in links(entries)}


def candidates(directory: Directory) -> list[LogEntry]:
    """Files minus links minus link targets, in listing order.

    Subtraction is on normalized path identity. Targets outside the scanned
    tree never match a listed file and so exclude nothing.
    """
    entries = directory.entries
    excluded = {str(entry.path) for entry in links(entries)} | targets(entries)
    selected = [entry for entry in entries if str(entry.path) not in excluded]
    logger.debug(
        f"{directory.root}: {len(entries)} files, {len(entries) - len(selected)} excluded "
        f"as links or link targets"
    )
    return selected


def names(entries: Sequence[LogEntry], directory: Directory) -> list[str]:
    """Relative names for entries, index-aligned with the input."""
    return [directory.relative_name(entry.path) for entry in entries]


def associate(
    directory: Directory,
    strategy: AssociationStrategy = AssociationStrategy.RAW,
) -> AssociationMap:
    """Map relative names to entries for a directory.

    Args:
        directory: Directory to scan.
        strategy: LOCAL to exclude links and targets, RAW for every file.

    Returns:
        Relative name -> entry, in sorted listing order.

    Raises:
        NotFoundError: If the directory root does not exist.
    """
    if strategy == AssociationStrategy.LOCAL:
        selected = candidates(directory)
    else:
        selected = directory.entries
    return dict(zip(names(selected, directory), selected))
