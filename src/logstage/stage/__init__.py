"""Staging pipeline for rotated log files.

Architecture:
    Directory → associate → StagingArea → pull_associations

Components:
- **catalog**: Sorted log file listing and symlink resolution
- **association**: Link/target exclusion and relative naming
- **StagingArea**: Temp directory where logs are compressed
- **TransferOrchestrator**: Local -> staging -> remote run with cleanup

All public symbols are re-exported here.
"""

from logstage.stage.association import (
    AssociationMap,
    AssociationStrategy,
    associate,
    candidates,
    links,
    names,
    targets,
)
from logstage.stage.catalog import (
    COMPRESSED_EXTENSION,
    Directory,
    LogEntry,
    list_logs,
    resolve_link,
)
from logstage.stage.deadline import Deadline
from logstage.stage.orchestrator import TransferOrchestrator
from logstage.stage.staging import StagingArea, compress_file, pull_associations
from logstage.stage.types import (
    AccessError,
    CompressionError,
    CopyError,
    NotFoundError,
    ResolveError,
    ResourceError,
    StageError,
    StageTimeoutError,
    TransferResult,
)

__all__ = [
    # Association
    "AssociationMap",
    "AssociationStrategy",
    "associate",
    "candidates",
    "links",
    "names",
    "targets",
    # Catalog
    "COMPRESSED_EXTENSION",
    "Directory",
    "LogEntry",
    "list_logs",
    "resolve_link",
    # Staging
    "Deadline",
    "StagingArea",
    "TransferOrchestrator",
    "compress_file",
    "pull_associations",
    # Types
    "AccessError",
    "CompressionError",
    "CopyError",
    "NotFoundError",
    "ResolveError",
    "ResourceError",
    "StageError",
    "StageTimeoutError",
    "TransferResult",
]
