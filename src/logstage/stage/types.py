"""Shared types and exceptions for staging operations.

This module provides:
- StageError and subclasses: Exception classes
- TransferResult: Overall transfer run result
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from logstage.core.types import TransferState


class StageError(Exception):
    """Base exception for staging errors."""


class NotFoundError(StageError):
    """A source root does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Log directory not found: {path}")


class AccessError(StageError):
    """A source root exists but cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot read log directory {path}: {reason}")


class ResolveError(StageError):
    """A symbolic link could not be resolved (e.g. a link cycle)."""


class ResourceError(StageError):
    """The staging area could not be created, modified or removed."""


class CompressionError(ResourceError):
    """Failed to compress a staged file."""


class CopyError(StageError):
    """Failed to copy a file into its destination.

    Attributes:
        source: Path being copied.
        destination: Path it was being copied to.
    """

    def __init__(self, source: Path, destination: Path, reason: str) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"Failed to copy {source} to {destination}: {reason}")


class StageTimeoutError(StageError):
    """A transfer phase ran past its deadline.

    Attributes:
        phase: Name of the phase that timed out.
        timeout: Allowed duration in seconds.
    """

    def __init__(self, phase: str, timeout: float) -> None:
        self.phase = phase
        self.timeout = timeout
        super().__init__(f"{phase} exceeded its {timeout:.1f}s deadline")


@dataclass
class TransferResult:
    """Result of a transfer run.

    Attributes:
        delivered: Relative names written under the remote root.
        listing: Audit listing of the staging area taken before removal.
        state: Final state of the run.
    """

    delivered: list[str] = field(default_factory=list)
    listing: list[str] = field(default_factory=list)
    state: TransferState = TransferState.START

    @property
    def is_empty(self) -> bool:
        """Check if nothing was delivered."""
        return len(self.delivered) == 0
