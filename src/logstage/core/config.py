"""Shared configuration classes for logstage.

This module defines the configuration passed into the transfer pipeline,
replacing implicit ambient state (temp location, glob patterns) with
explicit values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_PATTERNS = ("*.log", "*.log.gz")
DEFAULT_COMPRESS_LEVEL = 9


@dataclass
class TransferConfig:
    """Configuration for a local -> staging -> remote transfer.

    Attributes:
        temp_dir: Parent directory for the staging area (None = OS default).
        patterns: File name patterns identifying log files.
        follow_link_chains: Resolve symlinks until a non-link is reached
            instead of a single hop.
        compress_level: gzip compression level (1-9).
        copy_timeout: Seconds allowed for each pull (None = unlimited).
        compress_timeout: Seconds allowed for compression (None = unlimited).
        cleanup_timeout: Seconds after which a slow cleanup is reported.
    """

    temp_dir: Path | None = None
    patterns: tuple[str, ...] = field(default=DEFAULT_PATTERNS)
    follow_link_chains: bool = False
    compress_level: int = DEFAULT_COMPRESS_LEVEL
    copy_timeout: float | None = None
    compress_timeout: float | None = None
    cleanup_timeout: float | None = None

    def __post_init__(self) -> None:
        """Normalize paths and validate ranges."""
        if self.temp_dir is not None:
            self.temp_dir = Path(self.temp_dir).expanduser()
        self.patterns = tuple(self.patterns)
        if not self.patterns:
            raise ValueError("At least one log file pattern is required")
        if not 1 <= self.compress_level <= 9:
            raise ValueError(f"compress_level must be between 1 and 9, got {self.compress_level}")
        for name in ("copy_timeout", "compress_timeout", "cleanup_timeout"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")
