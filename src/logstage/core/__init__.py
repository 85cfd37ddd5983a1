"""Core module - Shared configuration and enums."""

from logstage.core.config import DEFAULT_COMPRESS_LEVEL, DEFAULT_PATTERNS, TransferConfig
from logstage.core.types import EntryKind, TransferState

__all__ = [
    # Config
    "DEFAULT_COMPRESS_LEVEL",
    "DEFAULT_PATTERNS",
    "TransferConfig",
    # Types
    "EntryKind",
    "TransferState",
]
