"""Shared types for logstage.

This module defines the enums used across the staging pipeline.
"""

from __future__ import annotations

from enum import Enum


class EntryKind(str, Enum):
    """Classification of a log file found during a directory scan.

    A symbolic link is always SYMLINK, whatever its extension.
    """

    PLAIN = "plain"
    SYMLINK = "symlink"
    COMPRESSED = "compressed"


class TransferState(str, Enum):
    """Progress of a transfer run.

    Runs move linearly through the states in declaration order.
    FAILED replaces the remaining states when a phase raises.
    """

    START = "start"
    LOCAL_RESOLVED = "local_resolved"
    STAGED = "staged"
    COMPRESSED = "compressed"
    REMOTE_DELIVERED = "remote_delivered"
    CLEANED_UP = "cleaned_up"
    FAILED = "failed"
