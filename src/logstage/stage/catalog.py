"""Log file catalog for a directory tree.

This module provides:
- LogEntry: A log file path with its classification and link target
- Directory: A read-only view of the log files beneath a root
- list_logs: Sorted listing of log files matching a set of patterns
- resolve_link: Symbolic link resolution (single hop or full chain)

Directory properties hit the filesystem on every access, so a view always
reflects the current state of its root.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from logstage.core.config import DEFAULT_PATTERNS
from logstage.core.types import EntryKind
from logstage.stage.types import AccessError, NotFoundError, ResolveError

logger = logging.getLogger(__name__)

COMPRESSED_EXTENSION = ".gz"


def absolute(path: str | os.PathLike[str]) -> Path:
    """Expand and normalize a path without dereferencing symlinks."""
    return Path(os.path.abspath(os.path.expanduser(os.fspath(path))))


def is_hidden(name: str) -> bool:
    """Check if a file or directory name is a dotfile."""
    return name.startswith(".")


def matches(name: str, patterns: Iterable[str]) -> bool:
    """Check if a file name matches any of the log patterns.

    Dotfiles never match, as with a shell glob.
    """
    return not is_hidden(name) and any(fnmatch.fnmatch(name, pattern) for pattern in patterns)


def list_logs(root: Path, patterns: Iterable[str] = DEFAULT_PATTERNS) -> list[Path]:
    """List log files at any depth under root, sorted by full path.

    Symbolic links are listed like files, including links to directories
    and dangling links. Real directories are never listed. Hidden files and
    directories are skipped. Unreadable subdirectories are skipped with a
    warning.

    Args:
        root: Absolute directory to scan.
        patterns: File name patterns identifying log files.

    Returns:
        Absolute paths in lexicographic order.

    Raises:
        NotFoundError: If root does not exist or is not a directory.
        AccessError: If root itself cannot be read.
    """
    patterns = tuple(patterns)
    if not root.is_dir():
        raise NotFoundError(root)

    def on_error(error: OSError) -> None:
        if error.filename is not None and Path(error.filename) == root:
            raise AccessError(root, error.strerror or str(error)) from error
        logger.warning(f"Skipping unreadable directory {error.filename}: {error.strerror}")

    found: list[Path] = []
    # os.walk does not descend into symlinked directories (followlinks=False)
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = [name for name in dirnames if not is_hidden(name)]
        linked_dirs = [name for name in dirnames if os.path.islink(os.path.join(dirpath, name))]
        for name in filenames + linked_dirs:
            if matches(name, patterns):
                found.append(Path(dirpath, name))

    found.sort(key=str)
    logger.debug(f"Found {len(found)} log files under {root}")
    return found


def resolve_link(path: Path, follow_chains: bool = False) -> Path:
    """Resolve a symbolic link to an absolute path.

    The stored link text is joined to the link's own directory and
    normalized. Only one hop is taken unless follow_chains is set, in
    which case resolution continues until a non-link is reached.

    Args:
        path: Absolute path of a symbolic link.
        follow_chains: Keep resolving while the result is itself a link.

    Returns:
        Absolute, normalized target path.

    Raises:
        ValueError: If path is not a symbolic link.
        ResolveError: If a chain of links loops back on itself.
    """
    if not os.path.islink(path):
        raise ValueError(f"Not a symbolic link: {path}")

    seen = {path}
    target = _read_link(path)
    while follow_chains and os.path.islink(target):
        if target in seen:
            raise ResolveError(f"Symbolic link cycle through {target}")
        seen.add(target)
        target = _read_link(target)
    return target


def _read_link(path: Path) -> Path:
    """Resolve one hop of a link relative to the link's directory."""
    stored = os.readlink(path)
    return Path(os.path.normpath(os.path.join(os.path.dirname(path), stored)))


@dataclass(frozen=True)
class LogEntry:
    """A log file found during a directory scan.

    Attributes:
        path: Absolute path of the file (or link).
        follow_chains: How the link target is resolved.
    """

    path: Path
    follow_chains: bool = False

    @property
    def is_link(self) -> bool:
        """Check if the entry is a symbolic link."""
        return os.path.islink(self.path)

    @property
    def is_compressed(self) -> bool:
        """Check if the entry carries the compressed extension."""
        return self.path.suffix.lower() == COMPRESSED_EXTENSION

    @property
    def kind(self) -> EntryKind:
        """Classify the entry."""
        if self.is_link:
            return EntryKind.SYMLINK
        if self.is_compressed:
            return EntryKind.COMPRESSED
        return EntryKind.PLAIN

    @property
    def target(self) -> Path:
        """Resolved link target, or the entry's own path for regular files."""
        if self.is_link:
            return resolve_link(self.path, self.follow_chains)
        return self.path


@dataclass
class Directory:
    """A read-only view of the log files beneath a root directory.

    Attributes:
        root: Absolute root path (normalized on construction).
        patterns: File name patterns identifying log files.
        follow_chains: Passed on to every entry for link resolution.
    """

    root: Path
    patterns: tuple[str, ...] = field(default=DEFAULT_PATTERNS)
    follow_chains: bool = False

    def __post_init__(self) -> None:
        """Normalize the root path."""
        self.root = absolute(self.root)
        self.patterns = tuple(self.patterns)

    @property
    def files(self) -> list[Path]:
        """Current log file paths under the root, sorted."""
        return list_logs(self.root, self.patterns)

    @property
    def entries(self) -> list[LogEntry]:
        """Current log files under the root as entries."""
        return [LogEntry(path, self.follow_chains) for path in self.files]

    def relative_name(self, path: Path) -> str:
        """Strip the root prefix from a path, keeping the leading separator."""
        return os.sep + os.path.relpath(path, self.root)

    def join(self, name: str) -> Path:
        """Place a relative name under the root."""
        return self.root / name.lstrip(os.sep)
