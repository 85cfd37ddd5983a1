"""Staging area and association pulls.

This module provides:
- pull_associations: Copy an association map under a destination root
- compress_file: gzip a file in place
- StagingArea: Ephemeral directory where logs are compressed before delivery

Usage:
    with StagingArea.create(config) as staging:
        staging.pull(associate(local, AssociationStrategy.LOCAL))
        staging.compress()
        pull_associations(remote_root, staging.associations())
"""

from __future__ import annotations

import gzip
import logging
import shutil
import tempfile
from pathlib import Path
from types import TracebackType

from logstage.core.config import TransferConfig
from logstage.stage.association import AssociationMap, AssociationStrategy, associate
from logstage.stage.catalog import COMPRESSED_EXTENSION, Directory
from logstage.stage.deadline import Deadline
from logstage.stage.types import CompressionError, CopyError, ResourceError

logger = logging.getLogger(__name__)

STAGING_PREFIX = "logstage-"

# Everything copied into the area is a log, whatever the configured patterns
STAGED_PATTERNS = ("*",)


def pull_associations(
    root: Path,
    associations: AssociationMap,
    deadline: Deadline | None = None,
) -> list[Path]:
    """Copy every associated entry to root/name.

    Parent directories are created as needed and existing files are
    overwritten. The first failure aborts the pull.

    Args:
        root: Destination root directory.
        associations: Relative name -> source entry.
        deadline: Optional budget checked before each file.

    Returns:
        Destination paths in association order.

    Raises:
        CopyError: If any copy fails.
        StageTimeoutError: If the deadline passes.
    """
    destination_root = Directory(root)
    written: list[Path] = []
    for name, entry in associations.items():
        if deadline:
            deadline.check()
        destination = destination_root.join(name)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            if entry.path.is_dir():
                shutil.copytree(entry.path, destination, dirs_exist_ok=True)
            else:
                shutil.copy2(entry.path, destination)
        except OSError as e:
            logger.error(f"Failed to copy {entry.path} to {destination}: {e}")
            raise CopyError(entry.path, destination, str(e)) from e
        logger.debug(f"Copied {entry.path} -> {destination}")
        written.append(destination)

    logger.info(f"Pulled {len(written)} files into {root}")
    return written


def compressed_name(path: Path) -> Path:
    """Path of the gzip copy of a file."""
    return path.with_name(path.name + COMPRESSED_EXTENSION)


def compress_file(path: Path, level: int) -> Path:
    """Replace a file with a gzip-compressed copy carrying the .gz suffix.

    An existing file with the compressed name is never overwritten.

    Args:
        path: File to compress.
        level: gzip compression level.

    Returns:
        Path of the compressed file.

    Raises:
        CompressionError: If the compressed name is taken, or reading,
            writing or removing fails.
    """
    compressed = compressed_name(path)
    if compressed.exists():
        raise CompressionError(f"Refusing to overwrite existing {compressed}")

    created = False
    try:
        with path.open("rb") as f_in, gzip.open(compressed, "xb", compresslevel=level) as f_out:
            created = True
            shutil.copyfileobj(f_in, f_out)
        shutil.copystat(path, compressed)
        path.unlink()
    except OSError as e:
        if created:
            compressed.unlink(missing_ok=True)
        raise CompressionError(f"Failed to compress {path}: {e}") from e
    return compressed


def _tree_lines(path: Path, prefix: str, lines: list[str]) -> tuple[int, int]:
    """Append tree-drawing lines for path's children, returning (dirs, files)."""
    children = sorted(path.iterdir(), key=lambda child: child.name)
    dir_count = 0
    file_count = 0
    for index, child in enumerate(children):
        last = index == len(children) - 1
        lines.append(f"{prefix}{'└── ' if last else '├── '}{child.name}")
        if child.is_dir() and not child.is_symlink():
            dirs, files = _tree_lines(child, prefix + ("    " if last else "│   "), lines)
            dir_count += 1 + dirs
            file_count += files
        else:
            file_count += 1
    return dir_count, file_count


class StagingArea:
    """Transient directory where logs are compressed before delivery.

    The area owns its directory: destroy() removes it and everything in it.
    Every file present is staged, with no link or target filtering.
    """

    def __init__(self, root: Path, config: TransferConfig | None = None) -> None:
        """Wrap an existing, empty directory.

        Args:
            root: Directory to use as the staging root.
            config: Transfer configuration.
        """
        self._config = config or TransferConfig()
        self._directory = Directory(root, STAGED_PATTERNS)

    @classmethod
    def create(cls, config: TransferConfig | None = None) -> StagingArea:
        """Allocate a new, uniquely named staging directory.

        Raises:
            ResourceError: If the directory cannot be created.
        """
        config = config or TransferConfig()
        try:
            root = tempfile.mkdtemp(prefix=STAGING_PREFIX, dir=config.temp_dir)
        except OSError as e:
            raise ResourceError(f"Cannot create staging directory: {e}") from e
        logger.info(f"Created staging area {root}")
        return cls(Path(root), config)

    @property
    def root(self) -> Path:
        """Staging root directory."""
        return self._directory.root

    @property
    def exists(self) -> bool:
        """Check if the staging directory is still present."""
        return self.root.is_dir()

    def __enter__(self) -> StagingArea:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.destroy()

    def pull(self, associations: AssociationMap, deadline: Deadline | None = None) -> list[Path]:
        """Copy associated entries into the staging area.

        Raises:
            CopyError: On the first failed copy.
        """
        return pull_associations(self.root, associations, deadline)

    def compress(self, deadline: Deadline | None = None) -> list[Path]:
        """Compress every staged file not already compressed.

        Already compressed files are left untouched, so running this twice
        yields the same file set. A file whose compressed name is already
        taken stays uncompressed, as with gzip(1), and both are delivered.

        Returns:
            Paths of the newly compressed files.

        Raises:
            CompressionError: If a file cannot be compressed.
        """
        compressed: list[Path] = []
        for entry in self._directory.entries:
            if entry.is_compressed:
                continue
            taken = compressed_name(entry.path)
            if taken.exists():
                logger.warning(f"Leaving {entry.path} uncompressed: {taken.name} already exists")
                continue
            if deadline:
                deadline.check()
            compressed.append(compress_file(entry.path, self._config.compress_level))
            logger.debug(f"Compressed {entry.path}")

        logger.info(f"Compressed {len(compressed)} staged files")
        return compressed

    def associations(self) -> AssociationMap:
        """Relative name -> entry for every file currently staged."""
        return associate(self._directory, AssociationStrategy.RAW)

    def listing(self) -> list[str]:
        """Tree-style listing of the staging directory for audit output."""
        lines = [str(self.root)]
        if not self.exists:
            return lines

        dir_count, file_count = _tree_lines(self.root, "", lines)
        lines.append("")
        lines.append(f"{dir_count} directories, {file_count} files")
        return lines

    def destroy(self) -> None:
        """Remove the staging directory and everything under it.

        Safe to call on a partly populated or already removed area.

        Raises:
            ResourceError: If removal fails.
        """
        if not self.exists:
            logger.debug(f"Staging area already removed: {self.root}")
            return
        try:
            shutil.rmtree(self.root)
        except OSError as e:
            logger.error(f"Failed to remove staging area {self.root}: {e}")
            raise ResourceError(f"Cannot remove staging directory {self.root}: {e}") from e
        logger.info(f"Removed staging area {self.root}")
