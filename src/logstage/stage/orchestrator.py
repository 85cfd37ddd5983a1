"""Transfer orchestration: local -> staging -> remote.

Architecture:
    Local Directory → associate(LOCAL) → StagingArea.pull → compress
        → StagingArea.associations → pull_associations(remote)

    The orchestrator owns the staging area for the whole run. Its listing is
    echoed and the directory removed on every exit path, including failures.

State machine:
    START → LOCAL_RESOLVED → STAGED → COMPRESSED → REMOTE_DELIVERED → CLEANED_UP
    A failing phase moves the run to FAILED; cleanup still runs and the
    error is re-raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from logstage.core.config import TransferConfig
from logstage.core.types import TransferState
from logstage.stage.association import AssociationStrategy, associate
from logstage.stage.catalog import Directory
from logstage.stage.deadline import Deadline
from logstage.stage.staging import StagingArea, pull_associations
from logstage.stage.types import TransferResult

logger = logging.getLogger(__name__)


class TransferOrchestrator:
    """Sequences the local, staging and remote pulls of one transfer run.

    Usage:
        orchestrator = TransferOrchestrator(local_path, remote_path, config)
        result = orchestrator.run()
    """

    def __init__(
        self,
        local_root: Path | str,
        remote_root: Path | str,
        config: TransferConfig | None = None,
        echo: Callable[[str], None] = print,
    ) -> None:
        """Initialize the orchestrator. No filesystem access happens here.

        Args:
            local_root: Directory holding the rotated logs.
            remote_root: Directory receiving the compressed logs.
            config: Transfer configuration.
            echo: Sink for the staging audit listing.
        """
        self._config = config or TransferConfig()
        self._echo = echo
        self.local = Directory(local_root, self._config.patterns, self._config.follow_link_chains)
        self.remote = Directory(remote_root, self._config.patterns, self._config.follow_link_chains)
        self._state = TransferState.START

    @property
    def state(self) -> TransferState:
        """Get current transfer state."""
        return self._state

    def _advance(self, state: TransferState) -> None:
        logger.debug(f"Transfer state: {self._state.value} -> {state.value}")
        self._state = state

    def run(self) -> TransferResult:
        """Run one transfer.

        Returns:
            TransferResult with delivered names and the staging listing.

        Raises:
            StageError: If any phase fails (after cleanup has run).
        """
        self._state = TransferState.START
        staging = StagingArea.create(self._config)
        result = TransferResult()

        try:
            result.delivered = self._transfer(staging)
        except Exception as e:
            logger.error(f"Transfer from {self.local.root} to {self.remote.root} failed: {e}")
            self._state = TransferState.FAILED
            raise
        finally:
            result.listing = self._cleanup(staging)

        self._advance(TransferState.CLEANED_UP)
        result.state = self._state
        logger.info(f"Delivered {len(result.delivered)} files to {self.remote.root}")
        return result

    def _transfer(self, staging: StagingArea) -> list[str]:
        local_associations = associate(self.local, AssociationStrategy.LOCAL)
        self._advance(TransferState.LOCAL_RESOLVED)

        staging.pull(local_associations, Deadline("staging pull", self._config.copy_timeout))
        self._advance(TransferState.STAGED)

        staging.compress(Deadline("compression", self._config.compress_timeout))
        self._advance(TransferState.COMPRESSED)

        staged = staging.associations()
        pull_associations(
            self.remote.root, staged, Deadline("remote pull", self._config.copy_timeout)
        )
        self._advance(TransferState.REMOTE_DELIVERED)
        return list(staged)

    def _cleanup(self, staging: StagingArea) -> list[str]:
        listing: list[str] = []
        deadline = Deadline("cleanup", self._config.cleanup_timeout)
        try:
            listing = staging.listing()
            self._echo("\n".join(listing))
        finally:
            staging.destroy()
        if deadline.expired:
            logger.warning(
                f"Cleanup of {staging.root} took {deadline.elapsed:.1f}s "
                f"(limit {self._config.cleanup_timeout:.1f}s)"
            )
        return listing
