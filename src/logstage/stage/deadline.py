"""Phase deadlines for blocking staging operations.

Copy and compression run file by file in the calling thread, so a deadline
is checked between files rather than interrupting a file mid-write.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from logstage.stage.types import StageTimeoutError


@dataclass
class Deadline:
    """Time budget for one phase.

    Attributes:
        phase: Phase name used in errors and log messages.
        timeout: Allowed duration in seconds (None = unlimited).
    """

    phase: str
    timeout: float | None = None
    started: float = field(default_factory=time.monotonic)

    @property
    def elapsed(self) -> float:
        """Seconds since the phase started."""
        return time.monotonic() - self.started

    @property
    def expired(self) -> bool:
        """Check if the budget is used up."""
        return self.timeout is not None and self.elapsed > self.timeout

    def check(self) -> None:
        """Raise if the budget is used up.

        Raises:
            StageTimeoutError: If the deadline has passed.
        """
        if self.timeout is not None and self.expired:
            raise StageTimeoutError(self.phase, self.timeout)
