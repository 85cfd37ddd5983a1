"""Tests for phase deadlines."""

import time

import pytest

from logstage.stage.deadline import Deadline
from logstage.stage.types import StageTimeoutError


class TestDeadline:
    """Tests for Deadline."""

    def test_unlimited_never_expires(self) -> None:
        """Should never expire without a timeout."""
        deadline = Deadline("copy", started=time.monotonic() - 1000)
        assert not deadline.expired
        deadline.check()

    def test_within_budget(self) -> None:
        """Should pass checks inside the budget."""
        deadline = Deadline("copy", timeout=60.0)
        assert not deadline.expired
        deadline.check()

    def test_expired_raises(self) -> None:
        """Should raise StageTimeoutError naming the phase."""
        deadline = Deadline("compression", timeout=2.0, started=time.monotonic() - 5)

        assert deadline.expired
        assert deadline.elapsed >= 5
        with pytest.raises(StageTimeoutError, match="compression exceeded its 2.0s deadline"):
            deadline.check()
