"""
Per-call result collection and quorum/timeout coordination.

A PollRound lives for exactly one estimation call. Probe threads append to
it and notify; a deadline watcher timer flips `timed_out` and notifies; the
calling thread sleeps in wait_for_quorum() and re-checks both conditions on
every wake-up. Quorum is checked first, so a quorum that is already observed
wins over a deadline that fired at the same moment.

Once the caller returns the round is closed. Probes that finish later are
dropped on the floor: their results are never observed.
"""

from typing import List, Optional
import logging
import threading

from ..interfaces.estimate_result import ProbeResult

logger = logging.getLogger(__name__)


class PollRound:
    """Shared state for one polling round."""

    def __init__(self, quorum: int, deadline: float):
        """
        Args:
            quorum: Number of results that ends the wait successfully
            deadline: Seconds from start() until the round times out
        """
        self.quorum = quorum
        self.deadline = deadline

        self._cond = threading.Condition(threading.Lock())
        self._results: List[ProbeResult] = []
        self._timed_out = False
        self._closed = False
        self._late_results = 0

        self._timer: Optional[threading.Timer] = None

    def start(self):
        """Start the deadline watcher."""
        self._timer = threading.Timer(self.deadline, self._expire)
        self._timer.name = "PollRoundDeadline"
        self._timer.daemon = True
        self._timer.start()

    def _expire(self):
        with self._cond:
            self._timed_out = True
            self._cond.notify_all()

    def add(self, result: ProbeResult) -> bool:
        """
        Publish a probe result. Returns False if the round already ended.
        """
        with self._cond:
            if self._closed:
                self._late_results += 1
                return False
            self._results.append(result)
            self._cond.notify_all()
            return True

    @property
    def timed_out(self) -> bool:
        with self._cond:
            return self._timed_out

    @property
    def late_results(self) -> int:
        """Results that arrived after the round was closed."""
        with self._cond:
            return self._late_results

    def wait_for_quorum(self) -> Optional[List[ProbeResult]]:
        """
        Block until quorum or deadline.

        Returns:
            Snapshot of collected results if quorum was reached, else None
        """
        try:
            with self._cond:
                while True:
                    if len(self._results) >= self.quorum:
                        self._closed = True
                        return list(self._results)
                    if self._timed_out:
                        self._closed = True
                        logger.debug(
                            f"Deadline after {self.deadline}s with "
                            f"{len(self._results)}/{self.quorum} results"
                        )
                        return None
                    # Spurious wake-ups fall through to the re-check above
                    self._cond.wait()
        finally:
            if self._timer is not None:
                self._timer.cancel()
