"""
Monotonic running estimate.

Holds the most recent timestamp returned to any caller and guarantees that
values handed out never move backward, however much the sources jitter or
however concurrent calls interleave. The lock here is independent of any
polling round's condition; the two are never held together.
"""

from datetime import datetime
from typing import Optional
import logging
import threading

logger = logging.getLogger(__name__)


class RunningEstimate:
    """Process-lifetime, lock-guarded, non-decreasing timestamp."""

    def __init__(self, initial: Optional[datetime] = None):
        self._lock = threading.Lock()
        self._value: Optional[datetime] = initial

    @property
    def current(self) -> Optional[datetime]:
        """Last returned value, or None before the first success."""
        with self._lock:
            return self._value

    def advance(self, candidate: datetime) -> datetime:
        """
        Offer a new candidate and return the value the caller should see.

        A strictly later candidate replaces the running value. An equal or
        earlier one leaves it unchanged, and the existing value is returned.
        """
        with self._lock:
            if self._value is None or candidate > self._value:
                self._value = candidate
            else:
                logger.debug(
                    f"Candidate {candidate.isoformat()} does not advance "
                    f"{self._value.isoformat()}; holding"
                )
            return self._value

    def reset(self):
        """Forget the running value. Intended for tests only."""
        with self._lock:
            self._value = None
