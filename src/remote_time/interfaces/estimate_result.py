"""
Estimate Result Data Models

These dataclasses define the contract between remote-time and its callers.
A single polling round produces one EstimateResult carrying the returned
value plus the probe results it was derived from, so callers can log or
inspect how an estimate was reached.

Failure is signalled by ZERO_TIME, never by an exception. Callers that only
want a timestamp should test it with is_zero() before use:

    now = remote_time.now()
    if is_zero(now):
        ...  # time unavailable, try again later
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional
import json


# Sentinel returned when no estimate could be made
ZERO_TIME = datetime.min.replace(tzinfo=timezone.utc)


def is_zero(value: Optional[datetime]) -> bool:
    """True if value is the failure sentinel (or missing)."""
    if value is None:
        return True
    if value.tzinfo is None:
        return value == datetime.min
    return value == ZERO_TIME


class EstimateStatus(str, Enum):
    """Outcome of one polling round."""
    OK = "OK"                  # Quorum reached, estimate returned
    NO_QUORUM = "NO_QUORUM"    # Deadline elapsed before quorum


@dataclass(frozen=True)
class ProbeResult:
    """
    One timestamp reported by one source.

    Every source carries equal weight; there is no per-source scoring.
    """
    source: str                # Hostname the Date header came from
    timestamp: datetime        # Parsed server time (aware, UTC)
    elapsed_s: float = 0.0     # Round trip of the HEAD request

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "timestamp": self.timestamp.isoformat(),
            "elapsed_s": self.elapsed_s,
        }


@dataclass(frozen=True)
class TimestampPair:
    """Two probe timestamps ordered chronologically, with their separation."""
    earlier: datetime
    later: datetime
    difference: timedelta

    def to_dict(self) -> dict:
        return {
            "earlier": self.earlier.isoformat(),
            "later": self.later.isoformat(),
            "difference_s": self.difference.total_seconds(),
        }


@dataclass
class EstimateResult:
    """
    Complete result of one estimation call.

    `value` is what the caller receives: the monotonic running estimate on
    success, ZERO_TIME on failure. `candidate` is the raw consensus pick
    before clamping, which may be earlier than `value` when sources lag a
    previously returned estimate.
    """
    status: EstimateStatus = EstimateStatus.NO_QUORUM
    value: datetime = ZERO_TIME
    candidate: Optional[datetime] = None

    probes: List[ProbeResult] = field(default_factory=list)
    best_pair: Optional[TimestampPair] = None

    quorum: int = 3
    sources_polled: int = 0
    elapsed_s: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status == EstimateStatus.OK

    @property
    def clamped(self) -> bool:
        """True if the running estimate held back a non-advancing candidate."""
        return self.ok and self.candidate is not None and self.candidate < self.value

    def to_dict(self) -> dict:
        data = {
            "status": self.status.value,
            "value": None if is_zero(self.value) else self.value.isoformat(),
            "quorum": self.quorum,
            "sources_polled": self.sources_polled,
            "sources_responded": len(self.probes),
            "elapsed_s": self.elapsed_s,
            "probes": [p.to_dict() for p in self.probes],
        }
        if self.candidate is not None:
            data["candidate"] = self.candidate.isoformat()
        if self.best_pair is not None:
            data["best_pair"] = self.best_pair.to_dict()
        return data

    def to_json(self) -> str:
        """Serialize to JSON for logging or diagnostics."""
        return json.dumps(self.to_dict(), indent=2)
