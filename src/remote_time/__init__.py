"""
remote-time: Wall-clock estimate from HTTP Date headers

This package estimates the current time by asking several well-known,
highly available web servers for their Date header, for use where NTP is
blocked or undesired. It is harder to spoof than any single source and its
answers never go backward within a process.

Each call:
    1. Sends concurrent HEAD requests to every configured source
    2. Waits for a quorum of 3 answers, at most 2 seconds
    3. Picks the earlier member of the two closest timestamps
    4. Clamps the pick so it never precedes a previously returned value

Failure returns ZERO_TIME rather than raising:

    import remote_time

    now = remote_time.now()
    if remote_time.is_zero(now):
        ...  # time unavailable, try again later

Version: 1.0.0
"""

__version__ = "1.0.0"

from .config import EstimatorConfig, DEFAULT_SOURCES, load_config
from .engine.estimator import RemoteTimeEstimator, now
from .interfaces.estimate_result import (
    ZERO_TIME,
    is_zero,
    EstimateResult,
    EstimateStatus,
    ProbeResult,
    TimestampPair,
)
from .timing.running_estimate import RunningEstimate

__all__ = [
    "now",
    "RemoteTimeEstimator",
    "RunningEstimate",
    "EstimatorConfig",
    "DEFAULT_SOURCES",
    "load_config",
    "ZERO_TIME",
    "is_zero",
    "EstimateResult",
    "EstimateStatus",
    "ProbeResult",
    "TimestampPair",
    "__version__",
]
