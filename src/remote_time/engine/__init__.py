"""Estimation engine - fans out probes and coordinates quorum.

Contains:
- RemoteTimeEstimator: one polling round per call, monotonic result
- PollRound: per-call result collection with deadline watcher
"""

from .estimator import RemoteTimeEstimator, get_default_estimator, set_default_estimator, now
from .poll_round import PollRound

__all__ = [
    'RemoteTimeEstimator', 'PollRound',
    'get_default_estimator', 'set_default_estimator', 'now',
]
