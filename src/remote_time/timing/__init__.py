"""
Timestamp acquisition and selection for remote-time.

HTTP Date probing, closest-pair consensus and the monotonic running estimate.
"""

from .consensus import rank_pairs, best_pair, select_estimate
from .http_date import HeadClient, RequestsHeadClient, parse_http_date, probe_source
from .running_estimate import RunningEstimate

__all__ = [
    'rank_pairs', 'best_pair', 'select_estimate',
    'HeadClient', 'RequestsHeadClient', 'parse_http_date', 'probe_source',
    'RunningEstimate',
]
