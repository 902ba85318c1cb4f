"""
Closest-pair consensus selection.

Given the timestamps collected in one polling round, every unordered pair is
scored by the absolute difference between its members. The pair with the
smallest difference wins; ties go to the pair whose earlier member is
chronologically earliest. The estimate is the earlier member of the winning
pair.

Differences are computed on integer microseconds so that equal separations
compare exactly equal and the tie-break is reproducible.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Sequence, Tuple

import numpy as np

from ..interfaces.estimate_result import TimestampPair

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_US = timedelta(microseconds=1)


def _as_utc(t: datetime) -> datetime:
    # Naive values are taken to be UTC
    return t.replace(tzinfo=timezone.utc) if t.tzinfo is None else t


def _to_microseconds(timestamps: Sequence[datetime]) -> np.ndarray:
    return np.array([(_as_utc(t) - _EPOCH) // _ONE_US for t in timestamps], dtype=np.int64)


def _ranked_indices(timestamps: Sequence[datetime]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Index pairs (earlier, later) ordered best-first, with their differences.
    """
    if len(timestamps) < 2:
        raise ValueError(f"Need at least 2 timestamps to form a pair, got {len(timestamps)}")

    us = _to_microseconds(timestamps)
    i, j = np.triu_indices(len(us), k=1)

    # Orient each pair so the first index holds the earlier timestamp
    swap = us[i] > us[j]
    earlier = np.where(swap, j, i)
    later = np.where(swap, i, j)
    diff = us[later] - us[earlier]

    # lexsort: last key is primary
    order = np.lexsort((us[earlier], diff))
    return earlier[order], later[order], diff[order]


def rank_pairs(timestamps: Sequence[datetime]) -> List[TimestampPair]:
    """
    All unordered pairs, closest first.

    Raises:
        ValueError: if fewer than 2 timestamps are given
    """
    earlier, later, diff = _ranked_indices(timestamps)
    return [
        TimestampPair(
            earlier=timestamps[e],
            later=timestamps[lt],
            difference=timedelta(microseconds=int(d)),
        )
        for e, lt, d in zip(earlier, later, diff)
    ]


def best_pair(timestamps: Sequence[datetime]) -> TimestampPair:
    """The closest pair, with the deterministic earliest-member tie-break."""
    earlier, later, diff = _ranked_indices(timestamps)
    return TimestampPair(
        earlier=timestamps[int(earlier[0])],
        later=timestamps[int(later[0])],
        difference=timedelta(microseconds=int(diff[0])),
    )


def select_estimate(timestamps: Sequence[datetime]) -> datetime:
    """
    Pick the consensus estimate: earlier member of the closest pair.

    Example:
        >>> T = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> select_estimate([T + timedelta(seconds=10), T + timedelta(seconds=1), T]) == T
        True
    """
    return best_pair(timestamps).earlier
