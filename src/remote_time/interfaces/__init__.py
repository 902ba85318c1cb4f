"""Result contracts returned by remote-time."""

from .estimate_result import (
    ZERO_TIME,
    is_zero,
    EstimateStatus,
    ProbeResult,
    TimestampPair,
    EstimateResult,
)

__all__ = [
    'ZERO_TIME', 'is_zero', 'EstimateStatus',
    'ProbeResult', 'TimestampPair', 'EstimateResult',
]
