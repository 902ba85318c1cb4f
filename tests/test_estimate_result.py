"""
Unit tests for result contracts and the failure sentinel.
"""

import json
from datetime import datetime, timedelta


class TestSentinel:
    """Test ZERO_TIME handling."""

    def test_zero_time_is_zero(self):
        from remote_time.interfaces.estimate_result import ZERO_TIME, is_zero

        assert is_zero(ZERO_TIME)
        assert is_zero(None)
        assert is_zero(datetime.min)

    def test_real_time_is_not_zero(self, base_time):
        from remote_time.interfaces.estimate_result import is_zero

        assert not is_zero(base_time)

    def test_zero_time_precedes_everything(self, base_time):
        from remote_time.interfaces.estimate_result import ZERO_TIME

        assert ZERO_TIME < base_time


class TestEstimateResult:
    """Test EstimateResult serialization."""

    def test_default_is_failure(self):
        from remote_time.interfaces.estimate_result import EstimateResult, EstimateStatus, ZERO_TIME

        result = EstimateResult()
        assert result.status == EstimateStatus.NO_QUORUM
        assert result.value == ZERO_TIME
        assert not result.ok
        assert not result.clamped

    def test_failure_json(self):
        from remote_time.interfaces.estimate_result import EstimateResult

        data = json.loads(EstimateResult(sources_polled=9).to_json())
        assert data['status'] == 'NO_QUORUM'
        assert data['value'] is None
        assert data['sources_polled'] == 9
        assert data['sources_responded'] == 0
        assert 'best_pair' not in data

    def test_success_json(self, base_time):
        from remote_time.interfaces.estimate_result import (
            EstimateResult, EstimateStatus, ProbeResult, TimestampPair,
        )

        probes = [
            ProbeResult('a.example', base_time, 0.05),
            ProbeResult('b.example', base_time + timedelta(seconds=1), 0.07),
            ProbeResult('c.example', base_time + timedelta(seconds=10), 0.09),
        ]
        result = EstimateResult(
            status=EstimateStatus.OK,
            value=base_time,
            candidate=base_time,
            probes=probes,
            best_pair=TimestampPair(base_time, base_time + timedelta(seconds=1), timedelta(seconds=1)),
            sources_polled=3,
        )
        data = json.loads(result.to_json())

        assert data['status'] == 'OK'
        assert data['value'] == base_time.isoformat()
        assert data['sources_responded'] == 3
        assert data['best_pair']['difference_s'] == 1.0
        assert data['probes'][2]['source'] == 'c.example'
