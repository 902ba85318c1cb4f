"""
Remote Time Estimator

Estimates current wall-clock time from the Date headers of a set of
independent, highly available web servers. Used where NTP is blocked or
undesired, and where a single HTTP source would be too easy to spoof.

================================================================================
ONE CALL
================================================================================
    caller ──▶ fan out one probe thread per source
                    │
                    ▼
              PollRound: wait until quorum (3) or deadline (2 s)
                    │
          ┌─────────┴──────────┐
          ▼                    ▼
     quorum reached        timed out
          │                    │
     closest pair          ZERO_TIME
          │
     monotonic clamp
          │
          ▼
     running estimate (never goes backward)

Probe threads that are still running when the call returns are abandoned.
They close their own responses and their results are discarded.

Usage:
    estimator = RemoteTimeEstimator()
    now = estimator.now()
    if is_zero(now):
        ...  # time unavailable
"""

from datetime import datetime
from typing import Optional
import logging
import threading
import time

from ..config import EstimatorConfig
from ..interfaces.estimate_result import (
    ZERO_TIME,
    EstimateResult,
    EstimateStatus,
)
from ..timing.consensus import best_pair
from ..timing.http_date import HeadClient, RequestsHeadClient, probe_source
from ..timing.running_estimate import RunningEstimate
from .poll_round import PollRound

logger = logging.getLogger(__name__)


class RemoteTimeEstimator:
    """
    Quorum-based remote time estimator.

    Each call performs exactly one polling round. Retry and backoff are the
    caller's business.
    """

    def __init__(
        self,
        config: Optional[EstimatorConfig] = None,
        client: Optional[HeadClient] = None,
        running_estimate: Optional[RunningEstimate] = None
    ):
        """
        Args:
            config: Sources, quorum and timeouts (default: EstimatorConfig())
            client: HEAD transport (default: requests with config timeout)
            running_estimate: Monotonic state, shareable between estimators
        """
        self.config = config or EstimatorConfig()
        self.client = client or RequestsHeadClient(timeout=self.config.request_timeout)
        self.running_estimate = running_estimate or RunningEstimate()

        self.stats = {
            'calls': 0,
            'successes': 0,
            'failures': 0,
            'clamped': 0,
        }
        self._stats_lock = threading.Lock()

        logger.info(
            f"RemoteTimeEstimator initialized: {len(self.config.sources)} sources, "
            f"quorum {self.config.quorum}, deadline {self.config.deadline}s"
        )

    def _launch_probes(self, poll_round: PollRound):
        """Start one daemon thread per source."""
        for source in self.config.sources:
            url = self.config.url_for(source)
            thread = threading.Thread(
                target=self._probe,
                args=(poll_round, source, url),
                name=f"Probe-{source}",
                daemon=True
            )
            thread.start()

    def _probe(self, poll_round: PollRound, source: str, url: str):
        try:
            result = probe_source(self.client, source, url)
        except Exception as e:
            logger.debug(f"Probe {source} failed unexpectedly: {e}", exc_info=True)
            return
        if result is not None and not poll_round.add(result):
            logger.debug(f"Late result from {source} discarded")

    def _count(self, key: str):
        with self._stats_lock:
            self.stats[key] += 1

    def estimate(self) -> EstimateResult:
        """
        Run one polling round and return the full result.

        Never raises for network conditions; failure is reported as
        EstimateStatus.NO_QUORUM with value ZERO_TIME.
        """
        start = time.monotonic()
        self._count('calls')

        poll_round = PollRound(quorum=self.config.quorum, deadline=self.config.deadline)
        poll_round.start()
        self._launch_probes(poll_round)

        probes = poll_round.wait_for_quorum()
        elapsed = time.monotonic() - start

        result = EstimateResult(
            quorum=self.config.quorum,
            sources_polled=len(self.config.sources),
            elapsed_s=elapsed,
        )

        if probes is None:
            self._count('failures')
            logger.warning(
                f"No quorum: fewer than {self.config.quorum} of "
                f"{len(self.config.sources)} sources answered within {self.config.deadline}s"
            )
            return result

        pair = best_pair([p.timestamp for p in probes])
        candidate = pair.earlier.astimezone()
        value = self.running_estimate.advance(candidate)

        result.status = EstimateStatus.OK
        result.value = value
        result.candidate = candidate
        result.probes = probes
        result.best_pair = pair

        self._count('successes')
        if result.clamped:
            self._count('clamped')

        logger.debug(
            f"Estimate {value.isoformat()} from {len(probes)} sources "
            f"(pair spread {pair.difference.total_seconds():.3f}s, {elapsed * 1000:.0f} ms)"
        )
        return result

    def now(self) -> datetime:
        """Current remote time, or ZERO_TIME if it could not be determined."""
        result = self.estimate()
        return result.value if result.ok else ZERO_TIME


_default_estimator: Optional[RemoteTimeEstimator] = None
_default_lock = threading.Lock()


def get_default_estimator() -> RemoteTimeEstimator:
    """Process-wide estimator shared by module-level now()."""
    global _default_estimator
    with _default_lock:
        if _default_estimator is None:
            _default_estimator = RemoteTimeEstimator()
        return _default_estimator


def set_default_estimator(estimator: Optional[RemoteTimeEstimator]):
    """Replace (or with None, clear) the process-wide estimator."""
    global _default_estimator
    with _default_lock:
        _default_estimator = estimator


def now() -> datetime:
    """
    Current remote time from the default estimator.

    Returns ZERO_TIME on failure; test with is_zero() after every call.
    """
    return get_default_estimator().now()
