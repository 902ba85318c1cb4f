"""
HTTP Date header probing.

A probe sends one HEAD request to a source and reads the server-reported
time from the `Date` response header. Only headers are needed, so no body
is transferred. Redirects are not followed; a 301/302 response is terminal
and its Date header is read like any other.

Probe failures of any kind (connection errors, timeouts, a missing header,
an unparseable date) are absorbed here and reported as None. Only the
aggregate count of successful probes matters to the caller.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Mapping, Optional
import logging
import re
import time

import requests

from ..interfaces.estimate_result import ProbeResult

logger = logging.getLogger(__name__)

# RFC 1123 HTTP-date, e.g. "Sun, 06 Nov 1994 08:49:37 GMT".
# Day and month names are matched in English regardless of LC_TIME.
HTTP_DATE_PATTERN = re.compile(
    r"^(Mon|Tue|Wed|Thu|Fri|Sat|Sun), \d{2} "
    r"(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec) "
    r"\d{4} \d{2}:\d{2}:\d{2} GMT$"
)


class HeadClient(ABC):
    """
    Minimal transport interface: fetch response headers for a URL.

    Implementations raise on transport failure and return the headers of
    whatever response was received otherwise, including redirects and
    error statuses.
    """

    @abstractmethod
    def head(self, url: str) -> Mapping[str, str]:
        """Return response headers for url, raising on transport failure."""
        pass


class RequestsHeadClient(HeadClient):
    """HeadClient backed by requests, with a per-request timeout."""

    def __init__(self, timeout: float = 2.0):
        self.timeout = timeout

    def head(self, url: str) -> Mapping[str, str]:
        # Context manager releases the connection back to the pool
        with requests.head(url, timeout=self.timeout, allow_redirects=False) as response:
            return response.headers


def parse_http_date(value: str) -> datetime:
    """
    Parse an RFC 1123 HTTP-date into an aware UTC datetime.

    Raises:
        ValueError: if the value does not match the format
    """
    value = value.strip()
    if not HTTP_DATE_PATTERN.match(value):
        raise ValueError(f"Not an RFC 1123 date: {value!r}")
    # Out-of-range fields (day 32, hour 25) raise ValueError here
    return parsedate_to_datetime(value).astimezone(timezone.utc)


def probe_source(client: HeadClient, source: str, url: str) -> Optional[ProbeResult]:
    """
    Query one source for its time.

    Args:
        client: Transport used for the HEAD request
        source: Hostname, recorded on the result
        url: Full URL to request

    Returns:
        ProbeResult on success, None on any failure
    """
    start = time.monotonic()
    try:
        headers = client.head(url)
    except requests.RequestException as e:
        logger.debug(f"Probe {source} failed: {e}")
        return None
    except OSError as e:
        logger.debug(f"Probe {source} socket error: {e}")
        return None
    except Exception as e:
        # Injected transports may raise anything; a probe never propagates
        logger.debug(f"Probe {source} transport error: {e}", exc_info=True)
        return None
    elapsed = time.monotonic() - start

    date_value = headers.get('Date') if hasattr(headers, 'get') else None
    if not date_value or not isinstance(date_value, str):
        logger.debug(f"Probe {source}: no Date header")
        return None

    try:
        timestamp = parse_http_date(date_value)
    except ValueError:
        logger.debug(f"Probe {source}: unparseable Date header {date_value!r}")
        return None

    logger.debug(f"Probe {source}: {timestamp.isoformat()} ({elapsed * 1000:.0f} ms)")
    return ProbeResult(source=source, timestamp=timestamp, elapsed_s=elapsed)
