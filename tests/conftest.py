"""
Pytest configuration and fixtures for remote-time tests.
"""

import pytest
import sys
import threading
from datetime import datetime, timezone
from email.utils import format_datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))


class FakeHeadClient:
    """
    Scripted HeadClient.

    `responses` maps URL to one of:
        datetime  - served as a Date header
        str       - served verbatim as the Date header
        dict      - served as the full header mapping
        Exception - raised from head()
    Unknown URLs raise ConnectionError. A URL listed in `blocked` waits on
    `release` before answering, simulating a hung server.
    """

    def __init__(self, responses, blocked=(), release=None):
        self.responses = dict(responses)
        self.blocked = set(blocked)
        self.release = release or threading.Event()
        self.calls = []
        self._lock = threading.Lock()

    def head(self, url):
        with self._lock:
            self.calls.append(url)
        if url in self.blocked:
            self.release.wait(timeout=10)
        response = self.responses.get(url, ConnectionError(f"no route to {url}"))
        if isinstance(response, Exception):
            raise response
        if isinstance(response, datetime):
            return {'Date': format_datetime(response.astimezone(timezone.utc), usegmt=True)}
        if isinstance(response, str):
            return {'Date': response}
        return response


@pytest.fixture
def base_time():
    """Fixed reference instant (whole seconds, as HTTP dates carry)."""
    return datetime(2024, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fake_client_factory():
    """Build FakeHeadClient instances, releasing any hung probes afterwards."""
    clients = []

    def make(responses, blocked=()):
        client = FakeHeadClient(responses, blocked=blocked)
        clients.append(client)
        return client

    yield make

    for client in clients:
        client.release.set()
