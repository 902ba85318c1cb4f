"""
Configuration for remote-time.

The source list is policy, not mechanism: the compiled-in defaults are nine
widely deployed, highly available domains, and any of them can be replaced
from a TOML file or by constructing EstimatorConfig directly.

Example config.toml:

    [sources]
    hosts = ["google.com", "amazon.com", "microsoft.com"]

    [polling]
    quorum = 3
    request_timeout = 2.0
    deadline = 2.0
    scheme = "https"
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple
import logging

import toml

logger = logging.getLogger(__name__)

DEFAULT_SOURCES: Tuple[str, ...] = (
    "facebook.com", "microsoft.com", "amazon.com", "google.com",
    "youtube.com", "twitter.com", "reddit.com", "netflix.com",
    "bing.com",
)

MIN_QUORUM = 3
DEFAULT_TIMEOUT_S = 2.0


@dataclass(frozen=True)
class EstimatorConfig:
    """
    Settings for one RemoteTimeEstimator.

    Attributes:
        sources: Hostnames to poll, in order
        quorum: Results required before selection may proceed (>= 3)
        request_timeout: Per-request HEAD timeout in seconds
        deadline: Global wait from call start before giving up, in seconds
        scheme: URL scheme prepended to each hostname
    """
    sources: Tuple[str, ...] = DEFAULT_SOURCES
    quorum: int = MIN_QUORUM
    request_timeout: float = DEFAULT_TIMEOUT_S
    deadline: float = DEFAULT_TIMEOUT_S
    scheme: str = "https"

    def __post_init__(self):
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, 'sources', tuple(self.sources))

        if not self.sources:
            raise ValueError("At least one source is required")
        if any(not isinstance(s, str) or not s.strip() for s in self.sources):
            raise ValueError(f"Sources must be non-empty hostnames, got {list(self.sources)}")
        if self.quorum < MIN_QUORUM:
            raise ValueError(f"Quorum must be at least {MIN_QUORUM}, got {self.quorum}")
        if self.request_timeout <= 0:
            raise ValueError(f"Request timeout must be positive, got {self.request_timeout}")
        if self.deadline <= 0:
            raise ValueError(f"Deadline must be positive, got {self.deadline}")
        if self.scheme not in ("http", "https"):
            raise ValueError(f"Scheme must be 'http' or 'https', got {self.scheme!r}")

        if self.quorum > len(self.sources):
            logger.warning(
                f"Quorum {self.quorum} exceeds {len(self.sources)} configured sources; "
                f"every estimate will fail"
            )

    def url_for(self, source: str) -> str:
        """Build the request URL for a hostname."""
        return f"{self.scheme}://{source}"

    def with_sources(self, sources: Sequence[str]) -> "EstimatorConfig":
        """Copy of this config with a replaced source list."""
        return EstimatorConfig(
            sources=tuple(sources),
            quorum=self.quorum,
            request_timeout=self.request_timeout,
            deadline=self.deadline,
            scheme=self.scheme,
        )


def config_from_dict(config: Dict[str, Any]) -> EstimatorConfig:
    """Build an EstimatorConfig from a parsed TOML mapping."""
    sources_config = config.get('sources', {})
    # [sources] hosts = [...] or a bare top-level list
    if isinstance(sources_config, dict):
        hosts = sources_config.get('hosts', DEFAULT_SOURCES)
    elif isinstance(sources_config, list):
        hosts = sources_config
    else:
        hosts = DEFAULT_SOURCES

    polling = config.get('polling', {})
    if not isinstance(polling, dict):
        raise ValueError(f"[polling] must be a table, got {polling!r}")
    return EstimatorConfig(
        sources=tuple(hosts),
        quorum=int(polling.get('quorum', MIN_QUORUM)),
        request_timeout=float(polling.get('request_timeout', DEFAULT_TIMEOUT_S)),
        deadline=float(polling.get('deadline', DEFAULT_TIMEOUT_S)),
        scheme=polling.get('scheme', 'https'),
    )


def load_config(config_path: Optional[str] = None) -> EstimatorConfig:
    """Load configuration from TOML file, falling back to defaults."""
    if config_path and Path(config_path).exists():
        with open(config_path, 'r') as f:
            config = config_from_dict(toml.load(f))
        logger.info(f"Loaded config from {config_path}: {len(config.sources)} sources")
        return config

    if config_path:
        logger.warning(f"Config file not found: {config_path} - using defaults")
    return EstimatorConfig()
