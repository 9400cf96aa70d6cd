"""
Configuration data models.

This module contains the configuration structures for the statistics
pipeline, the repository and cluster identity, as loaded from `config.toml`.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..config.storage_config import StorageConfig

DEFAULT_SAMPLING_INTERVAL = 10.0
DEFAULT_WINDOW_INTERVAL = 15 * 60.0

# Bucket boundaries for the client distributions. Request, queue and total
# time share one table.
DEFAULT_BYTES_SENT_CUTS = [250.0, 1000.0, 2000.0, 5000.0, 10000.0]
DEFAULT_BYTES_RECEIVED_CUTS = [250.0, 1000.0, 2000.0, 5000.0, 10000.0]
DEFAULT_REQUEST_TIME_CUTS = [0.01, 0.05, 0.1, 0.2, 0.5, 1.0]


@dataclass
class CutPoints:
    """The fixed cut-point tables used to bucket client distributions."""

    bytes_sent: List[float] = field(default_factory=lambda: list(DEFAULT_BYTES_SENT_CUTS))
    bytes_received: List[float] = field(
        default_factory=lambda: list(DEFAULT_BYTES_RECEIVED_CUTS)
    )
    request_time: List[float] = field(default_factory=lambda: list(DEFAULT_REQUEST_TIME_CUTS))


@dataclass
class StatisticsConfig:
    """
    Configuration for the sampling and windowing jobs, loaded from the
    `[statistics]` section of `config.toml`.
    """

    # Seconds between two raw samples.
    sampling_interval: float = DEFAULT_SAMPLING_INTERVAL
    # Seconds covered by one window sample.
    window_interval: float = DEFAULT_WINDOW_INTERVAL
    cuts: CutPoints = field(default_factory=CutPoints)


@dataclass
class ClusterConfig:
    """
    Cluster membership settings, loaded from `[cluster]`.

    When disabled the process runs standalone: records carry no node identity
    and store queries are not filtered by it.
    """

    enabled: bool = False
    node_id: Optional[str] = None


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    statistics: StatisticsConfig = field(default_factory=StatisticsConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    # Name of the root log level, e.g. "INFO".
    log_level: str = "INFO"
