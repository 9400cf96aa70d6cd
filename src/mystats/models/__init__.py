"""
Data models and structures for the statistics historian.

This module provides the data models used throughout the application,
organized by their functional purpose:

Sample Models:
- Raw snapshots of process, HTTP and client counters
- Per-second rates and average times derived from two snapshots
- Window averages rolled up from many per-second samples
- Distributions and the cumulative accumulators they come from

Configuration Models:
- Sampling and window intervals, cut-point tables
- Repository and cluster identity settings

Result Models:
- Tick outcomes reported by the historian jobs

All models use type hints and dataclasses for better code clarity and
IDE support.
"""

# Sample models
from .samples import (
    ClientDistributions,
    ClientRates,
    ClientStats,
    Distribution,
    DistributionAccumulator,
    HttpRates,
    HttpStats,
    PerSecondSample,
    RawSample,
    RecordKind,
    RuntimeMetrics,
    ServerStats,
    SystemRates,
    SystemStats,
    WindowSample,
    record_from_dict,
)

# Configuration models
from .config import AppConfig, ClusterConfig, CutPoints, StatisticsConfig

# Result models
from .results import SkipReason, TickResult, TickStatus

__all__ = [
    # Samples
    "ClientDistributions",
    "ClientRates",
    "ClientStats",
    "Distribution",
    "DistributionAccumulator",
    "HttpRates",
    "HttpStats",
    "PerSecondSample",
    "RawSample",
    "RecordKind",
    "RuntimeMetrics",
    "ServerStats",
    "SystemRates",
    "SystemStats",
    "WindowSample",
    "record_from_dict",
    # Configuration
    "AppConfig",
    "ClusterConfig",
    "CutPoints",
    "StatisticsConfig",
    # Results
    "SkipReason",
    "TickResult",
    "TickStatus",
]
