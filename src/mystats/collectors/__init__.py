"""
Runtime metrics sources.

A metrics source reports the instantaneous process, HTTP, client and server
figures of the observed server. The default source combines psutil process
metrics with an in-process RequestStatistics registry that the host server
feeds on every request.
"""

from .base import AbstractMetricsSource
from .factory import create_metrics_source
from .psutil_source import PsutilMetricsSource
from .request_stats import DistributionCounter, RequestStatistics

__all__ = [
    "AbstractMetricsSource",
    "DistributionCounter",
    "PsutilMetricsSource",
    "RequestStatistics",
    "create_metrics_source",
]
