"""
Factory for the runtime metrics source.
"""

import logging
from typing import Optional

from ..models.config import AppConfig
from .base import AbstractMetricsSource
from .request_stats import RequestStatistics

logger = logging.getLogger(__name__)


def create_metrics_source(
    config: AppConfig, request_stats: Optional[RequestStatistics] = None
) -> AbstractMetricsSource:
    """
    Create the metrics source for the current process.

    Args:
        config: Loaded application configuration
        request_stats: Registry fed by the host server; a fresh one using the
            configured cut points is created when omitted

    Returns:
        AbstractMetricsSource instance
    """
    from .psutil_source import PsutilMetricsSource

    if request_stats is None:
        request_stats = RequestStatistics(config.statistics.cuts)
    logger.info("Creating PsutilMetricsSource for the current process")
    return PsutilMetricsSource(request_stats)
