"""
Defines the abstract interface for runtime metrics sources.

A metrics source answers one question: what are the process, HTTP, client
and server figures right now? The Historian calls it once per sampling tick
and stamps the answer with the tick time.
"""

import logging
from abc import ABC, abstractmethod

from ..models.samples import RuntimeMetrics

logger = logging.getLogger(__name__)


class AbstractMetricsSource(ABC):
    """
    Abstract base class for runtime metrics sources.

    Implementations must return cumulative counters that only reset when the
    process restarts, and must report the process uptime so restarts can be
    detected downstream.
    """

    @abstractmethod
    def current_process_metrics(self) -> RuntimeMetrics:
        """
        Read the instantaneous runtime figures.

        Returns:
            RuntimeMetrics with the system, http, client and server blocks

        Raises:
            MetricsSourceError: If the figures cannot be read
        """
        pass
