"""
Statistics runner for CLI integration.

This module wires the configured repository, metrics source and node
identity into the historian jobs and runs them, either once or on the
scheduler until shutdown is requested.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

from ..collectors import AbstractMetricsSource, create_metrics_source
from ..models.config import AppConfig
from ..models.results import TickResult
from ..monitoring import Historian, HistorianAverage, HistorianScheduler
from ..storage import SampleRepository, create_repository
from ..system import resolve_node_identity

logger = logging.getLogger(__name__)


class StatisticsRunner:
    """
    Builds the historian jobs from the application configuration.

    The node identity is resolved once here and injected into both jobs.
    """

    def __init__(
        self,
        app_config: AppConfig,
        repository: Optional[SampleRepository] = None,
        metrics_source: Optional[AbstractMetricsSource] = None,
        clock: Callable[[], float] = time.time,
        on_tick: Optional[Callable[[TickResult], None]] = None,
    ):
        """
        Initialize the runner.

        Args:
            app_config: Loaded application configuration
            repository: Repository to use instead of the configured one
            metrics_source: Metrics source to use instead of the psutil one
            clock: Returns the current time in seconds
            on_tick: Hook receiving every TickResult
        """
        stats_config = app_config.statistics
        self.app_config = app_config
        self.node_id = resolve_node_identity(app_config.cluster)
        self.repository = repository or create_repository(app_config.storage)
        self.metrics_source = metrics_source or create_metrics_source(app_config)

        self.historian = Historian(
            self.repository,
            self.metrics_source,
            node_id=self.node_id,
            sampling_interval=stats_config.sampling_interval,
            cuts=stats_config.cuts,
            clock=clock,
            on_tick=on_tick,
        )
        self.average = HistorianAverage(
            self.repository,
            node_id=self.node_id,
            window_interval=stats_config.window_interval,
            clock=clock,
            on_tick=on_tick,
        )
        self.scheduler: Optional[HistorianScheduler] = None
        self.shutdown_requested = False
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def sample_once(self) -> TickResult:
        return self.historian.tick()

    def average_once(self) -> TickResult:
        return self.average.tick()

    def request_shutdown(self) -> None:
        """Ask a running scheduler to stop; thread-safe."""
        self.shutdown_requested = True
        scheduler = self.scheduler
        loop = self._loop
        if scheduler is not None and loop is not None:
            loop.call_soon_threadsafe(scheduler.request_stop)

    async def run_async(self, duration: Optional[float] = None) -> None:
        """
        Run both jobs until shutdown is requested or ``duration`` elapses.

        Args:
            duration: Seconds to run; None runs until request_shutdown()
        """
        stats_config = self.app_config.statistics
        self._loop = asyncio.get_running_loop()
        self.scheduler = HistorianScheduler(
            self.historian,
            self.average,
            sampling_interval=stats_config.sampling_interval,
            window_interval=stats_config.window_interval,
        )
        node_desc = self.node_id or "standalone"
        logger.info(f"Starting statistics historian ({node_desc})")

        try:
            await self.scheduler.start()
            if self.shutdown_requested:
                self.scheduler.request_stop()
            if duration is None:
                await self.scheduler.run_forever()
            else:
                try:
                    await asyncio.wait_for(self.scheduler.run_forever(), timeout=duration)
                except asyncio.TimeoutError:
                    logger.info(f"Run duration of {duration}s reached")
        finally:
            await self.scheduler.stop()
            self.scheduler = None
            self._loop = None

    def run(self, duration: Optional[float] = None) -> None:
        asyncio.run(self.run_async(duration))
