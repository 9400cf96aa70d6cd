"""
Asynchronous scheduling of the historian jobs.

This module provides the HistorianScheduler that runs the sampling job and
the windowing job on independent fixed intervals. Each tick executes in a
worker thread so blocking repository I/O never stalls the event loop.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from ..models.config import DEFAULT_SAMPLING_INTERVAL, DEFAULT_WINDOW_INTERVAL
from ..models.results import TickResult
from ..validation import ErrorSeverity, handle_error
from .historian import Historian, HistorianAverage

logger = logging.getLogger(__name__)


class HistorianScheduler:
    """
    Runs a Historian and a HistorianAverage until stopped.

    The next tick of a job is only scheduled after its previous tick has
    finished, so the two jobs never overlap with themselves but may overlap
    with each other.

    Example:
        async with HistorianScheduler(historian, average) as scheduler:
            await asyncio.sleep(60)
    """

    def __init__(
        self,
        historian: Historian,
        average: HistorianAverage,
        sampling_interval: float = DEFAULT_SAMPLING_INTERVAL,
        window_interval: float = DEFAULT_WINDOW_INTERVAL,
    ):
        """
        Initialize the scheduler.

        Args:
            historian: The raw-sampling job
            average: The windowing job
            sampling_interval: Seconds between two historian ticks
            window_interval: Seconds between two window ticks
        """
        self.historian = historian
        self.average = average
        self.sampling_interval = sampling_interval
        self.window_interval = window_interval
        self.executor: Optional[ThreadPoolExecutor] = None
        self.tasks: List[asyncio.Task] = []
        self.is_running = False
        self.tick_counts = {historian.job_name: 0, average.job_name: 0}
        self._shutdown_event = asyncio.Event()

    async def start(self) -> None:
        """
        Start both job loops.

        Raises:
            RuntimeError: If the scheduler is already running
        """
        if self.is_running:
            raise RuntimeError("HistorianScheduler is already running")

        self._shutdown_event.clear()
        # One worker per job; each job runs at most one tick at a time.
        self.executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="Historian")
        self.tasks = [
            asyncio.create_task(
                self._run_job(self.historian, self.sampling_interval),
                name=f"{self.historian.job_name}-loop",
            ),
            asyncio.create_task(
                self._run_job(self.average, self.window_interval),
                name=f"{self.average.job_name}-loop",
            ),
        ]
        self.is_running = True
        logger.info(
            f"Started historian every {self.sampling_interval}s and "
            f"window averaging every {self.window_interval}s"
        )

    async def stop(self) -> None:
        """
        Signal both loops to stop and wait for any running tick to finish.
        """
        if not self.is_running:
            logger.debug("Scheduler not running - nothing to stop")
            return

        self._shutdown_event.set()
        self.is_running = False

        if self.tasks:
            await asyncio.gather(*self.tasks, return_exceptions=True)
        self.tasks.clear()

        if self.executor:
            try:
                self.executor.shutdown(wait=True)
            except Exception as e:
                logger.warning(f"Error shutting down executor: {e}")
            finally:
                self.executor = None

        logger.info(
            f"Scheduler stopped after {self.tick_counts[self.historian.job_name]} historian "
            f"and {self.tick_counts[self.average.job_name]} window ticks"
        )

    async def run_forever(self) -> None:
        """
        Start the loops if needed and block until stop() is requested.
        """
        if not self.is_running:
            await self.start()
        try:
            await self._shutdown_event.wait()
        finally:
            await self.stop()

    def request_stop(self) -> None:
        """
        Ask the loops to stop without awaiting them; safe to call from a
        signal handler running on the event loop.
        """
        self._shutdown_event.set()

    async def __aenter__(self) -> "HistorianScheduler":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def _run_job(self, job, interval: float) -> None:
        job_logger = logging.getLogger(f"{__name__}.{job.job_name}")
        job_logger.debug(f"{job.job_name} loop started")

        try:
            while not self._shutdown_event.is_set():
                try:
                    # Wait for either shutdown or the next tick
                    await asyncio.wait_for(self._shutdown_event.wait(), timeout=interval)
                    break
                except asyncio.TimeoutError:
                    await self._tick(job)
        except Exception as e:
            handle_error(
                error=e,
                context=f"{job.job_name} loop",
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=job_logger,
            )
        finally:
            job_logger.debug(f"{job.job_name} loop exiting")

    async def _tick(self, job) -> Optional[TickResult]:
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(self.executor, job.tick)
        self.tick_counts[job.job_name] += 1
        return result
