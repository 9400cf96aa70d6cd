"""
Runtime metrics source backed by the 'psutil' library.

This module provides the PsutilMetricsSource class, which reads the resource
figures of the current process (page faults, CPU times, resident and virtual
memory, thread count, uptime) and combines them with the request counters
kept by a RequestStatistics registry.
"""

import logging
import os
import resource
import time
from typing import Callable, Optional

import psutil

from ..models.samples import RuntimeMetrics, ServerStats, SystemStats
from ..validation import MetricsSourceError
from .base import AbstractMetricsSource
from .request_stats import RequestStatistics

logger = logging.getLogger(__name__)


class PsutilMetricsSource(AbstractMetricsSource):
    """
    Reads process metrics with psutil and request metrics from a registry.

    Page faults come from ``resource.getrusage`` because psutil does not
    expose them portably on Linux. The uptime is measured from the process
    creation time so that a restarted process always reports a smaller value.

    Attributes:
        request_stats: Registry the host server reports requests to.
        pid: PID of the observed process (the current one by default).
    """

    def __init__(
        self,
        request_stats: Optional[RequestStatistics] = None,
        pid: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.request_stats = request_stats or RequestStatistics()
        self._clock = clock
        try:
            self._process = psutil.Process(pid)
            self._create_time = self._process.create_time()
        except psutil.Error as e:
            raise MetricsSourceError(f"cannot attach to process {pid}: {e}") from e
        self.pid = self._process.pid
        logger.debug(f"PsutilMetricsSource attached to PID {self.pid}")

    def _page_faults(self):
        # getrusage only reports on the calling process.
        if self.pid != os.getpid():
            return 0, 0
        usage = resource.getrusage(resource.RUSAGE_SELF)
        return usage.ru_minflt, usage.ru_majflt

    def _system_stats(self) -> SystemStats:
        with self._process.oneshot():
            cpu = self._process.cpu_times()
            mem = self._process.memory_info()
            mem_percent = self._process.memory_percent()
            threads = self._process.num_threads()
        minor, major = self._page_faults()
        return SystemStats(
            minor_page_faults=minor,
            major_page_faults=major,
            user_time=cpu.user,
            system_time=cpu.system,
            resident_size=mem.rss,
            resident_size_percent=mem_percent / 100.0,
            virtual_size=mem.vms,
            number_of_threads=threads,
        )

    def current_process_metrics(self) -> RuntimeMetrics:
        try:
            system = self._system_stats()
        except (psutil.Error, OSError) as e:
            raise MetricsSourceError(
                f"cannot read metrics of process {self.pid}: {e}"
            ) from e

        return RuntimeMetrics(
            system=system,
            http=self.request_stats.http_snapshot(),
            client=self.request_stats.client_snapshot(),
            server=ServerStats(uptime=max(0.0, self._clock() - self._create_time)),
        )
