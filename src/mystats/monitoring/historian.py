"""
The two periodic historian jobs.

Historian takes one raw sample per tick and, when the previous raw sample of
the same node is recent enough, derives and stores a per-second sample.
HistorianAverage folds the per-second samples written since the last window
into one window sample.

Both jobs are best-effort telemetry: a tick never raises. Every tick returns
a TickResult describing what happened, and the optional ``on_tick`` hook
receives the same result.
"""

import logging
import time
from typing import Callable, Optional

from ..collectors.base import AbstractMetricsSource
from ..models.config import CutPoints, DEFAULT_SAMPLING_INTERVAL, DEFAULT_WINDOW_INTERVAL
from ..models.results import SkipReason, TickResult, TickStatus
from ..models.samples import RawSample, RecordKind
from ..statistics import compute_per_seconds, compute_window, explain_rejection
from ..storage.base import SampleRepository
from ..validation import ErrorSeverity, handle_error

logger = logging.getLogger(__name__)

TickHook = Callable[[TickResult], None]


def _notify(hook: Optional[TickHook], result: TickResult) -> TickResult:
    """Pass ``result`` to the hook; a failing hook is logged and ignored."""
    if hook is not None:
        try:
            hook(result)
        except Exception as e:
            logger.warning(f"on_tick hook raised for {result.job} tick: {e}", exc_info=True)
    return result


class Historian:
    """
    One raw-sampling job.

    Example:
        historian = Historian(repository, PsutilMetricsSource(stats))
        result = historian.tick()
    """

    job_name = "historian"

    def __init__(
        self,
        repository: SampleRepository,
        metrics_source: AbstractMetricsSource,
        node_id: Optional[str] = None,
        sampling_interval: float = DEFAULT_SAMPLING_INTERVAL,
        cuts: Optional[CutPoints] = None,
        clock: Callable[[], float] = time.time,
        on_tick: Optional[TickHook] = None,
    ):
        """
        Args:
            repository: Store receiving raw and per-second records
            metrics_source: Source of the instantaneous runtime figures
            node_id: Identity of this node, or None when standalone
            sampling_interval: Seconds between two ticks
            cuts: Cut-point tables for the client distributions
            clock: Returns the current time in seconds
            on_tick: Called with the TickResult of every tick
        """
        self.repository = repository
        self.metrics_source = metrics_source
        self.node_id = node_id
        self.sampling_interval = sampling_interval
        self.cuts = cuts or CutPoints()
        self.on_tick = on_tick
        self._clock = clock

    def tick(self) -> TickResult:
        now = self._clock()
        result = TickResult(job=self.job_name, status=TickStatus.SUCCESS, time=now)

        try:
            previous = self.repository.most_recent_at_or_after(
                RecordKind.RAW, now - 2 * self.sampling_interval, self.node_id
            )

            metrics = self.metrics_source.current_process_metrics()
            raw = RawSample.from_metrics(now, metrics, node_id=self.node_id)
            self.repository.append(RecordKind.RAW, raw)
            result.records.append(raw)

            if previous is None:
                result.status = TickStatus.SKIPPED
                result.reason = SkipReason.NO_PREVIOUS_SAMPLE
            else:
                per_second = compute_per_seconds(raw, previous, self.sampling_interval, self.cuts)
                if per_second is None:
                    result.status = TickStatus.SKIPPED
                    result.reason = explain_rejection(raw, previous, self.sampling_interval)
                else:
                    per_second.node_id = self.node_id
                    self.repository.append(RecordKind.PER_SECOND, per_second)
                    result.records.append(per_second)

        except Exception as e:
            handle_error(
                error=e,
                context=f"historian tick at {now}",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger,
            )
            result.status = TickStatus.FAILED
            result.reason = f"{type(e).__name__}: {e}"
            result.error = e
            return _notify(self.on_tick, result)

        if result.status is TickStatus.SKIPPED:
            logger.debug(f"Historian tick at {now} stored raw sample only ({result.reason})")
        else:
            logger.debug(f"Historian tick at {now} stored raw and per-second samples")
        return _notify(self.on_tick, result)


class HistorianAverage:
    """
    One windowing job.

    The window starts where the previous window ended. Without a recent
    previous window it starts ``window_interval`` seconds ago.
    """

    job_name = "average"

    def __init__(
        self,
        repository: SampleRepository,
        node_id: Optional[str] = None,
        window_interval: float = DEFAULT_WINDOW_INTERVAL,
        clock: Callable[[], float] = time.time,
        on_tick: Optional[TickHook] = None,
    ):
        self.repository = repository
        self.node_id = node_id
        self.window_interval = window_interval
        self.on_tick = on_tick
        self._clock = clock

    def window_start(self, now: float) -> float:
        """Return the start of the window closed at ``now``."""
        previous = self.repository.most_recent_at_or_after(
            RecordKind.WINDOW, now - 2 * self.window_interval, self.node_id
        )
        if previous is None or previous.time is None:
            return now - self.window_interval
        return previous.time

    def tick(self) -> TickResult:
        now = self._clock()
        result = TickResult(job=self.job_name, status=TickStatus.SUCCESS, time=now)

        try:
            since = self.window_start(now)
            samples = self.repository.all_at_or_after(
                RecordKind.PER_SECOND, since, self.node_id
            )
            window = compute_window(samples, since)

            if window.time is None:
                result.status = TickStatus.SKIPPED
                result.reason = SkipReason.EMPTY_WINDOW
            else:
                window.node_id = self.node_id
                self.repository.append(RecordKind.WINDOW, window)
                result.records.append(window)

        except Exception as e:
            handle_error(
                error=e,
                context=f"window tick at {now}",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger,
            )
            result.status = TickStatus.FAILED
            result.reason = f"{type(e).__name__}: {e}"
            result.error = e
            return _notify(self.on_tick, result)

        if result.ok:
            logger.debug(f"Window tick at {now} averaged {len(samples)} samples since {since}")
        else:
            logger.debug(f"Window tick at {now} found no per-second samples since {since}")
        return _notify(self.on_tick, result)
