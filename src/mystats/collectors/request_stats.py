"""
In-process request statistics registry.

The host server reports every finished request and every connection change
here; the metrics source snapshots the registry on each sampling tick. All
figures are cumulative since the registry was created, which matches the
lifetime of the server process.
"""

import bisect
import logging
import threading
from typing import List, Optional, Sequence

from ..models.config import CutPoints
from ..models.samples import ClientStats, DistributionAccumulator, HttpStats

logger = logging.getLogger(__name__)

# HTTP verbs with a dedicated counter; anything else counts as "other".
KNOWN_METHODS = ("GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")


class DistributionCounter:
    """
    A cumulative histogram over fixed cut points.

    A value lands in bucket ``i`` where ``i`` is the number of cuts that are
    less than or equal to it, so bucket 0 holds values below the first cut
    and the last bucket holds values at or above the last cut.

    Not thread-safe on its own; RequestStatistics guards it.
    """

    def __init__(self, cuts: Sequence[float]):
        self.cuts: List[float] = list(cuts)
        self.sum = 0.0
        self.count = 0
        self.counts = [0] * (len(self.cuts) + 1)

    def add(self, value: float) -> None:
        self.sum += value
        self.count += 1
        self.counts[bisect.bisect_right(self.cuts, value)] += 1

    def snapshot(self) -> DistributionAccumulator:
        return DistributionAccumulator(sum=self.sum, count=self.count, counts=list(self.counts))


class RequestStatistics:
    """
    Thread-safe cumulative request counters and client distributions.

    Example:
        stats = RequestStatistics()
        stats.connection_opened()
        stats.record_request("GET", bytes_sent=512, bytes_received=128,
                             total_time=0.02, request_time=0.015, queue_time=0.001)
        stats.connection_closed()
    """

    def __init__(self, cuts: Optional[CutPoints] = None):
        cuts = cuts or CutPoints()
        self._lock = threading.Lock()
        self._http = HttpStats()
        self._connections = 0
        self._bytes_sent = DistributionCounter(cuts.bytes_sent)
        self._bytes_received = DistributionCounter(cuts.bytes_received)
        self._total_time = DistributionCounter(cuts.request_time)
        self._request_time = DistributionCounter(cuts.request_time)
        self._queue_time = DistributionCounter(cuts.request_time)

    def record_request(
        self,
        method: str,
        bytes_sent: float = 0,
        bytes_received: float = 0,
        total_time: float = 0.0,
        request_time: float = 0.0,
        queue_time: float = 0.0,
        is_async: bool = False,
    ) -> None:
        """
        Count one finished request.

        Args:
            method: HTTP verb; unknown verbs are counted as "other"
            bytes_sent: Response size in bytes
            bytes_received: Request size in bytes
            total_time: Seconds from accept to response written
            request_time: Seconds spent handling the request
            queue_time: Seconds the request waited before handling
            is_async: Whether the request was executed asynchronously
        """
        verb = (method or "").upper()
        with self._lock:
            self._http.requests_total += 1
            if is_async:
                self._http.requests_async += 1
            if verb in KNOWN_METHODS:
                attr = f"requests_{verb.lower()}"
                setattr(self._http, attr, getattr(self._http, attr) + 1)
            else:
                self._http.requests_other += 1

            self._bytes_sent.add(bytes_sent)
            self._bytes_received.add(bytes_received)
            self._total_time.add(total_time)
            self._request_time.add(request_time)
            self._queue_time.add(queue_time)

    def connection_opened(self) -> None:
        with self._lock:
            self._connections += 1

    def connection_closed(self) -> None:
        with self._lock:
            if self._connections == 0:
                logger.warning("connection_closed() called with no open connections")
                return
            self._connections -= 1

    def http_snapshot(self) -> HttpStats:
        with self._lock:
            return HttpStats(**vars(self._http))

    def client_snapshot(self) -> ClientStats:
        with self._lock:
            return ClientStats(
                http_connections=self._connections,
                bytes_sent=self._bytes_sent.snapshot(),
                bytes_received=self._bytes_received.snapshot(),
                total_time=self._total_time.snapshot(),
                request_time=self._request_time.snapshot(),
                queue_time=self._queue_time.snapshot(),
            )
