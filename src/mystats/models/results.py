"""
Tick outcome models.

Every historian tick reports what it did as a TickResult instead of silently
swallowing errors. A tick that could not derive a record is SKIPPED with a
reason; a tick that hit an environment problem (store or metrics source
unavailable) is FAILED and carries the exception. Neither case is propagated
to the scheduler: telemetry is best-effort and the next tick tries again.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class TickStatus(Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


class SkipReason:
    """Reason strings used for SKIPPED ticks."""

    NO_PREVIOUS_SAMPLE = "no_previous_sample"
    STALE = "stale"
    RESTART = "restart"
    NON_POSITIVE_INTERVAL = "non_positive_interval"
    EMPTY_WINDOW = "empty_window"


@dataclass
class TickResult:
    """
    The outcome of one Historian or HistorianAverage tick.

    Attributes:
        job: Name of the job that produced the result ("historian" or "average").
        status: SUCCESS, SKIPPED or FAILED.
        time: Clock reading at the start of the tick.
        reason: Skip reason or a short failure description.
        records: Records appended during the tick, in append order.
        error: The caught exception for FAILED ticks.
    """

    job: str
    status: TickStatus
    time: float
    reason: Optional[str] = None
    records: List[Any] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status is TickStatus.SUCCESS

    @property
    def failed(self) -> bool:
        return self.status is TickStatus.FAILED
