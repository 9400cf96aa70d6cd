"""
Statistics record data models.

This module defines the three record kinds produced by the historian pipeline
and the sub-structures they share:

- RawSample: one point-in-time snapshot of process, HTTP and client counters.
- PerSecondSample: rates and short-window averages between two raw samples.
- WindowSample: the mean of many per-second samples over a longer interval.

Each record converts to and from the persisted document shape with
``to_dict()`` / ``from_dict()``. The camelCase keys of those documents are the
wire contract that dashboards and history viewers read, so they must stay
stable even when the Python attribute names change.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional


class RecordKind(Enum):
    """The three append-only record streams kept by a repository."""

    RAW = "raw"
    PER_SECOND = "per_second"
    WINDOW = "window"


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _scalars_to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize the numeric fields of a flat dataclass using camelCase keys."""
    return {_to_camel(f.name): getattr(obj, f.name) for f in fields(obj)}


def _scalars_from_dict(cls, data: Optional[Dict[str, Any]]):
    """Build a flat dataclass from a camelCase document, defaulting missing keys to 0."""
    data = data or {}
    return cls(**{f.name: data.get(_to_camel(f.name), 0) for f in fields(cls)})


# --- Raw sample structures ---


@dataclass
class SystemStats:
    """Process resource figures. Page faults and CPU times are cumulative."""

    minor_page_faults: float = 0
    major_page_faults: float = 0
    user_time: float = 0.0
    system_time: float = 0.0
    resident_size: float = 0
    resident_size_percent: float = 0.0
    virtual_size: float = 0
    number_of_threads: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return _scalars_to_dict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SystemStats":
        return _scalars_from_dict(cls, data)


@dataclass
class HttpStats:
    """Cumulative request counters per HTTP verb."""

    requests_total: float = 0
    requests_async: float = 0
    requests_get: float = 0
    requests_head: float = 0
    requests_post: float = 0
    requests_put: float = 0
    requests_patch: float = 0
    requests_delete: float = 0
    requests_options: float = 0
    requests_other: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return _scalars_to_dict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "HttpStats":
        return _scalars_from_dict(cls, data)


@dataclass
class DistributionAccumulator:
    """
    A cumulative histogram of a metric since process start.

    Attributes:
        sum: Total of all observed values.
        count: Number of observations.
        counts: Observations per bucket; one entry per cut point plus one
            overflow bucket above the last cut.
    """

    sum: float = 0.0
    count: int = 0
    counts: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"sum": self.sum, "count": self.count, "counts": list(self.counts)}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DistributionAccumulator":
        data = data or {}
        return cls(
            sum=data.get("sum", 0.0),
            count=data.get("count", 0),
            counts=list(data.get("counts") or []),
        )


@dataclass
class ClientStats:
    """Connection gauge and the per-request distribution accumulators."""

    http_connections: float = 0
    bytes_sent: DistributionAccumulator = field(default_factory=DistributionAccumulator)
    bytes_received: DistributionAccumulator = field(default_factory=DistributionAccumulator)
    total_time: DistributionAccumulator = field(default_factory=DistributionAccumulator)
    request_time: DistributionAccumulator = field(default_factory=DistributionAccumulator)
    queue_time: DistributionAccumulator = field(default_factory=DistributionAccumulator)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "httpConnections": self.http_connections,
            "bytesSent": self.bytes_sent.to_dict(),
            "bytesReceived": self.bytes_received.to_dict(),
            "totalTime": self.total_time.to_dict(),
            "requestTime": self.request_time.to_dict(),
            "queueTime": self.queue_time.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ClientStats":
        data = data or {}
        return cls(
            http_connections=data.get("httpConnections", 0),
            bytes_sent=DistributionAccumulator.from_dict(data.get("bytesSent")),
            bytes_received=DistributionAccumulator.from_dict(data.get("bytesReceived")),
            total_time=DistributionAccumulator.from_dict(data.get("totalTime")),
            request_time=DistributionAccumulator.from_dict(data.get("requestTime")),
            queue_time=DistributionAccumulator.from_dict(data.get("queueTime")),
        )


@dataclass
class ServerStats:
    """Server-level figures; only the uptime is needed for restart detection."""

    uptime: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {"uptime": self.uptime}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ServerStats":
        return cls(uptime=(data or {}).get("uptime", 0.0))


@dataclass
class RuntimeMetrics:
    """The four blocks a metrics source reports in one instantaneous read."""

    system: SystemStats
    http: HttpStats
    client: ClientStats
    server: ServerStats


@dataclass
class RawSample:
    """One unprocessed metrics snapshot taken at ``time``."""

    time: float
    system: SystemStats = field(default_factory=SystemStats)
    http: HttpStats = field(default_factory=HttpStats)
    client: ClientStats = field(default_factory=ClientStats)
    server: ServerStats = field(default_factory=ServerStats)
    node_id: Optional[str] = None

    @classmethod
    def from_metrics(
        cls, time: float, metrics: RuntimeMetrics, node_id: Optional[str] = None
    ) -> "RawSample":
        return cls(
            time=time,
            system=metrics.system,
            http=metrics.http,
            client=metrics.client,
            server=metrics.server,
            node_id=node_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        doc = {
            "time": self.time,
            "system": self.system.to_dict(),
            "http": self.http.to_dict(),
            "client": self.client.to_dict(),
            "server": self.server.to_dict(),
        }
        if self.node_id is not None:
            doc["nodeId"] = self.node_id
        return doc

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawSample":
        return cls(
            time=data["time"],
            system=SystemStats.from_dict(data.get("system")),
            http=HttpStats.from_dict(data.get("http")),
            client=ClientStats.from_dict(data.get("client")),
            server=ServerStats.from_dict(data.get("server")),
            node_id=data.get("nodeId"),
        )


# --- Derived structures ---


@dataclass
class Distribution:
    """
    A normalized histogram: ``values[i]`` is the fraction of observations in
    bucket ``i``. There is one more value than there are cuts.
    """

    values: List[float]
    cuts: List[float]

    def to_dict(self) -> Dict[str, Any]:
        return {"values": list(self.values), "cuts": list(self.cuts)}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Distribution":
        data = data or {}
        return cls(values=list(data.get("values") or []), cuts=list(data.get("cuts") or []))


@dataclass
class SystemRates:
    minor_page_faults_per_second: float = 0.0
    major_page_faults_per_second: float = 0.0
    user_time_per_second: float = 0.0
    system_time_per_second: float = 0.0
    resident_size: float = 0.0
    resident_size_percent: float = 0.0
    virtual_size: float = 0.0
    number_of_threads: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return _scalars_to_dict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SystemRates":
        return _scalars_from_dict(cls, data)


@dataclass
class HttpRates:
    requests_total_per_second: float = 0.0
    requests_async_per_second: float = 0.0
    requests_get_per_second: float = 0.0
    requests_head_per_second: float = 0.0
    requests_post_per_second: float = 0.0
    requests_put_per_second: float = 0.0
    requests_patch_per_second: float = 0.0
    requests_delete_per_second: float = 0.0
    requests_options_per_second: float = 0.0
    requests_other_per_second: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return _scalars_to_dict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "HttpRates":
        return _scalars_from_dict(cls, data)


@dataclass
class ClientRates:
    """Scalar client figures shared by per-second and window records."""

    http_connections: float = 0.0
    bytes_sent_per_second: float = 0.0
    bytes_received_per_second: float = 0.0
    avg_total_time: float = 0.0
    avg_request_time: float = 0.0
    avg_queue_time: float = 0.0
    avg_io_time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return _scalars_to_dict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ClientRates":
        return _scalars_from_dict(cls, data)


@dataclass
class ClientDistributions:
    bytes_sent_percent: Distribution
    bytes_received_percent: Distribution
    total_time_percent: Distribution
    request_time_percent: Distribution
    queue_time_percent: Distribution

    def to_dict(self) -> Dict[str, Any]:
        return {_to_camel(f.name): getattr(self, f.name).to_dict() for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ClientDistributions":
        data = data or {}
        return cls(
            **{f.name: Distribution.from_dict(data.get(_to_camel(f.name))) for f in fields(cls)}
        )


@dataclass
class PerSecondSample:
    """Rates derived from two consecutive raw samples, stamped with the later time."""

    time: float
    system: SystemRates
    http: HttpRates
    client: ClientRates
    distributions: ClientDistributions
    node_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        # Distributions live inside the client block of the document.
        client = self.client.to_dict()
        client.update(self.distributions.to_dict())
        doc = {
            "time": self.time,
            "system": self.system.to_dict(),
            "http": self.http.to_dict(),
            "client": client,
        }
        if self.node_id is not None:
            doc["nodeId"] = self.node_id
        return doc

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PerSecondSample":
        client = data.get("client") or {}
        return cls(
            time=data["time"],
            system=SystemRates.from_dict(data.get("system")),
            http=HttpRates.from_dict(data.get("http")),
            client=ClientRates.from_dict(client),
            distributions=ClientDistributions.from_dict(client),
            node_id=data.get("nodeId"),
        )


@dataclass
class WindowSample:
    """
    Averages of the per-second samples folded into one window.

    ``time`` stays None when no per-second sample was available; such a
    window is not persisted.
    """

    time: Optional[float] = None
    system: SystemRates = field(default_factory=SystemRates)
    http: HttpRates = field(default_factory=HttpRates)
    client: ClientRates = field(default_factory=ClientRates)
    node_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        doc = {
            "time": self.time,
            "system": self.system.to_dict(),
            "http": self.http.to_dict(),
            "client": self.client.to_dict(),
        }
        if self.node_id is not None:
            doc["nodeId"] = self.node_id
        return doc

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WindowSample":
        return cls(
            time=data.get("time"),
            system=SystemRates.from_dict(data.get("system")),
            http=HttpRates.from_dict(data.get("http")),
            client=ClientRates.from_dict(data.get("client")),
            node_id=data.get("nodeId"),
        )


RECORD_TYPES = {
    RecordKind.RAW: RawSample,
    RecordKind.PER_SECOND: PerSecondSample,
    RecordKind.WINDOW: WindowSample,
}


def record_from_dict(kind: RecordKind, data: Dict[str, Any]):
    """Rebuild a typed record of ``kind`` from its persisted document."""
    return RECORD_TYPES[kind].from_dict(data)
