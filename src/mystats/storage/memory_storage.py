"""
In-memory sample repository.

Records are kept as persisted documents in per-kind lists so that reads go
through the same ``from_dict()`` path as the Parquet backend. Nothing
survives the process; use it for tests and dry runs.
"""

import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

from ..models.samples import RecordKind, record_from_dict
from .base import SampleRepository

logger = logging.getLogger(__name__)


class InMemorySampleRepository(SampleRepository):
    """Thread-safe, process-local implementation of SampleRepository."""

    def __init__(self):
        self._streams: Dict[RecordKind, List[Tuple[float, Optional[str], Dict[str, Any]]]] = {
            kind: [] for kind in RecordKind
        }
        self._lock = threading.Lock()
        logger.debug("Initialized InMemorySampleRepository")

    def append(self, kind: RecordKind, record: Any) -> None:
        doc = record.to_dict()
        with self._lock:
            self._streams[kind].append((doc["time"], doc.get("nodeId"), doc))
        logger.debug(f"Appended {kind.value} record at {doc['time']}")

    def _select(
        self, kind: RecordKind, start: float, node_id: Optional[str]
    ) -> List[Dict[str, Any]]:
        with self._lock:
            rows = list(self._streams[kind])
        selected = [
            (time, doc)
            for time, node, doc in rows
            if time >= start and (node_id is None or node == node_id)
        ]
        # sorted() is stable, so records with equal times keep append order.
        selected.sort(key=lambda row: row[0])
        return [doc for _, doc in selected]

    def most_recent_at_or_after(
        self, kind: RecordKind, start: float, node_id: Optional[str] = None
    ) -> Optional[Any]:
        docs = self._select(kind, start, node_id)
        if not docs:
            return None
        return record_from_dict(kind, docs[-1])

    def all_at_or_after(
        self, kind: RecordKind, start: float, node_id: Optional[str] = None
    ) -> List[Any]:
        return [record_from_dict(kind, doc) for doc in self._select(kind, start, node_id)]

    def count(self, kind: RecordKind) -> int:
        with self._lock:
            return len(self._streams[kind])
