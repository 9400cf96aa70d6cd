"""
Abstract base class for sample repositories.

This module defines the SampleRepository abstract base class which serves as
the interface for every store the historian writes to. A repository keeps
three append-only, time-ordered streams (raw, per-second and window records)
and answers two range queries over them:

- the most recent record with ``time >= start``
- every record with ``time >= start``, in ascending time order

Both queries optionally restrict the result to one cluster node. Passing
``node_id=None`` disables the filter, which is what a standalone process does.

Records go in and come out as the typed models from ``mystats.models``; how
they are laid out on disk is up to the implementation, as long as the
persisted document keeps the field names produced by ``to_dict()``.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..models.samples import RecordKind


class SampleRepository(ABC):
    """Abstract base class for sample repository implementations."""

    @abstractmethod
    def append(self, kind: RecordKind, record: Any) -> None:
        """
        Append one record to the stream of ``kind``.

        Args:
            kind: Which stream the record belongs to
            record: A RawSample, PerSecondSample or WindowSample

        Raises:
            StorageError: If the record could not be persisted
        """
        pass

    @abstractmethod
    def most_recent_at_or_after(
        self, kind: RecordKind, start: float, node_id: Optional[str] = None
    ) -> Optional[Any]:
        """
        Return the latest record of ``kind`` with ``time >= start``.

        Args:
            kind: Stream to search
            start: Lower time bound (inclusive)
            node_id: Restrict to this node's records, or None for all

        Returns:
            The record with the greatest time, or None if there is none

        Raises:
            StorageError: If the stream could not be read
        """
        pass

    @abstractmethod
    def all_at_or_after(
        self, kind: RecordKind, start: float, node_id: Optional[str] = None
    ) -> List[Any]:
        """
        Return every record of ``kind`` with ``time >= start``, oldest first.

        Args:
            kind: Stream to search
            start: Lower time bound (inclusive)
            node_id: Restrict to this node's records, or None for all

        Returns:
            Records in ascending time order (possibly empty)

        Raises:
            StorageError: If the stream could not be read
        """
        pass

    @abstractmethod
    def count(self, kind: RecordKind) -> int:
        """
        Return the number of records in the stream of ``kind``.

        Raises:
            StorageError: If the stream could not be read
        """
        pass
