"""
Parquet sample repository using Polars for the range queries.
"""

import json
import logging
import os
import uuid
from pathlib import Path
from typing import Any, Callable, Dict, List, Literal, Optional

import polars as pl

from ..models.samples import RecordKind, record_from_dict
from ..validation import StorageError, ErrorSeverity, handle_storage_error
from .base import SampleRepository

logger = logging.getLogger(__name__)

# One row per record: the indexed columns used for filtering plus the full
# persisted document as JSON.
RECORD_SCHEMA = {
    "time": pl.Float64,
    "nodeId": pl.Utf8,
    "document": pl.Utf8,
}

STANDALONE_NODE = "standalone"


class ParquetSampleRepository(SampleRepository):
    """
    Parquet-backed implementation of SampleRepository.

    Each record kind has its own directory under ``data_dir`` (``raw/``,
    ``per_second/``, ``window/``) and every append writes one new file
    there, named ``<time>-<nodeId>-<uuid>.parquet``. Files are written under
    a unique temporary name and renamed into place, and are never rewritten,
    so any number of processes and cluster nodes can share ``data_dir``.
    Reads lazily scan the directory and push the ``time`` and ``nodeId``
    filters down to the files.

    Attributes:
        data_dir: Directory holding the per-kind directories.
        compression: Compression algorithm used when writing.
    """

    def __init__(
        self,
        data_dir: Path,
        compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy",
    ):
        """
        Initialize the repository.

        Args:
            data_dir: Directory for the Parquet files; created on first append
            compression: Compression algorithm to use
        """
        self.data_dir = Path(data_dir)
        self.compression = compression
        logger.debug(
            f"Initialized ParquetSampleRepository at {self.data_dir} "
            f"with compression: {compression}"
        )

    def path_for(self, kind: RecordKind) -> Path:
        """Return the directory holding the stream of ``kind``."""
        return self.data_dir / kind.value

    def files_for(self, kind: RecordKind) -> List[Path]:
        """Return the record files of ``kind``; temporary files are not listed."""
        directory = self.path_for(kind)
        if not directory.is_dir():
            return []
        return sorted(directory.glob("*.parquet"))

    def _query(
        self, kind: RecordKind, build: Callable[[pl.LazyFrame], pl.LazyFrame]
    ) -> Optional[pl.DataFrame]:
        """Run ``build`` over a lazy scan of every file of ``kind``; None if there are none."""
        if not self.files_for(kind):
            return None
        try:
            scan = pl.scan_parquet(str(self.path_for(kind) / "*.parquet"))
            return build(scan).collect()
        except Exception as e:
            handle_storage_error(
                e,
                f"reading {kind.value} records from {self.path_for(kind)}",
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger,
            )
            raise StorageError(f"cannot read {self.path_for(kind)}: {e}") from e

    def append(self, kind: RecordKind, record: Any) -> None:
        doc = record.to_dict()
        row = pl.DataFrame(
            {
                "time": [float(doc["time"])],
                "nodeId": [doc.get("nodeId")],
                "document": [json.dumps(doc)],
            },
            schema=RECORD_SCHEMA,
        )
        directory = self.path_for(kind)
        node = doc.get("nodeId") or STANDALONE_NODE
        path = directory / f"{doc['time']:.6f}-{node}-{uuid.uuid4().hex}.parquet"
        tmp_path = path.with_name(path.name + ".tmp")

        try:
            directory.mkdir(parents=True, exist_ok=True)
            row.write_parquet(tmp_path, compression=self.compression)
            os.replace(tmp_path, path)
        except Exception as e:
            tmp_path.unlink(missing_ok=True)
            handle_storage_error(
                e,
                f"appending {kind.value} record to {directory}",
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger,
            )
            raise StorageError(f"cannot append to {directory}: {e}") from e

        logger.debug(f"Appended {kind.value} record at {doc['time']} to {path.name}")

    def _select(
        self, kind: RecordKind, start: float, node_id: Optional[str]
    ) -> pl.DataFrame:
        predicate = pl.col("time") >= start
        if node_id is not None:
            predicate = predicate & (pl.col("nodeId") == node_id)
        df = self._query(kind, lambda scan: scan.filter(predicate).sort("time", maintain_order=True))
        return pl.DataFrame(schema=RECORD_SCHEMA) if df is None else df

    @staticmethod
    def _decode(kind: RecordKind, document: str):
        doc: Dict[str, Any] = json.loads(document)
        return record_from_dict(kind, doc)

    def most_recent_at_or_after(
        self, kind: RecordKind, start: float, node_id: Optional[str] = None
    ) -> Optional[Any]:
        df = self._select(kind, start, node_id)
        if df.height == 0:
            return None
        return self._decode(kind, df["document"][-1])

    def all_at_or_after(
        self, kind: RecordKind, start: float, node_id: Optional[str] = None
    ) -> List[Any]:
        df = self._select(kind, start, node_id)
        return [self._decode(kind, document) for document in df["document"].to_list()]

    def count(self, kind: RecordKind) -> int:
        df = self._query(kind, lambda scan: scan.select(pl.len()))
        return 0 if df is None else df.item()

    def get_file_size(self, kind: RecordKind) -> int:
        """
        Get the total size of the files holding ``kind`` in bytes (0 if absent).
        """
        return sum(path.stat().st_size for path in self.files_for(kind))
