"""
Storage module for statistics records.

This module provides the append-only, time-ordered repositories the historian
writes raw, per-second and window records to:

- a common SampleRepository interface with the two range queries the
  pipeline needs (most recent record since T, all records since T)
- a Parquet backend using Polars for filtering, with configurable compression
- an in-memory backend for tests and dry runs
- a factory selecting the backend from the storage configuration
"""

from .base import SampleRepository
from .factory import create_repository
from .memory_storage import InMemorySampleRepository
from .parquet_storage import ParquetSampleRepository

__all__ = [
    "SampleRepository",
    "InMemorySampleRepository",
    "ParquetSampleRepository",
    "create_repository",
]
