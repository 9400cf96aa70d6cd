"""
Factory for creating sample repository instances.
"""

import logging

from ..config.storage_config import StorageConfig
from .base import SampleRepository
from .memory_storage import InMemorySampleRepository
from .parquet_storage import ParquetSampleRepository

logger = logging.getLogger(__name__)


def create_repository(storage_config: StorageConfig) -> SampleRepository:
    """
    Create a repository based on the configured storage format.

    Args:
        storage_config: Validated storage settings

    Returns:
        SampleRepository instance

    Raises:
        ValueError: If an unsupported format type is specified
    """
    format_type = storage_config.format
    if format_type == "parquet":
        logger.debug(
            f"Creating ParquetSampleRepository in {storage_config.data_dir} "
            f"with compression: {storage_config.compression}"
        )
        return ParquetSampleRepository(
            storage_config.data_dir, compression=storage_config.compression
        )
    elif format_type == "memory":
        logger.debug("Creating InMemorySampleRepository")
        return InMemorySampleRepository()
    else:
        raise ValueError(f"Unsupported storage format: {format_type}")
