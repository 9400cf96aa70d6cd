"""
Unit tests for storage factory.
"""

from pathlib import Path

import pytest

from mystats.config.storage_config import StorageConfig
from mystats.storage.factory import create_repository
from mystats.storage.memory_storage import InMemorySampleRepository
from mystats.storage.parquet_storage import ParquetSampleRepository


class TestStorageFactory:
    """Test cases for storage factory."""

    def test_create_parquet_repository(self, temp_dir):
        """Test creating ParquetSampleRepository."""
        repo = create_repository(StorageConfig(data_dir=temp_dir))
        assert isinstance(repo, ParquetSampleRepository)
        assert repo.compression == "snappy"
        assert repo.data_dir == temp_dir

        repo = create_repository(StorageConfig(compression="gzip", data_dir=temp_dir))
        assert repo.compression == "gzip"

    def test_create_memory_repository(self):
        repo = create_repository(StorageConfig(format="memory"))
        assert isinstance(repo, InMemorySampleRepository)

    def test_create_repository_unsupported_format(self):
        """Test creating a repository with an unsupported format."""
        config = StorageConfig(format="csv", data_dir=Path("unused"))

        with pytest.raises(ValueError) as excinfo:
            create_repository(config)

        assert "Unsupported storage format" in str(excinfo.value)
