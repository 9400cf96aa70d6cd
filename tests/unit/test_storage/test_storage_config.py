"""
Unit tests for storage configuration.
"""

from pathlib import Path

import pytest

from mystats.config.storage_config import StorageConfig


class TestStorageConfig:
    """Test cases for StorageConfig class."""

    def test_default_values(self):
        """Test default values."""
        config = StorageConfig()
        assert config.format == "parquet"
        assert config.compression == "snappy"
        assert config.data_dir == Path("data/statistics")

    def test_from_dict(self):
        """Test creating from dictionary."""
        config = StorageConfig.from_dict(
            {"format": "parquet", "compression": "zstd", "data_dir": "/var/lib/stats"}
        )

        assert config.format == "parquet"
        assert config.compression == "zstd"
        assert config.data_dir == Path("/var/lib/stats")

    def test_from_dict_defaults(self):
        """Test creating from dictionary with defaults."""
        config = StorageConfig.from_dict({})

        assert config.format == "parquet"
        assert config.compression == "snappy"

    def test_memory_format_ignores_compression(self):
        config = StorageConfig.from_dict({"format": "memory", "compression": "none"})
        assert config.format == "memory"

    def test_from_dict_invalid_format(self):
        """Test creating from dictionary with invalid format."""
        with pytest.raises(ValueError) as excinfo:
            StorageConfig.from_dict({"format": "json"})

        assert "Unsupported storage format" in str(excinfo.value)

    def test_from_dict_invalid_compression(self):
        """Test creating from dictionary with invalid compression."""
        with pytest.raises(ValueError) as excinfo:
            StorageConfig.from_dict({"compression": "invalid"})

        assert "Unsupported compression algorithm" in str(excinfo.value)

    def test_from_dict_empty_data_dir(self):
        with pytest.raises(ValueError):
            StorageConfig.from_dict({"data_dir": "  "})

    def test_to_dict(self):
        """Test converting to dictionary."""
        config = StorageConfig(format="parquet", compression="gzip", data_dir=Path("stats"))

        assert config.to_dict() == {
            "format": "parquet",
            "compression": "gzip",
            "data_dir": "stats",
        }
