"""
Storage configuration model and validation.

This module defines the StorageConfig dataclass which encapsulates the
settings of the sample repository: which backend holds the records, where
the Parquet files live and how they are compressed.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Literal

SUPPORTED_FORMATS = ("parquet", "memory")
SUPPORTED_COMPRESSIONS = ("snappy", "gzip", "brotli", "lz4", "zstd")


@dataclass
class StorageConfig:
    """
    Configuration model for the sample repository.

    Attributes:
        format: Repository backend type
            - 'parquet': one Parquet file per record kind under ``data_dir``
            - 'memory': process-local lists, lost on exit (tests, dry runs)
        compression: Compression algorithm for Parquet files
            - 'snappy': Fast compression/decompression (default)
            - 'gzip': Higher compression ratio, slower
            - 'brotli': Very high compression ratio
            - 'lz4': Very fast compression
            - 'zstd': Modern balanced compression
        data_dir: Directory holding the Parquet files.

    Note:
        Compression and data_dir only apply to the Parquet backend.
    """

    format: Literal["parquet", "memory"] = "parquet"
    compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy"
    data_dir: Path = Path("data/statistics")

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "StorageConfig":
        """
        Create a StorageConfig instance from a dictionary.

        Args:
            config_dict: Dictionary containing storage configuration

        Returns:
            StorageConfig instance

        Raises:
            ValueError: If invalid configuration values are provided
        """
        format_type = config_dict.get("format", "parquet")
        compression = config_dict.get("compression", "snappy")
        data_dir = config_dict.get("data_dir", "data/statistics")

        if format_type not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported storage format: {format_type}")

        if format_type == "parquet" and compression not in SUPPORTED_COMPRESSIONS:
            raise ValueError(f"Unsupported compression algorithm: {compression}")

        if not isinstance(data_dir, (str, Path)) or not str(data_dir).strip():
            raise ValueError("storage.data_dir must be a non-empty path")

        return cls(format=format_type, compression=compression, data_dir=Path(data_dir))

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the StorageConfig to a dictionary.

        Returns:
            Dictionary representation of the StorageConfig
        """
        return {
            "format": self.format,
            "compression": self.compression,
            "data_dir": str(self.data_dir),
        }
