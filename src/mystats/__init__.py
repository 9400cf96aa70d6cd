"""
MyStats: server statistics historian.

This package periodically samples a running server's resource and request
metrics, derives per-second rates and percentage distributions, and rolls
them up into coarser historical windows (raw -> per-second -> window).

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Record, configuration and tick result data structures
- validation: Input validation and error handling
- statistics: Pure rate, distribution and window computations
- storage: Append-only sample repositories (Parquet, in-memory)
- collectors: Runtime metrics sources and the request statistics registry
- system: Node identity resolution
- monitoring: The historian jobs and their asyncio scheduler
- cli: Command-line interface and orchestration

Usage:
    From command line:
        mystats run
        mystats show per_second --limit 5

    Programmatically:
        from mystats import StatisticsRunner, get_config
        runner = StatisticsRunner(get_config())
        runner.sample_once()
"""

# Configuration must be imported before the models that depend on it
from .config import clear_config_cache, get_config, set_config_path

# Model classes for external use
from .models import (
    AppConfig,
    CutPoints,
    PerSecondSample,
    RawSample,
    RecordKind,
    TickResult,
    TickStatus,
    WindowSample,
)

# Validation utilities
from .validation import StorageError, ValidationError

# Pipeline components
from .collectors import PsutilMetricsSource, RequestStatistics
from .monitoring import Historian, HistorianAverage, HistorianScheduler
from .statistics import compute_distribution, compute_per_seconds, compute_window
from .storage import InMemorySampleRepository, ParquetSampleRepository, create_repository
from .system import resolve_node_identity

# Main interfaces
from .cli.orchestrator import StatisticsRunner
from .cli import main_cli

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "get_config",
    "clear_config_cache",
    "set_config_path",
    # Models
    "AppConfig",
    "CutPoints",
    "PerSecondSample",
    "RawSample",
    "RecordKind",
    "TickResult",
    "TickStatus",
    "WindowSample",
    # Errors
    "StorageError",
    "ValidationError",
    # Pipeline
    "PsutilMetricsSource",
    "RequestStatistics",
    "Historian",
    "HistorianAverage",
    "HistorianScheduler",
    "compute_distribution",
    "compute_per_seconds",
    "compute_window",
    "InMemorySampleRepository",
    "ParquetSampleRepository",
    "create_repository",
    "resolve_node_identity",
    # Interfaces
    "StatisticsRunner",
    "main_cli",
]
