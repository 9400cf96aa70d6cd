"""
Pytest configuration and shared fixtures for the MyStats test suite.

This module provides common fixtures, sample builders and fake collaborators
for all test modules in the MyStats project.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import List, Optional

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mystats.collectors.base import AbstractMetricsSource  # noqa: E402
from mystats.models.samples import (  # noqa: E402
    ClientStats,
    DistributionAccumulator,
    HttpStats,
    RawSample,
    RuntimeMetrics,
    ServerStats,
    SystemStats,
)


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "statistics": {
            "sampling_interval": 10.0,
            "window_interval": 900.0,
            "cuts": {
                "bytes_sent": [250, 1000, 2000, 5000, 10000],
                "bytes_received": [250, 1000, 2000, 5000, 10000],
                "request_time": [0.01, 0.05, 0.1, 0.2, 0.5, 1.0],
            },
        },
        "storage": {
            "format": "memory",
            "compression": "snappy",
            "data_dir": "data",
        },
        "cluster": {"enabled": False},
        "logging": {"level": "DEBUG"},
    }


@pytest.fixture
def config_files(temp_dir, sample_config_data):
    """Create a temporary config.toml for testing."""
    import toml

    config_file = temp_dir / "config.toml"
    with open(config_file, "w") as f:
        toml.dump(sample_config_data, f)

    return {"config": config_file, "dir": temp_dir}


# ============================================================================
# Fake collaborators
# ============================================================================


class FakeClock:
    """A manually advanced clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


class ScriptedMetricsSource(AbstractMetricsSource):
    """
    Returns queued RuntimeMetrics in order; repeats the last one when the
    queue runs dry. Raises ``error`` instead when it is set.
    """

    def __init__(self, metrics: Optional[List[RuntimeMetrics]] = None):
        self.metrics = list(metrics or [])
        self.last: Optional[RuntimeMetrics] = None
        self.error: Optional[Exception] = None
        self.calls = 0

    def push(self, metrics: RuntimeMetrics) -> None:
        self.metrics.append(metrics)

    def current_process_metrics(self) -> RuntimeMetrics:
        self.calls += 1
        if self.error is not None:
            raise self.error
        if self.metrics:
            self.last = self.metrics.pop(0)
        if self.last is None:
            self.last = TestUtils.make_metrics()
        return self.last


# ============================================================================
# Test Utilities
# ============================================================================


class TestUtils:
    """Builders for records and metrics used across the test suite."""

    @staticmethod
    def make_accumulator(total: float = 0.0, count: int = 0, counts: List[int] = None):
        return DistributionAccumulator(sum=total, count=count, counts=list(counts or []))

    @staticmethod
    def make_metrics(
        uptime: float = 100.0,
        requests_total: float = 0,
        requests_get: float = 0,
        minor_page_faults: float = 0,
        user_time: float = 0.0,
        resident_size: float = 1024,
        connections: float = 0,
        bytes_sent: DistributionAccumulator = None,
        total_time: DistributionAccumulator = None,
        request_time: DistributionAccumulator = None,
        queue_time: DistributionAccumulator = None,
    ) -> RuntimeMetrics:
        return RuntimeMetrics(
            system=SystemStats(
                minor_page_faults=minor_page_faults,
                user_time=user_time,
                resident_size=resident_size,
                resident_size_percent=0.01,
                virtual_size=resident_size * 4,
                number_of_threads=8,
            ),
            http=HttpStats(requests_total=requests_total, requests_get=requests_get),
            client=ClientStats(
                http_connections=connections,
                bytes_sent=bytes_sent or DistributionAccumulator(),
                total_time=total_time or DistributionAccumulator(),
                request_time=request_time or DistributionAccumulator(),
                queue_time=queue_time or DistributionAccumulator(),
            ),
            server=ServerStats(uptime=uptime),
        )

    @staticmethod
    def make_raw(time: float, node_id: Optional[str] = None, **kwargs) -> RawSample:
        """Build a RawSample at ``time``; keyword arguments go to make_metrics()."""
        return RawSample.from_metrics(time, TestUtils.make_metrics(**kwargs), node_id=node_id)


@pytest.fixture
def test_utils():
    """Provide test utility functions."""
    return TestUtils


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def metrics_source():
    return ScriptedMetricsSource()


@pytest.fixture
def memory_repository():
    from mystats.storage import InMemorySampleRepository

    return InMemorySampleRepository()


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    # Store original config path (default path)
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield  # Run the test

    from mystats.config import clear_config_cache, set_config_path

    clear_config_cache()
    # Always reset to original config path
    set_config_path(original_config_path)

