"""
Unit tests for the psutil-backed metrics source.
"""

import os
from unittest.mock import MagicMock, Mock, patch

import psutil
import pytest

from mystats.collectors import PsutilMetricsSource, RequestStatistics, create_metrics_source
from mystats.models.config import AppConfig, CutPoints, StatisticsConfig
from mystats.validation import MetricsSourceError


@pytest.fixture
def mock_process():
    """A psutil.Process stand-in with fixed readings."""
    with patch("mystats.collectors.psutil_source.psutil.Process") as process_class:
        process = MagicMock()
        process.pid = os.getpid()
        process.create_time.return_value = 1000.0
        process.cpu_times.return_value = Mock(user=1.5, system=0.5)
        process.memory_info.return_value = Mock(rss=4096, vms=8192)
        process.memory_percent.return_value = 12.5
        process.num_threads.return_value = 7
        process_class.return_value = process
        yield process


@pytest.mark.unit
class TestPsutilMetricsSource:
    """Test cases for PsutilMetricsSource."""

    def test_reads_process_figures(self, mock_process):
        source = PsutilMetricsSource(clock=lambda: 1060.0)

        metrics = source.current_process_metrics()

        assert metrics.system.user_time == 1.5
        assert metrics.system.system_time == 0.5
        assert metrics.system.resident_size == 4096
        assert metrics.system.virtual_size == 8192
        assert metrics.system.resident_size_percent == pytest.approx(0.125)
        assert metrics.system.number_of_threads == 7
        assert metrics.server.uptime == 60.0

    def test_page_faults_from_getrusage(self, mock_process):
        usage = Mock(ru_minflt=321, ru_majflt=4)
        with patch("mystats.collectors.psutil_source.resource.getrusage", return_value=usage):
            metrics = PsutilMetricsSource().current_process_metrics()

        assert metrics.system.minor_page_faults == 321
        assert metrics.system.major_page_faults == 4

    def test_includes_request_statistics(self, mock_process):
        stats = RequestStatistics()
        stats.record_request("GET", bytes_sent=100)
        stats.connection_opened()

        metrics = PsutilMetricsSource(stats).current_process_metrics()

        assert metrics.http.requests_total == 1
        assert metrics.client.http_connections == 1
        assert metrics.client.bytes_sent.sum == 100

    def test_read_failure_raises_metrics_source_error(self, mock_process):
        mock_process.cpu_times.side_effect = psutil.AccessDenied(pid=1)
        source = PsutilMetricsSource()

        with pytest.raises(MetricsSourceError):
            source.current_process_metrics()

    def test_attach_failure_raises_metrics_source_error(self):
        with patch(
            "mystats.collectors.psutil_source.psutil.Process",
            side_effect=psutil.NoSuchProcess(pid=999999),
        ):
            with pytest.raises(MetricsSourceError):
                PsutilMetricsSource(pid=999999)

    def test_real_process(self):
        """Reads the figures of the test process itself."""
        metrics = PsutilMetricsSource().current_process_metrics()

        assert metrics.system.resident_size > 0
        assert metrics.system.number_of_threads >= 1
        assert metrics.server.uptime >= 0


@pytest.mark.unit
class TestCreateMetricsSource:
    def test_uses_configured_cuts(self, mock_process):
        config = AppConfig(statistics=StatisticsConfig(cuts=CutPoints(bytes_sent=[1.0])))

        source = create_metrics_source(config)

        assert isinstance(source, PsutilMetricsSource)
        assert len(source.request_stats.client_snapshot().bytes_sent.counts) == 2

    def test_uses_given_registry(self, mock_process):
        stats = RequestStatistics()

        source = create_metrics_source(AppConfig(), stats)

        assert source.request_stats is stats
