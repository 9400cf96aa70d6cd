"""
Unit tests for the persisted document shape of the record models.
"""

import pytest

from mystats.models.samples import (
    PerSecondSample,
    RawSample,
    RecordKind,
    WindowSample,
    record_from_dict,
)
from mystats.statistics import compute_per_seconds


@pytest.mark.unit
class TestDocuments:
    """The camelCase document keys are what history readers depend on."""

    def test_raw_document_keys(self, test_utils):
        doc = test_utils.make_raw(100.0, requests_total=3).to_dict()

        assert set(doc) == {"time", "system", "http", "client", "server"}
        assert doc["http"]["requestsTotal"] == 3
        assert "minorPageFaults" in doc["system"]
        assert "residentSizePercent" in doc["system"]
        assert set(doc["client"]["totalTime"]) == {"sum", "count", "counts"}
        assert doc["server"] == {"uptime": 100.0}

    def test_node_id_only_when_set(self, test_utils):
        assert "nodeId" not in test_utils.make_raw(100.0).to_dict()
        assert test_utils.make_raw(100.0, node_id="n1").to_dict()["nodeId"] == "n1"

    def test_per_second_document_restores_distributions(self, test_utils):
        previous = test_utils.make_raw(100.0)
        current = test_utils.make_raw(
            110.0, total_time=test_utils.make_accumulator(0.3, 3, [0, 3])
        )
        sample = compute_per_seconds(current, previous, 10)

        restored = record_from_dict(RecordKind.PER_SECOND, sample.to_dict())

        assert isinstance(restored, PerSecondSample)
        assert restored.distributions == sample.distributions
        assert restored.client == sample.client

    def test_missing_fields_default_to_zero(self):
        raw = RawSample.from_dict({"time": 5.0, "http": {"requestsGet": 2}})

        assert raw.http.requests_get == 2
        assert raw.http.requests_total == 0
        assert raw.client.total_time.counts == []
        assert raw.server.uptime == 0.0

    def test_window_without_time(self):
        window = WindowSample()

        assert window.to_dict()["time"] is None
        assert record_from_dict(RecordKind.WINDOW, window.to_dict()).time is None
