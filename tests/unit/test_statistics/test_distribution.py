"""
Unit tests for percentage distributions.
"""

import pytest

from mystats.models.samples import DistributionAccumulator
from mystats.statistics import compute_distribution

CUTS = [0.01, 0.05, 0.1, 0.2, 0.5, 1.0]


def acc(total, count, counts):
    return DistributionAccumulator(sum=total, count=count, counts=counts)


@pytest.mark.unit
class TestComputeDistribution:
    """Test cases for compute_distribution()."""

    def test_without_previous_uses_cumulative_counts(self):
        current = acc(10.0, 4, [1, 0, 1, 0, 0, 0, 2])

        dist = compute_distribution(current, None, CUTS)

        assert dist.values == [0.25, 0.0, 0.25, 0.0, 0.0, 0.0, 0.5]
        assert dist.cuts == CUTS

    def test_with_previous_uses_deltas(self):
        previous = acc(1.0, 2, [1, 1, 0, 0, 0, 0, 0])
        current = acc(5.0, 6, [1, 3, 0, 2, 0, 0, 0])

        dist = compute_distribution(current, previous, CUTS)

        assert dist.values == [0.0, 0.5, 0.0, 0.5, 0.0, 0.0, 0.0]

    def test_values_sum_to_one_when_observations_were_added(self):
        previous = acc(0.0, 3, [1, 1, 1, 0, 0, 0, 0])
        current = acc(0.0, 10, [2, 3, 2, 1, 1, 0, 1])

        dist = compute_distribution(current, previous, CUTS)

        assert sum(dist.values) == pytest.approx(1.0)

    def test_no_new_observations_yields_zeros(self):
        snapshot = acc(3.0, 5, [1, 1, 1, 1, 1, 0, 0])

        dist = compute_distribution(snapshot, snapshot, CUTS)

        assert dist.values == [0.0] * 7
        assert sum(dist.values) == 0

    def test_empty_accumulator_without_previous_yields_zeros(self):
        dist = compute_distribution(acc(0.0, 0, []), None, CUTS)

        assert dist.values == [0.0] * 7

    def test_bucket_count_is_cuts_plus_one(self):
        cuts = [250, 1000, 2000, 5000, 10000]

        dist = compute_distribution(acc(300.0, 1, [0, 1, 0, 0, 0, 0]), None, cuts)

        assert len(dist.values) == len(cuts) + 1

    def test_missing_bucket_entries_read_as_zero(self):
        previous = acc(0.0, 1, [1])
        current = acc(0.0, 3, [1, 2])

        dist = compute_distribution(current, previous, [1.0, 2.0])

        assert dist.values == [0.0, 1.0, 0.0]

    def test_inputs_are_not_modified(self):
        previous = acc(1.0, 1, [1, 0, 0])
        current = acc(2.0, 2, [1, 1, 0])

        compute_distribution(current, previous, [1.0, 2.0])

        assert previous.counts == [1, 0, 0]
        assert current.counts == [1, 1, 0]
