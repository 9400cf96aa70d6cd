"""
Percentage distributions from cumulative histograms.
"""

from typing import List, Optional, Sequence

from ..models.samples import Distribution, DistributionAccumulator


def _bucket(counts: List[int], index: int) -> int:
    return counts[index] if index < len(counts) else 0


def compute_distribution(
    current: DistributionAccumulator,
    previous: Optional[DistributionAccumulator],
    cuts: Sequence[float],
) -> Distribution:
    """
    Normalize the observations between two accumulator snapshots.

    With no previous snapshot the fractions cover everything since the
    process started; otherwise they cover only the observations added since
    ``previous``. When no observation was added every fraction is 0, so the
    result never contains NaN.

    Args:
        current: The later cumulative snapshot.
        previous: The earlier snapshot, or None.
        cuts: The bucket boundaries the accumulator was built with.

    Returns:
        A Distribution with ``len(cuts) + 1`` values.
    """
    n = len(cuts) + 1

    if previous is None:
        count = current.count
    else:
        count = current.count - previous.count

    if count == 0:
        values = [0.0] * n
    elif previous is None:
        values = [_bucket(current.counts, i) / count for i in range(n)]
    else:
        values = [
            (_bucket(current.counts, i) - _bucket(previous.counts, i)) / count
            for i in range(n)
        ]

    return Distribution(values=values, cuts=list(cuts))
