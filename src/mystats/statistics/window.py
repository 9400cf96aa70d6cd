"""
Window averages over per-second samples.
"""

from dataclasses import fields
from typing import Iterable, Optional

from ..models.samples import ClientRates, HttpRates, PerSecondSample, SystemRates, WindowSample


def _mean_block(cls, blocks, count: int):
    """Field-wise mean of a list of flat rate dataclasses; zeros when count is 0."""
    totals = {f.name: 0.0 for f in fields(cls)}
    for block in blocks:
        for name in totals:
            totals[name] += getattr(block, name)
    if count:
        for name in totals:
            totals[name] /= count
    return cls(**totals)


def compute_window(
    samples: Iterable[PerSecondSample], since: Optional[float] = None
) -> WindowSample:
    """
    Fold per-second samples into one window sample of arithmetic means.

    Every scalar field (rates, gauges and average times) is summed over the
    samples and divided by the number of samples. Distributions are not
    carried into the window.

    Args:
        samples: Per-second samples of one node with ``time >= since``,
            in ascending time order.
        since: Start of the window. Informational; the caller has already
            restricted ``samples`` to the window.

    Returns:
        A WindowSample whose ``time`` is that of the last sample, or a
        zero-filled WindowSample with ``time`` None when ``samples`` is empty.
    """
    samples = list(samples)
    count = len(samples)

    return WindowSample(
        time=samples[-1].time if samples else None,
        system=_mean_block(SystemRates, [s.system for s in samples], count),
        http=_mean_block(HttpRates, [s.http for s in samples], count),
        client=_mean_block(ClientRates, [s.client for s in samples], count),
    )
