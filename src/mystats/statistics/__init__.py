"""
Pure statistics computations for the historian pipeline.

- compute_distribution: percentage histogram between two accumulator snapshots
- compute_per_seconds: per-second sample from two raw samples, or None
- compute_window: mean of many per-second samples

None of these functions perform I/O; rejected inputs are reported through
return values rather than exceptions.
"""

from .distribution import compute_distribution
from .rates import STALE_FACTOR, compute_per_seconds, explain_rejection
from .window import compute_window

__all__ = [
    "STALE_FACTOR",
    "compute_distribution",
    "compute_per_seconds",
    "compute_window",
    "explain_rejection",
]
