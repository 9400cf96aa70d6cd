"""
Periodic statistics jobs.

- Historian: one raw sample per tick, plus a per-second sample when the
  previous raw sample allows it
- HistorianAverage: one window sample per tick from the stored per-second
  samples
- HistorianScheduler: runs both jobs on their intervals with asyncio
"""

from .historian import Historian, HistorianAverage
from .scheduler import HistorianScheduler

__all__ = [
    "Historian",
    "HistorianAverage",
    "HistorianScheduler",
]
