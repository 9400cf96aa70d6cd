"""
Tests for HistorianScheduler.

The jobs are replaced by mocks so only the scheduling behaviour is under
test: both loops tick on their own interval, ticks run in worker threads,
and stopping waits for running ticks.
"""

import asyncio
import threading
import time
from unittest.mock import Mock

import pytest

from mystats.models.results import TickResult, TickStatus
from mystats.monitoring import HistorianScheduler


def make_job(name):
    job = Mock()
    job.job_name = name
    job.tick.side_effect = lambda: TickResult(job=name, status=TickStatus.SUCCESS, time=0.0)
    return job


class TestHistorianScheduler:
    """Tests for HistorianScheduler."""

    @pytest.fixture
    def jobs(self):
        return make_job("historian"), make_job("average")

    def test_initialization(self, jobs):
        historian, average = jobs
        scheduler = HistorianScheduler(historian, average)

        assert scheduler.sampling_interval == 10.0
        assert scheduler.window_interval == 900.0
        assert scheduler.executor is None
        assert scheduler.tasks == []
        assert not scheduler.is_running

    @pytest.mark.asyncio
    async def test_jobs_tick_on_their_own_intervals(self, jobs):
        historian, average = jobs
        scheduler = HistorianScheduler(
            historian, average, sampling_interval=0.02, window_interval=0.5
        )

        await scheduler.start()
        await asyncio.sleep(0.25)
        await scheduler.stop()

        assert historian.tick.call_count >= 3
        assert average.tick.call_count == 0
        assert scheduler.tick_counts["historian"] == historian.tick.call_count

    @pytest.mark.asyncio
    async def test_ticks_run_in_worker_threads(self, jobs):
        historian, average = jobs
        threads = []
        historian.tick.side_effect = lambda: threads.append(threading.current_thread().name)
        scheduler = HistorianScheduler(
            historian, average, sampling_interval=0.01, window_interval=10.0
        )

        async with scheduler:
            await asyncio.sleep(0.1)

        assert threads
        assert all(name.startswith("Historian") for name in threads)
        assert threading.current_thread().name not in threads

    @pytest.mark.asyncio
    async def test_slow_tick_does_not_block_other_job(self, jobs):
        historian, average = jobs
        historian.tick.side_effect = lambda: time.sleep(0.3)
        scheduler = HistorianScheduler(
            historian, average, sampling_interval=0.01, window_interval=0.02
        )

        async with scheduler:
            await asyncio.sleep(0.2)

        assert historian.tick.call_count == 1
        assert average.tick.call_count >= 3

    @pytest.mark.asyncio
    async def test_stop_is_idempotent(self, jobs):
        scheduler = HistorianScheduler(*jobs, sampling_interval=0.01, window_interval=0.01)

        await scheduler.stop()
        await scheduler.start()
        await scheduler.stop()
        await scheduler.stop()

        assert not scheduler.is_running
        assert scheduler.executor is None
        assert scheduler.tasks == []

    @pytest.mark.asyncio
    async def test_double_start_raises(self, jobs):
        scheduler = HistorianScheduler(*jobs)

        await scheduler.start()
        try:
            with pytest.raises(RuntimeError):
                await scheduler.start()
        finally:
            await scheduler.stop()

    @pytest.mark.asyncio
    async def test_run_forever_returns_after_request_stop(self, jobs):
        historian, average = jobs
        scheduler = HistorianScheduler(
            historian, average, sampling_interval=0.01, window_interval=10.0
        )

        asyncio.get_running_loop().call_later(0.1, scheduler.request_stop)
        await asyncio.wait_for(scheduler.run_forever(), timeout=5.0)

        assert not scheduler.is_running
        assert historian.tick.call_count >= 1

    @pytest.mark.asyncio
    async def test_raising_tick_ends_only_that_loop(self, jobs):
        historian, average = jobs
        historian.tick.side_effect = RuntimeError("unexpected")
        scheduler = HistorianScheduler(
            historian, average, sampling_interval=0.01, window_interval=0.02
        )

        async with scheduler:
            await asyncio.sleep(0.15)

        assert historian.tick.call_count == 1
        assert average.tick.call_count >= 2
