"""
Per-second rates between two consecutive raw samples.

compute_per_seconds() is a pure function. It refuses to produce a sample when
the pair does not describe one uninterrupted sampling interval of a single
process lifetime:

1. the previous sample is older than 1.5 sampling intervals (a gap);
2. the server uptime went backwards (the process restarted, so every
   cumulative counter was reset);
3. no time elapsed between the samples.

The checks run in that order. Refusing is a normal outcome, not an error.
"""

from typing import Optional

from ..models.config import CutPoints, DEFAULT_SAMPLING_INTERVAL
from ..models.results import SkipReason
from ..models.samples import (
    ClientDistributions,
    ClientRates,
    DistributionAccumulator,
    HttpRates,
    PerSecondSample,
    RawSample,
    SystemRates,
)
from .distribution import compute_distribution

STALE_FACTOR = 1.5


def explain_rejection(
    current: RawSample,
    previous: RawSample,
    sampling_interval: float = DEFAULT_SAMPLING_INTERVAL,
) -> Optional[str]:
    """
    Return why the pair cannot yield a per-second sample, or None if it can.

    The result is one of the SkipReason constants STALE, RESTART and
    NON_POSITIVE_INTERVAL.
    """
    if previous.time + STALE_FACTOR * sampling_interval < current.time:
        return SkipReason.STALE

    if previous.server.uptime > current.server.uptime:
        return SkipReason.RESTART

    if current.time - previous.time <= 0:
        return SkipReason.NON_POSITIVE_INTERVAL

    return None


def _average_time(current: DistributionAccumulator, previous: DistributionAccumulator) -> float:
    """Mean value per observation added between the two snapshots; 0 if none were added."""
    count = current.count - previous.count
    if count == 0:
        return 0.0
    return (current.sum - previous.sum) / count


def compute_per_seconds(
    current: RawSample,
    previous: RawSample,
    sampling_interval: float = DEFAULT_SAMPLING_INTERVAL,
    cuts: Optional[CutPoints] = None,
) -> Optional[PerSecondSample]:
    """
    Derive rates, gauges, average times and distributions from two raw samples.

    Args:
        current: The newer raw sample.
        previous: The raw sample taken one interval before.
        sampling_interval: Seconds between raw samples, used for the gap check.
        cuts: Cut-point tables for the client distributions.

    Returns:
        A PerSecondSample stamped with ``current.time`` and ``current.node_id``,
        or None when the pair is rejected (see explain_rejection()).
    """
    if explain_rejection(current, previous, sampling_interval) is not None:
        return None

    cuts = cuts or CutPoints()
    dt = current.time - previous.time

    def rate(now: float, before: float) -> float:
        return (now - before) / dt

    cur_sys, prev_sys = current.system, previous.system
    system = SystemRates(
        minor_page_faults_per_second=rate(cur_sys.minor_page_faults, prev_sys.minor_page_faults),
        major_page_faults_per_second=rate(cur_sys.major_page_faults, prev_sys.major_page_faults),
        user_time_per_second=rate(cur_sys.user_time, prev_sys.user_time),
        system_time_per_second=rate(cur_sys.system_time, prev_sys.system_time),
        resident_size=cur_sys.resident_size,
        resident_size_percent=cur_sys.resident_size_percent,
        virtual_size=cur_sys.virtual_size,
        number_of_threads=cur_sys.number_of_threads,
    )

    cur_http, prev_http = current.http, previous.http
    http = HttpRates(
        requests_total_per_second=rate(cur_http.requests_total, prev_http.requests_total),
        requests_async_per_second=rate(cur_http.requests_async, prev_http.requests_async),
        requests_get_per_second=rate(cur_http.requests_get, prev_http.requests_get),
        requests_head_per_second=rate(cur_http.requests_head, prev_http.requests_head),
        requests_post_per_second=rate(cur_http.requests_post, prev_http.requests_post),
        requests_put_per_second=rate(cur_http.requests_put, prev_http.requests_put),
        requests_patch_per_second=rate(cur_http.requests_patch, prev_http.requests_patch),
        requests_delete_per_second=rate(cur_http.requests_delete, prev_http.requests_delete),
        requests_options_per_second=rate(cur_http.requests_options, prev_http.requests_options),
        requests_other_per_second=rate(cur_http.requests_other, prev_http.requests_other),
    )

    cur_client, prev_client = current.client, previous.client
    avg_total_time = _average_time(cur_client.total_time, prev_client.total_time)
    avg_request_time = _average_time(cur_client.request_time, prev_client.request_time)
    avg_queue_time = _average_time(cur_client.queue_time, prev_client.queue_time)

    client = ClientRates(
        http_connections=cur_client.http_connections,
        bytes_sent_per_second=rate(cur_client.bytes_sent.sum, prev_client.bytes_sent.sum),
        bytes_received_per_second=rate(
            cur_client.bytes_received.sum, prev_client.bytes_received.sum
        ),
        avg_total_time=avg_total_time,
        avg_request_time=avg_request_time,
        avg_queue_time=avg_queue_time,
        avg_io_time=avg_total_time - avg_request_time - avg_queue_time,
    )

    distributions = ClientDistributions(
        bytes_sent_percent=compute_distribution(
            cur_client.bytes_sent, prev_client.bytes_sent, cuts.bytes_sent
        ),
        bytes_received_percent=compute_distribution(
            cur_client.bytes_received, prev_client.bytes_received, cuts.bytes_received
        ),
        total_time_percent=compute_distribution(
            cur_client.total_time, prev_client.total_time, cuts.request_time
        ),
        request_time_percent=compute_distribution(
            cur_client.request_time, prev_client.request_time, cuts.request_time
        ),
        queue_time_percent=compute_distribution(
            cur_client.queue_time, prev_client.queue_time, cuts.request_time
        ),
    )

    return PerSecondSample(
        time=current.time,
        system=system,
        http=http,
        client=client,
        distributions=distributions,
        node_id=current.node_id,
    )
