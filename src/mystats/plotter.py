"""
Generates plots from stored statistics records.

This module is the visualization step of the historian pipeline. It reads the
per-second or window records of one node from a repository, flattens them
into a Polars DataFrame and writes interactive time-series charts with
Plotly:

1. Request rates (total and per HTTP verb).
2. Memory (resident and virtual size).
3. Average request timings (total, request, queue and I/O time).

Plots are saved as HTML files.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

# Third-party library imports
import plotly.graph_objects as go
import polars as pl

from .models.samples import RecordKind
from .storage.base import SampleRepository

logger = logging.getLogger(__name__)

# --- Module Constants ---

# Columns drawn on each chart, keyed by chart name: (column, legend label).
CHARTS: Dict[str, Sequence[tuple]] = {
    "requests": (
        ("requestsTotalPerSecond", "total"),
        ("requestsGetPerSecond", "GET"),
        ("requestsPostPerSecond", "POST"),
        ("requestsPutPerSecond", "PUT"),
        ("requestsDeletePerSecond", "DELETE"),
        ("requestsOtherPerSecond", "other"),
    ),
    "memory": (
        ("residentSize", "resident size"),
        ("virtualSize", "virtual size"),
    ),
    "times": (
        ("avgTotalTime", "total"),
        ("avgRequestTime", "request"),
        ("avgQueueTime", "queue"),
        ("avgIoTime", "I/O"),
    ),
}

CHART_TITLES = {
    "requests": ("Requests per second", "requests/s"),
    "memory": ("Process memory", "bytes"),
    "times": ("Average request timings", "seconds"),
}

PLOTTABLE_KINDS = (RecordKind.PER_SECOND, RecordKind.WINDOW)


def records_to_frame(records: List) -> pl.DataFrame:
    """
    Flatten per-second or window records into one row per record.

    The scalar fields of the ``system``, ``http`` and ``client`` blocks become
    columns named by their document keys; ``time`` becomes a Datetime column
    named ``Timestamp``. Distribution blocks are dropped.
    """
    rows = []
    for record in records:
        row = {"time": float(record.time)}
        for block in (record.system, record.http, record.client):
            row.update(block.to_dict())
        rows.append(row)

    if not rows:
        return pl.DataFrame()

    # Gauges may be ints in some rows and floats in others.
    df = pl.DataFrame(rows, infer_schema_length=None)
    df = df.with_columns(pl.all().cast(pl.Float64))
    return df.sort("time").with_columns(
        pl.from_epoch(pl.col("time"), time_unit="s").alias("Timestamp")
    )


def _save_plotly_figure(fig: go.Figure, base_filename: str, output_dir: Path) -> Optional[Path]:
    """
    Saves a Plotly figure as HTML.

    Returns:
        The written path, or None if writing failed.
    """
    plot_filename_html = output_dir / f"{base_filename}.html"
    try:
        fig.write_html(plot_filename_html)
        logger.info(f"Interactive plot saved to: {plot_filename_html}")
        return plot_filename_html
    except OSError as e:
        logger.error(f"Failed to save plot {plot_filename_html}: {e}", exc_info=True)
        return None


def _generate_line_plot(
    df: pl.DataFrame, chart: str, base_filename: str, output_dir: Path
) -> Optional[Path]:
    columns = [(col, label) for col, label in CHARTS[chart] if col in df.columns]
    if df.is_empty() or not columns:
        logger.warning(f"{chart} plot: no data for {base_filename}. Skipping.")
        return None

    title, unit = CHART_TITLES[chart]
    fig = go.Figure()
    timestamps = df["Timestamp"].to_list()
    for col, label in columns:
        fig.add_trace(
            go.Scatter(x=timestamps, y=df[col].to_list(), mode="lines+markers", name=label)
        )

    fig.update_layout(
        title=f"{title} - {base_filename}",
        xaxis_title="Time",
        yaxis_title=unit,
        legend_title_text="Series",
    )
    return _save_plotly_figure(fig, f"{base_filename}_{chart}", output_dir)


def plot_history(
    repository: SampleRepository,
    kind: RecordKind,
    output_dir: Path,
    node_id: Optional[str] = None,
    since: float = 0.0,
) -> List[Path]:
    """
    Plot the stored per-second or window history of one node.

    Args:
        repository: Repository holding the records
        kind: RecordKind.PER_SECOND or RecordKind.WINDOW
        output_dir: Directory for the HTML files; created if missing
        node_id: Node to plot, or None for a standalone repository
        since: Only plot records at or after this time

    Returns:
        Paths of the written plot files; empty when there was nothing to plot

    Raises:
        ValueError: If ``kind`` is not plottable
    """
    if kind not in PLOTTABLE_KINDS:
        raise ValueError(f"Cannot plot records of kind '{kind.value}'")

    records = repository.all_at_or_after(kind, since, node_id)
    if not records:
        logger.warning(f"No {kind.value} records found to plot.")
        return []

    df = records_to_frame(records)
    duration = df["time"].max() - df["time"].min()
    logger.info(f"Plotting {df.height} {kind.value} records spanning {duration:.0f}s")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    base_filename = kind.value if node_id is None else f"{node_id}_{kind.value}"

    written = []
    for chart in CHARTS:
        path = _generate_line_plot(df, chart, base_filename, output_dir)
        if path is not None:
            written.append(path)
    return written
