"""
Command-line interface for the MyStats statistics historian.

This module provides the main CLI entry point: running the sampling and
windowing jobs, triggering single ticks, and inspecting or plotting the
stored history.
"""

import argparse
import json
import logging
import signal
import sys
import time
from pathlib import Path
from typing import List, Optional

from ..config import get_config, set_config_path
from ..models.results import TickResult
from ..models.samples import RecordKind
from ..validation import (
    ValidationError,
    handle_cli_error,
    validate_positive_float,
    validate_positive_integer,
)
from .orchestrator import StatisticsRunner

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mystats",
        description="Sample server statistics and keep per-second and windowed history.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config.toml. Defaults to conf/config.toml in the project root.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run the historian jobs until interrupted.")
    run_parser.add_argument(
        "--duration",
        type=float,
        help="Stop after this many seconds instead of waiting for SIGINT/SIGTERM.",
    )

    subparsers.add_parser("sample", help="Take one raw sample and derive its per-second sample.")
    subparsers.add_parser("average", help="Fold recent per-second samples into one window.")

    show_parser = subparsers.add_parser("show", help="Print stored records as JSON lines.")
    show_parser.add_argument("kind", choices=[k.value for k in RecordKind])
    show_parser.add_argument(
        "--since",
        type=float,
        default=None,
        help="Only show records from the last SINCE seconds.",
    )
    show_parser.add_argument(
        "--limit", type=int, default=20, help="Show at most the LIMIT most recent records."
    )

    plot_parser = subparsers.add_parser("plot", help="Write HTML charts of the stored history.")
    plot_parser.add_argument(
        "kind", choices=[RecordKind.PER_SECOND.value, RecordKind.WINDOW.value]
    )
    plot_parser.add_argument(
        "--output-dir", type=Path, default=Path("plots"), help="Directory for the HTML files."
    )
    return parser


def _log_tick(result: TickResult) -> None:
    if result.failed:
        logger.error(f"{result.job} tick failed: {result.reason}")
    elif result.reason:
        logger.info(f"{result.job} tick skipped: {result.reason}")
    else:
        logger.info(f"{result.job} tick stored {len(result.records)} record(s)")


def _run_command(runner: StatisticsRunner, args: argparse.Namespace) -> int:
    duration = None
    if args.duration is not None:
        duration = validate_positive_float(args.duration, field_name="--duration")

    # --- Graceful shutdown on SIGINT/SIGTERM ---
    def global_signal_handler(signum, frame):
        if runner.shutdown_requested:
            logger.warning("Shutdown already in progress. Please be patient.")
            return
        logger.info(
            f"Signal {signal.strsignal(signum)} received. Initiating graceful shutdown..."
        )
        runner.request_shutdown()

    previous_handlers = {
        signum: signal.signal(signum, global_signal_handler)
        for signum in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        runner.run(duration)
    finally:
        for signum, handler in previous_handlers.items():
            signal.signal(signum, handler)

    logger.info("Statistics historian stopped.")
    return 0


def _show_command(runner: StatisticsRunner, args: argparse.Namespace) -> int:
    limit = validate_positive_integer(args.limit, field_name="--limit")
    start = 0.0
    if args.since is not None:
        start = time.time() - validate_positive_float(args.since, field_name="--since")

    kind = RecordKind(args.kind)
    records = runner.repository.all_at_or_after(kind, start, runner.node_id)
    for record in records[-limit:]:
        print(json.dumps(record.to_dict(), sort_keys=True))
    logger.info(f"Showed {min(limit, len(records))} of {len(records)} {kind.value} records")
    return 0


def _plot_command(runner: StatisticsRunner, args: argparse.Namespace) -> int:
    from ..plotter import plot_history

    written = plot_history(
        runner.repository, RecordKind(args.kind), args.output_dir, node_id=runner.node_id
    )
    if not written:
        logger.warning("No plots were generated.")
        return 1
    return 0


def main_cli(argv: Optional[List[str]] = None) -> int:
    """
    Main command-line interface for the MyStats application.

    Args:
        argv: Arguments to parse; defaults to ``sys.argv[1:]``

    Returns:
        Process exit code

    Raises:
        SystemExit: On configuration errors or invalid arguments.
    """
    args = build_parser().parse_args(argv)

    if args.config is not None:
        set_config_path(args.config)

    # Load application configuration
    try:
        app_config = get_config()
    except (FileNotFoundError, ValidationError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            logger=logger,
        )

    logging.getLogger().setLevel(app_config.log_level)

    try:
        runner = StatisticsRunner(app_config, on_tick=_log_tick)

        if args.command == "run":
            return _run_command(runner, args)
        if args.command == "sample":
            return 0 if not runner.sample_once().failed else 1
        if args.command == "average":
            return 0 if not runner.average_once().failed else 1
        if args.command == "show":
            return _show_command(runner, args)
        if args.command == "plot":
            return _plot_command(runner, args)
    except ValidationError as e:
        handle_cli_error(
            error=e,
            context=f"'{args.command}' arguments",
            exit_code=2,
            logger=logger,
        )

    logger.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main_cli())
