#!/usr/bin/env python3
"""
Edit tracker for a workspace directory.

This script watches a workspace and records line-level edits:
- Diffs every saved file against its previous save
- Records file creations and deletions
- Appends the buffered changes to the remote log every flush interval

Designed to run for the length of an editing session; stop it with Ctrl+C.

Usage:
    python scripts/track_edits.py [--config CONFIG_PATH] [--watch-path DIR] [--interval MINUTES]
"""

import argparse
import signal
import sys
import threading

from dotenv import load_dotenv

from editlog.providers import get_log_synchronizer
from editlog.sync.change_buffer import ChangeBuffer
from editlog.sync.edit_tracker import EditTracker
from editlog.sync.flush_scheduler import FlushScheduler
from editlog.utils.config_loader import ConfigLoader, ConfigurationError
from editlog.utils.logging_config import configure_from_config, get_logger
from editlog.watch.file_watcher import WorkspaceWatcher

log = get_logger(__name__)


def notify_failure(message: str) -> None:
    """Print a one-line failure notification for the operator."""
    print(f"✗ {message}", file=sys.stderr)


def run_tracker(
    config_path: str | None = None,
    watch_path: str | None = None,
    interval_minutes: float | None = None,
) -> int:
    """
    Run the tracker until interrupted.

    Args:
        config_path: Optional path to configuration file
        watch_path: Optional workspace directory overriding the config
        interval_minutes: Optional flush interval overriding the config

    Returns:
        Process exit code
    """
    try:
        config_loader = ConfigLoader()
        config = config_loader.load_config(config_path)
    except ConfigurationError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    configure_from_config(config.logging)
    for warning in config_loader.validate_config(config):
        print(f"⚠ {warning}", file=sys.stderr)

    buffer = ChangeBuffer()
    tracker = EditTracker(buffer)
    watcher = WorkspaceWatcher(
        tracker,
        watch_path=watch_path or config.tracker.watch_path,
        ignore_patterns=config.tracker.ignore_patterns,
    )
    scheduler = FlushScheduler(
        buffer,
        get_log_synchronizer(config, notify=notify_failure),
        interval_minutes=interval_minutes or config.tracker.flush_interval_minutes,
        flush_on_shutdown=config.tracker.flush_on_shutdown,
    )

    stop_requested = threading.Event()
    signal.signal(signal.SIGTERM, lambda *_: stop_requested.set())

    watcher.start()
    scheduler.start()
    log.info(
        "edit_tracker_running",
        watch_path=str(watcher.root),
        log_path=config.repository.log_path,
    )

    try:
        while not stop_requested.wait(1.0):
            pass
    except KeyboardInterrupt:
        pass
    finally:
        watcher.stop()
        report = scheduler.stop()
        if report is not None and not report.skipped:
            log.info(
                "final_flush_finished",
                success=report.success,
                records_flushed=report.records_flushed,
            )

    return 0


def main():
    """Main entry point for the edit tracker."""
    parser = argparse.ArgumentParser(
        description="Track line-level edits and append them to a remote log"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "--watch-path",
        type=str,
        help="Workspace directory to watch (overrides tracker.watch_path)",
        default=None,
    )
    parser.add_argument(
        "--interval",
        type=float,
        help="Flush interval in minutes (overrides tracker.flush_interval_minutes)",
        default=None,
    )

    args = parser.parse_args()
    load_dotenv()

    sys.exit(
        run_tracker(
            config_path=args.config,
            watch_path=args.watch_path,
            interval_minutes=args.interval,
        )
    )


if __name__ == "__main__":
    main()
