"""Change detection and log synchronization."""

from editlog.sync.change_buffer import ChangeBuffer
from editlog.sync.edit_tracker import EditTracker
from editlog.sync.flush_scheduler import FlushScheduler
from editlog.sync.line_differ import LineDiffer
from editlog.sync.log_formatter import LogFormatter
from editlog.sync.log_synchronizer import LogSynchronizer
from editlog.sync.models import FlushReport, FlushState
from editlog.sync.snapshot_tracker import SnapshotTracker

__all__ = [
    "ChangeBuffer",
    "EditTracker",
    "FlushReport",
    "FlushScheduler",
    "FlushState",
    "LineDiffer",
    "LogFormatter",
    "LogSynchronizer",
    "SnapshotTracker",
]
