"""Turns file notifications into buffered change records."""

import structlog

from editlog.models.changes import ChangeAction, ChangeRecord
from editlog.sync.change_buffer import ChangeBuffer
from editlog.sync.line_differ import LineDiffer
from editlog.sync.snapshot_tracker import SnapshotTracker

log = structlog.stdlib.get_logger()


class EditTracker:
    """Reacts to file-created, file-deleted, and file-saved notifications."""

    def __init__(
        self,
        buffer: ChangeBuffer,
        snapshots: SnapshotTracker | None = None,
        differ: LineDiffer | None = None,
    ):
        """
        Initialize the tracker.

        Args:
            buffer: Buffer receiving change records
            snapshots: Snapshot tracker (a new one is created if None)
            differ: Line differ (a new one is created if None)
        """
        self._buffer = buffer
        self._snapshots = snapshots if snapshots is not None else SnapshotTracker()
        self._differ = differ or LineDiffer()

    @property
    def buffer(self) -> ChangeBuffer:
        return self._buffer

    def is_tracked(self, file_path: str) -> bool:
        """True once a save of the path has been observed."""
        return file_path in self._snapshots

    def file_created(self, file_path: str) -> ChangeRecord:
        log.info("file_created", file_path=file_path)
        return self._buffer.track_structural(ChangeAction.CREATED, file_path)

    def file_deleted(self, file_path: str) -> ChangeRecord:
        log.info("file_deleted", file_path=file_path)
        return self._buffer.track_structural(ChangeAction.DELETED, file_path)

    def file_saved(self, file_path: str, content: str) -> ChangeRecord | None:
        """
        Diff a saved file against its previous save.

        The first save of a path only records a snapshot.

        Args:
            file_path: Path of the saved file
            content: Full text of the file after the save

        Returns:
            The buffered record, or None if nothing was buffered
        """
        previous = self._snapshots.observe_save(file_path, content)
        if previous is None:
            return None

        segments = self._differ.diff(split_lines(previous), split_lines(content))
        if not segments:
            return None

        record = ChangeRecord(
            file_path=file_path,
            action=ChangeAction.CONTENT_CHANGED,
            segments=tuple(segments),
        )
        self._buffer.append(record)

        log.info("file_changes_tracked", file_path=file_path, segment_count=len(segments))
        return record


def split_lines(text: str) -> list[str]:
    """
    Split file text into lines the way an editor numbers them.

    Only "\\n" ends a line; a trailing "\\r" is stripped from each line.
    Form feeds and Unicode line separators stay inside their line. A
    final newline does not start an extra empty line.

    Args:
        text: Full file text

    Returns:
        Lines without their terminators
    """
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    if lines[-1] == "":
        lines.pop()
    return lines
