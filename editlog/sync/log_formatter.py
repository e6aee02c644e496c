"""Text layout of log entries appended to the remote log."""

import structlog

from editlog.models.changes import (
    ChangeAction,
    ChangeRecord,
    ChangeSegment,
    LogEntry,
    SegmentKind,
)

log = structlog.stdlib.get_logger()

# Labels already used by existing remote logs
ACTION_LABELS: dict[ChangeAction, str] = {
    ChangeAction.CREATED: "Added",
    ChangeAction.DELETED: "Deleted",
    ChangeAction.CONTENT_CHANGED: "Modified",
}

SEGMENT_LABELS: dict[SegmentKind, str] = {
    SegmentKind.ADDED: "Added",
    SegmentKind.DELETED: "Deleted",
    SegmentKind.MODIFIED: "Modified",
}


class LogFormatter:
    """Serializes log entries into the plain-text log format.

    An entry looks like::

        --- Log Entry at 2024-05-01T10:30:00+02:00 ---
        Added, file /work/notes.txt
        Modified, in file /work/main.py:
        Changes: Modified from line 2 to 2
        **FROM**
        old
        **TO**
        new
    """

    def format_entry(self, entry: LogEntry) -> str:
        """
        Format a whole entry: header line plus one block per record.

        Args:
            entry: Log entry to serialize

        Returns:
            Entry text ending with a newline
        """
        lines = [f"--- Log Entry at {entry.timestamp.isoformat(timespec='seconds')} ---\n"]
        lines.extend(f"{self.format_record(record)}\n" for record in entry.records)
        text = "".join(lines)

        log.debug("log_entry_formatted", record_count=len(entry.records), length=len(text))
        return text

    def format_record(self, record: ChangeRecord) -> str:
        """Format a single record, without a trailing newline."""
        label = ACTION_LABELS[record.action]
        if record.action.is_structural:
            return f"{label}, file {record.file_path}"
        return (
            f"{label}, in file {record.file_path}: \n"
            f"Changes: {self.format_segments(record.segments)}"
        )

    def format_segments(self, segments: tuple[ChangeSegment, ...] | list[ChangeSegment]) -> str:
        return "\n".join(self.format_segment(segment) for segment in segments)

    def format_segment(self, segment: ChangeSegment) -> str:
        header = (
            f"{SEGMENT_LABELS[segment.kind]} from line {segment.start_line} to {segment.end_line}\n"
        )
        if segment.kind is SegmentKind.ADDED:
            return header + (segment.after_text or "")
        if segment.kind is SegmentKind.DELETED:
            return header + (segment.before_text or "")
        return f"{header}**FROM**\n{segment.before_text}**TO**\n{segment.after_text}"

    def append_entry(self, existing: str, entry_text: str) -> str:
        """
        Append entry text to existing log content.

        The entry is separated from prior content by a single blank line,
        or used alone when there is no prior content.

        Args:
            existing: Current content of the remote log
            entry_text: Formatted entry

        Returns:
            Combined content
        """
        if not existing:
            return entry_text
        if existing.endswith("\n"):
            return f"{existing}\n{entry_text}"
        return f"{existing}\n\n{entry_text}"
