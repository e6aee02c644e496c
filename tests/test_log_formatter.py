"""Tests for the log entry text format."""

from datetime import datetime, timezone

from editlog.models.changes import (
    ChangeAction,
    ChangeRecord,
    ChangeSegment,
    LogEntry,
    SegmentKind,
)
from editlog.sync.log_formatter import LogFormatter

TIMESTAMP = datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)


def modified_record() -> ChangeRecord:
    return ChangeRecord(
        file_path="/w/a.txt",
        action=ChangeAction.CONTENT_CHANGED,
        segments=(
            ChangeSegment(
                kind=SegmentKind.MODIFIED,
                start_line=2,
                end_line=2,
                before_text="b\n",
                after_text="x\n",
            ),
        ),
    )


def test_structural_records_use_file_line() -> None:
    formatter = LogFormatter()

    created = ChangeRecord(file_path="/w/new.txt", action=ChangeAction.CREATED, content="hi")
    deleted = ChangeRecord(file_path="/w/old.txt", action=ChangeAction.DELETED, content="")

    assert formatter.format_record(created) == "Added, file /w/new.txt"
    assert formatter.format_record(deleted) == "Deleted, file /w/old.txt"


def test_content_record_lists_changes() -> None:
    text = LogFormatter().format_record(modified_record())

    assert text == (
        "Modified, in file /w/a.txt: \n"
        "Changes: Modified from line 2 to 2\n**FROM**\nb\n**TO**\nx\n"
    )


def test_segments_are_joined_in_order() -> None:
    segments = (
        ChangeSegment(kind=SegmentKind.ADDED, start_line=3, end_line=4, after_text="c\nd\n"),
        ChangeSegment(kind=SegmentKind.DELETED, start_line=6, end_line=6, before_text="f\n"),
    )

    assert LogFormatter().format_segments(segments) == (
        "Added from line 3 to 4\nc\nd\n\nDeleted from line 6 to 6\nf\n"
    )


def test_entry_has_header_and_one_block_per_record() -> None:
    entry = LogEntry(
        timestamp=TIMESTAMP,
        records=(
            ChangeRecord(file_path="/w/new.txt", action=ChangeAction.CREATED, content=""),
            modified_record(),
        ),
    )

    assert LogFormatter().format_entry(entry) == (
        "--- Log Entry at 2024-05-01T10:30:00+00:00 ---\n"
        "Added, file /w/new.txt\n"
        "Modified, in file /w/a.txt: \n"
        "Changes: Modified from line 2 to 2\n**FROM**\nb\n**TO**\nx\n\n"
    )


def test_append_entry_to_missing_log_uses_entry_alone() -> None:
    assert LogFormatter().append_entry("", "entry\n") == "entry\n"


def test_append_entry_separates_with_one_blank_line() -> None:
    formatter = LogFormatter()

    assert formatter.append_entry("old\n", "entry\n") == "old\n\nentry\n"
    assert formatter.append_entry("old", "entry\n") == "old\n\nentry\n"
