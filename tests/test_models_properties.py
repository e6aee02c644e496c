"""Property-based tests for change models.

Feature: edit-log-sync
"""

from datetime import datetime, timezone

import pytest
import structlog
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from editlog.models import ChangeAction, ChangeRecord, ChangeSegment, LogEntry, SegmentKind

log = structlog.stdlib.get_logger()


@st.composite
def segment_strategy(draw: st.DrawFn) -> ChangeSegment:
    """Generate valid ChangeSegment instances."""
    kind = draw(st.sampled_from(list(SegmentKind)))
    start = draw(st.integers(min_value=1, max_value=10_000))
    end = draw(st.integers(min_value=start, max_value=start + 100))
    text = st.text(max_size=50).map(lambda s: s + "\n")
    return ChangeSegment(
        kind=kind,
        start_line=start,
        end_line=end,
        before_text=None if kind is SegmentKind.ADDED else draw(text),
        after_text=None if kind is SegmentKind.DELETED else draw(text),
    )


@given(segment=segment_strategy())
def test_segment_line_count(segment: ChangeSegment) -> None:
    log.info("test_segment_line_count", start=segment.start_line, end=segment.end_line)

    assert segment.line_count == segment.end_line - segment.start_line + 1
    assert segment.line_count >= 1


@given(start=st.integers(min_value=2, max_value=1000), data=st.data())
def test_segment_end_before_start_is_rejected(start: int, data: st.DataObject) -> None:
    end = data.draw(st.integers(min_value=1, max_value=start - 1))

    with pytest.raises(ValidationError):
        ChangeSegment(kind=SegmentKind.ADDED, start_line=start, end_line=end, after_text="x\n")


@pytest.mark.parametrize("line", [0, -1])
def test_segment_lines_are_one_based(line: int) -> None:
    with pytest.raises(ValidationError):
        ChangeSegment(kind=SegmentKind.ADDED, start_line=line, end_line=1, after_text="x\n")


@pytest.mark.parametrize(
    "kind, before_text, after_text",
    [
        (SegmentKind.ADDED, None, None),
        (SegmentKind.DELETED, None, None),
        (SegmentKind.MODIFIED, "old\n", None),
        (SegmentKind.MODIFIED, None, "new\n"),
    ],
)
def test_segment_requires_text_for_its_kind(kind, before_text, after_text) -> None:
    with pytest.raises(ValidationError):
        ChangeSegment(
            kind=kind, start_line=1, end_line=1, before_text=before_text, after_text=after_text
        )


@given(segments=st.lists(segment_strategy(), min_size=1, max_size=5))
def test_content_record_keeps_segment_order(segments: list[ChangeSegment]) -> None:
    record = ChangeRecord(
        file_path="/w/a.txt", action=ChangeAction.CONTENT_CHANGED, segments=tuple(segments)
    )

    assert list(record.segments) == segments
    assert not record.action.is_structural


def test_content_record_requires_segments() -> None:
    with pytest.raises(ValidationError):
        ChangeRecord(file_path="/w/a.txt", action=ChangeAction.CONTENT_CHANGED)


@pytest.mark.parametrize("action", [ChangeAction.CREATED, ChangeAction.DELETED])
def test_structural_record_rejects_segments(action: ChangeAction) -> None:
    segment = ChangeSegment(kind=SegmentKind.ADDED, start_line=1, end_line=1, after_text="x\n")

    with pytest.raises(ValidationError):
        ChangeRecord(file_path="/w/a.txt", action=action, content="", segments=(segment,))


def test_record_requires_file_path() -> None:
    with pytest.raises(ValidationError):
        ChangeRecord(file_path="", action=ChangeAction.CREATED, content="")


def test_models_are_immutable() -> None:
    record = ChangeRecord(file_path="/w/a.txt", action=ChangeAction.CREATED, content="x")
    entry = LogEntry(timestamp=datetime(2024, 5, 1, tzinfo=timezone.utc), records=(record,))

    with pytest.raises(ValidationError):
        record.file_path = "/w/b.txt"
    with pytest.raises(ValidationError):
        entry.records = ()
