"""Pydantic models for line segments, change records, and log entries."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SegmentKind(str, Enum):
    """Classification of a contiguous run of changed lines."""

    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"


class ChangeAction(str, Enum):
    """What happened to a file."""

    CREATED = "created"
    DELETED = "deleted"
    CONTENT_CHANGED = "content_changed"

    @property
    def is_structural(self) -> bool:
        """Created and deleted events carry file content, not segments."""
        return self is not ChangeAction.CONTENT_CHANGED


class ChangeSegment(BaseModel):
    """A contiguous run of lines classified as added, deleted, or modified."""

    model_config = ConfigDict(frozen=True)

    kind: SegmentKind = Field(default=..., description="Segment classification")
    start_line: int = Field(default=..., ge=1, description="First line of the run (1-based)")
    end_line: int = Field(default=..., ge=1, description="Last line of the run (1-based, inclusive)")
    before_text: str | None = Field(
        default=None, description="Old lines of the run, each terminated by a newline"
    )
    after_text: str | None = Field(
        default=None, description="New lines of the run, each terminated by a newline"
    )

    @model_validator(mode="after")
    def validate_range_and_text(self) -> "ChangeSegment":
        """Check the line range and that each kind carries the text it needs."""
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line ({self.end_line}) must not precede start_line ({self.start_line})"
            )
        if self.kind is not SegmentKind.ADDED and self.before_text is None:
            raise ValueError(f"{self.kind.value} segment requires before_text")
        if self.kind is not SegmentKind.DELETED and self.after_text is None:
            raise ValueError(f"{self.kind.value} segment requires after_text")
        return self

    @property
    def line_count(self) -> int:
        """Number of lines covered by the segment."""
        return self.end_line - self.start_line + 1


class ChangeRecord(BaseModel):
    """One buffered change to one file.

    Structural records (created/deleted) carry the raw file content.
    Content records carry the ordered diff segments of a save.
    """

    model_config = ConfigDict(frozen=True)

    file_path: str = Field(default=..., min_length=1, description="Path of the changed file")
    action: ChangeAction = Field(default=..., description="Kind of change")
    content: str | None = Field(
        default=None, description="Raw file content for created/deleted records"
    )
    segments: tuple[ChangeSegment, ...] = Field(
        default=(), description="Ordered diff segments for content_changed records"
    )

    @model_validator(mode="after")
    def validate_payload(self) -> "ChangeRecord":
        """Structural records have no segments; content records have at least one."""
        if self.action.is_structural:
            if self.segments:
                raise ValueError(f"{self.action.value} record cannot carry segments")
        elif not self.segments:
            raise ValueError("content_changed record requires at least one segment")
        return self


class LogEntry(BaseModel):
    """A batch of change records stamped with the time it was flushed."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default=..., description="When the entry was written")
    records: tuple[ChangeRecord, ...] = Field(
        default=(), description="Records in arrival order"
    )
