"""Data models for flush operations."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class FlushState(str, Enum):
    """Stage of the current flush cycle."""

    IDLE = "idle"
    READING_REMOTE = "reading_remote"
    APPENDING = "appending"
    WRITING = "writing"
    SUCCESS = "success"
    FAILED = "failed"


class FlushReport(BaseModel):
    """Report of one flush cycle."""

    records_flushed: int = Field(default=0, ge=0, description="Records included in the write")
    created: bool = Field(default=False, description="True if the log file was created")
    revision: str | None = Field(default=None, description="Revision after the write")
    start_time: datetime = Field(..., description="Flush start timestamp")
    end_time: datetime = Field(..., description="Flush end timestamp")
    duration_seconds: float = Field(default=0.0, ge=0.0, description="Flush duration in seconds")
    error: str | None = Field(default=None, description="Failure description, if any")

    @property
    def success(self) -> bool:
        """Check if the flush completed without errors."""
        return self.error is None

    @property
    def skipped(self) -> bool:
        """True when there was nothing to flush."""
        return self.success and self.records_flushed == 0
