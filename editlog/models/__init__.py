"""Data models for the edit log tracker."""

from editlog.models.changes import (
    ChangeAction,
    ChangeRecord,
    ChangeSegment,
    LogEntry,
    SegmentKind,
)
from editlog.models.config import AppConfig, LoggingConfig, RepositoryConfig, TrackerConfig
from editlog.models.repository import InvalidRepositoryReference, RepositoryRef

__all__ = [
    "ChangeAction",
    "ChangeRecord",
    "ChangeSegment",
    "LogEntry",
    "SegmentKind",
    "AppConfig",
    "LoggingConfig",
    "RepositoryConfig",
    "TrackerConfig",
    "InvalidRepositoryReference",
    "RepositoryRef",
]
