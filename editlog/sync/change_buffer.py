"""In-memory buffer of change records awaiting the next flush."""

import threading
from pathlib import Path

import structlog

from editlog.models.changes import ChangeAction, ChangeRecord

log = structlog.stdlib.get_logger()


class ChangeBuffer:
    """Ordered collection of change records with atomic drain.

    Records keep their arrival order across all files. ``append`` and
    ``drain_all`` are guarded by a lock so the watcher thread can keep
    appending while the flush thread drains.
    """

    def __init__(self) -> None:
        self._records: list[ChangeRecord] = []
        self._lock = threading.Lock()

    def append(self, record: ChangeRecord) -> None:
        """
        Append a record to the tail of the buffer.

        Args:
            record: Change record to buffer
        """
        with self._lock:
            self._records.append(record)
            size = len(self._records)

        log.debug(
            "change_buffered",
            file_path=record.file_path,
            action=record.action.value,
            segment_count=len(record.segments),
            buffer_size=size,
        )

    def track_structural(
        self, action: ChangeAction, file_path: str, content: str | None = None
    ) -> ChangeRecord:
        """
        Buffer a file creation or deletion.

        When no content is supplied the file is read from disk. A file that
        is already gone, or cannot be read as text, gives an empty payload.

        Args:
            action: ChangeAction.CREATED or ChangeAction.DELETED
            file_path: Path of the file
            content: Optional file content

        Returns:
            The buffered record

        Raises:
            ValueError: If action is not a structural action
        """
        if not action.is_structural:
            raise ValueError(f"{action.value} is not a structural action")

        if content is None:
            content = _read_best_effort(file_path)

        record = ChangeRecord(file_path=file_path, action=action, content=content)
        self.append(record)
        return record

    def drain_all(self) -> list[ChangeRecord]:
        """
        Take every buffered record and leave the buffer empty.

        Returns:
            Records in arrival order
        """
        with self._lock:
            records = self._records
            self._records = []

        if records:
            log.info("change_buffer_drained", record_count=len(records))
        return records

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


def _read_best_effort(file_path: str) -> str:
    try:
        return Path(file_path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""
    except (OSError, UnicodeDecodeError) as e:
        log.debug("structural_content_unreadable", file_path=file_path, error=str(e))
        return ""
