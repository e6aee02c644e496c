"""Appends buffered change records to the remote log."""

from datetime import datetime
from typing import Callable, Sequence

import structlog

from editlog.models.changes import ChangeRecord, LogEntry
from editlog.models.repository import InvalidRepositoryReference, RepositoryRef
from editlog.storage.log_store import LogStoreError, RemoteLogStore
from editlog.sync.log_formatter import LogFormatter
from editlog.sync.models import FlushReport, FlushState

log = structlog.stdlib.get_logger()

DEFAULT_LOG_PATH = "logs.txt"


def _local_now() -> datetime:
    return datetime.now().astimezone()


class LogSynchronizer:
    """Writes one log entry per flush cycle with an optimistic-concurrency append.

    Each cycle reads the current content and revision of the log, appends
    the formatted entry, and writes the result back conditional on the
    revision just read. The revision is never reused across cycles.

    Records passed to ``flush`` have already been drained from the buffer.
    When the write fails they are not re-buffered; the failure is logged
    and reported through ``notify``, and the next cycle starts fresh.
    """

    def __init__(
        self,
        store_factory: Callable[[RepositoryRef], RemoteLogStore],
        repository_url: str,
        log_path: str = DEFAULT_LOG_PATH,
        formatter: LogFormatter | None = None,
        notify: Callable[[str], None] | None = None,
        clock: Callable[[], datetime] = _local_now,
    ):
        """
        Initialize the synchronizer.

        Args:
            store_factory: Builds the remote store for a parsed repository reference
            repository_url: Configured repository URL, parsed when the first flush runs
            log_path: Path of the log file inside the repository
            formatter: Log entry formatter (a default one is created if None)
            notify: Callback receiving a one-line message for each failed flush
            clock: Source of entry timestamps
        """
        self._store_factory = store_factory
        self._repository_url = repository_url
        self._log_path = log_path
        self._formatter = formatter or LogFormatter()
        self._notify = notify
        self._clock = clock
        self._state = FlushState.IDLE
        self._store: RemoteLogStore | None = None

        log.info("log_synchronizer_initialized", log_path=log_path)

    @property
    def state(self) -> FlushState:
        return self._state

    def flush(self, records: Sequence[ChangeRecord]) -> FlushReport:
        """
        Append the records to the remote log as one entry.

        Args:
            records: Drained records in arrival order

        Returns:
            FlushReport describing the cycle

        Raises:
            Exception: Anything other than a remote store failure or an
                invalid repository reference is a programming error and
                propagates unchanged.
        """
        start_time = datetime.now()

        if not records:
            log.debug("flush_skipped_empty")
            return FlushReport(start_time=start_time, end_time=start_time)

        log.info("flush_started", record_count=len(records), log_path=self._log_path)

        try:
            return self._run_cycle(records, start_time)
        finally:
            self._state = FlushState.IDLE

    def _run_cycle(self, records: Sequence[ChangeRecord], start_time: datetime) -> FlushReport:
        try:
            store = self._get_store()

            self._state = FlushState.READING_REMOTE
            remote = store.read_state(self._log_path)

            self._state = FlushState.APPENDING
            entry = LogEntry(timestamp=self._clock(), records=tuple(records))
            entry_text = self._formatter.format_entry(entry)
            content = self._formatter.append_entry(
                remote.content if remote.exists else "", entry_text
            )

            self._state = FlushState.WRITING
            new_revision = store.write_content(
                self._log_path,
                content,
                revision=remote.revision,
                message="Appending to logs" if remote.exists else "Creating logs file",
            )

        except (InvalidRepositoryReference, LogStoreError) as e:
            return self._failed(start_time, len(records), e)

        self._state = FlushState.SUCCESS
        end_time = datetime.now()
        report = FlushReport(
            records_flushed=len(records),
            created=not remote.exists,
            revision=new_revision,
            start_time=start_time,
            end_time=end_time,
            duration_seconds=(end_time - start_time).total_seconds(),
        )

        log.info(
            "flush_completed",
            record_count=report.records_flushed,
            created=report.created,
            revision=report.revision,
            duration_seconds=report.duration_seconds,
        )
        return report

    def _get_store(self) -> RemoteLogStore:
        """Parse the repository URL and build the store on first use.

        Raises:
            InvalidRepositoryReference: If the URL does not name an owner/repo pair
        """
        if self._store is None:
            repository = RepositoryRef.parse(self._repository_url)
            self._store = self._store_factory(repository)
        return self._store

    def _failed(self, start_time: datetime, record_count: int, error: Exception) -> FlushReport:
        end_time = datetime.now()
        message = f"Error updating {self._log_path}: {error}"

        log.error(
            "flush_failed",
            error=str(error),
            error_type=type(error).__name__,
            records_lost=record_count,
            stage=self._state.value,
        )
        self._state = FlushState.FAILED
        if self._notify is not None:
            self._notify(message)

        return FlushReport(
            records_flushed=0,
            start_time=start_time,
            end_time=end_time,
            duration_seconds=(end_time - start_time).total_seconds(),
            error=message,
        )
