"""Periodic flushing of the change buffer."""

import threading

import structlog

from editlog.sync.change_buffer import ChangeBuffer
from editlog.sync.log_synchronizer import LogSynchronizer
from editlog.sync.models import FlushReport

log = structlog.stdlib.get_logger()


class FlushScheduler:
    """Drains the buffer into the synchronizer every ``interval_minutes``.

    Thread model:
        Timer thread:
            - Waits on a stop event for the flush interval
            - Calls flush_pending() on every tick
            - An unexpected exception from a flush is logged with its
              traceback and the thread keeps ticking

        Flush guard:
            - A non-blocking lock admits one flush at a time
            - A tick that finds a flush in progress is skipped, so two
              conditional writes against the log are never in flight

    The buffer is drained before any remote I/O starts. Records appended
    while a flush is in flight stay in the buffer for the next cycle.
    """

    def __init__(
        self,
        buffer: ChangeBuffer,
        synchronizer: LogSynchronizer,
        interval_minutes: float = 30.0,
        flush_on_shutdown: bool = True,
    ):
        """
        Initialize the scheduler.

        Args:
            buffer: Buffer to drain
            synchronizer: Synchronizer that writes drained records
            interval_minutes: Minutes between flushes (default: 30)
            flush_on_shutdown: Flush once more when stop() is called
        """
        if interval_minutes <= 0:
            raise ValueError("interval_minutes must be positive")

        self._buffer = buffer
        self._synchronizer = synchronizer
        self._interval = interval_minutes * 60
        self._flush_on_shutdown = flush_on_shutdown
        self._flush_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

        log.info("flush_scheduler_initialized", interval_seconds=self._interval)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the timer thread."""
        if self.running:
            log.warning("flush_scheduler_already_running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="editlog-flush", daemon=True)
        self._thread.start()
        log.info("flush_scheduler_started")

    def stop(self, timeout: float | None = 30.0) -> FlushReport | None:
        """
        Stop the timer thread.

        Args:
            timeout: Maximum seconds to wait for the timer thread

        Returns:
            Report of the final flush, if one ran
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        log.info("flush_scheduler_stopped")

        if self._flush_on_shutdown:
            return self.flush_pending(wait=True)
        return None

    def flush_pending(self, wait: bool = False) -> FlushReport | None:
        """
        Drain the buffer and flush the drained records.

        Args:
            wait: Block until an in-progress flush finishes instead of skipping

        Returns:
            The flush report, or None if the call was skipped because
            another flush was in progress
        """
        if not self._flush_lock.acquire(blocking=wait):
            log.warning("flush_skipped_in_progress")
            return None

        try:
            records = self._buffer.drain_all()
            return self._synchronizer.flush(records)
        finally:
            self._flush_lock.release()

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            log.debug("flush_tick", buffered=len(self._buffer))
            try:
                self.flush_pending()
            except Exception:
                # The drained records are lost; the next tick runs normally
                log.exception("flush_cycle_crashed")
