"""File system monitoring for the workspace.

The watchdog observer thread delivers every event for the workspace.
Handlers translate them into the three notifications the tracker reacts
to:

    created  -> EditTracker.file_created
    deleted  -> EditTracker.file_deleted
    modified -> EditTracker.file_saved (with the file's current text)
    moved    -> file_deleted(source), then file_saved(destination) when the
                destination was saved before (a save by rename), else
                file_created(destination)

Because all events arrive on the one observer thread, saves of the same
path never overlap.
"""

import os
from fnmatch import fnmatch
from pathlib import Path
from typing import Sequence

import structlog
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from editlog.sync.edit_tracker import EditTracker

log = structlog.stdlib.get_logger()


class WorkspaceEventHandler(FileSystemEventHandler):
    """Forwards file events to the owning WorkspaceWatcher."""

    def __init__(self, watcher: "WorkspaceWatcher"):
        self.watcher = watcher

    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self.watcher._on_created(_event_path(event.src_path))

    def on_deleted(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self.watcher._on_deleted(_event_path(event.src_path))

    def on_modified(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self.watcher._on_modified(_event_path(event.src_path))

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        self.watcher._on_moved(_event_path(event.src_path), _event_path(event.dest_path))


class WorkspaceWatcher:
    """Watches a workspace directory and feeds an EditTracker."""

    def __init__(
        self,
        tracker: EditTracker,
        watch_path: str | Path = ".",
        ignore_patterns: Sequence[str] = (),
    ):
        """
        Initialize the watcher.

        Args:
            tracker: Tracker receiving file notifications
            watch_path: Workspace root, watched recursively
            ignore_patterns: Glob patterns relative to the root that are skipped
        """
        self.tracker = tracker
        self.root = Path(watch_path).resolve()
        self.ignore_patterns = tuple(ignore_patterns)
        self.observer = Observer()
        self._running = False

    def start(self) -> None:
        """Start the observer thread."""
        if self._running:
            log.warning("workspace_watcher_already_running")
            return

        if not self.root.is_dir():
            raise NotADirectoryError(f"Workspace directory not found: {self.root}")

        self.observer.schedule(WorkspaceEventHandler(self), str(self.root), recursive=True)
        self.observer.start()
        self._running = True
        log.info("workspace_watcher_started", root=str(self.root))

    def stop(self) -> None:
        """Stop the observer thread."""
        if not self._running:
            return

        self._running = False
        self.observer.stop()
        self.observer.join()
        log.info("workspace_watcher_stopped", root=str(self.root))

    def is_ignored(self, path: Path) -> bool:
        """Check a path against the ignore patterns."""
        try:
            relative = path.resolve().relative_to(self.root).as_posix()
        except ValueError:
            relative = path.as_posix()
        return any(fnmatch(relative, pattern) for pattern in self.ignore_patterns)

    def _on_created(self, path: Path) -> None:
        if self.is_ignored(path):
            return
        self.tracker.file_created(str(path))

    def _on_deleted(self, path: Path) -> None:
        if self.is_ignored(path):
            return
        self.tracker.file_deleted(str(path))

    def _on_modified(self, path: Path) -> None:
        if self.is_ignored(path):
            return

        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            log.debug("modified_file_vanished", file_path=str(path))
            return
        except UnicodeDecodeError:
            log.debug("non_text_file_skipped", file_path=str(path))
            return
        except OSError as e:
            log.warning("modified_file_unreadable", file_path=str(path), error=str(e))
            return

        self.tracker.file_saved(str(path), content)

    def _on_moved(self, source: Path, destination: Path) -> None:
        self._on_deleted(source)
        # Editors that save through a temp file rename it over the target
        if self.tracker.is_tracked(str(destination)):
            self._on_modified(destination)
        else:
            self._on_created(destination)


def _event_path(raw: str | bytes) -> Path:
    return Path(os.fsdecode(raw))
