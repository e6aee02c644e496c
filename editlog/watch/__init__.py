"""Workspace file watching."""

from editlog.watch.file_watcher import WorkspaceEventHandler, WorkspaceWatcher

__all__ = ["WorkspaceEventHandler", "WorkspaceWatcher"]
