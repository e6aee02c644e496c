"""Last-known content of every saved file."""

import structlog

log = structlog.stdlib.get_logger()


class SnapshotTracker:
    """Remembers the content of each file as of its most recent save.

    The first save of a path only records its content; every later save
    returns the previous content (the "before" side of the diff) and
    replaces it. Entries are never removed.

    Calls for the same path must not overlap. The file watcher delivers
    all events from a single thread, which guarantees this.
    """

    def __init__(self) -> None:
        self._snapshots: dict[str, str] = {}

    def observe_save(self, file_path: str, new_content: str) -> str | None:
        """
        Record the content of a save.

        Args:
            file_path: Path of the saved file
            new_content: Full text of the file after the save

        Returns:
            The content recorded by the previous save, or None on the first save
        """
        previous = self._snapshots.get(file_path)
        self._snapshots[file_path] = new_content

        if previous is None:
            log.debug("snapshot_initialized", file_path=file_path, length=len(new_content))
        return previous

    def get(self, file_path: str) -> str | None:
        """Return the recorded content of a path without updating it."""
        return self._snapshots.get(file_path)

    def __contains__(self, file_path: object) -> bool:
        return file_path in self._snapshots

    def __len__(self) -> int:
        return len(self._snapshots)
