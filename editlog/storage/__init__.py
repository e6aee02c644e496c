"""Remote storage for the edit log."""

from editlog.storage.github_store import GitHubLogStore
from editlog.storage.log_store import (
    LogStoreError,
    RemoteAuthError,
    RemoteConflict,
    RemoteLogState,
    RemoteLogStore,
    RemoteNotFound,
    RemoteTransportError,
)

__all__ = [
    "GitHubLogStore",
    "LogStoreError",
    "RemoteAuthError",
    "RemoteConflict",
    "RemoteLogState",
    "RemoteLogStore",
    "RemoteNotFound",
    "RemoteTransportError",
]
