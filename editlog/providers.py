"""Centralized provider module for the remote log store.

This module provides factory functions for the store and the synchronizer
that writes to it. Developers can modify get_log_store to swap the remote
backend without changing other code.

Default implementation:
- RemoteLogStore: GitHubLogStore (GitHub contents API over requests)
"""

from functools import partial
from typing import Callable

import structlog

from editlog.models.config import AppConfig, RepositoryConfig
from editlog.models.repository import RepositoryRef
from editlog.storage.github_store import GitHubLogStore
from editlog.storage.log_store import RemoteLogStore
from editlog.sync.log_synchronizer import LogSynchronizer

log = structlog.stdlib.get_logger()


def get_log_store(repository: RepositoryRef, config: RepositoryConfig) -> RemoteLogStore:
    """Get the configured remote log store implementation.

    Developers: Modify this function to change the remote backend.
    Default: GitHubLogStore

    Example - GitHub Enterprise:
        set repository.api_base_url to https://github.example.com/api/v3

    Args:
        repository: Parsed owner/name of the log repository
        config: Repository section of the app config

    Returns:
        RemoteLogStore instance

    Raises:
        ValueError: If the access token is empty
    """
    if not config.access_token or not config.access_token.strip():
        error_msg = "access_token cannot be empty"
        log.error("get_log_store_failed", error=error_msg)
        raise ValueError(error_msg)

    log.info(
        "initializing_log_store",
        repository=repository.full_name,
        provider="GitHub",
    )
    return GitHubLogStore(
        repository=repository,
        access_token=config.access_token,
        api_base_url=str(config.api_base_url),
        branch=config.branch,
        timeout=config.request_timeout,
    )


def get_log_synchronizer(
    config: AppConfig, notify: Callable[[str], None] | None = None
) -> LogSynchronizer:
    """Build a synchronizer that writes to the configured repository.

    Args:
        config: Application configuration
        notify: Callback for one-line failure notifications

    Returns:
        LogSynchronizer instance
    """
    return LogSynchronizer(
        store_factory=partial(get_log_store, config=config.repository),
        repository_url=config.repository.url,
        log_path=config.repository.log_path,
        notify=notify,
    )
