"""Tests for the provider module.

Feature: edit-log-sync
"""

from unittest.mock import patch

import pytest
import structlog

from editlog.models import AppConfig, ChangeAction, ChangeRecord, RepositoryConfig, RepositoryRef
from editlog.providers import get_log_store, get_log_synchronizer
from editlog.storage import GitHubLogStore, RemoteLogState, RemoteLogStore
from editlog.sync.log_synchronizer import LogSynchronizer

log = structlog.stdlib.get_logger()

REPOSITORY = RepositoryRef(owner="octo", name="activity")


def test_get_log_store_returns_github_store() -> None:
    config = RepositoryConfig(
        url="https://github.com/octo/activity",
        access_token="ghp_test",
        branch="logs",
        api_base_url="https://github.example.com/api/v3",
    )

    store = get_log_store(REPOSITORY, config)

    assert isinstance(store, GitHubLogStore)
    assert isinstance(store, RemoteLogStore)
    assert store.repository == REPOSITORY


def test_get_log_store_rejects_blank_token() -> None:
    config = RepositoryConfig(url="https://github.com/octo/activity", access_token="   ")

    with pytest.raises(ValueError):
        get_log_store(REPOSITORY, config)


def test_get_log_synchronizer_uses_configured_repository() -> None:
    config = AppConfig(
        repository={
            "url": "git@github.com:octo/activity.git",
            "access_token": "ghp_test",
            "log_path": "audit.txt",
        }
    )

    with patch("editlog.providers.GitHubLogStore") as store_class:
        store = store_class.return_value
        store.read_state.return_value = RemoteLogState()
        store.write_content.return_value = "sha-1"

        synchronizer = get_log_synchronizer(config)
        report = synchronizer.flush(
            [ChangeRecord(file_path="/w/a.txt", action=ChangeAction.CREATED, content="")]
        )

    assert isinstance(synchronizer, LogSynchronizer)
    assert report.success
    assert store_class.call_args.kwargs["repository"] == REPOSITORY
    store.read_state.assert_called_once_with("audit.txt")
