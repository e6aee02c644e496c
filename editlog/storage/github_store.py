"""GitHub contents API implementation of the remote log store."""

import base64
from typing import Any
from urllib.parse import quote

import requests
import structlog
from requests.exceptions import RequestException

from editlog.models.repository import RepositoryRef
from editlog.storage.log_store import (
    RemoteAuthError,
    RemoteConflict,
    RemoteLogState,
    RemoteNotFound,
    RemoteTransportError,
)

log = structlog.stdlib.get_logger()

DEFAULT_API_BASE_URL = "https://api.github.com"
RAW_MEDIA_TYPE = "application/vnd.github.raw+json"


class GitHubLogStore:
    """Reads and conditionally writes a file through the GitHub contents API.

    The blob SHA returned by the API is the revision token: a PUT that
    carries a stale SHA is rejected with 409, and a PUT without a SHA for a
    file that already exists is rejected with 422.
    """

    def __init__(
        self,
        repository: RepositoryRef,
        access_token: str,
        api_base_url: str = DEFAULT_API_BASE_URL,
        branch: str | None = None,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        """
        Initialize the store.

        Args:
            repository: Repository holding the log file
            access_token: Bearer token for the API
            api_base_url: API root, e.g. https://api.github.com
            branch: Optional branch; None uses the repository default branch
            timeout: Per-request timeout in seconds
            session: Optional requests session (a new one is created if None)
        """
        self._repository = repository
        self._api_base_url = str(api_base_url).rstrip("/")
        self._branch = branch
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/vnd.github+json",
        }
        log.info(
            "github_log_store_initialized",
            repository=repository.full_name,
            api_base_url=self._api_base_url,
            branch=branch,
        )

    @property
    def repository(self) -> RepositoryRef:
        return self._repository

    def get_revision(self, name: str) -> str | None:
        """
        Get the blob SHA of a file.

        Args:
            name: Path of the file inside the repository

        Returns:
            The SHA, or None if the file does not exist
        """
        data = self._get_metadata(name)
        if data is None:
            log.info("remote_file_not_found", name=name)
            return None
        log.debug("remote_file_found", name=name, revision=data.get("sha"))
        return data.get("sha")

    def get_content(self, name: str) -> str | None:
        """
        Get the decoded text of a file.

        Args:
            name: Path of the file inside the repository

        Returns:
            UTF-8 text, or None if the file does not exist
        """
        data = self._get_metadata(name)
        if data is None:
            return None
        return self._decode_content(name, data)

    def read_state(self, name: str) -> RemoteLogState:
        """
        Read revision and content from a single request.

        Args:
            name: Path of the file inside the repository

        Returns:
            RemoteLogState; revision is None when the file does not exist
        """
        data = self._get_metadata(name)
        if data is None:
            log.info("remote_file_not_found", name=name)
            return RemoteLogState()

        state = RemoteLogState(revision=data.get("sha"), content=self._decode_content(name, data))
        log.info(
            "remote_state_read",
            name=name,
            revision=state.revision,
            content_length=len(state.content),
        )
        return state

    def write_content(
        self,
        name: str,
        content: str,
        revision: str | None = None,
        message: str | None = None,
    ) -> str:
        """
        Create or update a file.

        Args:
            name: Path of the file inside the repository
            content: Full new text of the file
            revision: SHA the update is based on; None creates the file
            message: Commit message

        Returns:
            The SHA of the written blob

        Raises:
            RemoteConflict: If the revision is stale or the file already exists
            RemoteAuthError: If the token is rejected
            RemoteNotFound: If the repository or branch does not exist
            RemoteTransportError: On network failures or unexpected responses
        """
        body: dict[str, Any] = {
            "message": message or ("Appending to logs" if revision else "Creating logs file"),
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
        }
        if revision:
            body["sha"] = revision
        if self._branch:
            body["branch"] = self._branch

        url = self._contents_url(name)
        log.info(
            "writing_remote_file",
            url=url,
            revision=revision,
            content_length=len(content),
        )

        try:
            response = self._session.put(
                url, headers=self._headers, json=body, timeout=self._timeout
            )
        except RequestException as e:
            log.error("remote_write_failed", name=name, error=str(e))
            raise RemoteTransportError(f"Failed to write {name}: {e}") from e

        self._check_response(response, name)

        try:
            new_revision = response.json()["content"]["sha"]
        except (ValueError, KeyError, TypeError) as e:
            raise RemoteTransportError(f"Unexpected write response for {name}: {e}") from e
        log.info(
            "remote_file_written",
            name=name,
            status=response.status_code,
            revision=new_revision,
        )
        return new_revision

    def _contents_url(self, name: str) -> str:
        return (
            f"{self._api_base_url}/repos/{self._repository.owner}/"
            f"{self._repository.name}/contents/{quote(name.lstrip('/'), safe='/')}"
        )

    def _params(self) -> dict[str, str]:
        return {"ref": self._branch} if self._branch else {}

    def _get_metadata(self, name: str) -> dict[str, Any] | None:
        """Fetch the contents API JSON for a file, or None on 404."""
        url = self._contents_url(name)
        try:
            response = self._session.get(
                url, headers=self._headers, params=self._params(), timeout=self._timeout
            )
        except RequestException as e:
            log.error("remote_read_failed", name=name, error=str(e))
            raise RemoteTransportError(f"Failed to read {name}: {e}") from e

        if response.status_code == 404:
            return None
        self._check_response(response, name)

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteTransportError(f"Response for {name} is not JSON: {e}") from e
        if not isinstance(data, dict) or data.get("type", "file") != "file":
            raise RemoteTransportError(f"{name} is not a file in {self._repository.full_name}")
        return data

    def _decode_content(self, name: str, data: dict[str, Any]) -> str:
        """Decode the base64 payload, falling back to the raw media type.

        Files over 1 MB come back with an empty content field and
        encoding "none".
        """
        encoded = data.get("content") or ""
        if data.get("encoding") == "base64" and (encoded or not data.get("size")):
            try:
                return base64.b64decode(encoded).decode("utf-8")
            except ValueError as e:
                raise RemoteTransportError(f"Content of {name} could not be decoded: {e}") from e

        log.debug("fetching_raw_content", name=name, size=data.get("size"))
        try:
            response = self._session.get(
                self._contents_url(name),
                headers={**self._headers, "Accept": RAW_MEDIA_TYPE},
                params=self._params(),
                timeout=self._timeout,
            )
        except RequestException as e:
            raise RemoteTransportError(f"Failed to read {name}: {e}") from e
        if response.status_code == 404:
            raise RemoteNotFound(f"{name} disappeared while reading")
        self._check_response(response, name)
        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RemoteTransportError(f"{name} is not valid UTF-8 text: {e}") from e

    def _check_response(self, response: requests.Response, name: str) -> None:
        """Map error statuses onto log store errors."""
        status = response.status_code
        if status < 400:
            return

        log.error(
            "remote_request_rejected",
            name=name,
            status=status,
            response=response.text[:500],
        )
        if status in (401, 403):
            raise RemoteAuthError(f"Access to {self._repository.full_name} denied ({status})")
        if status in (409, 422):
            raise RemoteConflict(f"Revision conflict writing {name} ({status})")
        if status == 404:
            raise RemoteNotFound(f"{self._repository.full_name} or its branch was not found")
        raise RemoteTransportError(f"Unexpected response {status} for {name}")
