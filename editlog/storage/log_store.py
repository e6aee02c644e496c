"""Remote log store interface, state model, and errors."""

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class LogStoreError(Exception):
    """Base class for remote log store failures."""


class RemoteNotFound(LogStoreError):
    """The named resource does not exist yet."""


class RemoteConflict(LogStoreError):
    """A conditional write used a stale or missing revision."""


class RemoteAuthError(LogStoreError):
    """The access credential was rejected."""


class RemoteTransportError(LogStoreError):
    """Network failure, timeout, or unexpected response from the store."""


class RemoteLogState(BaseModel):
    """Content of a remote resource and the revision it was read at."""

    model_config = ConfigDict(frozen=True)

    revision: str | None = Field(
        default=None, description="Opaque revision token. None if the resource does not exist."
    )
    content: str = Field(default="", description="Decoded text content")

    @property
    def exists(self) -> bool:
        return self.revision is not None


@runtime_checkable
class RemoteLogStore(Protocol):
    """Read-with-revision and conditional-write access to named text resources."""

    def get_revision(self, name: str) -> str | None:
        """Return the current revision of ``name``, or None if it does not exist."""
        ...

    def get_content(self, name: str) -> str | None:
        """Return the decoded content of ``name``, or None if it does not exist."""
        ...

    def read_state(self, name: str) -> RemoteLogState:
        """Return revision and content of ``name`` from one consistent read."""
        ...

    def write_content(
        self,
        name: str,
        content: str,
        revision: str | None = None,
        message: str | None = None,
    ) -> str:
        """Write ``content`` to ``name``, conditional on ``revision``.

        Omitting ``revision`` creates the resource. Returns the new revision.

        Raises:
            RemoteConflict: If ``revision`` is stale, or missing for an existing resource
            RemoteAuthError: If the credential is rejected
            RemoteTransportError: On network failures
        """
        ...
