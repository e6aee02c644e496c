"""Repository reference parsing."""

import re

from pydantic import BaseModel, ConfigDict, Field

# Matches https://github.com/owner/repo(.git), git@github.com:owner/repo(.git),
# ssh://git@github.com/owner/repo.git and the same shape on a GitHub Enterprise
# host. Exactly two path segments follow the host.
_REPOSITORY_PATTERN = re.compile(
    r"(?:[A-Za-z][\w+.-]*://)?(?:[^@/\s]+@)?[\w.-]+(?::\d+)?[/:]"
    r"([\w-]+)/([\w.-]+?)(?:\.git)?/?"
)


class InvalidRepositoryReference(ValueError):
    """Raised when a repository URL does not name an owner/repo pair."""


class RepositoryRef(BaseModel):
    """Owner/name pair identifying the repository that holds the log."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(default=..., min_length=1, description="Repository owner or organization")
    name: str = Field(default=..., min_length=1, description="Repository name")

    @classmethod
    def parse(cls, url: str) -> "RepositoryRef":
        """Extract the owner and repository name from a repository URL.

        Args:
            url: Repository URL, e.g. https://github.com/user/repo.git

        Returns:
            RepositoryRef for the URL

        Raises:
            InvalidRepositoryReference: If the URL is not <host>/<owner>/<repo>(.git), for
                example a nested group path such as https://host/org/sub/repo
        """
        match = _REPOSITORY_PATTERN.fullmatch(url.strip()) if url else None
        if not match:
            raise InvalidRepositoryReference(f"Invalid repository URL: {url!r}")
        return cls(owner=match.group(1), name=match.group(2))

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
