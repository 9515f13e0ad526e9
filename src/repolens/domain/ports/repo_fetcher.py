"""Port: repository fetcher, defined by the domain and implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repolens.domain.entities import GitHubUser, RepoListing, RepoMetadata, TreeEntry
from repolens.domain.value_objects import RepoRef


class RepoFetcher(Protocol):
    """Abstract contract for fetching GitHub repository data."""

    async def fetch_metadata(self, ref: RepoRef) -> RepoMetadata:
        """Return high-level repository metadata."""
        ...

    async def fetch_tree(self, ref: RepoRef, branch: str) -> list[TreeEntry]:
        """Return the recursive file tree for the given branch."""
        ...

    async def fetch_raw_content(self, ref: RepoRef, path: str, branch: str) -> str:
        """Return the raw text of one file on one branch.

        Raises ``ContentNotFoundError`` for a 404 and
        ``ContentUnavailableError`` for any other failure.
        """
        ...

    async def fetch_user(self, username: str) -> GitHubUser:
        """Return the public profile of a user."""
        ...

    async def fetch_user_repos(self, username: str) -> list[RepoListing]:
        """Return the first page of a user's own public repositories."""
        ...
