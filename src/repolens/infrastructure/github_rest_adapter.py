"""GitHub REST API adapter: implements the RepoFetcher port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from urllib.parse import quote

import httpx

from repolens.domain.entities import (
    GitHubUser,
    RepoListing,
    RepoMetadata,
    TreeEntry,
)
from repolens.domain.exceptions import (
    AccessDeniedError,
    ContentNotFoundError,
    ContentUnavailableError,
    GitHubRateLimitError,
    ResourceNotFoundError,
    UpstreamError,
)
from repolens.domain.value_objects import RepoRef

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_RAW_BASE = "https://raw.githubusercontent.com"
_USER_AGENT = "repolens/1.0"


class GitHubRestAdapter:
    """Concrete RepoFetcher backed by the GitHub v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        raw_timeout: float = 5.0,
    ) -> None:
        self._client = client
        self._raw_timeout = raw_timeout
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": _USER_AGENT,
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def fetch_metadata(self, ref: RepoRef) -> RepoMetadata:
        """GET /repos/{owner}/{repo} → RepoMetadata."""
        resp = await self._api_get(f"/repos/{ref.owner}/{ref.name}", resource="Repository")
        data = resp.json()
        return RepoMetadata(
            owner=ref.owner,
            name=ref.name,
            full_name=data.get("full_name") or ref.full_name,
            default_branch=data.get("default_branch") or "main",
            stars=data.get("stargazers_count") or 0,
            forks=data.get("forks_count") or 0,
            language=data.get("language"),
            description=data.get("description"),
        )

    async def fetch_tree(self, ref: RepoRef, branch: str) -> list[TreeEntry]:
        """GET /repos/{owner}/{repo}/git/trees/{branch}?recursive=1 → [TreeEntry]."""
        resp = await self._api_get(
            f"/repos/{ref.owner}/{ref.name}/git/trees/{quote(branch)}",
            params={"recursive": "1"},
            resource="Branch tree",
        )
        data = resp.json()
        if data.get("truncated"):
            logger.warning("Tree for %s@%s was truncated by GitHub", ref.full_name, branch)

        return [
            TreeEntry(
                path=item["path"],
                type=item.get("type", "blob"),
                size=item.get("size", 0),
            )
            for item in data.get("tree", [])
        ]

    async def fetch_raw_content(self, ref: RepoRef, path: str, branch: str) -> str:
        """Fetch raw file content via raw.githubusercontent.com."""
        raw_url = f"{_RAW_BASE}/{ref.owner}/{ref.name}/{quote(branch)}/{quote(path)}"
        try:
            resp = await self._client.get(
                raw_url,
                headers={"User-Agent": _USER_AGENT},
                timeout=self._raw_timeout,
            )
        except httpx.HTTPError as exc:
            raise ContentUnavailableError(
                f"Network error fetching {raw_url}: {exc}"
            ) from exc

        if resp.status_code == 200:
            return resp.text

        if resp.status_code == 404:
            raise ContentNotFoundError(f"{path} not found on branch {branch}")

        raise ContentUnavailableError(
            f"raw.githubusercontent.com returned HTTP {resp.status_code} for {path}"
        )

    async def fetch_user(self, username: str) -> GitHubUser:
        """GET /users/{username} → GitHubUser."""
        resp = await self._api_get(f"/users/{username}", resource="User")
        data = resp.json()
        return GitHubUser(
            login=data.get("login") or username,
            avatar_url=data.get("avatar_url"),
            followers=data.get("followers") or 0,
            following=data.get("following") or 0,
            public_repos=data.get("public_repos") or 0,
            created_at=data.get("created_at"),
        )

    async def fetch_user_repos(self, username: str) -> list[RepoListing]:
        """GET /users/{username}/repos (first page, owner repos only)."""
        resp = await self._api_get(
            f"/users/{username}/repos",
            params={"per_page": "100", "type": "owner", "sort": "updated"},
            resource="User",
        )
        return [
            RepoListing(
                name=item.get("name", ""),
                stars=item.get("stargazers_count") or 0,
                language=item.get("language"),
                url=item.get("html_url"),
            )
            for item in resp.json()
        ]

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
        resource: str = "Resource",
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{_GITHUB_API}{endpoint}"
        try:
            resp = await self._client.get(
                url, headers=self._api_headers, params=params
            )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code == 200:
            return resp

        if resp.status_code == 404:
            raise ResourceNotFoundError(
                f"{resource} not found. Make sure it exists and is public."
            )

        if resp.status_code == 403:
            remaining = resp.headers.get("x-ratelimit-remaining", "")
            if remaining == "0":
                reset_raw = resp.headers.get("x-ratelimit-reset", "")
                try:
                    reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                except (ValueError, OSError):
                    reset_str = reset_raw or "unknown"
                raise GitHubRateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}. "
                    "Set the GITHUB_TOKEN environment variable to increase the limit.",
                    status_code=403,
                )
            raise AccessDeniedError(f"Access denied. The {resource.lower()} may be private.")

        if resp.status_code == 429:
            raise GitHubRateLimitError(
                "GitHub API rate limit exceeded (HTTP 429).", status_code=429
            )

        # Redirects are followed by the client; anything left is not an error status.
        if resp.status_code < 400:
            raise UpstreamError(
                f"GitHub API returned unexpected HTTP {resp.status_code} for {url}"
            )

        raise UpstreamError(
            f"GitHub API returned HTTP {resp.status_code} for {url}",
            status_code=resp.status_code,
        )
