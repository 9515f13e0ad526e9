"""GitHub user profile summary."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from typing import Sequence

from repolens.domain.entities import RepoListing, UserProfile
from repolens.domain.ports.repo_fetcher import RepoFetcher
from repolens.domain.value_objects import GitHubUsername

logger = logging.getLogger(__name__)

TOP_LANGUAGES = 5


def top_languages(repos: Sequence[RepoListing], limit: int = TOP_LANGUAGES) -> list[tuple[str, int]]:
    """Repo count per language, most used first (ties broken by name)."""
    counts = Counter(repo.language for repo in repos if repo.language)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:limit]


def best_repo(repos: Sequence[RepoListing]) -> RepoListing | None:
    """Most-starred repository; the earliest listed wins a tie."""
    best: RepoListing | None = None
    for repo in repos:
        if best is None or repo.stars > best.stars:
            best = repo
    return best


class ProfileUseCase:
    def __init__(self, repo_fetcher: RepoFetcher) -> None:
        self._fetcher = repo_fetcher

    async def execute(self, username: str) -> UserProfile:
        login = str(GitHubUsername.from_string(username))
        logger.info("Building profile for %s", login)

        user, repos = await asyncio.gather(
            self._fetcher.fetch_user(login),
            self._fetcher.fetch_user_repos(login),
        )

        return UserProfile(
            username=user.login,
            avatar=user.avatar_url,
            followers=user.followers,
            following=user.following,
            public_repos=user.public_repos,
            total_stars=sum(repo.stars for repo in repos),
            created_at=user.created_at,
            top_languages=top_languages(repos),
            best_repo=best_repo(repos),
        )
