"""Raw content retrieval with an ordered branch fallback."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Sequence

from repolens.domain.entities import TreeEntry
from repolens.domain.exceptions import ContentNotFoundError, ContentUnavailableError
from repolens.domain.ports.repo_fetcher import RepoFetcher
from repolens.domain.value_objects import RepoRef

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_BRANCHES: tuple[str, ...] = ("main", "master")


def candidate_branches(
    default_branch: str | None,
    fallbacks: Iterable[str] = DEFAULT_FALLBACK_BRANCHES,
) -> list[str]:
    """Default branch first, then the fallbacks, without duplicates."""
    ordered: list[str] = []
    for branch in (default_branch, *fallbacks):
        if branch and branch not in ordered:
            ordered.append(branch)
    return ordered


async def fetch_first_available(
    fetcher: RepoFetcher,
    ref: RepoRef,
    path: str,
    branches: Sequence[str],
) -> str | None:
    """Return the content of *path* from the first branch that has it.

    A 404 moves on to the next branch; any other failure gives up on the
    file.  Returns ``None`` instead of raising.
    """
    for branch in branches:
        try:
            return await fetcher.fetch_raw_content(ref, path, branch)
        except ContentNotFoundError:
            continue
        except ContentUnavailableError:
            logger.debug("Failed to fetch %s@%s, skipping", path, branch, exc_info=True)
            return None
    logger.debug("%s not found on any of %s", path, list(branches))
    return None


async def fetch_sample(
    fetcher: RepoFetcher,
    ref: RepoRef,
    sample: Sequence[TreeEntry],
    branches: Sequence[str],
) -> list[str | None]:
    """Fetch every sampled file concurrently; result order matches *sample*."""
    return list(
        await asyncio.gather(
            *(fetch_first_available(fetcher, ref, entry.path, branches) for entry in sample)
        )
    )
