"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class RepoLensError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidReferenceError(RepoLensError):
    """The supplied repository reference or username is malformed."""


# ── Upstream (GitHub) errors ────────────────────────────────────────────────


class UpstreamError(RepoLensError):
    """The hosting API failed; ``status_code`` is passed through to the client.

    Failures without a usable upstream status (transport errors, unfollowed
    redirects) default to 500.
    """

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.status_code = status_code


class ResourceNotFoundError(UpstreamError):
    """The repository or user does not exist or is not visible (404)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=404)


class AccessDeniedError(UpstreamError):
    """Access to the resource was denied (403)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=403)


class GitHubRateLimitError(UpstreamError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


# ── Per-file content errors (absorbed by the pipeline) ──────────────────────


class ContentUnavailableError(RepoLensError):
    """Raw content for a single file could not be retrieved."""


class ContentNotFoundError(ContentUnavailableError):
    """The file does not exist on the requested branch (404)."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class LlmError(RepoLensError):
    """Any error originating from the LLM provider."""


# ── Persistence errors ──────────────────────────────────────────────────────


class PersistenceError(RepoLensError):
    """The report store could not be read or written."""


class ReportNotFoundError(RepoLensError):
    """No report is stored under the requested id."""
