"""In-memory fakes for the ports, shared by the test modules."""

from __future__ import annotations

from datetime import datetime, timezone

from repolens.domain.entities import (
    AnalysisSummary,
    GitHubUser,
    Report,
    RepoListing,
    RepoMetadata,
    ReviewMode,
    TreeEntry,
)
from repolens.domain.exceptions import (
    ContentNotFoundError,
    PersistenceError,
    ReportNotFoundError,
)
from repolens.domain.value_objects import RepoRef


class FakeRepoFetcher:
    """In-memory RepoFetcher.

    ``files`` maps ``(branch, path)`` to content, or to an exception instance
    that is raised for that lookup.  Every raw fetch is recorded in ``calls``.
    """

    def __init__(
        self,
        tree: list[TreeEntry] | None = None,
        files: dict[tuple[str, str], object] | None = None,
        metadata: RepoMetadata | None = None,
        metadata_error: Exception | None = None,
        user: GitHubUser | None = None,
        repos: list[RepoListing] | None = None,
    ) -> None:
        self.tree = tree or []
        self.files = files or {}
        self.metadata = metadata
        self.metadata_error = metadata_error
        self.user = user
        self.repos = repos or []
        self.calls: list[tuple[str, str]] = []
        self.tree_branches: list[str] = []

    async def fetch_metadata(self, ref: RepoRef) -> RepoMetadata:
        if self.metadata_error is not None:
            raise self.metadata_error
        return self.metadata or RepoMetadata(
            owner=ref.owner,
            name=ref.name,
            full_name=ref.full_name,
            default_branch="main",
            stars=42,
            forks=7,
            language="JavaScript",
        )

    async def fetch_tree(self, ref: RepoRef, branch: str) -> list[TreeEntry]:
        self.tree_branches.append(branch)
        return list(self.tree)

    async def fetch_raw_content(self, ref: RepoRef, path: str, branch: str) -> str:
        self.calls.append((branch, path))
        value = self.files.get((branch, path))
        if value is None:
            raise ContentNotFoundError(f"{path} not found on {branch}")
        if isinstance(value, Exception):
            raise value
        return str(value)

    async def fetch_user(self, username: str) -> GitHubUser:
        assert self.user is not None
        return self.user

    async def fetch_user_repos(self, username: str) -> list[RepoListing]:
        return list(self.repos)


class FakeLlm:
    def __init__(self, reply: str = "Looks tidy.", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[tuple[str, str]] = []

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.prompts.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.reply


class FakeReportStore:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.reports: dict[str, Report] = {}

    async def ensure_indexes(self) -> None:
        return None

    async def save(self, report: Report) -> None:
        if self.fail:
            raise PersistenceError("store offline")
        self.reports[report.report_id] = report

    async def get(self, report_id: str) -> Report:
        if self.fail:
            raise PersistenceError("store offline")
        try:
            return self.reports[report_id]
        except KeyError:
            raise ReportNotFoundError(f"Report '{report_id}' not found.") from None


def blob(path: str, size: int = 100) -> TreeEntry:
    return TreeEntry(path=path, type="blob", size=size)


def make_summary(**overrides: object) -> AnalysisSummary:
    values: dict[str, object] = {
        "repo": "octo/demo",
        "stars": 42,
        "forks": 7,
        "language": "JavaScript",
        "default_branch": "main",
        "total_files": 3,
        "sampled_files": 2,
        "analyzed_files": 2,
        "long_files": 1,
        "todos": 1,
        "console_logs": 2,
        "secret_hints": 0,
        "final_score": 92,
        "health": "Healthy",
        "insights": [],
    }
    values.update(overrides)
    return AnalysisSummary(**values)  # type: ignore[arg-type]


def make_report(report_id: str = "abcd1234", **overrides: object) -> Report:
    return Report(
        report_id=report_id,
        repo="octo/demo",
        mode=ReviewMode.DEV,
        summary=make_summary(**overrides),
        ai_review="Looks tidy.",
        created_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )
