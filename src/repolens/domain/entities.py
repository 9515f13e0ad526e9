"""Domain entities: pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable


class ReviewMode(str, Enum):
    """Audience the generated review is written for."""

    DEV = "dev"
    HR = "hr"


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """A single node from the GitHub tree API (blob or sub-tree)."""

    path: str
    type: str  # "blob" or "tree"
    size: int = 0


@dataclass(frozen=True, slots=True)
class RepoMetadata:
    """High-level metadata about a GitHub repository."""

    owner: str
    name: str
    full_name: str
    default_branch: str
    stars: int = 0
    forks: int = 0
    language: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class FileFindings:
    """Heuristic counts for one scanned file."""

    is_long: bool = False
    todo_count: int = 0
    log_count: int = 0
    secret_hint_count: int = 0


@dataclass(frozen=True, slots=True)
class FindingTotals:
    """Findings summed over every file that was actually read."""

    long_files: int = 0
    todos: int = 0
    console_logs: int = 0
    secret_hints: int = 0

    @classmethod
    def from_findings(cls, findings: Iterable[FileFindings | None]) -> FindingTotals:
        long_files = todos = console_logs = secret_hints = 0
        for item in findings:
            if item is None:
                continue
            long_files += int(item.is_long)
            todos += item.todo_count
            console_logs += item.log_count
            secret_hints += item.secret_hint_count
        return cls(
            long_files=long_files,
            todos=todos,
            console_logs=console_logs,
            secret_hints=secret_hints,
        )


@dataclass(frozen=True, slots=True)
class AnalysisSummary:
    """Aggregated, request-scoped result of one repository analysis."""

    repo: str
    stars: int
    forks: int
    language: str
    default_branch: str
    total_files: int
    sampled_files: int
    analyzed_files: int
    long_files: int
    todos: int
    console_logs: int
    secret_hints: int
    final_score: int
    health: str
    insights: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisSummary:
        return cls(**{**data, "insights": list(data.get("insights") or [])})


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """What the analysis pipeline hands back to the interface layer."""

    summary: AnalysisSummary
    review: str
    mode: ReviewMode
    report_id: str | None = None


@dataclass(frozen=True, slots=True)
class Report:
    """A persisted, write-once analysis snapshot."""

    report_id: str
    repo: str
    mode: ReviewMode
    summary: AnalysisSummary
    ai_review: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class GitHubUser:
    """Subset of ``GET /users/{login}`` used by the profile summary."""

    login: str
    avatar_url: str | None
    followers: int
    following: int
    public_repos: int
    created_at: str | None


@dataclass(frozen=True, slots=True)
class RepoListing:
    """One entry from ``GET /users/{login}/repos``."""

    name: str
    stars: int
    language: str | None
    url: str | None


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Aggregated public profile of a GitHub user."""

    username: str
    avatar: str | None
    followers: int
    following: int
    public_repos: int
    total_stars: int
    created_at: str | None
    top_languages: list[tuple[str, int]] = field(default_factory=list)
    best_repo: RepoListing | None = None
