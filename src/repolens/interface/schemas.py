"""Pydantic response DTOs for the API boundary."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from repolens.domain.entities import AnalysisResult, Report, ReviewMode, UserProfile


class AnalysisResponse(BaseModel):
    """Successful response from ``GET /analyze``."""

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
    insights: list[str]
    ai_review: str
    mode: ReviewMode
    report_id: str | None = None

    @classmethod
    def from_result(cls, result: AnalysisResult) -> AnalysisResponse:
        return cls(
            **result.summary.to_dict(),
            ai_review=result.review,
            mode=result.mode,
            report_id=result.report_id,
        )


class ReportResponse(AnalysisResponse):
    """A stored report, as returned by ``GET /reports/{report_id}``."""

    report_id: str
    created_at: datetime

    @classmethod
    def from_report(cls, report: Report) -> ReportResponse:
        return cls(
            **report.summary.to_dict(),
            ai_review=report.ai_review,
            mode=report.mode,
            report_id=report.report_id,
            created_at=report.created_at,
        )


class CompareResponse(BaseModel):
    left: AnalysisResponse
    right: AnalysisResponse


class BestRepo(BaseModel):
    name: str
    stars: int
    language: str | None = None
    url: str | None = None


class ProfileResponse(BaseModel):
    """Successful response from ``GET /profile``."""

    username: str
    avatar: str | None
    followers: int
    following: int
    public_repos: int
    total_stars: int
    created_at: str | None
    top_languages: list[tuple[str, int]]
    best_repo: BestRepo | None

    @classmethod
    def from_profile(cls, profile: UserProfile) -> ProfileResponse:
        best = profile.best_repo
        return cls(
            username=profile.username,
            avatar=profile.avatar,
            followers=profile.followers,
            following=profile.following,
            public_repos=profile.public_repos,
            total_stars=profile.total_stars,
            created_at=profile.created_at,
            top_languages=profile.top_languages,
            best_repo=(
                BestRepo(name=best.name, stars=best.stars, language=best.language, url=best.url)
                if best
                else None
            ),
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    error: str
    details: Any | None = None
