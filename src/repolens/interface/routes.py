"""API routes: thin controllers that delegate to the use cases."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from repolens.domain.entities import ReviewMode
from repolens.domain.exceptions import InvalidReferenceError
from repolens.domain.ports.report_store import ReportStore
from repolens.interface.dependencies import (
    get_analyze_use_case,
    get_compare_use_case,
    get_profile_use_case,
    get_report_store,
)
from repolens.interface.schemas import (
    AnalysisResponse,
    CompareResponse,
    ErrorResponse,
    ProfileResponse,
    ReportResponse,
)
from repolens.services.analyze_repo import AnalyzeRepoUseCase, CompareReposUseCase
from repolens.services.profile import ProfileUseCase

router = APIRouter()

_UPSTREAM_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid reference"},
    403: {"model": ErrorResponse, "description": "Access denied or rate limited"},
    404: {"model": ErrorResponse, "description": "Repository or user not found"},
    429: {"model": ErrorResponse, "description": "GitHub API rate limit exceeded"},
}


@router.get("/analyze", response_model=AnalysisResponse, responses=_UPSTREAM_RESPONSES)
async def analyze(
    repo: str | None = Query(None, description="owner/repo or repository URL"),
    mode: ReviewMode = ReviewMode.DEV,
    use_case: AnalyzeRepoUseCase = Depends(get_analyze_use_case),
) -> AnalysisResponse:
    """Analyse one public GitHub repository."""
    if not repo or not repo.strip():
        raise InvalidReferenceError("Repo URL required")
    result = await use_case.execute(repo, mode)
    return AnalysisResponse.from_result(result)


@router.get("/compare", response_model=CompareResponse, responses=_UPSTREAM_RESPONSES)
async def compare(
    repo1: str | None = Query(None),
    repo2: str | None = Query(None),
    mode: ReviewMode = ReviewMode.DEV,
    use_case: CompareReposUseCase = Depends(get_compare_use_case),
) -> CompareResponse:
    """Analyse two repositories independently and return both results."""
    if not (repo1 and repo1.strip()) or not (repo2 and repo2.strip()):
        raise InvalidReferenceError("Two repo URLs required")
    left, right = await use_case.execute(repo1, repo2, mode)
    return CompareResponse(
        left=AnalysisResponse.from_result(left),
        right=AnalysisResponse.from_result(right),
    )


@router.get(
    "/reports/{report_id}",
    response_model=ReportResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Report not found"},
        500: {"model": ErrorResponse, "description": "Report store unavailable"},
    },
)
async def get_report(
    report_id: str,
    store: ReportStore = Depends(get_report_store),
) -> ReportResponse:
    """Fetch a previously stored report by its short id."""
    report = await store.get(report_id)
    return ReportResponse.from_report(report)


@router.get("/profile", response_model=ProfileResponse, responses=_UPSTREAM_RESPONSES)
async def profile(
    user: str | None = Query(None, description="GitHub login"),
    use_case: ProfileUseCase = Depends(get_profile_use_case),
) -> ProfileResponse:
    """Summarise a GitHub user's public profile."""
    result = await use_case.execute(user or "")
    return ProfileResponse.from_profile(result)
