"""FastAPI dependency injection wiring.

Shared clients live on ``app.state``; they are created in :func:`startup` and
released in :func:`shutdown`.  Use cases are built per request from them.
"""

from __future__ import annotations

import logging

import httpx
from fastapi import Request
from starlette.datastructures import State

from repolens.domain.exceptions import PersistenceError, ReportNotFoundError
from repolens.domain.ports.report_store import ReportStore
from repolens.infrastructure.config import Settings, get_settings
from repolens.infrastructure.github_rest_adapter import GitHubRestAdapter
from repolens.infrastructure.mongo_report_store import MongoReportStore
from repolens.infrastructure.openai_adapter import OpenAIAdapter
from repolens.services.analyze_repo import AnalyzeRepoUseCase, CompareReposUseCase
from repolens.services.profile import ProfileUseCase
from repolens.services.review import ReviewRequester

logger = logging.getLogger(__name__)


async def startup(state: State, settings: Settings | None = None) -> None:
    """Initialise shared resources on *state* (the app's ``State``)."""
    settings = settings or get_settings()

    state.settings = settings
    # Renamed or transferred repositories answer with a 301.
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
    )

    if settings.llm_api_key:
        state.llm_gateway = OpenAIAdapter(
            api_key=settings.llm_api_key.get_secret_value(),
            model=settings.llm_model,
            base_url=settings.llm_base_url,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.llm_timeout_seconds,
        )
    else:
        logger.warning("LLM_API_KEY is not set; reviews will use fallback text")
        state.llm_gateway = None

    if settings.mongo_uri:
        store = MongoReportStore.from_uri(
            settings.mongo_uri.get_secret_value(), settings.mongo_database
        )
        try:
            await store.ensure_indexes()
        except PersistenceError as exc:
            logger.warning("Report index not created: %s", exc)
        state.report_store = store
    else:
        logger.warning("MONGO_URI is not set; reports will not be persisted")
        state.report_store = None


async def shutdown(state: State) -> None:
    """Release shared resources."""
    http_client = getattr(state, "http_client", None)
    if http_client is not None:
        await http_client.aclose()
        state.http_client = None

    llm_gateway = getattr(state, "llm_gateway", None)
    if llm_gateway is not None:
        await llm_gateway.close()
        state.llm_gateway = None

    report_store = getattr(state, "report_store", None)
    if report_store is not None:
        await report_store.close()
        state.report_store = None


def _github_adapter(request: Request) -> GitHubRestAdapter:
    state = request.app.state
    settings: Settings = state.settings
    assert state.http_client is not None, "startup() was not called"

    token = settings.github_token.get_secret_value() if settings.github_token else None
    return GitHubRestAdapter(
        client=state.http_client,
        token=token,
        raw_timeout=settings.raw_timeout_seconds,
    )


def get_analyze_use_case(request: Request) -> AnalyzeRepoUseCase:
    """Build the analysis use case with injected adapters."""
    state = request.app.state
    settings: Settings = state.settings
    return AnalyzeRepoUseCase(
        repo_fetcher=_github_adapter(request),
        reviewer=ReviewRequester(state.llm_gateway),
        report_store=state.report_store,
        sample_size=settings.sample_size,
        fallback_branches=settings.fallback_branches,
    )


def get_compare_use_case(request: Request) -> CompareReposUseCase:
    return CompareReposUseCase(get_analyze_use_case(request))


def get_profile_use_case(request: Request) -> ProfileUseCase:
    return ProfileUseCase(_github_adapter(request))


def get_report_store(request: Request) -> ReportStore:
    """Return the configured store; with persistence disabled every id is unknown."""
    store: ReportStore | None = request.app.state.report_store
    if store is None:
        raise ReportNotFoundError("Report storage is not configured.")
    return store
