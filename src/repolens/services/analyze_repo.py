"""Analyze-repository use case: the main orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the ports (:class:`RepoFetcher`, :class:`LlmGateway` via the review
requester, and :class:`ReportStore`) and the pure service modules.  The
interface layer injects concrete adapters at runtime.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Sequence

from repolens.domain.entities import (
    AnalysisResult,
    AnalysisSummary,
    FindingTotals,
    Report,
    ReviewMode,
)
from repolens.domain.exceptions import PersistenceError
from repolens.domain.ports.report_store import ReportStore
from repolens.domain.ports.repo_fetcher import RepoFetcher
from repolens.domain.value_objects import RepoRef
from repolens.services.content_fetcher import (
    DEFAULT_FALLBACK_BRANCHES,
    candidate_branches,
    fetch_sample,
)
from repolens.services.review import ReviewRequester
from repolens.services.sampler import DEFAULT_SAMPLE_SIZE, sample_source_files
from repolens.services.scanner import scan
from repolens.services.scorer import build_insights, compute_score, health_label

logger = logging.getLogger(__name__)

REPORT_ID_LENGTH = 8


def new_report_id() -> str:
    """Short random id for shareable report URLs."""
    return uuid.uuid4().hex[:REPORT_ID_LENGTH]


# ── Use case ────────────────────────────────────────────────────────────────


class AnalyzeRepoUseCase:
    """Orchestrates the full reference → scored summary → review pipeline.

    Parameters
    ----------
    repo_fetcher:
        Adapter that can fetch metadata, tree and raw content from GitHub.
    reviewer:
        Produces the prose review (falls back to canned text on failure).
    report_store:
        Optional persistence; ``None`` means reports are not shareable.
    sample_size:
        Maximum number of source files whose content is inspected.
    fallback_branches:
        Branches tried after the default branch when fetching raw content.
    """

    def __init__(
        self,
        repo_fetcher: RepoFetcher,
        reviewer: ReviewRequester,
        report_store: ReportStore | None = None,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        fallback_branches: Sequence[str] = DEFAULT_FALLBACK_BRANCHES,
    ) -> None:
        self._fetcher = repo_fetcher
        self._reviewer = reviewer
        self._store = report_store
        self._sample_size = sample_size
        self._fallback_branches = tuple(fallback_branches)

    # ── Public entry point ──────────────────────────────────────────────

    async def execute(
        self, reference: str, mode: ReviewMode = ReviewMode.DEV
    ) -> AnalysisResult:
        """Run the full pipeline and return the summary, review and report id."""
        ref = RepoRef.from_string(reference)
        logger.info("Analysing %s (mode=%s)", ref.full_name, mode.value)

        summary = await self.summarize(ref)
        review = await self._reviewer.review(summary, mode)
        report_id = await self._persist(summary, review, mode)

        return AnalysisResult(summary=summary, review=review, mode=mode, report_id=report_id)

    async def summarize(self, ref: RepoRef) -> AnalysisSummary:
        """Fetch, sample, scan and score one repository."""
        # 1. Metadata first (need default_branch), then the tree
        metadata = await self._fetcher.fetch_metadata(ref)
        tree = await self._fetcher.fetch_tree(ref, metadata.default_branch)

        # 2. Sample a prefix of the source files
        sample = sample_source_files(tree, self._sample_size)
        logger.info(
            "Sampling %d of %d entries from %s", len(sample), len(tree), ref.full_name
        )

        # 3. Fetch contents concurrently, then scan what arrived
        branches = candidate_branches(metadata.default_branch, self._fallback_branches)
        contents = await fetch_sample(self._fetcher, ref, sample, branches)
        findings = [scan(text) if text is not None else None for text in contents]

        # 4. Aggregate and score
        totals = FindingTotals.from_findings(findings)
        score = compute_score(totals)

        return AnalysisSummary(
            repo=metadata.full_name,
            stars=metadata.stars,
            forks=metadata.forks,
            language=metadata.language or "Mixed",
            default_branch=metadata.default_branch,
            total_files=len(tree),
            sampled_files=len(sample),
            analyzed_files=sum(1 for text in contents if text is not None),
            long_files=totals.long_files,
            todos=totals.todos,
            console_logs=totals.console_logs,
            secret_hints=totals.secret_hints,
            final_score=score,
            health=health_label(score),
            insights=build_insights(totals),
        )

    # ── Persistence ─────────────────────────────────────────────────────

    async def _persist(
        self, summary: AnalysisSummary, review: str, mode: ReviewMode
    ) -> str | None:
        """Save a report; a store failure leaves the analysis unshared."""
        if self._store is None:
            return None

        report = Report(
            report_id=new_report_id(),
            repo=summary.repo,
            mode=mode,
            summary=summary,
            ai_review=review,
            created_at=datetime.now(timezone.utc),
        )
        try:
            await self._store.save(report)
        except PersistenceError as exc:
            logger.warning("Report for %s not saved: %s", summary.repo, exc)
            return None
        return report.report_id


class CompareReposUseCase:
    """Runs two independent analyses side by side."""

    def __init__(self, analyze: AnalyzeRepoUseCase) -> None:
        self._analyze = analyze

    async def execute(
        self, first: str, second: str, mode: ReviewMode = ReviewMode.DEV
    ) -> tuple[AnalysisResult, AnalysisResult]:
        # Validate both before any network traffic
        RepoRef.from_string(first)
        RepoRef.from_string(second)
        left, right = await asyncio.gather(
            self._analyze.execute(first, mode),
            self._analyze.execute(second, mode),
        )
        return left, right
