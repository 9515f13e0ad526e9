from __future__ import annotations

import pytest

from fakes import FakeLlm, FakeRepoFetcher, FakeReportStore, make_summary
from repolens.domain.entities import AnalysisSummary


@pytest.fixture
def summary() -> AnalysisSummary:
    return make_summary()


@pytest.fixture
def fetcher() -> FakeRepoFetcher:
    return FakeRepoFetcher()


@pytest.fixture
def llm() -> FakeLlm:
    return FakeLlm()


@pytest.fixture
def store() -> FakeReportStore:
    return FakeReportStore()
