"""Tests for the analysis and comparison pipelines."""

import asyncio

import pytest

from fakes import FakeLlm, FakeRepoFetcher, FakeReportStore, blob
from repolens.domain.entities import RepoMetadata, ReviewMode, TreeEntry
from repolens.domain.exceptions import (
    InvalidReferenceError,
    LlmError,
    ResourceNotFoundError,
)
from repolens.services.analyze_repo import (
    REPORT_ID_LENGTH,
    AnalyzeRepoUseCase,
    CompareReposUseCase,
    new_report_id,
)
from repolens.services.review import FALLBACK_REVIEW, ReviewRequester


def _scenario_file() -> str:
    lines = ["let x = 1;"] * 400
    lines[0] = "// TODO tidy up"
    lines[1] = "console.log(x);"
    lines[2] = "console.log(x + 1);"
    return "\n".join(lines)


def _use_case(fetcher, llm=None, store=None, **kwargs) -> AnalyzeRepoUseCase:
    return AnalyzeRepoUseCase(
        repo_fetcher=fetcher,
        reviewer=ReviewRequester(llm if llm is not None else FakeLlm()),
        report_store=store,
        **kwargs,
    )


class TestAnalyzeRepoUseCase:
    def test_scenario_summary(self):
        fetcher = FakeRepoFetcher(
            tree=[blob("README.md"), TreeEntry("src", "tree"), blob("src/app.js")],
            files={("main", "src/app.js"): _scenario_file()},
        )
        result = asyncio.run(_use_case(fetcher).execute("octo/demo"))
        s = result.summary
        assert s.repo == "octo/demo"
        assert s.total_files == 3
        assert s.sampled_files == 1
        assert s.analyzed_files == 1
        assert (s.long_files, s.todos, s.console_logs, s.secret_hints) == (1, 1, 2, 0)
        assert s.final_score == 92
        assert s.health == "Healthy"
        assert s.stars == 42
        assert result.review == "Looks tidy."
        assert result.mode is ReviewMode.DEV

    def test_tree_is_fetched_for_default_branch(self):
        fetcher = FakeRepoFetcher(
            metadata=RepoMetadata(
                owner="octo", name="demo", full_name="octo/demo", default_branch="trunk"
            ),
            tree=[blob("a.py")],
            files={("trunk", "a.py"): "print('hi')"},
        )
        result = asyncio.run(_use_case(fetcher).execute("octo/demo"))
        assert fetcher.tree_branches == ["trunk"]
        assert result.summary.analyzed_files == 1
        assert result.summary.language == "Mixed"

    def test_file_missing_on_every_branch_counts_as_sampled_not_analyzed(self):
        fetcher = FakeRepoFetcher(
            tree=[blob("gone.js"), blob("ok.js")],
            files={("master", "ok.js"): "// TODO\n"},
        )
        result = asyncio.run(_use_case(fetcher).execute("octo/demo"))
        s = result.summary
        assert s.sampled_files == 2
        assert s.analyzed_files == 1
        assert s.todos == 1
        assert s.final_score == 99
        assert ("main", "gone.js") in fetcher.calls
        assert ("master", "gone.js") in fetcher.calls

    def test_sample_size_caps_fetches(self):
        tree = [blob(f"f{i}.js") for i in range(30)]
        fetcher = FakeRepoFetcher(tree=tree)
        result = asyncio.run(_use_case(fetcher, sample_size=5).execute("octo/demo"))
        assert result.summary.sampled_files == 5
        assert {path for _, path in fetcher.calls} == {f"f{i}.js" for i in range(5)}

    def test_llm_failure_falls_back(self):
        fetcher = FakeRepoFetcher(tree=[blob("a.js")], files={("main", "a.js"): "x"})
        llm = FakeLlm(error=LlmError("timeout"))
        result = asyncio.run(_use_case(fetcher, llm=llm).execute("octo/demo"))
        assert result.review == FALLBACK_REVIEW
        assert result.summary.final_score == 100

    def test_report_is_persisted(self):
        fetcher = FakeRepoFetcher(tree=[blob("a.js")], files={("main", "a.js"): "x"})
        store = FakeReportStore()
        result = asyncio.run(_use_case(fetcher, store=store).execute("octo/demo", ReviewMode.HR))
        assert result.report_id is not None
        saved = store.reports[result.report_id]
        assert saved.summary == result.summary
        assert saved.ai_review == result.review
        assert saved.mode is ReviewMode.HR
        assert saved.created_at.tzinfo is not None

    def test_store_failure_leaves_result_unshared(self):
        fetcher = FakeRepoFetcher(tree=[blob("a.js")], files={("main", "a.js"): "x"})
        result = asyncio.run(
            _use_case(fetcher, store=FakeReportStore(fail=True)).execute("octo/demo")
        )
        assert result.report_id is None
        assert result.summary.analyzed_files == 1

    def test_without_store_there_is_no_report_id(self):
        fetcher = FakeRepoFetcher(tree=[blob("a.js")], files={("main", "a.js"): "x"})
        assert asyncio.run(_use_case(fetcher).execute("octo/demo")).report_id is None

    def test_invalid_reference_aborts_before_network(self):
        fetcher = FakeRepoFetcher()
        with pytest.raises(InvalidReferenceError):
            asyncio.run(_use_case(fetcher).execute("not a repo"))
        assert fetcher.tree_branches == []

    def test_upstream_error_propagates(self):
        fetcher = FakeRepoFetcher(metadata_error=ResourceNotFoundError("Repository not found."))
        with pytest.raises(ResourceNotFoundError) as exc_info:
            asyncio.run(_use_case(fetcher).execute("octo/missing"))
        assert exc_info.value.status_code == 404

    def test_empty_tree_scores_full_marks(self):
        result = asyncio.run(_use_case(FakeRepoFetcher()).execute("octo/empty"))
        assert result.summary.total_files == 0
        assert result.summary.analyzed_files == 0
        assert result.summary.final_score == 100


class TestCompareReposUseCase:
    def test_runs_two_independent_pipelines(self):
        fetcher = FakeRepoFetcher(tree=[blob("a.js")], files={("main", "a.js"): "console.log(1)"})
        compare = CompareReposUseCase(_use_case(fetcher))
        left, right = asyncio.run(compare.execute("octo/one", "octo/two"))
        assert left.summary.repo == "octo/one"
        assert right.summary.repo == "octo/two"
        assert left.summary.final_score == right.summary.final_score == 98

    def test_invalid_second_reference(self):
        compare = CompareReposUseCase(_use_case(FakeRepoFetcher()))
        with pytest.raises(InvalidReferenceError):
            asyncio.run(compare.execute("octo/one", ""))


def test_new_report_id_is_short_hex():
    report_id = new_report_id()
    assert len(report_id) == REPORT_ID_LENGTH
    int(report_id, 16)
