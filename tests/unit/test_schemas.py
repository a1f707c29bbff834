"""Tests for core schemas: RawSearchResult, EnrichedJob, QuerySpec, ProviderRequest."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from jobmatch.core.schemas import (
    EnrichedJob,
    ProviderRequest,
    QueryOutcome,
    QuerySpec,
    RawSearchResult,
    SalaryRange,
)


def _make_job(**overrides: object) -> EnrichedJob:
    defaults: dict[str, object] = {
        "id": "job-1",
        "title": "Senior Python Engineer",
        "url": "https://example.com/jobs/1",
    }
    defaults.update(overrides)
    return EnrichedJob(**defaults)  # type: ignore[arg-type]


def _make_query(**overrides: object) -> QuerySpec:
    defaults: dict[str, object] = {
        "text": "python engineer",
        "strategy": "keyword",
        "label": "keyword",
    }
    defaults.update(overrides)
    return QuerySpec(**defaults)  # type: ignore[arg-type]


class TestRawSearchResult:
    def test_defaults(self) -> None:
        r = RawSearchResult(url="https://example.com/1")
        assert r.id == ""
        assert r.title == ""
        assert r.highlights == []
        assert r.score is None
        assert r.strategy == ""

    def test_url_required(self) -> None:
        with pytest.raises(ValidationError):
            RawSearchResult()  # type: ignore[call-arg]


class TestEnrichedJob:
    def test_defaults(self) -> None:
        job = _make_job()
        assert job.company == "Unknown"
        assert job.location == "Remote"
        assert job.job_type == "Full-time"
        assert job.experience_level == "Mid-level"
        assert job.relevance_score == 0.0
        assert job.match_score is None

    def test_frozen_model(self) -> None:
        job = _make_job()
        with pytest.raises(ValidationError):
            job.title = "New Title"  # type: ignore[misc]

    def test_score_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            _make_job(relevance_score=1.01)
        with pytest.raises(ValidationError):
            _make_job(relevance_score=-0.1)

    def test_model_copy_update(self) -> None:
        job = _make_job()
        scored = job.model_copy(update={"relevance_score": 0.8})
        assert scored.relevance_score == 0.8
        assert job.relevance_score == 0.0

    def test_mean_highlight_score(self) -> None:
        assert _make_job().mean_highlight_score is None
        assert _make_job(highlight_scores=[0.2, 0.6]).mean_highlight_score == pytest.approx(0.4)

    def test_published_at(self) -> None:
        job = _make_job(published_date="2026-10-01T12:00:00.000Z")
        assert job.published_at == datetime(2026, 10, 1, 12, tzinfo=timezone.utc)
        assert _make_job(published_date="last week").published_at is None
        assert _make_job().published_at is None

    def test_salary_range(self) -> None:
        job = _make_job(salary_range=SalaryRange(min=1, max=2))
        assert job.salary_range is not None
        assert job.salary_range.currency == "USD"


class TestQuerySpec:
    def test_empty_text_raises(self) -> None:
        with pytest.raises(ValidationError):
            _make_query(text="")

    def test_result_cap_bounds(self) -> None:
        with pytest.raises(ValidationError):
            _make_query(result_cap=0)
        with pytest.raises(ValidationError):
            _make_query(result_cap=101)

    def test_unknown_strategy_raises(self) -> None:
        with pytest.raises(ValidationError):
            _make_query(strategy="semantic")


class TestProviderRequest:
    def test_from_query(self) -> None:
        now = datetime(2026, 10, 17, tzinfo=timezone.utc)
        query = _make_query(
            mode="exact",
            include_terms=["python position"],
            exclude_terms=["internship"],
            date_window_days=14,
            result_cap=10,
        )
        request = ProviderRequest.from_query(query, now=now)
        assert request.query == "python engineer"
        assert request.mode == "exact"
        assert request.result_cap == 10
        assert request.text_must_include == ["python position"]
        assert request.text_must_exclude == ["internship"]
        assert request.published_after == datetime(2026, 10, 3, tzinfo=timezone.utc)
        assert request.extract_content.highlights is True

    def test_no_date_window(self) -> None:
        request = ProviderRequest.from_query(_make_query())
        assert request.published_after is None


class TestQueryOutcome:
    def test_ok(self) -> None:
        assert QueryOutcome(query=_make_query()).ok
        assert not QueryOutcome(query=_make_query(), error="boom").ok
