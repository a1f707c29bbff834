"""Tests for the result extractor (RawSearchResult -> EnrichedJob)."""

from jobmatch.core.schemas import RawSearchResult
from jobmatch.heuristics.tables import DEFAULT_TABLES
from jobmatch.pipeline.extractor import DESCRIPTION_LIMIT, enrich, enrich_all, job_id_for


def _raw(**overrides: object) -> RawSearchResult:
    defaults: dict[str, object] = {
        "id": "r1",
        "title": "Software Engineer",
        "url": "https://example.com/jobs/1",
        "text": "We build things with care.",
    }
    defaults.update(overrides)
    return RawSearchResult(**defaults)  # type: ignore[arg-type]


class TestEnrich:
    def test_berlin_posting(self) -> None:
        raw = _raw(
            title="Senior Backend Engineer",
            text="Senior Backend Engineer - Berlin, Germany. $120k - $160k. Remote-friendly.",
        )
        job = enrich(raw)
        assert job.experience_level == "Senior"
        assert "Berlin" in job.location
        assert job.salary_range is not None
        assert job.salary_range.min == 120000
        assert job.salary_range.max == 160000
        assert job.salary_range.currency == "USD"
        assert job.remote is True

    def test_copies_provider_fields(self) -> None:
        raw = _raw(
            author="Acme",
            published_date="2026-10-01T00:00:00.000Z",
            highlights=["Great team"],
            highlight_scores=[0.8],
            summary="A role",
            score=0.3,
            strategy="keyword",
            query_label="keyword",
        )
        job = enrich(raw)
        assert job.id == "r1"
        assert job.company == "Acme"
        assert job.domain == "example.com"
        assert job.published_date == "2026-10-01T00:00:00.000Z"
        assert job.highlights == ["Great team"]
        assert job.highlight_scores == [0.8]
        assert job.summary == "A role"
        assert job.provider_score == 0.3
        assert job.strategy == "keyword"
        assert job.query_label == "keyword"
        assert job.relevance_score == 0.0

    def test_defaults_when_nothing_extracted(self) -> None:
        job = enrich(_raw())
        assert job.company == "Example"
        assert job.location == "Remote"
        assert job.job_type == "Full-time"
        assert job.experience_level == "Mid-level"
        assert job.salary_range is None
        assert job.skills == []
        assert job.benefits == []
        assert job.remote is False

    def test_title_used_when_text_missing(self) -> None:
        job = enrich(_raw(title="Junior React Developer (Contract)", text=None))
        assert job.description == "Junior React Developer (Contract)"
        assert job.experience_level == "Entry-level"
        assert job.job_type == "Contract"
        assert job.skills == ["React"]

    def test_title_contributes_to_classification(self) -> None:
        job = enrich(_raw(title="Principal Engineer", text="Build payment systems in Python."))
        assert job.experience_level == "Senior"
        assert job.description == "Build payment systems in Python."

    def test_missing_id_derived_from_url(self) -> None:
        job = enrich(_raw(id=""))
        assert job.id == job_id_for("https://example.com/jobs/1")
        assert len(job.id) == 16

    def test_description_truncated(self) -> None:
        job = enrich(_raw(text="x" * (DESCRIPTION_LIMIT + 50)))
        assert job.description == "x" * DESCRIPTION_LIMIT + "..."

    def test_overlong_salary_digits(self) -> None:
        job = enrich(_raw(text="Salary $" + "9" * 400 + " - $10 per year"))
        assert job.salary_range is None

    def test_description_at_limit_untouched(self) -> None:
        job = enrich(_raw(text="x" * DESCRIPTION_LIMIT))
        assert job.description == "x" * DESCRIPTION_LIMIT


class TestLocationFallbacks:
    def test_body_wins(self) -> None:
        job = enrich(_raw(title="Engineer (Lisbon)", text="Location: Berlin, Germany"))
        assert job.location == "Berlin, Germany"

    def test_title_segment(self) -> None:
        job = enrich(_raw(title="Backend Developer (Berlin)"))
        assert job.location == "Berlin"

    def test_url(self) -> None:
        job = enrich(_raw(url="https://example.com/london/jobs/123"))
        assert job.location == "London"

    def test_caller_fallback(self) -> None:
        job = enrich(_raw(), fallback_location="Toronto")
        assert job.location == "Toronto"

    def test_blank_caller_fallback_ignored(self) -> None:
        assert enrich(_raw(), fallback_location="  ").location == "Remote"

    def test_fallback_normalized(self) -> None:
        job = enrich(_raw(), fallback_location="SF")
        assert job.location == DEFAULT_TABLES.location_normalizations["sf"]


class TestCompanyFallbacks:
    def test_career_subdomain(self) -> None:
        assert enrich(_raw(url="https://careers.netflix.com/jobs/1")).company == "Netflix"

    def test_unknown(self) -> None:
        assert enrich(_raw(url="not a url")).company == "Unknown"


class TestEnrichAll:
    def test_preserves_order(self) -> None:
        raws = [_raw(id="a", url="https://a.com/1"), _raw(id="b", url="https://b.com/1")]
        assert [j.id for j in enrich_all(raws)] == ["a", "b"]

    def test_empty(self) -> None:
        assert enrich_all([]) == []

    def test_job_id_deterministic(self) -> None:
        assert job_id_for("https://a.com/1") == job_id_for("https://a.com/1")
        assert job_id_for("https://a.com/1") != job_id_for("https://a.com/2")
