"""Tests for query synthesis (pure functions, no provider)."""

from pathlib import Path

import pytest
import yaml

from jobmatch.core.config import GENERIC_SKILL, SearchConfig, SearchFilters
from jobmatch.core.schemas import STRATEGIES, QuerySpec
from jobmatch.heuristics.tables import HeuristicTables
from jobmatch.profile.parser import parse_portfolio
from jobmatch.profile.schema import CandidateProfile
from jobmatch.search.query_builder import build_queries, default_filters, location_clause

FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def profile() -> CandidateProfile:
    content = yaml.safe_load((FIXTURES / "portfolio.yaml").read_text())
    return parse_portfolio(content, reference_year=2026)


def _filters(**kwargs: object) -> SearchFilters:
    defaults: dict[str, object] = {"skills": ["React", "Node.js"], "location": "Bay Area"}
    defaults.update(kwargs)
    return SearchFilters(**defaults)  # type: ignore[arg-type]


def _by_label(queries: list[QuerySpec]) -> dict[str, QuerySpec]:
    return {q.label: q for q in queries}


# ---------------------------------------------------------------------------
# build_queries
# ---------------------------------------------------------------------------


class TestBuildQueries:
    def test_all_strategies(self, profile: CandidateProfile) -> None:
        queries = build_queries(profile, _filters(), STRATEGIES)
        assert [q.strategy for q in queries] == [
            "neural", "keyword", "hybrid", "hybrid", "hybrid", "hybrid",
        ]
        assert [q.label for q in queries] == [
            "neural", "keyword", "startup", "enterprise", "remote-first", "framework",
        ]

    def test_bay_area_expansion(self, profile: CandidateProfile) -> None:
        queries = build_queries(profile, _filters(), STRATEGIES)
        assert any("San Francisco" in q.text or "Silicon Valley" in q.text for q in queries)

    def test_neural_query(self, profile: CandidateProfile) -> None:
        neural = _by_label(build_queries(profile, _filters(), ["neural"]))["neural"]
        assert neural.text == (
            "Seeking Frontend Developer role for a senior professional with 6 years of "
            "experience specializing in React, Node.js in the fintech industry "
            "located in Bay Area"
        )
        assert neural.mode == "broad"
        assert neural.include_terms == ["frontend developer position"]
        assert neural.exclude_terms == ["internship"]
        assert neural.date_window_days == 30
        assert neural.result_cap == 17
        assert "indeed.com" in neural.domain_allow_list
        assert "careers.google.com" in neural.domain_allow_list
        assert "reddit.com" in neural.domain_deny_list

    def test_keyword_query(self, profile: CandidateProfile) -> None:
        keyword = _by_label(build_queries(profile, _filters(), ["keyword"]))["keyword"]
        assert keyword.text.startswith(
            '"Frontend Developer" AND ("React" OR "React.js" OR "ReactJS") AND '
            '("Node.js" OR "NodeJS" OR "Node") AND "senior" AND "full-time" AND ('
        )
        assert '"San Francisco" OR "SF" OR "Bay Area" OR "Silicon Valley"' in keyword.text
        assert keyword.mode == "exact"
        assert keyword.result_cap == 10
        assert keyword.date_window_days == 14

    def test_keyword_skill_synonyms(self, profile: CandidateProfile) -> None:
        tables = HeuristicTables(skill_synonyms={"elixir": ("Phoenix", "BEAM", "OTP")})
        filters = _filters(skills=["Elixir", "Haskell"])
        keyword = build_queries(profile, filters, ["keyword"], tables=tables)[0]
        # At most two synonyms per skill; skills without synonyms stay a single term
        assert '("Elixir" OR "Phoenix" OR "BEAM") AND "Haskell" AND' in keyword.text
        assert "OTP" not in keyword.text

    def test_hybrid_battery(self, profile: CandidateProfile) -> None:
        hybrid = _by_label(build_queries(profile, _filters(), ["hybrid"]))
        assert hybrid["startup"].text == "Frontend Developer startup opportunities React Node.js"
        assert hybrid["enterprise"].text == "senior React Node.js enterprise development"
        assert hybrid["remote-first"].text == "remote Frontend Developer distributed team"
        # No language among the skills: the framework template falls back to JavaScript
        assert hybrid["framework"].text == "React JavaScript development position"
        assert hybrid["framework"].include_terms == ["React", "technical team"]
        assert "wellfound.com" in hybrid["startup"].domain_allow_list
        assert all(q.mode == "auto" for q in hybrid.values())
        assert all(q.result_cap == 4 for q in hybrid.values())  # 17 // 4
        assert all(q.date_window_days == 21 for q in hybrid.values())

    def test_extended_battery(self, profile: CandidateProfile) -> None:
        settings = SearchConfig(hybrid_battery="extended")
        hybrid = build_queries(profile, _filters(), ["hybrid"], settings=settings)
        assert [q.label for q in hybrid][-3:] == ["europe", "japan", "hacker-news"]
        assert hybrid[-3].text == "software engineering jobs Europe React Node.js"
        assert all(q.result_cap == 2 for q in hybrid)  # 17 // 7

    def test_remote_filter(self, profile: CandidateProfile) -> None:
        queries = _by_label(build_queries(profile, _filters(remote=True, location="Berlin"),
                                          ["neural", "keyword"]))
        assert queries["neural"].text.endswith("with remote work opportunities")
        assert "Berlin" not in queries["neural"].text
        assert queries["keyword"].text.endswith('AND ("remote")')

    def test_without_freshness_window(self, profile: CandidateProfile) -> None:
        settings = SearchConfig(fresh_jobs_only=False)
        queries = build_queries(profile, _filters(), STRATEGIES, settings=settings)
        assert all(q.date_window_days is None for q in queries)

    def test_internship_not_excluded_for_interns(self, profile: CandidateProfile) -> None:
        neural = build_queries(profile, _filters(job_type="internship"), ["neural"])[0]
        assert neural.exclude_terms == []

    def test_unknown_strategy_raises(self, profile: CandidateProfile) -> None:
        with pytest.raises(ValueError, match="Unknown strategies"):
            build_queries(profile, _filters(), ["semantic"])  # type: ignore[list-item]

    def test_deterministic(self, profile: CandidateProfile) -> None:
        assert build_queries(profile, _filters(), STRATEGIES) == build_queries(
            profile, _filters(), STRATEGIES,
        )


class TestEmptyInputs:
    def test_generic_fallback(self) -> None:
        queries = _by_label(build_queries(CandidateProfile(), SearchFilters(), STRATEGIES))
        assert all(q.text.strip() for q in queries.values())
        assert queries["neural"].text == (
            f"Seeking {GENERIC_SKILL} role for an entry professional "
            f"specializing in {GENERIC_SKILL}"
        )
        assert queries["keyword"].text == f'"{GENERIC_SKILL}" AND "entry" AND "full-time"'
        # Entry-level candidates are not steered away from internships
        assert queries["neural"].exclude_terms == []

    def test_profile_skills_used_when_filters_empty(self, profile: CandidateProfile) -> None:
        keyword = build_queries(profile, SearchFilters(), ["keyword"])[0]
        # Top three technical skills of the profile, soft skills excluded
        assert (
            '("React" OR "React.js" OR "ReactJS") AND ("TypeScript" OR "TS" OR "JavaScript") AND '
            '("Node.js" OR "NodeJS" OR "Node")'
        ) in keyword.text


# ---------------------------------------------------------------------------
# Filters and location clauses
# ---------------------------------------------------------------------------


class TestDefaultFilters:
    def test_from_profile(self, profile: CandidateProfile) -> None:
        filters = default_filters(profile)
        assert filters.skills == profile.skills.all
        assert filters.location == "San Francisco, CA"
        assert filters.experience_level == "senior"
        assert filters.job_type == "full-time"
        assert filters.salary_range is not None
        assert filters.salary_range.min == 150000
        assert filters.company_size == "mid-size"
        assert filters.remote is True
        assert filters.industries == ["fintech", "ecommerce", "saas"]

    def test_overrides(self, profile: CandidateProfile) -> None:
        filters = default_filters(profile, location="Berlin", remote=False)
        assert filters.location == "Berlin"
        assert filters.remote is False
        assert filters.experience_level == "senior"

    def test_empty_profile(self) -> None:
        filters = default_filters(CandidateProfile())
        assert filters.skills == []
        assert filters.location is None
        assert filters.experience_level is None
        assert filters.remote is False


class TestLocationClause:
    def test_known_place(self) -> None:
        clause = location_clause(SearchFilters(location="london"))
        assert clause == '"London" OR "UK" OR "United Kingdom"'

    def test_unknown_place(self) -> None:
        assert location_clause(SearchFilters(location="Porto")) == '"Porto"'

    def test_remote_wins(self) -> None:
        assert location_clause(SearchFilters(location="Porto", remote=True)) == '"remote"'

    def test_none(self) -> None:
        assert location_clause(SearchFilters()) is None
        assert location_clause(SearchFilters(location="  ")) is None
