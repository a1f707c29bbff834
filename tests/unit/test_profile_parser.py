"""Tests for the portfolio parser."""

from pathlib import Path
from typing import Any

import pytest
import yaml

from jobmatch.heuristics.tables import HeuristicTables
from jobmatch.profile.parser import categorize_skills, parse_portfolio
from jobmatch.profile.schema import SKILL_BUCKETS, CandidateProfile

FIXTURES = Path(__file__).parent.parent / "fixtures"


def _portfolio() -> dict[str, Any]:
    return yaml.safe_load((FIXTURES / "portfolio.yaml").read_text())


def _roles(n: int) -> list[dict[str, str]]:
    return [{"title": f"Engineer {i}", "company": f"Company {i}"} for i in range(n)]


@pytest.fixture
def profile() -> CandidateProfile:
    return parse_portfolio(_portfolio(), reference_year=2026)


# ---------------------------------------------------------------------------
# Full portfolio
# ---------------------------------------------------------------------------


class TestFullPortfolio:
    def test_identity(self, profile: CandidateProfile) -> None:
        assert profile.name == "Ada Moreno"
        assert profile.title == "Senior Full Stack Engineer"
        assert profile.location == "San Francisco, CA"
        assert profile.contact.email == "ada@example.com"
        assert profile.contact.phone == ""

    def test_skill_buckets(self, profile: CandidateProfile) -> None:
        skills = profile.skills
        assert skills.languages == ["TypeScript", "Python"]
        assert skills.frameworks == ["React", "Node.js"]
        assert skills.databases == ["PostgreSQL"]
        assert skills.cloud == ["AWS", "Docker"]
        assert skills.soft == ["Leadership"]
        assert skills.technical == ["GraphQL"]
        assert len(skills.all) == 9

    def test_experience(self, profile: CandidateProfile) -> None:
        exp = profile.experience
        assert len(exp.roles) == 4
        assert exp.total_years == 6.0
        assert exp.level == "senior"
        assert exp.industries == ["fintech", "ecommerce", "saas", "healthcare"]
        assert exp.company_types == ["mid-size", "startup"]
        assert exp.has_remote_experience is True

    def test_role_details(self, profile: CandidateProfile) -> None:
        role = profile.experience.roles[0]
        assert role.title == "Senior Frontend Engineer"
        assert role.is_current is True
        assert role.start_date == "2022-01"
        assert "Increased checkout conversion by 25%" in role.achievements
        assert "Led a frontend team" in role.achievements

    def test_projects(self, profile: CandidateProfile) -> None:
        projects = profile.projects
        assert projects.count == 2
        assert projects.types == ["web", "mobile"]
        assert projects.domains == ["ecommerce", "healthcare"]
        assert projects.technologies == ["React", "Node.js", "React Native"]
        assert projects.complexity == "beginner"
        assert projects.has_open_source is True
        assert projects.has_commercial is True
        assert projects.recent[1].impact == ["40% improvement"]

    def test_education(self, profile: CandidateProfile) -> None:
        edu = profile.education
        assert len(edu.degrees) == 1
        assert edu.degrees[0].field == "Computer Science"
        assert edu.degrees[0].year == 2015
        assert edu.certifications == ["AWS Certified Developer"]
        assert edu.continuous_learning is True

    def test_preferences(self, profile: CandidateProfile) -> None:
        prefs = profile.preferences
        assert prefs.preferred_roles == [
            "Frontend Developer", "Senior Developer", "Full Stack Developer",
        ]
        assert prefs.remote_preference == "remote"
        assert prefs.salary_range is not None
        assert (prefs.salary_range.min, prefs.salary_range.max) == (150000, 190000)
        assert prefs.willing_to_relocate is True
        assert prefs.needs_visa_sponsorship is False
        assert prefs.preferred_company_sizes == ["mid-size", "startup"]

    def test_market(self, profile: CandidateProfile) -> None:
        market = profile.market
        assert market.competitive_level == "senior"
        assert market.unique_skill_combinations == [("TypeScript", "React"), ("AWS", "Python")]
        assert market.demand_score == pytest.approx(5 / 8)
        assert market.rarity_score == 0.0
        assert market.versatility_score == pytest.approx(6 / 8)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestProperties:
    def test_deterministic(self) -> None:
        a = parse_portfolio(_portfolio(), reference_year=2026)
        b = parse_portfolio(_portfolio(), reference_year=2026)
        assert a == b
        assert a.model_dump() == b.model_dump()

    def test_categorization_partition(self, profile: CandidateProfile) -> None:
        skills = profile.skills
        buckets = list(SKILL_BUCKETS)
        for skill in skills.all:
            holders = [b for b in buckets if skill in getattr(skills, b)]
            assert len(holders) == 1, f"{skill} in {holders}"
        union = [s for b in buckets for s in getattr(skills, b)]
        assert sorted(union) == sorted(skills.all)

    def test_partition_with_ambiguous_skills(self) -> None:
        skills = categorize_skills(["Go", "Rust", "R", "Git", "Agile", "Excel", "go", " "])
        assert skills.all == ["Go", "Rust", "R", "Git", "Agile", "Excel"]
        assert skills.languages == ["Go", "Rust", "R"]
        assert skills.tools == ["Git"]
        assert skills.soft == ["Agile"]
        assert skills.technical == ["Excel"]

    def test_injected_tables(self) -> None:
        tables = HeuristicTables(skill_categories={"tools": ("excel",)})
        skills = categorize_skills(["Excel", "Python"], tables)
        assert skills.tools == ["Excel"]
        assert skills.technical == ["Python"]


# ---------------------------------------------------------------------------
# Degradation
# ---------------------------------------------------------------------------


class TestDegradation:
    @pytest.mark.parametrize("content", [{}, None, "garbage", 42, [1, 2, 3]])
    def test_non_mapping_gives_empty_profile(self, content: Any) -> None:
        profile = parse_portfolio(content)
        assert profile.name == ""
        assert profile.skills.all == []
        assert profile.experience.level == "entry"
        assert profile.experience.total_years == 0.0
        assert profile.preferences.remote_preference == "flexible"
        assert profile.preferences.preferred_company_sizes == ["mid-size"]
        assert profile.market.competitive_level == "junior"

    def test_wrong_typed_fields(self) -> None:
        profile = parse_portfolio({
            "name": ["Ada", "Moreno"],
            "skills": "Python, Go, ",
            "experience": "lots",
            "projects": {"name": "not a list"},
            "education": [None, "BSc"],
            "contact": "ada@example.com",
        })
        assert profile.name == "Ada Moreno"
        assert profile.skills.all == ["Python", "Go"]
        assert profile.experience.roles == []
        assert profile.projects.count == 0
        assert profile.education.degrees == []
        assert profile.contact.email == ""

    def test_skill_groups_and_objects(self) -> None:
        profile = parse_portfolio({
            "skills": {"languages": ["Python"], "tools": [{"name": "Git"}, {"skill": "Jira"}]},
        })
        assert profile.skills.all == ["Python", "Git", "Jira"]

    def test_non_mapping_roles_skipped(self) -> None:
        profile = parse_portfolio({"experience": ["intern", {"title": "Engineer"}, 3]})
        assert len(profile.experience.roles) == 1


# ---------------------------------------------------------------------------
# Heuristic details
# ---------------------------------------------------------------------------


class TestHeuristics:
    @pytest.mark.parametrize(("roles", "years", "level"), [
        (0, 0.0, "entry"),
        (1, 1.5, "entry"),
        (2, 3.0, "mid"),
        (4, 6.0, "senior"),
        (6, 9.0, "lead"),
        (9, 13.5, "executive"),
        (11, 15.0, "executive"),
    ])
    def test_level_thresholds(self, roles: int, years: float, level: str) -> None:
        profile = parse_portfolio({"experience": _roles(roles)})
        assert profile.experience.total_years == years
        assert profile.experience.level == level

    def test_remote_preference_hybrid_with_location(self) -> None:
        profile = parse_portfolio({"contact": {"location": "Berlin"}, "experience": _roles(1)})
        assert profile.preferences.remote_preference == "hybrid"

    def test_recent_degree_counts_as_learning(self) -> None:
        content = {"education": [{"degree": "MBA", "year": "2024"}]}
        profile = parse_portfolio(content, reference_year=2026)
        assert profile.education.degrees[0].field == "Business"
        assert profile.education.continuous_learning is True

        old = parse_portfolio({"education": [{"degree": "MBA", "year": 2010}]}, reference_year=2026)
        assert old.education.continuous_learning is False

    def test_degree_field_default(self) -> None:
        profile = parse_portfolio({"education": [{"degree": "B.A. Philosophy"}]})
        assert profile.education.degrees[0].field == "Technology"

    def test_preferred_roles_from_headline(self) -> None:
        profile = parse_portfolio({"title": "Backend Engineer"})
        assert profile.preferences.preferred_roles == ["Backend Developer"]

    def test_preferred_roles_from_frameworks(self) -> None:
        profile = parse_portfolio({"skills": ["Vue", "Django"]})
        assert profile.preferences.preferred_roles == ["Frontend Developer", "Backend Developer"]

    def test_visa_sponsorship(self) -> None:
        profile = parse_portfolio({"contact": {"location": "Bangalore, India"}})
        assert profile.preferences.needs_visa_sponsorship is True

    def test_recent_projects_limit(self) -> None:
        content = {"projects": [{"name": f"P{i}"} for i in range(4)]}
        profile = parse_portfolio(content, max_recent_projects=2)
        assert profile.projects.count == 4
        assert [p.name for p in profile.projects.recent] == ["P0", "P1"]

    def test_rare_skills(self) -> None:
        profile = parse_portfolio({"skills": ["Rust", "Go", "Kubernetes"]})
        assert profile.market.rarity_score == pytest.approx(2 / 5)
        assert ("Go", "Kubernetes") in profile.market.unique_skill_combinations
