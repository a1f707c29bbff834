"""Portfolio parser: converts raw portfolio content into a CandidateProfile.

Rules:
  - No field of the input is required. Missing or wrong-typed values degrade
    to "", [] or 0 and parsing continues.
  - Output is a pure function of the input and ``reference_year``; parsing
    the same content twice yields equal profiles.
  - ``total_years`` is ``min(roles * 1.5, 15)``. It is a proxy, not a date
    calculation, and the level thresholds depend on it.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from jobmatch.heuristics.rules import (
    contains_any,
    contains_keyword,
    first_label,
    matching_labels,
    value_or,
)
from jobmatch.heuristics.tables import DEFAULT_TABLES, HeuristicTables
from jobmatch.heuristics.text import extract_salary
from jobmatch.profile.schema import (
    SKILL_BUCKETS,
    CandidateProfile,
    CareerPreferences,
    ContactInfo,
    Degree,
    EducationSummary,
    ExperienceSummary,
    MarketProfile,
    ProjectInfo,
    ProjectSummary,
    Role,
    SkillSet,
)

logger = logging.getLogger(__name__)

YEARS_PER_ROLE = 1.5
MAX_TOTAL_YEARS = 15.0
RECENT_DEGREE_YEARS = 3

# (minimum total years, level), checked top-down.
LEVEL_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (12, "executive"),
    (8, "lead"),
    (5, "senior"),
    (2, "mid"),
)
COMPLEXITY_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (20, "expert"),
    (15, "advanced"),
    (10, "intermediate"),
)
COMPETITIVE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (30, "expert"),
    (20, "senior"),
    (10, "mid"),
)

# Every bucket except the trailing "technical" catch-all.
_CATEGORY_BUCKETS = SKILL_BUCKETS[:-1]
_VERSATILITY_BUCKETS = ("languages", "frameworks", "databases", "cloud", "tools")
_VERSATILITY_DIVISOR = 8
_RARITY_DIVISOR = 5
_CURRENT_END_DATES = ("present", "current", "now")
_YEAR = re.compile(r"\b(19|20)\d{2}\b")
_CONTACT_FIELDS = tuple(ContactInfo.model_fields)


def parse_portfolio(
    content: Any,
    *,
    tables: HeuristicTables = DEFAULT_TABLES,
    reference_year: int | None = None,
    max_recent_projects: int = 5,
) -> CandidateProfile:
    """Build a CandidateProfile from arbitrary nested portfolio content.

    Args:
        content: Mapping with optional name, title, about, contact, skills,
            experience, projects and education keys. Anything else parses
            to an empty profile.
        tables: Keyword tables driving every inference.
        reference_year: Year used to decide whether a degree is recent.
            Defaults to the current year.
        max_recent_projects: How many project summaries to keep.

    Returns:
        The derived, immutable profile.
    """
    data = _mapping(content)
    year = reference_year if reference_year is not None else date.today().year

    contact = _parse_contact(data)
    location = contact.location or _text(data.get("location"))
    about = _text(data.get("about") or data.get("summary") or data.get("bio"))

    skills = categorize_skills(_skill_names(data.get("skills")), tables)
    experience = _parse_experience(_items(data.get("experience")), tables)
    projects = _parse_projects(_items(data.get("projects")), tables, max_recent_projects)
    education = _parse_education(
        _items(data.get("education")), _items(data.get("certifications")), tables, year,
    )
    title = _text(data.get("title") or data.get("headline"))
    preferences = _infer_preferences(
        title, about, location, skills, experience, tables,
    )
    market = _analyze_market(skills, experience, projects, tables)

    logger.debug(
        "Parsed portfolio: %d skills, %d roles, %d projects, level=%s",
        len(skills.all), len(experience.roles), projects.count, experience.level,
    )
    return CandidateProfile(
        name=_text(data.get("name")),
        title=title,
        summary=about,
        location=location,
        contact=contact,
        skills=skills,
        experience=experience,
        projects=projects,
        education=education,
        preferences=preferences,
        market=market,
    )


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------


def categorize_skills(
    raw_skills: Iterable[str], tables: HeuristicTables = DEFAULT_TABLES,
) -> SkillSet:
    """Place each skill in exactly one bucket; the first matching category wins."""
    buckets: dict[str, list[str]] = {name: [] for name in SKILL_BUCKETS}
    unique: list[str] = []
    seen: set[str] = set()
    for skill in raw_skills:
        cleaned = " ".join(skill.split())
        if not cleaned or cleaned.lower() in seen:
            continue
        seen.add(cleaned.lower())
        unique.append(cleaned)
        buckets[_skill_bucket(cleaned, tables)].append(cleaned)
    return SkillSet(all=unique, **buckets)


def _skill_bucket(skill: str, tables: HeuristicTables) -> str:
    for bucket in _CATEGORY_BUCKETS:
        if contains_any(skill, tables.skill_categories.get(bucket, ())):
            return bucket
    return "technical"


def _skill_names(value: Any) -> list[str]:
    if isinstance(value, str):
        return [s for s in (part.strip() for part in value.split(",")) if s]
    if isinstance(value, Mapping):
        # {"languages": [...], "frameworks": [...]} style
        names: list[str] = []
        for group in value.values():
            names.extend(_skill_names(group))
        return names
    names = []
    for item in _items(value):
        if isinstance(item, Mapping):
            names.append(_text(item.get("name") or item.get("skill")))
        else:
            names.append(_text(item))
    return [n for n in names if n]


# ---------------------------------------------------------------------------
# Experience
# ---------------------------------------------------------------------------


def _parse_experience(entries: list[Any], tables: HeuristicTables) -> ExperienceSummary:
    roles = [_parse_role(_mapping(entry), tables) for entry in entries if isinstance(entry, Mapping)]

    total_years = min(len(roles) * YEARS_PER_ROLE, MAX_TOTAL_YEARS)
    level = next((lvl for minimum, lvl in LEVEL_THRESHOLDS if total_years >= minimum), "entry")

    industries: list[str] = []
    company_types: list[str] = []
    for role in roles:
        text = f"{role.company} {role.description}"
        _extend_unique(industries, matching_labels(text, tables.industries))
        company_type = value_or(first_label(text, tables.company_types), "mid-size")
        _extend_unique(company_types, [company_type])

    has_remote = any(
        contains_any(f"{role.location} {role.description}", tables.remote_terms) for role in roles
    )
    return ExperienceSummary(
        roles=roles,
        total_years=total_years,
        level=level,
        industries=industries,
        company_types=company_types,
        has_remote_experience=has_remote,
    )


def _parse_role(entry: Mapping[str, Any], tables: HeuristicTables) -> Role:
    description = _text(entry.get("description") or entry.get("summary"))
    end_date = _optional_text(entry.get("endDate") or entry.get("end_date") or entry.get("end"))
    is_current = bool(entry.get("current") or entry.get("isCurrent") or entry.get("is_current"))
    if end_date and end_date.lower() in _CURRENT_END_DATES:
        is_current = True

    technologies = _skill_names(entry.get("technologies") or entry.get("tech"))
    _extend_unique(
        technologies, [kw for kw in tables.technology_keywords if contains_keyword(description, kw)],
    )
    achievements = _skill_names(entry.get("achievements"))
    _extend_unique(achievements, _pattern_snippets(description, tables.achievement_patterns))

    return Role(
        title=_text(entry.get("title") or entry.get("position") or entry.get("role")),
        company=_text(entry.get("company") or entry.get("organization")),
        duration=_text(entry.get("duration") or entry.get("period")),
        location=_text(entry.get("location")),
        description=description,
        technologies=technologies,
        achievements=achievements,
        start_date=_optional_text(
            entry.get("startDate") or entry.get("start_date") or entry.get("start"),
        ),
        end_date=end_date,
        is_current=is_current,
    )


def _pattern_snippets(text: str, patterns: Iterable[str]) -> list[str]:
    """First match of each pattern in ``text``, in pattern order."""
    snippets: list[str] = []
    for pattern in patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            snippets.append(match.group(0).strip())
    return snippets


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


def _parse_projects(
    entries: list[Any], tables: HeuristicTables, max_recent: int,
) -> ProjectSummary:
    projects = [_parse_project(_mapping(e), tables) for e in entries if isinstance(e, Mapping)]
    if not projects:
        return ProjectSummary()

    types: list[str] = []
    domains: list[str] = []
    technologies: list[str] = []
    for project in projects:
        text = f"{project.name} {project.description}"
        _extend_unique(types, matching_labels(text, tables.project_types))
        _extend_unique(domains, matching_labels(text, tables.project_domains))
        _extend_unique(technologies, project.technologies)

    size = len(technologies) + len(projects)
    complexity = next((c for minimum, c in COMPLEXITY_THRESHOLDS if size >= minimum), "beginner")

    return ProjectSummary(
        count=len(projects),
        types=types,
        technologies=technologies,
        domains=domains,
        complexity=complexity,
        has_open_source=any(
            p.repository or contains_any(p.url, tables.repository_hosts) for p in projects
        ),
        has_commercial=any(contains_any(p.description, tables.commercial_terms) for p in projects),
        recent=projects[:max_recent],
    )


def _parse_project(entry: Mapping[str, Any], tables: HeuristicTables) -> ProjectInfo:
    description = _text(entry.get("description"))
    return ProjectInfo(
        name=_text(entry.get("name") or entry.get("title")),
        description=description,
        technologies=_skill_names(
            entry.get("technologies") or entry.get("tech") or entry.get("stack"),
        ),
        url=_text(entry.get("url") or entry.get("link") or entry.get("demo")),
        repository=_text(entry.get("github") or entry.get("repo") or entry.get("repository")),
        impact=_pattern_snippets(description, tables.impact_patterns),
    )


# ---------------------------------------------------------------------------
# Education
# ---------------------------------------------------------------------------


def _parse_education(
    entries: list[Any],
    extra_certifications: list[Any],
    tables: HeuristicTables,
    reference_year: int,
) -> EducationSummary:
    degrees: list[Degree] = []
    certifications: list[str] = []
    for raw in entries:
        entry = _mapping(raw)
        if not entry:
            continue
        name = _text(entry.get("degree") or entry.get("title") or entry.get("name"))
        if "certif" in _text(entry.get("type")).lower():
            if name:
                certifications.append(name)
            continue
        degrees.append(Degree(
            degree=name,
            school=_text(entry.get("school") or entry.get("institution")),
            year=_year(entry.get("year") or entry.get("graduationYear") or entry.get("endDate")),
            location=_text(entry.get("location")),
            field=_text(entry.get("field") or entry.get("major")) or _infer_field(name, tables),
        ))

    for raw in extra_certifications:
        name = _text(raw.get("name") or raw.get("title")) if isinstance(raw, Mapping) else _text(raw)
        if name and name not in certifications:
            certifications.append(name)

    recent_degree = any(
        d.year is not None and d.year >= reference_year - RECENT_DEGREE_YEARS for d in degrees
    )
    return EducationSummary(
        degrees=degrees,
        certifications=certifications,
        continuous_learning=recent_degree or bool(certifications),
    )


def _infer_field(degree: str, tables: HeuristicTables) -> str:
    return value_or(first_label(degree, tables.degree_fields), "Technology")


def _year(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    matches = list(_YEAR.finditer(_text(value)))
    return int(matches[-1].group(0)) if matches else None


# ---------------------------------------------------------------------------
# Preferences and market position
# ---------------------------------------------------------------------------


def _infer_preferences(
    title: str,
    about: str,
    location: str,
    skills: SkillSet,
    experience: ExperienceSummary,
    tables: HeuristicTables,
) -> CareerPreferences:
    roles: list[str] = []
    for role in experience.roles:
        _extend_unique(roles, matching_labels(role.title, tables.role_titles))
    if not roles:
        roles = matching_labels(title, tables.role_titles)
    if not roles:
        for label, frameworks in tables.framework_roles.items():
            if any(contains_any(skill, frameworks) for skill in skills.frameworks):
                roles.append(label)

    if experience.has_remote_experience:
        remote_preference = "remote"
    elif not location:
        remote_preference = "flexible"
    else:
        remote_preference = "hybrid"

    return CareerPreferences(
        preferred_roles=roles,
        preferred_industries=list(experience.industries),
        preferred_company_sizes=list(experience.company_types) or ["mid-size"],
        remote_preference=remote_preference,
        salary_range=extract_salary(about, tables),
        willing_to_relocate=contains_any(about, tables.relocation_terms),
        needs_visa_sponsorship=contains_any(location, tables.visa_countries),
    )


def _analyze_market(
    skills: SkillSet,
    experience: ExperienceSummary,
    projects: ProjectSummary,
    tables: HeuristicTables,
) -> MarketProfile:
    points = experience.total_years * 2 + len(skills.all) + projects.count
    level = next((lvl for minimum, lvl in COMPETITIVE_THRESHOLDS if points >= minimum), "junior")

    lowered = {s.lower() for s in skills.all}
    combinations = [
        (a, b) for a, b in tables.skill_combinations if a.lower() in lowered and b.lower() in lowered
    ]

    def has_skill(keyword: str) -> bool:
        return any(contains_keyword(skill, keyword) for skill in skills.all)

    demand = _ratio(
        sum(1 for kw in tables.high_demand_skills if has_skill(kw)),
        len(tables.high_demand_skills),
    )
    rare_hits = sum(1 for kw in tables.rare_skills if has_skill(kw)) + sum(
        1 for industry in tables.rare_industries if industry in experience.industries
    )
    covered = sum(1 for bucket in _VERSATILITY_BUCKETS if getattr(skills, bucket))

    return MarketProfile(
        competitive_level=level,
        unique_skill_combinations=combinations,
        demand_score=demand,
        rarity_score=_ratio(rare_hits, _RARITY_DIVISOR),
        versatility_score=_ratio(covered + len(projects.domains), _VERSATILITY_DIVISOR),
    )


def _ratio(count: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return min(count / total, 1.0)


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def _parse_contact(data: Mapping[str, Any]) -> ContactInfo:
    raw = _mapping(data.get("contact"))
    return ContactInfo(**{name: _text(raw.get(name)) for name in _CONTACT_FIELDS})


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _items(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return " ".join(t for t in (_text(v) for v in value) if t)
    return ""


def _optional_text(value: Any) -> str | None:
    return _text(value) or None


def _extend_unique(target: list[str], values: Iterable[str]) -> None:
    seen = {v.lower() for v in target}
    for value in values:
        if value and value.lower() not in seen:
            seen.add(value.lower())
            target.append(value)
