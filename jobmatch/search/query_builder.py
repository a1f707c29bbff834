"""Query synthesis: one or more QuerySpecs per retrieval strategy.

Pure functions, no provider dependency.

  neural   prose sentence for semantic matching, broad domain allow-list
  keyword  conjunction of quoted exact terms (skills OR-expanded with synonyms),
           small result cap
  hybrid   fixed battery of targeted sub-queries (HeuristicTables.hybrid_battery)
"""

import logging
from collections.abc import Iterable
from typing import Any

from jobmatch.core.config import GENERIC_SKILL, SearchConfig, SearchFilters
from jobmatch.core.schemas import STRATEGIES, QuerySpec, Strategy
from jobmatch.heuristics.tables import DEFAULT_TABLES, HeuristicTables, HybridTemplate
from jobmatch.heuristics.text import expand_location_synonyms, expand_skill_synonyms
from jobmatch.profile.parser import categorize_skills
from jobmatch.profile.schema import CandidateProfile

logger = logging.getLogger(__name__)

NEURAL_MAX_RESULTS = 100
KEYWORD_MAX_RESULTS = 10
HYBRID_MAX_RESULTS = 15

NEURAL_WINDOW_DAYS = 30
KEYWORD_WINDOW_DAYS = 14
HYBRID_WINDOW_DAYS = 21

TOP_SKILLS = 3
SKILL_SYNONYMS_PER_TERM = 2
DEFAULT_JOB_TYPE = "full-time"
FALLBACK_FRAMEWORK = "React"
FALLBACK_LANGUAGE = "JavaScript"

DEFAULT_FILTER_SKILLS = 15
DEFAULT_FILTER_INDUSTRIES = 3


def build_queries(
    profile: CandidateProfile,
    filters: SearchFilters,
    strategies: Iterable[Strategy],
    *,
    settings: SearchConfig | None = None,
    tables: HeuristicTables = DEFAULT_TABLES,
) -> list[QuerySpec]:
    """Build the queries for every requested strategy, in neural/keyword/hybrid order.

    Raises:
        ValueError: If a strategy name is unknown.
    """
    settings = settings or SearchConfig()
    requested = set(strategies)
    unknown = requested - set(STRATEGIES)
    if unknown:
        msg = f"Unknown strategies: {sorted(unknown)}. Available: {', '.join(STRATEGIES)}"
        raise ValueError(msg)

    context = _QueryContext(profile, filters, tables)
    cap = settings.per_strategy_cap()
    queries: list[QuerySpec] = []

    if "neural" in requested:
        queries.append(_neural_query(context, cap, settings.fresh_jobs_only))
    if "keyword" in requested:
        queries.append(_keyword_query(context, cap, settings.fresh_jobs_only))
    if "hybrid" in requested:
        battery = list(tables.hybrid_battery)
        if settings.hybrid_battery == "extended":
            battery.extend(tables.regional_battery)
        queries.extend(_hybrid_queries(context, battery, cap, settings.fresh_jobs_only))

    logger.info("Built %d queries for strategies %s", len(queries), sorted(requested))
    return queries


def default_filters(profile: CandidateProfile, **overrides: Any) -> SearchFilters:
    """Derive search filters from a profile; keyword arguments override fields."""
    prefs = profile.preferences
    base: dict[str, Any] = {
        "skills": profile.skills.all[:DEFAULT_FILTER_SKILLS],
        "location": profile.location or None,
        "experience_level": profile.experience.level if profile.experience.roles else None,
        "job_type": DEFAULT_JOB_TYPE,
        "salary_range": prefs.salary_range,
        "company_size": prefs.preferred_company_sizes[0] if prefs.preferred_company_sizes else None,
        "remote": prefs.remote_preference == "remote",
        "industries": profile.experience.industries[:DEFAULT_FILTER_INDUSTRIES],
    }
    base.update(overrides)
    return SearchFilters.model_validate(base)


def location_clause(
    filters: SearchFilters, tables: HeuristicTables = DEFAULT_TABLES,
) -> str | None:
    """Quoted OR-list for a known place, the quoted literal otherwise.

    A remote filter wins over an explicit location.
    """
    if filters.remote:
        return '"remote"'
    if not filters.location or not filters.location.strip():
        return None
    names = expand_location_synonyms(filters.location, tables)
    return " OR ".join(_quote(name) for name in names)


class _QueryContext:
    """Values shared by every strategy, derived once per build."""

    def __init__(
        self, profile: CandidateProfile, filters: SearchFilters, tables: HeuristicTables,
    ) -> None:
        self.filters = filters
        self.tables = tables
        self.skills = list(filters.skills) or profile.skills.technical_skills()
        categorized = categorize_skills(self.skills, tables)
        self.frameworks = categorized.frameworks
        self.languages = categorized.languages
        if not self.skills:
            self.skills = [GENERIC_SKILL]

        self.role = _primary_role(profile)
        self.level = (filters.experience_level or profile.experience.level).lower()
        self.years = profile.experience.total_years
        industries = filters.industries or profile.experience.industries
        self.industry = industries[0] if industries else None
        self.job_type = (filters.job_type or DEFAULT_JOB_TYPE).lower()
        self.entry_level = self.level in ("entry", "entry-level", "junior", "intern")
        self.location_clause = location_clause(filters, tables)

    @property
    def top_skills(self) -> list[str]:
        return self.skills[:TOP_SKILLS]


def _neural_query(context: _QueryContext, cap: int, fresh: bool) -> QuerySpec:
    parts = [f"Seeking {context.role} role"]
    seniority = f"for {_article(context.level)} professional"
    if context.years > 0:
        seniority = f"{seniority} with {context.years:g} years of experience"
    parts.append(seniority)
    parts.append(f"specializing in {', '.join(context.top_skills)}")
    if context.industry:
        parts.append(f"in the {context.industry} industry")
    if context.filters.remote:
        parts.append("with remote work opportunities")
    elif context.filters.location:
        parts.append(f"located in {context.filters.location.strip()}")

    exclude: list[str] = []
    if not context.entry_level and context.job_type != "internship":
        exclude.append("internship")

    tables = context.tables
    return QuerySpec(
        text=" ".join(parts),
        strategy="neural",
        label="neural",
        mode="broad",
        domain_allow_list=list(dict.fromkeys((*tables.core_job_domains,
                                              *tables.company_career_domains))),
        domain_deny_list=list(tables.non_job_domains),
        include_terms=[f"{context.role.lower()} position"],
        exclude_terms=exclude,
        date_window_days=NEURAL_WINDOW_DAYS if fresh else None,
        result_cap=min(cap, NEURAL_MAX_RESULTS),
    )


def _keyword_query(context: _QueryContext, cap: int, fresh: bool) -> QuerySpec:
    skills = set(context.top_skills)
    terms = [context.role, *context.top_skills, context.level, context.job_type]
    unique = list(dict.fromkeys(t for t in terms if t))
    text = " AND ".join(
        _skill_group(t, context.tables) if t in skills else _quote(t) for t in unique
    )
    if context.location_clause:
        text = f"{text} AND ({context.location_clause})"

    return QuerySpec(
        text=text,
        strategy="keyword",
        label="keyword",
        mode="exact",
        domain_allow_list=list(context.tables.keyword_job_domains),
        include_terms=[f"{context.role.lower()} position"],
        date_window_days=KEYWORD_WINDOW_DAYS if fresh else None,
        result_cap=min(cap, KEYWORD_MAX_RESULTS),
    )


def _hybrid_queries(
    context: _QueryContext, battery: list[HybridTemplate], cap: int, fresh: bool,
) -> list[QuerySpec]:
    if not battery:
        return []
    sub_cap = max(1, min(HYBRID_MAX_RESULTS, cap // len(battery)))
    fields = {
        "role": context.role,
        "frameworks": " ".join(context.frameworks[:2]),
        "languages": " ".join(context.languages[:2] or context.skills[:2]),
        "framework": context.frameworks[0] if context.frameworks else FALLBACK_FRAMEWORK,
        "language": context.languages[0] if context.languages else FALLBACK_LANGUAGE,
        "skills": " ".join(context.top_skills),
    }

    queries: list[QuerySpec] = []
    for template in battery:
        queries.append(QuerySpec(
            text=_squash(template.query.format(**fields)),
            strategy="hybrid",
            label=template.label,
            mode="auto",
            domain_allow_list=list(template.domains),
            include_terms=[_squash(term.format(**fields)) for term in template.include_terms],
            date_window_days=HYBRID_WINDOW_DAYS if fresh else None,
            result_cap=sub_cap,
        ))
    return queries


def _primary_role(profile: CandidateProfile) -> str:
    if profile.preferences.preferred_roles:
        return profile.preferences.preferred_roles[0]
    if profile.title:
        return profile.title
    for role in profile.experience.roles:
        if role.title:
            return role.title
    return GENERIC_SKILL


def _article(word: str) -> str:
    return f"an {word}" if word[:1] in "aeiou" else f"a {word}"


def _skill_group(skill: str, tables: HeuristicTables) -> str:
    """``"React"`` or ``("React" OR "React.js" OR "ReactJS")`` when synonyms are known."""
    names = expand_skill_synonyms(skill, tables)[:1 + SKILL_SYNONYMS_PER_TERM]
    if len(names) < 2:
        return _quote(skill)
    return "(" + " OR ".join(_quote(name) for name in names) + ")"


def _quote(term: str) -> str:
    return '"' + _squash(term.replace('"', "")) + '"'


def _squash(text: str) -> str:
    return " ".join(text.split())
