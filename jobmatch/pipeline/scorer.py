"""Rule-based relevance scoring and ranking.

score = base + sum(weight * component), clamped to [0, 1]

The base is the provider's own score, or ScoringConfig.base_score when the
provider gave none. Components return values in [0, 1]; the weight table
from build_weight_table() is the single place weights are defined.

Ordering: score desc, mean highlight score desc, publish date desc
(missing values last), then input order.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from functools import partial
from typing import NamedTuple

from jobmatch.core.config import ScoringConfig, SearchFilters
from jobmatch.core.schemas import EnrichedJob
from jobmatch.heuristics.rules import contains_any
from jobmatch.heuristics.tables import DEFAULT_TABLES, HeuristicTables
from jobmatch.heuristics.text import locations_match, skills_overlap
from jobmatch.profile.schema import CandidateProfile

logger = logging.getLogger(__name__)

NEUTRAL = 0.5
ADJACENT_LEVEL = 0.7
DISTANT_LEVEL = 0.2
CAREER_SITE = 0.8
JOB_BOARD = 0.7
CAREER_SUBDOMAINS = ("careers.", "jobs.")

ScoreFn = Callable[[EnrichedJob, CandidateProfile, SearchFilters, HeuristicTables], float]


class ScoreComponent(NamedTuple):
    name: str
    weight: float
    fn: ScoreFn


def build_weight_table(config: ScoringConfig) -> list[ScoreComponent]:
    """Ordered (name, weight, fn) table used by score_job."""
    return [
        ScoreComponent("skills", config.skills_weight, skill_alignment),
        ScoreComponent("experience", config.experience_weight, experience_alignment),
        ScoreComponent(
            "location",
            config.location_weight,
            partial(location_alignment, match_credit=config.location_match_credit),
        ),
        ScoreComponent("industry", config.industry_weight, industry_alignment),
        ScoreComponent("company", config.company_weight, company_quality),
        ScoreComponent("job_type", config.job_type_weight, job_type_alignment),
    ]


def score_breakdown(
    job: EnrichedJob,
    profile: CandidateProfile,
    filters: SearchFilters,
    *,
    config: ScoringConfig | None = None,
    tables: HeuristicTables = DEFAULT_TABLES,
) -> dict[str, float]:
    """Weighted contribution of each component, keyed by component name."""
    config = config or ScoringConfig()
    return {
        c.name: c.weight * c.fn(job, profile, filters, tables) for c in build_weight_table(config)
    }


def score_job(
    job: EnrichedJob,
    profile: CandidateProfile,
    filters: SearchFilters,
    *,
    config: ScoringConfig | None = None,
    tables: HeuristicTables = DEFAULT_TABLES,
) -> float:
    """Relevance score in [0, 1] for one job."""
    config = config or ScoringConfig()
    base = job.provider_score if job.provider_score is not None else config.base_score
    contributions = score_breakdown(job, profile, filters, config=config, tables=tables)
    return max(0.0, min(1.0, base + sum(contributions.values())))


def rank(
    jobs: list[EnrichedJob],
    profile: CandidateProfile,
    filters: SearchFilters,
    *,
    config: ScoringConfig | None = None,
    tables: HeuristicTables = DEFAULT_TABLES,
) -> list[EnrichedJob]:
    """Return copies of ``jobs`` with relevance_score set, best first."""
    config = config or ScoringConfig()
    scored = [
        job.model_copy(update={
            "relevance_score": score_job(job, profile, filters, config=config, tables=tables),
        })
        for job in jobs
    ]
    scored.sort(key=_sort_key)
    if scored:
        logger.debug("Ranked %d jobs, top score %.3f", len(scored), scored[0].relevance_score)
    return scored


def _sort_key(job: EnrichedJob) -> tuple[float, float, int, float]:
    highlight = job.mean_highlight_score
    published = job.published_at
    return (
        -job.relevance_score,
        -(highlight if highlight is not None else -1.0),
        0 if published is not None else 1,
        -_timestamp(published) if published is not None else 0.0,
    )


def _timestamp(value: datetime) -> float:
    try:
        return value.timestamp()
    except (OverflowError, OSError, ValueError):
        return 0.0


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


def skill_alignment(
    job: EnrichedJob, profile: CandidateProfile, filters: SearchFilters, tables: HeuristicTables,
) -> float:
    """Share of the candidate's skills found (in either direction) among the job's skills."""
    candidate = profile.skills.all or filters.skills
    if not candidate or not job.skills:
        return 0.0
    matched = sum(1 for skill in candidate if any(skills_overlap(skill, js) for js in job.skills))
    return matched / len(candidate)


def experience_alignment(
    job: EnrichedJob, profile: CandidateProfile, filters: SearchFilters, tables: HeuristicTables,
) -> float:
    """1.0 same level, 0.7 adjacent, 0.2 otherwise; 0.5 when either level is unknown."""
    wanted = profile.experience.level if profile.experience.roles else filters.experience_level
    if not wanted:
        return NEUTRAL
    candidate_rank = tables.level_ordinals.get(wanted.lower())
    job_rank = tables.level_ordinals.get(job.experience_level.lower())
    if candidate_rank is None or job_rank is None:
        return NEUTRAL
    gap = abs(candidate_rank - job_rank)
    if gap == 0:
        return 1.0
    if gap == 1:
        return ADJACENT_LEVEL
    return DISTANT_LEVEL


def location_alignment(
    job: EnrichedJob,
    profile: CandidateProfile,
    filters: SearchFilters,
    tables: HeuristicTables,
    *,
    match_credit: float,
) -> float:
    """Full credit for remote-wanted/remote-job; partial credit for a location match."""
    if filters.remote and job.remote:
        return 1.0
    if filters.location and locations_match(job.location, filters.location, tables):
        return match_credit
    return 0.0


def industry_alignment(
    job: EnrichedJob, profile: CandidateProfile, filters: SearchFilters, tables: HeuristicTables,
) -> float:
    if not filters.industries:
        return 0.0
    text = f"{job.title} {job.description} {job.summary or ''}"
    for industry in filters.industries:
        keywords = (industry, *tables.industries.get(industry.lower(), ()))
        if contains_any(text, keywords):
            return 1.0
    return 0.0


def company_quality(
    job: EnrichedJob, profile: CandidateProfile, filters: SearchFilters, tables: HeuristicTables,
) -> float:
    """Well-known company 1.0, career site 0.8, big job board 0.7, anything else 0.5."""
    if contains_any(f"{job.company} {job.domain}", tables.top_companies):
        return 1.0
    if job.domain.startswith(CAREER_SUBDOMAINS):
        return CAREER_SITE
    if any(job.domain == b or job.domain.endswith(f".{b}") for b in tables.job_boards):
        return JOB_BOARD
    return NEUTRAL


def job_type_alignment(
    job: EnrichedJob, profile: CandidateProfile, filters: SearchFilters, tables: HeuristicTables,
) -> float:
    if not filters.job_type:
        return 0.0
    return 1.0 if filters.job_type.lower().strip() in job.job_type.lower() else 0.0
