"""Human-readable recommendation reasons and a display match score per job."""

import logging
from datetime import datetime, timezone

from jobmatch.core.schemas import EnrichedJob
from jobmatch.heuristics.rules import contains_keyword
from jobmatch.heuristics.text import skills_overlap
from jobmatch.profile.schema import CandidateProfile

logger = logging.getLogger(__name__)

DEFAULT_REASON = "Discovered through multi-strategy matching"
REASON_SEPARATOR = " • "
MAX_REASONS = 3
HIGHLIGHT_SNIPPET = 100
SUMMARY_SNIPPET = 150
MIN_SUMMARY_FOR_REASON = 50
MIN_SUMMARY_FOR_BONUS = 100
RARE_PROFILE = 0.7
HIGH_DEMAND_PROFILE = 0.8

STRATEGY_REASONS: dict[str, str] = {
    "neural": "Semantic match with your career profile",
    "keyword": "Exact match for your technical skills",
    "hybrid": "Comprehensive match combining multiple factors",
}

# (maximum age in days, bonus), checked top-down.
FRESHNESS_BONUSES: tuple[tuple[float, float], ...] = ((7, 0.15), (30, 0.10))


def matched_skills(job: EnrichedJob, profile: CandidateProfile) -> list[str]:
    """Job skills that overlap (in either direction) with the candidate's skills."""
    return [
        skill for skill in job.skills
        if any(skills_overlap(skill, s) for s in profile.skills.all)
    ]


def recommendation_reason(job: EnrichedJob, profile: CandidateProfile) -> str:
    """Up to three short reasons this job was recommended, joined by " • "."""
    reasons: list[str] = []

    if job.highlights:
        reasons.append(f'Highlighted match: "{_snippet(job.highlights[0], HIGHLIGHT_SNIPPET)}"')

    strategy_reason = STRATEGY_REASONS.get(job.strategy)
    if strategy_reason:
        reasons.append(strategy_reason)

    skills = matched_skills(job, profile)
    if skills:
        reasons.append(f"Matches {len(skills)} of your skills: {', '.join(skills[:3])}")

    level = profile.experience.level
    if profile.experience.roles and level in job.experience_level.lower():
        reasons.append(f"Perfect fit for {level} level")

    if job.summary and len(job.summary) > MIN_SUMMARY_FOR_REASON:
        reasons.append(f"Summary: {_snippet(job.summary, SUMMARY_SNIPPET)}")

    if profile.market.rarity_score > RARE_PROFILE:
        reasons.append("Great match for your rare skill combination")

    if not reasons:
        return DEFAULT_REASON
    return REASON_SEPARATOR.join(reasons[:MAX_REASONS])


def match_score(
    job: EnrichedJob, profile: CandidateProfile, *, now: datetime | None = None,
) -> float:
    """Relevance plus highlight, summary, freshness and skill-overlap bonuses, capped at 1.0."""
    score = job.relevance_score

    highlight = job.mean_highlight_score
    if highlight is not None:
        score += highlight * 0.2

    if job.summary and len(job.summary) > MIN_SUMMARY_FOR_BONUS:
        score += 0.1

    score += _freshness_bonus(job, now or datetime.now(timezone.utc))

    if profile.skills.all:
        score += len(matched_skills(job, profile)) / len(profile.skills.all) * 0.3

    if (
        profile.market.demand_score > HIGH_DEMAND_PROFILE
        and contains_keyword(job.company, "startup")
    ):
        score += 0.1

    return max(0.0, min(score, 1.0))


def annotate(
    jobs: list[EnrichedJob], profile: CandidateProfile, *, now: datetime | None = None,
) -> list[EnrichedJob]:
    """Copies of ``jobs`` with recommendation_reason and match_score filled in."""
    return [
        job.model_copy(update={
            "recommendation_reason": recommendation_reason(job, profile),
            "match_score": match_score(job, profile, now=now),
        })
        for job in jobs
    ]


def _freshness_bonus(job: EnrichedJob, now: datetime) -> float:
    published = job.published_at
    if published is None:
        return 0.0
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    age_days = (now - published).total_seconds() / 86400
    for max_age, bonus in FRESHNESS_BONUSES:
        if age_days < max_age:
            return bonus
    return 0.0


def _snippet(text: str, limit: int) -> str:
    text = " ".join(text.split())
    return text if len(text) <= limit else text[:limit] + "..."
