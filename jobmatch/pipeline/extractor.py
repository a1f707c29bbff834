"""Result extractor: converts RawSearchResult objects into EnrichedJob objects.

Rules:
  - The body is ``raw.text`` when present, else ``raw.title``.
  - Every field has a default; extraction ambiguity is never an error.
  - Company: provider author -> careers.X.com -> bare domain -> "Unknown".
  - Location: body -> trailing title segment -> URL -> caller fallback -> "Remote".
"""

import hashlib
import logging
from collections.abc import Iterable

from pydantic import ValidationError

from jobmatch.core.schemas import EnrichedJob, RawSearchResult
from jobmatch.heuristics.tables import DEFAULT_TABLES, HeuristicTables
from jobmatch.heuristics.text import (
    classify_experience_level,
    classify_job_type,
    domain_of,
    extract_application_deadline,
    extract_benefits,
    extract_company,
    extract_company_culture,
    extract_company_size,
    extract_location,
    extract_location_from_title,
    extract_location_from_url,
    extract_salary,
    extract_skills,
    is_hybrid,
    is_remote,
    normalize_location,
)

logger = logging.getLogger(__name__)

DESCRIPTION_LIMIT = 500
DEFAULT_LOCATION = "Remote"


def enrich(
    raw: RawSearchResult,
    *,
    fallback_location: str | None = None,
    tables: HeuristicTables = DEFAULT_TABLES,
) -> EnrichedJob:
    """Extract structured job attributes from one raw provider result."""
    title = raw.title.strip()
    body = raw.text or title
    # Classification sees the title too; it often carries the seniority.
    text = body if body == title else f"{title}\n{body}"

    return EnrichedJob(
        id=raw.id or job_id_for(raw.url),
        title=title,
        url=raw.url,
        domain=domain_of(raw.url),
        company=extract_company(raw.author, raw.url, tables),
        location=_location(raw, body, fallback_location, tables),
        description=_truncate(body),
        published_date=raw.published_date,
        author=raw.author,
        highlights=list(raw.highlights),
        highlight_scores=list(raw.highlight_scores),
        summary=raw.summary,
        provider_score=raw.score,
        strategy=raw.strategy,
        query_label=raw.query_label,
        salary_range=extract_salary(body, tables),
        job_type=classify_job_type(text, tables),
        experience_level=classify_experience_level(text, tables),
        skills=extract_skills(text, tables),
        benefits=extract_benefits(body, tables),
        company_size=extract_company_size(body, tables),
        company_culture=extract_company_culture(body, tables),
        application_deadline=extract_application_deadline(body),
        remote=is_remote(body, tables) or is_remote(title, tables),
        hybrid=is_hybrid(body, tables) or is_hybrid(title, tables),
    )


def enrich_all(
    raws: Iterable[RawSearchResult],
    *,
    fallback_location: str | None = None,
    tables: HeuristicTables = DEFAULT_TABLES,
) -> list[EnrichedJob]:
    """Enrich a batch, skipping any result that cannot be represented."""
    jobs: list[EnrichedJob] = []
    for raw in raws:
        try:
            jobs.append(enrich(raw, fallback_location=fallback_location, tables=tables))
        except ValidationError:
            logger.debug("Failed to enrich %s, skipping", raw.url, exc_info=True)
    return jobs


def job_id_for(url: str) -> str:
    """Deterministic id for results the provider did not identify."""
    return hashlib.sha1(url.encode("utf-8")).hexdigest()[:16]


def _location(
    raw: RawSearchResult,
    body: str,
    fallback: str | None,
    tables: HeuristicTables,
) -> str:
    location = (
        extract_location(body, tables)
        or extract_location_from_title(raw.title, tables)
        or extract_location_from_url(raw.url, tables)
        or (fallback.strip() if fallback and fallback.strip() else None)
        or DEFAULT_LOCATION
    )
    return normalize_location(location, tables)


def _truncate(text: str) -> str:
    if len(text) <= DESCRIPTION_LIMIT:
        return text
    return text[:DESCRIPTION_LIMIT] + "..."
