"""Orchestrator: wires parser, query builder, executor, extractor, filters and ranker.

Data flow:
  1. Portfolio -> CandidateProfile
  2. Profile + filters -> QuerySpecs
  3. Concurrent provider calls -> QueryOutcomes (failures recorded, not raised)
  4. Raw results -> EnrichedJobs
  5. Filter chain (dedup by url, excluded domains) -> unique ids
  6. Rank, cap at max_results, annotate with reasons

If every query failed the report status is "unavailable"; if queries
succeeded but nothing survived, it is "no_matches".
"""

import json
import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from jobmatch.core.config import SearchFilters, Settings
from jobmatch.core.schemas import EnrichedJob, FailedQuery, QuerySpec
from jobmatch.heuristics.tables import HeuristicTables
from jobmatch.pipeline.extractor import enrich_all
from jobmatch.pipeline.insights import annotate
from jobmatch.pipeline.matcher import (
    DeduplicationFilter,
    ExcludeDomainsFilter,
    Filter,
    ensure_unique_ids,
    run_filter_chain,
)
from jobmatch.pipeline.scorer import rank
from jobmatch.profile.parser import parse_portfolio
from jobmatch.profile.schema import CandidateProfile
from jobmatch.search.executor import collect_results, execute_queries
from jobmatch.search.providers.base import SearchProvider
from jobmatch.search.query_builder import build_queries, default_filters

logger = logging.getLogger(__name__)

SearchStatus = Literal["ok", "no_matches", "unavailable"]


class SearchReport(BaseModel):
    """Outcome of one search request."""

    model_config = ConfigDict(frozen=True)

    status: SearchStatus
    jobs: list[EnrichedJob] = Field(default_factory=list)
    profile: CandidateProfile
    filters: SearchFilters
    queries: list[QuerySpec] = Field(default_factory=list)
    raw_count: int = 0
    unique_count: int = 0
    failed_queries: list[FailedQuery] = Field(default_factory=list)
    started_at: datetime
    finished_at: datetime

    @property
    def unavailable(self) -> bool:
        return self.status == "unavailable"


async def run_search(
    portfolio: Any,
    provider: SearchProvider,
    filters: SearchFilters | Mapping[str, Any] | None = None,
    *,
    settings: Settings | None = None,
    tables: HeuristicTables | None = None,
    now: datetime | None = None,
    reference_year: int | None = None,
) -> SearchReport:
    """Execute one search request through the full pipeline.

    Args:
        portfolio: Raw portfolio content (any nested mapping; ``{}`` is valid).
        provider: Search provider adapter, already configured.
        filters: Caller filters, used as given. A mapping instead overrides
            fields of the filters derived from the profile; None uses the
            derived filters unchanged.
        settings: Search, scoring and table settings (defaults when None).
        tables: Heuristic tables; overrides ``settings.tables_path``.
        now: Reference time for date windows and freshness.
        reference_year: Reference year for the profile's recent-degree check.
    """
    settings = settings or Settings()
    tables = tables or settings.load_tables()
    search = settings.search
    started_at = datetime.now()

    # Step 1: Profile
    profile = parse_portfolio(
        portfolio,
        tables=tables,
        reference_year=reference_year,
        max_recent_projects=search.max_recent_projects,
    )
    if filters is None:
        filters = default_filters(profile)
    elif not isinstance(filters, SearchFilters):
        filters = default_filters(profile, **filters)

    # Step 2: Queries
    queries = build_queries(profile, filters, search.strategies, settings=search, tables=tables)

    # Step 3: Fan-out
    outcomes = await execute_queries(
        queries,
        provider,
        max_concurrency=search.max_concurrency,
        timeout_seconds=search.timeout_seconds,
        now=now,
    )
    raw_results, failures = collect_results(outcomes)
    logger.info("Raw results: %d from %d queries (%d failed)",
                len(raw_results), len(queries), len(failures))

    if queries and len(failures) == len(queries):
        logger.warning("All %d queries failed; search unavailable", len(queries))
        return SearchReport(
            status="unavailable",
            profile=profile,
            filters=filters,
            queries=queries,
            failed_queries=failures,
            started_at=started_at,
            finished_at=datetime.now(),
        )

    # Step 4: Enrich
    jobs = enrich_all(raw_results, fallback_location=filters.location, tables=tables)

    # Step 5: Filter chain
    unique = ensure_unique_ids(run_filter_chain(jobs, _build_filters(settings)))
    logger.info("After filtering: %d", len(unique))

    # Step 6: Rank, cap, annotate
    ranked = rank(unique, profile, filters, config=settings.scoring, tables=tables)
    top = annotate(ranked[: search.max_results], profile, now=now)

    status: SearchStatus = "ok" if top else "no_matches"
    logger.info("Search finished: %s, %d jobs returned", status, len(top))
    return SearchReport(
        status=status,
        jobs=top,
        profile=profile,
        filters=filters,
        queries=queries,
        raw_count=len(raw_results),
        unique_count=len(unique),
        failed_queries=failures,
        started_at=started_at,
        finished_at=datetime.now(),
    )


def export_results_json(report: SearchReport) -> str:
    """Export a report's ranked jobs as a JSON string."""
    data = {
        "status": report.status,
        "raw_count": report.raw_count,
        "unique_count": report.unique_count,
        "failed_queries": [f.model_dump() for f in report.failed_queries],
        "jobs": [job.model_dump(mode="json") for job in report.jobs],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def _build_filters(settings: Settings) -> list[Filter]:
    """Build the filter chain (dedup first, so the first occurrence of a url wins)."""
    filters: list[Filter] = [
        DeduplicationFilter(),
        ExcludeDomainsFilter(settings.search.exclude_domains),
    ]
    return filters
