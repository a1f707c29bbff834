"""Concurrent fan-out of QuerySpecs to a search provider.

Each query runs as its own task inside an ``asyncio.TaskGroup`` and always
settles into a QueryOutcome: results on success, an error message on
failure or timeout. A failing query never affects its siblings. If the
caller is cancelled, the TaskGroup cancels every in-flight call and the
CancelledError propagates; no partial outcome list is returned.
"""

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime

from jobmatch.core.schemas import (
    FailedQuery,
    ProviderRequest,
    QueryOutcome,
    QuerySpec,
    RawSearchResult,
)
from jobmatch.search.providers.base import SearchProvider

logger = logging.getLogger(__name__)


async def execute_queries(
    queries: Sequence[QuerySpec],
    provider: SearchProvider,
    *,
    max_concurrency: int = 4,
    timeout_seconds: float = 20.0,
    now: datetime | None = None,
) -> list[QueryOutcome]:
    """Run every query concurrently; outcomes are returned in query order.

    Args:
        queries: Queries to dispatch, one provider call each.
        provider: Search provider adapter.
        max_concurrency: Upper bound on simultaneous provider calls.
        timeout_seconds: Per-call timeout.
        now: Reference time for date windows (defaults to current UTC time).
    """
    if not queries:
        return []

    semaphore = asyncio.Semaphore(max(1, min(max_concurrency, len(queries))))
    outcomes: list[QueryOutcome | None] = [None] * len(queries)

    async def run(index: int, query: QuerySpec) -> None:
        async with semaphore:
            outcomes[index] = await _execute_one(query, provider, timeout_seconds, now)

    async with asyncio.TaskGroup() as group:
        for index, query in enumerate(queries):
            group.create_task(run(index, query))

    settled = [o for o in outcomes if o is not None]
    failed = sum(1 for o in settled if not o.ok)
    logger.info("Executed %d queries via %s: %d ok, %d failed",
                len(settled), provider.provider_id, len(settled) - failed, failed)
    return settled


def collect_results(
    outcomes: Sequence[QueryOutcome],
) -> tuple[list[RawSearchResult], list[FailedQuery]]:
    """Fold outcomes into (all results in query order, failed queries)."""
    results: list[RawSearchResult] = []
    failures: list[FailedQuery] = []
    for outcome in outcomes:
        if outcome.ok:
            results.extend(outcome.results)
        else:
            failures.append(FailedQuery(
                strategy=outcome.query.strategy,
                label=outcome.query.label,
                error=outcome.error or "unknown error",
            ))
    return results, failures


async def _execute_one(
    query: QuerySpec,
    provider: SearchProvider,
    timeout_seconds: float,
    now: datetime | None,
) -> QueryOutcome:
    request = ProviderRequest.from_query(query, now=now)
    try:
        results = await asyncio.wait_for(provider.search(request), timeout_seconds)
    except TimeoutError:
        logger.warning("Query '%s' (%s) timed out after %.1fs",
                       query.label, query.strategy, timeout_seconds)
        return QueryOutcome(query=query, error=f"timed out after {timeout_seconds:g}s")
    except Exception as e:
        logger.warning("Query '%s' (%s) failed: %s",
                       query.label, query.strategy, e, exc_info=True)
        return QueryOutcome(query=query, error=f"{type(e).__name__}: {e}")

    tagged = [
        r.model_copy(update={"strategy": query.strategy, "query_label": query.label})
        for r in results
    ]
    logger.debug("Query '%s' returned %d results", query.label, len(tagged))
    return QueryOutcome(query=query, results=tagged)
