"""Filter chain over enriched jobs.

Filter order:
  1. DeduplicationFilter:  exact url, first occurrence wins, order preserved
  2. ExcludeDomainsFilter: drops Q&A/code-hosting pages that are not postings
Then ensure_unique_ids makes ids unique among the survivors.
"""

import logging
from collections.abc import Callable, Iterable

from jobmatch.core.schemas import EnrichedJob
from jobmatch.heuristics.text import domain_of

logger = logging.getLogger(__name__)

# A filter is a callable that takes jobs and returns an ordered subset.
Filter = Callable[[list[EnrichedJob]], list[EnrichedJob]]


class DeduplicationFilter:
    """Remove jobs whose url was already seen.

    Stateful: tracks seen urls across calls within the same filter instance.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def __call__(self, jobs: list[EnrichedJob]) -> list[EnrichedJob]:
        result: list[EnrichedJob] = []
        for job in jobs:
            if job.url not in self._seen:
                self._seen.add(job.url)
                result.append(job)
        deduped = len(jobs) - len(result)
        if deduped:
            logger.debug("DeduplicationFilter: removed %d duplicates", deduped)
        return result


class ExcludeDomainsFilter:
    """Remove jobs hosted on any excluded domain or one of its subdomains."""

    def __init__(self, domains: Iterable[str]) -> None:
        self._domains = [d.lower().strip().removeprefix("www.") for d in domains if d.strip()]

    def __call__(self, jobs: list[EnrichedJob]) -> list[EnrichedJob]:
        if not self._domains:
            return jobs
        result = [j for j in jobs if not self._excluded(j)]
        excluded = len(jobs) - len(result)
        if excluded:
            logger.debug("ExcludeDomainsFilter: removed %d jobs", excluded)
        return result

    def _excluded(self, job: EnrichedJob) -> bool:
        host = job.domain or domain_of(job.url)
        return any(host == d or host.endswith(f".{d}") for d in self._domains)


def dedupe(jobs: list[EnrichedJob]) -> list[EnrichedJob]:
    """Stable dedup by exact url; idempotent and never grows the list."""
    return DeduplicationFilter()(jobs)


def ensure_unique_ids(jobs: list[EnrichedJob]) -> list[EnrichedJob]:
    """Suffix repeated ids ("abc", "abc-2", ...) so every id is unique."""
    seen: set[str] = set()
    result: list[EnrichedJob] = []
    for job in jobs:
        job_id = job.id
        n = 1
        while job_id in seen:
            n += 1
            job_id = f"{job.id}-{n}"
        seen.add(job_id)
        result.append(job if job_id == job.id else job.model_copy(update={"id": job_id}))
    return result


def run_filter_chain(jobs: list[EnrichedJob], filters: list[Filter]) -> list[EnrichedJob]:
    """Apply filters in order, returning the surviving jobs."""
    result = jobs
    for f in filters:
        result = f(result)
    return result
