"""Core data models for the job matcher.

Search results flow one way: RawSearchResult (provider) -> EnrichedJob
(extractor) -> EnrichedJob copy with relevance_score set (ranker).
All models are frozen; later stages use ``model_copy(update=...)``.
"""

from datetime import datetime, timedelta, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Strategy = Literal["neural", "keyword", "hybrid"]
QueryMode = Literal["broad", "exact", "auto"]

STRATEGIES: tuple[Strategy, ...] = ("neural", "keyword", "hybrid")


class SalaryRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int = Field(ge=0)
    max: int = Field(ge=0)
    currency: str = "USD"


class RawSearchResult(BaseModel):
    """One item returned by a search provider, tagged with the query that found it."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    title: str = ""
    url: str
    published_date: str | None = None
    author: str | None = None
    text: str | None = None
    highlights: list[str] = Field(default_factory=list)
    highlight_scores: list[float] = Field(default_factory=list)
    summary: str | None = None
    score: float | None = None
    strategy: str = ""
    query_label: str = ""


class EnrichedJob(BaseModel):
    """A raw result plus the structured attributes extracted from its text.

    Frozen; relevance_score is set by the ranker on a copy.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    url: str
    domain: str = ""
    company: str = "Unknown"
    location: str = "Remote"
    description: str = ""
    published_date: str | None = None
    author: str | None = None
    highlights: list[str] = Field(default_factory=list)
    highlight_scores: list[float] = Field(default_factory=list)
    summary: str | None = None
    provider_score: float | None = None
    strategy: str = ""
    query_label: str = ""

    salary_range: SalaryRange | None = None
    job_type: str = "Full-time"
    experience_level: str = "Mid-level"
    skills: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    company_size: str | None = None
    company_culture: str | None = None
    application_deadline: str | None = None
    remote: bool = False
    hybrid: bool = False

    relevance_score: float = Field(default=0.0, ge=0.0, le=1.0)
    match_score: float | None = Field(default=None, ge=0.0, le=1.0)
    recommendation_reason: str = ""

    @property
    def mean_highlight_score(self) -> float | None:
        if not self.highlight_scores:
            return None
        return sum(self.highlight_scores) / len(self.highlight_scores)

    @property
    def published_at(self) -> datetime | None:
        """Parsed publish date, or None when absent or not ISO-8601."""
        if not self.published_date:
            return None
        try:
            return datetime.fromisoformat(self.published_date.replace("Z", "+00:00"))
        except ValueError:
            return None


class QuerySpec(BaseModel):
    """One synthesized retrieval query, before it is turned into a provider request."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)
    strategy: Strategy
    label: str
    mode: QueryMode = "auto"
    domain_allow_list: list[str] = Field(default_factory=list)
    domain_deny_list: list[str] = Field(default_factory=list)
    include_terms: list[str] = Field(default_factory=list)
    exclude_terms: list[str] = Field(default_factory=list)
    date_window_days: int | None = Field(default=None, ge=1)
    result_cap: int = Field(default=10, ge=1, le=100)


class ContentOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: bool = True
    highlights: bool = True
    summary: bool = True


class ProviderRequest(BaseModel):
    """Provider-neutral request payload derived from a QuerySpec."""

    model_config = ConfigDict(frozen=True)

    query: str
    mode: QueryMode
    result_cap: int
    domain_allow_list: list[str] = Field(default_factory=list)
    domain_deny_list: list[str] = Field(default_factory=list)
    text_must_include: list[str] = Field(default_factory=list)
    text_must_exclude: list[str] = Field(default_factory=list)
    published_after: datetime | None = None
    extract_content: ContentOptions = Field(default_factory=ContentOptions)

    @classmethod
    def from_query(cls, query: QuerySpec, *, now: datetime | None = None) -> "ProviderRequest":
        published_after = None
        if query.date_window_days is not None:
            now = now or datetime.now(timezone.utc)
            published_after = now - timedelta(days=query.date_window_days)
        return cls(
            query=query.text,
            mode=query.mode,
            result_cap=query.result_cap,
            domain_allow_list=query.domain_allow_list,
            domain_deny_list=query.domain_deny_list,
            text_must_include=query.include_terms,
            text_must_exclude=query.exclude_terms,
            published_after=published_after,
        )


class QueryOutcome(BaseModel):
    """Result of one provider call: either results or an error message, never both."""

    model_config = ConfigDict(frozen=True)

    query: QuerySpec
    results: list[RawSearchResult] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FailedQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    strategy: str
    label: str
    error: str
