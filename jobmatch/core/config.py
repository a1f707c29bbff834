"""Configuration models and YAML loader for the job matcher."""

import math
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from jobmatch.core.schemas import STRATEGIES, SalaryRange, Strategy
from jobmatch.heuristics.tables import DEFAULT_TABLES, HeuristicTables

GENERIC_SKILL = "software engineer"


class SearchFilters(BaseModel):
    """Caller-supplied constraints; every field is optional."""

    model_config = ConfigDict(frozen=True)

    skills: list[str] = Field(default_factory=list)
    location: str | None = None
    experience_level: str | None = None
    job_type: str | None = None
    salary_range: SalaryRange | None = None
    company_size: str | None = None
    remote: bool | None = None
    industries: list[str] = Field(default_factory=list)

    @field_validator("skills", "industries")
    @classmethod
    def strip_blank(cls, v: list[str]) -> list[str]:
        return [s.strip() for s in v if s and s.strip()]


class ProviderConfig(BaseModel):
    """Which search provider to use and how to reach it."""

    name: str = "exa"
    api_key_env: str = "EXA_API_KEY"
    base_url: str = "https://api.exa.ai"
    fixture_path: str | None = None


class SearchConfig(BaseModel):
    """Strategy selection, result caps and concurrency for one search request."""

    strategies: list[Strategy] = Field(default_factory=lambda: list(STRATEGIES))
    max_results: int = Field(default=50, ge=1, le=200)
    max_results_per_strategy: int | None = Field(default=None, ge=1, le=100)
    max_concurrency: int = Field(default=4, ge=1, le=16)
    timeout_seconds: float = Field(default=20.0, gt=0.0, le=120.0)
    fresh_jobs_only: bool = True
    hybrid_battery: Literal["default", "extended"] = "default"
    exclude_domains: list[str] = Field(
        default_factory=lambda: ["stackoverflow.com", "github.com", "reddit.com"],
    )
    max_recent_projects: int = Field(default=5, ge=0)

    @field_validator("strategies")
    @classmethod
    def at_least_one_strategy(cls, v: list[Strategy]) -> list[Strategy]:
        unique = list(dict.fromkeys(v))
        if not unique:
            msg = "at least one strategy must be configured"
            raise ValueError(msg)
        return unique

    def per_strategy_cap(self) -> int:
        """Result cap per strategy: explicit, or max_results spread over strategies."""
        if self.max_results_per_strategy is not None:
            return self.max_results_per_strategy
        return min(100, math.ceil(self.max_results / len(self.strategies)))


class ScoringConfig(BaseModel):
    """Weights for the relevance score. Weights must sum to 1.0."""

    base_score: float = Field(default=0.5, ge=0.0, le=1.0)
    skills_weight: float = Field(default=0.40, ge=0.0)
    experience_weight: float = Field(default=0.20, ge=0.0)
    location_weight: float = Field(default=0.15, ge=0.0)
    industry_weight: float = Field(default=0.10, ge=0.0)
    company_weight: float = Field(default=0.10, ge=0.0)
    job_type_weight: float = Field(default=0.05, ge=0.0)
    # Share of the location weight granted for a plain location match (0.10 of 0.15).
    location_match_credit: float = Field(default=0.10 / 0.15, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def weights_sum_to_one(self) -> "ScoringConfig":
        total = (
            self.skills_weight + self.experience_weight + self.location_weight
            + self.industry_weight + self.company_weight + self.job_type_weight
        )
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            msg = f"scoring weights must sum to 1.0, got {total:.4f}"
            raise ValueError(msg)
        return self


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    filters: SearchFilters = Field(default_factory=SearchFilters)
    tables_path: str | None = None

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)

    def load_tables(self) -> HeuristicTables:
        """Default heuristic tables, or a YAML overlay when tables_path is set."""
        if self.tables_path is None:
            return DEFAULT_TABLES
        return HeuristicTables.from_yaml(self.tables_path)
