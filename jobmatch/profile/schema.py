"""CandidateProfile model derived from raw portfolio content."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

from jobmatch.core.schemas import SalaryRange

CareerLevel = Literal["entry", "mid", "senior", "lead", "executive"]
CompanyType = Literal["startup", "mid-size", "enterprise"]
Complexity = Literal["beginner", "intermediate", "advanced", "expert"]
RemotePreference = Literal["remote", "hybrid", "onsite", "flexible"]
CompetitiveLevel = Literal["junior", "mid", "senior", "expert"]

SKILL_BUCKETS = ("languages", "frameworks", "databases", "cloud", "tools", "soft", "technical")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ContactInfo(_Frozen):
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""
    twitter: str = ""
    website: str = ""
    calendly: str = ""


class SkillSet(_Frozen):
    """Skills split into disjoint buckets; ``all`` is their de-duplicated union."""

    languages: list[str] = Field(default_factory=list)
    frameworks: list[str] = Field(default_factory=list)
    databases: list[str] = Field(default_factory=list)
    cloud: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)
    technical: list[str] = Field(default_factory=list)
    all: list[str] = Field(default_factory=list)

    def technical_skills(self) -> list[str]:
        """Every skill except soft skills, in ``all`` order."""
        soft = {s.lower() for s in self.soft}
        return [s for s in self.all if s.lower() not in soft]


class Role(_Frozen):
    title: str = ""
    company: str = ""
    duration: str = ""
    location: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)
    start_date: str | None = None
    end_date: str | None = None
    is_current: bool = False


class ExperienceSummary(_Frozen):
    roles: list[Role] = Field(default_factory=list)
    total_years: float = 0.0
    level: CareerLevel = "entry"
    industries: list[str] = Field(default_factory=list)
    company_types: list[CompanyType] = Field(default_factory=list)
    has_remote_experience: bool = False


class ProjectInfo(_Frozen):
    name: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    url: str = ""
    repository: str = ""
    impact: list[str] = Field(default_factory=list)


class ProjectSummary(_Frozen):
    count: int = 0
    types: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)
    domains: list[str] = Field(default_factory=list)
    complexity: Complexity = "beginner"
    has_open_source: bool = False
    has_commercial: bool = False
    recent: list[ProjectInfo] = Field(default_factory=list)


class Degree(_Frozen):
    degree: str = ""
    school: str = ""
    year: int | None = None
    location: str = ""
    field: str = ""


class EducationSummary(_Frozen):
    degrees: list[Degree] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    continuous_learning: bool = False


class CareerPreferences(_Frozen):
    preferred_roles: list[str] = Field(default_factory=list)
    preferred_industries: list[str] = Field(default_factory=list)
    preferred_company_sizes: list[str] = Field(default_factory=lambda: ["mid-size"])
    remote_preference: RemotePreference = "flexible"
    salary_range: SalaryRange | None = None
    willing_to_relocate: bool = False
    needs_visa_sponsorship: bool = False


class MarketProfile(_Frozen):
    competitive_level: CompetitiveLevel = "junior"
    unique_skill_combinations: list[tuple[str, str]] = Field(default_factory=list)
    demand_score: float = Field(default=0.0, ge=0.0, le=1.0)
    rarity_score: float = Field(default=0.0, ge=0.0, le=1.0)
    versatility_score: float = Field(default=0.0, ge=0.0, le=1.0)


class CandidateProfile(_Frozen):
    """Structured, read-only summary of a candidate built once per request."""

    name: str = ""
    title: str = ""
    summary: str = ""
    location: str = ""
    contact: ContactInfo = Field(default_factory=ContactInfo)
    skills: SkillSet = Field(default_factory=SkillSet)
    experience: ExperienceSummary = Field(default_factory=ExperienceSummary)
    projects: ProjectSummary = Field(default_factory=ProjectSummary)
    education: EducationSummary = Field(default_factory=EducationSummary)
    preferences: CareerPreferences = Field(default_factory=CareerPreferences)
    market: MarketProfile = Field(default_factory=MarketProfile)

    def to_yaml(self, path: str | Path) -> None:
        """Write the profile to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.dump_yaml())

    def dump_yaml(self) -> str:
        data = self.model_dump(mode="json")
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
