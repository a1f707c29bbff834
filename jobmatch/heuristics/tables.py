"""Lookup tables for the text heuristics, profile parser, query builder and scorer.

Everything keyword-driven lives here as data. Matching behaviour is extended
by editing a mapping, not by adding branches. ``DEFAULT_TABLES`` is built once
at import time; every consumer takes a ``tables=`` argument so a different
set (another locale, a test double) can be injected.

Dict order is significant wherever a table is documented as "ordered":
the first matching entry wins.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

TABLES_VERSION = "1.2.0"


class HybridTemplate(BaseModel):
    """One targeted sub-query of the hybrid strategy battery.

    ``query`` is a ``str.format`` template; available fields are ``role``,
    ``frameworks``, ``languages``, ``framework``, ``language`` and ``skills``.
    Include terms are formatted the same way.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    query: str
    domains: tuple[str, ...] = ()
    include_terms: tuple[str, ...] = ()


# --- Locations ---

_LOCATION_NORMALIZATIONS: dict[str, str] = {
    "sf": "San Francisco",
    "bay area": "San Francisco Bay Area",
    "silicon valley": "San Francisco Bay Area",
    "nyc": "New York",
    "new york city": "New York",
    "la": "Los Angeles",
    "dc": "Washington DC",
    "washington d.c.": "Washington DC",
    "boston area": "Boston",
    "greater boston": "Boston",
    "seattle area": "Seattle",
    "greater seattle": "Seattle",
    "austin area": "Austin",
    "chicago area": "Chicago",
    "denver area": "Denver",
    "atlanta area": "Atlanta",
    "miami area": "Miami",
    "dallas area": "Dallas",
    "houston area": "Houston",
    "phoenix area": "Phoenix",
    "san diego area": "San Diego",
    "portland area": "Portland",
    "remote": "Remote",
    "remote work": "Remote",
    "work from home": "Remote",
    "work from anywhere": "Remote",
    "distributed": "Remote",
    "fully remote": "Remote",
    "100% remote": "Remote",
    "anywhere": "Remote",
    "hybrid": "Hybrid",
    "flexible location": "Hybrid",
    "remote-friendly": "Hybrid",
    "on-site": "On-site",
    "onsite": "On-site",
    "in-office": "On-site",
    "office-based": "On-site",
}

_BAY_AREA = ("San Francisco", "SF", "Bay Area", "Silicon Valley", "Palo Alto", "Mountain View")

_LOCATION_EXPANSIONS: dict[str, tuple[str, ...]] = {
    # Asia-Pacific
    "singapore": ("Singapore", "SG", "Southeast Asia"),
    "hong kong": ("Hong Kong", "HK"),
    "tokyo": ("Tokyo", "Japan"),
    "japan": ("Japan", "Tokyo", "Osaka"),
    "sydney": ("Sydney", "Australia"),
    "melbourne": ("Melbourne", "Australia"),
    "bangalore": ("Bangalore", "Bengaluru", "India"),
    "mumbai": ("Mumbai", "India"),
    "delhi": ("Delhi", "New Delhi", "India"),
    "pune": ("Pune", "India"),
    "india": ("India", "Bangalore", "Bengaluru", "Hyderabad", "Pune"),
    # Europe
    "london": ("London", "UK", "United Kingdom"),
    "uk": ("United Kingdom", "UK", "London"),
    "united kingdom": ("United Kingdom", "UK", "London"),
    "berlin": ("Berlin", "Germany"),
    "germany": ("Germany", "Berlin", "Munich", "Hamburg"),
    "paris": ("Paris", "France"),
    "amsterdam": ("Amsterdam", "Netherlands"),
    "stockholm": ("Stockholm", "Sweden"),
    "copenhagen": ("Copenhagen", "Denmark"),
    "zurich": ("Zurich", "Switzerland"),
    "geneva": ("Geneva", "Switzerland"),
    "dublin": ("Dublin", "Ireland"),
    "tel aviv": ("Tel Aviv", "Israel"),
    # North America
    "san francisco": ("San Francisco", "SF", "Bay Area", "Silicon Valley"),
    "sf": ("San Francisco", "SF", "Bay Area", "Silicon Valley"),
    "bay area": _BAY_AREA,
    "san francisco bay area": _BAY_AREA,
    "silicon valley": _BAY_AREA,
    "new york": ("New York", "NYC", "Manhattan", "Brooklyn"),
    "nyc": ("New York", "NYC", "Manhattan", "Brooklyn"),
    "los angeles": ("Los Angeles", "LA", "Santa Monica"),
    "la": ("Los Angeles", "LA", "Santa Monica"),
    "seattle": ("Seattle", "Bellevue", "Redmond"),
    "boston": ("Boston", "Cambridge"),
    "washington dc": ("Washington DC", "DC", "Arlington"),
    "dc": ("Washington DC", "DC", "Arlington"),
    "austin": ("Austin", "Texas"),
    "chicago": ("Chicago", "Illinois"),
    "denver": ("Denver", "Boulder", "Colorado"),
    "atlanta": ("Atlanta", "Georgia"),
    "miami": ("Miami", "Florida"),
    "dallas": ("Dallas", "Texas"),
    "houston": ("Houston", "Texas"),
    "phoenix": ("Phoenix", "Arizona"),
    "san diego": ("San Diego", "California"),
    "portland": ("Portland", "Oregon"),
    "toronto": ("Toronto", "Canada"),
    "vancouver": ("Vancouver", "Canada"),
    "canada": ("Canada", "Toronto", "Vancouver", "Montreal"),
    "united states": ("United States", "USA", "US"),
    "usa": ("United States", "USA", "US"),
    # Remote
    "remote": ("remote", "work from home", "distributed", "anywhere"),
}

_METRO_GROUPS: tuple[tuple[str, ...], ...] = (
    ("san francisco", "sf", "bay area", "silicon valley", "palo alto", "mountain view",
     "cupertino", "sunnyvale"),
    ("new york", "nyc", "new york city", "manhattan", "brooklyn"),
    ("los angeles", "la", "santa monica", "west hollywood", "beverly hills"),
    ("seattle", "bellevue", "redmond", "kirkland"),
    ("boston", "cambridge", "somerville"),
    ("washington dc", "dc", "arlington", "alexandria"),
    ("austin", "round rock", "cedar park"),
    ("chicago", "evanston", "oak park"),
    ("denver", "boulder", "golden"),
    ("atlanta", "buckhead", "midtown"),
    ("miami", "south beach", "coral gables"),
    ("dallas", "plano", "richardson", "frisco"),
    ("houston", "sugar land", "the woodlands"),
    ("phoenix", "scottsdale", "tempe"),
    ("san diego", "la jolla", "del mar"),
    ("portland", "beaverton", "lake oswego"),
    ("remote", "work from home", "distributed", "anywhere", "wfh", "fully remote",
     "100% remote"),
)

_STATE_NAMES: dict[str, tuple[str, ...]] = {
    "ca": ("california", "calif"),
    "ny": ("new york",),
    "tx": ("texas",),
    "fl": ("florida",),
    "wa": ("washington",),
    "ma": ("massachusetts",),
    "il": ("illinois",),
    "co": ("colorado",),
    "ga": ("georgia",),
    "az": ("arizona",),
    "or": ("oregon",),
    "nc": ("north carolina",),
    "va": ("virginia",),
    "md": ("maryland",),
    "pa": ("pennsylvania",),
    "oh": ("ohio",),
    "mi": ("michigan",),
    "mn": ("minnesota",),
    "wi": ("wisconsin",),
    "ut": ("utah",),
    "nv": ("nevada",),
}

_NON_LOCATION_TERMS: tuple[str, ...] = (
    "full time", "full-time", "part time", "part-time", "contract", "permanent", "temporary",
    "senior", "junior", "lead", "principal", "staff", "director",
    "engineer", "developer", "manager", "analyst", "consultant",
    "software", "frontend", "backend", "fullstack", "devops",
    "remote", "hybrid", "onsite", "work from home",
    "urgent", "immediate", "asap", "hot", "featured",
    "jobs", "careers", "apply", "hiring", "inc", "llc", "ltd", "corp", "gmbh",
)

# --- Skills ---

# Ordered: label -> aliases. Extraction reports labels in this order.
_SKILL_VOCABULARY: dict[str, tuple[str, ...]] = {
    "React": ("react", "react.js", "reactjs"),
    "Vue": ("vue", "vue.js", "vuejs"),
    "Angular": ("angular",),
    "Node.js": ("node.js", "nodejs", "node"),
    "Python": ("python",),
    "Java": ("java",),
    "TypeScript": ("typescript",),
    "JavaScript": ("javascript",),
    "Go": ("golang",),
    "Rust": ("rust",),
    "C++": ("c++",),
    "AWS": ("aws", "amazon web services"),
    "Docker": ("docker",),
    "Kubernetes": ("kubernetes", "k8s"),
    "PostgreSQL": ("postgresql", "postgres"),
    "MongoDB": ("mongodb",),
    "Redis": ("redis",),
    "GraphQL": ("graphql",),
    "REST": ("rest api", "rest apis", "restful"),
    "Microservices": ("microservices", "microservice"),
    "DevOps": ("devops",),
    "CI/CD": ("ci/cd",),
    "Git": ("git",),
    "Machine Learning": ("machine learning",),
    "Data Science": ("data science",),
    "Frontend": ("frontend", "front-end"),
    "Backend": ("backend", "back-end"),
}

# Aliases that are ordinary English words in lower case; matched case-sensitively.
_CASE_SENSITIVE_SKILL_ALIASES: dict[str, tuple[str, ...]] = {
    "Go": ("Go",),
    "REST": ("REST",),
}

_SKILL_SYNONYMS: dict[str, tuple[str, ...]] = {
    "react": ("React.js", "ReactJS", "React Native", "Frontend", "UI/UX"),
    "node.js": ("NodeJS", "Node", "Backend", "Server-side"),
    "python": ("Python3", "Django", "Flask", "FastAPI", "Data Science"),
    "javascript": ("JS", "ES6", "TypeScript", "Frontend", "Web Development"),
    "typescript": ("TS", "JavaScript", "Frontend", "Web Development"),
    "aws": ("Amazon Web Services", "Cloud", "DevOps", "Infrastructure"),
    "docker": ("Containerization", "Kubernetes", "DevOps", "CI/CD"),
    "postgresql": ("Postgres", "SQL", "Database", "Backend"),
    "mongodb": ("NoSQL", "Database", "Backend", "Document Database"),
    "kubernetes": ("K8s", "Container Orchestration", "DevOps", "Cloud Native"),
    "go": ("Golang", "Backend", "Microservices", "System Programming"),
    "java": ("Spring", "Backend", "Enterprise", "JVM"),
    "c++": ("Cpp", "System Programming", "Performance", "Embedded"),
    "machine learning": ("ML", "AI", "Data Science", "Deep Learning", "Neural Networks"),
    "data science": ("Analytics", "Statistics", "Python", "R", "Machine Learning"),
    "devops": ("CI/CD", "Infrastructure", "Automation", "Cloud"),
    "frontend": ("UI", "UX", "React", "Vue", "Angular", "Web Development"),
    "backend": ("API", "Server", "Database", "Microservices"),
    "full stack": ("Full-Stack", "Fullstack", "Web Development", "End-to-End"),
}

# Ordered by categorization priority: the first category with a hit wins.
_SKILL_CATEGORIES: dict[str, tuple[str, ...]] = {
    "languages": (
        "javascript", "typescript", "python", "java", "c++", "c#", "go", "golang", "rust",
        "swift", "kotlin", "php", "ruby", "scala", "r", "matlab", "sql",
    ),
    "frameworks": (
        "react", "vue", "angular", "svelte", "next.js", "nuxt", "express", "fastapi",
        "django", "flask", "spring", "laravel", "rails", "asp.net", "gin", "fiber", "node.js",
    ),
    "databases": (
        "postgresql", "mysql", "mongodb", "redis", "elasticsearch", "cassandra",
        "dynamodb", "firebase", "supabase", "prisma", "typeorm", "sequelize",
    ),
    "cloud": (
        "aws", "azure", "gcp", "docker", "kubernetes", "terraform", "ansible",
        "jenkins", "github actions", "gitlab ci", "vercel", "netlify", "heroku",
    ),
    "tools": (
        "git", "webpack", "vite", "babel", "eslint", "prettier", "jest", "cypress",
        "figma", "sketch", "photoshop", "jira", "confluence", "slack", "notion",
    ),
    "soft": (
        "leadership", "communication", "teamwork", "problem solving", "project management",
        "agile", "scrum", "mentoring", "public speaking", "writing", "research",
    ),
}

_TECHNOLOGY_KEYWORDS: tuple[str, ...] = (
    "react", "vue", "angular", "node.js", "python", "java", "typescript", "javascript",
    "aws", "docker", "kubernetes", "postgresql", "mongodb", "redis", "graphql", "rest",
)

# --- Job attributes (ordered) ---

_EXPERIENCE_LEVELS: dict[str, tuple[str, ...]] = {
    "Senior": ("senior", "sr.", "lead", "principal"),
    "Mid-level": ("mid-level", "intermediate"),
    "Entry-level": ("junior", "entry-level", "entry level", "new grad", "recent graduate"),
}

_JOB_TYPES: dict[str, tuple[str, ...]] = {
    "Full-time": ("full-time", "full time"),
    "Part-time": ("part-time", "part time"),
    "Contract": ("contract", "contractor", "freelance"),
    "Internship": ("internship", "intern"),
}

_BENEFITS: dict[str, tuple[str, ...]] = {
    "Health Insurance": ("health insurance", "medical insurance"),
    "Dental": ("dental",),
    "Vision": ("vision insurance", "vision coverage"),
    "401k": ("401k", "401(k)", "retirement"),
    "Equity": ("stock options", "equity", "rsu", "rsus"),
    "Remote Work": ("remote work", "work from home"),
    "Flexible Hours": ("flexible hours", "flexible schedule"),
    "Unlimited PTO": ("unlimited pto", "unlimited vacation"),
    "Professional Development": ("professional development", "learning budget"),
}

_REMOTE_TERMS: tuple[str, ...] = (
    "remote", "work from home", "wfh", "distributed", "work from anywhere",
)
_HYBRID_TERMS: tuple[str, ...] = ("hybrid", "flexible location")

_COMPANY_SIZES: dict[str, tuple[str, ...]] = {
    "Startup": ("startup", "start-up", "early-stage"),
    "Enterprise": ("enterprise", "fortune 500"),
    "Mid-size": ("mid-size", "growing company"),
}

_COMPANY_CULTURES: dict[str, tuple[str, ...]] = {
    "Collaborative": ("collaborative", "team-oriented"),
    "Innovative": ("innovative", "cutting-edge"),
    "Fast-paced": ("fast-paced", "dynamic"),
}

# --- Profile inference ---

_INDUSTRIES: dict[str, tuple[str, ...]] = {
    "fintech": ("bank", "banking", "finance", "financial", "payment", "payments", "trading",
                "investment", "fintech"),
    "healthcare": ("health", "healthcare", "medical", "hospital", "pharma", "biotech"),
    "ecommerce": ("ecommerce", "e-commerce", "retail", "shopping", "marketplace"),
    "saas": ("saas", "software", "platform", "cloud"),
    "gaming": ("game", "games", "gaming", "entertainment"),
    "education": ("education", "edtech", "learning", "university", "school"),
    "blockchain": ("blockchain", "crypto", "web3", "defi"),
}

# Ordered; roles matching none of these count as mid-size.
_COMPANY_TYPES: dict[str, tuple[str, ...]] = {
    "startup": ("startup", "start-up", "seed", "series a"),
    "enterprise": ("enterprise", "fortune", "corporation", "multinational"),
}

_PROJECT_TYPES: dict[str, tuple[str, ...]] = {
    "web": ("web app", "web application", "website", "web platform"),
    "mobile": ("mobile", "ios", "android", "react native", "flutter"),
    "backend": ("api", "apis", "backend", "back-end", "server"),
    "ai/ml": ("machine learning", "ai", "deep learning", "llm", "neural network"),
    "blockchain": ("blockchain", "crypto", "smart contract", "web3"),
    "gaming": ("game", "games", "gaming"),
}

_PROJECT_DOMAINS: dict[str, tuple[str, ...]] = {
    "ecommerce": ("ecommerce", "e-commerce", "shopping", "store"),
    "social": ("social", "chat", "messaging", "community"),
    "fintech": ("finance", "financial", "payment", "payments", "banking"),
    "healthcare": ("health", "medical", "fitness"),
    "education": ("education", "learning", "course", "courses"),
}

_COMMERCIAL_TERMS: tuple[str, ...] = ("commercial", "client", "clients", "business", "customer",
                                      "customers")

_REPOSITORY_HOSTS: tuple[str, ...] = ("github.com", "gitlab.com", "bitbucket.org")

_ACHIEVEMENT_PATTERNS: tuple[str, ...] = (
    r"increased?\s+[^.\n]*?by\s+(?:\d+%|\d+x)",
    r"reduced?\s+[^.\n]*?by\s+(?:\d+%|\d+x)",
    r"improved?\s+[^.\n]*?by\s+(?:\d+%|\d+x)",
    r"led\s+[^.\n]*?team",
    r"managed?\s+[^.\n]*?project",
)

_IMPACT_PATTERNS: tuple[str, ...] = (
    r"(?:\d+%|\d+x)\s+improvement",
    r"saved?\s+\$?\d+[\d,]*(?:k|m)?",
    r"increased?\s+[^.\n]*?by\s+(?:\d+%|\d+x)",
)

_DEGREE_FIELDS: dict[str, tuple[str, ...]] = {
    "Computer Science": ("computer", "software", "computing"),
    "Engineering": ("engineering",),
    "Business": ("business", "mba", "management"),
    "Design": ("design",),
}

_ROLE_TITLES: dict[str, tuple[str, ...]] = {
    "Frontend Developer": ("frontend", "front-end", "ui"),
    "Backend Developer": ("backend", "back-end", "api"),
    "Full Stack Developer": ("fullstack", "full stack", "full-stack"),
    "DevOps Engineer": ("devops", "sre", "site reliability"),
    "Data Engineer": ("data", "analytics"),
    "Mobile Developer": ("mobile", "ios", "android"),
    "Senior Developer": ("lead", "senior"),
}

_FRAMEWORK_ROLES: dict[str, tuple[str, ...]] = {
    "Frontend Developer": ("react", "vue", "angular"),
    "Backend Developer": ("express", "django", "spring"),
}

_RELOCATION_TERMS: tuple[str, ...] = ("relocate", "relocation", "willing to move")

_VISA_COUNTRIES: tuple[str, ...] = (
    "india", "china", "brazil", "mexico", "canada", "uk", "germany", "france",
)

# --- Market analysis ---

_SKILL_COMBINATIONS: tuple[tuple[str, str], ...] = (
    ("TypeScript", "React"),
    ("AWS", "Python"),
    ("Go", "Kubernetes"),
    ("Python", "Machine Learning"),
    ("Rust", "WebAssembly"),
)

_HIGH_DEMAND_SKILLS: tuple[str, ...] = (
    "react", "typescript", "python", "aws", "kubernetes", "node.js", "go", "rust",
)
_RARE_SKILLS: tuple[str, ...] = ("rust", "go", "blockchain", "quantum", "webassembly")
_RARE_INDUSTRIES: tuple[str, ...] = ("blockchain", "quantum", "biotech")

# --- Scoring ---

_LEVEL_ORDINALS: dict[str, int] = {
    "entry": 1, "junior": 1, "entry-level": 1,
    "mid": 2, "mid-level": 2, "intermediate": 2,
    "senior": 3,
    "lead": 4, "principal": 4, "staff": 4,
    "executive": 5, "director": 5,
}

_TOP_COMPANIES: tuple[str, ...] = (
    "google", "microsoft", "apple", "amazon", "meta", "netflix", "uber", "airbnb",
    "stripe", "square", "palantir", "databricks", "snowflake", "mongodb",
    "atlassian", "slack", "zoom", "salesforce", "adobe", "oracle",
)
_JOB_BOARDS: tuple[str, ...] = ("linkedin.com", "indeed.com", "glassdoor.com")

# --- Salary and company names ---

_CURRENCY_SYMBOLS: dict[str, str] = {"$": "USD", "€": "EUR", "£": "GBP"}
_CURRENCY_CODES: tuple[str, ...] = ("USD", "EUR", "GBP", "CAD", "AUD", "SGD", "INR")
_TLD_SUFFIXES: tuple[str, ...] = (
    ".co.uk", ".com", ".io", ".ai", ".co", ".org", ".net", ".jobs", ".dev", ".app",
)
_CAREER_SUBDOMAINS: tuple[str, ...] = ("careers.", "jobs.", "www.")

# --- Search domains ---

_CORE_JOB_DOMAINS: tuple[str, ...] = (
    "linkedin.com/jobs", "indeed.com", "glassdoor.com", "wellfound.com",
    "jobs.lever.co", "greenhouse.io", "workday.com", "bamboohr.com",
)
_COMPANY_CAREER_DOMAINS: tuple[str, ...] = (
    "careers.google.com", "amazon.jobs", "microsoft.com/careers",
    "careers.netflix.com", "jobs.spotify.com", "careers.stripe.com",
    "careers.airbnb.com", "jobs.github.com", "careers.shopify.com",
)
_KEYWORD_JOB_DOMAINS: tuple[str, ...] = (
    "linkedin.com/jobs", "indeed.com", "glassdoor.com",
    "stackoverflow.com/jobs", "dice.com", "monster.com",
)
_NON_JOB_DOMAINS: tuple[str, ...] = (
    "stackoverflow.com", "reddit.com", "quora.com", "medium.com", "blog.com", "news.com",
)

_HYBRID_BATTERY: tuple[HybridTemplate, ...] = (
    HybridTemplate(
        label="startup",
        query="{role} startup opportunities {frameworks}",
        domains=("wellfound.com", "ycombinator.com", "techstars.com", "crunchbase.com"),
        include_terms=("startup", "founding team", "equity"),
    ),
    HybridTemplate(
        label="enterprise",
        query="senior {languages} enterprise development",
        domains=("careers.microsoft.com", "careers.google.com", "amazon.jobs",
                 "linkedin.com/jobs"),
        include_terms=("enterprise", "scale", "team lead"),
    ),
    HybridTemplate(
        label="remote-first",
        query="remote {role} distributed team",
        domains=("remoteok.io", "weworkremotely.com", "remote.co", "flexjobs.com"),
        include_terms=("remote-first", "distributed", "anywhere"),
    ),
    HybridTemplate(
        label="framework",
        query="{framework} {language} development position",
        domains=("stackoverflow.com/jobs", "github.com/jobs", "techcareers.com"),
        include_terms=("{framework}", "technical team"),
    ),
)

_REGIONAL_BATTERY: tuple[HybridTemplate, ...] = (
    HybridTemplate(
        label="europe",
        query="software engineering jobs Europe {skills}",
        domains=("landing.jobs", "arbeitnow.com", "relocate.me", "jobs.ie", "totaljobs.com",
                 "reed.co.uk", "stepstone.de", "xing.com", "welcometothejungle.com"),
    ),
    HybridTemplate(
        label="japan",
        query="software engineering jobs Japan {skills}",
        domains=("tokyodev.com", "japan-dev.com", "linkedin.com"),
    ),
    HybridTemplate(
        label="hacker-news",
        query="\"who's hiring\" software engineering {skills} visa sponsorship",
        domains=("news.ycombinator.com",),
    ),
)


class HeuristicTables(BaseModel):
    """Immutable bundle of every keyword/synonym table used by the core."""

    model_config = ConfigDict(frozen=True)

    version: str = TABLES_VERSION

    location_normalizations: dict[str, str] = Field(
        default_factory=lambda: dict(_LOCATION_NORMALIZATIONS))
    location_expansions: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_LOCATION_EXPANSIONS))
    metro_groups: tuple[tuple[str, ...], ...] = _METRO_GROUPS
    state_names: dict[str, tuple[str, ...]] = Field(default_factory=lambda: dict(_STATE_NAMES))
    non_location_terms: tuple[str, ...] = _NON_LOCATION_TERMS

    skill_vocabulary: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_SKILL_VOCABULARY))
    case_sensitive_skill_aliases: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_CASE_SENSITIVE_SKILL_ALIASES))
    skill_synonyms: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_SKILL_SYNONYMS))
    skill_categories: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_SKILL_CATEGORIES))
    technology_keywords: tuple[str, ...] = _TECHNOLOGY_KEYWORDS

    experience_levels: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_EXPERIENCE_LEVELS))
    job_types: dict[str, tuple[str, ...]] = Field(default_factory=lambda: dict(_JOB_TYPES))
    benefits: dict[str, tuple[str, ...]] = Field(default_factory=lambda: dict(_BENEFITS))
    remote_terms: tuple[str, ...] = _REMOTE_TERMS
    hybrid_terms: tuple[str, ...] = _HYBRID_TERMS
    company_sizes: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_COMPANY_SIZES))
    company_cultures: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_COMPANY_CULTURES))

    industries: dict[str, tuple[str, ...]] = Field(default_factory=lambda: dict(_INDUSTRIES))
    company_types: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_COMPANY_TYPES))
    project_types: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_PROJECT_TYPES))
    project_domains: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_PROJECT_DOMAINS))
    commercial_terms: tuple[str, ...] = _COMMERCIAL_TERMS
    repository_hosts: tuple[str, ...] = _REPOSITORY_HOSTS
    achievement_patterns: tuple[str, ...] = _ACHIEVEMENT_PATTERNS
    impact_patterns: tuple[str, ...] = _IMPACT_PATTERNS
    degree_fields: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_DEGREE_FIELDS))
    role_titles: dict[str, tuple[str, ...]] = Field(default_factory=lambda: dict(_ROLE_TITLES))
    framework_roles: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: dict(_FRAMEWORK_ROLES))
    relocation_terms: tuple[str, ...] = _RELOCATION_TERMS
    visa_countries: tuple[str, ...] = _VISA_COUNTRIES

    skill_combinations: tuple[tuple[str, str], ...] = _SKILL_COMBINATIONS
    high_demand_skills: tuple[str, ...] = _HIGH_DEMAND_SKILLS
    rare_skills: tuple[str, ...] = _RARE_SKILLS
    rare_industries: tuple[str, ...] = _RARE_INDUSTRIES

    level_ordinals: dict[str, int] = Field(default_factory=lambda: dict(_LEVEL_ORDINALS))
    top_companies: tuple[str, ...] = _TOP_COMPANIES
    job_boards: tuple[str, ...] = _JOB_BOARDS

    currency_symbols: dict[str, str] = Field(default_factory=lambda: dict(_CURRENCY_SYMBOLS))
    currency_codes: tuple[str, ...] = _CURRENCY_CODES
    tld_suffixes: tuple[str, ...] = _TLD_SUFFIXES
    career_subdomains: tuple[str, ...] = _CAREER_SUBDOMAINS

    core_job_domains: tuple[str, ...] = _CORE_JOB_DOMAINS
    company_career_domains: tuple[str, ...] = _COMPANY_CAREER_DOMAINS
    keyword_job_domains: tuple[str, ...] = _KEYWORD_JOB_DOMAINS
    non_job_domains: tuple[str, ...] = _NON_JOB_DOMAINS
    hybrid_battery: tuple[HybridTemplate, ...] = _HYBRID_BATTERY
    regional_battery: tuple[HybridTemplate, ...] = _REGIONAL_BATTERY

    @classmethod
    def from_yaml(cls, path: str | Path) -> "HeuristicTables":
        """Load tables from YAML; keys absent from the file keep their defaults."""
        path = Path(path)
        if not path.exists():
            msg = f"Tables file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)


DEFAULT_TABLES = HeuristicTables()
