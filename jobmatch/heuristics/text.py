"""Pattern heuristics over arbitrary job/profile text.

Pure functions, no I/O. Every function is fail-soft: on input it cannot
interpret it returns ``None`` or an empty list, never raises. All keyword
data comes from ``HeuristicTables``; pass ``tables=`` to swap it.
"""

import logging
import math
import re
from urllib.parse import parse_qs, unquote, urlparse

from jobmatch.core.schemas import SalaryRange
from jobmatch.heuristics.rules import (
    UNMATCHED,
    Matched,
    MatchResult,
    Rule,
    contains_any,
    contains_keyword,
    first_label,
    first_match,
    matching_labels,
    value_or,
)
from jobmatch.heuristics.tables import DEFAULT_TABLES, HeuristicTables

logger = logging.getLogger(__name__)

DEFAULT_JOB_TYPE = "Full-time"
DEFAULT_EXPERIENCE_LEVEL = "Mid-level"
DEFAULT_CURRENCY = "USD"

_MAX_LOCATION_LENGTH = 60

# --- Location patterns ---

_PLACE = r"[A-Z][A-Za-z'-]*(?:\s+[A-Z][A-Za-z'-]*)*"
_PHRASE_LOCATION = re.compile(
    r"\b(?i:location|based in|office in|offices in|headquarters in|headquartered in"
    r"|located in|position in|role in)\b[:\s]+"
    rf"({_PLACE}(?:,\s*{_PLACE})?)"
)
_CITY_STATE = re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*),\s*([A-Z]{2,3})\b")
_CITY_COUNTRY = re.compile(
    r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*),\s*([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)\b"
)
_WORK_MODE = re.compile(
    r"(?<![a-z0-9])(fully remote|100% remote|remote|hybrid|on-site|onsite|in-office)(?![a-z0-9])",
    re.IGNORECASE,
)

_TITLE_LOCATION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\(([^)]+)\)\s*$"),
    re.compile(r"-\s*([^-]+)$"),
    re.compile(r",\s*([^,]+)$"),
    re.compile(r"\|\s*([^|]+)$"),
)

_URL_PATH_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"/jobs/([a-z-]+)-[a-z-]+-\d+"),
    re.compile(r"/([a-z-]+)/jobs"),
)

# --- Salary patterns ---

_AMOUNT = r"(\d{1,3}(?:,\d{3})+|\d+(?:\.\d+)?)\s?([kK])?"
_SYMBOL_RANGE = re.compile(
    rf"([$€£])\s?{_AMOUNT}\s*(?:-|–|—|to)\s*[$€£]?\s?{_AMOUNT}"
)
_CODE_RANGE = re.compile(
    rf"{_AMOUNT}\s*(?:-|–|—|to)\s*{_AMOUNT}\s*([A-Z]{{3}})\b"
)

_DEADLINE = re.compile(r"\b(?:deadline|apply by|closes)\b[:\s]+([^,\n]+)", re.IGNORECASE)
_MAX_DEADLINE_LENGTH = 50


# ---------------------------------------------------------------------------
# Locations
# ---------------------------------------------------------------------------


def normalize_location(location: str, tables: HeuristicTables = DEFAULT_TABLES) -> str:
    """Map common aliases ("sf", "nyc", "remote work") to canonical names."""
    cleaned = " ".join(location.split())
    return tables.location_normalizations.get(cleaned.lower(), cleaned)


def is_non_location_text(text: str, tables: HeuristicTables = DEFAULT_TABLES) -> bool:
    """True when ``text`` looks like a title fragment, tag or skill, not a place."""
    stripped = text.strip()
    if not stripped or len(stripped) > _MAX_LOCATION_LENGTH:
        return True
    if any(ch.isdigit() for ch in stripped):
        return True
    if contains_any(stripped, tables.non_location_terms):
        return True
    return _mentions_skill(stripped, tables)


def extract_location(text: str, tables: HeuristicTables = DEFAULT_TABLES) -> str | None:
    """Find a location in free text; phrases win over patterns over work-mode keywords."""
    result = first_match(text or "", _location_rules(tables))
    if isinstance(result, Matched):
        return normalize_location(result.value, tables)
    return None


def extract_location_from_title(
    title: str, tables: HeuristicTables = DEFAULT_TABLES,
) -> str | None:
    """Location in a trailing title segment: "(Berlin)", "- Berlin", ", Berlin", "| Berlin"."""
    title = (title or "").strip()
    for pattern in _TITLE_LOCATION_PATTERNS:
        match = pattern.search(title)
        if match:
            candidate = match.group(1).strip()
            if not is_non_location_text(candidate, tables):
                return candidate
    return None


def extract_location_from_url(url: str, tables: HeuristicTables = DEFAULT_TABLES) -> str | None:
    """Location hints from a job URL's ``location=`` parameter or path."""
    try:
        parsed = urlparse(url or "")
    except ValueError:
        logger.debug("Unparseable URL %r", url)
        return None

    candidates: list[str] = []
    candidates.extend(parse_qs(parsed.query).get("location", []))
    path = parsed.path.lower()
    for pattern in _URL_PATH_PATTERNS:
        match = pattern.search(path)
        if match:
            candidates.append(match.group(1))

    for raw in candidates:
        candidate = unquote(raw).replace("-", " ").replace("+", " ").strip()
        if not is_non_location_text(candidate, tables):
            return candidate.title() if candidate.islower() else candidate
    return None


def expand_location_synonyms(
    location: str, tables: HeuristicTables = DEFAULT_TABLES,
) -> list[str]:
    """Synonymous place names for building OR-queries; unknown places map to themselves."""
    cleaned = " ".join((location or "").split())
    if not cleaned:
        return []
    for key in (cleaned.lower(), normalize_location(cleaned, tables).lower()):
        expansion = tables.location_expansions.get(key)
        if expansion:
            return list(expansion)
    return [cleaned]


def locations_match(
    job_location: str, wanted: str, tables: HeuristicTables = DEFAULT_TABLES,
) -> bool:
    """Exact, metro-area, state-level or partial match between two location strings."""
    if not job_location or not wanted:
        return False
    job = normalize_location(job_location, tables).lower()
    want = normalize_location(wanted, tables).lower()
    if job == want:
        return True

    for group in tables.metro_groups:
        if contains_any(job, group) and contains_any(want, group):
            return True

    for abbreviation, names in tables.state_names.items():
        if _mentions_state(job, abbreviation, names) and _mentions_state(want, abbreviation, names):
            logger.debug("State-level location match on %s", abbreviation)
            return True

    return want in job or job in want


def _mentions_state(location: str, abbreviation: str, names: tuple[str, ...]) -> bool:
    # Abbreviations only count after a comma ("Austin, TX"), never as bare words.
    if re.search(rf",\s*{re.escape(abbreviation)}\b", location):
        return True
    return contains_any(location, names)


def _location_rules(tables: HeuristicTables) -> list[Rule]:
    def phrase(match: re.Match[str]) -> MatchResult:
        candidate = " ".join(match.group(1).split())
        if is_non_location_text(candidate, tables) and not _is_work_mode(candidate):
            return UNMATCHED
        return Matched(candidate)

    def city_region(match: re.Match[str]) -> MatchResult:
        city, region = match.group(1), match.group(2)
        if is_non_location_text(city, tables) or is_non_location_text(region, tables):
            return UNMATCHED
        return Matched(f"{city}, {region}")

    def work_mode(match: re.Match[str]) -> MatchResult:
        return Matched(match.group(1))

    return [
        (_PHRASE_LOCATION, phrase),
        (_CITY_STATE, city_region),
        (_CITY_COUNTRY, city_region),
        (_WORK_MODE, work_mode),
    ]


def _is_work_mode(text: str) -> bool:
    return _WORK_MODE.fullmatch(text.strip()) is not None


# ---------------------------------------------------------------------------
# Salary
# ---------------------------------------------------------------------------


def extract_salary(text: str, tables: HeuristicTables = DEFAULT_TABLES) -> SalaryRange | None:
    """Parse "$120k - $160k" or "90-110k EUR" style ranges.

    A ``k`` suffix multiplies by 1000. When only the upper bound carries it,
    a lower bound under 1000 is scaled too ("$90-120k"). Currency defaults
    to USD.
    """

    def symbol_range(match: re.Match[str]) -> MatchResult:
        symbol, low, low_k, high, high_k = match.groups()
        currency = tables.currency_symbols.get(symbol, DEFAULT_CURRENCY)
        return _salary(low, low_k, high, high_k, currency)

    def code_range(match: re.Match[str]) -> MatchResult:
        low, low_k, high, high_k, code = match.groups()
        if code not in tables.currency_codes:
            return UNMATCHED
        return _salary(low, low_k, high, high_k, code)

    rules: list[Rule] = [(_SYMBOL_RANGE, symbol_range), (_CODE_RANGE, code_range)]
    return value_or(first_match(text or "", rules), None)


def _salary(
    low: str, low_k: str | None, high: str, high_k: str | None, currency: str,
) -> MatchResult:
    minimum = _amount(low, low_k)
    maximum = _amount(high, high_k)
    if high_k and not low_k and minimum < 1000:
        minimum *= 1000
    if minimum <= 0 or maximum <= 0:
        return UNMATCHED
    if minimum > maximum:
        minimum, maximum = maximum, minimum
    return Matched(SalaryRange(min=minimum, max=maximum, currency=currency))


def _amount(raw: str, thousands: str | None) -> int:
    value = float(raw.replace(",", ""))
    if thousands:
        value *= 1000
    if not math.isfinite(value):
        msg = f"salary amount out of range: {raw[:20]}..."
        raise ValueError(msg)
    return int(round(value))


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def classify_experience_level(text: str, tables: HeuristicTables = DEFAULT_TABLES) -> str:
    return value_or(first_label(text or "", tables.experience_levels), DEFAULT_EXPERIENCE_LEVEL)


def classify_job_type(text: str, tables: HeuristicTables = DEFAULT_TABLES) -> str:
    return value_or(first_label(text or "", tables.job_types), DEFAULT_JOB_TYPE)


def extract_skills(text: str, tables: HeuristicTables = DEFAULT_TABLES) -> list[str]:
    """Reference-vocabulary skills mentioned in ``text``, in vocabulary order."""
    if not text:
        return []
    skills = matching_labels(text, tables.skill_vocabulary)
    for label, aliases in tables.case_sensitive_skill_aliases.items():
        if label in skills:
            continue
        if any(re.search(rf"(?<![A-Za-z0-9]){re.escape(a)}(?![A-Za-z0-9])", text) for a in aliases):
            skills.append(label)
    order = list(tables.skill_vocabulary)
    return sorted(skills, key=lambda s: order.index(s) if s in order else len(order))


def extract_benefits(text: str, tables: HeuristicTables = DEFAULT_TABLES) -> list[str]:
    return matching_labels(text or "", tables.benefits)


def extract_company_size(text: str, tables: HeuristicTables = DEFAULT_TABLES) -> str | None:
    return value_or(first_label(text or "", tables.company_sizes), None)


def extract_company_culture(text: str, tables: HeuristicTables = DEFAULT_TABLES) -> str | None:
    return value_or(first_label(text or "", tables.company_cultures), None)


def extract_application_deadline(text: str) -> str | None:
    """Free-form deadline text after "deadline"/"apply by"/"closes"."""
    match = _DEADLINE.search(text or "")
    if not match:
        return None
    deadline = match.group(1).strip().rstrip(".")[:_MAX_DEADLINE_LENGTH].strip()
    return deadline or None


def is_remote(text: str, tables: HeuristicTables = DEFAULT_TABLES) -> bool:
    return contains_any(text or "", tables.remote_terms)


def is_hybrid(text: str, tables: HeuristicTables = DEFAULT_TABLES) -> bool:
    return contains_any(text or "", tables.hybrid_terms)


# ---------------------------------------------------------------------------
# Skills and companies
# ---------------------------------------------------------------------------


def expand_skill_synonyms(skill: str, tables: HeuristicTables = DEFAULT_TABLES) -> list[str]:
    """``skill`` followed by its query-expansion synonyms (never used for extraction)."""
    cleaned = skill.strip()
    if not cleaned:
        return []
    expanded = [cleaned]
    seen = {cleaned.lower()}
    for synonym in tables.skill_synonyms.get(cleaned.lower(), ()):
        if synonym.lower() not in seen:
            seen.add(synonym.lower())
            expanded.append(synonym)
    return expanded


def skills_overlap(a: str, b: str) -> bool:
    """Case-insensitive containment in either direction ("Golang" ~ "Go")."""
    a, b = a.strip().lower(), b.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def domain_of(url: str) -> str:
    """Lower-case host of ``url`` without a leading ``www.``; "" when unparseable."""
    try:
        host = urlparse(url or "").hostname or ""
    except ValueError:
        return ""
    return host.removeprefix("www.")


def extract_company(
    author: str | None, url: str, tables: HeuristicTables = DEFAULT_TABLES,
) -> str:
    """Company name: provider author, then ``careers.X.com``, then bare domain name."""
    if author and author.strip():
        return author.strip()

    host = domain_of(url)
    if not host:
        return "Unknown"

    for prefix in tables.career_subdomains:
        if host.startswith(prefix) and host.count(".") >= 2:
            return _display_name(host.removeprefix(prefix).split(".")[0])

    name = host
    for suffix in tables.tld_suffixes:
        if name.endswith(suffix):
            name = name.removesuffix(suffix)
            break
    return _display_name(name.split(".")[-1]) if name else "Unknown"


def _display_name(label: str) -> str:
    label = label.strip("-")
    if not label:
        return "Unknown"
    return label[0].upper() + label[1:]


def _mentions_skill(text: str, tables: HeuristicTables) -> bool:
    return any(
        contains_any(text, aliases) for aliases in tables.skill_vocabulary.values()
    ) or any(
        contains_keyword(text, kw) for bucket in tables.skill_categories.values() for kw in bucket
        if len(kw) > 2
    )
