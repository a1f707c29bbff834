"""Ordered extraction rules with an explicit Matched / Unmatched result.

A rule is a ``(pattern, extractor)`` pair. ``first_match`` walks a rule list
in order and returns the first ``Matched`` produced by an extractor; an
extractor may itself return ``UNMATCHED`` to reject a regex hit and let the
next rule try.
"""

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import lru_cache
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Matched(Generic[T]):
    value: T


@dataclass(frozen=True)
class Unmatched:
    def __bool__(self) -> bool:
        return False


UNMATCHED = Unmatched()

MatchResult = Matched | Unmatched
Extractor = Callable[[re.Match[str]], MatchResult]
Rule = tuple[re.Pattern[str], Extractor]


def first_match(text: str, rules: Iterable[Rule]) -> MatchResult:
    """Return the first Matched produced by ``rules`` against ``text``.

    Every occurrence of a rule's pattern is offered to its extractor before
    moving on to the next rule.
    """
    if not text:
        return UNMATCHED
    for pattern, extractor in rules:
        for match in pattern.finditer(text):
            try:
                result = extractor(match)
            except (ValueError, IndexError):
                logger.debug("Extractor for %r failed, skipping", pattern.pattern, exc_info=True)
                continue
            if isinstance(result, Matched):
                return result
    return UNMATCHED


def value_or(result: MatchResult, default: T) -> T:
    """Unwrap a rule result, falling back to ``default``."""
    return result.value if isinstance(result, Matched) else default


@lru_cache(maxsize=2048)
def keyword_pattern(keyword: str) -> re.Pattern[str]:
    """Case-insensitive pattern for ``keyword`` not glued to other letters/digits."""
    return re.compile(rf"(?<![a-z0-9]){re.escape(keyword.lower())}(?![a-z0-9])", re.IGNORECASE)


def contains_keyword(text: str, keyword: str) -> bool:
    if not text or not keyword.strip():
        return False
    return keyword_pattern(keyword.strip()).search(text) is not None


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(contains_keyword(text, kw) for kw in keywords)


def matching_labels(text: str, table: dict[str, tuple[str, ...]]) -> list[str]:
    """Labels of ``table`` whose keywords occur in ``text``, in table order."""
    return [label for label, keywords in table.items() if contains_any(text, keywords)]


def first_label(text: str, table: dict[str, tuple[str, ...]]) -> MatchResult:
    for label, keywords in table.items():
        if contains_any(text, keywords):
            return Matched(label)
    return UNMATCHED
