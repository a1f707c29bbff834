"""Offline provider that replays canned results from a JSON or YAML file.

File shape::

    default:            # returned when no entry below matches
      - {id: ..., title: ..., url: ..., text: ...}
    queries:
      - match: "startup"   # case-insensitive substring of the query text
        results: [...]

A bare list is shorthand for ``{"default": [...]}``. Items use the same
field names as the Exa API (``publishedDate``, ``highlightScores``).
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from jobmatch.core.config import ProviderConfig
from jobmatch.core.schemas import ProviderRequest, RawSearchResult
from jobmatch.search.providers.base import SearchProvider
from jobmatch.search.providers.exa import parse_result

logger = logging.getLogger(__name__)


class FixtureProvider(SearchProvider):
    """Returns results recorded in a local file; never touches the network."""

    def __init__(self, path: str | Path) -> None:
        path = Path(path)
        if not path.exists():
            msg = f"Fixture file not found: {path}"
            raise FileNotFoundError(msg)
        raw = _load(path)
        if isinstance(raw, list):
            raw = {"default": raw}
        if not isinstance(raw, dict):
            msg = f"Fixture file must contain a list or a mapping: {path}"
            raise ValueError(msg)

        self._default = _parse_items(raw.get("default"))
        self._queries: list[tuple[str, list[RawSearchResult]]] = []
        for entry in raw.get("queries") or []:
            if isinstance(entry, dict) and isinstance(entry.get("match"), str):
                self._queries.append((entry["match"].lower(), _parse_items(entry.get("results"))))
        logger.debug("Loaded fixture %s: %d default results, %d query entries",
                     path, len(self._default), len(self._queries))

    @classmethod
    def from_config(
        cls, config: ProviderConfig, *, timeout_seconds: float = 20.0,
    ) -> "FixtureProvider":
        if not config.fixture_path:
            msg = "provider.fixture_path is required for the fixture provider"
            raise ValueError(msg)
        return cls(config.fixture_path)

    @property
    def provider_id(self) -> str:
        return "fixture"

    async def search(self, request: ProviderRequest) -> list[RawSearchResult]:
        query = request.query.lower()
        results = self._default
        for needle, canned in self._queries:
            if needle in query:
                results = canned
                break
        return list(results[: request.result_cap])


def _load(path: Path) -> Any:
    text = path.read_text()
    if path.suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text)


def _parse_items(items: Any) -> list[RawSearchResult]:
    if not isinstance(items, list):
        return []
    return [r for r in (parse_result(item) for item in items) if r is not None]
