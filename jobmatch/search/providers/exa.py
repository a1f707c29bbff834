"""Exa search provider over its HTTP API."""

import logging
import os
from typing import Any

import httpx
from pydantic import ValidationError

from jobmatch.core.config import ProviderConfig
from jobmatch.core.schemas import ProviderRequest, RawSearchResult
from jobmatch.search.providers.base import SearchProvider, SearchProviderError

logger = logging.getLogger(__name__)

# QuerySpec mode -> Exa search type
SEARCH_TYPES: dict[str, str] = {
    "broad": "neural",
    "exact": "keyword",
    "auto": "auto",
}

MAX_TEXT_CHARACTERS = 4000
HIGHLIGHT_SENTENCES = 3
HIGHLIGHTS_PER_URL = 3


class ExaProvider(SearchProvider):
    """Search provider backed by ``POST {base_url}/search``."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://api.exa.ai",
        timeout_seconds: float = 20.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key:
            msg = "Exa API key must not be empty"
            raise ValueError(msg)
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds))

    @classmethod
    def from_config(cls, config: ProviderConfig, *, timeout_seconds: float = 20.0) -> "ExaProvider":
        """Build from settings, reading the key from the configured environment variable.

        Raises:
            ValueError: If the environment variable is unset or empty.
        """
        api_key = os.environ.get(config.api_key_env, "").strip()
        if not api_key:
            msg = f"{config.api_key_env} environment variable is required for the exa provider"
            raise ValueError(msg)
        return cls(api_key, base_url=config.base_url, timeout_seconds=timeout_seconds)

    @property
    def provider_id(self) -> str:
        return "exa"

    async def search(self, request: ProviderRequest) -> list[RawSearchResult]:
        payload = build_payload(request)
        try:
            response = await self._client.post(
                f"{self._base_url}/search",
                json=payload,
                headers={"x-api-key": self._api_key},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            msg = f"Exa returned HTTP {e.response.status_code} for query {request.query!r}"
            raise SearchProviderError(msg) from e
        except httpx.HTTPError as e:
            msg = f"Exa request failed for query {request.query!r}: {e}"
            raise SearchProviderError(msg) from e
        except ValueError as e:
            msg = f"Exa returned a non-JSON body for query {request.query!r}"
            raise SearchProviderError(msg) from e

        items = data.get("results") if isinstance(data, dict) else None
        if not isinstance(items, list):
            logger.debug("Exa response has no results list for %r", request.query)
            return []
        results = [r for r in (parse_result(item) for item in items) if r is not None]
        logger.debug("Exa returned %d/%d usable results for %r",
                     len(results), len(items), request.query)
        return results

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def build_payload(request: ProviderRequest) -> dict[str, Any]:
    """Translate a provider-neutral request into an Exa ``/search`` body.

    Exa accepts one include/exclude phrase and either an include or an
    exclude domain list, so only the first phrase is sent and the deny-list
    is dropped when an allow-list is present.
    """
    content = request.extract_content
    contents: dict[str, Any] = {}
    if content.text:
        contents["text"] = {"maxCharacters": MAX_TEXT_CHARACTERS}
    if content.highlights:
        contents["highlights"] = {
            "numSentences": HIGHLIGHT_SENTENCES,
            "highlightsPerUrl": HIGHLIGHTS_PER_URL,
        }
    if content.summary:
        contents["summary"] = True

    payload: dict[str, Any] = {
        "query": request.query,
        "type": SEARCH_TYPES[request.mode],
        "numResults": request.result_cap,
        "contents": contents,
    }
    if request.domain_allow_list:
        payload["includeDomains"] = list(request.domain_allow_list)
    elif request.domain_deny_list:
        payload["excludeDomains"] = list(request.domain_deny_list)
    if request.text_must_include:
        payload["includeText"] = [request.text_must_include[0]]
    if request.text_must_exclude:
        payload["excludeText"] = [request.text_must_exclude[0]]
    if request.published_after is not None:
        payload["startPublishedDate"] = request.published_after.isoformat()
    return payload


def parse_result(item: Any) -> RawSearchResult | None:
    """Parse one Exa result; returns None (and logs) for anything unusable."""
    if not isinstance(item, dict):
        logger.debug("Skipping non-object result: %r", item)
        return None
    url = item.get("url")
    if not isinstance(url, str) or not url.strip():
        logger.debug("Skipping result without url: id=%r", item.get("id"))
        return None

    highlights = item.get("highlights")
    scores = item.get("highlightScores")
    try:
        return RawSearchResult(
            id=_str_or_empty(item.get("id")),
            title=_str_or_empty(item.get("title")),
            url=url.strip(),
            published_date=_str_or_none(item.get("publishedDate")),
            author=_str_or_none(item.get("author")),
            text=_str_or_none(item.get("text")),
            highlights=[h for h in highlights if isinstance(h, str)]
            if isinstance(highlights, list) else [],
            highlight_scores=[float(s) for s in scores if isinstance(s, (int, float))]
            if isinstance(scores, list) else [],
            summary=_str_or_none(item.get("summary")),
            score=float(item["score"]) if isinstance(item.get("score"), (int, float)) else None,
        )
    except ValidationError:
        logger.debug("Skipping malformed result %r", url, exc_info=True)
        return None


def _str_or_none(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _str_or_empty(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""
