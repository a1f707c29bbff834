"""Abstract base class for search providers."""

from abc import ABC, abstractmethod
from types import TracebackType

from jobmatch.core.schemas import ProviderRequest, RawSearchResult


class SearchProviderError(RuntimeError):
    """A provider call failed (transport error, bad status, unreadable payload)."""


class SearchProvider(ABC):
    """Base class that every search provider adapter must implement."""

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Unique identifier for this provider (e.g. 'exa')."""

    @abstractmethod
    async def search(self, request: ProviderRequest) -> list[RawSearchResult]:
        """Run one query and return raw, untagged results in provider order."""

    async def aclose(self) -> None:
        """Release network resources. No-op by default."""

    async def __aenter__(self) -> "SearchProvider":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
