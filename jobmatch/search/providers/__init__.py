"""Search provider registry with lazy loading.

Usage:
    from jobmatch.search.providers import get_provider

    provider = get_provider("exa", settings.provider)
    results = await provider.search(request)
"""

import importlib

from jobmatch.core.config import ProviderConfig
from jobmatch.search.providers.base import SearchProvider, SearchProviderError

__all__ = ["SearchProvider", "SearchProviderError", "available_providers", "get_provider"]

# Lazy registry: maps provider name → (module_path, class_name)
_REGISTRY: dict[str, tuple[str, str]] = {
    "exa": ("jobmatch.search.providers.exa", "ExaProvider"),
    "fixture": ("jobmatch.search.providers.fixture", "FixtureProvider"),
}


def get_provider(
    name: str,
    config: ProviderConfig | None = None,
    *,
    timeout_seconds: float = 20.0,
) -> SearchProvider:
    """Instantiate a provider by name.

    Configuration problems surface here, before any query is sent.

    Raises:
        ValueError: If the name is unknown or required settings are missing.
        FileNotFoundError: If the fixture provider's file does not exist.
    """
    if name not in _REGISTRY:
        valid = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown search provider '{name}'. Available: {valid}"
        raise ValueError(msg)

    module_path, class_name = _REGISTRY[name]
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    provider: SearchProvider = cls.from_config(
        config or ProviderConfig(name=name), timeout_seconds=timeout_seconds,
    )
    return provider


def available_providers() -> list[str]:
    """Return sorted list of registered provider names."""
    return sorted(_REGISTRY)
