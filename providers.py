"""Provider registry: routes captured requests to the provider that recognizes them."""

from typing import Any, Dict, List, Optional, Type

from base_provider import BaseProvider, PostData, URL, split_url
from config import provider_enabled
from dataroid_provider import DataroidProvider

PROVIDER_CLASSES: Dict[str, Type[BaseProvider]] = {
    "DATAROID": DataroidProvider,
}

_providers: Optional[List[BaseProvider]] = None


def get_providers() -> List[BaseProvider]:
    """Get instances of all enabled providers, built once."""
    global _providers
    if _providers is None:
        _providers = [cls() for key, cls in PROVIDER_CLASSES.items() if provider_enabled(key)]
    return _providers


def reset_providers() -> None:
    """Drop the instance cache so the next lookup re-reads the configuration."""
    global _providers
    _providers = None


def get_provider(key: str) -> Optional[BaseProvider]:
    for provider in get_providers():
        if provider.key == key:
            return provider
    return None


def get_provider_for_url(url: str) -> Optional[BaseProvider]:
    """Return the first provider whose pattern matches the URL"""
    for provider in get_providers():
        if provider.check_url(url):
            return provider
    return None


def parse_request(url: URL, post_data: PostData = None) -> Optional[Dict[str, Any]]:
    """Decode a request with the matching provider; None when nothing matches."""
    raw_url = url if isinstance(url, str) else split_url(url).geturl()
    provider = get_provider_for_url(raw_url)
    if provider is None:
        return None
    return provider.parse_url(url, post_data)
