"""Hosting platform adapters."""

from typing import Any

from turnup.adapters.base import PlatformAdapter
from turnup.adapters.github import GitHubAdapter
from turnup.exceptions import ConfigurationError

ADAPTERS: dict[str, Any] = {
    "github": GitHubAdapter,
}


def get_adapter(key: str, **kwargs: Any) -> PlatformAdapter:
    """
    Create an adapter by registry key.

    Args:
        key: Adapter key (e.g., "github")
        **kwargs: Passed to the adapter's ``from_token`` constructor

    Raises:
        ConfigurationError: If no adapter is registered under ``key``
    """
    try:
        adapter_cls = ADAPTERS[key]
    except KeyError:
        raise ConfigurationError(
            f"Unknown adapter {key!r}. Must be one of: {', '.join(sorted(ADAPTERS))}"
        ) from None
    return adapter_cls.from_token(**kwargs)


__all__ = [
    "ADAPTERS",
    "GitHubAdapter",
    "PlatformAdapter",
    "get_adapter",
]
