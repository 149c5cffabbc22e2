"""
Plugin system for configuration value resolvers.

A resolver turns a reference found in a config value (for example
`${FEISHU_APP_SECRET}` or `file:///run/secrets/feishu`) into the real value
before the config is validated. Register custom resolvers on a
`ResolverRegistry` to support other secret stores.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)


class ResolverPlugin(ABC):
    """
    Abstract base class for configuration resolver plugins.

    Implementations provide:

    - `name`: a unique identifier for the resolver
    - `url_patterns`: regex patterns the resolver can handle
    - `can_resolve`: whether a specific reference is handled
    - `resolve`: the actual lookup

    Resolvers should raise descriptive exceptions when resolution fails
    (`ValueError`, or `FileNotFoundError` for missing files).
    """

    def __init__(self, config: dict[str, Any] | None = None):
        self.config = config or {}
        self.enabled = self.config.get("enabled", True)

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this resolver plugin."""

    @property
    @abstractmethod
    def url_patterns(self) -> list[str]:
        """Return regex patterns that this resolver can handle."""

    @abstractmethod
    def can_resolve(self, reference: str) -> bool:
        """Check if this resolver can handle the given reference."""

    @abstractmethod
    def resolve(self, reference: str) -> str:
        """Resolve the reference to its actual value."""


class ResolverRegistry:
    """Registry for managing resolver plugins."""

    def __init__(self) -> None:
        self._resolvers: dict[str, ResolverPlugin] = {}
        self._patterns: list[tuple[re.Pattern[str], str]] = []

    def register(self, resolver: ResolverPlugin) -> None:
        """Register a resolver plugin."""
        if not resolver.enabled:
            logger.debug(f"Resolver {resolver.name} is disabled, skipping registration")
            return

        self._resolvers[resolver.name] = resolver
        for pattern in resolver.url_patterns:
            self._patterns.append((re.compile(pattern), resolver.name))

        logger.debug(f"Registered resolver: {resolver.name}")

    def list_resolvers(self) -> list[str]:
        """List all registered resolver names."""
        return list(self._resolvers.keys())

    def find_resolver_for_reference(self, reference: str) -> ResolverPlugin | None:
        """Find the appropriate resolver for a reference."""
        for pattern, resolver_name in self._patterns:
            if pattern.match(reference):
                resolver = self._resolvers.get(resolver_name)
                if resolver and resolver.can_resolve(reference):
                    return resolver
        return None

    def resolve_value(self, value: Any) -> Any:
        """Resolve references in a config value, recursing into dicts and lists.

        Strings no resolver claims are returned unchanged.
        """
        if isinstance(value, dict):
            return {key: self.resolve_value(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self.resolve_value(item) for item in value]
        if isinstance(value, str):
            resolver = self.find_resolver_for_reference(value)
            if resolver is not None:
                return resolver.resolve(value)
        return value
