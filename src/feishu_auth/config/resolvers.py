"""Built-in resolvers: environment variables and files."""

import logging
import os
import re
from pathlib import Path

from .plugins import ResolverPlugin, ResolverRegistry

logger = logging.getLogger(__name__)


class EnvResolver(ResolverPlugin):
    """Resolver for environment variable references like ${VAR_NAME}."""

    ENV_VAR_PATTERN = re.compile(r"^\${([A-Za-z0-9_]+)}$")

    @property
    def name(self) -> str:
        return "env"

    @property
    def url_patterns(self) -> list[str]:
        return [r"^\${[A-Za-z0-9_]+}$"]

    def can_resolve(self, reference: str) -> bool:
        return self.ENV_VAR_PATTERN.match(reference) is not None

    def resolve(self, reference: str) -> str:
        match = self.ENV_VAR_PATTERN.match(reference)
        if not match:
            raise ValueError(f"Invalid environment variable reference: {reference}")

        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ValueError(f"Environment variable not found: {var_name}")

        return value


class FileResolver(ResolverPlugin):
    """Resolver for file references like file:///path/to/file."""

    FILE_URL_PATTERN = re.compile(r"^file://(.+)$")

    @property
    def name(self) -> str:
        return "file"

    @property
    def url_patterns(self) -> list[str]:
        return [r"^file://(.+)$"]

    def can_resolve(self, reference: str) -> bool:
        return reference.startswith("file://")

    def resolve(self, reference: str) -> str:
        match = self.FILE_URL_PATTERN.match(reference)
        if not match:
            raise ValueError(f"Invalid file reference: {reference}")

        file_path = Path(match.group(1))
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        try:
            return file_path.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise ValueError(f"Failed to read file {file_path}: {e}") from e


def default_registry() -> ResolverRegistry:
    """Registry with the env and file resolvers."""
    registry = ResolverRegistry()
    registry.register(EnvResolver())
    registry.register(FileResolver())
    return registry
