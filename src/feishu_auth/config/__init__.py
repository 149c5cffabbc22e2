"""Configuration loading with pluggable value resolvers."""

from .loader import CONFIG_ENV_VAR, config_from_dict, load_feishu_config
from .plugins import ResolverPlugin, ResolverRegistry
from .resolvers import EnvResolver, FileResolver, default_registry

__all__ = [
    "CONFIG_ENV_VAR",
    "EnvResolver",
    "FileResolver",
    "ResolverPlugin",
    "ResolverRegistry",
    "config_from_dict",
    "default_registry",
    "load_feishu_config",
]
