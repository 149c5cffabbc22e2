"""OAuth provider implementations."""

from .feishu import FeishuProviderAdapter

__all__ = ["FeishuProviderAdapter"]
