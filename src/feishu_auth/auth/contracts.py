"""Errors and normalized result types for the Feishu auth adapter."""

from __future__ import annotations

from typing import Any, Callable

import httpx

from feishu_auth.models import AuthBaseModel

# Zero-argument factory returning an async HTTP client usable as a context manager.
HttpClientFactory = Callable[[], httpx.AsyncClient]


class ProviderError(Exception):
    """Standardized provider error with HTTP-style status information."""

    def __init__(self, error: str, description: str | None = None, status_code: int = 400):
        super().__init__(description or error)
        self.error = error
        self.description = description
        self.status_code = status_code


class AuthorizationFailed(ProviderError):
    """A token-bearing response lacked its token, or a mode precondition failed.

    `response` holds the decoded provider payload (empty when the failure
    happened before any request was sent).
    """

    def __init__(
        self,
        description: str,
        response: dict[str, Any] | None = None,
        status_code: int = 400,
    ):
        super().__init__("invalid_grant", description, status_code=status_code)
        self.response: dict[str, Any] = dict(response or {})


class InvalidResponse(ProviderError):
    """The user-info endpoint returned no `data` payload."""

    def __init__(
        self,
        description: str,
        response: dict[str, Any] | None = None,
        status_code: int = 400,
    ):
        super().__init__("invalid_response", description, status_code=status_code)
        self.response: dict[str, Any] = dict(response or {})


class AccessTokenResult(AuthBaseModel):
    """User access token returned by the code exchange."""

    access_token: str
    refresh_token: str | None = None
    expires_in: int = 0
    token_type: str = "Bearer"
    raw: dict[str, Any] = {}


class UserIdentity(AuthBaseModel):
    """Normalized Feishu user.

    Every projected field may be None; the provider decides what the app is
    allowed to see.
    """

    provider: str = "feishu"
    id: str | None = None
    name: str | None = None
    nickname: str | None = None
    avatar_url: str | None = None
    email: str | None = None
    raw_profile: dict[str, Any] | None = None
    token: AccessTokenResult | None = None


__all__ = [
    "AccessTokenResult",
    "AuthorizationFailed",
    "HttpClientFactory",
    "InvalidResponse",
    "ProviderError",
    "UserIdentity",
]
