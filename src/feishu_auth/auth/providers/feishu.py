"""Feishu (Lark) OAuth provider adapter.

See https://open.feishu.cn/document/uQjL04CN/ucDOz4yN4MjL3gzM for the login
flow. Token endpoints differ between internal apps and self-built ("default")
apps; the latter need the `app_ticket` Feishu pushes to the app's event
callback.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from mcp.shared._httpx_utils import create_mcp_http_client

from ..contracts import (
    AccessTokenResult,
    AuthorizationFailed,
    HttpClientFactory,
    InvalidResponse,
    UserIdentity,
)
from ..models import AppMode, FeishuAuthConfigModel
from ..token_cache import TokenCache, TokenCacheKey, TokenKind, ttl_from_expire

logger = logging.getLogger(__name__)

AUTHORIZE_PATH = "authen/v1/index"
ACCESS_TOKEN_PATH = "authen/v1/access_token"
USER_INFO_PATH = "authen/v1/user_info"
APP_ACCESS_TOKEN_PATH = "auth/v3/app_access_token"
TENANT_ACCESS_TOKEN_PATH = "auth/v3/tenant_access_token"


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


class FeishuProviderAdapter:
    """Feishu OAuth adapter that uses real HTTP calls.

    The app mode starts from the config's `kind_of_app` and can be switched
    with the fluent `with_*` methods before a token operation starts:

        adapter = FeishuProviderAdapter(config).with_default_mode().with_app_ticket(ticket)
        user = await adapter.user_from_code(code)
    """

    provider_name = "feishu"
    # Feishu reports the user token lifetime under this key instead of expires_in.
    expires_in_key = "refresh_expires_in"

    def __init__(
        self,
        feishu_config: FeishuAuthConfigModel,
        *,
        http_client_factory: HttpClientFactory | None = None,
        token_cache: TokenCache | None = None,
    ):
        self.config = feishu_config
        self._mode = AppMode.from_kind_of_app(feishu_config.kind_of_app)
        self._http_client_factory = http_client_factory
        self._token_cache = token_cache

    # ── mode and config ──────────────────────────────────────────────────────
    @property
    def mode(self) -> AppMode:
        return self._mode

    @property
    def is_internal_app(self) -> bool:
        return self._mode is AppMode.INTERNAL

    def with_internal_app_mode(self) -> FeishuProviderAdapter:
        self._mode = AppMode.INTERNAL
        return self

    def with_default_mode(self) -> FeishuProviderAdapter:
        self._mode = AppMode.DEFAULT
        return self

    def with_app_ticket(self, app_ticket: str) -> FeishuProviderAdapter:
        self.config.set("app_ticket", app_ticket)
        return self

    def with_redirect_url(self, redirect_uri: str) -> FeishuProviderAdapter:
        self.config.set("redirect_uri", redirect_uri)
        return self

    # ── OAuth flow ───────────────────────────────────────────────────────────
    def build_authorize_url(
        self,
        *,
        redirect_uri: str | None = None,
        state: str | None = None,
    ) -> str:
        params: list[tuple[str, str]] = [("app_id", self.config.client_id)]
        redirect = redirect_uri or self.config.redirect_uri
        if redirect:
            params.append(("redirect_uri", redirect))
        if state:
            params.append(("state", state))
        return f"{self._url(AUTHORIZE_PATH)}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> AccessTokenResult:
        """Exchange an authorization code for a user access token.

        The code exchange is authorized by the app access token, so two
        requests are made in sequence.
        """
        app_access_token = await self.get_app_access_token()
        payload, status_code = await self._post_json(
            ACCESS_TOKEN_PATH,
            {
                "app_access_token": app_access_token,
                "code": code,
                "grant_type": "authorization_code",
            },
        )

        data = payload.get("data")
        if not data or not isinstance(data, dict):
            logger.warning(
                "Feishu token endpoint returned no data",
                extra={
                    "provider": self.provider_name,
                    "endpoint": "access_token",
                    "status_code": status_code,
                    "provider_code": payload.get("code"),
                },
            )
            raise AuthorizationFailed(
                "Invalid token response", payload, status_code=_error_status(status_code)
            )

        return self._normalize_access_token_response(data, status_code)

    async def fetch_user_by_token(self, token: str) -> dict[str, Any]:
        """Return the raw `data` object of the user-info endpoint."""
        # Empty values are dropped rather than sent as blank parameters.
        params = {key: value for key, value in {"user_access_token": token}.items() if value}
        async with self._client() as client:
            resp = await client.get(
                self._url(USER_INFO_PATH),
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {token}",
                },
                params=params,
            )
        payload = self._decode(resp, endpoint="user_info")

        data = payload.get("data")
        if not data or not isinstance(data, dict):
            raise InvalidResponse(
                "You have error! " + json.dumps(payload, ensure_ascii=False),
                payload,
                status_code=_error_status(resp.status_code),
            )
        return data

    def map_user_to_identity(self, user: Mapping[str, Any]) -> UserIdentity:
        name = _optional_str(user.get("name"))
        return UserIdentity(
            provider=self.provider_name,
            id=_optional_str(user.get("user_id")),
            name=name,
            nickname=name,
            avatar_url=_optional_str(user.get("avatar_url")),
            email=_optional_str(user.get("email")),
            raw_profile=dict(user) or None,
        )

    async def user_from_token(self, token: str) -> UserIdentity:
        return self.map_user_to_identity(await self.fetch_user_by_token(token))

    async def user_from_code(self, code: str) -> UserIdentity:
        """Run the whole login: code exchange, then user lookup."""
        token = await self.exchange_code(code)
        user = await self.user_from_token(token.access_token)
        return user.model_copy(update={"token": token})

    # ── app / tenant credentials ─────────────────────────────────────────────
    async def get_app_access_token(self) -> str:
        """Credential identifying this app to Feishu, independent of any user."""
        return await self._resolve_access_token("app", APP_ACCESS_TOKEN_PATH)

    async def get_tenant_access_token(self) -> str:
        """Credential identifying this app within the installing organization."""
        return await self._resolve_access_token("tenant", TENANT_ACCESS_TOKEN_PATH)

    async def _resolve_access_token(self, kind: TokenKind, path: str) -> str:
        field = f"{kind}_access_token"
        mode = self._mode

        if mode is AppMode.DEFAULT and not self.config.has("app_ticket"):
            raise AuthorizationFailed(
                "You are using default mode, please configure 'app_ticket' first"
            )

        cache_key = TokenCacheKey(self.config.client_id, mode, kind)
        if self._token_cache is not None:
            cached = self._token_cache.get(cache_key)
            if cached:
                logger.debug(f"Using cached Feishu {field} ({mode.value} mode)")
                return cached

        body: dict[str, str | None] = {
            "app_id": self.config.get("client_id"),
            "app_secret": self.config.get("client_secret"),
        }
        if mode is AppMode.INTERNAL:
            path = f"{path}/internal"
        else:
            body["app_ticket"] = self.config.get("app_ticket")

        payload, status_code = await self._post_json(path, body)

        token = payload.get(field)
        if not token:
            logger.warning(
                f"Feishu {field} endpoint returned no token",
                extra={
                    "provider": self.provider_name,
                    "endpoint": field,
                    "mode": mode.value,
                    "status_code": status_code,
                    "provider_code": payload.get("code"),
                },
            )
            raise AuthorizationFailed(
                f"Invalid '{field}' response", payload, status_code=_error_status(status_code)
            )

        token = str(token)
        if self._token_cache is not None:
            self._token_cache.set(cache_key, token, ttl_from_expire(payload.get("expire")))
        return token

    # ── helpers ──────────────────────────────────────────────────────────────
    def _url(self, path: str) -> str:
        return f"{self.config.api_root}{path}"

    def _client(self) -> Any:
        factory = self._http_client_factory or create_mcp_http_client
        return factory()

    async def _post_json(
        self, path: str, body: Mapping[str, Any]
    ) -> tuple[dict[str, Any], int]:
        logger.debug(f"POST Feishu {path} ({self._mode.value} mode)")
        async with self._client() as client:
            resp = await client.post(self._url(path), json=dict(body))
        return self._decode(resp, endpoint=path), resp.status_code

    def _decode(self, resp: Any, *, endpoint: str) -> dict[str, Any]:
        """Decode a JSON object body; anything else degrades to an empty dict."""
        if not 200 <= resp.status_code < 300:
            logger.warning(
                "Feishu endpoint returned non-2xx",
                extra={
                    "provider": self.provider_name,
                    "endpoint": endpoint,
                    "status_code": resp.status_code,
                },
            )

        try:
            payload = resp.json()
        except ValueError:
            logger.warning(
                "Feishu endpoint returned invalid JSON",
                extra={
                    "provider": self.provider_name,
                    "endpoint": endpoint,
                    "status_code": resp.status_code,
                },
            )
            return {}

        if not isinstance(payload, dict):
            return {}
        return payload

    def _normalize_access_token_response(
        self, data: Mapping[str, Any], status_code: int
    ) -> AccessTokenResult:
        access_token = data.get("access_token")
        if not access_token:
            raise AuthorizationFailed(
                "Authorize Failed: " + json.dumps(dict(data), ensure_ascii=False),
                dict(data),
                status_code=_error_status(status_code),
            )

        try:
            expires_in = int(data.get(self.expires_in_key) or 0)
        except (TypeError, ValueError):
            expires_in = 0

        return AccessTokenResult(
            access_token=str(access_token),
            refresh_token=_optional_str(data.get("refresh_token")),
            expires_in=expires_in,
            token_type=_optional_str(data.get("token_type")) or "Bearer",
            raw=dict(data),
        )


def _error_status(status_code: int) -> int:
    """Status to report on a failed exchange: the provider's, or 400 if it claimed success."""
    return status_code if status_code >= 400 else 400
