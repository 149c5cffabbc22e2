"""Pydantic models for Feishu auth configuration.

## Security-relevant configuration fields

- `client_secret` and `app_ticket` are credentials; they are never logged.
- `redirect_uri`: affects redirect binding and open-redirect risk.
- `base_url`: every token request is sent here.

Treat changes to these fields as security-sensitive.
"""

from enum import Enum
from typing import Any

from pydantic import ConfigDict

from feishu_auth.models import AuthBaseModel

FEISHU_BASE_URL = "https://open.feishu.cn/open-apis/"
LARK_BASE_URL = "https://open.larksuite.com/open-apis/"


class AppMode(str, Enum):
    """How the app authenticates itself when requesting app/tenant tokens."""

    INTERNAL = "internal"  # credentials alone
    DEFAULT = "default"  # credentials plus a pushed app_ticket

    @classmethod
    def from_kind_of_app(cls, kind_of_app: str | None) -> "AppMode":
        if kind_of_app is None or kind_of_app == cls.INTERNAL.value:
            return cls.INTERNAL
        return cls.DEFAULT


class FeishuAuthConfigModel(AuthBaseModel):
    """Feishu provider configuration.

    Mirrors the flat key space the adapter reads (`client_id`, `client_secret`,
    `app_ticket`, `kind_of_app`, `redirect_uri`) and exposes `get`/`set`/`has`
    over it.
    """

    # Override frozen=True: app_ticket rotates and redirect_uri can be set late
    model_config = ConfigDict(extra="forbid", frozen=False, validate_assignment=True)

    client_id: str
    client_secret: str
    redirect_uri: str | None = None
    app_ticket: str | None = None
    kind_of_app: str = AppMode.INTERNAL.value
    base_url: str = FEISHU_BASE_URL

    def get(self, key: str, default: Any = None) -> Any:
        if key not in type(self).model_fields:
            return default
        value = getattr(self, key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        if key not in type(self).model_fields:
            raise KeyError(f"Unknown Feishu config key: {key}")
        setattr(self, key, value)

    def has(self, key: str) -> bool:
        return bool(self.get(key))

    @property
    def api_root(self) -> str:
        return self.base_url.rstrip("/") + "/"
