"""feishu-auth - Feishu (Lark) OAuth login for Python applications.

## Modules

### Authentication (`feishu_auth.auth`)
Provider adapter, normalized token/user records and the error hierarchy.

### Configuration (`feishu_auth.config`)
YAML configuration loading with `${ENV}` and `file://` references.

### CLI (`feishu_auth.cli`)
`feishu-auth` command for trying the flow against a real app.
"""

from feishu_auth.auth import (
    AccessTokenResult,
    AppMode,
    AuthorizationFailed,
    FeishuAuthConfigModel,
    FeishuProviderAdapter,
    InvalidResponse,
    ProviderError,
    UserIdentity,
)
from feishu_auth.config import load_feishu_config

__version__ = "0.1.0"

__all__ = [
    "AccessTokenResult",
    "AppMode",
    "AuthorizationFailed",
    "FeishuAuthConfigModel",
    "FeishuProviderAdapter",
    "InvalidResponse",
    "ProviderError",
    "UserIdentity",
    "load_feishu_config",
]
