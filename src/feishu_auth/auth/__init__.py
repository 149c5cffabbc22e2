"""Feishu authentication - provider adapter, results and errors.

## Quick Example

```python
from feishu_auth.auth import FeishuAuthConfigModel, FeishuProviderAdapter

config = FeishuAuthConfigModel(
    client_id="cli_xxx",
    client_secret="your-secret",
    redirect_uri="https://example.com/feishu/callback",
)
adapter = FeishuProviderAdapter(config)

# Send the user here, then exchange the code Feishu redirects back with
url = adapter.build_authorize_url(state="xyz")
user = await adapter.user_from_code(code)
print(user.id, user.name, user.token.access_token)
```

Self-built apps switch to default mode and need the app_ticket Feishu pushes:

```python
adapter.with_default_mode().with_app_ticket(ticket)
tenant_token = await adapter.get_tenant_access_token()
```
"""

from .contracts import (
    AccessTokenResult,
    AuthorizationFailed,
    HttpClientFactory,
    InvalidResponse,
    ProviderError,
    UserIdentity,
)
from .models import FEISHU_BASE_URL, LARK_BASE_URL, AppMode, FeishuAuthConfigModel
from .providers import FeishuProviderAdapter
from .token_cache import InMemoryTokenCache, TokenCache, TokenCacheKey

__all__ = [
    # Types
    "AppMode",
    "FeishuAuthConfigModel",
    "FEISHU_BASE_URL",
    "LARK_BASE_URL",
    # Adapter
    "FeishuProviderAdapter",
    "HttpClientFactory",
    # Contracts
    "AccessTokenResult",
    "UserIdentity",
    "ProviderError",
    "AuthorizationFailed",
    "InvalidResponse",
    # Token cache
    "InMemoryTokenCache",
    "TokenCache",
    "TokenCacheKey",
]
