"""Configuration loader for the Feishu provider.

The config file is YAML with a top-level `feishu` section:

```yaml
feishu:
  client_id: cli_a1b2c3
  client_secret: ${FEISHU_APP_SECRET}
  redirect_uri: https://example.com/feishu/callback
  kind_of_app: internal
```
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from feishu_auth.auth.models import FeishuAuthConfigModel

from .plugins import ResolverRegistry
from .resolvers import default_registry

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FEISHU_AUTH_CONFIG"
DEFAULT_CONFIG_FILENAME = "feishu.yml"


def load_feishu_config(
    config_path: Path | None = None,
    registry: ResolverRegistry | None = None,
) -> FeishuAuthConfigModel:
    """Load the Feishu provider configuration from a YAML file.

    Args:
        config_path: Optional path to the config file.
                    If not provided, looks for:
                    1. FEISHU_AUTH_CONFIG environment variable
                    2. ./feishu.yml
        registry: Resolvers applied to config values (env and file by default)

    Returns:
        FeishuAuthConfigModel with resolved values

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        config_path = Path(env_path) if env_path else Path.cwd() / DEFAULT_CONFIG_FILENAME

    if not config_path.exists():
        raise FileNotFoundError(f"Feishu config file not found at {config_path}")

    logger.debug(f"Loading Feishu config from: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML config file {config_path}: {e}") from e

    if not isinstance(raw_config, dict) or not isinstance(raw_config.get("feishu"), dict):
        raise ValueError(f"Config file {config_path} has no 'feishu' section")

    return config_from_dict(raw_config["feishu"], registry=registry)


def config_from_dict(
    section: dict[str, Any],
    registry: ResolverRegistry | None = None,
) -> FeishuAuthConfigModel:
    """Build a FeishuAuthConfigModel from the `feishu` config section."""
    resolved = (registry or default_registry()).resolve_value(section)
    try:
        return FeishuAuthConfigModel.model_validate(resolved)
    except ValidationError as e:
        raise ValueError(f"Invalid Feishu config: {e}") from e
