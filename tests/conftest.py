"""
Global pytest configuration and fixtures.
"""

import pytest

from feishu_auth.config import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def isolate_config_env(monkeypatch):
    """Keep a developer's FEISHU_AUTH_CONFIG from leaking into tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv("FEISHU_AUTH_DEBUG", raising=False)
