"""
Config test fixtures - clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "AZURE_TENANT_ID", "AZURE_CLIENT_ID", "AZURE_CLIENT_SECRET",
        "AZURE_SUBSCRIPTION_ID", "AZURE_AUTH_LOCATION", "AZURE_REGION",
        "AZURE_HTTP_LOGGING", "ENVIRONMENT", "LOG_LEVEL", "LOG_FORMAT",
        "SB_FIRST_QUEUE_SIZE_MB", "SB_SECOND_QUEUE_SIZE_MB",
        "SB_SECOND_QUEUE_UPDATED_SIZE_MB", "SB_SECOND_QUEUE_LOCK_DURATION_SECONDS",
        "SB_REVEAL_KEYS",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
