"""
Root conftest.py - sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without Azure credentials or network access.
"""

import os
import sys

import pytest

# Add project root to sys.path so 'core', 'config', 'infrastructure', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Set minimal environment variables to prevent import surprises.

    LoggerFactory reads LOG_LEVEL / LOG_FORMAT at import time; pin them so
    caplog assertions see INFO records in the text format.
    """
    defaults = {
        "ENVIRONMENT": "dev",
        "LOG_LEVEL": "INFO",
        "LOG_FORMAT": "text",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture(autouse=True)
def fresh_config():
    """Drop the config singleton before and after every test."""
    from config import reset_config
    reset_config()
    yield
    reset_config()


@pytest.fixture
def workflow_config():
    """WorkflowConfig with default sizes, SKUs and name prefixes."""
    from config import WorkflowConfig
    return WorkflowConfig()
