"""
Configuration Package - Domain-Specific Configuration Modules

This package provides application configuration using a composition-based approach.

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # Main config (composes domain configs)
    ├── azure_config.py          # Credentials, subscription, region
    ├── workflow_config.py       # Resource names, SKUs, queue settings
    ├── defaults.py              # Default value constants
    └── env_validation.py        # Startup env var validation

Usage:
    # Singleton pattern (preferred)
    from config import get_config
    config = get_config()
    size = config.workflow.first_queue_size_mb

    # Debug output
    from config import debug_config
    info = debug_config()  # Secrets masked
"""

from typing import Optional

from .azure_config import AzureConfig
from .workflow_config import WorkflowConfig
from .app_config import AppConfig


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Returns:
        AppConfig instance loaded from environment
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging (masks sensitive values).

    Returns:
        Dictionary with configuration values, secrets masked
    """
    try:
        config = get_config()
        return {
            'azure': config.azure.debug_dict(),
            'workflow': config.workflow.model_dump(),
            'environment': config.environment,
            'log_level': config.log_level,
            'log_format': config.log_format,
        }
    except Exception as e:
        return {'error': f'Configuration validation failed: {e}'}


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'AppConfig',
    'AzureConfig',
    'WorkflowConfig',
    'get_config',
    'reset_config',
    'debug_config',
]
