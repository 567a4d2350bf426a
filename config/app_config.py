"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - AzureConfig (credentials, subscription, region)
    - WorkflowConfig (resource names, SKUs, queue settings)

Exports:
    AppConfig: Main configuration class

Dependencies:
    pydantic: BaseModel for configuration validation
    config.azure_config: AzureConfig
    config.workflow_config: WorkflowConfig
    config.defaults: Default value constants

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
"""

import os
from pydantic import BaseModel, Field, field_validator

from .azure_config import AzureConfig
from .workflow_config import WorkflowConfig
from .defaults import AppDefaults


# ============================================================================
# APPLICATION CONFIGURATION
# ============================================================================

class AppConfig(BaseModel):
    """
    Application configuration - composition of domain configs.

    Each domain config manages its own validation and defaults.
    """

    # ========================================================================
    # Core Application Settings
    # ========================================================================

    environment: str = Field(
        default=AppDefaults.ENVIRONMENT,
        description="Environment name (dev, qa, prod)",
        examples=["dev", "qa", "prod"]
    )

    # ========================================================================
    # Logging Configuration
    # ========================================================================

    log_level: str = Field(
        default=AppDefaults.LOG_LEVEL,
        description="Logging level for application diagnostics",
        examples=["DEBUG", "INFO", "WARNING", "ERROR"]
    )

    log_format: str = Field(
        default=AppDefaults.LOG_FORMAT,
        description="Console log format: 'text' (human-readable) or 'json' (structured)",
        examples=["text", "json"]
    )

    # ========================================================================
    # Domain Configurations
    # ========================================================================

    azure: AzureConfig = Field(
        default_factory=AzureConfig,
        description="Azure credentials, subscription and region"
    )

    workflow: WorkflowConfig = Field(
        default_factory=WorkflowConfig,
        description="Provisioning workflow settings"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return v.upper()

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v):
        if v.lower() not in ('text', 'json'):
            raise ValueError(f"Invalid log_format: {v}. Must be 'text' or 'json'")
        return v.lower()

    # ========================================================================
    # Shortcuts
    # ========================================================================

    @property
    def region(self) -> str:
        """Target region (shortcut for config.azure.region)."""
        return self.azure.region

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            environment=os.environ.get("ENVIRONMENT", AppDefaults.ENVIRONMENT),
            log_level=os.environ.get("LOG_LEVEL", AppDefaults.LOG_LEVEL),
            log_format=os.environ.get("LOG_FORMAT", AppDefaults.LOG_FORMAT),
            azure=AzureConfig.from_environment(),
            workflow=WorkflowConfig.from_environment(),
        )
