"""
AppConfig / AzureConfig / WorkflowConfig tests.

Defaults, environment overrides, validation and the singleton.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from config import AppConfig, AzureConfig, WorkflowConfig, debug_config, get_config, reset_config
from core.models import SkuName


class TestWorkflowConfigDefaults:

    def test_queue_defaults(self):
        cfg = WorkflowConfig()
        assert cfg.first_queue_size_mb == 1024
        assert cfg.second_queue_size_mb == 2048
        assert cfg.second_queue_updated_size_mb == 3072
        assert cfg.second_queue_lock_duration == timedelta(seconds=20)
        assert cfg.second_queue_dead_letter_on_expiration is True
        assert cfg.reveal_keys is False

    def test_sku_progression(self):
        cfg = WorkflowConfig()
        assert (cfg.initial_sku, cfg.updated_sku) == ("Basic", "Standard")

    def test_unknown_sku_rejected_at_load(self):
        with pytest.raises(ValidationError):
            WorkflowConfig(initial_sku="Gold")

    def test_sku_coerced_to_enum(self):
        cfg = WorkflowConfig(updated_sku="Premium")
        assert cfg.updated_sku is SkuName.PREMIUM

    def test_unsupported_size_rejected(self):
        with pytest.raises(ValidationError):
            WorkflowConfig(first_queue_size_mb=1000)

    def test_update_must_grow_queue(self):
        with pytest.raises(ValidationError):
            WorkflowConfig(second_queue_size_mb=3072, second_queue_updated_size_mb=2048)

    @pytest.mark.parametrize("seconds", [4, 301])
    def test_lock_duration_bounds(self, seconds):
        with pytest.raises(ValidationError):
            WorkflowConfig(second_queue_lock_duration_seconds=seconds)


class TestFromEnvironment:

    def test_defaults_with_empty_env(self, clean_env):
        config = AppConfig.from_environment()
        assert config.region == "westus"
        assert config.log_level == "INFO"
        assert config.log_format == "text"
        assert config.azure.subscription_id is None
        assert not config.azure.has_service_principal
        assert not config.azure.http_logging_enabled

    def test_env_overrides(self, clean_env):
        clean_env.setenv("AZURE_REGION", "eastus2")
        clean_env.setenv("AZURE_HTTP_LOGGING", "true")
        clean_env.setenv("LOG_LEVEL", "debug")
        clean_env.setenv("LOG_FORMAT", "JSON")
        clean_env.setenv("SB_SECOND_QUEUE_UPDATED_SIZE_MB", "5120")
        clean_env.setenv("SB_SECOND_QUEUE_LOCK_DURATION_SECONDS", "45")
        clean_env.setenv("SB_REVEAL_KEYS", "yes")

        config = AppConfig.from_environment()
        assert config.region == "eastus2"
        assert config.azure.http_logging_enabled
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.workflow.second_queue_updated_size_mb == 5120
        assert config.workflow.second_queue_lock_duration == timedelta(seconds=45)
        assert config.workflow.reveal_keys is True

    def test_service_principal_trio(self, clean_env):
        clean_env.setenv("AZURE_TENANT_ID", "t")
        clean_env.setenv("AZURE_CLIENT_ID", "c")
        clean_env.setenv("AZURE_CLIENT_SECRET", "s")
        assert AzureConfig.from_environment().has_service_principal

    def test_invalid_log_format_rejected(self, clean_env):
        clean_env.setenv("LOG_FORMAT", "xml")
        with pytest.raises(ValidationError):
            AppConfig.from_environment()


class TestSingleton:

    def test_cached_until_reset(self, clean_env):
        first = get_config()
        assert get_config() is first
        reset_config()
        assert get_config() is not first

    def test_debug_config_masks_secret(self, clean_env):
        clean_env.setenv("AZURE_CLIENT_SECRET", "super-secret-value")
        info = debug_config()
        assert info["azure"]["client_secret"] == "***MASKED***"
        assert "super-secret-value" not in str(info)

    def test_secret_not_in_repr(self, clean_env):
        clean_env.setenv("AZURE_CLIENT_SECRET", "super-secret-value")
        assert "super-secret-value" not in repr(get_config())
