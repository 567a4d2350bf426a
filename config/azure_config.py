"""
Azure Identity and Subscription Configuration.

Provides configuration for:
    - Service principal credentials (tenant, client id, client secret)
    - Credential file location (AZURE_AUTH_LOCATION)
    - Subscription selection
    - Target region and SDK HTTP logging

Credential precedence (resolved in infrastructure.auth.credential):
    1. AZURE_AUTH_LOCATION - JSON auth file with clientId/clientSecret/tenantId/subscriptionId
    2. DefaultAzureCredential - env trio, Azure CLI login, managed identity

Exports:
    AzureConfig: Pydantic Azure configuration model
"""

import os
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field

from .defaults import AzureDefaults


def _env_flag(name: str, default: bool) -> bool:
    """Parse a boolean environment variable (true/1/yes)."""
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("true", "1", "yes")


class AzureConfig(BaseModel):
    """
    Azure authentication and targeting configuration.

    Secrets are excluded from repr and masked in debug_dict().
    """

    tenant_id: Optional[str] = Field(
        default=None,
        description="Azure AD tenant id (AZURE_TENANT_ID)"
    )

    client_id: Optional[str] = Field(
        default=None,
        description="Service principal application id (AZURE_CLIENT_ID)"
    )

    client_secret: Optional[str] = Field(
        default=None,
        repr=False,
        description="Service principal secret (AZURE_CLIENT_SECRET)"
    )

    subscription_id: Optional[str] = Field(
        default=None,
        description="Subscription to provision into. When unset, the auth file's "
                    "subscriptionId or the first visible subscription is used."
    )

    auth_file_location: Optional[str] = Field(
        default=None,
        description="Path to a JSON credential file (AZURE_AUTH_LOCATION)"
    )

    region: str = Field(
        default=AzureDefaults.REGION,
        min_length=1,
        description="ARM location for the resource group and namespace",
        examples=["westus", "eastus2"]
    )

    http_logging_enabled: bool = Field(
        default=AzureDefaults.HTTP_LOGGING_ENABLED,
        description="Enable Azure SDK HTTP request/response logging"
    )

    @property
    def has_service_principal(self) -> bool:
        """True when the full tenant/client/secret trio is configured."""
        return bool(self.tenant_id and self.client_id and self.client_secret)

    def debug_dict(self) -> Dict[str, Any]:
        """Sanitized view for logging (secrets masked)."""
        return {
            'tenant_id': self.tenant_id,
            'client_id': self.client_id,
            'client_secret': '***MASKED***' if self.client_secret else None,
            'subscription_id': self.subscription_id,
            'auth_file_location': self.auth_file_location,
            'region': self.region,
            'http_logging_enabled': self.http_logging_enabled,
        }

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            tenant_id=os.environ.get("AZURE_TENANT_ID") or None,
            client_id=os.environ.get("AZURE_CLIENT_ID") or None,
            client_secret=os.environ.get("AZURE_CLIENT_SECRET") or None,
            subscription_id=os.environ.get("AZURE_SUBSCRIPTION_ID") or None,
            auth_file_location=os.environ.get("AZURE_AUTH_LOCATION") or None,
            region=os.environ.get("AZURE_REGION") or AzureDefaults.REGION,
            http_logging_enabled=_env_flag("AZURE_HTTP_LOGGING", AzureDefaults.HTTP_LOGGING_ENABLED),
        )
