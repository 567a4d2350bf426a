# ============================================================================
# AZURE CREDENTIAL RESOLUTION
# ============================================================================
# STATUS: Infrastructure - Credential and subscription provider
# PURPOSE: Build the TokenCredential and pick the subscription for management clients
# DEPENDENCIES: azure.identity, azure.mgmt.resource (SubscriptionClient)
# ============================================================================
"""
Azure credential and subscription resolution.

Credential precedence:
    1. AZURE_AUTH_LOCATION - auth file, either the JSON format written by
       'az ad sp create-for-rbac --sdk-auth' (clientId, clientSecret,
       tenantId, subscriptionId) or the older properties format
       (subscription=, client=, key=, tenant=). Builds a ClientSecretCredential.
    2. DefaultAzureCredential - env trio, Azure CLI login, managed identity.

Subscription precedence:
    1. AZURE_SUBSCRIPTION_ID
    2. subscriptionId from the auth file
    3. First subscription visible to the credential

Exports:
    AuthFile: Parsed auth file
    ResolvedCredential: Credential plus where it came from
    load_auth_file: Parse an auth file
    get_azure_credential: Build the credential from AzureConfig
    resolve_subscription: Pick and describe the subscription
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

from azure.identity import ClientSecretCredential, DefaultAzureCredential

from core.models import SubscriptionSummary
from exceptions import ConfigurationError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.ADAPTER, "AzureCredential")

# Keys accepted in the properties-style auth file
_PROPERTIES_KEYS = {
    "subscription": "subscription_id",
    "client": "client_id",
    "key": "client_secret",
    "tenant": "tenant_id",
}

# Keys accepted in the JSON (sdk-auth) auth file
_JSON_KEYS = {
    "subscriptionId": "subscription_id",
    "clientId": "client_id",
    "clientSecret": "client_secret",
    "tenantId": "tenant_id",
}


@dataclass(frozen=True)
class AuthFile:
    """Service principal details read from AZURE_AUTH_LOCATION."""
    client_id: str
    client_secret: str
    tenant_id: str
    subscription_id: Optional[str] = None

    def __repr__(self) -> str:
        return (f"AuthFile(client_id={self.client_id!r}, tenant_id={self.tenant_id!r}, "
                f"subscription_id={self.subscription_id!r})")


@dataclass(frozen=True)
class ResolvedCredential:
    """A credential and, when known, the subscription that came with it."""
    credential: Any
    source: str  # "auth_file" | "default"
    subscription_hint: Optional[str] = None


def _parse_properties(text: str) -> dict:
    values = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        field = _PROPERTIES_KEYS.get(key.strip())
        if field:
            values[field] = value.strip()
    return values


def load_auth_file(path: str) -> AuthFile:
    """
    Read and parse an auth file.

    Args:
        path: File location (AZURE_AUTH_LOCATION)

    Returns:
        AuthFile

    Raises:
        ConfigurationError: File missing, unreadable, malformed or incomplete
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise ConfigurationError(f"Cannot read auth file '{path}': {e}") from e

    if text.lstrip().startswith("{"):
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Auth file '{path}' is not valid JSON: {e}") from e
        values = {field: raw.get(key) for key, field in _JSON_KEYS.items() if raw.get(key)}
    else:
        values = _parse_properties(text)

    missing = [name for name in ("client_id", "client_secret", "tenant_id") if not values.get(name)]
    if missing:
        raise ConfigurationError(f"Auth file '{path}' is missing: {', '.join(missing)}")

    return AuthFile(**values)


def get_azure_credential(azure_config) -> ResolvedCredential:
    """
    Build the credential used by every management client.

    Args:
        azure_config: AzureConfig

    Returns:
        ResolvedCredential
    """
    if azure_config.auth_file_location:
        auth_file = load_auth_file(azure_config.auth_file_location)
        logger.info(f"🔑 Using auth file credential: {azure_config.auth_file_location}")
        logger.debug(f"  Client ID: {auth_file.client_id}")
        logger.debug(f"  Tenant ID: {auth_file.tenant_id}")
        credential = ClientSecretCredential(
            tenant_id=auth_file.tenant_id,
            client_id=auth_file.client_id,
            client_secret=auth_file.client_secret
        )
        return ResolvedCredential(
            credential=credential,
            source="auth_file",
            subscription_hint=auth_file.subscription_id
        )

    # DefaultAzureCredential reads AZURE_TENANT_ID/AZURE_CLIENT_ID/AZURE_CLIENT_SECRET itself
    if azure_config.has_service_principal:
        logger.info("🔐 Using DefaultAzureCredential (service principal from environment)")
    else:
        logger.info("🔐 Using DefaultAzureCredential (CLI login or managed identity)")
    return ResolvedCredential(credential=DefaultAzureCredential(), source="default")


def resolve_subscription(
    credential: Any,
    explicit_subscription_id: Optional[str] = None,
    subscription_hint: Optional[str] = None,
    subscription_client: Optional[Any] = None
) -> SubscriptionSummary:
    """
    Pick the subscription to provision into.

    Args:
        credential: TokenCredential
        explicit_subscription_id: AZURE_SUBSCRIPTION_ID, wins if set
        subscription_hint: subscriptionId from the auth file
        subscription_client: Optional pre-built SubscriptionClient (tests)

    Returns:
        SubscriptionSummary

    Raises:
        ConfigurationError: No subscription is visible to the credential
    """
    if subscription_client is None:
        from azure.mgmt.resource import SubscriptionClient
        subscription_client = SubscriptionClient(credential)

    wanted = explicit_subscription_id or subscription_hint
    if wanted:
        logger.debug(f"📋 Looking up subscription {wanted}")
        sub = subscription_client.subscriptions.get(wanted)
    else:
        logger.debug("📋 No subscription configured - using first visible subscription")
        sub = next(iter(subscription_client.subscriptions.list()), None)
        if sub is None:
            raise ConfigurationError(
                "No subscription visible to the credential. "
                "Set AZURE_SUBSCRIPTION_ID or grant the identity access to a subscription."
            )

    return SubscriptionSummary(
        subscription_id=sub.subscription_id,
        display_name=getattr(sub, "display_name", None),
        tenant_id=getattr(sub, "tenant_id", None),
    )


__all__ = [
    "AuthFile",
    "ResolvedCredential",
    "load_auth_file",
    "get_azure_credential",
    "resolve_subscription",
]
