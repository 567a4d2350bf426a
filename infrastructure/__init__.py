"""
Infrastructure Package - Lazy Loading Implementation.

Provides the repository implementation with lazy loading so that the
Azure SDK clients, credentials and environment variable reads are not
touched until a repository is actually requested.

All imports are deferred until actually needed to avoid:
    - DefaultAzureCredential probing during import
    - Environment variable access before validation has run
    - Import order dependencies between config and infrastructure

Exports:
    IServiceBusManagementRepository: Control-plane repository interface
    AzureServiceBusManagementRepository: Implementation over azure-mgmt-*
    get_azure_credential, resolve_subscription: Authentication helpers
"""

from typing import TYPE_CHECKING

# For type checking only - doesn't actually import at runtime
if TYPE_CHECKING:
    from .interface_repository import IServiceBusManagementRepository as _IServiceBusManagementRepository
    from .servicebus_management import AzureServiceBusManagementRepository as _AzureServiceBusManagementRepository
    from .auth import get_azure_credential as _get_azure_credential
    from .auth import resolve_subscription as _resolve_subscription


def __getattr__(name: str):
    """
    Lazy import mechanism - only imports when actually accessed.
    This prevents module-level code execution until needed.
    """
    if name == "IServiceBusManagementRepository":
        from .interface_repository import IServiceBusManagementRepository
        return IServiceBusManagementRepository
    elif name == "AzureServiceBusManagementRepository":
        from .servicebus_management import AzureServiceBusManagementRepository
        return AzureServiceBusManagementRepository
    elif name == "get_azure_credential":
        from .auth import get_azure_credential
        return get_azure_credential
    elif name == "resolve_subscription":
        from .auth import resolve_subscription
        return resolve_subscription
    else:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    "IServiceBusManagementRepository",
    "AzureServiceBusManagementRepository",
    "get_azure_credential",
    "resolve_subscription",
]
