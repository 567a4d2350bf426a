"""
Azure Authentication Module.

Builds the credential and selects the subscription for the management
clients. See credential.py for precedence rules.
"""

from .credential import (
    AuthFile,
    ResolvedCredential,
    load_auth_file,
    get_azure_credential,
    resolve_subscription,
)

__all__ = [
    "AuthFile",
    "ResolvedCredential",
    "load_auth_file",
    "get_azure_credential",
    "resolve_subscription",
]
