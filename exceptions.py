# ============================================================================
# EXCEPTIONS
# ============================================================================
# PURPOSE: Custom exception hierarchy for distinguishing contract violations from provisioning failures
# EXPORTS: ContractViolationError, BusinessLogicError, ProvisioningError, ConfigurationError
# DEPENDENCIES: None (standard library only)
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Business Logic Failures (expected runtime issues from the remote API)
3. Configuration Errors (the process cannot start)

The workflow lets ProvisioningError propagate to the entry point after
cleanup has run; only namespace delete and resource group cleanup turn
failures into outcome values instead.
"""

from typing import Optional


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These should NEVER be caught and handled - they indicate bugs
    that need to be fixed in the code.

    Examples:
        - Repository returns an SDK object instead of a summary model
        - Keys requested from a namespace with no authorization rules
    """
    pass


class BusinessLogicError(Exception):
    """
    Base class for expected runtime failures.

    Subclasses represent specific categories of failures.
    """
    pass


class ProvisioningError(BusinessLogicError):
    """
    A management API call failed.

    Carries the operation name and the target resource so the top-level
    log line says what was being attempted, not just the HTTP error.

    Examples:
        - Namespace name already taken (409 Conflict)
        - Quota exceeded in region
        - Authentication failure (401) or missing RBAC role (403)
    """

    def __init__(self, operation: str, target: str, message: str, status_code: Optional[int] = None):
        self.operation = operation
        self.target = target
        self.status_code = status_code
        detail = f" (HTTP {status_code})" if status_code else ""
        super().__init__(f"{operation} failed for '{target}'{detail}: {message}")


class ConfigurationError(Exception):
    """
    System configuration error.

    These are fatal and indicate misconfiguration that prevents the
    workflow from starting.

    Examples:
        - Missing or unreadable AZURE_AUTH_LOCATION file
        - No subscription visible to the credential
        - Invalid queue size override
    """
    pass
