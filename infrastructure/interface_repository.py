"""
Repository Interface Definitions.

Abstract interface for the Service Bus management collaborator. The
workflow depends on this interface only; the Azure SDK implementation
and the test fake both implement it.

Exports:
    IServiceBusManagementRepository: Control-plane operations used by the workflow
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import List, Optional

from core.models import (
    AccessKeyType,
    AccessKeysSummary,
    AuthorizationRuleSummary,
    CleanupOutcome,
    DeleteOutcome,
    NamespaceSummary,
    QueueSummary,
    ResourceGroupSummary,
    SkuName,
    SubscriptionSummary,
)


class IServiceBusManagementRepository(ABC):
    """
    Service Bus control-plane repository interface.

    Contract:
    - Every mutating call returns only after the remote operation is
      terminal (long-running operations are awaited).
    - Return values are core.models snapshots, never SDK objects.
    - Failures raise ProvisioningError, except the two delete calls that
      return outcome values (delete_namespace, delete_resource_group).
    """

    @property
    @abstractmethod
    def subscription(self) -> SubscriptionSummary:
        """Subscription this repository is bound to."""
        pass

    # ========================================================================
    # Resource groups
    # ========================================================================

    @abstractmethod
    def create_resource_group(self, name: str, region: str) -> ResourceGroupSummary:
        """Create (or update) a resource group."""
        pass

    @abstractmethod
    def delete_resource_group(self, resource_group_id: str) -> CleanupOutcome:
        """
        Delete a resource group by ARM id and wait for completion.

        Returns:
            CleanupOutcome with DELETED, NOT_FOUND or FAILED - never raises
        """
        pass

    # ========================================================================
    # Namespaces
    # ========================================================================

    @abstractmethod
    def create_namespace(
        self,
        resource_group: str,
        name: str,
        region: str,
        sku: SkuName
    ) -> NamespaceSummary:
        """Create a namespace and wait for provisioning to finish."""
        pass

    @abstractmethod
    def update_namespace_sku(self, resource_group: str, name: str, sku: SkuName) -> NamespaceSummary:
        """
        Patch the namespace SKU.

        Only the SKU is sent; every other namespace property is left as is.
        """
        pass

    @abstractmethod
    def list_namespaces(self, resource_group: str) -> List[NamespaceSummary]:
        pass

    @abstractmethod
    def delete_namespace(self, resource_group: str, name: str) -> DeleteOutcome:
        """
        Delete a namespace (and every queue in it) and wait for completion.

        Returns:
            DeleteOutcome with DELETED or FAILED - never raises
        """
        pass

    # ========================================================================
    # Queues
    # ========================================================================

    @abstractmethod
    def create_queue(
        self,
        resource_group: str,
        namespace: str,
        name: str,
        max_size_in_megabytes: int,
        lock_duration: Optional[timedelta] = None,
        dead_lettering_on_message_expiration: Optional[bool] = None
    ) -> QueueSummary:
        """Create a queue. None settings keep the service defaults."""
        pass

    @abstractmethod
    def update_queue(
        self,
        resource_group: str,
        namespace: str,
        name: str,
        max_size_in_megabytes: int
    ) -> QueueSummary:
        """
        Re-fetch a queue and change its max size.

        All other settings of the fetched queue are sent back unchanged.
        """
        pass

    @abstractmethod
    def list_queues(self, resource_group: str, namespace: str) -> List[QueueSummary]:
        pass

    @abstractmethod
    def delete_queue(self, resource_group: str, namespace: str, name: str) -> None:
        pass

    # ========================================================================
    # Authorization rules
    # ========================================================================

    @abstractmethod
    def list_authorization_rules(self, resource_group: str, namespace: str) -> List[AuthorizationRuleSummary]:
        pass

    @abstractmethod
    def get_keys(self, resource_group: str, namespace: str, rule_name: str) -> AccessKeysSummary:
        pass

    @abstractmethod
    def regenerate_key(
        self,
        resource_group: str,
        namespace: str,
        rule_name: str,
        key_type: AccessKeyType
    ) -> AccessKeysSummary:
        """Regenerate one key of a rule and return the rule's new keys."""
        pass
