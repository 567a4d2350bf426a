"""
Azure Service Bus Management Repository Implementation.

Control-plane repository over the Azure management SDKs. Creates,
updates, lists and deletes resource groups, Service Bus namespaces,
queues and authorization rule keys.

Key Features:
    - Long-running operations awaited (poller.result()) before returning
    - SDK models converted to core.models snapshots at this boundary
    - Namespace SKU changes sent as a PATCH containing only the SKU, then
      polled until the namespace reaches a terminal provisioning state
    - Queue updates re-fetch the queue and PUT it back with one field changed
    - Deletes used during teardown return outcome values instead of raising

Exports:
    AzureServiceBusManagementRepository: IServiceBusManagementRepository over azure-mgmt-*
"""

import time
from datetime import timedelta
from typing import Any, List, Optional

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.mgmt.core.tools import parse_resource_id
from azure.mgmt.resource import ResourceManagementClient
from azure.mgmt.servicebus import ServiceBusManagementClient
from azure.mgmt.servicebus.models import (
    RegenerateAccessKeyParameters,
    SBNamespace,
    SBNamespaceUpdateParameters,
    SBQueue,
    SBSku,
)

from config.defaults import AzureDefaults
from core.models import (
    AccessKeyType,
    AccessKeysSummary,
    AuthorizationRuleSummary,
    CleanupOutcome,
    CleanupStatus,
    DeleteOutcome,
    DeleteStatus,
    NamespaceSummary,
    QueueSummary,
    ResourceGroupSummary,
    SkuName,
    SubscriptionSummary,
)
from exceptions import ProvisioningError
from util_logger import LoggerFactory, ComponentType

from .interface_repository import IServiceBusManagementRepository

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "ServiceBusManagementRepository")

TERMINAL_PROVISIONING_STATES = {"succeeded", "failed", "canceled", "cancelled"}


# ============================================================================
# SDK MODEL CONVERSION
# ============================================================================

def _resource_group_of(resource_id: Optional[str]) -> str:
    """Resource group name from an ARM id ('' when the id has none)."""
    if not resource_id:
        return ""
    return parse_resource_id(resource_id).get("resource_group", "")


def _enum_value(value: Any) -> Optional[str]:
    """SDK enums arrive as str-Enums or plain strings."""
    if value is None:
        return None
    return getattr(value, "value", value)


def _to_namespace_summary(ns: Any) -> NamespaceSummary:
    sku = getattr(ns, "sku", None)
    return NamespaceSummary(
        id=ns.id,
        name=ns.name,
        location=ns.location,
        resource_group=_resource_group_of(ns.id),
        sku_name=_enum_value(getattr(sku, "name", None)),
        sku_tier=_enum_value(getattr(sku, "tier", None)),
        sku_capacity=getattr(sku, "capacity", None),
        created_at=ns.created_at,
        updated_at=ns.updated_at,
        service_bus_endpoint=ns.service_bus_endpoint,
        provisioning_state=ns.provisioning_state,
        status=ns.status,
    )


def _to_queue_summary(queue: Any, namespace: str) -> QueueSummary:
    counts = getattr(queue, "count_details", None)
    return QueueSummary(
        id=queue.id,
        name=queue.name,
        resource_group=_resource_group_of(queue.id),
        namespace_name=namespace,
        created_at=queue.created_at,
        updated_at=queue.updated_at,
        accessed_at=queue.accessed_at,
        message_count=queue.message_count,
        active_message_count=getattr(counts, "active_message_count", None),
        dead_letter_message_count=getattr(counts, "dead_letter_message_count", None),
        scheduled_message_count=getattr(counts, "scheduled_message_count", None),
        transfer_message_count=getattr(counts, "transfer_message_count", None),
        transfer_dead_letter_message_count=getattr(counts, "transfer_dead_letter_message_count", None),
        size_in_bytes=queue.size_in_bytes,
        max_size_in_megabytes=queue.max_size_in_megabytes,
        lock_duration=queue.lock_duration,
        default_message_time_to_live=queue.default_message_time_to_live,
        duplicate_detection_history_time_window=queue.duplicate_detection_history_time_window,
        auto_delete_on_idle=queue.auto_delete_on_idle,
        max_delivery_count=queue.max_delivery_count,
        dead_lettering_on_message_expiration=queue.dead_lettering_on_message_expiration,
        enable_batched_operations=queue.enable_batched_operations,
        requires_duplicate_detection=queue.requires_duplicate_detection,
        enable_express=queue.enable_express,
        enable_partitioning=queue.enable_partitioning,
        requires_session=queue.requires_session,
        status=_enum_value(queue.status),
    )


def _to_rule_summary(rule: Any, namespace: str) -> AuthorizationRuleSummary:
    return AuthorizationRuleSummary(
        id=rule.id,
        name=rule.name,
        resource_group=_resource_group_of(rule.id),
        namespace_name=namespace,
        rights=[_enum_value(right) for right in (rule.rights or [])],
    )


def _to_keys_summary(keys: Any) -> AccessKeysSummary:
    return AccessKeysSummary(
        key_name=keys.key_name,
        primary_key=keys.primary_key,
        secondary_key=keys.secondary_key,
        primary_connection_string=keys.primary_connection_string,
        secondary_connection_string=keys.secondary_connection_string,
    )


# ============================================================================
# AZURE SERVICE BUS MANAGEMENT REPOSITORY
# ============================================================================

class AzureServiceBusManagementRepository(IServiceBusManagementRepository):
    """
    Service Bus control-plane repository over the Azure management SDKs.

    Clients can be injected (tests); otherwise they are built from the
    credential and subscription.

    Example:
        repo = AzureServiceBusManagementRepository.from_config(get_config())
        rg = repo.create_resource_group("rgSB01_abc", "westus")
    """

    def __init__(
        self,
        credential: Any,
        subscription: SubscriptionSummary,
        http_logging_enabled: bool = False,
        resource_client: Optional[Any] = None,
        servicebus_client: Optional[Any] = None,
        poll_interval_seconds: float = AzureDefaults.OPERATION_POLL_INTERVAL_SECONDS,
        timeout_seconds: float = AzureDefaults.OPERATION_TIMEOUT_SECONDS
    ):
        logger.info("🚌 Initializing ServiceBusManagementRepository")
        self._subscription = subscription
        self.poll_interval_seconds = poll_interval_seconds
        self.timeout_seconds = timeout_seconds
        client_kwargs = {"logging_enable": True} if http_logging_enabled else {}

        self.resource_client = resource_client or ResourceManagementClient(
            credential=credential,
            subscription_id=subscription.subscription_id,
            **client_kwargs
        )
        self.servicebus_client = servicebus_client or ServiceBusManagementClient(
            credential=credential,
            subscription_id=subscription.subscription_id,
            **client_kwargs
        )
        logger.info(f"✅ ServiceBusManagementRepository initialized for subscription {subscription.subscription_id}")

    @classmethod
    def from_config(cls, config) -> 'AzureServiceBusManagementRepository':
        """
        Authenticate and build the repository from AppConfig.

        Resolves the credential (auth file or DefaultAzureCredential) and
        the default subscription, the way the workflow expects to find them.
        """
        from .auth import get_azure_credential, resolve_subscription

        resolved = get_azure_credential(config.azure)
        subscription = resolve_subscription(
            resolved.credential,
            explicit_subscription_id=config.azure.subscription_id,
            subscription_hint=resolved.subscription_hint
        )
        return cls(
            credential=resolved.credential,
            subscription=subscription,
            http_logging_enabled=config.azure.http_logging_enabled
        )

    @property
    def subscription(self) -> SubscriptionSummary:
        return self._subscription

    def _raise_provisioning_error(self, operation: str, target: str, error: Exception):
        """Log an SDK failure with context and re-raise it as ProvisioningError."""
        status_code = getattr(error, "status_code", None)
        message = getattr(error, "message", None) or str(error)
        logger.error(
            f"❌ {operation} failed for {target}: {message}",
            extra={'custom_dimensions': {
                'error_source': 'infrastructure',
                'operation': operation,
                'target': target,
                'error_type': type(error).__name__,
                'status_code': status_code,
            }}
        )

        error_msg = message.lower()
        if status_code == 401 or 'unauthorized' in error_msg:
            logger.error("Authentication failed - check the service principal or CLI login")
        elif status_code == 403 or 'forbidden' in error_msg:
            logger.error(f"Access denied - the identity needs Contributor on subscription {self._subscription.subscription_id}")
        elif status_code == 409 or 'conflict' in error_msg:
            logger.error(f"'{target}' conflicts with an existing resource (names must be globally unique for namespaces)")

        raise ProvisioningError(operation, target, message, status_code) from error

    # ========================================================================
    # Resource groups
    # ========================================================================

    def create_resource_group(self, name: str, region: str) -> ResourceGroupSummary:
        logger.debug(f"📦 Creating resource group {name} in {region}")
        try:
            rg = self.resource_client.resource_groups.create_or_update(name, {"location": region})
        except AzureError as e:
            self._raise_provisioning_error("create_resource_group", name, e)

        properties = getattr(rg, "properties", None)
        return ResourceGroupSummary(
            id=rg.id,
            name=rg.name,
            location=rg.location,
            provisioning_state=getattr(properties, "provisioning_state", None),
        )

    def delete_resource_group(self, resource_group_id: str) -> CleanupOutcome:
        try:
            name = parse_resource_id(resource_group_id)["resource_group"]
        except KeyError:
            logger.error(f"❌ Not a resource group id: {resource_group_id}")
            return CleanupOutcome(
                status=CleanupStatus.FAILED,
                resource_group_id=resource_group_id,
                error_type="ContractViolationError",
                error_message=f"Not a resource group id: {resource_group_id}",
            )

        logger.debug(f"🗑️ Deleting resource group {name} (waiting for completion)")
        try:
            self.resource_client.resource_groups.begin_delete(name).result()
        except ResourceNotFoundError as e:
            logger.info(f"Resource group {name} was already deleted")
            return CleanupOutcome(
                status=CleanupStatus.NOT_FOUND,
                resource_group_id=resource_group_id,
                resource_group_name=name,
                error_type=type(e).__name__,
                error_message=str(e),
            )
        except Exception as e:
            logger.error(f"❌ Failed to delete resource group {name}: {e}")
            return CleanupOutcome(
                status=CleanupStatus.FAILED,
                resource_group_id=resource_group_id,
                resource_group_name=name,
                error_type=type(e).__name__,
                error_message=str(e),
            )

        return CleanupOutcome(
            status=CleanupStatus.DELETED,
            resource_group_id=resource_group_id,
            resource_group_name=name,
        )

    # ========================================================================
    # Namespaces
    # ========================================================================

    def create_namespace(self, resource_group: str, name: str, region: str, sku: SkuName) -> NamespaceSummary:
        sku = SkuName(sku)
        logger.debug(f"📦 Creating namespace {name} ({sku.value}) in {resource_group}/{region}")
        parameters = SBNamespace(
            location=region,
            sku=SBSku(name=sku.value, tier=sku.value)
        )
        try:
            poller = self.servicebus_client.namespaces.begin_create_or_update(resource_group, name, parameters)
            namespace = poller.result()
        except AzureError as e:
            self._raise_provisioning_error("create_namespace", name, e)
        return _to_namespace_summary(namespace)

    def update_namespace_sku(self, resource_group: str, name: str, sku: SkuName) -> NamespaceSummary:
        sku = SkuName(sku)
        logger.debug(f"✏️ Patching namespace {name} SKU to {sku.value}")
        # Only the SKU goes in the patch body; location and tags are not sent
        parameters = SBNamespaceUpdateParameters(sku=SBSku(name=sku.value, tier=sku.value))
        try:
            namespace = self.servicebus_client.namespaces.update(resource_group, name, parameters)
            namespace = self._wait_for_namespace(resource_group, name, namespace)
        except AzureError as e:
            self._raise_provisioning_error("update_namespace_sku", name, e)

        state = (namespace.provisioning_state or "").lower()
        if state != "succeeded":
            raise ProvisioningError(
                "update_namespace_sku", name, f"namespace ended in provisioning state {namespace.provisioning_state}")
        return _to_namespace_summary(namespace)

    def _wait_for_namespace(self, resource_group: str, name: str, namespace: Any) -> Any:
        """
        Poll the namespace until its provisioning state is terminal.

        namespaces.update is a plain PATCH, not a long-running operation.
        202 Accepted carries no body, and 200 can report 'Updating'.

        Raises:
            ProvisioningError: Still not terminal after timeout_seconds
        """
        start_time = time.time()
        while True:
            if namespace is not None and (namespace.provisioning_state or "").lower() in TERMINAL_PROVISIONING_STATES:
                return namespace

            elapsed = time.time() - start_time
            if elapsed > self.timeout_seconds:
                last_state = getattr(namespace, "provisioning_state", None)
                logger.error(
                    f"⏰ Namespace {name} not settled after {self.timeout_seconds}s (last state: {last_state})",
                    extra={'custom_dimensions': {
                        'error_source': 'infrastructure',
                        'operation': 'update_namespace_sku',
                        'target': name,
                        'last_state': last_state,
                    }}
                )
                raise ProvisioningError(
                    "update_namespace_sku", name,
                    f"timed out after {self.timeout_seconds}s, last provisioning state {last_state}")

            if namespace is not None:
                logger.debug(
                    f"⏳ Namespace {name} is {namespace.provisioning_state}, "
                    f"elapsed: {int(elapsed)}s, waiting {self.poll_interval_seconds}s..."
                )
                time.sleep(self.poll_interval_seconds)
            namespace = self.servicebus_client.namespaces.get(resource_group, name)

    def list_namespaces(self, resource_group: str) -> List[NamespaceSummary]:
        try:
            namespaces = list(self.servicebus_client.namespaces.list_by_resource_group(resource_group))
        except AzureError as e:
            self._raise_provisioning_error("list_namespaces", resource_group, e)
        return [_to_namespace_summary(ns) for ns in namespaces]

    def delete_namespace(self, resource_group: str, name: str) -> DeleteOutcome:
        logger.debug(f"🗑️ Deleting namespace {name} (waiting for completion)")
        try:
            self.servicebus_client.namespaces.begin_delete(resource_group, name).result()
        except Exception as e:
            logger.warning(f"⚠️ Namespace delete failed for {name}: {type(e).__name__}: {e}")
            return DeleteOutcome(
                target=name,
                status=DeleteStatus.FAILED,
                error_type=type(e).__name__,
                error_message=str(e),
            )
        return DeleteOutcome(target=name, status=DeleteStatus.DELETED)

    # ========================================================================
    # Queues
    # ========================================================================

    def create_queue(
        self,
        resource_group: str,
        namespace: str,
        name: str,
        max_size_in_megabytes: int,
        lock_duration: Optional[timedelta] = None,
        dead_lettering_on_message_expiration: Optional[bool] = None
    ) -> QueueSummary:
        logger.debug(f"📦 Creating queue {namespace}/{name} ({max_size_in_megabytes} MB)")
        parameters = SBQueue(
            max_size_in_megabytes=max_size_in_megabytes,
            lock_duration=lock_duration,
            dead_lettering_on_message_expiration=dead_lettering_on_message_expiration,
        )
        try:
            queue = self.servicebus_client.queues.create_or_update(resource_group, namespace, name, parameters)
        except AzureError as e:
            self._raise_provisioning_error("create_queue", name, e)
        return _to_queue_summary(queue, namespace)

    def update_queue(self, resource_group: str, namespace: str, name: str, max_size_in_megabytes: int) -> QueueSummary:
        logger.debug(f"✏️ Re-fetching queue {namespace}/{name} before update")
        try:
            queue = self.servicebus_client.queues.get(resource_group, namespace, name)
            # PUT semantics: send the fetched definition back so lock duration,
            # dead-lettering and the rest are kept
            queue.max_size_in_megabytes = max_size_in_megabytes
            updated = self.servicebus_client.queues.create_or_update(resource_group, namespace, name, queue)
        except AzureError as e:
            self._raise_provisioning_error("update_queue", name, e)
        return _to_queue_summary(updated, namespace)

    def list_queues(self, resource_group: str, namespace: str) -> List[QueueSummary]:
        try:
            queues = list(self.servicebus_client.queues.list_by_namespace(resource_group, namespace))
        except AzureError as e:
            self._raise_provisioning_error("list_queues", namespace, e)
        return [_to_queue_summary(queue, namespace) for queue in queues]

    def delete_queue(self, resource_group: str, namespace: str, name: str) -> None:
        logger.debug(f"🗑️ Deleting queue {namespace}/{name}")
        try:
            self.servicebus_client.queues.delete(resource_group, namespace, name)
        except AzureError as e:
            self._raise_provisioning_error("delete_queue", name, e)

    # ========================================================================
    # Authorization rules
    # ========================================================================

    def list_authorization_rules(self, resource_group: str, namespace: str) -> List[AuthorizationRuleSummary]:
        try:
            rules = list(self.servicebus_client.namespaces.list_authorization_rules(resource_group, namespace))
        except AzureError as e:
            self._raise_provisioning_error("list_authorization_rules", namespace, e)
        return [_to_rule_summary(rule, namespace) for rule in rules]

    def get_keys(self, resource_group: str, namespace: str, rule_name: str) -> AccessKeysSummary:
        try:
            keys = self.servicebus_client.namespaces.list_keys(resource_group, namespace, rule_name)
        except AzureError as e:
            self._raise_provisioning_error("get_keys", rule_name, e)
        return _to_keys_summary(keys)

    def regenerate_key(
        self,
        resource_group: str,
        namespace: str,
        rule_name: str,
        key_type: AccessKeyType
    ) -> AccessKeysSummary:
        key_type = AccessKeyType(key_type)
        logger.debug(f"🔑 Regenerating {key_type.value} of {namespace}/{rule_name}")
        parameters = RegenerateAccessKeyParameters(key_type=key_type.value)
        try:
            keys = self.servicebus_client.namespaces.regenerate_keys(resource_group, namespace, rule_name, parameters)
        except AzureError as e:
            self._raise_provisioning_error("regenerate_key", rule_name, e)
        return _to_keys_summary(keys)
