"""
Human-Readable Resource Summaries.

One function per resource type, each returning a multi-line block that
the workflow logs as a single record.

Exports:
    format_subscription, format_resource_group, format_namespace,
    format_queue, format_authorization_rule, format_access_keys, mask_secret
"""

from datetime import datetime
from typing import Any, List, Tuple

from core.models import (
    SubscriptionSummary,
    ResourceGroupSummary,
    NamespaceSummary,
    QueueSummary,
    AuthorizationRuleSummary,
    AccessKeysSummary,
)


def _display(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _block(title: str, rows: List[Tuple[str, Any]], indent: int = 1) -> str:
    """Title line followed by tab-indented 'Label: value' rows."""
    prefix = "\t" * indent
    lines = [title]
    for label, value in rows:
        lines.append(f"{prefix}{label}: {_display(value)}")
    return "\n".join(lines)


def mask_secret(value: str, visible: int = 4) -> str:
    """
    Mask a secret, keeping the last few characters for identification.

    Args:
        value: Secret to mask
        visible: Trailing characters to keep

    Returns:
        '***' + last `visible` characters, or '-' for empty values
    """
    if not value:
        return "-"
    if len(value) <= visible:
        return "***"
    return "***" + value[-visible:]


def format_subscription(subscription: SubscriptionSummary) -> str:
    return _block(f"Selected subscription: {subscription.subscription_id}", [
        ("Name", subscription.display_name),
        ("Tenant", subscription.tenant_id),
    ])


def format_resource_group(resource_group: ResourceGroupSummary) -> str:
    return _block(f"Resource group: {resource_group.id}", [
        ("Name", resource_group.name),
        ("Region", resource_group.location),
        ("ProvisioningState", resource_group.provisioning_state),
    ])


def format_namespace(namespace: NamespaceSummary) -> str:
    """Namespace identity, timestamps, endpoint, state and SKU."""
    text = _block(f"Service Bus namespace: {namespace.id}", [
        ("Name", namespace.name),
        ("Region", namespace.location),
        ("ResourceGroupName", namespace.resource_group),
        ("CreatedAt", namespace.created_at),
        ("UpdatedAt", namespace.updated_at),
        ("Endpoint", namespace.service_bus_endpoint),
        ("ProvisioningState", namespace.provisioning_state),
        ("Status", namespace.status),
    ])
    sku = _block("\tSku:", [
        ("Capacity", namespace.sku_capacity),
        ("SkuName", namespace.sku_name),
        ("Tier", namespace.sku_tier),
    ], indent=2)
    return f"{text}\n{sku}"


def format_queue(queue: QueueSummary) -> str:
    """Queue identity, timestamps, counters and settings."""
    return _block(f"Service Bus queue: {queue.id}", [
        ("Name", queue.name),
        ("ResourceGroupName", queue.resource_group),
        ("NamespaceName", queue.namespace_name),
        ("CreatedAt", queue.created_at),
        ("UpdatedAt", queue.updated_at),
        ("AccessedAt", queue.accessed_at),
        ("ActiveMessageCount", queue.active_message_count),
        ("CurrentSizeInBytes", queue.size_in_bytes),
        ("DeadLetterMessageCount", queue.dead_letter_message_count),
        ("DefaultMessageTtl", queue.default_message_time_to_live),
        ("DuplicateDetectionHistoryTimeWindow", queue.duplicate_detection_history_time_window),
        ("BatchedOperationsEnabled", queue.enable_batched_operations),
        ("DeadLetteringOnMessageExpiration", queue.dead_lettering_on_message_expiration),
        ("DuplicateDetectionEnabled", queue.requires_duplicate_detection),
        ("ExpressEnabled", queue.enable_express),
        ("PartitioningEnabled", queue.enable_partitioning),
        ("SessionEnabled", queue.requires_session),
        ("AutoDeleteOnIdle", queue.auto_delete_on_idle),
        ("MaxDeliveryCount", queue.max_delivery_count),
        ("MaxSizeInMB", queue.max_size_in_megabytes),
        ("MessageCount", queue.message_count),
        ("ScheduledMessageCount", queue.scheduled_message_count),
        ("Status", queue.status),
        ("TransferMessageCount", queue.transfer_message_count),
        ("LockDuration", queue.lock_duration),
        ("TransferDeadLetterMessageCount", queue.transfer_dead_letter_message_count),
    ])


def format_authorization_rule(rule: AuthorizationRuleSummary) -> str:
    text = _block(f"Service Bus namespace authorization rule: {rule.id}", [
        ("Name", rule.name),
        ("ResourceGroupName", rule.resource_group),
        ("NamespaceName", rule.namespace_name),
        ("Number of access rights", len(rule.rights)),
    ])
    rights = "".join(f"\n\t\tAccessRight: {right}" for right in rule.rights)
    return text + rights


def format_access_keys(keys: AccessKeysSummary, reveal: bool = False) -> str:
    """
    Keys and connection strings of an authorization rule.

    Secrets are masked unless reveal=True.
    """
    show = _display if reveal else mask_secret
    return _block(f"Authorization keys: {_display(keys.key_name)}", [
        ("PrimaryKey", show(keys.primary_key)),
        ("PrimaryConnectionString", show(keys.primary_connection_string)),
        ("SecondaryKey", show(keys.secondary_key)),
        ("SecondaryConnectionString", show(keys.secondary_connection_string)),
    ])
