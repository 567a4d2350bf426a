"""
Remote Resource Snapshot Models.

Read-only snapshots of Azure resources, built by the management
repository from SDK models. The workflow and formatters only ever see
these, never azure.mgmt types.

Exports:
    SubscriptionSummary: Subscription the repository is bound to
    ResourceGroupSummary: Resource group
    NamespaceSummary: Service Bus namespace
    QueueSummary: Service Bus queue
    AuthorizationRuleSummary: Namespace authorization rule
    AccessKeysSummary: Key pair and connection strings of a rule
"""

from datetime import datetime, timedelta
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class SubscriptionSummary(BaseModel):
    """Subscription context of the authenticated session."""

    model_config = ConfigDict(frozen=True)

    subscription_id: str = Field(..., description="Subscription GUID")
    display_name: Optional[str] = Field(default=None, description="Portal display name")
    tenant_id: Optional[str] = Field(default=None, description="Owning tenant")


class ResourceGroupSummary(BaseModel):
    """Resource group snapshot."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="ARM resource id")
    name: str = Field(..., description="Resource group name")
    location: str = Field(..., description="ARM location slug")
    provisioning_state: Optional[str] = Field(default=None)


class NamespaceSummary(BaseModel):
    """Service Bus namespace snapshot."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="ARM resource id")
    name: str = Field(..., description="Namespace name")
    location: str = Field(..., description="ARM location (as returned, e.g. 'West US')")
    resource_group: str = Field(..., description="Owning resource group")
    sku_name: Optional[str] = Field(default=None)
    sku_tier: Optional[str] = Field(default=None)
    sku_capacity: Optional[int] = Field(default=None)
    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)
    service_bus_endpoint: Optional[str] = Field(default=None, description="https://<name>.servicebus.windows.net:443/")
    provisioning_state: Optional[str] = Field(default=None)
    status: Optional[str] = Field(default=None)


class QueueSummary(BaseModel):
    """
    Service Bus queue snapshot.

    Message counters are None on freshly created queues until the
    service has computed count details.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="ARM resource id")
    name: str = Field(..., description="Queue name")
    resource_group: str = Field(..., description="Owning resource group")
    namespace_name: str = Field(..., description="Owning namespace")

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    accessed_at: Optional[datetime] = None

    # Counters
    message_count: Optional[int] = None
    active_message_count: Optional[int] = None
    dead_letter_message_count: Optional[int] = None
    scheduled_message_count: Optional[int] = None
    transfer_message_count: Optional[int] = None
    transfer_dead_letter_message_count: Optional[int] = None
    size_in_bytes: Optional[int] = None

    # Settings
    max_size_in_megabytes: Optional[int] = None
    lock_duration: Optional[timedelta] = None
    default_message_time_to_live: Optional[timedelta] = None
    duplicate_detection_history_time_window: Optional[timedelta] = None
    auto_delete_on_idle: Optional[timedelta] = None
    max_delivery_count: Optional[int] = None
    dead_lettering_on_message_expiration: Optional[bool] = None
    enable_batched_operations: Optional[bool] = None
    requires_duplicate_detection: Optional[bool] = None
    enable_express: Optional[bool] = None
    enable_partitioning: Optional[bool] = None
    requires_session: Optional[bool] = None
    status: Optional[str] = None


class AuthorizationRuleSummary(BaseModel):
    """Namespace-scoped authorization rule snapshot."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="ARM resource id")
    name: str = Field(..., description="Rule name, e.g. RootManageSharedAccessKey")
    resource_group: str = Field(...)
    namespace_name: str = Field(...)
    rights: List[str] = Field(default_factory=list, description="Listen, Send, Manage")


class AccessKeysSummary(BaseModel):
    """Keys of an authorization rule. Secrets excluded from repr."""

    model_config = ConfigDict(frozen=True)

    key_name: Optional[str] = None
    primary_key: Optional[str] = Field(default=None, repr=False)
    secondary_key: Optional[str] = Field(default=None, repr=False)
    primary_connection_string: Optional[str] = Field(default=None, repr=False)
    secondary_connection_string: Optional[str] = Field(default=None, repr=False)
