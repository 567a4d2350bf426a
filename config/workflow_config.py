"""
Service Bus Queue Workflow Configuration.

Provides configuration for:
    - Generated resource name prefixes and lengths
    - Namespace SKU progression (Basic -> Standard)
    - Queue sizes, lock duration and dead-lettering for both queues

All values have safe defaults; the env overrides exist for trying other
queue sizes without editing code.

Exports:
    WorkflowConfig: Pydantic workflow configuration model
"""

import os
from datetime import timedelta
from pydantic import BaseModel, Field, field_validator, model_validator

from .defaults import NamingDefaults, NamespaceDefaults, QueueDefaults
from core.models.enums import SkuName


class WorkflowConfig(BaseModel):
    """
    Settings for the provisioning workflow.

    The second queue's updated size must be larger than its initial size,
    since the update step grows the queue.
    """

    # ========================================================================
    # Naming
    # ========================================================================

    resource_group_prefix: str = Field(default=NamingDefaults.RESOURCE_GROUP_PREFIX, min_length=1)
    resource_group_length: int = Field(default=NamingDefaults.RESOURCE_GROUP_LENGTH, ge=8, le=90)

    namespace_prefix: str = Field(default=NamingDefaults.NAMESPACE_PREFIX, min_length=1)
    namespace_length: int = Field(default=NamingDefaults.NAMESPACE_LENGTH, ge=6, le=50)

    first_queue_prefix: str = Field(default=NamingDefaults.FIRST_QUEUE_PREFIX, min_length=1)
    first_queue_length: int = Field(default=NamingDefaults.FIRST_QUEUE_LENGTH, ge=8, le=260)

    second_queue_prefix: str = Field(default=NamingDefaults.SECOND_QUEUE_PREFIX, min_length=1)
    second_queue_length: int = Field(default=NamingDefaults.SECOND_QUEUE_LENGTH, ge=8, le=260)

    # ========================================================================
    # Namespace
    # ========================================================================

    initial_sku: SkuName = Field(
        default=SkuName(NamespaceDefaults.INITIAL_SKU),
        description="SKU the namespace is created with"
    )

    updated_sku: SkuName = Field(
        default=SkuName(NamespaceDefaults.UPDATED_SKU),
        description="SKU the namespace is patched to"
    )

    # ========================================================================
    # Queues
    # ========================================================================

    first_queue_size_mb: int = Field(
        default=QueueDefaults.FIRST_QUEUE_SIZE_MB,
        description="Max size of the first queue in megabytes"
    )

    second_queue_size_mb: int = Field(
        default=QueueDefaults.SECOND_QUEUE_SIZE_MB,
        description="Initial max size of the second queue in megabytes"
    )

    second_queue_updated_size_mb: int = Field(
        default=QueueDefaults.SECOND_QUEUE_UPDATED_SIZE_MB,
        description="Max size applied to the second queue by the update step"
    )

    second_queue_lock_duration_seconds: int = Field(
        default=QueueDefaults.SECOND_QUEUE_LOCK_DURATION_SECONDS,
        ge=5,
        le=300,
        description="Peek-lock duration for the second queue (Service Bus allows 5s-5min)"
    )

    second_queue_dead_letter_on_expiration: bool = Field(
        default=QueueDefaults.SECOND_QUEUE_DEAD_LETTER_ON_EXPIRATION,
        description="Move expired messages of the second queue to its dead-letter queue"
    )

    reveal_keys: bool = Field(
        default=QueueDefaults.REVEAL_KEYS,
        description="Log access keys and connection strings unmasked"
    )

    @field_validator('first_queue_size_mb', 'second_queue_size_mb', 'second_queue_updated_size_mb')
    @classmethod
    def validate_queue_size(cls, v):
        if v not in QueueDefaults.VALID_SIZES_MB:
            raise ValueError(f"Invalid queue size: {v} MB. Must be one of {list(QueueDefaults.VALID_SIZES_MB)}")
        return v

    @model_validator(mode='after')
    def validate_second_queue_grows(self):
        if self.second_queue_updated_size_mb <= self.second_queue_size_mb:
            raise ValueError(
                f"second_queue_updated_size_mb ({self.second_queue_updated_size_mb}) must be larger "
                f"than second_queue_size_mb ({self.second_queue_size_mb})"
            )
        return self

    @property
    def second_queue_lock_duration(self) -> timedelta:
        """Lock duration as a timedelta (the SDK's representation)."""
        return timedelta(seconds=self.second_queue_lock_duration_seconds)

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            first_queue_size_mb=int(os.environ.get(
                "SB_FIRST_QUEUE_SIZE_MB", str(QueueDefaults.FIRST_QUEUE_SIZE_MB))),
            second_queue_size_mb=int(os.environ.get(
                "SB_SECOND_QUEUE_SIZE_MB", str(QueueDefaults.SECOND_QUEUE_SIZE_MB))),
            second_queue_updated_size_mb=int(os.environ.get(
                "SB_SECOND_QUEUE_UPDATED_SIZE_MB", str(QueueDefaults.SECOND_QUEUE_UPDATED_SIZE_MB))),
            second_queue_lock_duration_seconds=int(os.environ.get(
                "SB_SECOND_QUEUE_LOCK_DURATION_SECONDS", str(QueueDefaults.SECOND_QUEUE_LOCK_DURATION_SECONDS))),
            reveal_keys=os.environ.get("SB_REVEAL_KEYS", "false").lower() in ("true", "1", "yes"),
        )
