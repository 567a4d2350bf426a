"""
Core Data Models Package.

Contains pure data structures without business logic.

Exports:
    SkuName, AccessKeyType, WorkflowStep, StepStatus, DeleteStatus, CleanupStatus: Enums
    SubscriptionSummary, ResourceGroupSummary, NamespaceSummary, QueueSummary,
    AuthorizationRuleSummary, AccessKeysSummary: Remote resource snapshots
    StepOutcome, DeleteOutcome, CleanupOutcome, WorkflowResult: Result types
"""

# Enums
from .enums import (
    SkuName,
    AccessKeyType,
    WorkflowStep,
    StepStatus,
    DeleteStatus,
    CleanupStatus,
)

# Resource snapshots
from .resources import (
    SubscriptionSummary,
    ResourceGroupSummary,
    NamespaceSummary,
    QueueSummary,
    AuthorizationRuleSummary,
    AccessKeysSummary,
)

# Result models
from .results import (
    StepOutcome,
    DeleteOutcome,
    CleanupOutcome,
    WorkflowResult,
)

__all__ = [
    'SkuName',
    'AccessKeyType',
    'WorkflowStep',
    'StepStatus',
    'DeleteStatus',
    'CleanupStatus',
    'SubscriptionSummary',
    'ResourceGroupSummary',
    'NamespaceSummary',
    'QueueSummary',
    'AuthorizationRuleSummary',
    'AccessKeysSummary',
    'StepOutcome',
    'DeleteOutcome',
    'CleanupOutcome',
    'WorkflowResult',
]
