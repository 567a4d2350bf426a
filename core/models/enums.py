"""
Pure Enumeration Types for the Provisioning Workflow.

No business logic - pure type definitions only.

Exports:
    SkuName: Service Bus namespace SKU
    AccessKeyType: Which key of an authorization rule to regenerate
    WorkflowStep: Ordered steps of the workflow
    StepStatus: Outcome of a single step
    DeleteStatus: Outcome of an absorbed delete (namespace)
    CleanupStatus: Outcome of resource group cleanup
"""

from enum import Enum


class SkuName(str, Enum):
    """Service Bus namespace SKU (name and tier share the same values)."""

    BASIC = "Basic"
    STANDARD = "Standard"
    PREMIUM = "Premium"


class AccessKeyType(str, Enum):
    """Key selector accepted by the regenerate-keys API."""

    PRIMARY = "PrimaryKey"
    SECONDARY = "SecondaryKey"


class WorkflowStep(Enum):
    """
    Steps of the queue workflow, in execution order.

    Definition order IS execution order - list(WorkflowStep) is the plan.
    """

    RESOLVE_SUBSCRIPTION = "resolve_subscription"
    CREATE_RESOURCE_GROUP = "create_resource_group"
    CREATE_NAMESPACE = "create_namespace"
    CREATE_FIRST_QUEUE = "create_first_queue"
    CREATE_SECOND_QUEUE = "create_second_queue"
    UPDATE_SECOND_QUEUE = "update_second_queue"
    UPDATE_NAMESPACE_SKU = "update_namespace_sku"
    LIST_NAMESPACES = "list_namespaces"
    LIST_QUEUES = "list_queues"
    LIST_AUTHORIZATION_RULES = "list_authorization_rules"
    GET_KEYS = "get_keys"
    REGENERATE_SECONDARY_KEY = "regenerate_secondary_key"
    DELETE_FIRST_QUEUE = "delete_first_queue"
    DELETE_NAMESPACE = "delete_namespace"


class StepStatus(Enum):
    """
    Outcome of a workflow step.

    A step that raised is recorded as FAILED before the exception
    propagates; steps after it are never recorded. The namespace delete
    is the exception: its failure is recorded and the run continues.
    """

    COMPLETED = "completed"
    FAILED = "failed"


class DeleteStatus(Enum):
    """Outcome of a delete whose failure the workflow tolerates."""

    DELETED = "deleted"
    FAILED = "failed"


class CleanupStatus(Enum):
    """
    Outcome of releasing the provisioned resource group.

    NOT_CREATED and NOT_FOUND are informational; FAILED is logged as an error.
    None of them raise.
    """

    DELETED = "deleted"
    NOT_CREATED = "not_created"  # Resource group creation never succeeded
    NOT_FOUND = "not_found"      # Already gone when cleanup ran
    FAILED = "failed"
