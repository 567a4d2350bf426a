"""
Service Bus Queue Workflow - Provisioning Business Logic.

Runs the fixed management sequence against an IServiceBusManagementRepository:

    resolve subscription -> create resource group -> create namespace (Basic)
    -> create queue A -> create queue B -> update queue B -> update namespace
    SKU (Standard) -> list namespaces -> list queues -> list authorization
    rules -> get keys -> regenerate secondary key -> delete queue A
    -> delete namespace -> delete resource group

The resource group is held by provisioned_resource_group(), a context
manager whose exit always releases whatever was created. Only two
failures are tolerated and both come back as outcome values:
    - namespace delete (DeleteOutcome, logged at WARNING)
    - resource group delete (CleanupOutcome, logged at ERROR)
Every other failure propagates after the resource group is released.

Exports:
    ServiceBusQueueWorkflow: Runs one provisioning sequence
"""

import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from core.formatting import (
    format_access_keys,
    format_authorization_rule,
    format_namespace,
    format_queue,
    format_resource_group,
    format_subscription,
)
from core.models import (
    AccessKeyType,
    CleanupOutcome,
    CleanupStatus,
    DeleteOutcome,
    DeleteStatus,
    ResourceGroupSummary,
    StepOutcome,
    StepStatus,
    WorkflowResult,
    WorkflowStep,
)
from core.naming import RunNames, generate_run_names
from exceptions import ContractViolationError
from infrastructure.interface_repository import IServiceBusManagementRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "ServiceBusQueueWorkflow")


class ServiceBusQueueWorkflow:
    """
    One run of the Service Bus queue provisioning sequence.

    Usage:
        workflow = ServiceBusQueueWorkflow(repository, config.workflow, config.region)
        result = workflow.run()

    `result` is also kept on the instance and filled in as steps finish,
    so it can be inspected after run() raised.
    """

    def __init__(
        self,
        management: IServiceBusManagementRepository,
        workflow_config,
        region: str,
        names: Optional[RunNames] = None,
        run_id: Optional[str] = None
    ):
        """
        Args:
            management: Control-plane repository (Azure or fake)
            workflow_config: WorkflowConfig with SKUs, sizes and name prefixes
            region: Region for the resource group and namespace
            names: Resource names to use (generated when omitted)
            run_id: Correlation id for logs (generated when omitted)
        """
        self.management = management
        self.workflow_config = workflow_config
        self.region = region
        self.names = names or generate_run_names(workflow_config)
        self.run_id = run_id or uuid.uuid4().hex[:8]
        self.result = WorkflowResult(
            run_id=self.run_id,
            resource_group_name=self.names.resource_group,
            namespace_name=self.names.namespace,
            first_queue_name=self.names.first_queue,
            second_queue_name=self.names.second_queue,
        )

    @property
    def _dimensions(self) -> dict:
        return {'custom_dimensions': {
            'run_id': self.run_id,
            'resource_group': self.names.resource_group,
            'namespace': self.names.namespace,
        }}

    # ========================================================================
    # Step bookkeeping
    # ========================================================================

    @contextmanager
    def _step(self, step: WorkflowStep) -> Iterator[dict]:
        """
        Record a StepOutcome for the enclosed block.

        Yields a dict whose 'detail' entry is stored on success. A raised
        exception is recorded as FAILED and re-raised.
        """
        outcome = {'detail': None}
        try:
            yield outcome
        except Exception as e:
            self.result.steps.append(StepOutcome(
                step=step,
                status=StepStatus.FAILED,
                detail=f"{type(e).__name__}: {e}"
            ))
            logger.error(f"❌ Step {step.value} failed: {type(e).__name__}: {e}", extra=self._dimensions)
            raise
        self.result.steps.append(StepOutcome(
            step=step,
            status=StepStatus.COMPLETED,
            detail=outcome['detail']
        ))

    # ========================================================================
    # Resource group acquisition / release
    # ========================================================================

    @contextmanager
    def provisioned_resource_group(self) -> Iterator[ResourceGroupSummary]:
        """
        Create the run's resource group and delete it on exit.

        Release runs on every exit path. When creation itself failed there
        is nothing to release and no delete call is made.
        """
        resource_group = None
        try:
            with self._step(WorkflowStep.CREATE_RESOURCE_GROUP) as outcome:
                logger.info(f"Creating resource group {self.names.resource_group} in {self.region}...")
                resource_group = self.management.create_resource_group(self.names.resource_group, self.region)
                outcome['detail'] = resource_group.id
            logger.info(f"Provisioned resource group {resource_group.id}", extra=self._dimensions)
            logger.info(format_resource_group(resource_group))
            yield resource_group
        finally:
            self.result.cleanup = self.release_resource_group(resource_group)

    def release_resource_group(self, resource_group: Optional[ResourceGroupSummary]) -> CleanupOutcome:
        """
        Delete the resource group and everything left in it.

        Never raises; the outcome says what happened.
        """
        if resource_group is None:
            logger.info("Did not create any resources in Azure. No clean up is necessary")
            return CleanupOutcome(status=CleanupStatus.NOT_CREATED)

        logger.info(f"Deleting resource group {resource_group.id}...")
        try:
            outcome = self.management.delete_resource_group(resource_group.id)
        except Exception as e:
            outcome = CleanupOutcome(
                status=CleanupStatus.FAILED,
                resource_group_id=resource_group.id,
                resource_group_name=resource_group.name,
                error_type=type(e).__name__,
                error_message=str(e),
            )

        if outcome.status == CleanupStatus.DELETED:
            logger.info(f"Deleted resource group {resource_group.id}", extra=self._dimensions)
        elif outcome.status == CleanupStatus.NOT_FOUND:
            logger.info(f"Resource group {resource_group.id} no longer exists. Nothing to delete")
        else:
            logger.error(
                f"❌ Failed to delete resource group {resource_group.id}: "
                f"{outcome.error_type}: {outcome.error_message}. Delete it manually.",
                extra=self._dimensions
            )
        return outcome

    # ========================================================================
    # Run
    # ========================================================================

    def run(self) -> WorkflowResult:
        """
        Execute every step in order, then release the resource group.

        Returns:
            WorkflowResult

        Raises:
            Whatever a non-tolerated step raised, after cleanup has run
        """
        logger.info(f"🚀 Starting Service Bus queue workflow run {self.run_id}", extra=self._dimensions)
        try:
            try:
                with self._step(WorkflowStep.RESOLVE_SUBSCRIPTION) as outcome:
                    subscription = self.management.subscription
                    self.result.subscription_id = subscription.subscription_id
                    outcome['detail'] = subscription.subscription_id
            except Exception:
                self.result.cleanup = self.release_resource_group(None)
                raise
            logger.info(format_subscription(subscription))

            with self.provisioned_resource_group() as resource_group:
                self._provision(resource_group.name)
        finally:
            self.result.finished_at = datetime.now(timezone.utc)

        logger.info(
            f"🏁 Workflow run {self.run_id} finished: {len(self.result.completed_steps)}/"
            f"{len(WorkflowStep)} steps completed, cleanup {self.result.cleanup.status.value}",
            extra=self._dimensions
        )
        return self.result

    def _provision(self, resource_group: str) -> None:
        """Steps 3-14, all inside the provisioned resource group."""
        cfg = self.workflow_config
        names = self.names

        with self._step(WorkflowStep.CREATE_NAMESPACE) as outcome:
            sku = cfg.initial_sku
            logger.info(f"Creating namespace {names.namespace} in {self.region} ({sku.value} SKU)...")
            namespace = self.management.create_namespace(resource_group, names.namespace, self.region, sku)
            outcome['detail'] = namespace.id
        logger.info(f"Created namespace {namespace.id}")
        logger.info(format_namespace(namespace))

        with self._step(WorkflowStep.CREATE_FIRST_QUEUE) as outcome:
            logger.info(f"Creating queue {names.first_queue} (max size {cfg.first_queue_size_mb} MB)...")
            first_queue = self.management.create_queue(
                resource_group, names.namespace, names.first_queue,
                max_size_in_megabytes=cfg.first_queue_size_mb
            )
            outcome['detail'] = first_queue.id
        logger.info(f"Created queue {first_queue.id}")
        logger.info(format_queue(first_queue))

        with self._step(WorkflowStep.CREATE_SECOND_QUEUE) as outcome:
            logger.info(
                f"Creating queue {names.second_queue} (max size {cfg.second_queue_size_mb} MB, "
                f"lock duration {cfg.second_queue_lock_duration_seconds}s, "
                f"dead-lettering on expiration {cfg.second_queue_dead_letter_on_expiration})..."
            )
            second_queue = self.management.create_queue(
                resource_group, names.namespace, names.second_queue,
                max_size_in_megabytes=cfg.second_queue_size_mb,
                lock_duration=cfg.second_queue_lock_duration,
                dead_lettering_on_message_expiration=cfg.second_queue_dead_letter_on_expiration
            )
            outcome['detail'] = second_queue.id
        logger.info(f"Created queue {second_queue.id}")
        logger.info(format_queue(second_queue))

        with self._step(WorkflowStep.UPDATE_SECOND_QUEUE) as outcome:
            logger.info(f"Updating queue {names.second_queue} max size to {cfg.second_queue_updated_size_mb} MB...")
            second_queue = self.management.update_queue(
                resource_group, names.namespace, names.second_queue,
                max_size_in_megabytes=cfg.second_queue_updated_size_mb
            )
            outcome['detail'] = second_queue.id
        logger.info(f"Updated queue {second_queue.id}")
        logger.info(format_queue(second_queue))

        with self._step(WorkflowStep.UPDATE_NAMESPACE_SKU) as outcome:
            sku = cfg.updated_sku
            logger.info(f"Updating namespace {names.namespace} SKU to {sku.value}...")
            namespace = self.management.update_namespace_sku(resource_group, names.namespace, sku)
            outcome['detail'] = namespace.id
        logger.info(f"Updated namespace {namespace.id}")
        logger.info(format_namespace(namespace))

        with self._step(WorkflowStep.LIST_NAMESPACES) as outcome:
            namespaces = self.management.list_namespaces(resource_group)
            outcome['detail'] = str(len(namespaces))
        logger.info(f"Namespace count in resource group {resource_group}: {len(namespaces)}")
        for item in namespaces:
            logger.info(format_namespace(item))

        with self._step(WorkflowStep.LIST_QUEUES) as outcome:
            queues = self.management.list_queues(resource_group, names.namespace)
            outcome['detail'] = str(len(queues))
        logger.info(f"Queue count in namespace {names.namespace}: {len(queues)}")
        for item in queues:
            logger.info(format_queue(item))

        with self._step(WorkflowStep.LIST_AUTHORIZATION_RULES) as outcome:
            rules = self.management.list_authorization_rules(resource_group, names.namespace)
            outcome['detail'] = str(len(rules))
        logger.info(f"Authorization rule count for namespace {names.namespace}: {len(rules)}")
        for item in rules:
            logger.info(format_authorization_rule(item))

        with self._step(WorkflowStep.GET_KEYS) as outcome:
            if not rules:
                raise ContractViolationError(
                    f"Namespace {names.namespace} has no authorization rules to read keys from"
                )
            rule = rules[0]
            logger.info(f"Fetching keys of authorization rule {rule.name}...")
            keys = self.management.get_keys(resource_group, names.namespace, rule.name)
            outcome['detail'] = rule.name
        logger.info(format_access_keys(keys, reveal=cfg.reveal_keys))

        with self._step(WorkflowStep.REGENERATE_SECONDARY_KEY) as outcome:
            logger.info(f"Regenerating secondary key of authorization rule {rule.name}...")
            keys = self.management.regenerate_key(
                resource_group, names.namespace, rule.name, AccessKeyType.SECONDARY
            )
            outcome['detail'] = rule.name
        logger.info(f"Regenerated secondary key of authorization rule {rule.name}")
        logger.info(format_access_keys(keys, reveal=cfg.reveal_keys))

        with self._step(WorkflowStep.DELETE_FIRST_QUEUE) as outcome:
            logger.info(f"Deleting queue {names.first_queue}...")
            self.management.delete_queue(resource_group, names.namespace, names.first_queue)
            outcome['detail'] = names.first_queue
        logger.info(f"Deleted queue {names.first_queue}")

        self._delete_namespace(resource_group)

    def _delete_namespace(self, resource_group: str) -> None:
        """Delete the namespace; a failure is recorded and the run goes on to cleanup."""
        name = self.names.namespace
        logger.info(f"Deleting namespace {name} (queue {self.names.second_queue} goes with it)...")
        try:
            outcome = self.management.delete_namespace(resource_group, name)
        except Exception as e:
            outcome = DeleteOutcome(
                target=name,
                status=DeleteStatus.FAILED,
                error_type=type(e).__name__,
                error_message=str(e),
            )
        self.result.namespace_delete = outcome

        if outcome.deleted:
            self.result.steps.append(StepOutcome(
                step=WorkflowStep.DELETE_NAMESPACE,
                status=StepStatus.COMPLETED,
                detail=name
            ))
            logger.info(f"Deleted namespace {name}")
        else:
            self.result.steps.append(StepOutcome(
                step=WorkflowStep.DELETE_NAMESPACE,
                status=StepStatus.FAILED,
                detail=f"{outcome.error_type}: {outcome.error_message}"
            ))
            logger.warning(
                f"⚠️ Failed to delete namespace {name}: {outcome.error_type}: {outcome.error_message}. "
                f"Continuing with resource group cleanup",
                extra=self._dimensions
            )
