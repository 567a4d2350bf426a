"""
ServiceBusQueueWorkflow failure paths - cleanup always runs, exactly once.

Failure is injected into the recording fake one collaborator call at a
time.
"""

import logging

import pytest

from core.models import CleanupStatus, DeleteStatus, StepStatus, WorkflowStep
from core.naming import generate_run_names
from exceptions import ContractViolationError, ProvisioningError
from services.queue_workflow import ServiceBusQueueWorkflow
from tests.factories.fake_management import RecordingManagementRepository

WORKFLOW_LOGGER = "service.ServiceBusQueueWorkflow"


def _workflow(fake, workflow_config):
    return ServiceBusQueueWorkflow(fake, workflow_config, "westus", names=generate_run_names(workflow_config))


class TestCleanupAfterFailure:

    @pytest.mark.parametrize("method, failed_step", [
        ("create_namespace", WorkflowStep.CREATE_NAMESPACE),
        ("create_queue", WorkflowStep.CREATE_FIRST_QUEUE),
        ("update_queue", WorkflowStep.UPDATE_SECOND_QUEUE),
        ("update_namespace_sku", WorkflowStep.UPDATE_NAMESPACE_SKU),
        ("list_namespaces", WorkflowStep.LIST_NAMESPACES),
        ("list_queues", WorkflowStep.LIST_QUEUES),
        ("list_authorization_rules", WorkflowStep.LIST_AUTHORIZATION_RULES),
        ("get_keys", WorkflowStep.GET_KEYS),
        ("regenerate_key", WorkflowStep.REGENERATE_SECONDARY_KEY),
        ("delete_queue", WorkflowStep.DELETE_FIRST_QUEUE),
    ])
    def test_resource_group_deleted_once_then_error_propagates(self, workflow_config, method, failed_step):
        fake = RecordingManagementRepository(fail_on=method)
        workflow = _workflow(fake, workflow_config)

        with pytest.raises(ProvisioningError):
            workflow.run()

        assert fake.call_names.count("delete_resource_group") == 1
        assert fake.call_names[-1] == "delete_resource_group"
        assert workflow.result.failed_step == failed_step
        assert workflow.result.cleanup.status == CleanupStatus.DELETED

    def test_failure_on_second_queue(self, workflow_config):
        names = generate_run_names(workflow_config)
        fake = RecordingManagementRepository(fail_on="create_queue", fail_target=names.second_queue)
        workflow = ServiceBusQueueWorkflow(fake, workflow_config, "westus", names=names)

        with pytest.raises(ProvisioningError):
            workflow.run()

        assert fake.call_names == [
            "create_resource_group", "create_namespace", "create_queue", "create_queue",
            "delete_resource_group",
        ]
        assert workflow.result.failed_step == WorkflowStep.CREATE_SECOND_QUEUE

    def test_steps_after_failure_not_recorded(self, workflow_config):
        fake = RecordingManagementRepository(fail_on="update_queue")
        workflow = _workflow(fake, workflow_config)

        with pytest.raises(ProvisioningError):
            workflow.run()

        recorded = [outcome.step for outcome in workflow.result.steps]
        assert recorded[-1] == WorkflowStep.UPDATE_SECOND_QUEUE
        assert workflow.result.steps[-1].status == StepStatus.FAILED
        assert "ProvisioningError" in workflow.result.steps[-1].detail
        assert WorkflowStep.UPDATE_NAMESPACE_SKU not in recorded
        assert not workflow.result.succeeded

    def test_original_exception_propagates_unchanged(self, workflow_config):
        error = RuntimeError("network unreachable")
        fake = RecordingManagementRepository(fail_on="list_queues", error=error)

        with pytest.raises(RuntimeError) as exc_info:
            _workflow(fake, workflow_config).run()

        assert exc_info.value is error


class TestNoCleanupWithoutCreation:

    def test_resource_group_creation_failure_skips_delete(self, workflow_config, caplog):
        caplog.set_level(logging.INFO, logger=WORKFLOW_LOGGER)
        fake = RecordingManagementRepository(fail_on="create_resource_group")
        workflow = _workflow(fake, workflow_config)

        with pytest.raises(ProvisioningError):
            workflow.run()

        assert fake.call_names == ["create_resource_group"]
        assert workflow.result.cleanup.status == CleanupStatus.NOT_CREATED
        assert not workflow.result.cleanup.attempted
        assert workflow.result.failed_step == WorkflowStep.CREATE_RESOURCE_GROUP
        assert any("No clean up is necessary" in r.getMessage() for r in caplog.records)


class TestNamespaceDeleteAbsorbed:

    def test_namespace_delete_failure_reaches_cleanup(self, workflow_config, caplog):
        caplog.set_level(logging.INFO, logger=WORKFLOW_LOGGER)
        fake = RecordingManagementRepository(fail_on="delete_namespace", error=RuntimeError("namespace busy"))
        workflow = _workflow(fake, workflow_config)

        result = workflow.run()

        assert fake.call_names[-2:] == ["delete_namespace", "delete_resource_group"]
        assert result.namespace_delete.status == DeleteStatus.FAILED
        assert result.namespace_delete.error_type == "RuntimeError"
        assert result.namespace_delete.error_message == "namespace busy"
        assert result.failed_step == WorkflowStep.DELETE_NAMESPACE
        assert result.cleanup.status == CleanupStatus.DELETED

        warnings = [r for r in caplog.records if r.name == WORKFLOW_LOGGER and r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "namespace busy" in warnings[0].getMessage()


class TestCleanupOutcomes:

    def test_cleanup_failure_logged_not_raised(self, workflow_config, caplog):
        caplog.set_level(logging.INFO, logger=WORKFLOW_LOGGER)
        fake = RecordingManagementRepository(cleanup_status=CleanupStatus.FAILED)

        result = _workflow(fake, workflow_config).run()

        assert result.cleanup.status == CleanupStatus.FAILED
        errors = [r for r in caplog.records if r.name == WORKFLOW_LOGGER and r.levelno == logging.ERROR]
        assert any("Failed to delete resource group" in r.getMessage() for r in errors)

    def test_cleanup_raising_is_absorbed(self, workflow_config):
        fake = RecordingManagementRepository(fail_on="delete_resource_group", error=RuntimeError("boom"))

        result = _workflow(fake, workflow_config).run()

        assert result.cleanup.status == CleanupStatus.FAILED
        assert result.cleanup.error_message == "boom"
        assert result.succeeded

    def test_cleanup_failure_does_not_mask_step_error(self, workflow_config):
        fake = RecordingManagementRepository(fail_on="create_namespace", cleanup_status=CleanupStatus.FAILED)
        workflow = _workflow(fake, workflow_config)

        with pytest.raises(ProvisioningError):
            workflow.run()

        assert workflow.result.cleanup.status == CleanupStatus.FAILED

    def test_resource_group_already_gone(self, workflow_config, caplog):
        caplog.set_level(logging.INFO, logger=WORKFLOW_LOGGER)
        fake = RecordingManagementRepository(cleanup_status=CleanupStatus.NOT_FOUND)

        result = _workflow(fake, workflow_config).run()

        assert result.cleanup.status == CleanupStatus.NOT_FOUND
        assert not [r for r in caplog.records if r.name == WORKFLOW_LOGGER and r.levelno >= logging.ERROR]


class TestNoAuthorizationRules:

    def test_missing_rules_is_contract_violation(self, workflow_config):
        fake = RecordingManagementRepository(authorization_rules=())
        workflow = _workflow(fake, workflow_config)

        with pytest.raises(ContractViolationError):
            workflow.run()

        assert "get_keys" not in fake.call_names
        assert workflow.result.failed_step == WorkflowStep.GET_KEYS
        assert fake.call_names[-1] == "delete_resource_group"


class TestSubscriptionFailure:

    def test_no_cleanup_needed_before_resource_group(self, workflow_config, caplog):
        caplog.set_level(logging.INFO, logger=WORKFLOW_LOGGER)
        fake = RecordingManagementRepository(fail_on="subscription", error=RuntimeError("token expired"))
        workflow = _workflow(fake, workflow_config)

        with pytest.raises(RuntimeError, match="token expired"):
            workflow.run()

        assert fake.calls == []
        assert workflow.result.failed_step == WorkflowStep.RESOLVE_SUBSCRIPTION
        assert workflow.result.cleanup.status == CleanupStatus.NOT_CREATED
        assert any("No clean up is necessary" in r.getMessage() for r in caplog.records)
        assert workflow.result.finished_at is not None
