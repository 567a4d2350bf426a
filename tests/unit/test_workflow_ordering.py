"""
ServiceBusQueueWorkflow happy path - call ordering, log vocabulary, result.

Runs the workflow against the recording fake and checks the collaborator
calls, the log lines a user reads, and the WorkflowResult.
"""

import logging
import re

import pytest

from core.models import AccessKeyType, CleanupStatus, SkuName, WorkflowStep
from core.naming import generate_run_names
from services.queue_workflow import ServiceBusQueueWorkflow
from tests.factories.fake_management import RecordingManagementRepository

WORKFLOW_LOGGER = "service.ServiceBusQueueWorkflow"
COUNT_LINE = re.compile(r"^[A-Z][a-z ]+ count ")


@pytest.fixture
def fake():
    return RecordingManagementRepository()


@pytest.fixture
def run_names(workflow_config):
    return generate_run_names(workflow_config)


@pytest.fixture
def workflow(fake, workflow_config, run_names):
    return ServiceBusQueueWorkflow(fake, workflow_config, "westus", names=run_names)


def _messages(caplog):
    return [r.getMessage() for r in caplog.records if r.name == WORKFLOW_LOGGER]


class TestCallOrdering:

    def test_collaborator_calls_in_exact_order(self, workflow, fake, run_names):
        workflow.run()

        rg_id = workflow.result.cleanup.resource_group_id
        assert fake.calls == [
            ("create_resource_group", run_names.resource_group),
            ("create_namespace", run_names.namespace),
            ("create_queue", run_names.first_queue),
            ("create_queue", run_names.second_queue),
            ("update_queue", run_names.second_queue),
            ("update_namespace_sku", run_names.namespace),
            ("list_namespaces", run_names.resource_group),
            ("list_queues", run_names.namespace),
            ("list_authorization_rules", run_names.namespace),
            ("get_keys", "RootManageSharedAccessKey"),
            ("regenerate_key", "RootManageSharedAccessKey"),
            ("delete_queue", run_names.first_queue),
            ("delete_namespace", run_names.namespace),
            ("delete_resource_group", rg_id),
        ]

    def test_delete_resource_group_uses_created_id(self, workflow, fake, run_names):
        workflow.run()
        rg_id = fake.calls[-1][1]
        assert rg_id.endswith(f"/resourceGroups/{run_names.resource_group}")
        assert rg_id.startswith(f"/subscriptions/{fake.subscription.subscription_id}/")


class TestRequestedSettings:

    def test_second_queue_update_requests_new_size(self, workflow, fake, run_names):
        workflow.run()
        assert fake.queue_update_requests == [(run_names.second_queue, 3072)]

    def test_second_queue_created_with_lock_and_dead_lettering(self, fake, workflow_config, run_names):
        created = {}
        original = fake.create_queue

        def spy(resource_group, namespace, name, max_size_in_megabytes, **kwargs):
            queue = original(resource_group, namespace, name, max_size_in_megabytes, **kwargs)
            created[name] = queue
            return queue

        fake.create_queue = spy
        ServiceBusQueueWorkflow(fake, workflow_config, "westus", names=run_names).run()

        first = created[run_names.first_queue]
        second = created[run_names.second_queue]
        assert first.max_size_in_megabytes == 1024
        assert second.max_size_in_megabytes == 2048
        assert second.lock_duration.total_seconds() == 20
        assert second.dead_lettering_on_message_expiration is True

    def test_namespace_patched_to_standard(self, workflow, fake):
        workflow.run()
        assert fake.namespace_sku_requests == [SkuName.STANDARD]

    def test_regenerates_secondary_key_of_first_rule(self, fake, workflow_config, run_names):
        fake.authorization_rules = ["RootManageSharedAccessKey", "SendOnly"]
        ServiceBusQueueWorkflow(fake, workflow_config, "westus", names=run_names).run()
        assert fake.regenerated == [("RootManageSharedAccessKey", AccessKeyType.SECONDARY)]


class TestScenarioLogVocabulary:

    def test_created_updated_and_count_lines(self, workflow, fake, caplog):
        caplog.set_level(logging.INFO, logger=WORKFLOW_LOGGER)
        workflow.run()
        messages = _messages(caplog)

        assert len([m for m in messages if m.startswith("Created ")]) == 3
        assert len([m for m in messages if m.startswith("Updated ")]) == 2
        assert len([m for m in messages if COUNT_LINE.match(m)]) == 3
        assert fake.call_names.count("delete_resource_group") == 1
        assert fake.call_names[-1] == "delete_resource_group"

    def test_count_lines_report_listed_totals(self, workflow, caplog, run_names):
        caplog.set_level(logging.INFO, logger=WORKFLOW_LOGGER)
        workflow.run()
        messages = _messages(caplog)

        assert f"Namespace count in resource group {run_names.resource_group}: 1" in messages
        assert f"Queue count in namespace {run_names.namespace}: 2" in messages
        assert f"Authorization rule count for namespace {run_names.namespace}: 1" in messages

    def test_deleted_lines(self, workflow, caplog, run_names):
        caplog.set_level(logging.INFO, logger=WORKFLOW_LOGGER)
        workflow.run()
        messages = _messages(caplog)

        assert f"Deleted queue {run_names.first_queue}" in messages
        assert f"Deleted namespace {run_names.namespace}" in messages
        assert any(m.startswith("Deleted resource group /subscriptions/") for m in messages)
        assert any(m.startswith("Provisioned resource group /subscriptions/") for m in messages)

    def test_access_keys_masked_by_default(self, workflow, caplog):
        caplog.set_level(logging.INFO, logger=WORKFLOW_LOGGER)
        workflow.run()
        key_blocks = [m for m in _messages(caplog) if m.startswith("Authorization keys:")]

        assert len(key_blocks) == 2
        for block in key_blocks:
            assert "SharedAccessKey=" not in block
            assert "\tPrimaryKey: ***" in block


class TestWorkflowResult:

    def test_every_step_completed(self, workflow):
        result = workflow.run()

        assert result.succeeded
        assert result.completed_steps == list(WorkflowStep)
        assert result.failed_step is None
        assert result.cleanup.status == CleanupStatus.DELETED
        assert result.namespace_delete.deleted
        assert result.finished_at is not None

    def test_result_carries_names_and_subscription(self, workflow, fake, run_names):
        result = workflow.run()

        assert result.subscription_id == fake.subscription.subscription_id
        assert result.resource_group_name == run_names.resource_group
        assert result.namespace_name == run_names.namespace
        assert result.first_queue_name == run_names.first_queue
        assert result.second_queue_name == run_names.second_queue

    def test_names_generated_when_not_given(self, fake, workflow_config):
        workflow = ServiceBusQueueWorkflow(fake, workflow_config, "westus")
        workflow.run()

        assert workflow.names.resource_group.startswith("rgSB01_")
        assert len(workflow.names.namespace) == 20
        assert fake.calls[0] == ("create_resource_group", workflow.names.resource_group)
