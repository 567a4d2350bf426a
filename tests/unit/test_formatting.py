"""
Resource summary formatting tests.
"""

from datetime import timedelta

import pytest

from core.formatting import (
    format_access_keys,
    format_authorization_rule,
    format_namespace,
    format_queue,
    format_resource_group,
    format_subscription,
    mask_secret,
)
from core.models import (
    AccessKeysSummary,
    AuthorizationRuleSummary,
    NamespaceSummary,
    QueueSummary,
    ResourceGroupSummary,
    SubscriptionSummary,
)
from tests.factories.resource_factories import (
    make_access_keys,
    make_authorization_rule,
    make_namespace,
    make_queue,
    make_resource_group,
    make_subscription,
)


class TestMaskSecret:

    def test_keeps_last_four(self):
        assert mask_secret("abcdefghij") == "***ghij"

    def test_short_value_fully_masked(self):
        assert mask_secret("abc") == "***"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_value(self, value):
        assert mask_secret(value) == "-"


class TestSummaryBlocks:

    def test_subscription(self):
        sub = SubscriptionSummary(**make_subscription())
        text = format_subscription(sub)
        assert text.splitlines()[0] == f"Selected subscription: {sub.subscription_id}"
        assert f"\tName: {sub.display_name}" in text

    def test_resource_group(self):
        rg = ResourceGroupSummary(**make_resource_group())
        lines = format_resource_group(rg).splitlines()
        assert lines[0] == f"Resource group: {rg.id}"
        assert f"\tRegion: {rg.location}" in lines

    def test_namespace_includes_sku_block(self):
        ns = NamespaceSummary(**make_namespace(sku="Standard"))
        text = format_namespace(ns)
        lines = text.splitlines()

        assert lines[0] == f"Service Bus namespace: {ns.id}"
        assert f"\tResourceGroupName: {ns.resource_group}" in lines
        assert f"\tCreatedAt: {ns.created_at.isoformat()}" in lines
        assert "\tSku:" in lines
        assert "\t\tSkuName: Standard" in lines
        assert "\t\tCapacity: -" in lines

    def test_namespace_shows_provisioning_state(self):
        ns = NamespaceSummary(**make_namespace(provisioning_state="Updating"))
        assert "\tProvisioningState: Updating" in format_namespace(ns).splitlines()

    def test_queue_settings(self):
        queue = QueueSummary(**make_queue(
            max_size_in_megabytes=3072,
            lock_duration=timedelta(seconds=20),
            dead_lettering_on_message_expiration=True,
        ))
        lines = format_queue(queue).splitlines()

        assert lines[0] == f"Service Bus queue: {queue.id}"
        assert "\tMaxSizeInMB: 3072" in lines
        assert "\tLockDuration: 0:00:20" in lines
        assert "\tDeadLetteringOnMessageExpiration: True" in lines
        assert f"\tNamespaceName: {queue.namespace_name}" in lines

    def test_queue_missing_counters_shown_as_dash(self):
        queue = QueueSummary(**make_queue(message_count=None, active_message_count=None))
        lines = format_queue(queue).splitlines()
        assert "\tMessageCount: -" in lines
        assert "\tActiveMessageCount: -" in lines

    def test_authorization_rule_lists_rights(self):
        rule = AuthorizationRuleSummary(**make_authorization_rule(rights=["Listen", "Send"]))
        lines = format_authorization_rule(rule).splitlines()

        assert lines[0] == f"Service Bus namespace authorization rule: {rule.id}"
        assert "\tNumber of access rights: 2" in lines
        assert lines[-2:] == ["\t\tAccessRight: Listen", "\t\tAccessRight: Send"]


class TestAccessKeys:

    def test_masked_by_default(self):
        keys = AccessKeysSummary(**make_access_keys())
        text = format_access_keys(keys)

        assert keys.primary_key not in text
        assert keys.secondary_connection_string not in text
        assert f"\tPrimaryKey: ***{keys.primary_key[-4:]}" in text.splitlines()

    def test_revealed_on_request(self):
        keys = AccessKeysSummary(**make_access_keys())
        text = format_access_keys(keys, reveal=True)

        assert f"\tPrimaryKey: {keys.primary_key}" in text.splitlines()
        assert f"\tSecondaryConnectionString: {keys.secondary_connection_string}" in text.splitlines()

    def test_keys_hidden_from_repr(self):
        keys = AccessKeysSummary(**make_access_keys())
        assert keys.primary_key not in repr(keys)
