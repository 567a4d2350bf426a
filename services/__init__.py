"""
Services Package - Workflow Business Logic.

Exports:
    ServiceBusQueueWorkflow: Runs the Service Bus queue provisioning sequence
"""

from .queue_workflow import ServiceBusQueueWorkflow

__all__ = [
    "ServiceBusQueueWorkflow",
]
