"""
Service Bus queue management sample - command line entry point.

Authenticates against Azure, then creates a resource group, a Service Bus
namespace and two queues, updates them, lists what exists, reads and
regenerates authorization rule keys, and deletes everything again. The
resource group is deleted on every exit path.

Usage:
    python servicebus_queue_basic.py
    servicebus-queue-basic            # console script

Environment:
    AZURE_AUTH_LOCATION or AZURE_TENANT_ID/AZURE_CLIENT_ID/AZURE_CLIENT_SECRET
    (or an Azure CLI login), optional AZURE_SUBSCRIPTION_ID and AZURE_REGION.
    See config/env_validation.py for the full list.

Exit codes:
    0: Workflow finished (a tolerated namespace delete failure still exits 0)
    1: Environment validation failed, or a step raised
"""

import sys

from config import get_config, debug_config
from config.env_validation import log_validation_results
from exceptions import ConfigurationError
from util_logger import LoggerFactory, ComponentType, configure_azure_sdk_logging

logger = LoggerFactory.create_logger(ComponentType.ENTRYPOINT, "servicebus_queue_basic")


def main() -> int:
    """Run the workflow once and return the process exit code."""
    validator_logger = LoggerFactory.create_logger(ComponentType.VALIDATOR, "EnvValidation")
    if not log_validation_results(validator_logger):
        return 1

    try:
        config = get_config()
        configure_azure_sdk_logging(config.azure.http_logging_enabled)
        logger.debug(f"Configuration: {debug_config()}")

        # Deferred so the SDK clients are only built after validation
        from infrastructure import AzureServiceBusManagementRepository
        from services import ServiceBusQueueWorkflow

        repository = AzureServiceBusManagementRepository.from_config(config)
        workflow = ServiceBusQueueWorkflow(repository, config.workflow, config.region)
        workflow.run()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"❌ Fatal error: {type(e).__name__}: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
