"""
Configuration Defaults - Single source of truth for all default values.

Organization:
    - AzureDefaults: Region and SDK behavior defaults
    - NamingDefaults: Prefixes and lengths for generated resource names
    - NamespaceDefaults: Service Bus namespace SKUs used by the workflow
    - QueueDefaults: Queue sizes and settings used by the workflow
    - AppDefaults: Logging and environment

Credentials have NO defaults. They come from AZURE_AUTH_LOCATION or the
AZURE_TENANT_ID / AZURE_CLIENT_ID / AZURE_CLIENT_SECRET trio (picked up by
DefaultAzureCredential).

Usage:
    from config.defaults import QueueDefaults, AzureDefaults

    # In Pydantic Field definitions:
    first_queue_size_mb: int = Field(default=QueueDefaults.FIRST_QUEUE_SIZE_MB, ...)
"""


# =============================================================================
# AZURE DEFAULTS
# =============================================================================

class AzureDefaults:
    """
    Azure control-plane defaults.

    REGION uses the ARM location slug (what the management API expects),
    not the display name ("West US").
    """

    REGION = "westus"

    # SDK HTTP logging - equivalent of the Basic HTTP logging level
    HTTP_LOGGING_ENABLED = False

    # Polling for management operations that are not long-running operations
    OPERATION_POLL_INTERVAL_SECONDS = 5
    OPERATION_TIMEOUT_SECONDS = 600


# =============================================================================
# NAMING DEFAULTS
# =============================================================================

class NamingDefaults:
    """
    Prefixes and total lengths for generated resource names.

    Every run generates fresh names so repeated runs never collide.
    """

    RESOURCE_GROUP_PREFIX = "rgSB01_"
    RESOURCE_GROUP_LENGTH = 24

    NAMESPACE_PREFIX = "namespace"
    NAMESPACE_LENGTH = 20

    FIRST_QUEUE_PREFIX = "queue1_"
    FIRST_QUEUE_LENGTH = 24

    SECOND_QUEUE_PREFIX = "queue2_"
    SECOND_QUEUE_LENGTH = 24


# =============================================================================
# NAMESPACE DEFAULTS
# =============================================================================

class NamespaceDefaults:
    """Namespace SKU progression: created as Basic, upgraded to Standard."""

    INITIAL_SKU = "Basic"
    UPDATED_SKU = "Standard"


# =============================================================================
# QUEUE DEFAULTS
# =============================================================================

class QueueDefaults:
    """
    Queue settings for the two queues the workflow provisions.

    Sizes are megabytes. Service Bus accepts 1024, 2048, 3072, 4096, 5120
    for Basic/Standard namespaces.
    """

    FIRST_QUEUE_SIZE_MB = 1024

    SECOND_QUEUE_SIZE_MB = 2048
    SECOND_QUEUE_LOCK_DURATION_SECONDS = 20
    SECOND_QUEUE_DEAD_LETTER_ON_EXPIRATION = True

    # Size applied when the second queue is updated
    SECOND_QUEUE_UPDATED_SIZE_MB = 3072

    VALID_SIZES_MB = (1024, 2048, 3072, 4096, 5120)

    # Access keys are logged masked unless this is turned on
    REVEAL_KEYS = False


# =============================================================================
# APP DEFAULTS
# =============================================================================

class AppDefaults:
    """
    Application-wide defaults.

    Controls logging and environment labelling.
    """

    ENVIRONMENT = "dev"
    LOG_LEVEL = "INFO"
    LOG_FORMAT = "text"  # text | json


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "AzureDefaults",
    "NamingDefaults",
    "NamespaceDefaults",
    "QueueDefaults",
    "AppDefaults",
]
