"""
Unified Logger System.

Component-specific console logging for the provisioning workflow. Output
goes to stdout, one line per record: human-readable text by default,
structured JSON when LOG_FORMAT=json.

Design Principles:
    - Strong typing with dataclasses (stdlib only)
    - Enum safety for categories
    - Component-specific loggers
    - Clean factory pattern

Exports:
    ComponentType: Enum for component types
    LogLevel: Enum for log levels
    ComponentConfig: Per-component logger settings
    ConsoleFormatter: Human-readable single-line formatter
    JSONFormatter: Structured formatter
    LoggerFactory: Factory for creating loggers
    configure_azure_sdk_logging: Toggle Azure SDK HTTP logging

Dependencies:
    Standard library only (logging, enum, dataclasses, json)

Environment:
    LOG_LEVEL: Default component level (INFO)
    DEBUG_LOGGING: true forces DEBUG for every component
    LOG_FORMAT: text | json
"""

from enum import Enum
from typing import Optional
from datetime import datetime, timezone
from dataclasses import dataclass
import logging
import sys
import os
import json


# ============================================================================
# COMPONENT TYPES - Aligned with project layers
# ============================================================================

class ComponentType(Enum):
    """
    Component types aligned with the project's layers.

    Each layer has specific logging needs and levels.
    """
    ENTRYPOINT = "entrypoint"  # Process entry (main)
    SERVICE = "service"        # Workflow layer
    REPOSITORY = "repository"  # Azure management API access
    ADAPTER = "adapter"        # Credential / SDK integration
    VALIDATOR = "validator"    # Environment validation


# ============================================================================
# LOG LEVELS - Standard Python levels with enum safety
# ============================================================================

class LogLevel(Enum):
    """
    Standard Python log levels as enum for type safety.
    """
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_python_level(self) -> int:
        """Convert to Python logging level constant."""
        return getattr(logging, self.value)

    @classmethod
    def from_string(cls, level: str) -> 'LogLevel':
        """Create from string, case-insensitive."""
        return cls[level.upper()]


# ============================================================================
# COMPONENT CONFIGURATION - Per-component settings
# ============================================================================

@dataclass
class ComponentConfig:
    """
    Configuration for component-specific logging.

    Each component type can have different settings.
    """
    component_type: ComponentType
    log_level: LogLevel = LogLevel.INFO


# ============================================================================
# FORMATTERS
# ============================================================================

class ConsoleFormatter(logging.Formatter):
    """
    Human-readable formatter: timestamp, level, component, message.

    Multi-line messages (resource summaries) are kept as-is so each
    summary reads as one block.
    """

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s %(levelname)-8s %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.
    Outputs one JSON object per record for log shipping.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Python LogRecord to format

        Returns:
            JSON string with structured log data
        """
        log_obj = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if hasattr(record, 'custom_dimensions'):
            log_obj['customDimensions'] = record.custom_dimensions

        if record.exc_info:
            log_obj['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': self.formatException(record.exc_info)
            }

        return json.dumps(log_obj, default=str)


# ============================================================================
# LOGGER FACTORY - Creates component-specific loggers
# ============================================================================

def _resolve_default_level() -> LogLevel:
    """DEBUG_LOGGING=true wins; otherwise LOG_LEVEL; otherwise INFO."""
    if os.getenv('DEBUG_LOGGING', '').lower() == 'true':
        return LogLevel.DEBUG
    try:
        return LogLevel.from_string(os.getenv('LOG_LEVEL', 'INFO'))
    except KeyError:
        return LogLevel.INFO


class LoggerFactory:
    """
    Factory for creating component-specific loggers.

    Example:
        logger = LoggerFactory.create_logger(
            ComponentType.SERVICE,
            "ServiceBusQueueWorkflow"
        )
        logger.info("Creating namespace")
    """

    _default_level = _resolve_default_level()
    _log_format = os.getenv('LOG_FORMAT', 'text').lower()

    DEFAULT_CONFIGS = {
        ComponentType.ENTRYPOINT: ComponentConfig(
            component_type=ComponentType.ENTRYPOINT,
            log_level=_default_level
        ),
        ComponentType.SERVICE: ComponentConfig(
            component_type=ComponentType.SERVICE,
            log_level=_default_level
        ),
        ComponentType.REPOSITORY: ComponentConfig(
            component_type=ComponentType.REPOSITORY,
            log_level=_default_level
        ),
        ComponentType.ADAPTER: ComponentConfig(
            component_type=ComponentType.ADAPTER,
            log_level=_default_level
        ),
        ComponentType.VALIDATOR: ComponentConfig(
            component_type=ComponentType.VALIDATOR,
            log_level=_default_level
        ),
    }

    @classmethod
    def _make_formatter(cls) -> logging.Formatter:
        if cls._log_format == 'json':
            return JSONFormatter()
        return ConsoleFormatter()

    @classmethod
    def create_logger(
        cls,
        component_type: ComponentType,
        name: str,
        config: Optional[ComponentConfig] = None
    ) -> logging.Logger:
        """
        Create a logger for a specific component.

        Args:
            component_type: Type of component
            name: Component name (e.g., "ServiceBusQueueWorkflow")
            config: Optional custom configuration

        Returns:
            Configured Python logger
        """
        if config is None:
            config = cls.DEFAULT_CONFIGS.get(
                component_type,
                ComponentConfig(component_type=component_type)
            )

        # Hierarchical logger name
        logger_name = f"{component_type.value}.{name}"
        logger = logging.getLogger(logger_name)

        if isinstance(config.log_level, str):
            log_level = LogLevel.from_string(config.log_level).to_python_level()
        else:
            log_level = config.log_level.to_python_level()
        logger.setLevel(log_level)

        # Only one console handler per logger, even when create_logger is
        # called repeatedly for the same component
        has_console_handler = any(
            getattr(h, '_component_handler', False) for h in logger.handlers
        )
        if not has_console_handler:
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(log_level)
            handler.setFormatter(cls._make_formatter())
            handler._component_handler = True
            logger.addHandler(handler)

        # Keep propagation so pytest caplog and host handlers see records
        logger.propagate = True

        # Inject component identity as custom dimensions (wrap once)
        if not hasattr(logger, '_context_wrapped'):
            original_log = logger._log

            def log_with_context(level, msg, args, exc_info=None, extra=None, stack_info=False, stacklevel=1):
                """Wrapper to merge component identity into custom dimensions."""
                if extra is None:
                    extra = {}

                custom_dims = {
                    'component_type': component_type.value,
                    'component_name': name
                }
                if 'custom_dimensions' in extra:
                    custom_dims.update(extra['custom_dimensions'])

                extra['custom_dimensions'] = custom_dims

                # +1 to account for this wrapper function
                original_log(level, msg, args, exc_info=exc_info, extra=extra,
                             stack_info=stack_info, stacklevel=stacklevel + 1)

            logger._log = log_with_context
            logger._context_wrapped = True

        return logger


# ============================================================================
# AZURE SDK LOGGING
# ============================================================================

def configure_azure_sdk_logging(enabled: bool) -> None:
    """
    Turn Azure SDK HTTP logging on or off.

    The SDK logs request/response lines under the 'azure' logger at INFO
    (headers only, bodies need logging_enable=True on the client too).
    When disabled the SDK is held at WARNING so poller chatter stays out
    of the workflow output.
    """
    azure_logger = logging.getLogger('azure')
    if enabled:
        azure_logger.setLevel(logging.INFO)
        if not any(getattr(h, '_component_handler', False) for h in azure_logger.handlers):
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(LoggerFactory._make_formatter())
            handler._component_handler = True
            azure_logger.addHandler(handler)
    else:
        azure_logger.setLevel(logging.WARNING)
