# ============================================================================
# ENVIRONMENT VARIABLE VALIDATION
# ============================================================================
# STATUS: Configuration - Startup validation with regex patterns
# PURPOSE: Validate env vars before authenticating to fail fast with clear error messages
# ============================================================================
"""
Environment Variable Validation Module.

Validates environment variables at startup using regex patterns to catch
configuration errors EARLY with clear, actionable error messages, before
any credential is built or any remote call is made.

Design Philosophy:
    - FAIL FAST: Catch config errors at startup, not halfway through provisioning
    - CLEAR ERRORS: Show exactly what's wrong and how to fix it
    - REGEX VALIDATION: Format validation, not just presence checks
    - ZERO DEPENDENCIES: Only standard library imports

Usage:
    from config.env_validation import validate_environment, ENV_VAR_RULES

    # Returns list of ValidationError (empty if all valid)
    errors = validate_environment()

    for error in errors:
        print(f"{error.var_name}: {error.message}")
        print(f"  Fix: {error.fix_suggestion}")

Example Validations:
    - AZURE_TENANT_ID / AZURE_CLIENT_ID / AZURE_SUBSCRIPTION_ID must be GUIDs
    - AZURE_AUTH_LOCATION must point at an existing file
    - AZURE_REGION must be an ARM location slug (westus, not "West US")
    - Service principal variables must be set together or not at all

Exports:
    ENV_VAR_RULES: Dict of all validation rules
    ValidationError: Dataclass for validation errors
    validate_environment: Main validation function
    validate_single_var: Validate one variable
    validate_credential_sources: Cross-variable credential check
"""

import os
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Any


# ============================================================================
# VALIDATION ERROR
# ============================================================================

@dataclass
class ValidationError:
    """Result of a failed environment variable validation."""
    var_name: str
    message: str
    current_value: Optional[str]
    expected_pattern: str
    fix_suggestion: str
    severity: str = "error"  # error, warning

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "var_name": self.var_name,
            "message": self.message,
            "current_value": self._mask_sensitive(self.current_value),
            "expected_pattern": self.expected_pattern,
            "fix_suggestion": self.fix_suggestion,
            "severity": self.severity,
        }

    def _mask_sensitive(self, value: Optional[str]) -> Optional[str]:
        """Mask potentially sensitive values."""
        if value is None:
            return None
        sensitive_keywords = ["password", "secret", "key", "token", "connection"]
        var_lower = self.var_name.lower()
        if any(kw in var_lower for kw in sensitive_keywords):
            return "***MASKED***"
        # Show first 20 chars for long values
        if len(value) > 30:
            return f"{value[:20]}...({len(value)} chars)"
        return value


# ============================================================================
# VALIDATION RULE DEFINITION
# ============================================================================

@dataclass
class EnvVarRule:
    """
    Validation rule for an environment variable.

    Attributes:
        pattern: Compiled regex pattern for validation
        pattern_description: Human-readable description of expected format
        required: Whether this variable must be set
        fix_suggestion: How to fix if validation fails
        example: Example valid value
        allow_empty: Allow empty string (default False)
        default_value: Default value used if not set (for warning messages)
        warn_on_default: Emit warning when using default value (default True for optional vars)
        must_be_file: Value must name an existing file
    """
    pattern: Pattern
    pattern_description: str
    required: bool
    fix_suggestion: str
    example: str
    allow_empty: bool = False
    default_value: Optional[str] = None
    warn_on_default: bool = True
    must_be_file: bool = False


# ============================================================================
# VALIDATION RULES - Single source of truth for env var formats
# ============================================================================

# Common regex patterns (reusable)
_GUID = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)
_NON_EMPTY = re.compile(r"^\S.*$")
_REGION_SLUG = re.compile(r"^[a-z][a-z0-9]{2,}$")
_LOG_LEVEL = re.compile(r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$", re.IGNORECASE)
_LOG_FORMAT = re.compile(r"^(text|json)$", re.IGNORECASE)
_BOOLEAN = re.compile(r"^(true|false|1|0|yes|no)$", re.IGNORECASE)
_QUEUE_SIZE = re.compile(r"^(1024|2048|3072|4096|5120)$")
_POSITIVE_INT = re.compile(r"^[1-9][0-9]*$")


ENV_VAR_RULES: Dict[str, EnvVarRule] = {
    # =========================================================================
    # CREDENTIALS (service principal - picked up by DefaultAzureCredential)
    # =========================================================================
    "AZURE_TENANT_ID": EnvVarRule(
        pattern=_GUID,
        pattern_description="Azure AD tenant GUID",
        required=False,
        fix_suggestion="Use the Directory (tenant) ID from the app registration",
        example="72f988bf-86f1-41af-91ab-2d7cd011db47",
        warn_on_default=False,
    ),

    "AZURE_CLIENT_ID": EnvVarRule(
        pattern=_GUID,
        pattern_description="Application (client) GUID of the service principal",
        required=False,
        fix_suggestion="Use the Application (client) ID from the app registration",
        example="00000000-0000-0000-0000-000000000000",
        warn_on_default=False,
    ),

    "AZURE_CLIENT_SECRET": EnvVarRule(
        pattern=_NON_EMPTY,
        pattern_description="Non-blank client secret",
        required=False,
        fix_suggestion="Create a client secret under Certificates & secrets",
        example="<secret value>",
        warn_on_default=False,
    ),

    "AZURE_SUBSCRIPTION_ID": EnvVarRule(
        pattern=_GUID,
        pattern_description="Subscription GUID",
        required=False,
        fix_suggestion="Run 'az account show --query id' to find it, or leave unset to use the first visible subscription",
        example="00000000-0000-0000-0000-000000000000",
        warn_on_default=False,
    ),

    # =========================================================================
    # CREDENTIAL FILE
    # =========================================================================
    "AZURE_AUTH_LOCATION": EnvVarRule(
        pattern=_NON_EMPTY,
        pattern_description="Path to an existing JSON auth file",
        required=False,
        fix_suggestion="Create one with 'az ad sp create-for-rbac --sdk-auth > my.azureauth'",
        example="/home/me/my.azureauth",
        warn_on_default=False,
        must_be_file=True,
    ),

    # =========================================================================
    # TARGETING
    # =========================================================================
    "AZURE_REGION": EnvVarRule(
        pattern=_REGION_SLUG,
        pattern_description="ARM location slug (lowercase, no spaces)",
        required=False,
        fix_suggestion="Run 'az account list-locations --query [].name' for valid values",
        example="westus",
        default_value="westus",
    ),

    "AZURE_HTTP_LOGGING": EnvVarRule(
        pattern=_BOOLEAN,
        pattern_description="Boolean (true/false)",
        required=False,
        fix_suggestion="Set to true to log SDK HTTP requests",
        example="false",
        warn_on_default=False,
    ),

    # =========================================================================
    # WORKFLOW OVERRIDES
    # =========================================================================
    "SB_FIRST_QUEUE_SIZE_MB": EnvVarRule(
        pattern=_QUEUE_SIZE,
        pattern_description="One of 1024, 2048, 3072, 4096, 5120",
        required=False,
        fix_suggestion="Pick a Service Bus supported queue size",
        example="1024",
        warn_on_default=False,
    ),

    "SB_SECOND_QUEUE_SIZE_MB": EnvVarRule(
        pattern=_QUEUE_SIZE,
        pattern_description="One of 1024, 2048, 3072, 4096, 5120",
        required=False,
        fix_suggestion="Pick a Service Bus supported queue size",
        example="2048",
        warn_on_default=False,
    ),

    "SB_SECOND_QUEUE_UPDATED_SIZE_MB": EnvVarRule(
        pattern=_QUEUE_SIZE,
        pattern_description="One of 1024, 2048, 3072, 4096, 5120",
        required=False,
        fix_suggestion="Pick a supported size larger than SB_SECOND_QUEUE_SIZE_MB",
        example="3072",
        warn_on_default=False,
    ),

    "SB_SECOND_QUEUE_LOCK_DURATION_SECONDS": EnvVarRule(
        pattern=_POSITIVE_INT,
        pattern_description="Positive integer seconds (5-300)",
        required=False,
        fix_suggestion="Use a lock duration between 5 and 300 seconds",
        example="20",
        warn_on_default=False,
    ),

    "SB_REVEAL_KEYS": EnvVarRule(
        pattern=_BOOLEAN,
        pattern_description="Boolean (true/false)",
        required=False,
        fix_suggestion="Set to true to log access keys and connection strings unmasked",
        example="false",
        warn_on_default=False,
    ),

    # =========================================================================
    # LOGGING
    # =========================================================================
    "LOG_LEVEL": EnvVarRule(
        pattern=_LOG_LEVEL,
        pattern_description="DEBUG, INFO, WARNING, ERROR or CRITICAL",
        required=False,
        fix_suggestion="Use a standard logging level name",
        example="INFO",
        default_value="INFO",
    ),

    "LOG_FORMAT": EnvVarRule(
        pattern=_LOG_FORMAT,
        pattern_description="'text' or 'json'",
        required=False,
        fix_suggestion="Use 'text' for console output or 'json' for log shipping",
        example="text",
        warn_on_default=False,
    ),
}

# Service principal variables that only work as a complete set
_SERVICE_PRINCIPAL_VARS = ("AZURE_TENANT_ID", "AZURE_CLIENT_ID", "AZURE_CLIENT_SECRET")


# ============================================================================
# VALIDATION FUNCTIONS
# ============================================================================

def validate_single_var(
    var_name: str,
    rule: EnvVarRule,
    include_warnings: bool = True
) -> Optional[ValidationError]:
    """
    Validate a single environment variable against its rule.

    Args:
        var_name: Environment variable name
        rule: Validation rule to apply
        include_warnings: Whether to return warnings for vars using defaults

    Returns:
        ValidationError if validation fails or warning if using default, None if passes
    """
    value = os.environ.get(var_name)

    # Check required
    if rule.required and (value is None or (not rule.allow_empty and value == "")):
        return ValidationError(
            var_name=var_name,
            message="Required environment variable not set",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
            severity="error",
        )

    # If not required and not set, emit warning if warn_on_default is True
    if value is None or value == "":
        if include_warnings and not rule.required and rule.warn_on_default and rule.default_value is not None:
            return ValidationError(
                var_name=var_name,
                message="Not set, using default value",
                current_value=None,
                expected_pattern=f"Default: {rule.default_value}",
                fix_suggestion=f"Set explicitly or accept default. {rule.fix_suggestion}",
                severity="warning",
            )
        return None

    # Validate pattern
    if not rule.pattern.match(value):
        return ValidationError(
            var_name=var_name,
            message="Invalid format",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
            severity="error",
        )

    if rule.must_be_file and not os.path.isfile(value):
        return ValidationError(
            var_name=var_name,
            message="File does not exist",
            current_value=value,
            expected_pattern=rule.pattern_description,
            fix_suggestion=f"{rule.fix_suggestion}. Example: {rule.example}",
            severity="error",
        )

    return None


def validate_credential_sources() -> Optional[ValidationError]:
    """
    Check that the service principal variables are all set or all unset.

    A partial trio makes DefaultAzureCredential silently skip the
    environment credential and fall through to CLI/managed identity, which
    is rarely what the operator intended.

    Returns:
        ValidationError if only some of the trio are set, None otherwise
    """
    present = [name for name in _SERVICE_PRINCIPAL_VARS if os.environ.get(name)]
    if not present or len(present) == len(_SERVICE_PRINCIPAL_VARS):
        return None

    missing = [name for name in _SERVICE_PRINCIPAL_VARS if name not in present]
    return ValidationError(
        var_name=",".join(_SERVICE_PRINCIPAL_VARS),
        message=f"Incomplete service principal: missing {', '.join(missing)}",
        current_value=None,
        expected_pattern="All of AZURE_TENANT_ID, AZURE_CLIENT_ID, AZURE_CLIENT_SECRET, or none",
        fix_suggestion="Set the missing variables, or unset all three to use Azure CLI / managed identity",
        severity="error",
    )


def validate_environment(
    rules: Optional[Dict[str, EnvVarRule]] = None,
    include_warnings: bool = True
) -> List[ValidationError]:
    """
    Validate all environment variables against their rules.

    Args:
        rules: Optional custom rules dict (defaults to ENV_VAR_RULES)
        include_warnings: Whether to include warnings for vars using defaults

    Returns:
        List of ValidationError objects (errors and optionally warnings)
    """
    if rules is None:
        rules = ENV_VAR_RULES

    results = []
    for var_name, rule in rules.items():
        result = validate_single_var(var_name, rule, include_warnings=include_warnings)
        if result:
            results.append(result)

    credential_result = validate_credential_sources()
    if credential_result:
        results.append(credential_result)

    return results


def log_validation_results(logger=None) -> bool:
    """
    Log validation results at appropriate levels.

    Logs errors at ERROR level, warnings at WARNING level.
    Returns True if no errors (warnings are OK).

    Args:
        logger: Optional logger instance (uses print if None)

    Returns:
        True if no errors, False if there are errors
    """
    all_results = validate_environment(include_warnings=True)

    errors = [r for r in all_results if r.severity == "error"]
    warnings = [r for r in all_results if r.severity == "warning"]

    def _log(level: str, msg: str):
        if logger:
            getattr(logger, level.lower())(msg)
        else:
            print(f"[{level.upper()}] {msg}")

    for error in errors:
        _log("error", f"ENV VAR ERROR: {error.var_name} - {error.message}")
        _log("error", f"  Expected: {error.expected_pattern}")
        _log("error", f"  Fix: {error.fix_suggestion}")

    if warnings:
        _log("warning", f"ENV VARS: {len(warnings)} optional variables using defaults:")
        for warning in warnings:
            default_val = warning.expected_pattern.replace("Default: ", "")
            _log("warning", f"  {warning.var_name} → {default_val}")

    if errors:
        _log("error", f"❌ STARTUP_FAILED: {len(errors)} environment variable errors")
        return False
    elif warnings:
        _log("info", f"✅ Environment validation passed ({len(warnings)} vars using defaults)")
        return True
    else:
        _log("info", "✅ Environment validation passed (all vars explicitly set)")
        return True


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ENV_VAR_RULES",
    "EnvVarRule",
    "ValidationError",
    "validate_environment",
    "validate_single_var",
    "validate_credential_sources",
    "log_validation_results",
]
